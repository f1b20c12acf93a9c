"""
远程存储客户端基类
"""

from abc import ABC, abstractmethod

from ..models import DownloadResult, FileInfoResult, OperationResult, UploadResult


class BaseStorageClient(ABC):
    """远程存储客户端基类"""

    @abstractmethod
    def upload_data(self, path: str, data: bytes, **kwargs) -> UploadResult:
        """
        上传文件内容

        Args:
            path: 远程路径
            data: 文件内容

        Returns:
            上传结果
        """

    @abstractmethod
    def download_data(self, path: str) -> DownloadResult:
        """
        下载文件内容

        Args:
            path: 远程路径

        Returns:
            下载结果，成功时包含文件内容
        """

    @abstractmethod
    def file_info(self, path: str) -> FileInfoResult:
        """获取文件信息"""

    @abstractmethod
    def delete_file(self, path: str) -> OperationResult:
        """删除文件或空目录"""

    @abstractmethod
    def close(self):
        """释放客户端资源"""
