"""
又拍云客户端核心模块
提供上传、下载、文件信息、删除、创建目录、列目录、空间用量和缓存刷新操作
"""

from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Union

import httpx

from .config import (
    DEFAULT_LIST_LIMIT,
    ERROR_LIST_END,
    ERROR_LIST_ITER_MISSING,
    UpYunConfig,
)
from .exceptions import UpYunError
from .gmkerl import gmkerl_headers
from .listing import parse_listing
from .models import (
    DirIterator,
    DownloadResult,
    FileInfo,
    FileInfoResult,
    Gmkerl,
    ListResult,
    OperationResult,
    UploadResult,
    UsageResult,
)
from .storage import BaseStorageClient, SignedRequestClient
from .utils import format_file_size, get_logger, md5_hex, safe_int


class UpYun(BaseStorageClient):
    """
    又拍云存储客户端

    每个操作对应一次HTTP请求，不做重试和批量处理。除游标外不持有可变状态，
    可以在多个线程中共享同一个实例。
    """

    def __init__(
        self,
        config: Optional[UpYunConfig] = None,
        http_client: Optional[httpx.Client] = None
    ):
        """
        初始化又拍云客户端

        Args:
            config: 客户端配置，为None时从环境变量读取
            http_client: 可选的httpx客户端
        """
        self.config = config if config is not None else UpYunConfig.from_env()
        self.logger = get_logger("upyun.core", "DEBUG" if self.config.debug else None)
        self.requester = SignedRequestClient(self.config, http_client=http_client)

    # ============================
    # 上传
    # ============================

    def upload_file(
        self,
        path: str,
        local_file: Union[str, Path],
        gmkerl: Optional[Gmkerl] = None,
        md5_verify: bool = False,
        content_type: Optional[str] = None,
        secret: Optional[str] = None
    ) -> UploadResult:
        """
        上传本地文件

        Args:
            path: 远程路径
            local_file: 本地文件路径
            gmkerl: 图片处理参数
            md5_verify: 发送Content-MD5，上传完成后由服务端校验
            content_type: 覆盖自动识别的Content-Type
            secret: 文件访问密钥

        Returns:
            UploadResult: 本地文件不存在时状态码和错误码均为-1，不会发出请求
        """
        local_path = Path(local_file)
        if not local_path.is_file():
            self.logger.warning(f"本地文件不存在: {local_path}")
            return UploadResult.local_failure(f"本地文件不存在: {local_path}")

        try:
            data = local_path.read_bytes()
        except OSError as e:
            self.logger.error(f"读取本地文件失败: {local_path}, 错误: {e}")
            return UploadResult.local_failure(f"读取本地文件失败: {e}")

        return self.upload_data(
            path,
            data,
            gmkerl=gmkerl,
            md5_verify=md5_verify,
            content_type=content_type,
            secret=secret
        )

    def upload_data(
        self,
        path: str,
        data: bytes,
        gmkerl: Optional[Gmkerl] = None,
        md5_verify: bool = False,
        content_type: Optional[str] = None,
        secret: Optional[str] = None
    ) -> UploadResult:
        """
        上传文件内容

        Args:
            path: 远程路径
            data: 文件内容
            gmkerl: 图片处理参数
            md5_verify: 发送Content-MD5，上传完成后由服务端校验
            content_type: 覆盖自动识别的Content-Type
            secret: 文件访问密钥

        Returns:
            UploadResult: 图片文件成功上传时包含宽、高、帧数和文件类型
        """
        headers = gmkerl_headers(gmkerl)
        if md5_verify:
            headers["Content-MD5"] = md5_hex(data)
        if content_type is not None:
            headers["Content-Type"] = content_type
        if secret is not None:
            headers["Content-Secret"] = secret

        self.logger.info(f"上传文件: {path}, 大小: {format_file_size(len(data))}")
        raw = self.requester.perform_request(path, "PUT", headers, data)

        result = UploadResult(**raw.result.model_dump())
        if result.ok:
            result.width = safe_int(raw.headers.get("width"))
            result.height = safe_int(raw.headers.get("height"))
            result.frames = safe_int(raw.headers.get("frames"))
            result.file_type = raw.headers.get("file-type")
        return result

    # ============================
    # 下载
    # ============================

    def download_data(self, path: str) -> DownloadResult:
        """
        下载文件内容

        Args:
            path: 远程路径

        Returns:
            DownloadResult: 成功时content为文件内容
        """
        raw = self.requester.perform_request(path, "GET")
        result = DownloadResult(**raw.result.model_dump())
        if result.ok:
            result.content = raw.body
            self.logger.info(f"下载文件完成: {path}, 大小: {format_file_size(len(raw.body))}")
        return result

    def download_file(self, path: str, local_file: Union[str, Path]) -> OperationResult:
        """
        下载文件并保存到本地

        Args:
            path: 远程路径
            local_file: 本地保存路径

        Returns:
            OperationResult: 写入本地文件失败时状态码和错误码均为-1
        """
        downloaded = self.download_data(path)
        result = OperationResult(**downloaded.model_dump(include={"status_code", "error_code", "error_msg"}))
        if not downloaded.ok:
            return result

        try:
            Path(local_file).write_bytes(downloaded.content)
        except OSError as e:
            self.logger.error(f"写入本地文件失败: {local_file}, 错误: {e}")
            return OperationResult.local_failure(f"写入本地文件失败: {e}")
        return result

    # ============================
    # 文件与目录操作
    # ============================

    def file_info(self, path: str) -> FileInfoResult:
        """
        获取文件信息

        Args:
            path: 远程路径

        Returns:
            FileInfoResult: 文件类型、大小（字节）和修改时间（Unix时间戳）
        """
        raw = self.requester.perform_request(path, "HEAD")
        result = FileInfoResult(**raw.result.model_dump())
        if result.ok:
            result.file_type = raw.headers.get("file-type")
            result.size = safe_int(raw.headers.get("file-size"))
            result.timestamp = safe_int(raw.headers.get("file-date"))
        return result

    def delete_file(self, path: str) -> OperationResult:
        """删除文件或空目录"""
        self.logger.info(f"删除: {path}")
        return self.requester.perform_request(path, "DELETE").result

    def make_dir(self, path: str, auto_make: bool = False) -> OperationResult:
        """
        创建目录

        Args:
            path: 远程目录路径
            auto_make: 是否自动创建父级目录
        """
        headers = {
            "Folder": "true",
            "Mkdir": "true" if auto_make else "false",
        }
        self.logger.info(f"创建目录: {path}, 自动创建父目录: {auto_make}")
        return self.requester.perform_request(path, "POST", headers).result

    # ============================
    # 列目录
    # ============================

    def list_dir(self, path: str) -> ListResult:
        """
        列出目录中的文件（单次请求，不分页）

        Args:
            path: 远程目录路径
        """
        raw = self.requester.perform_request(path, "GET")
        result = ListResult(**raw.result.model_dump())
        if result.ok:
            result.files = parse_listing(raw.body)
        return result

    def list_dir_iter(
        self,
        path: str,
        iterator: DirIterator,
        callback: Callable[[FileInfo], None]
    ) -> OperationResult:
        """
        通过游标分页列目录

        每条记录按响应中的顺序回调一次，请求成功后游标原地更新。

        Args:
            path: 远程目录路径
            iterator: 调用方持有的游标
            callback: 接收每条文件记录的回调

        Returns:
            OperationResult: 没有更多数据时error_code为ERROR_LIST_END，
            响应缺少续传标记时error_code为ERROR_LIST_ITER_MISSING
        """
        if iterator.end_reached:
            return OperationResult(status_code=200, error_code=ERROR_LIST_END, error_msg="没有更多数据")

        headers = {
            "X-List-Limit": str(iterator.limit or DEFAULT_LIST_LIMIT),
            "X-List-Order": "desc" if iterator.order else "asc",
        }
        if iterator.list_iter:
            headers["X-List-Iter"] = iterator.list_iter

        raw = self.requester.perform_request(path, "GET", headers)
        result = raw.result
        if not result.ok:
            return result

        files = parse_listing(raw.body)
        for file_info in files:
            callback(file_info)
        self.logger.debug(f"列目录: {path}, 本页{len(files)}条记录")

        list_iter = raw.headers.get("list-iter")
        if list_iter is None:
            self.logger.warning(f"列目录响应缺少x-upyun-list-iter: {path}")
            result.error_code = ERROR_LIST_ITER_MISSING
            result.error_msg = "响应中缺少x-upyun-list-iter"
            return result

        iterator.list_iter = list_iter
        if list_iter == self.config.list_iter_end:
            iterator.end_reached = True
            result.error_code = ERROR_LIST_END
            result.error_msg = "没有更多数据"
        return result

    def iter_dir(
        self,
        path: str,
        limit: int = DEFAULT_LIST_LIMIT,
        order: bool = False
    ) -> Iterator[FileInfo]:
        """
        遍历目录中的全部文件，自动翻页

        Args:
            path: 远程目录路径
            limit: 每页条目上限
            order: False按时间升序，True按时间降序

        Raises:
            UpYunError: 某一页请求失败
        """
        iterator = DirIterator(limit=limit, order=order)
        while True:
            page = []
            result = self.list_dir_iter(path, iterator, page.append)
            if not result.ok:
                raise UpYunError(result)
            yield from page
            if result.error_code in (ERROR_LIST_END, ERROR_LIST_ITER_MISSING):
                return

    # ============================
    # 空间用量与缓存刷新
    # ============================

    def get_usage(self, path: str = "/") -> UsageResult:
        """
        获取空间或目录的使用量

        Args:
            path: 远程目录路径

        Returns:
            UsageResult: bytes_used为已使用字节数
        """
        path = path or ""
        usage_path = path if path.endswith("/") else path + "/"
        raw = self.requester.perform_request(usage_path, "GET", query="usage")
        result = UsageResult(**raw.result.model_dump())
        if result.ok:
            result.bytes_used = safe_int(raw.body.decode('utf-8', errors='replace'))
        return result

    def purge(self, urls: Union[str, Iterable[str]]) -> int:
        """
        刷新CDN缓存

        Args:
            urls: 完整的http URL或URL列表

        Returns:
            HTTP状态码，传输失败时为-1
        """
        if isinstance(urls, str):
            urls = [urls]
        urls = list(urls)
        self.logger.info(f"刷新缓存: {len(urls)}个URL")
        return self.requester.perform_purge(urls)

    def close(self):
        """关闭客户端"""
        self.requester.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
