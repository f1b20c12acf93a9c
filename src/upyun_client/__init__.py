"""
又拍云存储客户端
提供文件上传、下载、列目录、删除和缓存刷新功能
"""

from .config import (
    Endpoint,
    UpYunConfig,
    ERROR_NONE,
    ERROR_LOCAL,
    ERROR_LIST_END,
    ERROR_LIST_ITER_MISSING,
)
from .core import UpYun
from .exceptions import UpYunError, ConfigurationError
from .models import (
    DirIterator,
    DownloadResult,
    FileInfo,
    FileInfoResult,
    Gmkerl,
    GmkerlRotate,
    GmkerlType,
    ListResult,
    OperationResult,
    UploadResult,
    UsageResult,
)
from .storage import SignedRequestClient

__version__ = "1.0.0"

__all__ = [
    "UpYun",
    "UpYunConfig",
    "Endpoint",
    "SignedRequestClient",
    "UpYunError",
    "ConfigurationError",
    "DirIterator",
    "DownloadResult",
    "FileInfo",
    "FileInfoResult",
    "Gmkerl",
    "GmkerlRotate",
    "GmkerlType",
    "ListResult",
    "OperationResult",
    "UploadResult",
    "UsageResult",
    "ERROR_NONE",
    "ERROR_LOCAL",
    "ERROR_LIST_END",
    "ERROR_LIST_ITER_MISSING",
]
