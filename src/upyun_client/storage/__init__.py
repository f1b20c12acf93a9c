"""
存储客户端模块
提供远程存储基类和又拍云签名请求分发器
"""

from .base import BaseStorageClient
from .http_client import SignedRequestClient

__all__ = [
    'BaseStorageClient',
    'SignedRequestClient'
]
