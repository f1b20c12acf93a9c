"""
又拍云请求签名

普通请求签名串: METHOD&URI&DATE&CONTENT_LENGTH&MD5(PASSWORD)
缓存刷新签名串: PURGE_LIST&BUCKET&DATE&MD5(PASSWORD)
"""

from .config import AUTH_SCHEME
from .utils import md5_hex


def password_digest(password: str) -> str:
    """计算操作员密码的MD5摘要，客户端生命周期内只计算一次"""
    return md5_hex(password)


def make_signature(method: str, uri: str, date: str, content_length: int, digest: str) -> str:
    """
    计算普通请求的签名

    Args:
        method: HTTP方法
        uri: 带服务名前缀的请求路径，如 /bucket/a.txt
        date: RFC-1123格式的GMT时间
        content_length: 请求体长度，无请求体时为0
        digest: 密码摘要

    Returns:
        小写十六进制签名
    """
    return md5_hex(f"{method.upper()}&{uri}&{date}&{content_length}&{digest}")


def make_purge_signature(payload: str, bucket: str, date: str, digest: str) -> str:
    """
    计算缓存刷新请求的签名

    Args:
        payload: 换行分隔的完整URL列表
        bucket: 服务名
        date: RFC-1123格式的GMT时间
        digest: 密码摘要
    """
    return md5_hex(f"{payload}&{bucket}&{date}&{digest}")


def build_authorization(user: str, signature: str) -> str:
    return f"{AUTH_SCHEME} {user}:{signature}"


def build_purge_authorization(bucket: str, user: str, signature: str) -> str:
    return f"{AUTH_SCHEME} {bucket}:{user}:{signature}"
