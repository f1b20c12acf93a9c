"""
又拍云客户端配置模块
提供接入点、协议常量和客户端配置
"""

import os
from enum import IntEnum
from typing import Dict

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError

load_dotenv()

# ============================
# 接入点定义
# ============================


class Endpoint(IntEnum):
    """又拍云网络接入点"""

    AUTO = 0        # 自动选择
    TELECOM = 1     # 中国电信
    CNC = 2         # 中国联通（网通）
    CTT = 3         # 中国铁通（移动）


API_HOSTS: Dict[Endpoint, str] = {
    Endpoint.AUTO: "v0.api.upyun.com",
    Endpoint.TELECOM: "v1.api.upyun.com",
    Endpoint.CNC: "v2.api.upyun.com",
    Endpoint.CTT: "v3.api.upyun.com",
}

DEFAULT_PURGE_URL = "http://purge.upyun.com/purge/"

# ============================
# 协议常量
# ============================

# 又拍云私有头部前缀，响应中带此前缀的头部会被提取
UPYUN_HEADER_PREFIX = "x-upyun-"

# 签名方案名称
AUTH_SCHEME = "UpYun"

# 列目录结束标记（x-upyun-list-iter 等于此值表示没有更多数据）
DEFAULT_LIST_ITER_END = "g2gCZAAEbmV4dGQAA2VvZg"

DEFAULT_LIST_LIMIT = 100
DEFAULT_TIMEOUT = 60.0

# ============================
# 错误码
# ============================

ERROR_NONE = 0
# 本地前置条件失败或传输层失败，状态码同时为 -1
ERROR_LOCAL = -1
# 列目录没有更多数据
ERROR_LIST_END = 1
# 200 响应中缺少 x-upyun-list-iter
ERROR_LIST_ITER_MISSING = -2

STATUS_LOCAL_FAILURE = -1


class UpYunConfig(BaseModel, frozen=True):
    """又拍云客户端配置，创建后只读"""

    user: str = Field(min_length=1, description="操作员名")
    password: str = Field(min_length=1, description="操作员密码")
    bucket: str = Field(min_length=1, description="服务（空间）名")
    use_https: bool = Field(default=False, description="是否使用https://")
    endpoint: Endpoint = Field(default=Endpoint.AUTO, description="网络接入点")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="请求超时时间（秒）")
    debug: bool = Field(default=False, description="输出调试日志")
    list_iter_end: str = Field(default=DEFAULT_LIST_ITER_END, description="列目录结束标记")
    purge_url: str = Field(default=DEFAULT_PURGE_URL, description="缓存刷新接口地址")

    @field_validator("bucket")
    @classmethod
    def _strip_bucket(cls, value: str) -> str:
        bucket = value.strip().strip("/")
        if not bucket:
            raise ValueError("bucket不能为空")
        return bucket

    @property
    def api_host(self) -> str:
        return API_HOSTS[self.endpoint]

    @property
    def scheme(self) -> str:
        return "https" if self.use_https else "http"

    @classmethod
    def from_env(cls) -> "UpYunConfig":
        """
        从环境变量创建配置

        环境变量:
            UPYUN_USER / UPYUN_PASSWORD / UPYUN_BUCKET: 必填
            UPYUN_USE_HTTPS: true/false，默认false
            UPYUN_ENDPOINT: auto/telecom/cnc/ctt 或 0-3，默认auto
            UPYUN_TIMEOUT: 请求超时（秒），默认60
            UPYUN_DEBUG: true/false，默认false
            UPYUN_LIST_ITER_END: 列目录结束标记
            UPYUN_PURGE_URL: 缓存刷新接口地址
        """
        user = os.getenv("UPYUN_USER", "").strip()
        password = os.getenv("UPYUN_PASSWORD", "").strip()
        bucket = os.getenv("UPYUN_BUCKET", "").strip()

        missing = [
            name for name, value in (
                ("UPYUN_USER", user),
                ("UPYUN_PASSWORD", password),
                ("UPYUN_BUCKET", bucket),
            ) if not value
        ]
        if missing:
            raise ConfigurationError(f"缺少必要的环境变量: {', '.join(missing)}")

        try:
            timeout = float(os.getenv("UPYUN_TIMEOUT", str(DEFAULT_TIMEOUT)))
        except ValueError as e:
            raise ConfigurationError(f"UPYUN_TIMEOUT 无效: {os.getenv('UPYUN_TIMEOUT')}") from e

        return cls(
            user=user,
            password=password,
            bucket=bucket,
            use_https=os.getenv("UPYUN_USE_HTTPS", "false").lower() == "true",
            endpoint=parse_endpoint(os.getenv("UPYUN_ENDPOINT", "auto")),
            timeout=timeout,
            debug=os.getenv("UPYUN_DEBUG", "false").lower() == "true",
            list_iter_end=os.getenv("UPYUN_LIST_ITER_END", DEFAULT_LIST_ITER_END),
            purge_url=os.getenv("UPYUN_PURGE_URL", DEFAULT_PURGE_URL),
        )


def parse_endpoint(value: str) -> Endpoint:
    """解析接入点名称（auto/telecom/cnc/ctt）或编号（0-3）"""
    value = (value or "").strip()
    if not value:
        return Endpoint.AUTO
    if value.isdigit():
        try:
            return Endpoint(int(value))
        except ValueError as e:
            raise ConfigurationError(f"未知的接入点编号: {value}") from e
    try:
        return Endpoint[value.upper()]
    except KeyError as e:
        raise ConfigurationError(f"未知的接入点: {value}") from e
