"""
又拍云签名请求分发器
负责为每个请求附加签名头部、发送请求并规整响应结果
"""

from typing import Dict, Iterable, Optional, Tuple
from urllib.parse import quote

import httpx

from ..config import (
    ERROR_NONE,
    STATUS_LOCAL_FAILURE,
    UPYUN_HEADER_PREFIX,
    UpYunConfig,
)
from ..models import OperationResult, RawResponse
from ..signing import (
    build_authorization,
    build_purge_authorization,
    make_purge_signature,
    make_signature,
    password_digest,
)
from ..utils import format_file_size, get_logger, rfc1123_time

# 由分发器负责设置的请求头，调用方不能覆盖
RESERVED_HEADERS = frozenset({"host", "date", "authorization"})


def extract_private_headers(headers: httpx.Headers) -> Dict[str, str]:
    """提取带 x-upyun- 前缀的响应头，去掉前缀，键名小写"""
    prefix_length = len(UPYUN_HEADER_PREFIX)
    return {
        key.lower()[prefix_length:]: value
        for key, value in headers.items()
        if key.lower().startswith(UPYUN_HEADER_PREFIX)
    }


def parse_error_body(response: httpx.Response) -> Tuple[int, str]:
    """
    尽力解析非200响应体中的 {"code": int, "msg": str}

    错误响应体不保证是合法JSON，解析失败或字段缺失时使用默认错误码和HTTP原因短语

    Returns:
        (错误码, 错误信息)
    """
    error_code = ERROR_NONE
    error_msg = response.reason_phrase

    try:
        payload = response.json()
    except ValueError:
        # 非JSON响应体，使用默认值
        payload = None

    if isinstance(payload, dict):
        code = payload.get("code")
        if isinstance(code, int) and not isinstance(code, bool):
            error_code = code
        msg = payload.get("msg")
        if isinstance(msg, str):
            error_msg = msg

    return error_code, error_msg


class SignedRequestClient:
    """
    又拍云签名请求客户端

    所有公开操作都通过 perform_request 发出请求，缓存刷新通过 perform_purge 发出
    """

    def __init__(self, config: UpYunConfig, http_client: Optional[httpx.Client] = None):
        """
        初始化签名请求客户端

        Args:
            config: 客户端配置
            http_client: 可选的httpx客户端，为None时自动创建并由本对象负责关闭
        """
        self.config = config
        self.logger = get_logger("upyun.http_client", "DEBUG" if config.debug else None)

        # 密码摘要只计算一次
        self._digest = password_digest(config.password)

        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=config.timeout)

        self.logger.info(
            f"又拍云客户端初始化成功 - 服务: {config.bucket}, 接入点: {config.api_host}, "
            f"协议: {config.scheme}"
        )

    def build_uri(self, path: str, query: Optional[str] = None) -> str:
        """
        为调用方路径加上服务名前缀并进行URL编码

        路径中除 / 以外的保留字符（包括 ? = &）都会被编码，查询串只能通过query传入
        """
        path = path or "/"
        if not path.startswith("/"):
            path = "/" + path
        uri = quote(f"/{self.config.bucket}{path}", safe="/")
        if query:
            uri = f"{uri}?{query}"
        return uri

    def perform_request(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b"",
        query: Optional[str] = None,
    ) -> RawResponse:
        """
        发送一次签名请求

        Args:
            path: 服务内路径（不含服务名）
            method: HTTP方法
            headers: 额外请求头，值按UTF-8编码发送
            body: 请求体
            query: 附加在编码后路径上的查询串，如 usage

        Returns:
            RawResponse: 状态码、错误信息、私有响应头和原始响应体
        """
        method = method.upper()
        body = body or b""
        host = self.config.api_host
        uri = self.build_uri(path, query)
        url = f"{self.config.scheme}://{host}{uri}"

        date = rfc1123_time()
        signature = make_signature(method, uri, date, len(body), self._digest)

        # 先合并调用方请求头，保留头部最后写入
        request_headers = {}
        for key, value in (headers or {}).items():
            if key.lower() in RESERVED_HEADERS:
                self.logger.warning(f"忽略调用方设置的保留请求头: {key}")
                continue
            # httpx按ASCII编码str类型的头部值，中文水印文字等需要以UTF-8字节发送
            request_headers[key] = value.encode('utf-8') if isinstance(value, str) else value
        request_headers["Host"] = host
        request_headers["Date"] = date
        request_headers["Authorization"] = build_authorization(self.config.user, signature)

        self.logger.debug(f"发送请求: {method} {url}, 请求体大小: {format_file_size(len(body))}")

        try:
            response = self._client.request(
                method,
                url,
                headers=request_headers,
                content=body if body else None,
            )
        except httpx.TimeoutException as e:
            self.logger.error(f"请求又拍云超时: {method} {uri}, 当前超时设置: {self.config.timeout}秒")
            return RawResponse(result=OperationResult.local_failure(f"请求超时: {e}"))
        except httpx.HTTPError as e:
            self.logger.error(f"请求又拍云失败: {method} {uri}, 错误: {e}")
            self.logger.error(f"错误类型: {type(e).__name__}")
            return RawResponse(result=OperationResult.local_failure(str(e)))

        return self._build_response(method, uri, response)

    def _build_response(self, method: str, uri: str, response: httpx.Response) -> RawResponse:
        private_headers = extract_private_headers(response.headers)

        if response.status_code == 200:
            body = response.content
            self.logger.debug(
                f"请求成功: {method} {uri}, 响应体大小: {format_file_size(len(body))}"
            )
            return RawResponse(
                result=OperationResult(status_code=200),
                headers=private_headers,
                body=body,
            )

        error_code, error_msg = parse_error_body(response)
        self.logger.warning(
            f"又拍云返回错误状态: {method} {uri}, 状态码: {response.status_code}, "
            f"错误码: {error_code}, 错误信息: {error_msg}"
        )
        return RawResponse(
            result=OperationResult(
                status_code=response.status_code,
                error_code=error_code,
                error_msg=error_msg,
            ),
            headers=private_headers,
        )

    def perform_purge(self, urls: Iterable[str]) -> int:
        """
        发送缓存刷新请求

        Args:
            urls: 完整的http URL列表

        Returns:
            HTTP状态码，传输失败时为-1
        """
        payload = "\n".join(urls)
        date = rfc1123_time()
        signature = make_purge_signature(payload, self.config.bucket, date, self._digest)
        headers = {
            "Date": date,
            "Authorization": build_purge_authorization(self.config.bucket, self.config.user, signature),
        }

        self.logger.debug(f"发送缓存刷新请求: {self.config.purge_url}")

        try:
            response = self._client.post(self.config.purge_url, headers=headers, data={"purge": payload})
        except httpx.HTTPError as e:
            self.logger.error(f"缓存刷新请求失败: {e}")
            return STATUS_LOCAL_FAILURE

        self.logger.debug(f"缓存刷新响应: {response.status_code} {response.text}")
        return response.status_code

    def close(self):
        """关闭HTTP客户端（仅关闭自行创建的客户端）"""
        if self._owns_client:
            self._client.close()
            self.logger.info("又拍云HTTP客户端已关闭")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
