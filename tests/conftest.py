"""
测试配置文件
提供测试共享的fixture和模拟的又拍云服务端
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, List
from unittest.mock import patch

import httpx
import pytest

from upyun_client import UpYun, UpYunConfig

FIXED_DATE = "Sat, 17 Oct 2026 08:00:00 GMT"
LIST_ITER_END = "g2gCZAAEbmV4dGQAA2VvZg"


class FakeUpYunServer:
    """
    模拟的又拍云服务端

    上传的内容保存在内存中，下载时原样返回；可以通过 upload_headers 设置上传成功时
    返回的私有响应头。所有收到的请求保存在 requests 中。
    """

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.requests: List[httpx.Request] = []
        self.upload_headers: Dict[str, str] = {}

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "PUT":
            self.files[path] = request.content
            return httpx.Response(200, headers=self.upload_headers)

        if request.method == "GET":
            if path not in self.files:
                return httpx.Response(404, json={"code": 40400001, "msg": "file or directory not found"})
            return httpx.Response(200, content=self.files[path])

        if request.method == "HEAD":
            if path not in self.files:
                return httpx.Response(404)
            return httpx.Response(200, headers={
                "x-upyun-file-type": "file",
                "x-upyun-file-size": str(len(self.files[path])),
                "x-upyun-file-date": "1760688000",
            })

        if request.method == "DELETE":
            if self.files.pop(path, None) is None:
                return httpx.Response(404, json={"code": 40400001, "msg": "file or directory not found"})
            return httpx.Response(200)

        return httpx.Response(200)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def make_http_client(handler) -> httpx.Client:
    """使用给定处理函数创建基于MockTransport的httpx客户端"""
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def temp_dir():
    """创建临时目录夹具"""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def upyun_config():
    """创建客户端配置夹具"""
    return UpYunConfig(user="operator", password="password", bucket="demo")


@pytest.fixture
def fake_server():
    """创建模拟服务端夹具"""
    return FakeUpYunServer()


@pytest.fixture
def upyun(upyun_config, fake_server):
    """创建连接到模拟服务端的客户端夹具"""
    client = UpYun(upyun_config, http_client=make_http_client(fake_server.handle))
    yield client
    client.close()


@pytest.fixture
def frozen_date():
    """固定请求中的Date头"""
    with patch("upyun_client.storage.http_client.rfc1123_time", return_value=FIXED_DATE) as mock_time:
        yield mock_time


@pytest.fixture
def mock_env_vars():
    """模拟环境变量"""
    env_vars = {
        'UPYUN_USER': 'operator',
        'UPYUN_PASSWORD': 'password',
        'UPYUN_BUCKET': '/demo/',
        'UPYUN_USE_HTTPS': 'true',
        'UPYUN_ENDPOINT': 'telecom',
        'UPYUN_TIMEOUT': '30',
    }

    with patch.dict(os.environ, env_vars):
        yield env_vars
