"""
测试数据模型和配置
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from upyun_client.config import Endpoint, UpYunConfig, parse_endpoint
from upyun_client.exceptions import ConfigurationError
from upyun_client.gmkerl import GMKERL_HEADERS, gmkerl_headers
from upyun_client.models import (
    DirIterator,
    Gmkerl,
    GmkerlRotate,
    GmkerlType,
    OperationResult,
    UploadResult,
)


class TestUpYunConfig:
    """测试客户端配置"""

    def test_defaults(self):
        """测试默认值"""
        config = UpYunConfig(user="operator", password="password", bucket="demo")

        assert config.use_https is False
        assert config.endpoint == Endpoint.AUTO
        assert config.api_host == "v0.api.upyun.com"
        assert config.scheme == "http"
        assert config.list_iter_end == "g2gCZAAEbmV4dGQAA2VvZg"
        assert config.purge_url == "http://purge.upyun.com/purge/"

    def test_bucket_slashes_stripped(self):
        """测试去掉服务名两端的斜杠"""
        config = UpYunConfig(user="operator", password="password", bucket="/demo/")

        assert config.bucket == "demo"

    def test_empty_bucket_rejected(self):
        """测试空服务名"""
        with pytest.raises(ValidationError):
            UpYunConfig(user="operator", password="password", bucket="/")

    def test_frozen(self):
        """测试配置创建后只读"""
        config = UpYunConfig(user="operator", password="password", bucket="demo")

        with pytest.raises(ValidationError):
            config.bucket = "other"

    def test_from_env(self, mock_env_vars):
        """测试从环境变量读取配置"""
        config = UpYunConfig.from_env()

        assert config.user == "operator"
        assert config.bucket == "demo"
        assert config.use_https is True
        assert config.endpoint == Endpoint.TELECOM
        assert config.timeout == 30.0

    def test_from_env_missing(self):
        """测试缺少必要环境变量"""
        clean_env = {k: v for k, v in os.environ.items() if not k.startswith('UPYUN_')}

        with patch.dict(os.environ, clean_env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                UpYunConfig.from_env()

        assert "UPYUN_USER" in str(exc_info.value)

    def test_from_env_invalid_timeout(self, mock_env_vars):
        """测试无效的超时设置"""
        with patch.dict(os.environ, {"UPYUN_TIMEOUT": "soon"}):
            with pytest.raises(ConfigurationError):
                UpYunConfig.from_env()


class TestParseEndpoint:
    """测试接入点解析"""

    @pytest.mark.parametrize("value, expected", [
        ("auto", Endpoint.AUTO),
        ("CNC", Endpoint.CNC),
        ("3", Endpoint.CTT),
        ("", Endpoint.AUTO),
    ])
    def test_parse(self, value, expected):
        """测试名称和编号"""
        assert parse_endpoint(value) == expected

    @pytest.mark.parametrize("value", ["mobile", "9"])
    def test_unknown(self, value):
        """测试未知接入点"""
        with pytest.raises(ConfigurationError):
            parse_endpoint(value)


class TestGmkerl:
    """测试图片处理参数"""

    def test_unset_fields_not_sent(self):
        """测试未设置的字段不输出请求头"""
        assert gmkerl_headers(Gmkerl()) == {}
        assert gmkerl_headers(None) == {}

    def test_zero_values_are_distinct_from_unset(self):
        """测试显式设置的0值会被发送"""
        headers = gmkerl_headers(Gmkerl(watermark_opacity=0))

        assert headers == {"x-gmkerl-watermark-opacity": "0"}

    def test_full_mapping(self):
        """测试全部字段的请求头名和取值"""
        gmkerl = Gmkerl(
            type=GmkerlType.FIX_BOTH,
            value="200x100",
            quality=90,
            unsharp=True,
            thumbnail="small",
            exif_switch=False,
            crop="0,0,100,200",
            rotate=GmkerlRotate.R90,
            watermark_text="upyun",
            watermark_font="simhei",
            watermark_size=24,
            watermark_align="top,left",
            watermark_margin="10,10",
            watermark_opacity=50,
            watermark_color="#FFFFFF",
            watermark_border="#000000",
        )

        headers = gmkerl_headers(gmkerl)

        assert len(headers) == len(GMKERL_HEADERS)
        assert headers["x-gmkerl-type"] == "fix_both"
        assert headers["x-gmkerl-value"] == "200x100"
        assert headers["x-gmkerl-quality"] == "90"
        assert headers["x-gmkerl-unsharp"] == "true"
        assert headers["x-gmkerl-exif-switch"] == "false"
        assert headers["x-gmkerl-rotate"] == "90"
        assert headers["x-gmkerl-watermark-size"] == "24"
        assert headers["x-gmkerl-watermark-color"] == "#FFFFFF"

    def test_rotate_auto(self):
        """测试自动旋转"""
        assert gmkerl_headers(Gmkerl(rotate=GmkerlRotate.AUTO)) == {"x-gmkerl-rotate": "auto"}

    def test_value_without_type_ignored(self):
        """测试未指定处理类型时不发送value"""
        assert gmkerl_headers(Gmkerl(value="200")) == {}

    def test_type_requires_value(self):
        """测试指定处理类型时必须提供value"""
        with pytest.raises(ValidationError):
            Gmkerl(type=GmkerlType.FIX_WIDTH)

    @pytest.mark.parametrize("field, value", [
        ("quality", 0),
        ("quality", 101),
        ("watermark_size", 0),
        ("watermark_opacity", 101),
    ])
    def test_out_of_range(self, field, value):
        """测试超出范围的取值"""
        with pytest.raises(ValidationError):
            Gmkerl(**{field: value})


class TestOperationResult:
    """测试操作返回值"""

    def test_ok(self):
        """测试成功判断"""
        assert OperationResult(status_code=200).ok
        assert not OperationResult(status_code=404).ok

    def test_local_failure(self):
        """测试本地失败结果"""
        result = UploadResult.local_failure("本地文件不存在")

        assert isinstance(result, UploadResult)
        assert result.status_code == -1
        assert result.error_code == -1
        assert result.error_msg == "本地文件不存在"


class TestDirIterator:
    """测试列目录游标"""

    def test_defaults(self):
        """测试默认值"""
        iterator = DirIterator()

        assert iterator.limit == 100
        assert iterator.order is False
        assert iterator.list_iter == ""
        assert not iterator.finished

    def test_persist_and_restore(self):
        """测试游标持久化后原样恢复"""
        iterator = DirIterator(limit=50, order=True, list_iter="token-1")

        restored = DirIterator.model_validate_json(iterator.model_dump_json())

        assert restored == iterator

    def test_reset(self):
        """测试重置游标"""
        iterator = DirIterator(list_iter="token-1", end_reached=True)

        iterator.reset()

        assert iterator.list_iter == ""
        assert not iterator.finished
