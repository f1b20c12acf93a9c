"""
又拍云客户端异常定义

普通操作通过结果对象返回错误，异常只用于无法返回结果对象的场景
"""


class UpYunError(Exception):
    """又拍云请求失败（用于生成器等无法返回结果对象的场景）"""

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"又拍云请求失败: status={result.status_code}, "
            f"code={result.error_code}, msg={result.error_msg}"
        )


class ConfigurationError(ValueError):
    """客户端配置缺失或无效"""
