"""
又拍云客户端工具函数
"""

import os
import hashlib
import logging
from pathlib import Path
from datetime import datetime
from email.utils import formatdate
from typing import Optional, Union


def get_logger(name: str, level: str = None) -> logging.Logger:
    """
    获取日志记录器，自动配置控制台输出，按需配置文件输出

    Args:
        name: 日志记录器名称
        level: 日志级别

    Returns:
        配置好的日志记录器
    """
    logger = logging.getLogger(name)

    # 每次调用都重新设置级别，未指定时回到LOG_LEVEL
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # 避免重复添加处理器
    if logger.handlers:
        return logger

    # 创建格式器
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 创建控制台处理器
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 作为库使用时默认不写文件，只有配置了日志目录才创建文件处理器
    log_dir = os.getenv("UPYUN_LOG_DIR")
    if log_dir:
        logs_dir = Path(log_dir)
        current_date = datetime.now().strftime('%Y-%m-%d')
        module_name = name.split('.')[-1]
        log_filename = logs_dir / f"{current_date}_{module_name}.log"
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_filename, encoding='utf-8')
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"无法创建日志文件 {log_filename}: {e}")

    return logger


def rfc1123_time(timestamp: Optional[float] = None) -> str:
    """
    生成RFC-1123格式的GMT时间，如 "Sat, 17 Oct 2026 08:00:00 GMT"

    Args:
        timestamp: Unix时间戳，为None时使用当前时间
    """
    return formatdate(timestamp, usegmt=True)


def md5_hex(data: Union[str, bytes]) -> str:
    """计算小写十六进制MD5摘要，字符串按UTF-8编码"""
    if isinstance(data, str):
        data = data.encode('utf-8')
    return hashlib.md5(data).hexdigest()


def safe_int(value: Optional[str], default: int = 0) -> int:
    """
    安全地将响应头或响应体中的字符串转换为整数

    缺失或无法解析时返回默认值
    """
    if value is None:
        return default
    try:
        return int(value.strip())
    except (TypeError, ValueError):
        return default


SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_file_size(size_bytes: Optional[int]) -> str:
    """日志中使用的文件大小，如 1.5 MB"""
    if size_bytes is None:
        return "未知"
    if size_bytes == 0:
        return "0 B"

    size = float(size_bytes)
    for unit in SIZE_UNITS[:-1]:
        if size < 1024:
            return f"{round(size, 2)} {unit}"
        size /= 1024
    return f"{round(size, 2)} {SIZE_UNITS[-1]}"
