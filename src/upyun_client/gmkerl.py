"""
图片处理参数到请求头的映射
"""

from enum import Enum
from typing import Dict, Optional

from .models import Gmkerl

# 字段名 -> 请求头名
GMKERL_HEADERS: Dict[str, str] = {
    "type": "x-gmkerl-type",
    "value": "x-gmkerl-value",
    "quality": "x-gmkerl-quality",
    "unsharp": "x-gmkerl-unsharp",
    "thumbnail": "x-gmkerl-thumbnail",
    "exif_switch": "x-gmkerl-exif-switch",
    "crop": "x-gmkerl-crop",
    "rotate": "x-gmkerl-rotate",
    "watermark_text": "x-gmkerl-watermark-text",
    "watermark_font": "x-gmkerl-watermark-font",
    "watermark_size": "x-gmkerl-watermark-size",
    "watermark_align": "x-gmkerl-watermark-align",
    "watermark_margin": "x-gmkerl-watermark-margin",
    "watermark_opacity": "x-gmkerl-watermark-opacity",
    "watermark_color": "x-gmkerl-watermark-color",
    "watermark_border": "x-gmkerl-watermark-border",
}


def _wire_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    return str(value)


def gmkerl_headers(gmkerl: Optional[Gmkerl]) -> Dict[str, str]:
    """
    将图片处理参数转换为请求头，未设置的字段不输出

    Args:
        gmkerl: 图片处理参数，None表示不做处理

    Returns:
        请求头字典
    """
    if gmkerl is None:
        return {}

    headers = {}
    for field_name, header_name in GMKERL_HEADERS.items():
        value = getattr(gmkerl, field_name)
        if value is None:
            continue
        # value只在指定了处理类型时发送
        if field_name == "value" and gmkerl.type is None:
            continue
        headers[header_name] = _wire_value(value)
    return headers
