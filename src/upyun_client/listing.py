"""
列目录响应解析
"""

from typing import List

from .models import FileInfo
from .utils import safe_int

FOLDER_FLAG = "F"


def parse_listing(body: bytes) -> List[FileInfo]:
    """
    解析列目录响应体

    每行一条记录，字段以制表符分隔: 文件名、类型(F为目录)、大小、修改时间。
    字段不足4个的行直接跳过。

    Args:
        body: 响应体原始字节

    Returns:
        文件记录列表，保持响应中的顺序
    """
    text = body.decode('utf-8', errors='replace') if isinstance(body, bytes) else body
    files = []
    for line in text.split('\n'):
        fields = line.split('\t')
        if len(fields) < 4:
            continue
        files.append(FileInfo(
            filename=fields[0],
            is_folder=fields[1] == FOLDER_FLAG,
            size=safe_int(fields[2]),
            timestamp=safe_int(fields[3]),
        ))
    return files
