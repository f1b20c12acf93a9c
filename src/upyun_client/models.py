"""
又拍云客户端数据模型
"""

from enum import Enum
from typing import List, Optional, Dict

from pydantic import BaseModel, Field, model_validator

from .config import (
    DEFAULT_LIST_LIMIT,
    ERROR_LOCAL,
    ERROR_NONE,
    STATUS_LOCAL_FAILURE,
)


class GmkerlType(str, Enum):
    """图片处理类型"""

    FIX_WIDTH = "fix_width"                      # 限定宽度，高度自适应
    FIX_HEIGHT = "fix_height"                    # 限定高度，宽度自适应
    FIX_WIDTH_OR_HEIGHT = "fix_width_or_height"  # 限定宽度和高度，等比缩放
    FIX_BOTH = "fix_both"                        # 固定宽度和高度
    FIX_MAX = "fix_max"                          # 限定最长边
    FIX_MIN = "fix_min"                          # 限定最短边
    FIX_SCALE = "fix_scale"                      # 等比例缩放


class GmkerlRotate(str, Enum):
    """图片旋转方式"""

    AUTO = "auto"
    R90 = "90"
    R180 = "180"
    R270 = "270"


class Gmkerl(BaseModel):
    """
    上传时的图片处理参数

    所有字段默认为None，表示不发送对应的头部
    """

    type: Optional[GmkerlType] = Field(default=None, description="图片处理类型")
    value: Optional[str] = Field(
        default=None,
        description="处理参数，fix_both/fix_width_or_height为MMxNN，其余为单个数字"
    )
    quality: Optional[int] = Field(default=None, ge=1, le=100, description="图片质量(1-100)")
    unsharp: Optional[bool] = Field(default=None, description="锐化")
    thumbnail: Optional[str] = Field(default=None, description="控制台中设置的缩略图版本名")
    exif_switch: Optional[bool] = Field(default=None, description="是否保留EXIF信息")
    crop: Optional[str] = Field(default=None, description="裁剪参数 x,y,width,height")
    rotate: Optional[GmkerlRotate] = Field(default=None, description="旋转方式")
    watermark_text: Optional[str] = Field(default=None, description="水印文字")
    watermark_font: Optional[str] = Field(
        default=None,
        description="水印字体: simsun, simhei, simkai, simli, simyou, simfang"
    )
    watermark_size: Optional[int] = Field(default=None, gt=0, description="水印字号")
    watermark_align: Optional[str] = Field(
        default=None,
        description="水印对齐方式 valign,halign，如 top,left"
    )
    watermark_margin: Optional[str] = Field(default=None, description="水印边距 x,y")
    watermark_opacity: Optional[int] = Field(default=None, ge=0, le=100, description="水印透明度")
    watermark_color: Optional[str] = Field(default=None, description="水印颜色 #RRGGBB")
    watermark_border: Optional[str] = Field(default=None, description="水印描边颜色 #RRGGBB")

    @model_validator(mode="after")
    def _check_type_value(self) -> "Gmkerl":
        if self.type is not None and not self.value:
            raise ValueError(f"图片处理类型 {self.type.value} 需要提供value参数")
        return self


class OperationResult(BaseModel):
    """又拍云操作返回值"""

    status_code: int = Field(default=0, description="HTTP状态码，本地或传输失败时为-1")
    error_code: int = Field(default=ERROR_NONE, description="又拍云错误码")
    error_msg: str = Field(default="", description="错误信息")

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @classmethod
    def local_failure(cls, message: str) -> "OperationResult":
        """构造未访问网络的本地失败结果"""
        return cls(status_code=STATUS_LOCAL_FAILURE, error_code=ERROR_LOCAL, error_msg=message)


class UploadResult(OperationResult):
    """上传结果，图片类文件会返回尺寸等信息"""

    width: int = 0
    height: int = 0
    frames: int = 0
    file_type: Optional[str] = None


class DownloadResult(OperationResult):
    """下载结果"""

    content: bytes = b""


class FileInfoResult(OperationResult):
    """文件信息"""

    file_type: Optional[str] = Field(default=None, description="文件类型（file或folder）")
    size: int = Field(default=0, description="文件大小（字节）")
    timestamp: int = Field(default=0, description="修改时间（Unix时间戳）")


class UsageResult(OperationResult):
    """空间使用量"""

    bytes_used: int = 0


class FileInfo(BaseModel):
    """列目录中的单条文件记录"""

    filename: str
    is_folder: bool
    size: int = 0
    timestamp: int = 0


class ListResult(OperationResult):
    """列目录结果"""

    files: List[FileInfo] = Field(default_factory=list)


class DirIterator(BaseModel):
    """
    列目录游标

    由调用方持有，每次调用后原地更新；可以通过 model_dump_json() 持久化，
    再通过 model_validate_json() 恢复后继续列目录。同一个游标不能并发使用。
    """

    limit: int = Field(default=DEFAULT_LIST_LIMIT, ge=0, description="每次请求的条目上限，0表示默认值")
    order: bool = Field(default=False, description="False按时间升序，True按时间降序")
    list_iter: str = Field(default="", description="服务端返回的续传标记")
    end_reached: bool = Field(default=False, description="是否已到达列表末尾")

    @property
    def finished(self) -> bool:
        return self.end_reached

    def reset(self):
        """从头开始列目录"""
        self.list_iter = ""
        self.end_reached = False


class RawResponse(BaseModel):
    """请求分发器的原始结果"""

    result: OperationResult = Field(default_factory=OperationResult)
    headers: Dict[str, str] = Field(default_factory=dict, description="去掉x-upyun-前缀的私有响应头")
    body: bytes = b""
