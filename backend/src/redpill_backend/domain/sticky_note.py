"""
便签（Sticky Note）数据结构。

约定：
- 线上/磁盘字段名固定为 camelCase（inkData / isMinimized / isPinned / zIndex），
  已有的 sticky_notes.json 与未迁移的前端都依赖这些名字，不能改。
- Python 侧属性名为 snake_case；解析时接受 camelCase，序列化时总是输出 camelCase。
- 可选字段缺省时写出 null，保证落盘文件每条便签都带齐 11 个键。
- 未知字段忽略（兼容新旧前端）。
- mode / color 的取值由前端定义，这里只要求是字符串。
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, TypeAdapter

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Position(BaseModel):
    model_config = ConfigDict(extra="ignore")

    x: float = Field(strict=True, allow_inf_nan=False)
    y: float = Field(strict=True, allow_inf_nan=False)


class Size(BaseModel):
    model_config = ConfigDict(extra="ignore")

    w: float = Field(strict=True, allow_inf_nan=False)
    h: float = Field(strict=True, allow_inf_nan=False)


class StickyNote(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictStr
    title: StrictStr
    content: StrictStr
    ink_data: StrictStr | None = Field(default=None, alias="inkData")
    mode: StrictStr
    is_minimized: StrictBool = Field(alias="isMinimized")
    is_pinned: StrictBool | None = Field(default=None, alias="isPinned")
    position: Position
    size: Size
    z_index: StrictInt = Field(alias="zIndex", ge=INT64_MIN, le=INT64_MAX)
    color: StrictStr

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


StickyNoteList = TypeAdapter(list[StickyNote])


def notes_to_wire(notes: Iterable[StickyNote]) -> list[dict[str, Any]]:
    return [n.to_wire() for n in notes]
