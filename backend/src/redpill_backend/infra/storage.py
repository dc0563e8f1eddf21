"""
Database 目录下的 JSON 文件持久化：图表绘图状态、便签。

约定（data_root = <app_data>/RedPillCharting/Database）：

data_root/
  Drawings/
    {sanitized_source_id}.json     # 前端给的字符串原样落盘，不做任何校验
  StickyNotes/
    sticky_notes.json              # 便签数组（camelCase 字段，缩进 2）

说明：
- data_root 由调用方显式传入（API 层每次请求解析一次），这里不访问任何全局状态。
- 写入是整文件原地覆盖：没有临时文件 + rename，进程崩溃可能留下半截文件。
- 没有锁：同一目标的并发写，最后完成的那次生效。
- 目录创建成功但写入失败时，不回滚已创建的目录。
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..domain.sticky_note import StickyNote, StickyNoteList
from ..errors import DeserializationError, GatewayError, PersistenceError, SerializationError
from ..utils.sanitize import sanitize_identifier

logger = logging.getLogger(__name__)

DRAWINGS_DIRNAME = "Drawings"
STICKY_NOTES_DIRNAME = "StickyNotes"
STICKY_NOTES_FILENAME = "sticky_notes.json"


def _ensure_dir(p: Path) -> None:
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(f"无法创建目录 {p}：{e}") from e


def _write_text(p: Path, text: str) -> None:
    try:
        p.write_text(text, encoding="utf-8", newline="")
    except OSError as e:
        raise PersistenceError(f"写入失败 {p}：{e}") from e
    logger.info("wrote %s (%d chars)", p, len(text))


def _read_text(p: Path, *, decode_error: type[GatewayError] = PersistenceError) -> str | None:
    """读取文本；文件不存在返回 None。"""

    try:
        with p.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as e:
        raise decode_error(f"文件不是合法 UTF-8 {p}：{e}") from e
    except OSError as e:
        raise PersistenceError(f"读取失败 {p}：{e}") from e


def drawings_dir(data_root: Path) -> Path:
    return data_root / DRAWINGS_DIRNAME


def chart_state_path(data_root: Path, source_id: str) -> Path:
    return drawings_dir(data_root) / f"{sanitize_identifier(source_id)}.json"


def sticky_notes_dir(data_root: Path) -> Path:
    return data_root / STICKY_NOTES_DIRNAME


def sticky_notes_path(data_root: Path) -> Path:
    return sticky_notes_dir(data_root) / STICKY_NOTES_FILENAME


# --- Chart state ---


def save_chart_state(data_root: Path, source_id: str, state: str) -> Path:
    _ensure_dir(drawings_dir(data_root))
    p = chart_state_path(data_root, source_id)
    _write_text(p, state)
    return p


def load_chart_state(data_root: Path, source_id: str) -> str | None:
    """返回保存过的原始字符串；从未保存过返回 None。"""

    p = chart_state_path(data_root, source_id)
    logger.info("loading chart state %s", p)
    return _read_text(p)


def delete_chart_state(data_root: Path, source_id: str) -> bool:
    p = chart_state_path(data_root, source_id)
    try:
        p.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise PersistenceError(f"删除失败 {p}：{e}") from e
    logger.info("deleted chart state %s", p)
    return True


# --- Sticky notes ---


def _coerce_notes(notes: Sequence[StickyNote | dict[str, Any]]) -> list[StickyNote]:
    out: list[StickyNote] = []
    for i, n in enumerate(notes):
        if isinstance(n, StickyNote):
            out.append(n)
            continue
        try:
            out.append(StickyNote.model_validate(n))
        except ValidationError as e:
            raise SerializationError(f"第 {i} 条便签无法编码：{e}") from e
    return out


def dump_sticky_notes(notes: Sequence[StickyNote | dict[str, Any]]) -> str:
    payload = [n.to_wire() for n in _coerce_notes(notes)]
    try:
        return json.dumps(payload, ensure_ascii=False, indent=2, allow_nan=False)
    except ValueError as e:
        raise SerializationError(f"便签无法编码为 JSON：{e}") from e


def save_sticky_notes(data_root: Path, notes: Sequence[StickyNote | dict[str, Any]]) -> Path:
    """整体替换便签集合（没有局部更新语义）。"""

    text = dump_sticky_notes(notes)
    _ensure_dir(sticky_notes_dir(data_root))
    p = sticky_notes_path(data_root)
    _write_text(p, text)
    return p


def load_sticky_notes(data_root: Path) -> list[StickyNote]:
    p = sticky_notes_path(data_root)
    text = _read_text(p, decode_error=DeserializationError)
    if text is None:
        return []
    try:
        return StickyNoteList.validate_json(text)
    except ValidationError as e:
        raise DeserializationError(f"sticky_notes.json 内容非法：{e}") from e
