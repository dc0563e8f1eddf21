"""
按路径读取用户选择的文件（CSV 等）。

约束：
- 路径来自系统文件选择器，由用户自己挑选：这里不做净化，也不限制目录。
- 内容按 UTF-8 原样返回，不做换行转换，不解析 CSV。
- 失败统一抛 FileReadError，message 为操作系统给出的错误文本。
"""

from __future__ import annotations

import logging
import os
import stat
from typing import Any

from ..errors import FileReadError

logger = logging.getLogger(__name__)


def read_csv(file_path: str) -> str:
    logger.info("reading file: %s", file_path)
    try:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError as e:
        raise FileReadError(str(e), missing=True) from e
    except (OSError, ValueError) as e:
        # 非 UTF-8 内容（UnicodeDecodeError）、路径含 NUL 字节都是 ValueError
        raise FileReadError(str(e)) from e


def read_file_chunk(path: str, start: int, length: int) -> str:
    """读取 [start, start+length) 字节并按 UTF-8 解码；越过 EOF 时返回较短的剩余部分。

    块边缘被截断的多字节字符替换为 U+FFFD。
    """

    if start < 0 or length < 0:
        raise FileReadError(f"非法读取范围：start={start} length={length}")
    logger.info("reading chunk: %s start=%d length=%d", path, start, length)
    try:
        with open(path, "rb") as f:
            f.seek(start)
            raw = f.read(length)
    except FileNotFoundError as e:
        raise FileReadError(str(e), missing=True) from e
    except (OSError, OverflowError, ValueError) as e:
        # 超出平台范围的 start/length：seek 抛 ValueError，read 抛 OverflowError
        raise FileReadError(str(e)) from e
    return raw.decode("utf-8", errors="replace")


def get_file_details(path: str) -> dict[str, Any]:
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return {"exists": False, "size": 0}
    if not stat.S_ISREG(st.st_mode):
        return {"exists": False, "size": 0}
    return {"exists": True, "size": int(st.st_size)}
