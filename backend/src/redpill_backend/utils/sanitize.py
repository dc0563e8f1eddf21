"""
调用方标识（source_id）的文件名净化。

约定：
- 除字母数字（Unicode 意义上，str.isalnum）、`_`、`-` 以外的字符一律替换为 `_`。
  组合附加符号（Mn/Mc，如天城文元音符号 U+093F）不算字母数字，同样替换。
- 结果不含路径分隔符，因此拼接后无法逃出目标目录；`..` 也会变成 `__`。
- 不可逆，也不处理碰撞：不同输入可能净化为同一文件名，后写覆盖先写。
"""

from __future__ import annotations

SAFE_PUNCTUATION = frozenset("_-")


def sanitize_identifier(raw: str) -> str:
    return "".join(ch if ch.isalnum() or ch in SAFE_PUNCTUATION else "_" for ch in raw)
