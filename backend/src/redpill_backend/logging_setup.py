"""
日志配置（标准库 logging）。

约定：
- 各模块使用 `logging.getLogger(__name__)`，统一挂在 `redpill_backend` 之下。
- configure_logging 可重复调用，只会安装一个 handler。
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "redpill_backend.stream"


def configure_logging(level: str | int = "info") -> logging.Logger:
    root = logging.getLogger("redpill_backend")
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"未知日志级别：{level!r}")
        level = numeric
    root.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root
