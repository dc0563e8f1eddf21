"""
RedPill Charting 后端启动脚本。

定位：
- 未执行 `pip install -e .` 时也能直接运行：启动时把 `backend/src` 加到 `sys.path`。
- 默认端口、监听地址、日志级别来自 Settings（REDPILL_ 环境变量 / .env），命令行参数优先。

用法：
  python backend/run_server.py

可选参数（透传给 uvicorn）：
  python backend/run_server.py --reload
  python backend/run_server.py --host 127.0.0.1 --port 7140 --log-level debug
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import uvicorn


def main(argv: list[str] | None = None) -> None:
    backend_dir = Path(__file__).resolve().parent
    src_dir = backend_dir / "src"
    if not src_dir.exists():
        raise RuntimeError(f"找不到后端源码目录：{src_dir}")

    sys.path.insert(0, str(src_dir))

    from redpill_backend.config import get_settings
    from redpill_backend.logging_setup import configure_logging

    settings = get_settings()

    parser = argparse.ArgumentParser(add_help=True)
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true", default=False)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    args, unknown = parser.parse_known_args(sys.argv[1:] if argv is None else argv)
    if unknown:
        raise SystemExit(f"不支持的参数：{unknown!r}")

    configure_logging(args.log_level)

    # --reload 只 watch 后端源码，避免前端构建产物触发重载
    reload_dirs = [str(src_dir)] if args.reload else None

    uvicorn.run(
        "redpill_backend.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        reload_dirs=reload_dirs,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
