"""
数据根目录（Data Root）定位。

定位：
- 所有持久化文件都位于 `<os_app_data_dir>/RedPillCharting/Database` 之下。
- os_app_data_dir = `<按操作系统的用户数据目录>/<app identifier>`：
  - Windows：%APPDATA%
  - macOS：~/Library/Application Support
  - 其它：$XDG_DATA_HOME（需为绝对路径），否则 ~/.local/share
- 配置了 REDPILL_APP_DATA_DIR 时直接使用它，不再查询操作系统。

约束：
- 每次调用都重新解析，不缓存，不创建目录。
- 无法确定目录时抛 PathResolutionError，不做静默兜底。
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

from ..config import Settings, get_settings
from ..errors import PathResolutionError

DATABASE_DIRNAME = "Database"


def _home(home: Path | None) -> Path:
    if home is not None:
        return home
    try:
        return Path.home()
    except RuntimeError as e:
        raise PathResolutionError(f"无法确定用户主目录：{e}") from e


def os_user_data_base(
    *,
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path:
    """按操作系统返回用户级数据目录（不含应用标识）。"""

    platform = platform if platform is not None else sys.platform
    environ = environ if environ is not None else os.environ

    if platform.startswith("win"):
        appdata = environ.get("APPDATA", "")
        if not appdata:
            raise PathResolutionError("无法确定应用数据目录：环境变量 APPDATA 未设置")
        return Path(appdata)

    if platform == "darwin":
        return _home(home) / "Library" / "Application Support"

    xdg = environ.get("XDG_DATA_HOME", "")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return _home(home) / ".local" / "share"


def os_app_data_dir(settings: Settings | None = None, **host) -> Path:
    settings = settings or get_settings()
    if settings.APP_DATA_DIR is not None:
        override = Path(settings.APP_DATA_DIR)
        if not override.is_absolute():
            raise PathResolutionError(f"REDPILL_APP_DATA_DIR 必须是绝对路径：{override}")
        return override
    if not settings.APP_IDENTIFIER:
        raise PathResolutionError("APP_IDENTIFIER 为空，无法确定应用数据目录")
    return os_user_data_base(**host) / settings.APP_IDENTIFIER


def data_root_from(app_data_dir: Path, namespace: str = "RedPillCharting") -> Path:
    return app_data_dir / namespace / DATABASE_DIRNAME


def resolve_data_root(settings: Settings | None = None, **host) -> Path:
    """解析 `<os_app_data_dir>/<namespace>/Database`。"""

    settings = settings or get_settings()
    return data_root_from(os_app_data_dir(settings, **host), settings.APP_NAMESPACE)
