"""
前端可调用的命令表（与前端 bridge 的 invoke(cmd, args) 一一对应）。

约定：
- 参数名与前端一致，使用 camelCase（filePath / sourceId / notes ...），同时接受 snake_case。
- 命令失败不抛给调用方：GatewayError 统一转换为 CommandResult(ok=False, error=<文本>)。
- data_root 通过 resolve_root 回调在每次调用时解析，不缓存。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .domain.sticky_note import notes_to_wire
from .errors import GatewayError
from .infra import files, storage

logger = logging.getLogger(__name__)

RootResolver = Callable[[], Path]


class InvalidArgumentsError(GatewayError):
    code = "InvalidArgumentsError"
    http_status = 400


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    data: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


def _arg(args: dict[str, Any], *names: str, kind: type | tuple[type, ...] = str) -> Any:
    for name in names:
        if name in args:
            value = args[name]
            if not isinstance(value, kind) or (isinstance(value, bool) and kind is int):
                raise InvalidArgumentsError(f"参数 {name} 类型错误：{type(value).__name__}")
            return value
    raise InvalidArgumentsError(f"缺少参数：{names[0]}")


def ping() -> str:
    return "pong"


def _cmd_ping(resolve_root: RootResolver, args: dict[str, Any]) -> str:
    return ping()


def _cmd_read_csv(resolve_root: RootResolver, args: dict[str, Any]) -> str:
    return files.read_csv(_arg(args, "filePath", "file_path"))


def _cmd_save_chart_state(resolve_root: RootResolver, args: dict[str, Any]) -> None:
    source_id = _arg(args, "sourceId", "source_id")
    state = _arg(args, "state")
    storage.save_chart_state(resolve_root(), source_id, state)


def _cmd_load_chart_state(resolve_root: RootResolver, args: dict[str, Any]) -> str | None:
    return storage.load_chart_state(resolve_root(), _arg(args, "sourceId", "source_id"))


def _cmd_delete_chart_state(resolve_root: RootResolver, args: dict[str, Any]) -> bool:
    return storage.delete_chart_state(resolve_root(), _arg(args, "sourceId", "source_id"))


def _cmd_save_sticky_notes(resolve_root: RootResolver, args: dict[str, Any]) -> None:
    notes = _arg(args, "notes", kind=list)
    storage.save_sticky_notes(resolve_root(), notes)


def _cmd_load_sticky_notes(resolve_root: RootResolver, args: dict[str, Any]) -> list[dict[str, Any]]:
    return notes_to_wire(storage.load_sticky_notes(resolve_root()))


def _cmd_get_file_details(resolve_root: RootResolver, args: dict[str, Any]) -> dict[str, Any]:
    return files.get_file_details(_arg(args, "path", "filePath", "file_path"))


def _cmd_read_file_chunk(resolve_root: RootResolver, args: dict[str, Any]) -> str:
    path = _arg(args, "path", "filePath", "file_path")
    start = _arg(args, "start", kind=int)
    length = _arg(args, "length", kind=int)
    return files.read_file_chunk(path, start, length)


def _cmd_get_data_root(resolve_root: RootResolver, args: dict[str, Any]) -> str:
    return str(resolve_root())


COMMANDS: dict[str, Callable[[RootResolver, dict[str, Any]], Any]] = {
    "ping": _cmd_ping,
    "read_csv": _cmd_read_csv,
    "save_chart_state": _cmd_save_chart_state,
    "load_chart_state": _cmd_load_chart_state,
    "delete_chart_state": _cmd_delete_chart_state,
    "save_sticky_notes": _cmd_save_sticky_notes,
    "load_sticky_notes": _cmd_load_sticky_notes,
    "get_file_details": _cmd_get_file_details,
    "read_file_chunk": _cmd_read_file_chunk,
    "get_data_root": _cmd_get_data_root,
}


def invoke(command: str, args: dict[str, Any] | None, *, resolve_root: RootResolver) -> CommandResult:
    handler = COMMANDS.get(command)
    if handler is None:
        return CommandResult(ok=False, error=f"未知命令：{command}")
    try:
        return CommandResult(ok=True, data=handler(resolve_root, args or {}))
    except GatewayError as e:
        logger.warning("command %s failed: [%s] %s", command, e.code, e.message)
        return CommandResult(ok=False, error=e.message)
