"""
RedPill Charting 后端 API（FastAPI）。

约定：
- 服务端口：7140（见 config.Settings.PORT），只监听本机。
- 数据根目录每次请求解析一次（get_data_root 依赖），测试可通过 dependency_overrides 注入临时目录。
- 每个命令有独立的 REST 路由；另有 `/invoke/{command}` 与前端 bridge 的 invoke(cmd, args) 对齐。

错误处理：
- GatewayError 统一转换为 {"success": false, "error": ..., "code": ...}，状态码取 http_status。
- `/invoke` 总是返回 200，失败放在 {"ok": false, "error": ...} 里。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..commands import ping
from ..commands import invoke as invoke_command
from ..config import get_settings
from ..domain.sticky_note import StickyNote, notes_to_wire
from ..errors import GatewayError
from ..infra import files, storage
from ..utils.paths import resolve_data_root

logger = logging.getLogger(__name__)


def get_data_root() -> Path:
    return resolve_data_root(get_settings())


class ReadCsvRequest(BaseModel):
    file_path: str


class SaveChartStateRequest(BaseModel):
    state: str


class SaveStickyNotesRequest(BaseModel):
    notes: list[StickyNote]


class ReadFileChunkRequest(BaseModel):
    path: str
    start: int = Field(ge=0)
    length: int = Field(ge=0)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        logger.warning("%s %s failed: [%s] %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(
            status_code=exc.http_status,
            content={"success": False, "error": exc.message, "code": exc.code},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s: %s", type(exc).__name__, exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": f"Internal server error: {type(exc).__name__}", "detail": str(exc)},
        )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="RedPill Charting Backend", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/ping")
    def api_ping() -> str:
        return ping()

    @app.post("/read_csv")
    def api_read_csv(req: ReadCsvRequest) -> dict[str, str]:
        return {"content": files.read_csv(req.file_path)}

    @app.put("/chart_state/{source_id:path}")
    def api_save_chart_state(source_id: str, req: SaveChartStateRequest, root: Path = Depends(get_data_root)) -> dict[str, bool]:
        storage.save_chart_state(root, source_id, req.state)
        return {"ok": True}

    @app.get("/chart_state/{source_id:path}")
    def api_load_chart_state(source_id: str, root: Path = Depends(get_data_root)) -> dict[str, str | None]:
        return {"state": storage.load_chart_state(root, source_id)}

    @app.delete("/chart_state/{source_id:path}")
    def api_delete_chart_state(source_id: str, root: Path = Depends(get_data_root)) -> dict[str, bool]:
        return {"deleted": storage.delete_chart_state(root, source_id)}

    @app.put("/sticky_notes")
    def api_save_sticky_notes(req: SaveStickyNotesRequest, root: Path = Depends(get_data_root)) -> dict[str, bool]:
        storage.save_sticky_notes(root, req.notes)
        return {"ok": True}

    @app.get("/sticky_notes")
    def api_load_sticky_notes(root: Path = Depends(get_data_root)) -> list[dict[str, Any]]:
        return notes_to_wire(storage.load_sticky_notes(root))

    @app.get("/file_details")
    def api_file_details(path: str) -> dict[str, Any]:
        return files.get_file_details(path)

    @app.post("/read_file_chunk")
    def api_read_file_chunk(req: ReadFileChunkRequest) -> dict[str, str]:
        return {"content": files.read_file_chunk(req.path, req.start, req.length)}

    @app.get("/data_root")
    def api_data_root(root: Path = Depends(get_data_root)) -> dict[str, str]:
        return {"data_root": str(root)}

    @app.post("/invoke/{command}")
    def api_invoke(command: str, args: dict[str, Any] | None = Body(default=None)) -> dict[str, Any]:
        # 依赖覆盖同样作用于 invoke（测试注入临时目录）
        resolver = app.dependency_overrides.get(get_data_root, get_data_root)
        return invoke_command(command, args, resolve_root=resolver).to_dict()

    return app


app = create_app()
