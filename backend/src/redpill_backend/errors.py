"""
错误分类。

约定：
- 底层异常（OSError / UnicodeDecodeError / JSONDecodeError / pydantic.ValidationError）
  在 infra 层捕获后，统一以下列异常重新抛出（`raise ... from e`）。
- message 保留原始错误文本，前端直接展示。
- 任何错误都不应导致进程退出；命令层把它们转换为错误字符串返回。
"""

from __future__ import annotations


class GatewayError(Exception):
    code = "GatewayError"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PathResolutionError(GatewayError):
    """无法确定应用数据目录。"""

    code = "PathResolutionError"
    http_status = 500


class PersistenceError(GatewayError):
    """目录创建或文件读写失败。"""

    code = "PersistenceError"
    http_status = 500


class SerializationError(GatewayError):
    code = "SerializationError"
    http_status = 400


class DeserializationError(GatewayError):
    """文件存在，但内容不是合法 JSON 或不符合数据结构。"""

    code = "DeserializationError"
    http_status = 500


class FileReadError(GatewayError):
    code = "FileReadError"
    http_status = 400

    def __init__(self, message: str, *, missing: bool = False) -> None:
        super().__init__(message)
        self.missing = missing
        if missing:
            self.http_status = 404
