"""Application configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """后端配置（环境变量前缀 REDPILL_，也可写在 .env 中）。"""

    model_config = SettingsConfigDict(
        env_prefix="REDPILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # 设置后完全替代操作系统的应用数据目录（测试 / 便携安装）
    APP_DATA_DIR: Path | None = None
    APP_IDENTIFIER: str = "com.redpill.charting"
    APP_NAMESPACE: str = "RedPillCharting"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 7140
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
