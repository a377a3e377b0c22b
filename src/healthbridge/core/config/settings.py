"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """HealthBridge server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default: the server has no auth layer and serves health data.
    hb_host: str = "127.0.0.1"
    hb_port: int = 8001
    hb_log_level: str = "info"
    # Binding to a non-loopback host is refused unless this is set true.
    hb_allow_insecure_bind: bool = False

    # Platform served by the in-memory adapter
    hb_platform: Literal["ios", "android"] = "ios"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
