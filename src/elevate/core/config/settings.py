"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Elevate health engine server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; client measurements should not be reachable from
    # the LAN/WAN unless `elevate_allow_insecure_bind` is set explicitly.
    elevate_host: str = "127.0.0.1"
    elevate_port: int = 8003
    elevate_log_level: str = "info"
    elevate_allow_insecure_bind: bool = False

    # Model constants. Empty path = built-in ElevateWeights defaults.
    elevate_weights_path: str = ""

    # Horizon used by tools when the caller does not pick one
    elevate_default_horizon: str = "6mo"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
