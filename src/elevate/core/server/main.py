"""Elevate server entry point: ``python -m elevate.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from elevate.core.config.settings import get_settings
from elevate.core.server.app import create_app
from elevate.domains.wellness.domain_logic.models import Horizon


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _check_default_horizon(value: str) -> None:
    """Fail before binding when ELEVATE_DEFAULT_HORIZON is not a known horizon."""
    valid = [h.value for h in Horizon]
    if value not in valid:
        raise ValueError(
            f"ELEVATE_DEFAULT_HORIZON={value!r} is not one of: {' | '.join(valid)}"
        )


def run() -> None:
    """Start the Elevate MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.elevate_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    if not settings.elevate_allow_insecure_bind and not _is_loopback_host(settings.elevate_host):
        raise RuntimeError(
            "Refusing to bind the Elevate server to a non-loopback host without an auth layer. "
            "Set ELEVATE_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    _check_default_horizon(settings.elevate_default_horizon)
    logger.info(
        "Starting Elevate Health Engine on %s:%d (weights: %s, default horizon: %s)",
        settings.elevate_host,
        settings.elevate_port,
        settings.elevate_weights_path or "built-in defaults",
        settings.elevate_default_horizon,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.elevate_host,
        port=settings.elevate_port,
    )


if __name__ == "__main__":
    run()
