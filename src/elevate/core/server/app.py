"""Elevate Health MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastmcp import FastMCP

from elevate.core.config.settings import get_settings
from elevate.core.config.weights import (
    DEFAULT_WEIGHTS,
    ElevateWeights,
    load_weights_file,
    validate_weights,
)
from elevate.domains.wellness.domain_logic.models import Horizon
from elevate.domains.wellness.prompts.elevate_prompts import register_elevate_prompts
from elevate.domains.wellness.resources.weights import register_weights_resources
from elevate.domains.wellness.tools.elevate_tools import register_elevate_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Elevate Health Engine"
SERVER_VERSION = "0.1.0"


def _resolve_weights(weights_path: str) -> tuple[ElevateWeights, str]:
    """Pick the weight profile: configured YAML file, else built-in defaults."""
    if not weights_path:
        return DEFAULT_WEIGHTS, "defaults"
    path = Path(weights_path).expanduser()
    if not path.is_file():
        logger.warning("Weight profile %s not found; using built-in defaults", path)
        return DEFAULT_WEIGHTS, "defaults"
    return load_weights_file(path), str(path)


def create_app(*, weights_override: ElevateWeights | None = None) -> FastMCP:
    """Create and configure the Elevate MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Resolves and validates the model weights
    3. Registers all tools, resources, and prompts
    """
    settings = get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Elevate fitness-coaching scoring engine. Turns habit answers and "
            "body measurements into pillar scores, a Peak score, condition risk "
            "indices, a health age, and no-change vs with-change projections."
        ),
    )

    # --- Model weights ---
    # A bad profile is a misconfiguration: WeightsConfigError propagates.
    if weights_override is not None:
        weights = validate_weights(weights_override)
        weights_source = "override"
    else:
        weights, weights_source = _resolve_weights(settings.elevate_weights_path)
    logger.info("Scoring with weight profile: %s", weights_source)

    # Unknown horizon raises ValueError here, at startup
    default_horizon = Horizon(settings.elevate_default_horizon).value

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "weights_source": weights_source,
            "default_horizon": default_horizon,
        }

    register_elevate_tools(server, weights, default_horizon=default_horizon)
    logger.info("Elevate assessment and projection tools registered")

    # --- Register resources ---
    register_weights_resources(server, weights, source=weights_source)

    # --- Register prompts ---
    register_elevate_prompts(server)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
