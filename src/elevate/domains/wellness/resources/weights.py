"""MCP Resources for model weight discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from elevate.core.config.weights import ElevateWeights


def register_weights_resources(
    mcp: FastMCP, weights: ElevateWeights, *, source: str
) -> None:
    """Register the active weight profile as a read-only resource."""

    @mcp.resource("config://elevate/weights")
    def elevate_weights_resource() -> str:
        """The model constants this server scores with."""
        return json.dumps(
            {
                "source": source,
                "weights": weights.as_dict(),
            },
            indent=2,
        )
