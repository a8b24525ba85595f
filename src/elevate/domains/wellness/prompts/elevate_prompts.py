"""MCP Prompts: interaction templates for Elevate results sessions."""

from __future__ import annotations

from fastmcp import FastMCP


def register_elevate_prompts(mcp: FastMCP) -> None:
    """Register Elevate MCP prompts."""

    @mcp.prompt()
    def elevate_results_review(horizon: str = "1y", workouts_per_week: int = 3) -> str:
        """Prompt template for walking a client through their Elevate results."""
        return f"""Walk me through my Elevate results. Please cover:

1. My four pillar scores (Exercise, Nutrition, Sleep, Stress) and my Peak score
2. My health age compared with my actual age, and what pushes it up or down
3. Any condition risks rated High or Very High, and which factors drive them
4. How my {horizon} projection changes if I train {workouts_per_week} times a week
5. One or two habits to focus on first

This is a coaching estimate, not a medical assessment."""
