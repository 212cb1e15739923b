"""HTTP surface for the human-facing verification dashboard."""

from .app import api_routes, build_app

__all__ = ["api_routes", "build_app"]
