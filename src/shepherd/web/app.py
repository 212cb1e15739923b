"""Starlette app with route assembly."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.routing import BaseRoute, Route

from ..services import Services
from .api import (
	api_create_feedback,
	api_feedback,
	api_health,
	api_session_detail,
	api_sessions,
	api_submit_verification,
	api_verifications,
)


def api_routes() -> list[BaseRoute]:
	"""Dashboard API routes."""
	return [
		Route("/health", api_health),
		Route("/sessions", api_sessions),
		Route("/sessions/{id}", api_session_detail),
		Route("/verifications", api_verifications),
		Route("/verifications/{id}/submit", api_submit_verification, methods=["POST"]),
		Route("/feedback", api_feedback, methods=["GET"]),
		Route("/feedback", api_create_feedback, methods=["POST"]),
	]


def build_app(services: Services) -> Starlette:
	"""Build the dashboard-only ASGI app (no MCP endpoint)."""
	app = Starlette(routes=api_routes())
	app.state.services = services
	return app
