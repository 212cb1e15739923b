"""shepherd MCP server and combined HTTP app."""

import contextlib
import logging
from collections.abc import AsyncIterator

from mcp.server.fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.routing import Mount

from .config import Config, get_config
from .paths import ensure_dirs
from .services import Services, build_services
from .tools import register_all_tools
from .web import api_routes

logger = logging.getLogger(__name__)


def create_mcp(services: Services) -> FastMCP:
	"""Create the FastMCP server with every tool registered."""
	mcp = FastMCP("shepherd")
	register_all_tools(mcp, services)
	return mcp


def create_http_app(config: Config | None = None) -> Starlette:
	"""
	Build the ASGI app served by ``shepherd serve``.

	Routes:
		/mcp                      MCP streamable HTTP transport
		/health, /sessions, ...   dashboard JSON API
	"""
	services = build_services(config or get_config())
	mcp = create_mcp(services)
	mcp_app = mcp.streamable_http_app()

	@contextlib.asynccontextmanager
	async def lifespan(app: Starlette) -> AsyncIterator[None]:
		await ensure_dirs()
		try:
			async with mcp.session_manager.run():
				logger.info("shepherd ready")
				yield
		finally:
			await services.supervisor.shutdown()

	app = Starlette(
		routes=[*api_routes(), Mount("/", app=mcp_app)],
		lifespan=lifespan,
	)
	app.state.services = services
	return app
