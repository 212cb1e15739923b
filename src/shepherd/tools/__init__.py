"""MCP tool registration - modular tool definitions."""

import logging

from mcp.server.fastmcp import FastMCP

from ..services import Services
from .core import register_core_tools
from .dispatch import register_dispatch_tools
from .feedback import register_feedback_tools
from .verification import register_verification_tools

logger = logging.getLogger(__name__)


def register_all_tools(mcp: FastMCP, services: Services) -> None:
	"""Register all MCP tools against one shared Services instance."""
	register_core_tools(mcp, services)
	register_dispatch_tools(mcp, services)
	register_verification_tools(mcp, services)
	register_feedback_tools(mcp, services)
	logger.debug("Registered shepherd MCP tools")
