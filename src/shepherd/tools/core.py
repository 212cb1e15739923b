"""Core health check tool."""

import json
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from ..paths import feedback_dir, sessions_dir, shepherd_root, verification_dir
from ..services import Services


def register_core_tools(mcp: FastMCP, services: Services) -> None:
	"""Register core tools."""

	@mcp.tool()
	async def health_check() -> str:
		"""
		Check the health of the shepherd server.
		Returns status of all components.
		"""
		status = {
			"server": "running",
			"data_dir": shepherd_root(),
			"config_dir": str(services.config.config_dir),
			"cli_executable": services.supervisor.resolve_executable(),
			"dirs_ready": all(
				Path(d).is_dir() for d in (sessions_dir(), verification_dir(), feedback_dir())
			),
			"active_sessions": services.supervisor.list_active_ids(),
		}
		return json.dumps(status, indent=2)
