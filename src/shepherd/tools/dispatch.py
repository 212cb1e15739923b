"""Dispatch and team status tools."""

import json

from mcp.server.fastmcp import FastMCP

from ..queue.models import VerificationStatus
from ..services import Services
from ..teams import read_team_status


def register_dispatch_tools(mcp: FastMCP, services: Services) -> None:
	"""Register plan dispatch and status polling tools."""

	@mcp.tool(name="dispatch-plan")
	async def dispatch_plan(plan: str, projectDir: str, teamName: str = "") -> str:
		"""
		Dispatch a plan to a Claude Code CLI agent team.

		Spawns a CLI lead with agent teams enabled and returns a session ID
		for tracking. Does not wait for the team to finish.

		Args:
			plan: The plan to dispatch to the agent team
			projectDir: Absolute path to the project directory
			teamName: Optional name for the agent team
		"""
		summary = await services.orchestrator.dispatch(
			plan=plan,
			project_dir=projectDir,
			team_name=teamName or None,
		)
		return json.dumps(summary, indent=2)

	@mcp.tool(name="get-team-status")
	async def get_team_status(sessionId: str) -> str:
		"""
		Get the current status of an agent team session.

		Includes whether the CLI process is still running, the team's task
		files and the number of pending verification requests.

		Args:
			sessionId: The session ID returned by dispatch-plan
		"""
		session = await services.sessions.get(sessionId)
		if not session:
			return json.dumps({"error": f"Session {sessionId} not found"})

		team_status = await read_team_status(session.project_dir)
		pending = await services.verifications.list(
			status=VerificationStatus.PENDING,
			session_id=sessionId,
		)

		data = session.to_json_dict()
		result = {
			"sessionId": data["id"],
			"teamName": data["teamName"],
			"projectDir": data["projectDir"],
			"status": data["status"],
			"startedAt": data["startedAt"],
			"cliProcessRunning": services.supervisor.is_alive(sessionId),
			"tasks": team_status.tasks,
			"pendingVerifications": len(pending),
		}
		if team_status.errors:
			result["taskReadErrors"] = team_status.errors
		return json.dumps(result, indent=2)
