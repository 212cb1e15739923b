"""Operator feedback tool."""

import json
import uuid

from mcp.server.fastmcp import FastMCP

from ..services import Services


def register_feedback_tools(mcp: FastMCP, services: Services) -> None:
	"""Register feedback tools."""

	@mcp.tool(name="send-feedback")
	async def send_feedback(verificationId: str, sessionId: str, content: str) -> str:
		"""
		Send feedback or corrections to a CLI teammate.

		The teammate's TeammateIdle hook will pick this up.

		Args:
			verificationId: The verification request this feedback relates to
			sessionId: The session ID of the agent team
			content: Corrections, notes, or instructions for the teammate
		"""
		entry = await services.feedback.create(
			id=str(uuid.uuid4()),
			session_id=sessionId,
			verification_id=verificationId,
			content=content,
		)
		return json.dumps(entry.to_json_dict(), indent=2)
