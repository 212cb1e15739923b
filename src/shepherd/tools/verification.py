"""Verification queue tools."""

import json
from typing import Literal

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..services import Services


def register_verification_tools(mcp: FastMCP, services: Services) -> None:
	"""Register verification queue tools."""

	@mcp.tool(name="get-verification-queue")
	async def get_verification_queue(
		status: Literal["pending", "approved", "rejected", "all"] = "pending",
		sessionId: str = "",
	) -> str:
		"""
		List visual verification requests from agent team teammates.

		Each request includes artifacts (files, URLs) that need human
		visual inspection.

		Args:
			status: Filter by verification status (default: pending)
			sessionId: Filter by session ID
		"""
		queue = await services.verifications.list(
			status=status,
			session_id=sessionId or None,
		)
		return json.dumps({
			"filter": {"status": status, "sessionId": sessionId or None},
			"count": len(queue),
			"queue": [r.to_json_dict() for r in queue],
		}, indent=2)

	@mcp.tool(name="submit-verification")
	async def submit_verification(
		verificationId: str,
		status: Literal["approved", "rejected"],
		resolution: str,
		feedback: str = "",
	) -> str:
		"""
		Approve or reject a visual verification request.

		Updates the request status so the teammate's TaskCompleted hook
		can proceed.

		Args:
			verificationId: The verification request ID to resolve
			status: Whether the visual check passed or failed
			resolution: Brief explanation of the verification result
			feedback: Detailed feedback for the teammate (only needed for rejections)
		"""
		try:
			updated = await services.verifications.update(
				verificationId,
				status=status,
				resolution=resolution,
				feedback=feedback or None,
			)
		except ValidationError as e:
			return json.dumps({"error": f"Invalid verification update: {e.errors()[0]['msg']}"})

		if not updated:
			return json.dumps({"error": f"Verification {verificationId} not found"})
		return json.dumps(updated.to_json_dict(), indent=2)
