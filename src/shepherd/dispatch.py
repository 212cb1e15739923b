"""Session Orchestrator - the one write path that couples a session to a process."""

import logging
import uuid
from typing import Optional

from .paths import ensure_dirs
from .queue.models import SessionStatus
from .queue.sessions import SessionStore
from .supervisor import ProcessSupervisor

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAME = "default"


class SessionOrchestrator:
	"""Dispatches plans: persist the session, then launch its CLI."""

	def __init__(self, sessions: SessionStore, supervisor: ProcessSupervisor):
		self.sessions = sessions
		self.supervisor = supervisor
		self.supervisor.on_exit = self.handle_exit

	async def dispatch(
		self,
		plan: str,
		project_dir: str,
		team_name: Optional[str] = None,
	) -> dict:
		"""
		Create a running session and spawn its CLI process.

		Does not wait for the process. Spawn failures show up in the
		session log and status, not in the returned summary.

		Returns:
			Public session summary (camelCase keys)
		"""
		session_id = str(uuid.uuid4())

		await ensure_dirs()

		session = await self.sessions.create(
			id=session_id,
			team_name=team_name or DEFAULT_TEAM_NAME,
			project_dir=project_dir,
			plan=plan,
		)

		await self.supervisor.spawn(session_id, plan, project_dir)

		data = session.to_json_dict()
		return {
			"sessionId": data["id"],
			"status": data["status"],
			"teamName": data["teamName"],
			"projectDir": data["projectDir"],
			"startedAt": data["startedAt"],
		}

	async def handle_exit(self, session_id: str, returncode: Optional[int]) -> None:
		"""Settle a running session once its process is gone."""
		session = await self.sessions.get(session_id)
		if session is None or session.status != SessionStatus.RUNNING:
			return
		status = SessionStatus.COMPLETED if returncode == 0 else SessionStatus.FAILED
		await self.sessions.update(session_id, status=status)
		logger.info(f"Session {session_id} marked {status.value}")
