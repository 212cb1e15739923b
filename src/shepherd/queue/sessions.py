"""Session metadata store: ``sessions/<id>/meta.json``."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from ..paths import session_dir, session_meta_path, sessions_dir
from .base import JsonStore
from .models import SessionMeta, SessionStatus

logger = logging.getLogger(__name__)


class SessionStore(JsonStore[SessionMeta]):
	"""One directory per session, holding ``meta.json`` and the process log."""

	model = SessionMeta

	def directory(self) -> Path:
		return Path(sessions_dir())

	def document_path(self, record_id: str) -> Path:
		return Path(session_meta_path(record_id))

	def _list_ids(self) -> list[str]:
		return [p.name for p in self.directory().iterdir()]

	async def create(
		self,
		id: str,
		team_name: str,
		project_dir: str,
		plan: str,
	) -> SessionMeta:
		"""Persist a new session in ``running`` state."""
		session = SessionMeta(
			id=id,
			team_name=team_name,
			project_dir=project_dir,
			plan=plan,
		)
		await asyncio.to_thread(Path(session_dir(id)).mkdir, parents=True, exist_ok=True)
		await self._write(session)
		logger.info(f"Created session {id} for team {team_name}")
		return session

	async def update(
		self,
		id: str,
		status: SessionStatus | str,
	) -> Optional[SessionMeta]:
		"""Set the session status. Returns None if the session does not exist."""
		return await self._update(id, {"status": status})

	async def list(self, status: SessionStatus | str | None = None) -> list[SessionMeta]:
		return await self._list(status=status)
