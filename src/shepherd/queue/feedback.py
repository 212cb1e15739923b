"""Operator feedback entries: ``feedback/<id>.json``."""

import logging
from pathlib import Path
from typing import Optional

from ..paths import feedback_dir
from .base import JsonStore
from .models import FeedbackEntry

logger = logging.getLogger(__name__)


class FeedbackStore(JsonStore[FeedbackEntry]):
	"""Append-only: entries are never updated or deleted."""

	model = FeedbackEntry

	def directory(self) -> Path:
		return Path(feedback_dir())

	async def create(
		self,
		id: str,
		session_id: str,
		verification_id: str,
		content: str,
	) -> FeedbackEntry:
		entry = FeedbackEntry(
			id=id,
			session_id=session_id,
			verification_id=verification_id,
			content=content,
		)
		await self._write(entry)
		logger.info(f"Recorded feedback {id} for verification {verification_id}")
		return entry

	async def list(self, session_id: Optional[str] = None) -> list[FeedbackEntry]:
		return await self._list(session_id=session_id)
