"""Visual verification queue: ``verification-queue/<id>.json``."""

import logging
from pathlib import Path
from typing import Any, Optional

from ..paths import verification_dir
from .base import JsonStore
from .models import Artifact, VerificationRequest, VerificationStatus, utc_now

logger = logging.getLogger(__name__)

# Sentinel for "field not supplied", since None is a meaningful value here
_UNSET: Any = object()


class VerificationStore(JsonStore[VerificationRequest]):
	"""Pending, approved and rejected verification requests."""

	model = VerificationRequest

	def directory(self) -> Path:
		return Path(verification_dir())

	async def create(
		self,
		id: str,
		session_id: str,
		task_id: str,
		requested_by: str,
		description: str,
		artifacts: list[Artifact | dict],
		type: str = "visual",
	) -> VerificationRequest:
		"""Queue a new request in ``pending`` state with no resolution."""
		request = VerificationRequest(
			id=id,
			session_id=session_id,
			task_id=task_id,
			requested_by=requested_by,
			type=type,
			description=description,
			artifacts=artifacts,
		)
		await self._write(request)
		logger.info(f"Queued verification {id} for session {session_id}")
		return request

	async def update(
		self,
		id: str,
		status: VerificationStatus | str = _UNSET,
		resolution: Optional[str] = _UNSET,
		feedback: Optional[str] = _UNSET,
	) -> Optional[VerificationRequest]:
		"""
		Merge the supplied fields into a request.

		Moving to any status other than ``pending`` stamps ``resolved_at``,
		even when the request was already resolved.
		"""
		updates = {
			key: value
			for key, value in (("status", status), ("resolution", resolution), ("feedback", feedback))
			if value is not _UNSET
		}
		return await self._update(id, updates)

	def _apply_derived(
		self,
		current: VerificationRequest,
		updates: dict[str, Any],
		merged: dict[str, Any],
	) -> None:
		status = updates.get("status")
		if status is not None and status != VerificationStatus.PENDING:
			merged["resolved_at"] = utc_now()

	async def list(
		self,
		status: VerificationStatus | str | None = None,
		session_id: Optional[str] = None,
	) -> list[VerificationRequest]:
		"""Filter the queue. ``status="all"`` disables the status filter."""
		if status == "all":
			status = None
		return await self._list(status=status, session_id=session_id)
