"""Shared file-backed JSON document storage.

One JSON document per record, one directory per record kind. All disk I/O
runs off the event loop. Read failures are swallowed per record. Write
failures propagate to the caller.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar

from ..paths import check_record_id
from .models import Record

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


def _read_text(path: Path) -> str:
	return path.read_text(encoding="utf-8")


def _write_text(path: Path, text: str) -> None:
	path.write_text(text, encoding="utf-8")


class JsonStore(Generic[R]):
	"""
	Base class for the record stores.

	Subclasses set ``model`` and implement ``directory()`` and
	``document_path()``; ``_list_ids()`` can be overridden when records are
	not flat ``<id>.json`` files.
	"""

	model: type[R]

	def directory(self) -> Path:
		raise NotImplementedError

	def document_path(self, record_id: str) -> Path:
		return self.directory() / f"{check_record_id(record_id)}.json"

	async def _write(self, record: R) -> R:
		text = json.dumps(record.to_json_dict(), indent=2)
		await asyncio.to_thread(_write_text, self.document_path(record.id), text)
		return record

	async def get(self, record_id: str) -> Optional[R]:
		"""Load a record. Missing or unparsable documents read as absent."""
		try:
			raw = await asyncio.to_thread(_read_text, self.document_path(record_id))
			return self.model.model_validate(json.loads(raw))
		except (OSError, ValueError) as e:
			logger.debug(f"Could not read {self.model.__name__} {record_id}: {e}")
			return None

	async def _update(self, record_id: str, updates: dict[str, Any]) -> Optional[R]:
		"""Get-then-write merge of caller-supplied fields. Last writer wins."""
		current = await self.get(record_id)
		if current is None:
			return None
		merged = {**current.model_dump(), **updates}
		self._apply_derived(current, updates, merged)
		updated = self.model.model_validate(merged)
		return await self._write(updated)

	def _apply_derived(self, current: R, updates: dict[str, Any], merged: dict[str, Any]) -> None:
		"""Hook for derived-field rules on update."""

	def _list_ids(self) -> list[str]:
		return [
			p.name[: -len(".json")]
			for p in self.directory().iterdir()
			if p.name.endswith(".json")
		]

	async def _list(self, **filters: Any) -> list[R]:
		"""All readable records matching every non-None filter exactly."""
		try:
			ids = await asyncio.to_thread(self._list_ids)
		except OSError as e:
			logger.debug(f"{self.model.__name__} store unavailable: {e}")
			return []

		results = await asyncio.gather(*(self.get(record_id) for record_id in ids))
		records = [r for r in results if r is not None]
		for attr, expected in filters.items():
			if expected is None:
				continue
			records = [r for r in records if getattr(r, attr) == expected]
		return records
