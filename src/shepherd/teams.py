"""
Agent teams filesystem reader.

Agent teams keep task state in ``{project_dir}/.claude/tasks/``. The format
is experimental and undocumented, so it is read defensively and returned as
raw dicts. If the storage format changes, only this module needs updating.
"""

import asyncio
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .paths import normalize

logger = logging.getLogger(__name__)

TASKS_SUBDIR = (".claude", "tasks")

TeamTask = dict[str, Any]


@dataclass
class TeamStatus:
	"""Snapshot of a project's agent team tasks."""
	project_dir: str
	tasks_dir: str
	tasks: list[TeamTask] = field(default_factory=list)
	# Files that couldn't be parsed
	errors: list[str] = field(default_factory=list)

	def to_dict(self) -> dict:
		"""Convert to camelCase dict for JSON responses."""
		data = asdict(self)
		return {
			"projectDir": data["project_dir"],
			"tasksDir": data["tasks_dir"],
			"tasks": data["tasks"],
			"errors": data["errors"],
		}


def _load_json(path: Path) -> TeamTask:
	return json.loads(path.read_text(encoding="utf-8"))


def _scan(project_dir: str) -> TeamStatus:
	tasks_dir = Path(project_dir).joinpath(*TASKS_SUBDIR)
	status = TeamStatus(project_dir=normalize(project_dir), tasks_dir=normalize(tasks_dir))

	try:
		entries = sorted(tasks_dir.iterdir())
	except OSError:
		# Missing directory: the team hasn't written any tasks yet
		return status

	for entry in entries:
		try:
			if entry.is_file() and entry.suffix == ".json":
				status.tasks.append(_load_json(entry))
			elif entry.is_dir():
				# Teams may nest task data one level deep
				for sub in sorted(entry.iterdir()):
					if sub.suffix != ".json":
						continue
					try:
						status.tasks.append(_load_json(sub))
					except (OSError, ValueError):
						status.errors.append(normalize(sub))
		except (OSError, ValueError):
			status.errors.append(normalize(entry))

	return status


async def read_team_status(project_dir: str) -> TeamStatus:
	"""Read agent team task state from a project directory. Never raises."""
	try:
		return await asyncio.to_thread(_scan, project_dir)
	except Exception as e:
		logger.warning(f"Team status scan failed for {project_dir}: {e}")
		return TeamStatus(
			project_dir=normalize(project_dir),
			tasks_dir=normalize(Path(project_dir).joinpath(*TASKS_SUBDIR)),
		)
