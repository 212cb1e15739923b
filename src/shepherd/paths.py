"""On-disk layout for all shepherd state.

Everything lives under one root (``~/.shepherd`` unless ``SHEPHERD_DATA_DIR``
is set). Paths are stored inside JSON payloads, so they are always
normalized to forward slashes.
"""

import asyncio
import os
from pathlib import Path

DATA_DIR_ENV = "SHEPHERD_DATA_DIR"

SESSIONS_SUBDIR = "sessions"
VERIFICATION_SUBDIR = "verification-queue"
FEEDBACK_SUBDIR = "feedback"


def normalize(p: str | os.PathLike[str]) -> str:
	"""Normalize a path to forward slashes (Windows compat for JSON storage)."""
	return os.fspath(p).replace("\\", "/")


def shepherd_root() -> str:
	"""Base directory for all state. Override with SHEPHERD_DATA_DIR for testing."""
	return normalize(os.getenv(DATA_DIR_ENV) or Path.home() / ".shepherd")


def sessions_dir() -> str:
	return normalize(Path(shepherd_root()) / SESSIONS_SUBDIR)


def verification_dir() -> str:
	return normalize(Path(shepherd_root()) / VERIFICATION_SUBDIR)


def feedback_dir() -> str:
	return normalize(Path(shepherd_root()) / FEEDBACK_SUBDIR)


def check_record_id(record_id: str) -> str:
	"""Reject identifiers that would escape their store directory."""
	if (
		not isinstance(record_id, str)
		or not record_id
		or "/" in record_id
		or "\\" in record_id
		or ".." in record_id
	):
		raise ValueError(f"Invalid record id: {record_id!r}")
	return record_id


def session_dir(session_id: str) -> str:
	return normalize(Path(sessions_dir()) / check_record_id(session_id))


def session_meta_path(session_id: str) -> str:
	return normalize(Path(session_dir(session_id)) / "meta.json")


def session_log_path(session_id: str) -> str:
	return normalize(Path(session_dir(session_id)) / "log.jsonl")


def _mkdir(path: str) -> None:
	Path(path).mkdir(parents=True, exist_ok=True)


async def ensure_dirs() -> None:
	"""Ensure all shepherd subdirectories exist. Safe to call repeatedly."""
	await asyncio.gather(
		asyncio.to_thread(_mkdir, sessions_dir()),
		asyncio.to_thread(_mkdir, verification_dir()),
		asyncio.to_thread(_mkdir, feedback_dir()),
	)
