"""Shared pytest fixtures: every test gets its own data root."""

from pathlib import Path

import pytest

from shepherd.paths import FEEDBACK_SUBDIR, SESSIONS_SUBDIR, VERIFICATION_SUBDIR


@pytest.fixture(autouse=True)
def data_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	"""Point SHEPHERD_DATA_DIR at a fresh directory with the queue subdirs created."""
	root = tmp_path / "shepherd-data"
	for sub in (SESSIONS_SUBDIR, VERIFICATION_SUBDIR, FEEDBACK_SUBDIR):
		(root / sub).mkdir(parents=True)
	monkeypatch.setenv("SHEPHERD_DATA_DIR", str(root))
	monkeypatch.setenv("SHEPHERD_CONFIG_DIR", str(tmp_path / "config"))
	monkeypatch.delenv("CLAUDECODE", raising=False)
	return root
