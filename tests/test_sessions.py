"""Tests for the session store."""

import json
from pathlib import Path

import pytest

from shepherd.paths import session_meta_path
from shepherd.queue import SessionStatus, SessionStore


@pytest.fixture
def store() -> SessionStore:
	return SessionStore()


class TestSessionStore:

	@pytest.mark.asyncio
	async def test_create_and_get(self, store: SessionStore):
		created = await store.create(
			id="s1", team_name="frontend", project_dir="/work/app", plan="build X",
		)
		assert created.status == SessionStatus.RUNNING
		assert created.started_at

		read = await store.get("s1")
		assert read == created

	@pytest.mark.asyncio
	async def test_meta_is_camel_case_json(self, store: SessionStore):
		await store.create(id="s1", team_name="frontend", project_dir="/work/app", plan="build X")

		data = json.loads(Path(session_meta_path("s1")).read_text())
		assert data == {
			"id": "s1",
			"teamName": "frontend",
			"projectDir": "/work/app",
			"plan": "build X",
			"startedAt": data["startedAt"],
			"status": "running",
		}

	@pytest.mark.asyncio
	async def test_get_missing_returns_none(self, store: SessionStore):
		assert await store.get("nope") is None

	@pytest.mark.asyncio
	async def test_get_corrupt_returns_none(self, store: SessionStore):
		await store.create(id="s1", team_name="t", project_dir="/p", plan="x")
		Path(session_meta_path("s1")).write_text("{not json")
		assert await store.get("s1") is None

	@pytest.mark.asyncio
	async def test_update_status(self, store: SessionStore):
		await store.create(id="s1", team_name="t", project_dir="/p", plan="build X")

		updated = await store.update("s1", status="completed")
		assert updated is not None
		assert updated.status == "completed"

		read = await store.get("s1")
		assert read.status == "completed"
		assert read.plan == "build X"

	@pytest.mark.asyncio
	async def test_update_missing_returns_none(self, store: SessionStore):
		assert await store.update("nope", status="failed") is None

	@pytest.mark.asyncio
	async def test_create_overwrites_existing_id(self, store: SessionStore):
		await store.create(id="s1", team_name="first", project_dir="/p", plan="a")
		await store.create(id="s1", team_name="second", project_dir="/p", plan="b")

		read = await store.get("s1")
		assert read.team_name == "second"
		assert len(await store.list()) == 1

	@pytest.mark.asyncio
	async def test_list_skips_unreadable_entries(self, store: SessionStore, data_root: Path):
		await store.create(id="s1", team_name="t", project_dir="/p", plan="a")
		await store.create(id="s2", team_name="t", project_dir="/p", plan="b")
		# A session dir without meta.json and a stray file are both ignored
		(data_root / "sessions" / "orphan").mkdir()
		(data_root / "sessions" / "stray.txt").write_text("x")

		sessions = await store.list()
		assert {s.id for s in sessions} == {"s1", "s2"}

	@pytest.mark.asyncio
	async def test_list_filters_by_status(self, store: SessionStore):
		await store.create(id="s1", team_name="t", project_dir="/p", plan="a")
		await store.create(id="s2", team_name="t", project_dir="/p", plan="b")
		await store.update("s2", status="failed")

		failed = await store.list(status="failed")
		assert [s.id for s in failed] == ["s2"]

	@pytest.mark.asyncio
	async def test_list_without_directory_is_empty(
		self, store: SessionStore, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
	):
		monkeypatch.setenv("SHEPHERD_DATA_DIR", str(tmp_path / "never-created"))
		assert await store.list() == []
