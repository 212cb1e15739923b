"""Tests for the dashboard HTTP API."""

import asyncio
from pathlib import Path

import pytest
from starlette.testclient import TestClient

from shepherd.services import Services
from shepherd.web.app import build_app
from tests.helpers import make_services

ARTIFACTS = [
	{"type": "url", "url": "http://localhost:5173/login"},
	{"type": "file", "path": "/shots/login.png"},
]


async def _seed(services: Services, project_dir: Path) -> None:
	await services.sessions.create(id="s1", team_name="alpha", project_dir=str(project_dir), plan="build X")
	await services.sessions.create(id="s2", team_name="beta", project_dir=str(project_dir), plan="build Y")
	for vid, sid in (("v1", "s1"), ("v2", "s2"), ("v3", "s2")):
		await services.verifications.create(
			id=vid, session_id=sid, task_id="t1", requested_by="frontend",
			description="Check login", artifacts=ARTIFACTS,
		)
	await services.verifications.update("v3", status="approved", resolution="ok")
	await services.feedback.create(id="f1", session_id="s1", verification_id="v1", content="a")
	await services.feedback.create(id="f2", session_id="s2", verification_id="v2", content="b")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
	path = tmp_path / "project"
	(path / ".claude" / "tasks").mkdir(parents=True)
	(path / ".claude" / "tasks" / "1.json").write_text('{"id": "1"}')
	return path


@pytest.fixture
def client(project_dir: Path) -> TestClient:
	services = make_services()
	asyncio.run(_seed(services, project_dir))
	return TestClient(build_app(services))


def test_health(client: TestClient):
	resp = client.get("/health")
	assert resp.status_code == 200
	assert resp.json() == {"status": "ok", "activeSessions": 0}


def test_list_sessions(client: TestClient):
	resp = client.get("/sessions")
	assert resp.status_code == 200
	assert {s["id"] for s in resp.json()} == {"s1", "s2"}
	assert all(s["status"] == "running" for s in resp.json())


def test_session_detail(client: TestClient, project_dir: Path):
	resp = client.get("/sessions/s1")
	assert resp.status_code == 200
	body = resp.json()
	assert body["id"] == "s1"
	assert body["teamName"] == "alpha"
	assert body["processAlive"] is False
	assert body["teamStatus"]["tasks"] == [{"id": "1"}]
	assert body["teamStatus"]["errors"] == []


def test_session_detail_not_found(client: TestClient):
	resp = client.get("/sessions/nope")
	assert resp.status_code == 404
	assert resp.json() == {"error": "Session not found"}


def test_list_verifications_filters(client: TestClient):
	assert len(client.get("/verifications").json()) == 3

	pending = client.get("/verifications", params={"status": "pending"}).json()
	assert {v["id"] for v in pending} == {"v1", "v2"}

	both = client.get("/verifications", params={"status": "pending", "sessionId": "s2"}).json()
	assert [v["id"] for v in both] == ["v2"]


def test_submit_verification(client: TestClient):
	resp = client.post("/verifications/v1/submit", json={
		"status": "rejected",
		"resolution": "broken",
		"feedback": "overlap on mobile",
	})
	assert resp.status_code == 200
	body = resp.json()
	assert body["status"] == "rejected"
	assert body["resolvedAt"] is not None
	assert body["feedback"] == "overlap on mobile"

	pending = client.get("/verifications", params={"status": "pending"}).json()
	assert [v["id"] for v in pending] == ["v2"]


def test_submit_verification_not_found(client: TestClient):
	resp = client.post("/verifications/nope/submit", json={"status": "approved", "resolution": "ok"})
	assert resp.status_code == 404


def test_submit_verification_invalid_status(client: TestClient):
	resp = client.post("/verifications/v1/submit", json={"status": "maybe"})
	assert resp.status_code == 400
	assert "error" in resp.json()


def test_list_feedback_filters(client: TestClient):
	assert len(client.get("/feedback").json()) == 2
	entries = client.get("/feedback", params={"sessionId": "s2"}).json()
	assert [e["id"] for e in entries] == ["f2"]


def test_create_feedback(client: TestClient):
	resp = client.post("/feedback", json={
		"id": "f3", "sessionId": "s1", "verificationId": "v1", "content": "Use brand blue",
	})
	assert resp.status_code == 200
	assert resp.json()["createdAt"]
	assert len(client.get("/feedback", params={"sessionId": "s1"}).json()) == 2


@pytest.mark.parametrize("missing", ["id", "sessionId", "verificationId", "content"])
def test_create_feedback_missing_field(client: TestClient, missing: str):
	body = {"id": "f3", "sessionId": "s1", "verificationId": "v1", "content": "x"}
	del body[missing]
	resp = client.post("/feedback", json=body)
	assert resp.status_code == 400
	assert resp.json()["error"].startswith("Missing required fields")


@pytest.mark.parametrize("bad_id", ["../sessions/s1/meta", "..\\evil", "a..b"])
def test_create_feedback_rejects_path_like_id(client: TestClient, bad_id: str):
	resp = client.post("/feedback", json={
		"id": bad_id, "sessionId": "s1", "verificationId": "v1", "content": "x",
	})
	assert resp.status_code == 400
	assert "Invalid record id" in resp.json()["error"]

	# The session document next door is untouched
	detail = client.get("/sessions/s1")
	assert detail.status_code == 200
	assert detail.json()["teamName"] == "alpha"


def test_submit_verification_rejects_path_like_id(client: TestClient):
	resp = client.post("/verifications/a..b/submit", json={"status": "approved"})
	assert resp.status_code == 400
