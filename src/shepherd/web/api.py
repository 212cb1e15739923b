"""JSON API endpoints for the verification dashboard."""

from __future__ import annotations

import json

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..paths import check_record_id
from ..services import Services
from ..teams import read_team_status

FEEDBACK_FIELDS = ("id", "sessionId", "verificationId", "content")
SUBMIT_FIELDS = ("status", "resolution", "feedback")


def get_services(request: Request) -> Services:
	"""Get the shared Services from app state."""
	return request.app.state.services


def _error(message: str, status_code: int) -> JSONResponse:
	return JSONResponse({"error": message}, status_code=status_code)


async def _json_body(request: Request) -> dict | None:
	try:
		body = await request.json()
	except json.JSONDecodeError:
		return None
	return body if isinstance(body, dict) else None


async def api_health(request: Request) -> JSONResponse:
	services = get_services(request)
	return JSONResponse({
		"status": "ok",
		"activeSessions": len(services.supervisor.list_active_ids()),
	})


async def api_sessions(request: Request) -> JSONResponse:
	"""All sessions."""
	sessions = await get_services(request).sessions.list()
	return JSONResponse([s.to_json_dict() for s in sessions])


async def api_session_detail(request: Request) -> JSONResponse:
	"""One session merged with its team status and process liveness."""
	services = get_services(request)
	session = await services.sessions.get(request.path_params["id"])
	if not session:
		return _error("Session not found", 404)

	team_status = await read_team_status(session.project_dir)
	return JSONResponse({
		**session.to_json_dict(),
		"teamStatus": team_status.to_dict(),
		"processAlive": services.supervisor.is_alive(session.id),
	})


async def api_verifications(request: Request) -> JSONResponse:
	"""Verification requests filtered by ?status= and ?sessionId=."""
	verifications = await get_services(request).verifications.list(
		status=request.query_params.get("status") or None,
		session_id=request.query_params.get("sessionId") or None,
	)
	return JSONResponse([v.to_json_dict() for v in verifications])


async def api_submit_verification(request: Request) -> JSONResponse:
	"""Resolve a verification request."""
	body = await _json_body(request)
	if body is None:
		return _error("Request body must be a JSON object", 400)

	updates = {key: body[key] for key in SUBMIT_FIELDS if key in body}
	try:
		check_record_id(request.path_params["id"])
		updated = await get_services(request).verifications.update(
			request.path_params["id"], **updates
		)
	except ValidationError as e:
		return _error(f"Invalid verification update: {e.errors()[0]['msg']}", 400)
	except ValueError as e:
		return _error(str(e), 400)

	if not updated:
		return _error("Verification not found", 404)
	return JSONResponse(updated.to_json_dict())


async def api_feedback(request: Request) -> JSONResponse:
	"""Feedback entries filtered by ?sessionId=."""
	entries = await get_services(request).feedback.list(
		session_id=request.query_params.get("sessionId") or None,
	)
	return JSONResponse([e.to_json_dict() for e in entries])


async def api_create_feedback(request: Request) -> JSONResponse:
	"""Record a feedback entry. All fields are required."""
	body = await _json_body(request)
	if body is None or not all(body.get(key) for key in FEEDBACK_FIELDS):
		return _error(f"Missing required fields: {', '.join(FEEDBACK_FIELDS)}", 400)

	try:
		check_record_id(body["id"])
		entry = await get_services(request).feedback.create(
			id=body["id"],
			session_id=body["sessionId"],
			verification_id=body["verificationId"],
			content=body["content"],
		)
	except ValidationError as e:
		return _error(f"Invalid feedback entry: {e.errors()[0]['msg']}", 400)
	except ValueError as e:
		return _error(str(e), 400)
	return JSONResponse(entry.to_json_dict())
