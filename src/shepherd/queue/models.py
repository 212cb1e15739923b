"""
Queue Models - Pydantic schemas for the persisted shepherd records.

Records are stored as camelCase JSON (``teamName``, ``resolvedAt``...) and
exposed in Python with snake_case attributes. Either spelling is accepted
on input.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def utc_now() -> str:
	"""Current time as an ISO-8601 UTC timestamp."""
	return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class SessionStatus(str, Enum):
	"""Lifecycle of a dispatched plan."""
	RUNNING = "running"
	COMPLETED = "completed"
	FAILED = "failed"


class VerificationStatus(str, Enum):
	"""State of a visual verification request."""
	PENDING = "pending"
	APPROVED = "approved"
	REJECTED = "rejected"


class Record(BaseModel):
	"""Base for every persisted record."""
	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		use_enum_values=True,
	)

	id: str

	def to_json_dict(self) -> dict:
		"""Serialize to the camelCase JSON document shape."""
		return self.model_dump(mode="json", by_alias=True)


class SessionMeta(Record):
	"""One dispatched plan and its CLI process."""
	team_name: str
	project_dir: str
	plan: str
	started_at: str = Field(default_factory=utc_now)
	status: SessionStatus = SessionStatus.RUNNING


class Artifact(BaseModel):
	"""A file or URL attached to a verification request."""
	type: Literal["file", "url"]
	path: Optional[str] = None
	url: Optional[str] = None

	@model_validator(mode="after")
	def _exactly_one_target(self) -> "Artifact":
		if (self.path is None) == (self.url is None):
			raise ValueError("artifact needs exactly one of path or url")
		if self.type == "file" and self.path is None:
			raise ValueError("file artifact needs a path")
		if self.type == "url" and self.url is None:
			raise ValueError("url artifact needs a url")
		return self


class VerificationRequest(Record):
	"""A human-in-the-loop gate raised by a teammate task."""
	session_id: str
	task_id: str
	requested_by: str
	requested_at: str = Field(default_factory=utc_now)
	type: Literal["visual"] = "visual"
	description: str
	artifacts: list[Artifact] = Field(default_factory=list)
	status: VerificationStatus = VerificationStatus.PENDING
	resolution: Optional[str] = None
	resolved_at: Optional[str] = None
	feedback: Optional[str] = None


class FeedbackEntry(Record):
	"""A note from the operator back to a running team. Immutable."""
	session_id: str
	verification_id: str
	content: str
	created_at: str = Field(default_factory=utc_now)
