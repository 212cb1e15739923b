"""File-backed queue: sessions, verification requests and feedback."""

from .feedback import FeedbackStore
from .models import (
	Artifact,
	FeedbackEntry,
	SessionMeta,
	SessionStatus,
	VerificationRequest,
	VerificationStatus,
)
from .sessions import SessionStore
from .verification import VerificationStore

__all__ = [
	"Artifact",
	"FeedbackEntry",
	"FeedbackStore",
	"SessionMeta",
	"SessionStatus",
	"SessionStore",
	"VerificationRequest",
	"VerificationStatus",
	"VerificationStore",
]
