"""Services container - built once at startup, shared by every handler."""

from dataclasses import dataclass

from .config import Config
from .dispatch import SessionOrchestrator
from .queue import FeedbackStore, SessionStore, VerificationStore
from .supervisor import ProcessSupervisor


@dataclass
class Services:
	"""Everything the MCP tools and HTTP handlers need."""
	config: Config
	sessions: SessionStore
	verifications: VerificationStore
	feedback: FeedbackStore
	supervisor: ProcessSupervisor
	orchestrator: SessionOrchestrator


def build_services(config: Config) -> Services:
	"""Wire stores, supervisor and orchestrator together."""
	sessions = SessionStore()
	supervisor = ProcessSupervisor(command=config.cli_command)
	return Services(
		config=config,
		sessions=sessions,
		verifications=VerificationStore(),
		feedback=FeedbackStore(),
		supervisor=supervisor,
		orchestrator=SessionOrchestrator(sessions, supervisor),
	)
