"""Shared test fixtures and helpers for shepherd tests."""

import json
import stat
from pathlib import Path
from typing import Callable

from shepherd.config import Config
from shepherd.services import Services, build_services

# Stand-in for the claude CLI: echoes its plan and the env it was given
FAKE_CLI = """#!/bin/sh
echo "plan: $2"
echo "teams: $CLAUDE_CODE_EXPERIMENTAL_AGENT_TEAMS"
echo "guard: ${CLAUDECODE:-unset}"
echo "cwd: $(pwd)"
echo "warning from cli" >&2
exit ${FAKE_EXIT_CODE:-0}
"""


def make_fake_cli(directory: Path) -> Path:
	"""Write an executable fake CLI script and return its path."""
	script = directory / "fake-claude"
	script.write_text(FAKE_CLI)
	script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
	return script


def make_services(cli_command: str = "claude") -> Services:
	"""Services wired against the current SHEPHERD_DATA_DIR."""
	return build_services(Config(cli_command=cli_command))


def read_log(log_path: str | Path) -> list[dict]:
	"""Parse a session log.jsonl into records."""
	return [json.loads(line) for line in Path(log_path).read_text().splitlines() if line]


def stream_text(records: list[dict], stream: str) -> str:
	"""Concatenate the data of every record from one stream."""
	return "\n".join(r["data"] for r in records if r["stream"] == stream)


def capture_tools(services: Services, register_fn: Callable) -> dict:
	"""Register tools on a mock MCP and return the captured tool functions.

	Args:
		services: Services instance to pass to the registration function
		register_fn: The registration function (e.g., register_dispatch_tools)

	Returns:
		Dict mapping tool name to the tool function
	"""
	captured = {}

	class MockMCP:
		def tool(self, name: str | None = None, **kwargs):
			def decorator(fn):
				captured[name or fn.__name__] = fn
				return fn
			return decorator

	register_fn(MockMCP(), services)
	return captured
