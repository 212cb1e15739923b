"""
Process Supervisor - owns the CLI processes spawned by this server.

Responsibilities:
- Resolve the ``claude`` executable once and cache it
- Spawn ``claude -p <plan>`` with agent teams enabled
- Stream stdout/stderr chunks into ``sessions/<id>/log.jsonl``
- Drop the handle exactly once when the process exits

The handle map only knows about processes started by this instance; it is
not rebuilt from disk on restart.
"""

import asyncio
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Awaitable, Callable, Optional

from .paths import session_log_path
from .queue.models import utc_now

logger = logging.getLogger(__name__)

# Set when running inside a Claude session; the CLI refuses to nest under it
NESTING_GUARD_ENV = "CLAUDECODE"
AGENT_TEAMS_ENV = "CLAUDE_CODE_EXPERIMENTAL_AGENT_TEAMS"

ExitCallback = Callable[[str, Optional[int]], Awaitable[None]]


def build_child_env() -> dict[str, str]:
	"""Host environment minus the nesting guard, plus the agent teams flag."""
	env = {k: v for k, v in os.environ.items() if k != NESTING_GUARD_ENV}
	env[AGENT_TEAMS_ENV] = "1"
	return env


def _append_line(path: str, line: str) -> None:
	with open(path, "a", encoding="utf-8") as f:
		f.write(line + "\n")


class ProcessSupervisor:
	"""
	Maps session IDs to live CLI processes.

	Usage:
		supervisor = ProcessSupervisor(command="claude")
		process = await supervisor.spawn(session_id, plan, project_dir)
		supervisor.is_alive(session_id)
	"""

	CHUNK_SIZE = 64 * 1024

	def __init__(
		self,
		command: str = "claude",
		on_exit: Optional[ExitCallback] = None,
	):
		"""
		Initialize the supervisor.

		Args:
			command: CLI executable name or path
			on_exit: Callback(session_id, returncode) after a process ends.
				returncode is None when the process never started.
		"""
		self.command = command
		self.on_exit = on_exit

		self._processes: dict[str, asyncio.subprocess.Process] = {}
		self._watchers: dict[str, asyncio.Task] = {}
		self._lock = asyncio.Lock()
		self._executable: Optional[str] = None

	def resolve_executable(self) -> str:
		"""Find the full path to the CLI. Resolved once, then cached."""
		if self._executable is None:
			found = shutil.which(self.command)
			if found is None:
				logger.warning(f"{self.command} not found on PATH, using bare command name")
			self._executable = found or self.command
		return self._executable

	def get_active(self, session_id: str) -> Optional[asyncio.subprocess.Process]:
		return self._processes.get(session_id)

	def is_alive(self, session_id: str) -> bool:
		process = self._processes.get(session_id)
		return process is not None and process.returncode is None

	def list_active_ids(self) -> list[str]:
		return list(self._processes)

	async def spawn(
		self,
		session_id: str,
		plan: str,
		project_dir: str,
	) -> Optional[asyncio.subprocess.Process]:
		"""
		Start the CLI for a session and return without waiting for it.

		Spawn failures are written to the session log and reported through
		``on_exit``; they are never raised.
		"""
		log_path = session_log_path(session_id)
		exe = self.resolve_executable()

		try:
			process = await asyncio.create_subprocess_exec(
				exe, "-p", plan,
				cwd=project_dir,
				env=build_child_env(),
				stdin=asyncio.subprocess.DEVNULL,
				stdout=asyncio.subprocess.PIPE,
				stderr=asyncio.subprocess.PIPE,
			)
		# ValueError: NUL byte in the plan or project dir
		except (OSError, ValueError) as e:
			logger.error(f"Session {session_id}: spawn failed: {e}")
			await self._log(log_path, "system", f"Spawn error: {e}")
			await self._notify_exit(session_id, None)
			return None

		async with self._lock:
			self._processes[session_id] = process
			self._watchers[session_id] = asyncio.create_task(
				self._watch(session_id, process, log_path)
			)

		logger.info(f"Session {session_id}: started {exe} (pid {process.pid}) in {project_dir}")
		return process

	async def wait(self, session_id: str) -> Optional[int]:
		"""Wait for a session's process to finish and its exit to be handled."""
		watcher = self._watchers.get(session_id)
		if watcher is None:
			return None
		return await asyncio.shield(watcher)

	async def shutdown(self) -> None:
		"""Terminate processes still running when the server stops."""
		for session_id in self.list_active_ids():
			process = self._processes.get(session_id)
			if process is not None and process.returncode is None:
				logger.info(f"Session {session_id}: terminating pid {process.pid}")
				try:
					process.terminate()
				except ProcessLookupError:
					pass
		watchers = list(self._watchers.values())
		if watchers:
			await asyncio.gather(*watchers, return_exceptions=True)

	async def _watch(
		self,
		session_id: str,
		process: asyncio.subprocess.Process,
		log_path: str,
	) -> Optional[int]:
		returncode: Optional[int] = None
		try:
			await asyncio.gather(
				self._pump(process.stdout, "stdout", log_path),
				self._pump(process.stderr, "stderr", log_path),
			)
			returncode = await process.wait()
			await self._log(log_path, "system", f"Process exited with code {returncode}")
			logger.info(f"Session {session_id}: process exited with code {returncode}")
		finally:
			async with self._lock:
				self._processes.pop(session_id, None)
				self._watchers.pop(session_id, None)

		await self._notify_exit(session_id, returncode)
		return returncode

	async def _pump(
		self,
		stream: Optional[asyncio.StreamReader],
		name: str,
		log_path: str,
	) -> None:
		if stream is None:
			return
		while True:
			chunk = await stream.read(self.CHUNK_SIZE)
			if not chunk:
				break
			await self._log(log_path, name, chunk.decode("utf-8", errors="replace"))

	async def _log(self, log_path: str, stream: str, data: str) -> None:
		line = json.dumps({
			"timestamp": utc_now(),
			"stream": stream,
			"data": data.rstrip(),
		})
		try:
			await asyncio.to_thread(_append_line, log_path, line)
		except OSError as e:
			# Log dir may not exist yet - non-fatal
			logger.debug(f"Dropped log line for {Path(log_path).parent.name}: {e}")

	async def _notify_exit(self, session_id: str, returncode: Optional[int]) -> None:
		if self.on_exit is None:
			return
		try:
			await self.on_exit(session_id, returncode)
		except Exception as e:
			logger.error(f"Session {session_id}: exit handler failed: {e}")
