"""CLI for shepherd: serve, doctor, sessions and queue commands."""

import argparse
import asyncio
import shutil
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import load_config
from .logging_config import setup_logging
from .paths import ensure_dirs, feedback_dir, sessions_dir, shepherd_root, verification_dir
from .queue import SessionStore, VerificationStore

console = Console()


def _version() -> str:
	try:
		return pkg_version("shepherd-mcp")
	except PackageNotFoundError:
		from . import __version__
		return __version__


def cmd_serve(args: argparse.Namespace) -> None:
	"""Run the MCP server (HTTP with dashboard API, or stdio)."""
	config = load_config()
	if args.host:
		config.host = args.host
	if args.port:
		config.port = args.port
	setup_logging(config.log_level, config.log_dir)

	if args.stdio:
		from .server import create_mcp
		from .services import build_services

		asyncio.run(ensure_dirs())
		create_mcp(build_services(config)).run()
		return

	import uvicorn

	from .server import create_http_app

	app = create_http_app(config)
	print(f"Shepherd MCP server running on http://{config.host}:{config.port}", file=sys.stderr)
	print(f"  MCP endpoint: POST http://{config.host}:{config.port}/mcp", file=sys.stderr)
	print(f"  Health check: GET http://{config.host}:{config.port}/health", file=sys.stderr)
	uvicorn.run(app, host=config.host, port=config.port, log_level="warning")


def cmd_doctor(args: argparse.Namespace) -> None:
	"""Check CLI availability, data directories and config."""
	config = load_config()
	ok = True

	console.print(f"shepherd {_version()}")
	console.print(f"  Data root: {shepherd_root()}")
	console.print(f"  Config:    {config.config_file}", end="")
	console.print(" (found)" if config.config_file.exists() else " (defaults)")

	exe = shutil.which(config.cli_command)
	if exe:
		console.print(f"  [green]OK[/green]   {config.cli_command} -> {exe}")
	else:
		console.print(f"  [red]FAIL[/red] {config.cli_command} not found on PATH")
		ok = False

	asyncio.run(ensure_dirs())
	for label, path in (
		("sessions", sessions_dir()),
		("verification-queue", verification_dir()),
		("feedback", feedback_dir()),
	):
		if Path(path).is_dir():
			console.print(f"  [green]OK[/green]   {label}: {path}")
		else:
			console.print(f"  [red]FAIL[/red] {label}: {path}")
			ok = False

	if not ok:
		sys.exit(1)


def cmd_sessions(args: argparse.Namespace) -> None:
	"""List recorded sessions."""
	sessions = asyncio.run(SessionStore().list(status=args.status))
	sessions.sort(key=lambda s: s.started_at, reverse=True)

	table = Table(title=f"Sessions ({len(sessions)})")
	table.add_column("ID", style="cyan", no_wrap=True)
	table.add_column("Team")
	table.add_column("Status")
	table.add_column("Started")
	table.add_column("Project", overflow="fold")
	for s in sessions:
		table.add_row(s.id, s.team_name, s.status, s.started_at, s.project_dir)
	console.print(table)


def cmd_queue(args: argparse.Namespace) -> None:
	"""List verification requests."""
	queue = asyncio.run(VerificationStore().list(status=args.status, session_id=args.session))
	queue.sort(key=lambda r: r.requested_at)

	table = Table(title=f"Verification queue ({len(queue)})")
	table.add_column("ID", style="cyan", no_wrap=True)
	table.add_column("Session", no_wrap=True)
	table.add_column("Status")
	table.add_column("Requested by")
	table.add_column("Description", overflow="fold")
	table.add_column("Artifacts", justify="right")
	for r in queue:
		table.add_row(r.id, r.session_id, r.status, r.requested_by, r.description, str(len(r.artifacts)))
	console.print(table)


def main() -> None:
	"""CLI entry point."""
	parser = argparse.ArgumentParser(
		prog="shepherd",
		description="Dispatch plans to Claude Code agent teams and review their verification requests",
	)
	parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
	subparsers = parser.add_subparsers(dest="command")

	# serve
	serve_parser = subparsers.add_parser("serve", help="Run MCP server (HTTP + dashboard API)")
	serve_parser.add_argument("--stdio", action="store_true", help="Use the stdio MCP transport instead")
	serve_parser.add_argument("--host", type=str, default=None, help="Bind address (default: 127.0.0.1)")
	serve_parser.add_argument("--port", type=int, default=None, help="Server port (default: 3847)")
	serve_parser.set_defaults(func=cmd_serve)

	# doctor
	doctor_parser = subparsers.add_parser("doctor", help="Health check")
	doctor_parser.set_defaults(func=cmd_doctor)

	# sessions
	sessions_parser = subparsers.add_parser("sessions", help="List dispatched sessions")
	sessions_parser.add_argument(
		"--status", choices=["running", "completed", "failed"], default=None, help="Filter by status",
	)
	sessions_parser.set_defaults(func=cmd_sessions)

	# queue
	queue_parser = subparsers.add_parser("queue", help="List verification requests")
	queue_parser.add_argument(
		"--status", choices=["pending", "approved", "rejected", "all"], default="pending",
		help="Filter by status (default: pending)",
	)
	queue_parser.add_argument("--session", type=str, default=None, help="Filter by session ID")
	queue_parser.set_defaults(func=cmd_queue)

	args = parser.parse_args()

	if not args.command:
		parser.print_help()
		sys.exit(1)

	args.func(args)


if __name__ == "__main__":
	main()
