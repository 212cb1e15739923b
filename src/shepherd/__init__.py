"""shepherd - dispatch plans to Claude Code agent teams and keep a human in the loop."""

__version__ = "0.1.0"
