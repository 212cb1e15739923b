"""Configuration system using platformdirs for cross-platform paths."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs

from .paths import shepherd_root

APP_NAME = "shepherd"
APP_AUTHOR = "shepherd"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3847


@dataclass
class Config:
	"""Central configuration with XDG/platform conventions."""

	config_dir: Path = field(default_factory=lambda: Path(platformdirs.user_config_dir(APP_NAME)))

	# State root is owned by the path resolver (SHEPHERD_DATA_DIR or ~/.shepherd)
	data_dir: Path = field(init=False)
	log_dir: Path = field(init=False)

	# User-configurable
	host: str = DEFAULT_HOST
	port: int = DEFAULT_PORT
	cli_command: str = "claude"
	log_level: str = "INFO"

	def __post_init__(self) -> None:
		self.data_dir = Path(shepherd_root())
		self.log_dir = self.data_dir / "logs"

	@property
	def config_file(self) -> Path:
		return self.config_dir / "config.toml"

	def ensure_dirs(self) -> None:
		"""Create all required directories."""
		self.config_dir.mkdir(parents=True, exist_ok=True)
		self.data_dir.mkdir(parents=True, exist_ok=True)
		self.log_dir.mkdir(parents=True, exist_ok=True)


def _apply_env_overrides(config: Config) -> Config:
	"""Apply SHEPHERD_* environment variable overrides."""
	config_dir = os.getenv("SHEPHERD_CONFIG_DIR")
	if config_dir:
		config.config_dir = Path(config_dir)

	env_map = {
		"SHEPHERD_HOST": "host",
		"SHEPHERD_CLI_COMMAND": "cli_command",
		"SHEPHERD_LOG_LEVEL": "log_level",
	}
	for env_key, attr in env_map.items():
		val = os.getenv(env_key)
		if val:
			setattr(config, attr, val)

	port = os.getenv("SHEPHERD_PORT")
	if port:
		config.port = int(port)

	# Recompute derived paths after overrides
	config.__post_init__()
	return config


def _apply_toml(config: Config) -> Config:
	"""Apply config.toml overrides if file exists."""
	if not config.config_file.exists():
		return config

	with open(config.config_file, "rb") as f:
		data = tomllib.load(f)

	for key in ("host", "cli_command", "log_level"):
		if key in data:
			setattr(config, key, str(data[key]))
	if "port" in data:
		config.port = int(data["port"])

	config.__post_init__()
	return config


def load_config() -> Config:
	"""Load config with precedence: env vars > config.toml > defaults."""
	config = Config()
	config_dir = os.getenv("SHEPHERD_CONFIG_DIR")
	if config_dir:
		# config.toml is looked up in the overridden directory
		config.config_dir = Path(config_dir)
	config = _apply_toml(config)
	config = _apply_env_overrides(config)
	config.ensure_dirs()
	return config


# Singleton
_config: Config | None = None


def get_config() -> Config:
	"""Get or create the global config instance."""
	global _config
	if _config is None:
		_config = load_config()
	return _config
