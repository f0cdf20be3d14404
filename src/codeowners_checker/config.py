"""
Configuration Management

Settings for a single coverage check run, read from the GitHub Actions
environment or from a YAML file.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import logging


DEFAULT_CODEOWNERS_PATH = ".github/CODEOWNERS"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigurationError(ValueError):
    """Missing or invalid configuration; the check run cannot proceed."""


@dataclass
class GitHubConfig:
    """GitHub API settings"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass
class CheckConfig:
    """Coverage check settings"""
    codeowners_path: str = DEFAULT_CODEOWNERS_PATH
    skip_asterisk: bool = False
    post_comment: bool = False


@dataclass
class LoggingConfig:
    """Logging settings"""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """Complete configuration of a check run"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load settings from environment variables and action inputs."""
        # Imported here: actions raises ConfigurationError from this module
        from .actions import get_input, get_boolean_input

        debug = (
            os.getenv("RUNNER_DEBUG", "") == "1"
            or os.getenv("DEBUG", "false").lower() == "true"
        )
        timeout = os.getenv("GITHUB_TIMEOUT", "30")
        try:
            timeout_seconds = int(timeout)
        except ValueError:
            raise ConfigurationError(f"GITHUB_TIMEOUT must be an integer, got {timeout!r}")

        return cls(
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                timeout_seconds=timeout_seconds,
            ),
            check=CheckConfig(
                codeowners_path=get_input("CODEOWNERS_PATH") or DEFAULT_CODEOWNERS_PATH,
                skip_asterisk=get_boolean_input("SKIP_ASTERISK"),
                post_comment=get_boolean_input("POST_COMMENT"),
            ),
            logging=LoggingConfig(
                level="DEBUG" if debug else os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
                file_path=os.getenv("LOG_FILE"),
            ),
            debug=debug,
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """Load settings from a YAML file."""
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        try:
            return cls(
                github=GitHubConfig(**(config_data.get('github') or {})),
                check=CheckConfig(**(config_data.get('check') or {})),
                logging=LoggingConfig(**(config_data.get('logging') or {})),
                debug=config_data.get('debug', False),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}")

    def validate(self) -> None:
        """Check settings, raising ConfigurationError listing every problem."""
        errors = []

        if not isinstance(self.check.codeowners_path, str) or not self.check.codeowners_path.strip():
            errors.append("CODEOWNERS path cannot be empty")

        timeout = self.github.timeout_seconds
        if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
            errors.append("GitHub timeout must be a positive integer")

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dict"""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # token intentionally left out
            },
            'check': {
                'codeowners_path': self.check.codeowners_path,
                'skip_asterisk': self.check.skip_asterisk,
                'post_comment': self.check.post_comment,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger."""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    if config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger().addHandler(handler)
