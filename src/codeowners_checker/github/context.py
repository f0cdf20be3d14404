"""
Workflow Context

The event context GitHub Actions provides to a running step, and the
reader for the values a coverage check cannot run without.
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from pathlib import Path

from ..config import ConfigurationError


logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    """Event payload and repository identity of the current workflow run"""
    payload: Dict[str, Any] = field(default_factory=dict)
    event_name: str = ""
    repository: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ActionContext":
        """Build the context from the runner's environment."""
        payload: Dict[str, Any] = {}
        event_path = os.getenv("GITHUB_EVENT_PATH")
        if event_path:
            event_file = Path(event_path)
            if event_file.exists():
                try:
                    with open(event_file, 'r', encoding='utf-8') as f:
                        payload = json.load(f)
                except (OSError, ValueError) as e:
                    raise ConfigurationError(f"Failed to read event payload {event_path}: {e}")
                if not isinstance(payload, dict):
                    raise ConfigurationError(f"Event payload {event_path} is not a JSON object")
            else:
                logger.warning(f"GITHUB_EVENT_PATH {event_path} does not exist")

        return cls(
            payload=payload,
            event_name=os.getenv("GITHUB_EVENT_NAME", ""),
            repository=os.getenv("GITHUB_REPOSITORY") or None,
        )

    @property
    def repo(self) -> Tuple[str, str]:
        """(owner, repo) of the repository the workflow runs in"""
        if self.repository:
            owner, _, name = self.repository.partition('/')
            if owner and name:
                return owner, name

        repository = self.payload.get('repository') or {}
        owner = (repository.get('owner') or {}).get('login')
        name = repository.get('name')
        if owner and name:
            return owner, name

        raise ConfigurationError(
            "context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'"
        )


def read_required_context(context: Optional[ActionContext] = None) -> Tuple[str, int]:
    """
    Read the token and pull request number the check depends on.

    Args:
        context: Workflow context (default: built from the environment)

    Returns:
        Tuple of (token, pr_number)

    Raises:
        ConfigurationError: If either value is missing
    """
    token = os.getenv("GITHUB_TOKEN")
    if not token:
        raise ConfigurationError("Failed to read GITHUB_TOKEN")

    if context is None:
        context = ActionContext.from_env()

    pr_number = context.payload.get('number')
    if isinstance(pr_number, bool) or not isinstance(pr_number, int):
        raise ConfigurationError(
            "Failed to read pull request number from the event payload; "
            "the workflow must be triggered by a pull_request event"
        )
    if pr_number <= 0:
        raise ConfigurationError(f"Invalid pull request number in the event payload: {pr_number}")

    return token, pr_number
