"""
GitHub Integration Layer

This module provides the GitHub API client and the workflow context
reader used by the coverage check.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .context import ActionContext, read_required_context

__all__ = [
    'GitHubClient',
    'GitHubAPIError',
    'RateLimitExceeded',
    'ActionContext',
    'read_required_context',
]
