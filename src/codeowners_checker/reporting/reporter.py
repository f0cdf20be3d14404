"""
Pull Request Reporter

Posts the uncovered-file list back to the pull request.
"""

import logging
from typing import Dict, List, Optional

from ..actions import get_boolean_input
from ..formatting.github import format_uncovered_comment
from ..github.client import GitHubClient


logger = logging.getLogger(__name__)


def post_comment(
    uncovered_files: List[str],
    owner: str,
    repo: str,
    pr_number: int,
    client: GitHubClient,
    enabled: Optional[bool] = None
) -> Optional[Dict]:
    """
    Comment on the pull request listing files without a CODEOWNER.

    Args:
        uncovered_files: Files no rule covers
        owner: Repository owner
        repo: Repository name
        pr_number: Pull request number
        client: Authenticated GitHub client
        enabled: Whether to post; read from the POST_COMMENT input
            when not given

    Returns:
        Created comment data, or None when nothing was posted

    Raises:
        GitHubAPIError: If the comment could not be created
    """
    if not uncovered_files:
        return None

    if enabled is None:
        enabled = get_boolean_input("POST_COMMENT")

    if not enabled:
        logger.info("POST_COMMENT disabled, not commenting")
        return None

    body = format_uncovered_comment(uncovered_files)
    return client.create_issue_comment(owner, repo, pr_number, body)
