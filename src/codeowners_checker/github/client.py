"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides the two calls a coverage check needs: listing the files of a
pull request and posting a comment on it.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from pydantic import ValidationError

from ..models.pull_request import PullRequestFile


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime, status_code: Optional[int] = None):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=status_code)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub REST client used by the coverage check.

    Reads are retried on transient server errors; writes such as comment
    creation are sent once and any failure is raised to the caller.
    """

    PER_PAGE = 100

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout_seconds: int = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (the workflow's GITHUB_TOKEN)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout_seconds: Per-request timeout
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=frozenset(['GET', 'HEAD']),
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'codeowners-checker/1.0'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Refuse to send requests while the rate limit is exhausted."""
        if self.rate_limit_remaining <= 0 and datetime.now() < self.rate_limit_reset:
            logger.warning(f"Rate limit exhausted until {self.rate_limit_reset}")
            raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout_seconds)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {method} {url}: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}")

        self._update_rate_limit(response)

        if response.status_code == 429 or (
            response.status_code == 403 and self.rate_limit_remaining == 0
        ):
            reset_time = datetime.fromtimestamp(
                int(response.headers.get('X-RateLimit-Reset', time.time() + 3600))
            )
            raise RateLimitExceeded(reset_time, status_code=response.status_code)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            if not isinstance(error_data, dict):
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def _parse_json(self, response: requests.Response):
        """Decode a response body, treating malformed JSON as an API error."""
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Malformed JSON from GitHub API: {e}")
            raise GitHubAPIError(
                f"Malformed JSON response: {e}",
                status_code=response.status_code
            )

    def list_pull_request_files(self, owner: str, repo: str, pr_number: int) -> List[PullRequestFile]:
        """
        Get files changed in a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            Changed files in API order
        """
        logger.info(f"Fetching PR files for {owner}/{repo}#{pr_number}")

        files = []
        page = 1

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{owner}/{repo}/pulls/{pr_number}/files',
                params={'page': page, 'per_page': self.PER_PAGE}
            )

            page_files = self._parse_json(response)
            if not page_files:
                break
            if not isinstance(page_files, list):
                raise GitHubAPIError(
                    "Unexpected PR files response: expected a JSON array",
                    status_code=response.status_code
                )

            try:
                files.extend(PullRequestFile(**item) for item in page_files)
            except (TypeError, ValidationError) as e:
                raise GitHubAPIError(
                    f"Unexpected PR file entry: {e}",
                    status_code=response.status_code
                )

            if len(page_files) < self.PER_PAGE:
                break

            page += 1

        logger.info(f"Found {len(files)} changed files")
        return files

    def create_issue_comment(self, owner: str, repo: str, issue_number: int, body: str) -> Dict:
        """
        Post a comment on an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue or pull request number
            body: Markdown comment body

        Returns:
            Created comment data
        """
        logger.info(f"Posting comment to {owner}/{repo}#{issue_number}")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/issues/{issue_number}/comments',
            json={'body': body}
        )
        return self._parse_json(response) if response.content else {}
