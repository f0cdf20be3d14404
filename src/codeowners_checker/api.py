"""
CODEOWNERS Coverage Check

Main interface that runs one coverage check for a pull request event:
load the CODEOWNERS rules, list the changed files, find the uncovered
ones, report them and set the step's exit status.
"""

import argparse
import logging
from typing import List, Optional

from . import actions
from .config import AppConfig, ConfigurationError, setup_logging
from .coverage import PathMatcher, load_rules, check_coverage
from .formatting import format_uncovered_comment
from .github.client import GitHubClient, GitHubAPIError
from .github.context import ActionContext, read_required_context
from .models.coverage import CoverageReport
from .reporting import post_comment


logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_UNCOVERED = 1
EXIT_ERROR = 2


class CoverageCheckAPI:
    """
    Runs the coverage check.

    1. Read the token and pull request number
    2. Load CODEOWNERS patterns into a matcher
    3. Match every changed file against it and set the step outputs
    4. Comment on the pull request when files are uncovered
    """

    def __init__(self, config: Optional[AppConfig] = None, client: Optional[GitHubClient] = None):
        """
        Initialize the check.

        Args:
            config: Run configuration (default: read from the environment)
            client: GitHub client to use instead of one built from the token
        """
        self.config = config or AppConfig.from_env()
        self.client = client

    def run(self, context: Optional[ActionContext] = None) -> CoverageReport:
        """
        Check the pull request of the current workflow run.

        Args:
            context: Workflow context (default: built from the environment)

        Returns:
            CoverageReport for the pull request

        Raises:
            ConfigurationError: If the token, PR number, repository or
                CODEOWNERS file is missing
            GitHubAPIError: If listing files or commenting fails
        """
        if context is None:
            context = ActionContext.from_env()

        token, pr_number = read_required_context(context)
        owner, repo = context.repo
        logger.info(f"Checking CODEOWNERS coverage for {owner}/{repo}#{pr_number}")

        if self.client is None:
            self.client = GitHubClient(
                token,
                base_url=self.config.github.api_base_url,
                timeout_seconds=self.config.github.timeout_seconds
            )

        matcher = PathMatcher()
        load_rules(
            matcher,
            self.config.check.codeowners_path,
            skip_asterisk=self.config.check.skip_asterisk
        )

        changed_files = [
            f.filename for f in self.client.list_pull_request_files(owner, repo, pr_number)
        ]
        uncovered = check_coverage(matcher, changed_files)
        self._write_outputs(uncovered)

        comment = post_comment(
            uncovered, owner, repo, pr_number, self.client,
            enabled=self.config.check.post_comment
        )

        report = CoverageReport(
            repository=f"{owner}/{repo}",
            pr_number=pr_number,
            checked_files=changed_files,
            uncovered_files=uncovered,
            patterns_loaded=len(matcher),
            comment_posted=comment is not None,
        )
        return report

    def _write_outputs(self, uncovered: List[str]) -> None:
        actions.set_output('uncovered-count', str(len(uncovered)))
        actions.set_output('uncovered-files', "\n".join(uncovered))


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="codeowners-check",
        description="Fail when files changed in a pull request have no CODEOWNERS rule."
    )
    parser.add_argument(
        "--config",
        help="YAML configuration file; action inputs are used when omitted"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the check and return the process exit status."""
    args = _parse_args(argv)

    try:
        config = AppConfig.from_yaml(args.config) if args.config else AppConfig.from_env()
        config.validate()
        setup_logging(config.logging)

        report = CoverageCheckAPI(config).run()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        actions.error(f"Configuration error: {e}")
        return EXIT_ERROR
    except GitHubAPIError as e:
        logger.error(f"GitHub API error: {e}")
        actions.error(f"GitHub API error: {e}")
        return EXIT_ERROR

    if report.passed:
        logger.info(f"All {len(report.checked_files)} changed files have a CODEOWNER")
        return EXIT_PASSED

    actions.error(format_uncovered_comment(report.uncovered_files))
    return EXIT_UNCOVERED
