"""
Coverage Checker
"""

import logging
from typing import Iterable, List

from .matcher import PathMatcher


logger = logging.getLogger(__name__)


def check_coverage(matcher: PathMatcher, paths: Iterable[str]) -> List[str]:
    """Return the paths no pattern matches, in input order."""
    uncovered = []
    checked = 0

    for path in paths:
        checked += 1
        if not matcher.matches(path):
            logger.debug(f"No CODEOWNERS rule covers {path}")
            uncovered.append(path)

    logger.info(f"Checked {checked} files, {len(uncovered)} uncovered")
    return uncovered
