"""
CODEOWNERS Rule Loader

Reads a CODEOWNERS file and feeds the glob portion of every rule into
a PathMatcher. Owner annotations are dropped; only coverage matters.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..actions import get_boolean_input
from ..config import ConfigurationError, DEFAULT_CODEOWNERS_PATH
from .matcher import PathMatcher


logger = logging.getLogger(__name__)

WILDCARD_PATTERN = "*"


def parse_rules(text: str, skip_asterisk: bool = False) -> List[str]:
    """
    Extract glob patterns from CODEOWNERS content.

    Args:
        text: Full file content
        skip_asterisk: Drop rules whose pattern is exactly '*'

    Returns:
        Patterns in file order, duplicates kept
    """
    patterns = []

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue

        pattern = line.split()[0]
        if skip_asterisk and pattern == WILDCARD_PATTERN:
            logger.warning(f"Skipping wildcard rule on line {line_number}")
            continue

        logger.debug(f"Line {line_number}: pattern {pattern}")
        patterns.append(pattern)

    return patterns


def load_rules(
    matcher: PathMatcher,
    rules_file_path: Optional[str] = None,
    skip_asterisk: Optional[bool] = None
) -> None:
    """
    Populate a matcher from a CODEOWNERS file.

    Args:
        matcher: Matcher to add patterns to
        rules_file_path: File to read (default: .github/CODEOWNERS)
        skip_asterisk: Drop bare '*' rules; read from the SKIP_ASTERISK
            input when not given

    Raises:
        ConfigurationError: If the file is missing, not a regular file,
            or not readable as UTF-8 text
    """
    path = rules_file_path or DEFAULT_CODEOWNERS_PATH
    rules_file = Path(path)
    if not rules_file.exists():
        raise ConfigurationError(f"CODEOWNERS file {path} not exist.")
    if not rules_file.is_file():
        raise ConfigurationError(f"CODEOWNERS file {path} is not a regular file.")

    try:
        text = rules_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"CODEOWNERS file {path} cannot be read: {e}")

    if skip_asterisk is None:
        skip_asterisk = get_boolean_input("SKIP_ASTERISK")
    patterns = parse_rules(text, skip_asterisk=skip_asterisk)

    for pattern in patterns:
        matcher.add(pattern)

    logger.info(f"Loaded {len(patterns)} patterns from {path}")
