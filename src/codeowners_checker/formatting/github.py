"""
GitHub Comment Formatter

Renders the list of uncovered files as a pull request comment body.
"""

import logging
from typing import List


logger = logging.getLogger(__name__)

COMMENT_HEADER = "The following files do not have CODEOWNER"
MAX_COMMENT_LENGTH = 65536  # GitHub's comment limit


def format_uncovered_comment(files: List[str], max_length: int = MAX_COMMENT_LENGTH) -> str:
    """
    Build the Markdown body listing uncovered files.

    Args:
        files: Uncovered file paths, in report order
        max_length: Longest body GitHub will accept

    Returns:
        Header line followed by one '- <path>' item per file. When the
        body would exceed max_length, items are dropped from the end and
        a '- ... and N more' line closes the list.
    """
    lines = [COMMENT_HEADER] + [f"- {path}" for path in files]
    body = "\n".join(lines)
    if len(body) <= max_length:
        return body

    reserve = len(f"\n- ... and {len(files)} more")
    kept = [COMMENT_HEADER]
    length = len(COMMENT_HEADER)
    for item in lines[1:]:
        if length + 1 + len(item) + reserve > max_length:
            break
        kept.append(item)
        length += 1 + len(item)

    omitted = len(files) - (len(kept) - 1)
    kept.append(f"- ... and {omitted} more")
    logger.warning(f"Comment truncated, {omitted} files omitted")
    return "\n".join(kept)
