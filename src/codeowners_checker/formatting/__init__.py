"""
Formatting Layer

Renders coverage results as GitHub comment Markdown.
"""

from .github import format_uncovered_comment, COMMENT_HEADER

__all__ = ['format_uncovered_comment', 'COMMENT_HEADER']
