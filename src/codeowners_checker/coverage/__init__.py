"""
Coverage Engine

Builds a path matcher from CODEOWNERS rules and finds changed files
that no rule covers.
"""

from .matcher import PathMatcher
from .loader import load_rules, parse_rules
from .checker import check_coverage

__all__ = ['PathMatcher', 'load_rules', 'parse_rules', 'check_coverage']
