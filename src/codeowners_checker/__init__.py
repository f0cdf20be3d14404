"""
CODEOWNERS Coverage Checker

GitHub Actions check that every file changed in a pull request is
covered by a CODEOWNERS rule
"""

__version__ = "1.0.0"

from .api import CoverageCheckAPI, main

__all__ = ["CoverageCheckAPI", "main"]
