"""
Data Models

Core data models of the coverage checker
"""

from .pull_request import PullRequestFile
from .coverage import CoverageReport

__all__ = [
    "PullRequestFile",
    "CoverageReport",
]
