"""
Coverage Data Models

Result of one coverage check run
"""

from dataclasses import dataclass
from typing import List


@dataclass
class CoverageReport:
    """Outcome of checking a pull request against CODEOWNERS"""
    repository: str
    pr_number: int
    checked_files: List[str]
    uncovered_files: List[str]
    patterns_loaded: int
    comment_posted: bool = False

    def __post_init__(self):
        """Validate fields"""
        if self.pr_number <= 0:
            raise ValueError("PR number must be positive")
        if '/' not in self.repository:
            raise ValueError("Repository must be in format 'owner/repo'")
        if self.patterns_loaded < 0:
            raise ValueError("Pattern count must be non-negative")
        unknown = set(self.uncovered_files) - set(self.checked_files)
        if unknown:
            raise ValueError(f"Uncovered files were never checked: {sorted(unknown)}")

    @property
    def passed(self) -> bool:
        """True when every checked file is covered"""
        return not self.uncovered_files

    @property
    def covered_files(self) -> List[str]:
        uncovered = set(self.uncovered_files)
        return [f for f in self.checked_files if f not in uncovered]
