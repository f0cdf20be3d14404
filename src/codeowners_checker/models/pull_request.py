"""
Pull Request Data Models

Entries of the GitHub "list pull request files" response
"""

from typing import Optional
from pydantic import BaseModel, field_validator


class PullRequestFile(BaseModel):
    """A file changed in a pull request"""
    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    previous_filename: Optional[str] = None

    @field_validator('filename')
    @classmethod
    def filename_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("filename cannot be empty")
        return v

    @property
    def is_removed(self) -> bool:
        return self.status == 'removed'
