"""
Reporting Layer

Publishes coverage results to the pull request.
"""

from .reporter import post_comment

__all__ = ['post_comment']
