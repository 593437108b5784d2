"""
External services: Claude for resume extraction and the jobs REST API.
"""

from .claude import ClaudeResumeExtractor
from .jobs_api import JobsApiClient

__all__ = [
    "ClaudeResumeExtractor",
    "JobsApiClient",
]
