"""
Application Tracker - Track applications and saved jobs.
"""

from .storage import StorageBackend, InMemoryStorage, JsonFileStorage
from .application_tracker import ApplicationTracker, ApplicationValidationError
from .saved_jobs import SavedJobs

__all__ = [
    "StorageBackend",
    "InMemoryStorage",
    "JsonFileStorage",
    "ApplicationTracker",
    "ApplicationValidationError",
    "SavedJobs",
]
