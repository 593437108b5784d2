"""
Saved Jobs - Per-user job bookmarks.
"""

import logging
import urllib.parse

from resume_parser.core.models import SavedJob
from .storage import StorageBackend


class SavedJobs:
    """Stores the jobs each user has bookmarked."""

    COLLECTION = "saved_jobs"

    def __init__(self, storage: StorageBackend):
        self.storage = storage
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def _key(user_id: str, job_id: str) -> str:
        return f"{urllib.parse.quote(user_id, safe='')}:{urllib.parse.quote(job_id, safe='')}"

    def save(self, user_id: str, job_id: str) -> SavedJob:
        """Bookmark a job. Saving an already saved job keeps the first timestamp."""
        key = self._key(user_id, job_id)
        existing = self.storage.get(self.COLLECTION, key)
        if existing:
            return SavedJob.from_dict(existing)

        saved = SavedJob(job_id=job_id, user_id=user_id)
        self.storage.put(self.COLLECTION, key, saved.to_dict())
        self.logger.debug(f"User {user_id} saved job {job_id}")
        return saved

    def unsave(self, user_id: str, job_id: str) -> bool:
        return self.storage.delete(self.COLLECTION, self._key(user_id, job_id))

    def is_saved(self, user_id: str, job_id: str) -> bool:
        return self.storage.get(self.COLLECTION, self._key(user_id, job_id)) is not None

    def list(self, user_id: str) -> list[SavedJob]:
        """A user's saved jobs, oldest first."""
        saved = [
            SavedJob.from_dict(record)
            for record in self.storage.list(self.COLLECTION)
            if record.get("user_id") == user_id
        ]
        return sorted(saved, key=lambda s: s.saved_at)

    def count(self, user_id: str) -> int:
        return len(self.list(user_id))
