"""
Application Tracker - Records job applications and their status changes.
"""

from datetime import datetime
from typing import Optional
import csv
import logging

from resume_parser.core.models import (
    Application,
    ApplicationForm,
    ApplicationStatus,
    JobPosting,
    ParsedResumeData,
    SkillMatch,
)
from .storage import StorageBackend


class ApplicationValidationError(ValueError):
    """Raised when a submitted application form has invalid fields."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(errors.values()))


class ApplicationTracker:
    """Tracks job applications in an injected storage backend."""

    COLLECTION = "applications"

    def __init__(self, storage: StorageBackend):
        """
        Initialize the application tracker.

        Args:
            storage: Backend that persists application records
        """
        self.storage = storage
        self.logger = logging.getLogger(self.__class__.__name__)

    def submit(
        self,
        user_id: str,
        job: JobPosting,
        form: ApplicationForm,
        resume: Optional[ParsedResumeData] = None,
        match: Optional[SkillMatch] = None,
    ) -> Application:
        """
        Validate and record an application.

        Args:
            user_id: Applicant's user ID
            job: Job being applied to
            form: Submitted form fields
            resume: Parsed resume, used to prefill blank contact fields
            match: Skill match between resume and job

        Returns:
            The stored Application

        Raises:
            ApplicationValidationError: the form has missing or invalid fields
        """
        if resume is not None:
            form.prefill(resume)

        errors = form.validate()
        if errors:
            raise ApplicationValidationError(errors)

        application = Application(
            user_id=user_id,
            job_id=job.id,
            job_title=job.title,
            company=job.company,
            location=job.location,
            job_type=job.job_type.value,
            cover_letter=form.cover_letter,
            resume_filename=form.resume_filename,
            resume=resume,
            match=match,
        )

        self._save(application)
        self.logger.info(f"Added application: {job.title} at {job.company}")
        return application

    def get(self, application_id: str) -> Optional[Application]:
        """Get an application by ID."""
        record = self.storage.get(self.COLLECTION, application_id)
        return Application.from_dict(record) if record else None

    def list_all(self) -> list[Application]:
        applications = [Application.from_dict(r) for r in self.storage.list(self.COLLECTION)]
        return sorted(applications, key=lambda a: a.applied_at, reverse=True)

    def list_for_user(self, user_id: str) -> list[Application]:
        """Get a user's applications, newest first."""
        return [app for app in self.list_all() if app.user_id == user_id]

    def has_applied(self, user_id: str, job_id: str) -> bool:
        return any(app.job_id == job_id for app in self.list_for_user(user_id))

    def update_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        note: Optional[str] = None,
    ) -> Optional[Application]:
        """
        Update the status of an application.

        Returns:
            Updated Application or None if not found
        """
        application = self.get(application_id)
        if application is None:
            self.logger.warning(f"Application not found: {application_id}")
            return None

        old_status = application.status
        application.status = status
        application.last_updated = datetime.now()

        if note:
            application.notes.append(f"[{datetime.now().isoformat()}] {note}")

        self._save(application)
        self.logger.info(f"Updated {application.company}: {old_status.value} -> {status.value}")
        return application

    def add_note(self, application_id: str, note: str) -> Optional[Application]:
        application = self.get(application_id)
        if application is None:
            return None

        application.notes.append(f"[{datetime.now().isoformat()}] {note}")
        application.last_updated = datetime.now()
        self._save(application)
        return application

    def remove(self, application_id: str) -> bool:
        return self.storage.delete(self.COLLECTION, application_id)

    def get_statistics(self, user_id: Optional[str] = None) -> dict:
        """Get counts by status and the average skill match score."""
        applications = self.list_for_user(user_id) if user_id else self.list_all()
        total = len(applications)

        by_status = {}
        for status in ApplicationStatus:
            count = len([app for app in applications if app.status == status])
            if count > 0:
                by_status[status.value] = count

        scores = [app.match.score for app in applications if app.match]
        responded = len([app for app in applications if app.status != ApplicationStatus.PENDING])

        return {
            "total": total,
            "by_status": by_status,
            "average_match_score": sum(scores) / len(scores) if scores else 0,
            "response_rate": (responded / total * 100) if total else 0,
        }

    def export_to_csv(self, filepath: str, user_id: Optional[str] = None) -> str:
        """
        Export applications to CSV format.

        Returns:
            Path to the exported CSV file
        """
        applications = self.list_for_user(user_id) if user_id else self.list_all()

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow([
                "ID", "User", "Company", "Title", "Location", "Type", "Status",
                "Applied Date", "Match Score", "Matched Skills", "Missing Skills",
                "Resume",
            ])

            for app in applications:
                writer.writerow([
                    app.id,
                    app.user_id,
                    app.company,
                    app.job_title,
                    app.location,
                    app.job_type,
                    app.status.value,
                    app.applied_at.isoformat(),
                    f"{app.match.score:.1f}" if app.match else "",
                    ", ".join(app.match.matched_skills) if app.match else "",
                    ", ".join(app.match.missing_skills) if app.match else "",
                    app.resume_filename,
                ])

        self.logger.info(f"Exported {len(applications)} applications to {filepath}")
        return filepath

    def _save(self, application: Application) -> None:
        self.storage.put(self.COLLECTION, application.id, application.to_dict())
