"""
Jobs API client for the job-search platform backend.

The backend wraps every response in an envelope:
    {"success": bool, "data": ..., "message": str}
"""

from typing import Optional
import logging

import requests
from bs4 import BeautifulSoup

from resume_parser.core.errors import JobsApiError
from resume_parser.core.models import JobFilters, JobPosting


DEFAULT_BASE_URL = "http://localhost:3001/api"


def html_to_text(html: str) -> str:
    """Flatten an HTML job description to plain text."""
    if not html or "<" not in html:
        return html or ""
    soup = BeautifulSoup(html, "html.parser")
    return soup.get_text(" ", strip=True)


class JobsApiClient:
    """Reads jobs and manages saved jobs through the platform REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})
        self.logger = logging.getLogger(self.__class__.__name__)

    def _request(self, method: str, endpoint: str, **kwargs):
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise JobsApiError(f"Request to {endpoint} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            message = payload.get("message") or f"API request failed ({response.status_code})"
            raise JobsApiError(message, status_code=response.status_code)

        if not payload.get("success"):
            raise JobsApiError(payload.get("message") or "API request failed", response.status_code)

        return payload.get("data")

    def _to_job(self, data: dict) -> JobPosting:
        job = JobPosting.from_dict(data)
        job.description = html_to_text(job.description)
        return job

    def get_jobs(
        self,
        filters: Optional[JobFilters] = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[JobPosting], dict]:
        """
        Fetch a page of jobs.

        Returns:
            Tuple of (jobs, pagination) where pagination is the API's
            pagination object
        """
        params = (filters or JobFilters()).to_params()
        params.update({"page": page, "limit": limit})

        data = self._request("GET", "/jobs", params=params) or {}
        jobs = [self._to_job(item) for item in data.get("data", [])]
        self.logger.info(f"Fetched {len(jobs)} jobs (page {page})")

        return jobs, data.get("pagination", {})

    def get_job(self, job_id: str) -> JobPosting:
        data = self._request("GET", f"/jobs/{job_id}")
        if not data:
            raise JobsApiError("Job not found", status_code=404)
        return self._to_job(data)

    def get_saved_jobs(self) -> list[JobPosting]:
        data = self._request("GET", "/jobs/saved") or []
        return [self._to_job(item) for item in data]

    def save_job(self, job_id: str) -> None:
        self._request("POST", "/jobs/save", json={"jobId": job_id})

    def unsave_job(self, job_id: str) -> None:
        self._request("DELETE", f"/jobs/save/{job_id}")
