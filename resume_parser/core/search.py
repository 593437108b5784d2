"""
Job Search - Filters, paginates and sorts job postings.

The free-text search term goes through the fuzzy matcher so that
"front-end dev" finds "Frontend Developer".
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional
import math

from .fuzzy import DEFAULT_THRESHOLD, FuzzyMatcher
from .models import JobFilters, JobPosting


@dataclass
class SearchResults:
    items: list[JobPosting] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 0
    total_items: int = 0
    items_per_page: int = 50

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def pagination(self) -> dict:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }


class JobSearch:
    """Searches an in-memory list of job postings."""

    SORT_KEYS = {
        "posted_date": lambda job: job.posted_date.timestamp() if job.posted_date else 0,
        "salary": lambda job: job.salary_max or job.salary_min or 0,
        "title": lambda job: job.title.lower(),
        "company": lambda job: job.company.lower(),
    }

    def __init__(self, matcher: Optional[FuzzyMatcher] = None, threshold: float = DEFAULT_THRESHOLD):
        """
        Args:
            matcher: Fuzzy matcher used for search terms
            threshold: Word similarity needed for a term to match a description
        """
        self.matcher = matcher or FuzzyMatcher()
        self.threshold = threshold

    def matches_term(self, job: JobPosting, term: str) -> bool:
        """Check a search term against the searchable fields of a job."""
        term = term.strip()
        if not term:
            return True

        fields = [job.title, job.company, job.location, job.department, *job.requirements]
        if any(f and self.matcher.enhanced_match(f, term) for f in fields):
            return True

        return bool(job.description) and self.matcher.fuzzy_match(job.description, term, self.threshold)

    def matches_filters(self, job: JobPosting, filters: JobFilters) -> bool:
        if filters.types:
            wanted = {t.lower() for t in filters.types}
            type_ok = job.job_type.value.lower() in wanted or ("remote" in wanted and job.is_remote)
            if not type_ok:
                return False

        if filters.remote and not job.is_remote:
            return False

        if filters.location and filters.location.lower() not in job.location.lower():
            return False

        if filters.department and filters.department.lower() != job.department.lower():
            return False

        if filters.company and not self.matcher.enhanced_match(job.company, filters.company):
            return False

        if filters.salary_min is not None:
            top = job.salary_max or job.salary_min
            if top is None or top < filters.salary_min:
                return False

        if filters.salary_max is not None:
            bottom = job.salary_min or job.salary_max
            if bottom is None or bottom > filters.salary_max:
                return False

        if filters.posted_within_days is not None:
            if job.posted_date is None:
                return False
            now = datetime.now(job.posted_date.tzinfo)
            if now - job.posted_date > timedelta(days=filters.posted_within_days):
                return False

        return True

    def search(
        self,
        jobs: list[JobPosting],
        filters: Optional[JobFilters] = None,
        page: int = 1,
        limit: int = 50,
        sort_by: str = "posted_date",
        descending: bool = True,
    ) -> SearchResults:
        """
        Filter, sort and paginate jobs.

        Args:
            jobs: Jobs to search
            filters: Search term and field filters
            page: 1-based page number
            limit: Items per page
            sort_by: posted_date, salary, title or company
            descending: Sort direction

        Returns:
            SearchResults with the requested page
        """
        filters = filters or JobFilters()
        page = max(1, page)
        limit = max(1, limit)

        found = [
            job for job in jobs
            if self.matches_filters(job, filters) and self.matches_term(job, filters.search)
        ]

        key_func = self.SORT_KEYS.get(sort_by, self.SORT_KEYS["posted_date"])
        found.sort(key=key_func, reverse=descending)

        start = (page - 1) * limit
        return SearchResults(
            items=found[start:start + limit],
            current_page=page,
            total_pages=math.ceil(len(found) / limit),
            total_items=len(found),
            items_per_page=limit,
        )
