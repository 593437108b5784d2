"""
Core data models for resume parsing, job search and application tracking.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional
import mimetypes
import re
import uuid


MAX_RAW_TEXT_LENGTH = 2000
MAX_SUMMARY_LENGTH = 500
MAX_EXPERIENCE_ENTRIES = 10
MAX_EDUCATION_ENTRIES = 5


def _parse_datetime(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _non_blank(entries) -> tuple:
    return tuple(entry for entry in entries if entry and entry.strip())


@dataclass(frozen=True)
class UploadedFile:
    """A file handed to the parser by a form handler or the CLI."""
    content: bytes
    content_type: str = ""
    filename: str = ""

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    @classmethod
    def from_path(cls, path, content_type: Optional[str] = None) -> "UploadedFile":
        path = Path(path)
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            content=path.read_bytes(),
            content_type=content_type or "",
            filename=path.name,
        )


@dataclass(frozen=True)
class ParsedResumeData:
    """Structured fields recovered from one resume.

    Sequence fields are stored as tuples with skills deduplicated. Text
    fields and the experience and education lines are capped on construction.
    """
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: tuple[str, ...] = ()
    experience: tuple[str, ...] = ()
    education: tuple[str, ...] = ()
    summary: Optional[str] = None
    raw_text: str = ""
    source: str = "heuristic"

    def __post_init__(self):
        object.__setattr__(self, "skills", tuple(dict.fromkeys(self.skills)))
        object.__setattr__(self, "experience", _non_blank(self.experience)[:MAX_EXPERIENCE_ENTRIES])
        object.__setattr__(self, "education", _non_blank(self.education)[:MAX_EDUCATION_ENTRIES])
        if self.summary is not None:
            object.__setattr__(self, "summary", self.summary[:MAX_SUMMARY_LENGTH])
        object.__setattr__(self, "raw_text", (self.raw_text or "")[:MAX_RAW_TEXT_LENGTH])

    def to_dict(self) -> dict:
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "skills": list(self.skills),
            "experience": list(self.experience),
            "education": list(self.education),
            "summary": self.summary,
            "rawText": self.raw_text,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ParsedResumeData":
        return cls(
            full_name=data.get("fullName"),
            email=data.get("email"),
            phone=data.get("phone"),
            skills=data.get("skills") or (),
            experience=data.get("experience") or (),
            education=data.get("education") or (),
            summary=data.get("summary"),
            raw_text=data.get("rawText", ""),
            source=data.get("source", "heuristic"),
        )


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse call for callers that do not want exceptions."""
    success: bool
    data: Optional[ParsedResumeData] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def ok(cls, data: ParsedResumeData) -> "ParseResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, kind: str) -> "ParseResult":
        return cls(success=False, error=error, error_kind=kind)

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data.to_dict()
        if self.error is not None:
            result["error"] = self.error
            result["errorKind"] = self.error_kind
        return result


@dataclass(frozen=True)
class Sections:
    """Lines bucketed by the section segmenter."""
    experience: tuple[str, ...] = ()
    education: tuple[str, ...] = ()
    summary: str = ""


class JobType(Enum):
    """Type of employment as listed on the platform."""
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    REMOTE = "Remote"


@dataclass
class JobPosting:
    """Represents a job posting."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    company: str = ""
    location: str = ""
    job_type: JobType = JobType.FULL_TIME
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    description: str = ""
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    required_skills: list[str] = field(default_factory=list)
    posted_date: Optional[datetime] = None
    department: str = ""

    @property
    def is_remote(self) -> bool:
        return self.job_type == JobType.REMOTE or "remote" in self.location.lower()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "type": self.job_type.value,
            "salary": {"min": self.salary_min, "max": self.salary_max},
            "description": self.description,
            "requirements": self.requirements,
            "benefits": self.benefits,
            "required_skills": self.required_skills,
            "postedDate": self.posted_date.isoformat() if self.posted_date else None,
            "department": self.department,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobPosting":
        """Build a posting from the jobs API shape (camelCase, nested salary)."""
        salary = data.get("salary") or {}
        try:
            job_type = JobType(data.get("type") or data.get("job_type") or JobType.FULL_TIME.value)
        except ValueError:
            job_type = JobType.FULL_TIME

        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            title=data.get("title", ""),
            company=data.get("company", ""),
            location=data.get("location", ""),
            job_type=job_type,
            salary_min=salary.get("min", data.get("salary_min")),
            salary_max=salary.get("max", data.get("salary_max")),
            description=data.get("description", ""),
            requirements=list(data.get("requirements") or []),
            benefits=list(data.get("benefits") or []),
            required_skills=list(data.get("required_skills") or data.get("requiredSkills") or []),
            posted_date=_parse_datetime(data.get("postedDate") or data.get("posted_date")),
            department=data.get("department", ""),
        )


@dataclass
class JobFilters:
    """Filters accepted by job search, mirroring the jobs API query params."""
    search: str = ""
    types: list[str] = field(default_factory=list)
    remote: bool = False
    location: str = ""
    department: str = ""
    company: str = ""
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    posted_within_days: Optional[int] = None

    def to_params(self) -> dict:
        params = {
            "search": self.search or None,
            "type": self.types or None,
            "remote": "true" if self.remote else None,
            "location": self.location or None,
            "department": self.department or None,
            "company": self.company or None,
            "salaryMin": self.salary_min,
            "salaryMax": self.salary_max,
            "postedWithin": self.posted_within_days,
        }
        return {key: value for key, value in params.items() if value is not None}


@dataclass
class SkillMatch:
    """Skill overlap between a parsed resume and a job."""
    score: float = 0.0  # 0-100
    matched_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)
    bonus_skills: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "score": round(self.score, 2),
            "matched_skills": self.matched_skills,
            "missing_skills": self.missing_skills,
            "bonus_skills": self.bonus_skills,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SkillMatch":
        return cls(
            score=data.get("score", 0.0),
            matched_skills=data.get("matched_skills", []),
            missing_skills=data.get("missing_skills", []),
            bonus_skills=data.get("bonus_skills", []),
        )


class ApplicationStatus(Enum):
    """Status of a job application."""
    PENDING = "pending"
    REVIEWED = "reviewed"
    INTERVIEW = "interview"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


@dataclass
class ApplicationForm:
    """Fields a candidate submits with an application."""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    cover_letter: str = ""
    resume_filename: str = ""

    EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

    def validate(self) -> dict[str, str]:
        """Return a mapping of field name to error message (empty when valid)."""
        errors = {}

        if not self.full_name.strip():
            errors["full_name"] = "Full name is required"

        if not self.email.strip():
            errors["email"] = "Email is required"
        elif not self.EMAIL_PATTERN.search(self.email):
            errors["email"] = "Please enter a valid email"

        if not self.phone.strip():
            errors["phone"] = "Phone number is required"

        if not self.cover_letter.strip():
            errors["cover_letter"] = "Cover letter is required"

        return errors

    def prefill(self, resume: ParsedResumeData) -> None:
        """Fill blank contact fields from a parsed resume."""
        if not self.full_name.strip() and resume.full_name:
            self.full_name = resume.full_name
        if not self.email.strip() and resume.email:
            self.email = resume.email
        if not self.phone.strip() and resume.phone:
            self.phone = resume.phone


@dataclass
class Application:
    """Represents a submitted job application."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = ""
    job_id: str = ""
    job_title: str = ""
    company: str = ""
    location: str = ""
    job_type: str = ""
    status: ApplicationStatus = ApplicationStatus.PENDING
    applied_at: datetime = field(default_factory=datetime.now)
    last_updated: datetime = field(default_factory=datetime.now)
    cover_letter: str = ""
    resume_filename: str = ""
    notes: list[str] = field(default_factory=list)
    resume: Optional[ParsedResumeData] = None
    match: Optional[SkillMatch] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "job_id": self.job_id,
            "job_title": self.job_title,
            "company": self.company,
            "location": self.location,
            "type": self.job_type,
            "status": self.status.value,
            "applied_at": self.applied_at.isoformat(),
            "last_updated": self.last_updated.isoformat(),
            "cover_letter": self.cover_letter,
            "resume_filename": self.resume_filename,
            "notes": self.notes,
            "resume": self.resume.to_dict() if self.resume else None,
            "match": self.match.to_dict() if self.match else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Application":
        return cls(
            id=data.get("id", ""),
            user_id=data.get("user_id", ""),
            job_id=data.get("job_id", ""),
            job_title=data.get("job_title", ""),
            company=data.get("company", ""),
            location=data.get("location", ""),
            job_type=data.get("type", ""),
            status=ApplicationStatus(data.get("status", "pending")),
            applied_at=_parse_datetime(data.get("applied_at")) or datetime.now(),
            last_updated=_parse_datetime(data.get("last_updated")) or datetime.now(),
            cover_letter=data.get("cover_letter", ""),
            resume_filename=data.get("resume_filename", ""),
            notes=data.get("notes", []),
            resume=ParsedResumeData.from_dict(data["resume"]) if data.get("resume") else None,
            match=SkillMatch.from_dict(data["match"]) if data.get("match") else None,
        )


@dataclass
class SavedJob:
    """A job bookmarked by a user."""
    job_id: str
    user_id: str = ""
    saved_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "user_id": self.user_id,
            "saved_at": self.saved_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SavedJob":
        return cls(
            job_id=data["job_id"],
            user_id=data.get("user_id", ""),
            saved_at=_parse_datetime(data.get("saved_at")) or datetime.now(),
        )
