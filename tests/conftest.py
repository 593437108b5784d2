"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta

import pytest

from resume_parser.core.models import JobPosting, JobType, ParsedResumeData, UploadedFile
from resume_parser.tracker import InMemoryStorage
from tests import DOCX_MIME, make_docx


SAMPLE_RESUME = """Jane Doe
jane.doe@example.com
Phone: 555 1234567

Summary
Full stack engineer with eight years building web platforms.

Experience
Senior Engineer at Acme (2019-2023)
Built React and Node.js services deployed with Docker on AWS.

Education
B.Sc. Computer Science, State University
"""


@pytest.fixture
def sample_text():
    return SAMPLE_RESUME


@pytest.fixture
def text_file(sample_text):
    return UploadedFile(
        content=sample_text.encode("utf-8"),
        content_type="text/plain",
        filename="resume.txt",
    )


@pytest.fixture
def docx_file():
    return UploadedFile(
        content=make_docx(SAMPLE_RESUME.split("\n")),
        content_type=DOCX_MIME,
        filename="resume.docx",
    )


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def resume():
    return ParsedResumeData(
        full_name="Jane Doe",
        email="jane.doe@example.com",
        phone="(555) 123-4567",
        skills=["Python", "React", "Docker", "AWS"],
    )


@pytest.fixture
def jobs():
    now = datetime.now()
    return [
        JobPosting(
            id="1",
            title="Frontend Developer",
            company="Acme",
            location="San Francisco, CA",
            job_type=JobType.FULL_TIME,
            salary_min=120000,
            salary_max=150000,
            description="Build user interfaces with React and TypeScript.",
            requirements=["3+ years of React"],
            required_skills=["React", "TypeScript"],
            posted_date=now - timedelta(days=2),
            department="Engineering",
        ),
        JobPosting(
            id="2",
            title="Backend Engineer",
            company="Globex",
            location="Remote",
            job_type=JobType.REMOTE,
            salary_min=130000,
            salary_max=160000,
            description="Python services on AWS, containerized with Docker.",
            requirements=["Python", "AWS"],
            required_skills=["Python", "AWS", "Docker"],
            posted_date=now - timedelta(days=10),
            department="Engineering",
        ),
        JobPosting(
            id="3",
            title="Sales Representative",
            company="Initech",
            location="Austin, TX",
            job_type=JobType.PART_TIME,
            salary_min=50000,
            salary_max=70000,
            description="Grow accounts in the Texas region.",
            requirements=["Negotiation"],
            required_skills=["Negotiation", "Communication"],
            posted_date=now - timedelta(days=40),
            department="Sales",
        ),
    ]
