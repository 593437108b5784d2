"""
Section Segmenter - Buckets resume lines into experience, education and summary.
"""

from typing import Optional

from .models import (
    Sections,
    MAX_EDUCATION_ENTRIES,
    MAX_EXPERIENCE_ENTRIES,
    MAX_SUMMARY_LENGTH,
)


EXPERIENCE = "experience"
EDUCATION = "education"
SUMMARY = "summary"


class SectionSegmenter:
    """Single pass heading detector over resume lines."""

    # Checked in this order; a line matching several goes to the first
    HEADING_KEYWORDS = (
        (EXPERIENCE, ("experience", "work history", "employment")),
        (EDUCATION, ("education", "academic", "degree")),
        (SUMMARY, ("summary", "objective", "profile")),
    )

    MIN_LINE_LENGTH = 3
    MIN_EXPERIENCE_LENGTH = 10
    MIN_EDUCATION_LENGTH = 5

    def detect_heading(self, line: str) -> Optional[str]:
        """Return the section a heading line opens, or None for content."""
        line_lower = line.strip().lower()
        for section, keywords in self.HEADING_KEYWORDS:
            if any(keyword in line_lower for keyword in keywords):
                return section
        return None

    def segment(self, text: str) -> Sections:
        current: Optional[str] = None
        experience = []
        education = []
        summary = ""

        for raw_line in text.split("\n"):
            heading = self.detect_heading(raw_line)
            if heading is not None:
                current = heading
                continue

            line = raw_line.strip()
            if len(line) <= self.MIN_LINE_LENGTH:
                continue

            if current == EXPERIENCE:
                if len(line) > self.MIN_EXPERIENCE_LENGTH:
                    experience.append(line)
            elif current == EDUCATION:
                if len(line) > self.MIN_EDUCATION_LENGTH:
                    education.append(line)
            elif current == SUMMARY:
                summary += line + " "

        return Sections(
            experience=tuple(experience[:MAX_EXPERIENCE_ENTRIES]),
            education=tuple(education[:MAX_EDUCATION_ENTRIES]),
            summary=summary.strip()[:MAX_SUMMARY_LENGTH],
        )
