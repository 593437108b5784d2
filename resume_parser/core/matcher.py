"""
Job Matcher - Compares the skills on a parsed resume with a job's requirements.
"""

from typing import Optional
import re

from .extractor import EntityExtractor
from .fuzzy import FuzzyMatcher, similarity
from .models import JobPosting, ParsedResumeData, SkillMatch


SKILL_MATCH_THRESHOLD = 0.8

_PUNCTUATION = re.compile(r"[^\w]")


class JobMatcher:
    """Scores job postings against one parsed resume."""

    # Common variations of skill names
    SKILL_VARIATIONS = {
        "javascript": ["js", "ecmascript"],
        "typescript": ["ts"],
        "python": ["py"],
        "kubernetes": ["k8s"],
        "postgresql": ["postgres", "psql"],
        "mongodb": ["mongo"],
        "react": ["reactjs", "react.js"],
        "node.js": ["nodejs", "node"],
        "machine learning": ["ml"],
        "artificial intelligence": ["ai"],
        "amazon web services": ["aws"],
        "google cloud platform": ["gcp"],
        "google cloud": ["gcp"],
        "ci/cd": ["cicd", "ci cd"],
    }

    def __init__(
        self,
        resume: ParsedResumeData,
        matcher: Optional[FuzzyMatcher] = None,
        extractor: Optional[EntityExtractor] = None,
    ):
        self.resume = resume
        self.matcher = matcher or FuzzyMatcher()
        self.extractor = extractor or EntityExtractor()

    def job_skills(self, job: JobPosting) -> list[str]:
        """Skills a job asks for: explicit ones, else vocabulary skills in its text."""
        if job.required_skills:
            return list(dict.fromkeys(job.required_skills))

        text = "\n".join([job.title, job.description, *job.requirements])
        return self.extractor.extract_skills(text)

    def skills_match(self, skill1: str, skill2: str) -> bool:
        """Check if two skill names refer to the same skill."""
        skill1 = skill1.lower().strip()
        skill2 = skill2.lower().strip()

        if skill1 == skill2:
            return True

        for base, variants in self.SKILL_VARIATIONS.items():
            if skill1 == base and skill2 in variants:
                return True
            if skill2 == base and skill1 in variants:
                return True

        # Short names like "Go" or "R" only match exactly
        if len(skill1) <= 3 or len(skill2) <= 3:
            return False

        if " " in skill1 or " " in skill2:
            return self.matcher.fuzzy_match(skill1, skill2, SKILL_MATCH_THRESHOLD)

        # Single words: whole-word similarity, so "Java" stays apart from "JavaScript"
        return similarity(_PUNCTUATION.sub("", skill1), _PUNCTUATION.sub("", skill2)) >= SKILL_MATCH_THRESHOLD

    def match_job(self, job: JobPosting) -> SkillMatch:
        """Calculate the skill overlap between the resume and a job."""
        wanted = self.job_skills(job)
        have = list(self.resume.skills)

        matched = [s for s in have if any(self.skills_match(s, w) for w in wanted)]
        bonus = [s for s in have if s not in matched]
        missing = [w for w in wanted if not any(self.skills_match(s, w) for s in have)]

        if not wanted:
            score = 50.0  # Nothing to compare against, neutral
        else:
            score = (len(wanted) - len(missing)) / len(wanted) * 100

        return SkillMatch(
            score=score,
            matched_skills=matched,
            missing_skills=missing,
            bonus_skills=bonus,
        )

    def rank_jobs(self, jobs: list[JobPosting]) -> list[tuple[JobPosting, SkillMatch]]:
        """Rank jobs by skill match score, best first."""
        scored = [(job, self.match_job(job)) for job in jobs]
        scored.sort(key=lambda pair: pair[1].score, reverse=True)
        return scored
