"""
Claude integration - AI-assisted resume field extraction.

Sends decoded resume text to the Anthropic Messages API and maps the JSON
reply onto ParsedResumeData. Used as an optional first pass before the
heuristic extractors.
"""

from dataclasses import replace
from typing import Optional
import json
import logging

import anthropic

from resume_parser.core.errors import AIExtractionError
from resume_parser.core.models import ParsedResumeData


DEFAULT_MODEL = "claude-3-haiku-20240307"

EXTRACT_PROMPT = """Extract the following information from this resume text. Return a JSON object with these exact fields:
{{
  "fullName": "full name of the candidate",
  "email": "email address",
  "phone": "phone number formatted as (XXX) XXX-XXXX if US number",
  "skills": ["array of ALL skills mentioned, including technical and soft skills"],
  "technicalSkills": ["programming languages, frameworks, tools, technologies"],
  "softSkills": ["leadership, communication, teamwork, etc."],
  "experience": ["job titles and companies in format: 'Title at Company (Years)'"],
  "education": ["degrees and institutions"],
  "summary": "professional summary or objective if present",
  "yearsOfExperience": "total years of experience if mentioned",
  "certifications": ["professional certifications"],
  "languages": ["spoken languages if mentioned"]
}}

Important instructions:
1. Extract ALL skills mentioned anywhere in the resume
2. For technical skills, include programming languages, frameworks, databases, cloud platforms, tools, methodologies
3. Look for skills in dedicated skills sections, job descriptions, project descriptions, and summary
4. Be comprehensive - if a technology or skill is mentioned even once, include it
5. Keep the original capitalization for proper nouns and technologies
6. If a field is not found, use null or empty array

Resume text:
{resume_text}"""

SKILLS_PROMPT = """You are an expert resume parser specializing in skill extraction. Extract ALL technical and professional skills from this resume.

Include:
- Programming languages (JavaScript, Python, Java, etc.)
- Frameworks and libraries (React, Angular, Django, Spring, etc.)
- Databases (MySQL, PostgreSQL, MongoDB, Redis, etc.)
- Cloud platforms (AWS, Azure, GCP, etc.)
- DevOps tools (Docker, Kubernetes, Jenkins, Git, etc.)
- Methodologies (Agile, Scrum, TDD, CI/CD, etc.)
- Professional tools (Jira, Slack, Figma, etc.)
- Soft skills (Leadership, Communication, Problem-solving, etc.)
- Domain expertise (Machine Learning, Data Science, Finance, etc.)

Return a JSON array of all skills found. Be comprehensive - include any skill, technology, or tool mentioned anywhere in the resume.

Resume text:
{resume_text}"""


def extract_json_block(text: str, opener: str, closer: str) -> Optional[str]:
    """Return the span from the first opener to the last closer, if any."""
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def _clean_list(values) -> list[str]:
    if not isinstance(values, list):
        return []
    return [str(v).strip() for v in values if v and str(v).strip()]


def _clean_str(value) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value).strip() or None


class ClaudeResumeExtractor:
    """Extracts resume fields with Claude."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Optional[anthropic.Anthropic] = None,
        temperature: float = 0.1,
    ):
        """
        Initialize the extractor.

        Args:
            api_key: Anthropic API key (ignored when a client is given)
            model: Model name for the Messages API
            client: Preconfigured Anthropic client
            temperature: Sampling temperature; low for consistent extraction
        """
        if client is None and not api_key:
            raise AIExtractionError("Claude API key not configured")

        self.client = client or anthropic.Anthropic(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.logger = logging.getLogger(self.__class__.__name__)

    def _complete(self, prompt: str, max_tokens: int) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise AIExtractionError(f"Claude API request failed: {e}") from e

        if not response.content:
            return ""
        return getattr(response.content[0], "text", "") or ""

    def extract(self, resume_text: str) -> ParsedResumeData:
        """
        Extract all resume fields.

        Raises:
            AIExtractionError: the request failed or the reply had no usable JSON
        """
        reply = self._complete(EXTRACT_PROMPT.format(resume_text=resume_text), max_tokens=2000)

        block = extract_json_block(reply, "{", "}")
        if block is None:
            raise AIExtractionError("No valid JSON found in Claude response")

        try:
            extracted = json.loads(block)
        except json.JSONDecodeError as e:
            raise AIExtractionError(f"Invalid JSON in Claude response: {e}") from e

        if not isinstance(extracted, dict):
            raise AIExtractionError("Claude response JSON is not an object")

        skills = (
            _clean_list(extracted.get("skills"))
            + _clean_list(extracted.get("technicalSkills"))
            + _clean_list(extracted.get("softSkills"))
        )

        try:
            data = ParsedResumeData(
                full_name=_clean_str(extracted.get("fullName")),
                email=_clean_str(extracted.get("email")),
                phone=_clean_str(extracted.get("phone")),
                skills=skills,
                experience=_clean_list(extracted.get("experience")),
                education=_clean_list(extracted.get("education")),
                summary=_clean_str(extracted.get("summary")),
                raw_text=resume_text,
                source="ai",
            )
        except (TypeError, ValueError) as e:
            raise AIExtractionError(f"Unusable fields in Claude response: {e}") from e

        self.logger.debug(f"Claude extracted {len(data.skills)} skills")
        return data

    def enhance_skills(self, resume_text: str, existing: ParsedResumeData) -> ParsedResumeData:
        """Merge Claude's skill list into existing data; returns existing on any failure."""
        try:
            reply = self._complete(SKILLS_PROMPT.format(resume_text=resume_text), max_tokens=1000)
        except AIExtractionError as e:
            self.logger.warning(f"Could not enhance skills with Claude: {e}")
            return existing

        block = extract_json_block(reply, "[", "]")
        if block is None:
            self.logger.warning("No valid JSON array found in Claude response")
            return existing

        try:
            extracted = json.loads(block)
        except json.JSONDecodeError as e:
            self.logger.warning(f"Invalid skills JSON from Claude: {e}")
            return existing

        merged = list(existing.skills) + _clean_list(extracted)
        self.logger.debug(f"Skills enhanced with Claude, total skills: {len(set(merged))}")

        return replace(existing, skills=merged)
