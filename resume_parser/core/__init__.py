"""Core parsing pipeline, models and matching."""

from .models import (
    UploadedFile,
    ParsedResumeData,
    ParseResult,
    Sections,
    JobType,
    JobPosting,
    JobFilters,
    SkillMatch,
    ApplicationStatus,
    ApplicationForm,
    Application,
    SavedJob,
)
from .errors import (
    ResumeParseError,
    FileTooLarge,
    UnsupportedFormat,
    FormatDecodeError,
    InsufficientText,
    ParseFailed,
    AIExtractionError,
    JobsApiError,
)
from .decoder import DocumentDecoder
from .extractor import EntityExtractor
from .segmenter import SectionSegmenter
from .fuzzy import FuzzyMatcher, levenshtein_distance, similarity, matches
from .parser import ResumeParser
from .search import JobSearch, SearchResults
from .matcher import JobMatcher

__all__ = [
    "UploadedFile",
    "ParsedResumeData",
    "ParseResult",
    "Sections",
    "JobType",
    "JobPosting",
    "JobFilters",
    "SkillMatch",
    "ApplicationStatus",
    "ApplicationForm",
    "Application",
    "SavedJob",
    "ResumeParseError",
    "FileTooLarge",
    "UnsupportedFormat",
    "FormatDecodeError",
    "InsufficientText",
    "ParseFailed",
    "AIExtractionError",
    "JobsApiError",
    "DocumentDecoder",
    "EntityExtractor",
    "SectionSegmenter",
    "FuzzyMatcher",
    "levenshtein_distance",
    "similarity",
    "matches",
    "ResumeParser",
    "JobSearch",
    "SearchResults",
    "JobMatcher",
]
