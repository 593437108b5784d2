"""
Error types raised by the resume parsing pipeline and its collaborators.
"""

from typing import Optional


class ResumeParseError(Exception):
    """Base class for failures that end a single parse call."""

    default_message = "Failed to parse resume"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class FileTooLarge(ResumeParseError):
    default_message = "File size must be less than 5MB"


class UnsupportedFormat(ResumeParseError):
    default_message = "Unsupported file format. Please upload PDF, DOCX, DOC, or TXT files."


class FormatDecodeError(ResumeParseError):
    """The file matched a known format but its text could not be read."""

    default_message = "Could not read the file contents"


class InsufficientText(ResumeParseError):
    default_message = (
        "Could not extract enough text from the file. "
        "Please ensure the file is not empty or corrupted."
    )


class ParseFailed(ResumeParseError):
    """Catch-all for unexpected failures; the original message is kept."""


class AIExtractionError(Exception):
    """The AI extraction service failed or returned an unusable reply."""


class JobsApiError(Exception):
    """The jobs REST API returned an error or an unsuccessful envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
