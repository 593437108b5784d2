"""
Resume Parser - Runs an uploaded file through decoding, extraction and segmentation.

The parser keeps no state between calls, so one instance can serve
concurrent requests.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Optional
import logging

from .decoder import DocumentDecoder
from .errors import AIExtractionError, ParseFailed, ResumeParseError, FileTooLarge, InsufficientText
from .extractor import EntityExtractor
from .models import ParsedResumeData, ParseResult, UploadedFile
from .segmenter import SectionSegmenter


MAX_FILE_SIZE = 5 * 1024 * 1024
MIN_TEXT_LENGTH = 50


class ResumeParser:
    """Parses resumes into ParsedResumeData records."""

    def __init__(
        self,
        decoder: Optional[DocumentDecoder] = None,
        extractor: Optional[EntityExtractor] = None,
        segmenter: Optional[SectionSegmenter] = None,
        ai_extractor=None,
        use_ai: bool = True,
        max_file_size: int = MAX_FILE_SIZE,
        min_text_length: int = MIN_TEXT_LENGTH,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the parser.

        Args:
            decoder: File-to-text decoder
            extractor: Entity extractor for name, email, phone and skills
            segmenter: Section segmenter for experience, education and summary
            ai_extractor: Optional AI extractor exposing extract() and enhance_skills()
            use_ai: Whether to try the AI extractor before the heuristics
            max_file_size: Largest accepted upload in bytes
            min_text_length: Fewest characters of decoded text to accept
            logger: Logger to use instead of the class logger
        """
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.decoder = decoder or DocumentDecoder()
        self.extractor = extractor or EntityExtractor(logger=self.logger)
        self.segmenter = segmenter or SectionSegmenter()
        self.ai_extractor = ai_extractor
        self.use_ai = use_ai
        self.max_file_size = max_file_size
        self.min_text_length = min_text_length

    @classmethod
    def from_config(cls, config, ai_extractor=None) -> "ResumeParser":
        """Build a parser with limits taken from a Config."""
        return cls(
            ai_extractor=ai_extractor,
            use_ai=config.get("parsing.use_ai", False),
            max_file_size=config.get("parsing.max_file_size_bytes", MAX_FILE_SIZE),
            min_text_length=config.get("parsing.min_text_length", MIN_TEXT_LENGTH),
        )

    def is_valid_file(self, file: UploadedFile) -> bool:
        """Check the file type before uploading or parsing."""
        return self.decoder.is_supported(file)

    def parse(self, file: UploadedFile) -> ParsedResumeData:
        """
        Parse a resume file.

        Raises:
            FileTooLarge, UnsupportedFormat, FormatDecodeError,
            InsufficientText, ParseFailed
        """
        try:
            if file.size > self.max_file_size:
                raise FileTooLarge()

            raw_text = self.decoder.decode(file)

            if not raw_text or len(raw_text.strip()) < self.min_text_length:
                raise InsufficientText()

            if self.use_ai and self.ai_extractor is not None:
                return self._parse_with_ai(raw_text)

            return self.parse_text(raw_text)

        except ResumeParseError:
            raise
        except Exception as e:
            raise ParseFailed(str(e) or "Failed to parse resume") from e

    def parse_resume(self, file: UploadedFile) -> ParseResult:
        """Parse a resume file, reporting failures in the result instead of raising."""
        try:
            return ParseResult.ok(self.parse(file))
        except ResumeParseError as e:
            self.logger.info(f"Could not parse {file.filename}: {e.message}")
            return ParseResult.failure(e.message, type(e).__name__)

    def parse_path(self, path, content_type: Optional[str] = None) -> ParsedResumeData:
        """Parse a resume file from disk."""
        return self.parse(UploadedFile.from_path(Path(path), content_type))

    def parse_text(self, raw_text: str) -> ParsedResumeData:
        """Run the heuristic extractors over already decoded text."""
        sections = self.segmenter.segment(raw_text)

        data = ParsedResumeData(
            full_name=self.extractor.extract_name(raw_text),
            email=self.extractor.extract_email(raw_text),
            phone=self.extractor.extract_phone(raw_text),
            skills=self.extractor.extract_skills(raw_text),
            experience=sections.experience,
            education=sections.education,
            summary=sections.summary or None,
            raw_text=raw_text,
        )

        self.logger.debug(
            f"Heuristic parse: name={data.full_name!r} email={data.email!r} "
            f"phone={data.phone!r} skills={len(data.skills)}"
        )
        return data

    def _parse_with_ai(self, raw_text: str) -> ParsedResumeData:
        try:
            data = self.ai_extractor.extract(raw_text)
            self.logger.info(f"AI parsing found {len(data.skills)} skills")
            return data
        except AIExtractionError as e:
            self.logger.warning(f"AI parsing failed, falling back to basic parsing: {e}")

        data = self.parse_text(raw_text)
        return self.ai_extractor.enhance_skills(raw_text, data)

    def parse_batch(
        self,
        files: list[UploadedFile],
        max_workers: int = 4,
        timeout: Optional[float] = None,
    ) -> list[ParseResult]:
        """
        Parse several files in parallel.

        Args:
            files: Files to parse
            max_workers: Thread pool size
            timeout: Seconds to wait for each file, None to wait indefinitely.
                A timed-out file is reported as failed but its worker thread
                keeps running, and the interpreter joins it at exit.

        Returns:
            One ParseResult per file, in input order
        """
        results = []
        executor = ThreadPoolExecutor(max_workers=max_workers)

        try:
            futures = [executor.submit(self.parse_resume, file) for file in files]

            for file, future in zip(files, futures):
                try:
                    results.append(future.result(timeout=timeout))
                except FutureTimeoutError:
                    future.cancel()
                    self.logger.warning(f"Timed out parsing {file.filename}")
                    results.append(ParseResult.failure(
                        f"Timed out parsing {file.filename}", "Timeout"
                    ))
        finally:
            # Don't block on decodes that already timed out
            executor.shutdown(wait=False, cancel_futures=True)

        return results
