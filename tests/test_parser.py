import json
import threading
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from resume_parser.core.decoder import DocumentDecoder
from resume_parser.core.errors import (
    AIExtractionError,
    FileTooLarge,
    InsufficientText,
    ParseFailed,
    UnsupportedFormat,
)
from resume_parser.core.models import ParsedResumeData, UploadedFile
from resume_parser.core.parser import MAX_FILE_SIZE, ResumeParser
from resume_parser.integrations.claude import ClaudeResumeExtractor
from resume_parser.utils import Config


LONG_TEXT = "Jane Doe\njane.doe@example.com\nExperienced with React, Docker, and AWS.\n"


@pytest.fixture
def parser():
    return ResumeParser(use_ai=False)


class TestParse:

    def test_plain_text_resume(self, parser, text_file):
        data = parser.parse(text_file)

        assert data.full_name == "Jane Doe"
        assert data.email == "jane.doe@example.com"
        assert data.phone == "(555) 123-4567"
        assert data.skills == ("React", "Node.js", "AWS", "Docker")
        assert data.experience == (
            "Senior Engineer at Acme (2019-2023)",
            "Built React and Node.js services deployed with Docker on AWS.",
        )
        assert data.education == ("B.Sc. Computer Science, State University",)
        assert data.summary == "Full stack engineer with eight years building web platforms."
        assert data.source == "heuristic"

    def test_docx_resume(self, parser, docx_file):
        data = parser.parse(docx_file)

        assert data.full_name == "Jane Doe"
        assert data.email == "jane.doe@example.com"
        assert "React" in data.skills

    def test_raw_text_is_truncated(self, parser):
        text = LONG_TEXT + "x" * 3000
        data = parser.parse(UploadedFile(content=text.encode(), content_type="text/plain"))

        assert len(data.raw_text) == 2000
        assert data.raw_text.startswith("Jane Doe")

    def test_too_large_is_rejected_before_decoding(self):
        decoder = MagicMock(spec=DocumentDecoder)
        parser = ResumeParser(decoder=decoder, use_ai=False)
        file = UploadedFile(content=b"x" * (6 * 1024 * 1024), content_type="application/pdf")

        with pytest.raises(FileTooLarge) as exc_info:
            parser.parse(file)

        assert exc_info.value.message == "File size must be less than 5MB"
        decoder.decode.assert_not_called()

    def test_exactly_max_size_is_accepted(self):
        decoder = MagicMock(spec=DocumentDecoder)
        decoder.decode.return_value = LONG_TEXT
        parser = ResumeParser(decoder=decoder, use_ai=False)

        data = parser.parse(UploadedFile(content=b"x" * MAX_FILE_SIZE, content_type="text/plain"))

        assert data.email == "jane.doe@example.com"

    def test_short_pdf_text_is_rejected(self, parser):
        page = MagicMock()
        page.extract_text.return_value = "Jane Doe!!"

        with patch("pdfplumber.open") as mocked:
            mocked.return_value.__enter__.return_value.pages = [page]
            with pytest.raises(InsufficientText):
                parser.parse(UploadedFile(content=b"%PDF-1.4", content_type="application/pdf"))

    def test_whitespace_does_not_count_as_text(self, parser):
        content = ("   \n" * 40 + "Jane").encode()
        with pytest.raises(InsufficientText):
            parser.parse(UploadedFile(content=content, content_type="text/plain"))

    def test_unsupported_format(self, parser):
        with pytest.raises(UnsupportedFormat):
            parser.parse(UploadedFile(content=b"\x89PNG" * 100, content_type="image/png", filename="me.png"))

    def test_unexpected_error_becomes_parse_failed(self):
        extractor = MagicMock()
        extractor.extract_name.side_effect = RuntimeError("boom")
        parser = ResumeParser(extractor=extractor, use_ai=False)

        with pytest.raises(ParseFailed) as exc_info:
            parser.parse(UploadedFile(content=LONG_TEXT.encode(), content_type="text/plain"))

        assert exc_info.value.message == "boom"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_is_valid_file(self, parser):
        assert parser.is_valid_file(UploadedFile(content=b"", filename="cv.pdf"))
        assert not parser.is_valid_file(UploadedFile(content=b"", filename="cv.png"))

    def test_parse_path(self, parser, tmp_path, sample_text):
        path = tmp_path / "resume.txt"
        path.write_text(sample_text)

        assert parser.parse_path(path).email == "jane.doe@example.com"


class TestParseResume:

    def test_success(self, parser, text_file):
        result = parser.parse_resume(text_file)

        assert result.success
        assert result.data.full_name == "Jane Doe"
        assert result.error is None

    def test_failure_carries_kind_and_message(self, parser):
        result = parser.parse_resume(UploadedFile(content=b"abc", content_type="image/png"))

        assert not result.success
        assert result.data is None
        assert result.error_kind == "UnsupportedFormat"
        assert result.to_dict()["errorKind"] == "UnsupportedFormat"
        assert "PDF, DOCX, DOC, or TXT" in result.error


class TestAIExtraction:

    def test_ai_result_is_used(self, text_file):
        ai_data = ParsedResumeData(full_name="Jane Q. Doe", skills=["Python"], source="ai")
        ai = MagicMock()
        ai.extract.return_value = ai_data
        parser = ResumeParser(ai_extractor=ai, use_ai=True)

        assert parser.parse(text_file) is ai_data
        ai.enhance_skills.assert_not_called()

    def test_falls_back_to_heuristics_and_enhances_skills(self, text_file):
        ai = MagicMock()
        ai.extract.side_effect = AIExtractionError("rate limited")
        ai.enhance_skills.side_effect = lambda text, data: data
        parser = ResumeParser(ai_extractor=ai, use_ai=True)

        data = parser.parse(text_file)

        assert data.full_name == "Jane Doe"
        assert data.source == "heuristic"
        ai.enhance_skills.assert_called_once()

    def test_oversized_ai_reply_keeps_record_limits(self, text_file):
        client = MagicMock()
        payload = {
            "fullName": "Jane Doe",
            "summary": 42,
            "experience": [f"Engineer at Company {i}" for i in range(15)],
            "education": [f"Degree {i}" for i in range(9)],
        }
        client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="text", text=json.dumps(payload))]
        )
        parser = ResumeParser(ai_extractor=ClaudeResumeExtractor(client=client), use_ai=True)

        result = parser.parse_resume(text_file)

        assert result.success
        assert result.data.source == "ai"
        assert result.data.summary == "42"
        assert len(result.data.experience) == 10
        assert len(result.data.education) == 5

    def test_disabled_ai_is_not_called(self, text_file):
        ai = MagicMock()
        parser = ResumeParser(ai_extractor=ai, use_ai=False)

        parser.parse(text_file)

        ai.extract.assert_not_called()


class TestParseBatch:

    def test_results_keep_input_order(self, parser, text_file):
        bad = UploadedFile(content=b"abc", content_type="image/png", filename="bad.png")

        results = parser.parse_batch([text_file, bad, text_file], max_workers=2)

        assert [r.success for r in results] == [True, False, True]
        assert results[1].error_kind == "UnsupportedFormat"

    def test_timeout_is_reported_per_file(self):
        release = threading.Event()

        def decode(file):
            if file.filename == "slow.txt":
                release.wait(5)
            return LONG_TEXT

        decoder = MagicMock(spec=DocumentDecoder)
        decoder.decode.side_effect = decode
        parser = ResumeParser(decoder=decoder, use_ai=False)

        slow = UploadedFile(content=b"slow", content_type="text/plain", filename="slow.txt")
        fast = UploadedFile(content=b"fast", content_type="text/plain", filename="fast.txt")

        try:
            results = parser.parse_batch([slow, fast], max_workers=2, timeout=0.2)
        finally:
            release.set()

        assert results[0].success is False
        assert results[0].error_kind == "Timeout"
        assert results[1].success is True

    def test_empty_batch(self, parser):
        assert parser.parse_batch([]) == []


def test_from_config(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    config.set("parsing.max_file_size_bytes", 1024)
    config.set("parsing.min_text_length", 10)

    parser = ResumeParser.from_config(config)

    assert parser.max_file_size == 1024
    assert parser.min_text_length == 10
    assert parser.use_ai is False
    with pytest.raises(FileTooLarge):
        parser.parse(UploadedFile(content=b"x" * 2048, content_type="text/plain"))
