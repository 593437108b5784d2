import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest

from resume_parser.core.errors import AIExtractionError
from resume_parser.core.models import ParsedResumeData
from resume_parser.integrations.claude import ClaudeResumeExtractor, extract_json_block


def reply(text):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def extractor(client):
    return ClaudeResumeExtractor(client=client)


class TestExtractJsonBlock:

    def test_object_inside_prose(self):
        assert extract_json_block('Here you go: {"a": {"b": 1}} Done.', "{", "}") == '{"a": {"b": 1}}'

    def test_array(self):
        assert extract_json_block('Skills: ["Python", "Go"]', "[", "]") == '["Python", "Go"]'

    def test_missing(self):
        assert extract_json_block("no json here", "{", "}") is None
        assert extract_json_block("} backwards {", "{", "}") is None


def test_requires_key_or_client():
    with pytest.raises(AIExtractionError):
        ClaudeResumeExtractor(api_key=None)


class TestExtract:

    def test_maps_reply_fields(self, extractor, client):
        payload = {
            "fullName": "Jane Doe",
            "email": "jane.doe@example.com",
            "phone": "(555) 123-4567",
            "skills": ["Python", "Leadership"],
            "technicalSkills": ["Python", "Docker"],
            "softSkills": ["Mentoring", ""],
            "experience": ["Senior Engineer at Acme (2019-2023)"],
            "education": ["B.Sc. Computer Science"],
            "summary": "Engineer.",
        }
        client.messages.create.return_value = reply("Sure!\n" + json.dumps(payload))

        data = extractor.extract("resume text")

        assert data.full_name == "Jane Doe"
        assert data.skills == ("Python", "Leadership", "Docker", "Mentoring")
        assert data.experience == ("Senior Engineer at Acme (2019-2023)",)
        assert data.source == "ai"
        assert data.raw_text == "resume text"

    def test_request_shape(self, extractor, client):
        client.messages.create.return_value = reply("{}")

        extractor.extract("Jane Doe, Python")

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-3-haiku-20240307"
        assert kwargs["max_tokens"] == 2000
        assert kwargs["temperature"] == 0.1
        assert kwargs["messages"][0]["role"] == "user"
        assert kwargs["messages"][0]["content"].endswith("Jane Doe, Python")

    def test_missing_fields_are_empty(self, extractor, client):
        client.messages.create.return_value = reply('{"fullName": null, "skills": null}')

        data = extractor.extract("text")

        assert data.full_name is None
        assert data.skills == ()

    def test_long_lists_are_capped(self, extractor, client):
        payload = {
            "experience": [f"Engineer at Company {i}" for i in range(15)],
            "education": [f"Degree {i}" for i in range(9)],
        }
        client.messages.create.return_value = reply(json.dumps(payload))

        data = extractor.extract("text")

        assert len(data.experience) == 10
        assert len(data.education) == 5

    def test_scalar_fields_are_coerced(self, extractor, client):
        payload = {"fullName": " Jane ", "phone": 5551234567, "summary": 42, "email": {"work": "x"}}
        client.messages.create.return_value = reply(json.dumps(payload))

        data = extractor.extract("text")

        assert data.full_name == "Jane"
        assert data.phone == "5551234567"
        assert data.summary == "42"
        assert data.email is None

    def test_no_json(self, extractor, client):
        client.messages.create.return_value = reply("I cannot help with that.")

        with pytest.raises(AIExtractionError):
            extractor.extract("text")

    def test_invalid_json(self, extractor, client):
        client.messages.create.return_value = reply("{fullName: Jane}")

        with pytest.raises(AIExtractionError):
            extractor.extract("text")

    def test_api_error_is_wrapped(self, extractor, client):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.messages.create.side_effect = anthropic.APIConnectionError(request=request)

        with pytest.raises(AIExtractionError) as exc_info:
            extractor.extract("text")

        assert isinstance(exc_info.value.__cause__, anthropic.APIError)


class TestEnhanceSkills:

    def test_merges_without_duplicates(self, extractor, client):
        client.messages.create.return_value = reply('["Docker", "Kubernetes", "Leadership"]')
        existing = ParsedResumeData(full_name="Jane Doe", skills=["Python", "Docker"])

        data = extractor.enhance_skills("text", existing)

        assert data.skills == ("Python", "Docker", "Kubernetes", "Leadership")
        assert data.full_name == "Jane Doe"
        assert client.messages.create.call_args.kwargs["max_tokens"] == 1000

    @pytest.mark.parametrize("text", ["no array", "[not json]"])
    def test_bad_reply_keeps_existing(self, extractor, client, text):
        client.messages.create.return_value = reply(text)
        existing = ParsedResumeData(skills=["Python"])

        assert extractor.enhance_skills("text", existing) is existing

    def test_api_error_keeps_existing(self, extractor, client):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.messages.create.side_effect = anthropic.APIConnectionError(request=request)
        existing = ParsedResumeData(skills=["Python"])

        assert extractor.enhance_skills("text", existing) is existing
