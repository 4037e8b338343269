import json

import httpx
import pytest

from easyread.core.exceptions import EnrichmentError
from easyread.news.services.enrichment_client import (
    EnrichmentClient,
    EnrichmentConfig,
    parse_enrichment_response,
)

VALID_RESULT = {
    "simplifiedText": "Hey listeners! So, scientists found something cool today.",
    "coreVocabulary": ["scientist", "discover"],
    "chineseSummary": "科学家今天有了新发现。",
}


def completion(content, status_code=200):
    return httpx.Response(status_code, json={"choices": [{"message": {"content": content}}]})


def make_client(handler, **config):
    config.setdefault("api_key", "test-llm-key")
    return EnrichmentClient(EnrichmentConfig(**config), transport=httpx.MockTransport(handler))


class TestParseEnrichmentResponse:
    def test_parses_plain_json(self):
        result = parse_enrichment_response(json.dumps(VALID_RESULT))

        assert result.simplified_text.startswith("Hey listeners!")
        assert result.core_vocabulary == ["scientist", "discover"]
        assert result.vocabulary_details is None

    def test_strips_code_fences(self):
        raw = "```json\n" + json.dumps(VALID_RESULT) + "\n```"

        assert parse_enrichment_response(raw).chinese_summary == VALID_RESULT["chineseSummary"]

    def test_invalid_json_raises(self):
        with pytest.raises(EnrichmentError):
            parse_enrichment_response('{"simplifiedText": "unterminated')

    def test_missing_required_field_raises(self):
        data = {k: v for k, v in VALID_RESULT.items() if k != "chineseSummary"}

        with pytest.raises(EnrichmentError) as exc_info:
            parse_enrichment_response(json.dumps(data))

        assert "chineseSummary" in exc_info.value.details["fields"]

    def test_blank_required_field_raises(self):
        with pytest.raises(EnrichmentError):
            parse_enrichment_response(json.dumps({**VALID_RESULT, "simplifiedText": "   "}))

    def test_non_object_raises(self):
        with pytest.raises(EnrichmentError):
            parse_enrichment_response("[1, 2, 3]")

    def test_missing_vocabulary_defaults_to_empty(self):
        data = {k: v for k, v in VALID_RESULT.items() if k != "coreVocabulary"}

        assert parse_enrichment_response(json.dumps(data)).core_vocabulary == []

    def test_details_ignored_when_not_requested(self):
        data = {**VALID_RESULT, "vocabularyDetails": "not a list"}

        with pytest.raises(EnrichmentError):
            parse_enrichment_response(json.dumps(data))
        assert parse_enrichment_response(json.dumps(data), include_details=False).vocabulary_details is None


class TestEnrichmentClient:
    @pytest.mark.asyncio
    async def test_without_key_returns_placeholder_and_never_calls_network(self):
        def handler(request):
            raise AssertionError("network must not be used")

        client = EnrichmentClient(EnrichmentConfig(api_key=None), transport=httpx.MockTransport(handler))

        result = await client.enrich("Original article text " * 10, "Title")

        assert client.is_simulated
        assert result.simplified_text.startswith("This is a simulated simplified text")
        assert result.core_vocabulary == ["Simulation", "NoKey", "Test"]
        assert result.vocabulary_details == []

    @pytest.mark.asyncio
    async def test_successful_request(self):
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return completion(json.dumps(VALID_RESULT))

        client = make_client(handler, base_url="https://llm.example.com/v1/", model="test-model",
                             temperature=0.3, max_tokens=321, vocabulary_count=6)

        result = await client.enrich("x" * 5000, "Big Discovery")

        assert result.chinese_summary == VALID_RESULT["chineseSummary"]
        assert captured["url"] == "https://llm.example.com/v1/chat/completions"
        assert captured["auth"] == "Bearer test-llm-key"
        body = captured["body"]
        assert body["model"] == "test-model"
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 321
        assert body["messages"][0]["role"] == "system"
        prompt = body["messages"][1]["content"]
        assert 'Title: "Big Discovery"' in prompt
        assert "Extract 6 interesting words" in prompt
        assert "x" * 2000 in prompt
        assert "x" * 2001 not in prompt
        assert "vocabularyDetails" not in prompt

    @pytest.mark.asyncio
    async def test_example_sentences_requested_and_kept_when_enabled(self):
        details = [{"word": "scientist", "sentence": "My sister's a scientist, and she loves it."}]

        def handler(request):
            prompt = json.loads(request.content)["messages"][1]["content"]
            assert "Example Sentences" in prompt
            assert "vocabularyDetails" in prompt
            return completion(json.dumps({**VALID_RESULT, "vocabularyDetails": details}))

        result = await make_client(handler, enable_example_sentences=True).enrich("text", "Title")

        assert result.vocabulary_details[0].word == "scientist"

    @pytest.mark.asyncio
    async def test_details_dropped_when_feature_disabled(self):
        details = [{"word": "a", "sentence": "b"}]

        def handler(request):
            return completion(json.dumps({**VALID_RESULT, "vocabularyDetails": details}))

        result = await make_client(handler).enrich("text", "Title")

        assert result.vocabulary_details is None

    @pytest.mark.asyncio
    async def test_malformed_details_tolerated_when_feature_disabled(self):
        def handler(request):
            return completion(json.dumps({**VALID_RESULT, "vocabularyDetails": [{"word": "only"}]}))

        result = await make_client(handler).enrich("text", "Title")

        assert result is not None
        assert result.vocabulary_details is None

    @pytest.mark.asyncio
    async def test_error_status_returns_none(self):
        def handler(request):
            return httpx.Response(500, text="upstream exploded")

        assert await make_client(handler).enrich("text", "Title") is None

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert await make_client(handler).enrich("text", "Title") is None

    @pytest.mark.asyncio
    async def test_malformed_content_returns_none(self):
        def handler(request):
            return completion("Sure! Here is your JSON: {not json}")

        assert await make_client(handler).enrich("text", "Title") is None

    @pytest.mark.asyncio
    async def test_unexpected_envelope_returns_none(self):
        def handler(request):
            return httpx.Response(200, json={"error": "no choices"})

        assert await make_client(handler).enrich("text", "Title") is None
