"""
Enrichment Client
Rewrites a news article into beginner English with vocabulary and a Chinese summary
using an OpenAI-compatible chat completions backend.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...config import Settings
from ...core.exceptions import EnrichmentError
from .prompts import EnrichmentPrompts

logger = structlog.get_logger(__name__)

SIMULATED_SUMMARY = "这是模拟数据,因为没有提供 LLM API Key。"


class VocabularyDetail(BaseModel):
    word: str
    sentence: str


class EnrichmentResult(BaseModel):
    """Structured output expected from the backend"""
    model_config = ConfigDict(populate_by_name=True)

    simplified_text: str = Field(alias="simplifiedText")
    core_vocabulary: List[str] = Field(default_factory=list, alias="coreVocabulary")
    chinese_summary: str = Field(alias="chineseSummary")
    vocabulary_details: Optional[List[VocabularyDetail]] = Field(default=None, alias="vocabularyDetails")

    @field_validator("simplified_text", "chinese_summary")
    @classmethod
    def require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


@dataclass(frozen=True)
class EnrichmentConfig:
    api_key: Optional[str] = None
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.5
    max_tokens: int = 500
    vocabulary_count: int = 8
    enable_example_sentences: bool = False
    max_source_chars: int = 2000
    timeout_seconds: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "EnrichmentConfig":
        return cls(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            vocabulary_count=settings.vocabulary_count,
            enable_example_sentences=settings.enable_example_sentences,
            timeout_seconds=settings.llm_timeout_seconds,
        )


def strip_code_fences(raw: str) -> str:
    return raw.replace("```json", "").replace("```", "").strip()


def parse_enrichment_response(raw: str, include_details: bool = True) -> EnrichmentResult:
    """Strictly decode the backend's text into an EnrichmentResult; raises EnrichmentError on any mismatch.

    With include_details off, vocabularyDetails is ignored rather than validated.
    """
    if not isinstance(raw, str):
        raise EnrichmentError("LLM response content is not text")

    cleaned = strip_code_fences(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise EnrichmentError(f"LLM response is not valid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise EnrichmentError("LLM response is not a JSON object")

    if not include_details:
        data.pop("vocabularyDetails", None)

    try:
        return EnrichmentResult.model_validate(data)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise EnrichmentError(
            "LLM response does not match the expected schema",
            details={"fields": fields},
        ) from e


def simulated_result(text: str) -> EnrichmentResult:
    return EnrichmentResult(
        simplified_text=(
            "This is a simulated simplified text because no LLM Key was provided. "
            + text[:50] + "..."
        ),
        core_vocabulary=["Simulation", "NoKey", "Test"],
        chinese_summary=SIMULATED_SUMMARY,
        vocabulary_details=[],
    )


class EnrichmentClient:
    def __init__(self, config: EnrichmentConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    @property
    def is_simulated(self) -> bool:
        return not self.config.api_key

    def build_payload(self, text: str, title: str) -> Dict[str, Any]:
        prompt = EnrichmentPrompts.get_enrichment_prompt(
            title=title,
            text=text[:self.config.max_source_chars],
            vocabulary_count=self.config.vocabulary_count,
            include_example_sentences=self.config.enable_example_sentences,
        )
        return {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": EnrichmentPrompts.SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    async def enrich(self, text: str, title: str) -> Optional[EnrichmentResult]:
        """
        Enrich one article.

        Returns None on any transport, status or decoding failure so the caller
        can count it and move on. Nothing is retried.
        """
        if self.is_simulated:
            logger.warning("No LLM_API_KEY provided, using simulated enrichment")
            return simulated_result(text)

        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=self.build_payload(text, title))
                response.raise_for_status()
            result = parse_enrichment_response(
                self._extract_content(response),
                include_details=self.config.enable_example_sentences,
            )
        except httpx.HTTPStatusError as e:
            logger.error(
                "LLM request returned an error status",
                status_code=e.response.status_code,
                body=e.response.text[:500],
                title=title[:80],
            )
            return None
        except httpx.HTTPError as e:
            logger.error("LLM request failed", error_type=type(e).__name__, error=str(e), title=title[:80])
            return None
        except EnrichmentError as e:
            logger.error("LLM processing failed", error=e.message, details=e.details, title=title[:80])
            return None

        logger.info(
            "Article enriched",
            model=self.config.model,
            title=title[:80],
            vocabulary=len(result.core_vocabulary),
        )
        return result

    @staticmethod
    def _extract_content(response: httpx.Response) -> str:
        try:
            data = response.json()
            return data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise EnrichmentError("Unexpected chat completion envelope") from e
