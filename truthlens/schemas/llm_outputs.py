"""Pydantic schemas for model outputs.

The model's completion is untyped text. After the extractor turns it into
JSON (or gives up), these schemas are the ONLY way the rest of the system
reads it. Unlike a strict contract, every field here is lenient:

  - a missing field takes its documented default
  - a field of the wrong type is coerced, or falls back to the default
  - scores are clamped into [0, 100]

so ``from_payload`` never raises, whatever the model produced. That makes
the normalized domain objects total: a VerificationResult or NewsArticle can
always be constructed.
"""

import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


DEFAULT_ARTICLE_CONFIDENCE = 70
DEFAULT_SUB_SCORE = 50
PENDING_NOTE = "Analysis pending."


# =============================================================================
# COERCION HELPERS
# =============================================================================

def coerce_score(value: Any, default: int) -> int:
    """Clamp a numeric-ish value into [0, 100]; non-numbers take the default."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return default
    # Integers are clamped as integers: arbitrarily large ones do not fit a float
    if isinstance(value, int):
        return min(100, max(0, value))
    if not isinstance(value, float) or math.isnan(value):
        return default
    return int(round(min(100.0, max(0.0, value))))


def coerce_text(value: Any) -> Optional[str]:
    """Return a stripped, non-empty string or None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def coerce_str_list(value: Any) -> list[str]:
    """Coerce to a list of non-empty strings, preserving order."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [text for text in (coerce_text(item) for item in value) if text]


def parse_date(value: Any) -> Optional[datetime]:
    """Best-effort date parse: ISO 8601 first, then RFC 2822 (RSS style)."""
    text = coerce_text(value)
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _Lenient(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def from_payload(cls, payload: Any):
        """Build from an extracted JSON value; non-objects become all-defaults."""
        return cls.model_validate(payload if isinstance(payload, dict) else {})


# =============================================================================
# FEED: COLLECTOR STAGE
# =============================================================================

class CollectedItem(_Lenient):
    """A raw candidate from the collector stage (search-grounded)."""

    title: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = None
    snippet: Optional[str] = None
    published_at: Optional[str] = None

    @field_validator("title", "url", "source", "snippet", "published_at", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    def to_prompt_dict(self) -> dict:
        """Compact JSON-ready form handed to the analyst stage."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# FEED: ANALYST STAGE
# =============================================================================

class AgentAnalysisOutput(_Lenient):
    source_score: int = DEFAULT_SUB_SCORE
    source_notes: str = PENDING_NOTE
    content_score: int = DEFAULT_SUB_SCORE
    content_notes: str = PENDING_NOTE
    evidence: list[str] = Field(default_factory=list)

    @field_validator("source_score", "content_score", mode="before")
    @classmethod
    def _score(cls, v: Any) -> int:
        return coerce_score(v, DEFAULT_SUB_SCORE)

    @field_validator("source_notes", "content_notes", mode="before")
    @classmethod
    def _notes(cls, v: Any) -> str:
        return coerce_text(v) or PENDING_NOTE

    @field_validator("evidence", mode="before")
    @classmethod
    def _evidence(cls, v: Any) -> list[str]:
        return coerce_str_list(v)


class AnalystItemOutput(_Lenient):
    """One scored item from the analyst stage."""

    title: str = "Untitled"
    summary: Optional[str] = None
    snippet: Optional[str] = None
    source: str = "Unknown"
    url: Optional[str] = None
    published_at: str = Field(default_factory=_now_iso)
    verdict: Optional[str] = None
    confidence_score: int = DEFAULT_ARTICLE_CONFIDENCE
    agent_analysis: AgentAnalysisOutput = Field(default_factory=AgentAnalysisOutput)

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v: Any) -> str:
        return coerce_text(v) or "Untitled"

    @field_validator("source", mode="before")
    @classmethod
    def _source(cls, v: Any) -> str:
        return coerce_text(v) or "Unknown"

    @field_validator("summary", "snippet", "url", "verdict", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    @field_validator("published_at", mode="before")
    @classmethod
    def _published_at(cls, v: Any) -> str:
        if parse_date(v) is None:
            return _now_iso()
        return coerce_text(v)

    @field_validator("confidence_score", mode="before")
    @classmethod
    def _confidence(cls, v: Any) -> int:
        return coerce_score(v, DEFAULT_ARTICLE_CONFIDENCE)

    @field_validator("agent_analysis", mode="before")
    @classmethod
    def _analysis(cls, v: Any) -> AgentAnalysisOutput:
        return AgentAnalysisOutput.from_payload(v)

    @property
    def best_summary(self) -> str:
        return self.summary or self.snippet or "No summary."


# =============================================================================
# VERIFICATION
# =============================================================================

class VerificationOutput(_Lenient):
    """Verdict object returned by the verify-text / verify-image prompts.

    ``summary`` stays None when absent; the caller picks the default that
    fits the analysis type.
    """

    verdict: Optional[str] = None
    confidence: int = 0
    summary: Optional[str] = None
    evidence: list[str] = Field(default_factory=list)
    sources: list[dict] = Field(default_factory=list)

    @field_validator("verdict", "summary", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, v: Any) -> int:
        return coerce_score(v, 0)

    @field_validator("evidence", mode="before")
    @classmethod
    def _evidence(cls, v: Any) -> list[str]:
        return coerce_str_list(v)

    @field_validator("sources", mode="before")
    @classmethod
    def _sources(cls, v: Any) -> list[dict]:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]
