"""Caller-facing domain objects.

These are the only shapes that cross from the orchestration layer to the
presentation layer. All of them are immutable once constructed. Python
attributes are snake_case; serialized JSON uses the camelCase names the
front-end expects (``model_dump(by_alias=True)``).
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VerdictType(str, Enum):
    """Closed classification of a claim or article. Carries no ordering."""

    REAL = "REAL"
    SUSPICIOUS = "SUSPICIOUS"
    FAKE = "FAKE"
    UNVERIFIED = "UNVERIFIED"

    @classmethod
    def coerce(cls, value: object) -> "VerdictType":
        """Map a loosely-typed verdict string onto the enum; unknown → UNVERIFIED."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        return cls.UNVERIFIED


AnalysisType = Literal["TEXT", "IMAGE"]


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Source(_Frozen):
    """A cited web source. Identity key is ``uri``."""

    title: str
    uri: str


class AgentAnalysis(_Frozen):
    """Sub-scores produced by the analyst stage of the feed pipeline."""

    source_score: int = Field(ge=0, le=100, description="Publisher trustworthiness")
    source_notes: str
    content_score: int = Field(ge=0, le=100, description="100 = neutral, 0 = sensational")
    content_notes: str
    evidence: tuple[str, ...] = ()


class NewsArticle(_Frozen):
    """One curated feed item. Built fresh on every feed fetch."""

    id: str
    title: str
    summary: str
    source: str
    url: Optional[str] = None
    image_url: Optional[str] = None
    published_at: str
    verdict: VerdictType
    confidence_score: int = Field(ge=0, le=100)
    agent_analysis: AgentAnalysis
    topics: tuple[str, ...]


class VerificationResult(_Frozen):
    """Outcome of one verification call."""

    verdict: VerdictType
    confidence: int = Field(ge=0, le=100)
    summary: str
    evidence: tuple[str, ...] = ()
    sources: tuple[Source, ...] = ()
    analysis_type: AnalysisType
