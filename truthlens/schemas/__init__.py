"""Pydantic schemas for structured data validation.

This package contains:
- domain.py: the caller-facing objects (NewsArticle, VerificationResult, ...)
- llm_outputs.py: lenient schemas that normalize loosely-shaped model output
- api.py: request bodies for the REST API

Model output is never read directly: it passes through llm_outputs first,
which assigns typed defaults field by field.
"""

from truthlens.schemas.domain import (
    AgentAnalysis,
    AnalysisType,
    NewsArticle,
    Source,
    VerdictType,
    VerificationResult,
)
from truthlens.schemas.llm_outputs import (
    AgentAnalysisOutput,
    AnalystItemOutput,
    CollectedItem,
    VerificationOutput,
)
from truthlens.schemas.api import (
    FeedRequest,
    ImageClaimSubmit,
    TextClaimSubmit,
)

__all__ = [
    # Domain
    "AgentAnalysis",
    "AnalysisType",
    "NewsArticle",
    "Source",
    "VerdictType",
    "VerificationResult",
    # LLM outputs
    "AgentAnalysisOutput",
    "AnalystItemOutput",
    "CollectedItem",
    "VerificationOutput",
    # API
    "FeedRequest",
    "ImageClaimSubmit",
    "TextClaimSubmit",
]
