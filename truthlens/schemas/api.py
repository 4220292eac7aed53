"""Pydantic schemas for API request bodies.

Responses reuse the domain models directly (NewsArticle, VerificationResult).
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class FeedRequest(BaseModel):
    """Request body for a feed fetch."""
    topics: list[str] = Field(default_factory=list, description="Topics of interest; empty → defaults")


class TextClaimSubmit(BaseModel):
    """Request body for verifying a text claim."""
    claim: str = Field(..., description="The claim text to verify")

    @field_validator("claim")
    @classmethod
    def claim_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Claim text must not be empty")
        return v.strip()


class ImageClaimSubmit(BaseModel):
    """Request body for verifying an image.

    ``image`` is base64, either bare or as a ``data:<mime>;base64,`` URL.
    """
    image: str = Field(..., description="Base64 image payload or data URL")
    caption: Optional[str] = Field(None, description="Optional user-supplied context")
    mime_type: Optional[str] = Field(None, description="Overrides the type in a data URL")
