"""Service providers for the API.

The credential is read from the environment here and injected into the
services; nothing below the API layer reads it. Tests replace these with
app.dependency_overrides.
"""

import os
from functools import lru_cache

from truthlens.llm import GEMINI_MODEL
from truthlens.workflows.feed import FeedService
from truthlens.workflows.verify import VerificationService


@lru_cache
def get_verification_service() -> VerificationService:
    return VerificationService(os.getenv("GEMINI_API_KEY"), model=GEMINI_MODEL)


@lru_cache
def get_feed_service() -> FeedService:
    return FeedService(os.getenv("GEMINI_API_KEY"), model=GEMINI_MODEL)
