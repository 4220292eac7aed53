"""Curated feed endpoint."""

from fastapi import APIRouter, Depends, HTTPException

from truthlens.api.deps import get_feed_service
from truthlens.errors import MissingCredentialError
from truthlens.schemas import FeedRequest, NewsArticle
from truthlens.utils.logging import log, get_logger
from truthlens.workflows.feed import FeedService

MODULE = "api.feed"
logger = get_logger("api")

router = APIRouter()


@router.post("", response_model=list[NewsArticle])
async def generate_feed(
    body: FeedRequest,
    service: FeedService = Depends(get_feed_service),
):
    """Fetch a fresh credibility-scored feed. Degrades to [] on provider errors."""
    try:
        articles = await service.generate_feed(body.topics)
    except MissingCredentialError:
        raise HTTPException(status_code=503, detail="API key not configured")

    log.debug(logger, MODULE, "feed_served", "Feed served", articles=len(articles))
    return articles
