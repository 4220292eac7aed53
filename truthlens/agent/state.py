"""LangGraph feed pipeline state schema."""

from typing import Optional, TypedDict

from truthlens.schemas.domain import NewsArticle


class FeedState(TypedDict, total=False):
    """State that flows through the feed graph.

    Every node reads from and writes to it. Keys are filled in stage order;
    a pipeline that stops early simply never sets the later keys.
    """
    # Input
    topics: list[str]

    # Collect stage: candidate dicts ({title, url, source, snippet, publishedAt})
    candidates: list[dict]

    # Analyze stage
    batch: list[dict]
    analyzed: Optional[list]

    # Output
    articles: list[NewsArticle]
