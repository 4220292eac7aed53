"""Curated news feed workflow.

Runs the feed graph (collect → analyze → normalize) for a list of topics.
The feed is a passive background fetch, so it never fails upward: any
provider or pipeline error is logged and the caller gets an empty list.
The one exception is a missing credential, which fails fast before any
network call.
"""

from typing import Optional, Sequence

from truthlens.agent.graph import build_feed_graph
from truthlens.errors import MissingCredentialError
from truthlens.llm import GEMINI_MODEL, ModelInvoker, get_client
from truthlens.prompts.feed import DEFAULT_TOPICS
from truthlens.schemas.domain import NewsArticle
from truthlens.utils.logging import log, get_logger

MODULE = "feed"
logger = get_logger("feed")


def effective_topics(topics: Optional[Sequence[str]]) -> list[str]:
    """Strip blanks; an empty selection falls back to DEFAULT_TOPICS."""
    cleaned = [t.strip() for t in topics or [] if isinstance(t, str) and t.strip()]
    return cleaned or list(DEFAULT_TOPICS)


class FeedService:
    """Feed orchestrator. The compiled graph holds no per-call state.

    Args:
        api_key: Provider credential; None or empty makes every call fail fast
        invoker: Override the provider (tests); defaults to a Gemini client
        model: Model id for both stages
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        invoker: Optional[ModelInvoker] = None,
        model: str = GEMINI_MODEL,
    ):
        self._api_key = api_key or None
        if invoker is None and self._api_key:
            invoker = get_client(self._api_key)
        self._graph = build_feed_graph(invoker, model) if invoker is not None else None

    @property
    def configured(self) -> bool:
        return self._api_key is not None

    async def generate_feed(self, topics: Optional[Sequence[str]]) -> list[NewsArticle]:
        """Collect, score, and normalize current stories for the given topics.

        Raises:
            MissingCredentialError: No API key configured
        """
        if self._api_key is None or self._graph is None:
            log.warning(logger, MODULE, "credential_missing", "Feed requested without an API key")
            raise MissingCredentialError()

        active = effective_topics(topics)
        log.info(logger, MODULE, "feed_start", "Generating feed", topics=", ".join(active))

        try:
            final = await self._graph.ainvoke({"topics": active})
        except Exception as e:
            log.error(logger, MODULE, "feed_failed", "Feed pipeline failed, returning empty feed",
                      error=str(e), error_type=type(e).__name__)
            return []

        articles = final.get("articles", [])
        if not articles:
            log.info(logger, MODULE, "feed_skipped", "Feed pipeline produced no articles")
        else:
            log.info(logger, MODULE, "feed_done", "Feed generated", articles=len(articles))
        return articles
