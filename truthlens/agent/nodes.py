"""LangGraph graph nodes for the news feed.

Each function is a node in the feed graph. It receives the current
FeedState (plus the injected model invoker) and returns updates to that
state. Provider errors propagate out of the graph; FeedService turns them
into an empty feed.
"""

import time
import uuid
from typing import Any, Optional, Sequence

from truthlens.agent.state import FeedState
from truthlens.llm import ModelInvoker, invoke_model, safe_extract_json
from truthlens.prompts.builder import PromptKind, build_prompt, truncate_batch
from truthlens.schemas.domain import AgentAnalysis, NewsArticle, VerdictType
from truthlens.schemas.llm_outputs import AnalystItemOutput, CollectedItem
from truthlens.utils.logging import log, get_logger

MODULE = "feed"
logger = get_logger("feed")

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/{seed}/400/225"


async def collect(state: FeedState, invoker: ModelInvoker, model: str) -> dict:
    """Stage 1: search-grounded retrieval of raw candidate stories."""
    topics = state["topics"]
    log.info(logger, MODULE, "collect_start", "Collecting candidate stories",
             topics=", ".join(topics))

    spec = build_prompt(PromptKind.COLLECT_NEWS, topics=topics)
    response = await invoke_model(invoker, spec.to_request(model=model), activity_name="collect")

    raw, error = safe_extract_json(response.text, fallback=[])
    if not isinstance(raw, list):
        log.warning(logger, MODULE, "collect_invalid", "Collector did not return a list",
                    error=error, payload_type=type(raw).__name__)
        raw = []

    candidates = [CollectedItem.from_payload(item).to_prompt_dict() for item in raw if isinstance(item, dict)]
    log.info(logger, MODULE, "collect_done", "Candidates collected",
             returned=len(raw), usable=len(candidates))
    return {"candidates": candidates}


async def analyze(state: FeedState, invoker: ModelInvoker, model: str) -> dict:
    """Stage 2: score and classify the candidate batch with enforced JSON output."""
    candidates = state.get("candidates", [])
    batch = truncate_batch(candidates)
    if len(batch) < len(candidates):
        log.info(logger, MODULE, "batch_truncated", "Dropping candidates beyond the analysis batch",
                 collected=len(candidates), kept=len(batch))

    spec = build_prompt(PromptKind.ANALYZE_AND_SCORE, candidates=batch)
    response = await invoke_model(invoker, spec.to_request(model=model), activity_name="analyze")

    analyzed, error = safe_extract_json(response.text)
    if not isinstance(analyzed, list):
        log.error(logger, MODULE, "analyze_invalid", "Analyst returned an invalid format",
                  error=error, payload_type=type(analyzed).__name__)
        analyzed = None
    else:
        log.info(logger, MODULE, "analyze_done", "Candidates scored", scored=len(analyzed))

    return {"batch": batch, "analyzed": analyzed}


def _url_for(item: AnalystItemOutput, batch: Sequence[dict]) -> Optional[str]:
    """The analyst often drops the url; recover it from the candidate with the same title."""
    if item.url:
        return item.url
    title = item.title.casefold()
    for candidate in batch:
        if (candidate.get("title") or "").casefold() == title and candidate.get("url"):
            return candidate["url"]
    return None


def to_article(
    payload: Any,
    index: int,
    topics: Sequence[str],
    freshness: str,
    batch: Sequence[dict] = (),
) -> NewsArticle:
    """Normalize one analyst item. Never raises on odd payloads."""
    item = AnalystItemOutput.from_payload(payload)
    analysis = item.agent_analysis
    return NewsArticle(
        id=f"news-{index}-{uuid.uuid4().hex[:12]}",
        title=item.title,
        summary=item.best_summary,
        source=item.source,
        url=_url_for(item, batch),
        image_url=PLACEHOLDER_IMAGE_URL.format(seed=f"{freshness}-{index}"),
        published_at=item.published_at,
        verdict=VerdictType.coerce(item.verdict),
        confidence_score=item.confidence_score,
        agent_analysis=AgentAnalysis(
            source_score=analysis.source_score,
            source_notes=analysis.source_notes,
            content_score=analysis.content_score,
            content_notes=analysis.content_notes,
            evidence=tuple(analysis.evidence),
        ),
        topics=tuple(topics),
    )


def normalize(state: FeedState) -> dict:
    """Stage 3: map analyst output to NewsArticle, keeping the analyst's order."""
    freshness = str(int(time.time() * 1000))
    batch = state.get("batch", [])
    articles = [
        to_article(item, index, state["topics"], freshness, batch)
        for index, item in enumerate(state.get("analyzed") or [])
    ]
    log.info(logger, MODULE, "normalize_done", "Feed articles built", articles=len(articles))
    return {"articles": articles}
