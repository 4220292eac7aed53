"""Source reconciliation.

A grounded verification yields citations from two places:

  1. The sources the model itself lists in its JSON ({"title", "url"})
  2. The provider's grounding chunks ({"web": {"title", "uri"}})

``reconcile_sources`` merges them into one ordered, de-duplicated list of
Source. The model's own sources come first (they are the ones it actually
argued from); grounding chunks fill the gaps. When two entries share a uri
the first one seen wins.

Pure function: no state, no I/O, no logging.
"""

from typing import Any, Iterable, Optional

from truthlens.schemas.domain import Source

PLACEHOLDER_TITLE = "Web Source"
NO_LINK = "#"


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def model_source(entry: Any) -> Optional[Source]:
    """Normalize one model-asserted source. The model may spell the link url or uri."""
    if not isinstance(entry, dict):
        return None
    uri = _text(entry.get("uri")) or _text(entry.get("url"))
    if not uri or uri == NO_LINK:
        return None
    return Source(title=_text(entry.get("title")) or PLACEHOLDER_TITLE, uri=uri)


def grounding_source(chunk: Any) -> Optional[Source]:
    """Normalize one provider grounding chunk; chunks without a link are dropped."""
    web = chunk.get("web") if isinstance(chunk, dict) else None
    if not isinstance(web, dict):
        return None
    uri = _text(web.get("uri")) or NO_LINK
    if uri == NO_LINK:
        return None
    return Source(title=_text(web.get("title")) or PLACEHOLDER_TITLE, uri=uri)


def dedupe_sources(sources: Iterable[Source]) -> list[Source]:
    """Stable de-duplication by uri, first occurrence wins."""
    seen: set[str] = set()
    unique = []
    for source in sources:
        if source.uri in seen:
            continue
        seen.add(source.uri)
        unique.append(source)
    return unique


def reconcile_sources(model_sources: Optional[list], grounding_chunks: Optional[list]) -> list[Source]:
    """Merge model-asserted sources and grounding citations.

    Args:
        model_sources: Raw source dicts from the model's JSON
        grounding_chunks: Provider grounding chunks ({"web": {...}})

    Returns:
        Ordered list of Source with unique uris
    """
    merged = [s for s in map(model_source, model_sources or []) if s]
    merged += [s for s in map(grounding_source, grounding_chunks or []) if s]
    return dedupe_sources(merged)
