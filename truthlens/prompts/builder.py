"""Prompt construction for every model call.

``build_prompt(kind, **params)`` returns a PromptSpec: the instruction text,
the system framing, and the call mode. The call mode is fixed per kind:

  kind               grounding   structured output
  collect-news       on          off  (raw-JSON directive in the text)
  analyze-and-score  off         on   (ANALYST_OUTPUT_SCHEMA)
  verify-text        on          off
  verify-image       on          off

The provider cannot combine the two modes, so PromptSpec rejects any
attempt to set both.
"""

import json
from enum import Enum
from typing import Any, Optional, Sequence

from pydantic import BaseModel, model_validator

from truthlens.llm.client import ImagePart, ModelRequest, GEMINI_MODEL
from truthlens.prompts.feed import (
    ANALYST_OUTPUT_SCHEMA,
    ANALYST_SYSTEM,
    ANALYST_USER,
    COLLECTOR_PROMPT,
)
from truthlens.prompts.verification import (
    IMAGE_ANALYST_SYSTEM,
    IMAGE_CAPTION_CONTEXT,
    VERIFIER_SYSTEM,
    VERIFY_IMAGE_USER,
    VERIFY_TEXT_USER,
)
from truthlens.schemas.llm_outputs import CollectedItem

# Analyst context limit: extra candidates are dropped, not rejected
MAX_ANALYSIS_BATCH = 6


class PromptKind(str, Enum):
    COLLECT_NEWS = "collect-news"
    ANALYZE_AND_SCORE = "analyze-and-score"
    VERIFY_TEXT = "verify-text"
    VERIFY_IMAGE = "verify-image"


class PromptSpec(BaseModel):
    """What to send for one call, before the model id and payload are attached."""
    kind: PromptKind
    instruction_text: str
    system_instruction: Optional[str] = None
    use_search_grounding: bool = False
    use_structured_output: bool = False
    output_schema: Optional[dict] = None

    @model_validator(mode="after")
    def modes_are_exclusive(self) -> "PromptSpec":
        if self.use_search_grounding and self.use_structured_output:
            raise ValueError(f"{self.kind.value}: grounding and structured output are mutually exclusive")
        return self

    def to_request(self, model: str = GEMINI_MODEL, image: Optional[ImagePart] = None) -> ModelRequest:
        return ModelRequest(
            model=model,
            prompt=self.instruction_text,
            system_instruction=self.system_instruction,
            image=image,
            enable_search_grounding=self.use_search_grounding,
            enforce_structured_output=self.use_structured_output,
            output_schema=self.output_schema,
        )


def truncate_batch(candidates: Sequence[Any]) -> list:
    return list(candidates)[:MAX_ANALYSIS_BATCH]


def _candidate_dict(candidate: Any) -> dict:
    if isinstance(candidate, CollectedItem):
        return candidate.to_prompt_dict()
    return CollectedItem.from_payload(candidate).to_prompt_dict()


def _collect_news(topics: Sequence[str]) -> PromptSpec:
    if not topics:
        raise ValueError("collect-news requires at least one topic")
    return PromptSpec(
        kind=PromptKind.COLLECT_NEWS,
        instruction_text=COLLECTOR_PROMPT.format(topics=", ".join(topics)),
        use_search_grounding=True,
    )


def _analyze_and_score(candidates: Sequence[Any]) -> PromptSpec:
    batch = [_candidate_dict(c) for c in truncate_batch(candidates)]
    return PromptSpec(
        kind=PromptKind.ANALYZE_AND_SCORE,
        instruction_text=ANALYST_USER.format(candidates=json.dumps(batch, ensure_ascii=False)),
        system_instruction=ANALYST_SYSTEM,
        use_structured_output=True,
        output_schema=ANALYST_OUTPUT_SCHEMA,
    )


def _verify_text(claim: str) -> PromptSpec:
    if not claim or not claim.strip():
        raise ValueError("verify-text requires a non-empty claim")
    return PromptSpec(
        kind=PromptKind.VERIFY_TEXT,
        instruction_text=VERIFY_TEXT_USER.format(claim=claim.strip()),
        system_instruction=VERIFIER_SYSTEM,
        use_search_grounding=True,
    )


def _verify_image(caption: Optional[str] = None) -> PromptSpec:
    caption = (caption or "").strip()
    context = IMAGE_CAPTION_CONTEXT.format(caption=caption) if caption else ""
    return PromptSpec(
        kind=PromptKind.VERIFY_IMAGE,
        instruction_text=VERIFY_IMAGE_USER.format(caption_context=context),
        system_instruction=IMAGE_ANALYST_SYSTEM,
        use_search_grounding=True,
    )


def build_prompt(kind: PromptKind | str, **params: Any) -> PromptSpec:
    """Build the prompt for one call.

    Args:
        kind: A PromptKind or its string value
        **params: topics (collect-news), candidates (analyze-and-score),
            claim (verify-text), caption (verify-image, optional)

    Raises:
        ValueError: Unknown kind or missing required parameter
    """
    kind = PromptKind(kind)
    if kind is PromptKind.COLLECT_NEWS:
        return _collect_news(params.get("topics") or [])
    if kind is PromptKind.ANALYZE_AND_SCORE:
        return _analyze_and_score(params.get("candidates") or [])
    if kind is PromptKind.VERIFY_TEXT:
        return _verify_text(params.get("claim") or "")
    return _verify_image(params.get("caption"))
