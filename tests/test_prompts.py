"""Tests for prompt construction."""

import json

import pytest
from pydantic import ValidationError

from truthlens.llm import ImagePart
from truthlens.prompts.builder import (
    MAX_ANALYSIS_BATCH,
    PromptKind,
    PromptSpec,
    build_prompt,
    truncate_batch,
)
from truthlens.prompts.feed import ANALYST_OUTPUT_SCHEMA


KIND_PARAMS = {
    PromptKind.COLLECT_NEWS: {"topics": ["Technology"]},
    PromptKind.ANALYZE_AND_SCORE: {"candidates": [{"title": "X"}]},
    PromptKind.VERIFY_TEXT: {"claim": "The moon is made of cheese"},
    PromptKind.VERIFY_IMAGE: {"caption": None},
}


@pytest.mark.parametrize("kind", list(PromptKind))
def test_never_grounding_and_structured_together(kind):
    spec = build_prompt(kind, **KIND_PARAMS[kind])
    assert not (spec.use_search_grounding and spec.use_structured_output)


@pytest.mark.parametrize("kind,grounding,structured", [
    (PromptKind.COLLECT_NEWS, True, False),
    (PromptKind.ANALYZE_AND_SCORE, False, True),
    (PromptKind.VERIFY_TEXT, True, False),
    (PromptKind.VERIFY_IMAGE, True, False),
])
def test_call_mode_per_kind(kind, grounding, structured):
    spec = build_prompt(kind, **KIND_PARAMS[kind])
    assert spec.use_search_grounding is grounding
    assert spec.use_structured_output is structured


def test_kind_accepts_string_value():
    spec = build_prompt("verify-text", claim="x")
    assert spec.kind is PromptKind.VERIFY_TEXT


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        build_prompt("summarize", claim="x")


def test_collect_interpolates_topics_and_demands_raw_json():
    spec = build_prompt(PromptKind.COLLECT_NEWS, topics=["Technology", "Health"])
    assert "TOPICS: Technology, Health" in spec.instruction_text
    assert "ONLY a valid JSON array" in spec.instruction_text


def test_collect_requires_topics():
    with pytest.raises(ValueError):
        build_prompt(PromptKind.COLLECT_NEWS, topics=[])


def test_analyze_caps_batch_at_six():
    candidates = [{"title": f"Story {i}", "source": "AP"} for i in range(9)]
    spec = build_prompt(PromptKind.ANALYZE_AND_SCORE, candidates=candidates)

    payload = spec.instruction_text.split("SOURCE DATA (from the collector):\n", 1)[1].split("\n", 1)[0]
    batch = json.loads(payload)

    assert len(batch) == MAX_ANALYSIS_BATCH
    assert [c["title"] for c in batch] == [f"Story {i}" for i in range(6)]
    assert spec.output_schema == ANALYST_OUTPUT_SCHEMA
    assert spec.system_instruction


def test_analyze_candidates_are_trimmed_to_known_fields():
    spec = build_prompt(PromptKind.ANALYZE_AND_SCORE, candidates=[
        {"title": "X", "url": "http://a", "internal": "drop me", "publishedAt": "2024-01-01"},
    ])
    assert "drop me" not in spec.instruction_text
    assert '"publishedAt": "2024-01-01"' in spec.instruction_text


def test_truncate_batch_is_truncation_not_rejection():
    assert truncate_batch(range(10)) == [0, 1, 2, 3, 4, 5]
    assert truncate_batch([1, 2]) == [1, 2]


def test_verify_text_embeds_claim():
    spec = build_prompt(PromptKind.VERIFY_TEXT, claim='  He said "hello"  ')
    assert 'INPUT: "He said "hello""' in spec.instruction_text
    assert "S.I.F.T." in spec.system_instruction


def test_verify_text_rejects_blank_claim():
    with pytest.raises(ValueError):
        build_prompt(PromptKind.VERIFY_TEXT, claim="   ")


def test_verify_image_caption_is_optional():
    without = build_prompt(PromptKind.VERIFY_IMAGE)
    with_caption = build_prompt(PromptKind.VERIFY_IMAGE, caption="Flooded subway in 2024")

    assert "User context" not in without.instruction_text
    assert with_caption.instruction_text.startswith('User context: "Flooded subway in 2024".')


def test_prompt_spec_rejects_both_modes():
    with pytest.raises(ValidationError):
        PromptSpec(
            kind=PromptKind.VERIFY_TEXT,
            instruction_text="x",
            use_search_grounding=True,
            use_structured_output=True,
        )


def test_to_request_carries_mode_and_image():
    image = ImagePart(data=b"\xff\xd8", mime_type="image/png")
    request = build_prompt(PromptKind.VERIFY_IMAGE).to_request(model="m", image=image)

    assert request.model == "m"
    assert request.image == image
    assert request.enable_search_grounding
    assert not request.enforce_structured_output
