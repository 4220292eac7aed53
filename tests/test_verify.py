"""Tests for the verification workflow."""

import pytest

from truthlens.errors import MissingCredentialError, ProviderCallError, VerificationError
from truthlens.llm import ModelResponse
from truthlens.schemas.domain import Source, VerdictType
from truthlens.workflows.verify import DEFAULT_SUMMARIES, VerificationService


GOOD_VERDICT = """```json
{
  "verdict": "FAKE",
  "confidence": 93,
  "summary": "No record of the event exists.",
  "evidence": ["No wire coverage", "Image predates the claim"],
  "sources": [{"title": "Reuters Fact Check", "url": "https://reuters.com/fc"}]
}
```"""


def service(invoker):
    return VerificationService("test-key", invoker=invoker, model="test-model")


@pytest.mark.asyncio
async def test_verify_text_happy_path(fake_invoker):
    invoker = fake_invoker(ModelResponse(
        text=GOOD_VERDICT,
        grounding_chunks=[
            {"web": {"title": "Reuters", "uri": "https://reuters.com/fc"}},
            {"web": {"title": None, "uri": "https://apnews.com/x"}},
        ],
    ))

    result = await service(invoker).verify_text("Aliens landed in Ohio")

    assert result.verdict is VerdictType.FAKE
    assert result.confidence == 93
    assert result.evidence == ("No wire coverage", "Image predates the claim")
    assert result.sources == (
        Source(title="Reuters Fact Check", uri="https://reuters.com/fc"),
        Source(title="Web Source", uri="https://apnews.com/x"),
    )
    assert result.analysis_type == "TEXT"

    request = invoker.requests[0]
    assert request.model == "test-model"
    assert request.enable_search_grounding
    assert not request.enforce_structured_output
    assert request.image is None
    assert "Aliens landed in Ohio" in request.prompt


@pytest.mark.asyncio
async def test_not_json_falls_back_to_defaults(fake_invoker):
    result = await service(fake_invoker("not json")).verify_text("claim")

    assert result.verdict is VerdictType.UNVERIFIED
    assert result.confidence == 0
    assert result.summary == DEFAULT_SUMMARIES["TEXT"]
    assert result.summary
    assert result.evidence == ()
    assert result.sources == ()


@pytest.mark.asyncio
async def test_partial_object_defaults_missing_fields(fake_invoker):
    result = await service(fake_invoker({"verdict": "real"})).verify_text("claim")

    assert result.verdict is VerdictType.REAL
    assert result.confidence == 0
    assert result.summary == DEFAULT_SUMMARIES["TEXT"]


@pytest.mark.asyncio
async def test_array_payload_is_not_a_verdict(fake_invoker):
    result = await service(fake_invoker([1, 2, 3])).verify_text("claim")
    assert result.verdict is VerdictType.UNVERIFIED


@pytest.mark.asyncio
async def test_out_of_range_confidence_is_clamped(fake_invoker):
    invoker = fake_invoker({"verdict": "REAL", "confidence": 10 ** 400}, {"confidence": 0.99}, {"confidence": 1.0})
    svc = service(invoker)

    huge = await svc.verify_text("claim")
    assert huge.verdict is VerdictType.REAL
    assert huge.confidence == 100

    # No 0-1 rescaling: values are only rounded and clamped
    assert (await svc.verify_text("claim")).confidence == 1
    assert (await svc.verify_text("claim")).confidence == 1


@pytest.mark.asyncio
async def test_grounding_only_sources_survive_malformed_text(fake_invoker):
    invoker = fake_invoker(ModelResponse(
        text="The claim appears false.",
        grounding_chunks=[{"web": {"title": "BBC", "uri": "https://bbc.co.uk/1"}}],
    ))
    result = await service(invoker).verify_text("claim")
    assert result.sources == (Source(title="BBC", uri="https://bbc.co.uk/1"),)


@pytest.mark.asyncio
@pytest.mark.parametrize("method,args", [
    ("verify_text", ("claim",)),
    ("verify_image", (b"\xff\xd8\xff",)),
])
async def test_provider_error_is_single_terminal_failure(fake_invoker, method, args):
    invoker = fake_invoker(RuntimeError("quota exceeded"), GOOD_VERDICT)

    with pytest.raises(VerificationError) as exc:
        await getattr(service(invoker), method)(*args)

    assert invoker.calls == 1
    assert isinstance(exc.value.__cause__, ProviderCallError)
    assert not exc.value.missing_credential


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", [None, ""])
async def test_missing_credential_fails_before_any_call(fake_invoker, api_key):
    invoker = fake_invoker(GOOD_VERDICT)
    svc = VerificationService(api_key, invoker=invoker)

    with pytest.raises(VerificationError) as exc:
        await svc.verify_text("claim")
    with pytest.raises(VerificationError):
        await svc.verify_image(b"\x00")

    assert invoker.calls == 0
    assert isinstance(exc.value.__cause__, MissingCredentialError)
    assert exc.value.missing_credential
    assert not svc.configured


@pytest.mark.asyncio
async def test_verify_image_sends_image_part_and_caption(fake_invoker):
    invoker = fake_invoker(GOOD_VERDICT)

    result = await service(invoker).verify_image(b"\x89PNG", caption="Protest in Paris", mime_type="image/png")

    assert result.analysis_type == "IMAGE"
    assert result.verdict is VerdictType.FAKE
    request = invoker.requests[0]
    assert request.image.data == b"\x89PNG"
    assert request.image.mime_type == "image/png"
    assert 'User context: "Protest in Paris"' in request.prompt
    assert request.enable_search_grounding


@pytest.mark.asyncio
async def test_verify_image_default_summary(fake_invoker):
    result = await service(fake_invoker("{}")).verify_image(b"\xff\xd8")
    assert result.summary == DEFAULT_SUMMARIES["IMAGE"]


@pytest.mark.asyncio
async def test_verify_image_rejects_empty_payload(fake_invoker):
    invoker = fake_invoker(GOOD_VERDICT)
    with pytest.raises(ValueError):
        await service(invoker).verify_image(b"")
    assert invoker.calls == 0
