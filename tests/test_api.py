"""Tests for the feed and verify endpoints, with the model provider faked."""

import base64

import pytest
from httpx import ASGITransport, AsyncClient

from truthlens.api.app import app
from truthlens.api.deps import get_feed_service, get_verification_service
from truthlens.api.routes.verify import decode_image
from truthlens.workflows.feed import FeedService
from truthlens.workflows.verify import VerificationService


VERDICT = {
    "verdict": "SUSPICIOUS",
    "confidence": 61,
    "summary": "Only one unverified source.",
    "evidence": ["Single blog post"],
    "sources": [{"title": "Blog", "url": "https://blog.example"}],
}


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def use_services(invoker, api_key="test-key"):
    app.dependency_overrides[get_verification_service] = lambda: VerificationService(api_key, invoker=invoker)
    app.dependency_overrides[get_feed_service] = lambda: FeedService(api_key, invoker=invoker)


@pytest.mark.asyncio
async def test_verify_text_returns_camel_case(client, fake_invoker):
    use_services(fake_invoker(VERDICT))

    resp = await client.post("/verify/text", json={"claim": "Bananas cure colds"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["verdict"] == "SUSPICIOUS"
    assert data["confidence"] == 61
    assert data["analysisType"] == "TEXT"
    assert data["sources"] == [{"title": "Blog", "uri": "https://blog.example"}]


@pytest.mark.asyncio
async def test_verify_text_blank_claim_is_422(client, fake_invoker):
    invoker = fake_invoker(VERDICT)
    use_services(invoker)

    resp = await client.post("/verify/text", json={"claim": "  "})

    assert resp.status_code == 422
    assert invoker.calls == 0


@pytest.mark.asyncio
async def test_verify_provider_failure_is_502(client, fake_invoker):
    use_services(fake_invoker(TimeoutError("deadline")))
    resp = await client.post("/verify/text", json={"claim": "x"})
    assert resp.status_code == 502
    assert "failed to verify text" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_missing_key_is_503(client, fake_invoker):
    use_services(fake_invoker(VERDICT), api_key=None)

    assert (await client.post("/verify/text", json={"claim": "x"})).status_code == 503
    assert (await client.post("/feed", json={"topics": ["AI"]})).status_code == 503


@pytest.mark.asyncio
async def test_verify_image_data_url(client, fake_invoker):
    invoker = fake_invoker(VERDICT)
    use_services(invoker)
    encoded = base64.b64encode(b"\x89PNG-bytes").decode()

    resp = await client.post("/verify/image", json={
        "image": f"data:image/png;base64,{encoded}",
        "caption": "Hurricane photo",
    })

    assert resp.status_code == 200
    assert resp.json()["analysisType"] == "IMAGE"
    assert invoker.requests[0].image.data == b"\x89PNG-bytes"
    assert invoker.requests[0].image.mime_type == "image/png"


@pytest.mark.asyncio
async def test_verify_image_bad_base64_is_400(client, fake_invoker):
    invoker = fake_invoker(VERDICT)
    use_services(invoker)

    resp = await client.post("/verify/image", json={"image": "%%% not base64 %%%"})

    assert resp.status_code == 400
    assert invoker.calls == 0


@pytest.mark.asyncio
async def test_feed_endpoint(client, fake_invoker):
    use_services(fake_invoker(
        [{"title": "X", "url": "http://a", "source": "AP"}],
        [{"title": "X", "source": "AP", "verdict": "REAL", "confidenceScore": 95}],
    ))

    resp = await client.post("/feed", json={"topics": ["Technology"]})

    assert resp.status_code == 200
    [article] = resp.json()
    assert article["verdict"] == "REAL"
    assert article["confidenceScore"] == 95
    assert article["topics"] == ["Technology"]
    assert article["agentAnalysis"]["sourceScore"] == 50
    assert article["imageUrl"]
    assert article["publishedAt"]


@pytest.mark.asyncio
async def test_feed_degrades_to_empty_list(client, fake_invoker):
    use_services(fake_invoker(ConnectionError("offline")))
    resp = await client.post("/feed", json={"topics": ["Technology"]})
    assert resp.status_code == 200
    assert resp.json() == []


def test_decode_image_bare_base64_defaults_to_jpeg():
    data, mime = decode_image(base64.b64encode(b"\xff\xd8").decode())
    assert data == b"\xff\xd8"
    assert mime == "image/jpeg"


def test_decode_image_explicit_mime_wins():
    payload = "data:image/png;base64," + base64.b64encode(b"x").decode()
    assert decode_image(payload, "image/webp") == (b"x", "image/webp")


def test_decode_image_empty_rejected():
    with pytest.raises(ValueError):
        decode_image("")
