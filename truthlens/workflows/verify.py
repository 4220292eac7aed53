"""Claim verification workflow.

One user action, one model call:

  build prompt (verify-text | verify-image, grounding on)
    → invoke model once
    → extract JSON (None on malformed output)
    → reconcile model sources with grounding citations
    → normalize into a VerificationResult

Normalization is total: whatever the model returned, a VerificationResult
comes out. The only failures are a missing credential and a failed provider
call, and both surface as a single VerificationError. Nothing is retried.
"""

from typing import Any, Optional

from truthlens.errors import MissingCredentialError, ProviderCallError, VerificationError
from truthlens.llm import (
    GEMINI_MODEL,
    ImagePart,
    ModelInvoker,
    ModelResponse,
    get_client,
    invoke_model,
    reconcile_sources,
    safe_extract_json,
)
from truthlens.prompts.builder import PromptKind, build_prompt
from truthlens.schemas.domain import AnalysisType, VerdictType, VerificationResult
from truthlens.schemas.llm_outputs import VerificationOutput
from truthlens.utils.logging import log, get_logger

MODULE = "verify"
logger = get_logger("verify")

DEFAULT_SUMMARIES: dict[str, str] = {
    "TEXT": "Agent could not verify this claim.",
    "IMAGE": "Image analysis inconclusive.",
}

FAILURE_MESSAGES: dict[str, str] = {
    "TEXT": "TruthLens agent failed to verify text.",
    "IMAGE": "TruthLens agent failed to analyze image.",
}


def normalize_verification(response: ModelResponse, analysis_type: AnalysisType) -> VerificationResult:
    """Map a raw model response onto a VerificationResult, defaulting every missing field."""
    data, error = safe_extract_json(response.text)
    if not isinstance(data, dict):
        log.warning(logger, MODULE, "normalize_fallback",
                    "Model output unusable, using defaults",
                    analysis_type=analysis_type, error=error,
                    payload_type=type(data).__name__ if data is not None else None)

    output = VerificationOutput.from_payload(data)
    sources = reconcile_sources(output.sources, response.grounding_chunks)

    return VerificationResult(
        verdict=VerdictType.coerce(output.verdict),
        confidence=output.confidence,
        summary=output.summary or DEFAULT_SUMMARIES[analysis_type],
        evidence=tuple(output.evidence),
        sources=tuple(sources),
        analysis_type=analysis_type,
    )


class VerificationService:
    """Verification orchestrator. Safe to share between concurrent callers.

    Args:
        api_key: Provider credential; None or empty makes every call fail fast
        invoker: Override the provider (tests); defaults to a Gemini client
        model: Model id for every call
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        invoker: Optional[ModelInvoker] = None,
        model: str = GEMINI_MODEL,
    ):
        self._api_key = api_key or None
        self._model = model
        if invoker is None and self._api_key:
            invoker = get_client(self._api_key)
        self._invoker = invoker

    @property
    def configured(self) -> bool:
        return self._api_key is not None

    def _require_invoker(self, analysis_type: AnalysisType) -> ModelInvoker:
        if self._api_key is None or self._invoker is None:
            log.warning(logger, MODULE, "credential_missing",
                        "Verification requested without an API key",
                        analysis_type=analysis_type)
            raise VerificationError(
                "API key missing: configure a Gemini API key to verify claims.",
                analysis_type=analysis_type,
            ) from MissingCredentialError()
        return self._invoker

    async def _run(self, prompt_kind: PromptKind, analysis_type: AnalysisType,
                   image: Optional[ImagePart] = None, **params: Any) -> VerificationResult:
        invoker = self._require_invoker(analysis_type)
        spec = build_prompt(prompt_kind, **params)

        try:
            response = await invoke_model(
                invoker,
                spec.to_request(model=self._model, image=image),
                activity_name=prompt_kind.value,
            )
        except ProviderCallError as e:
            log.error(logger, MODULE, "verify_failed", FAILURE_MESSAGES[analysis_type],
                      error=str(e), error_type=e.error_type, analysis_type=analysis_type)
            raise VerificationError(FAILURE_MESSAGES[analysis_type], analysis_type=analysis_type) from e

        result = normalize_verification(response, analysis_type)
        log.info(logger, MODULE, "verify_done", "Verification complete",
                 analysis_type=analysis_type, verdict=result.verdict.value,
                 confidence=result.confidence, sources=len(result.sources))
        return result

    async def verify_text(self, claim: str) -> VerificationResult:
        """Verify a written claim against live search results.

        Raises:
            VerificationError: No credential, or the provider call failed
            ValueError: Blank claim
        """
        log.info(logger, MODULE, "verify_start", "Verifying text claim",
                 claim=claim[:80] if claim else None)
        return await self._run(PromptKind.VERIFY_TEXT, "TEXT", claim=claim)

    async def verify_image(
        self,
        image_bytes: bytes,
        caption: Optional[str] = None,
        mime_type: str = "image/jpeg",
    ) -> VerificationResult:
        """Run forensic and reverse-search analysis on an image.

        The image travels as a separate content part next to the instruction
        text, in the same single call.

        Raises:
            VerificationError: No credential, or the provider call failed
            ValueError: Empty image payload
        """
        if not image_bytes:
            raise ValueError("Image payload must not be empty")
        log.info(logger, MODULE, "verify_start", "Verifying image",
                 size=len(image_bytes), mime_type=mime_type, has_caption=bool(caption))
        image = ImagePart(data=image_bytes, mime_type=mime_type)
        return await self._run(PromptKind.VERIFY_IMAGE, "IMAGE", image=image, caption=caption)
