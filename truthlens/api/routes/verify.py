"""Claim verification endpoints."""

import base64
import binascii
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from truthlens.api.deps import get_verification_service
from truthlens.errors import VerificationError
from truthlens.schemas import ImageClaimSubmit, TextClaimSubmit, VerificationResult
from truthlens.utils.logging import log, get_logger
from truthlens.workflows.verify import VerificationService

MODULE = "api.verify"
logger = get_logger("api")

router = APIRouter()

DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def decode_image(payload: str, mime_type: Optional[str] = None) -> tuple[bytes, str]:
    """Decode a bare base64 string or a data URL into (bytes, mime type).

    Raises:
        ValueError: Not valid base64, or empty
    """
    match = DATA_URL.match(payload.strip())
    if match:
        mime_type = mime_type or match.group("mime")
        payload = match.group("data")
    try:
        data = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image payload: {e}") from e
    if not data:
        raise ValueError("Image payload is empty")
    return data, mime_type or "image/jpeg"


def _http_error(e: VerificationError) -> HTTPException:
    if e.missing_credential:
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=502, detail=f"{e} Check your API key and quota.")


@router.post("/text", response_model=VerificationResult)
async def verify_text(
    body: TextClaimSubmit,
    service: VerificationService = Depends(get_verification_service),
):
    """Verify a written claim."""
    try:
        return await service.verify_text(body.claim)
    except VerificationError as e:
        raise _http_error(e)


@router.post("/image", response_model=VerificationResult)
async def verify_image(
    body: ImageClaimSubmit,
    service: VerificationService = Depends(get_verification_service),
):
    """Verify an image, with an optional caption for context."""
    try:
        data, mime_type = decode_image(body.image, body.mime_type)
    except ValueError as e:
        log.warning(logger, MODULE, "invalid_image", "Rejected image payload", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await service.verify_image(data, caption=body.caption, mime_type=mime_type)
    except VerificationError as e:
        raise _http_error(e)
