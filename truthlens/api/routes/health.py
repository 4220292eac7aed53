"""Health check endpoint."""

from fastapi import APIRouter, Depends

from truthlens import __version__
from truthlens.api.deps import get_verification_service
from truthlens.workflows.verify import VerificationService

router = APIRouter()


@router.get("/health")
async def health(service: VerificationService = Depends(get_verification_service)):
    # Still "ok" without a key: the process is up, model-backed routes answer 503
    return {
        "status": "ok",
        "service": "truthlens",
        "version": __version__,
        "model_configured": service.configured,
    }


@router.get("/")
async def root():
    return {"service": "truthlens", "version": __version__}
