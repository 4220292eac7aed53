"""Error taxonomy for the orchestration layer.

Parsing and shape problems never show up here: they are recovered locally
with defaults. Only credential and connectivity problems become exceptions.
"""

from typing import Optional


class TruthLensError(Exception):
    """Base class for all TruthLens errors."""


class MissingCredentialError(TruthLensError):
    """Raised when an orchestrator is invoked without an API key.

    Always raised before any network attempt.
    """

    def __init__(self, message: str = "API key missing"):
        super().__init__(message)


class ProviderCallError(TruthLensError):
    """Raised when the model provider call fails (network, auth, quota)."""

    def __init__(self, message: str, activity: str = "invoke", error_type: Optional[str] = None):
        super().__init__(message)
        self.activity = activity
        self.error_type = error_type


class VerificationError(TruthLensError):
    """Terminal failure of a verification call.

    The underlying MissingCredentialError or ProviderCallError is chained
    as __cause__.
    """

    def __init__(self, message: str, analysis_type: str = "TEXT"):
        super().__init__(message)
        self.analysis_type = analysis_type

    @property
    def missing_credential(self) -> bool:
        return isinstance(self.__cause__, MissingCredentialError)
