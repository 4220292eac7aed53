"""Model client configuration.

The provider is treated as a black box with one capability:

  given a prompt (text, optionally plus an image) and an optional
  grounding / structured-output configuration, return a text completion
  and, when grounding was on, the web citations it consulted.

That capability is the ``ModelInvoker`` protocol. ``GeminiClient`` is the
production implementation on top of the google-genai SDK; tests pass in a
scripted fake instead.

Gemini cannot combine the Google Search tool with JSON response mode in
one call, so ``ModelRequest`` refuses to carry both.
"""

import os
from typing import Any, Optional, Protocol

from google import genai
from google.genai import types
from pydantic import BaseModel, Field, model_validator

from truthlens.utils.logging import log, get_logger

MODULE = "llm"
logger = get_logger("llm")

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))


class ImagePart(BaseModel):
    """Decoded image payload sent alongside the instruction text."""
    data: bytes
    mime_type: str = "image/jpeg"


class ModelRequest(BaseModel):
    """One call to the model."""
    model: str = GEMINI_MODEL
    prompt: str
    system_instruction: Optional[str] = None
    image: Optional[ImagePart] = None
    enable_search_grounding: bool = False
    enforce_structured_output: bool = False
    output_schema: Optional[dict] = None
    temperature: float = GEMINI_TEMPERATURE

    @model_validator(mode="after")
    def grounding_excludes_json_mode(self) -> "ModelRequest":
        if self.enable_search_grounding and self.enforce_structured_output:
            raise ValueError("Search grounding and structured output cannot be combined in one call")
        return self


class ModelResponse(BaseModel):
    """Text completion plus grounding chunks as plain {"web": {"title", "uri"}} dicts."""
    text: str = ""
    grounding_chunks: list[dict] = Field(default_factory=list)


class ModelInvoker(Protocol):
    async def invoke(self, request: ModelRequest) -> ModelResponse: ...


def _grounding_chunks(response: Any) -> list[dict]:
    """Pull grounding citations off the first candidate, if any."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    result = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if web is None:
            continue
        result.append({"web": {"title": getattr(web, "title", None), "uri": getattr(web, "uri", None)}})
    return result


class GeminiClient:
    """ModelInvoker backed by the google-genai async client."""

    def __init__(self, api_key: str):
        self._client = genai.Client(api_key=api_key)
        log.debug(logger, MODULE, "client_init", "Gemini client created",
                  default_model=GEMINI_MODEL)

    def _config(self, request: ModelRequest) -> types.GenerateContentConfig:
        options: dict[str, Any] = {
            "system_instruction": request.system_instruction,
            "temperature": request.temperature,
        }
        if request.enable_search_grounding:
            options["tools"] = [types.Tool(google_search=types.GoogleSearch())]
        if request.enforce_structured_output:
            options["response_mime_type"] = "application/json"
            if request.output_schema:
                options["response_schema"] = request.output_schema
        return types.GenerateContentConfig(**options)

    def _contents(self, request: ModelRequest) -> Any:
        if request.image is None:
            return request.prompt
        return [
            types.Part.from_bytes(data=request.image.data, mime_type=request.image.mime_type),
            types.Part.from_text(text=request.prompt),
        ]

    async def invoke(self, request: ModelRequest) -> ModelResponse:
        response = await self._client.aio.models.generate_content(
            model=request.model,
            contents=self._contents(request),
            config=self._config(request),
        )
        return ModelResponse(
            text=response.text or "",
            grounding_chunks=_grounding_chunks(response),
        )


def get_client(api_key: str) -> GeminiClient:
    """Get a Gemini-backed invoker for the given credential."""
    return GeminiClient(api_key=api_key)
