"""Model invocation package.

  from truthlens.llm import invoke_model, extract, reconcile_sources

  response = await invoke_model(invoker, request, activity_name="verify_text")
  data = extract(response.text)                      # None on malformed output
  sources = reconcile_sources(data.get("sources"), response.grounding_chunks)

Architecture:
  client.py  → provider boundary (ModelRequest/ModelResponse, GeminiClient)
  invoker.py → single-shot invocation with timing and error wrapping
  parser.py  → JSON extraction from raw model output
  sources.py → merge model-asserted sources with grounding citations
"""

from truthlens.llm.client import (
    GEMINI_MODEL,
    GeminiClient,
    ImagePart,
    ModelInvoker,
    ModelRequest,
    ModelResponse,
    get_client,
)
from truthlens.llm.invoker import invoke_model
from truthlens.llm.parser import (
    JSONExtractionError,
    extract,
    extract_json,
    safe_extract_json,
    strip_fences,
)
from truthlens.llm.sources import reconcile_sources

__all__ = [
    # Client
    "GEMINI_MODEL",
    "GeminiClient",
    "ImagePart",
    "ModelInvoker",
    "ModelRequest",
    "ModelResponse",
    "get_client",
    # Invoker
    "invoke_model",
    # Parser
    "JSONExtractionError",
    "extract",
    "extract_json",
    "safe_extract_json",
    "strip_fences",
    # Sources
    "reconcile_sources",
]
