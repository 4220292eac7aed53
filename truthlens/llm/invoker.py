"""Single-shot model invocation.

Every model call in the pipelines goes through ``invoke_model``:

  1. INVOKE: hand the request to the injected ModelInvoker
  2. TIME: log latency and raw length
  3. WRAP: any provider exception becomes ProviderCallError

No retry: a failed or slow call surfaces exactly once, and
the orchestrators decide whether that is a terminal failure (verification)
or an empty result (feed).
"""

import time

from truthlens.errors import ProviderCallError
from truthlens.llm.client import ModelInvoker, ModelRequest, ModelResponse
from truthlens.utils.logging import log, get_logger

MODULE = "llm.invoker"
logger = get_logger("llm")


async def invoke_model(
    invoker: ModelInvoker,
    request: ModelRequest,
    *,
    activity_name: str = "invoke",
) -> ModelResponse:
    """Invoke the model once and return its raw response.

    Args:
        invoker: The provider capability
        request: Fully-built request
        activity_name: Name for logging context (e.g. "collect", "verify_text")

    Raises:
        ProviderCallError: If the provider call raises for any reason
    """
    log.debug(logger, MODULE, "llm_request", f"Calling model for {activity_name}",
              model=request.model, grounding=request.enable_search_grounding,
              structured=request.enforce_structured_output,
              has_image=request.image is not None, prompt_length=len(request.prompt))

    t0 = time.monotonic()
    try:
        response = await invoker.invoke(request)
    except Exception as e:
        log.error(logger, MODULE, "invoke_failed",
                  f"Model call failed for {activity_name}",
                  error=str(e), error_type=type(e).__name__)
        raise ProviderCallError(
            f"Model call failed for {activity_name}: {e}",
            activity=activity_name,
            error_type=type(e).__name__,
        ) from e

    latency_ms = int((time.monotonic() - t0) * 1000)
    log.info(logger, MODULE, "llm_response",
             f"Model call complete for {activity_name}",
             latency_ms=latency_ms, raw_length=len(response.text),
             grounding_chunks=len(response.grounding_chunks))
    return response
