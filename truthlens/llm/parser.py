"""JSON extraction from model responses.

Grounded calls cannot use the provider's JSON mode, so the model is only
*asked* to return raw JSON. In practice it sometimes wraps the payload in
a markdown fence or adds a sentence before or after it. This module
recovers the JSON value from such text.

Extraction never raises to the orchestrators: ``extract`` returns None on
failure and callers fall back to field-level defaults.
"""

import json
import re
from typing import Any, Optional

from truthlens.utils.logging import log, get_logger

MODULE = "llm.parser"
logger = get_logger("llm")

# Leading ```json / ```JSON / ``` and trailing ```
_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


class JSONExtractionError(Exception):
    """Raised when JSON cannot be extracted from model output."""

    def __init__(self, message: str, raw_output: str):
        super().__init__(message)
        self.raw_output = raw_output


def strip_fences(raw: str) -> str:
    """Remove a leading and/or trailing fenced-code-block marker."""
    text = raw.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def extract_json(raw: str) -> Any:
    """Extract a JSON value from model output.

    Handles:
    - Raw JSON: {"key": "value"} or [...]
    - Fenced blocks: ```json\\n{"key": "value"}\\n```
    - Preamble/trailing prose around a single object or array

    Raises:
        JSONExtractionError: If no valid JSON can be extracted
    """
    text = strip_fences(raw)

    # Try 1: strict parse of the unfenced text (the expected case)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Try 2: a fenced block somewhere inside prose
    block = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL | re.IGNORECASE)
    if block:
        try:
            return json.loads(block.group(1).strip())
        except json.JSONDecodeError:
            pass

    # Try 3: the first balanced object or array, whichever opens first
    starts = [i for i in (text.find("{"), text.find("[")) if i >= 0]
    if starts:
        start = min(starts)
        close = "}" if text[start] == "{" else "]"
        candidate = _extract_balanced(text[start:], text[start], close)
        if candidate:
            try:
                return json.loads(candidate)
            except json.JSONDecodeError:
                pass

    raise JSONExtractionError(
        f"Could not extract valid JSON from model output ({len(raw)} chars)",
        raw_output=raw,
    )


def _extract_balanced(text: str, open_char: str, close_char: str) -> Optional[str]:
    """Extract a balanced bracket expression from text starting with open_char.

    Returns None if the brackets never balance.
    """
    if not text or text[0] != open_char:
        return None

    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(text):
        if escape_next:
            escape_next = False
            continue
        if char == "\\" and in_string:
            escape_next = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[:i + 1]

    return None


def safe_extract_json(raw: Optional[str], fallback: Any = None) -> tuple[Any, Optional[str]]:
    """Extract JSON with fallback on failure.

    Returns:
        (parsed_json, None) on success, (fallback, error_message) on failure.
        Absent or blank input is a failure, not an exception.
    """
    if raw is None or not raw.strip():
        return fallback, "empty model output"
    try:
        return extract_json(raw), None
    except JSONExtractionError as e:
        log.warning(logger, MODULE, "extract_failed",
                    "Failed to extract JSON from model output",
                    error=str(e), raw_length=len(raw), raw=raw[:500])
        return fallback, str(e)


def extract(raw: Optional[str]) -> Any:
    """Recover a structured value from raw model text, or None."""
    value, _ = safe_extract_json(raw)
    return value
