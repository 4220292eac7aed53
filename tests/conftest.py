"""Shared fixtures: a scripted, recording stand-in for the model provider."""

import json
from typing import Any, Union

import pytest

from truthlens.llm import ModelRequest, ModelResponse


class FakeInvoker:
    """ModelInvoker that replays scripted responses and records every request.

    Each scripted entry is a ModelResponse, a str (response text), a JSON-able
    value (serialized as the text), or an Exception (raised).
    """

    def __init__(self, *script: Union[ModelResponse, str, Exception, Any]):
        self.script = list(script)
        self.requests: list[ModelRequest] = []

    async def invoke(self, request: ModelRequest) -> ModelResponse:
        self.requests.append(request)
        if not self.script:
            raise AssertionError("FakeInvoker called more times than scripted")
        entry = self.script.pop(0)
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, ModelResponse):
            return entry
        if isinstance(entry, str):
            return ModelResponse(text=entry)
        return ModelResponse(text=json.dumps(entry))

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_invoker():
    return FakeInvoker
