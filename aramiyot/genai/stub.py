"""
Deterministic generative backend for development and tests.

Responses are keyed by prompt name:

- ``None``: the model returns no output
- ``str``: a single text (streamed as one chunk)
- ``list``: stream chunks, concatenated for ``generate``; an exception
  instance in the list is raised when the stream reaches it
- ``dict``: structured output, returned as JSON text
- an exception instance: raised on call
"""
import asyncio
import json
from typing import Any, AsyncIterator, Dict, List, Optional

from ..errors import GenerationError
from ..utils.logger import setup_logger
from .client import GenerativeClient
from .prompts import RenderedPrompt

logger = setup_logger(__name__)

DEFAULT_RESPONSES: Dict[str, Any] = {
    "aiHealthChatbotPrompt": [
        "Thanks for your question. ",
        "This is a development response from the stub backend. ",
        "Please consult a healthcare professional for specific medical advice.",
    ],
    "personalizedRecommendationsPrompt": {
        "recommendations": [
            "Try a 10-minute guided breathing session before bed.",
            "Add a short morning yoga flow to your routine.",
            "Keep a water bottle nearby and aim for 8 glasses a day.",
        ]
    },
    "hospitalSuggestionPrompt": {
        "suggestions": [
            {
                "serviceOrSpecialty": "General Consultation",
                "reason": "A general practitioner can assess your symptoms and refer you if needed.",
            }
        ],
        "additionalAdvice": "",
    },
}


class StubGenerativeClient(GenerativeClient):
    """Replays canned responses and records the prompts it receives"""

    def __init__(self, responses: Optional[Dict[str, Any]] = None, chunk_delay: float = 0.0):
        self.responses = dict(DEFAULT_RESPONSES if responses is None else responses)
        self.chunk_delay = chunk_delay
        self.calls: List[RenderedPrompt] = []

    def _lookup(self, prompt: RenderedPrompt) -> Any:
        self.calls.append(prompt)
        if prompt.name not in self.responses:
            raise GenerationError(f"No stub response configured for prompt '{prompt.name}'")
        value = self.responses[prompt.name]
        if isinstance(value, BaseException):
            raise value
        return value

    async def generate(self, prompt: RenderedPrompt) -> Optional[str]:
        value = self._lookup(prompt)

        if value is None:
            return None
        if isinstance(value, dict):
            return json.dumps(value)
        if isinstance(value, list):
            for item in value:
                if isinstance(item, BaseException):
                    raise item
            return "".join(value)
        return str(value)

    async def generate_stream(self, prompt: RenderedPrompt) -> AsyncIterator[str]:
        value = self._lookup(prompt)

        if value is None:
            return
        if isinstance(value, dict):
            chunks = [json.dumps(value)]
        elif isinstance(value, list):
            chunks = value
        else:
            chunks = [str(value)]

        for chunk in chunks:
            if isinstance(chunk, BaseException):
                logger.debug(f"Stub raising mid-stream for prompt '{prompt.name}'")
                raise chunk
            if self.chunk_delay:
                await asyncio.sleep(self.chunk_delay)
            yield chunk
