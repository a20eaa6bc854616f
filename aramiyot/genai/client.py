"""
Generative AI backend client for the Google Generative Language REST API
"""
import json
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Dict, Any, List

import httpx

from ..errors import GenerationError
from ..utils.logger import setup_logger
from .prompts import RenderedPrompt

logger = setup_logger(__name__)


class GenerativeClient:
    """
    Interface of a generative backend.

    ``generate`` returns the complete model text (``None`` when the model
    produced nothing); ``generate_stream`` yields text increments in model
    order. Both raise ``GenerationError`` on backend failure.
    """

    async def generate(self, prompt: RenderedPrompt) -> Optional[str]:
        raise NotImplementedError

    def generate_stream(self, prompt: RenderedPrompt) -> AsyncIterator[str]:
        raise NotImplementedError


class GoogleGenerativeClient(GenerativeClient):
    """Google Generative Language API client (generateContent / streamGenerateContent)"""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

        logger.info(f"Generative client initialized for model: {self.model}")

    @property
    def model_url(self) -> str:
        return f"{self.api_base}/models/{self.model}"

    @asynccontextmanager
    async def _client(self):
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    def _build_payload(self, prompt: RenderedPrompt) -> Dict[str, Any]:
        """Build the request body for a rendered prompt"""
        parts: List[Dict[str, Any]] = [{"text": prompt.text}]
        for media in prompt.media:
            if media.is_inline:
                parts.append({"inline_data": {"mime_type": media.mime_type, "data": media.data}})
            else:
                parts.append({"file_data": {"file_uri": media.url}})

        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": parts}]
        }

        if prompt.response_schema:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": prompt.response_schema,
            }

        return payload

    @staticmethod
    def _extract_text(event_data: Dict[str, Any]) -> str:
        """Concatenate the text parts of the first candidate"""
        feedback = event_data.get("promptFeedback") or {}
        if feedback.get("blockReason"):
            logger.warning(f"Prompt blocked by generative backend: {feedback['blockReason']}")

        candidates = event_data.get("candidates") or []
        if not candidates:
            return ""

        content = candidates[0].get("content") or {}
        return "".join(part.get("text", "") for part in content.get("parts") or [])

    @staticmethod
    def _status_error(status_code: int) -> GenerationError:
        if status_code in (401, 403):
            return GenerationError("Generative backend rejected the API key", status_code)
        if status_code == 429:
            return GenerationError("Generative backend rate limit exceeded", status_code)
        return GenerationError(f"Generative backend error: HTTP {status_code}", status_code)

    async def generate(self, prompt: RenderedPrompt) -> Optional[str]:
        """
        Submit a prompt and return the complete model text

        Args:
            prompt: Rendered prompt

        Returns:
            Model text, or None when the model returned no content
        """
        logger.info(f"Generating for prompt '{prompt.name}' ({len(prompt.text)} chars, {len(prompt.media)} media)")

        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.model_url}:generateContent",
                    headers=self._headers(),
                    json=self._build_payload(prompt),
                )
        except httpx.TimeoutException as e:
            logger.error(f"Generative backend timeout for prompt '{prompt.name}'")
            raise GenerationError("Request timeout - generative backend did not respond in time") from e
        except httpx.RequestError as e:
            logger.error(f"Generative backend request error: {e}")
            raise GenerationError(f"Network error: {e}") from e

        if response.status_code != 200:
            logger.error(f"Generative backend returned HTTP {response.status_code}: {response.text[:500]}")
            raise self._status_error(response.status_code)

        try:
            text = self._extract_text(response.json())
        except ValueError as e:
            raise GenerationError("Generative backend returned a non-JSON body") from e

        return text or None

    async def generate_stream(self, prompt: RenderedPrompt) -> AsyncIterator[str]:
        """
        Submit a prompt and yield text increments as they arrive

        Args:
            prompt: Rendered prompt

        Yields:
            Non-empty text chunks in model order
        """
        logger.info(f"Streaming generation for prompt '{prompt.name}'")

        try:
            async with self._client() as client:
                async with client.stream(
                    "POST",
                    f"{self.model_url}:streamGenerateContent",
                    params={"alt": "sse"},
                    headers=self._headers(),
                    json=self._build_payload(prompt),
                ) as response:

                    if response.status_code != 200:
                        body = await response.aread()
                        logger.error(f"Generative backend returned HTTP {response.status_code}: {body[:500]!r}")
                        raise self._status_error(response.status_code)

                    # Server-Sent Events: one JSON payload per "data:" line
                    buffer = ""
                    async for chunk in response.aiter_text():
                        buffer += chunk

                        while '\n' in buffer:
                            line, buffer = buffer.split('\n', 1)
                            text = self._parse_sse_line(line)
                            if text:
                                yield text

                    text = self._parse_sse_line(buffer)
                    if text:
                        yield text

        except httpx.TimeoutException as e:
            logger.error(f"Generative backend streaming timeout for prompt '{prompt.name}'")
            raise GenerationError("Request timeout - generative backend did not respond in time") from e
        except httpx.RequestError as e:
            logger.error(f"Generative backend streaming request error: {e}")
            raise GenerationError(f"Network error: {e}") from e

    def _parse_sse_line(self, line: str) -> str:
        line = line.strip()
        if not line.startswith('data:'):
            return ""

        data_json = line[5:].strip()
        if not data_json:
            return ""

        try:
            event_data = json.loads(data_json)
        except json.JSONDecodeError:
            logger.debug(f"Skipping malformed stream event: {data_json[:100]}")
            return ""

        return self._extract_text(event_data)
