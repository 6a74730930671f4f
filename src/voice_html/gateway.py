from __future__ import annotations

from typing import Optional

import httpx
from jsonschema import ValidationError, validate
from kaiano import logger as log

from .config import Config
from .errors import ErrorKind, GenerationError, GenerationResult
from .prompt import PromptPair, build_prompt
from .render import sanitize_html
from .schema import CHAT_COMPLETION_SCHEMA

LOG = log.get_logger()


def _failure(kind: ErrorKind, message: str, status_code: Optional[int] = None) -> GenerationResult:
    LOG.error(
        "HTML generation failed",
        extra={"kind": kind.value, "status": status_code, "error": message},
    )
    return GenerationResult.failure(GenerationError(kind, message, status_code))


def extract_content(body: object) -> GenerationResult:
    """Pull choices[0].message.content out of a decoded chat completion body."""

    try:
        validate(instance=body, schema=CHAT_COMPLETION_SCHEMA)
    except ValidationError as e:
        return _failure(ErrorKind.PROTOCOL, f"Malformed API response: {e.message}")

    choices = body["choices"]
    if not choices:
        return _failure(ErrorKind.EMPTY_RESULT, "No choices in API response")

    return GenerationResult.success(choices[0]["message"]["content"].strip())


class Gateway:
    """Chat-completions client for an OpenRouter/OpenAI-compatible endpoint.

    Failures come back as tagged GenerationResults. Cancellation of the
    awaiting task is not a failure and propagates to the caller.
    """

    def __init__(self, config: Config, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    async def generate(self, pair: PromptPair, model: str, api_key: str) -> GenerationResult:
        if not api_key or not api_key.strip():
            return _failure(ErrorKind.NOT_CONFIGURED, "API key not configured")
        if not model or not model.strip():
            return _failure(ErrorKind.NOT_CONFIGURED, "Model identifier not configured")

        payload = {"model": model, "messages": pair.to_messages()}
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        LOG.info(
            "Sending request to chat completions API",
            extra={"model": model, "chars": len(pair.user_instructions)},
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_s, transport=self._transport
            ) as client:
                response = await client.post(self.config.api_url, json=payload, headers=headers)
        except httpx.TransportError as e:
            return _failure(ErrorKind.TRANSPORT, f"{type(e).__name__}: {e}")
        except httpx.DecodingError as e:
            return _failure(ErrorKind.PROTOCOL, f"Undecodable API response: {e}")
        except httpx.RequestError as e:
            return _failure(ErrorKind.TRANSPORT, f"{type(e).__name__}: {e}")

        if not response.is_success:
            return _failure(
                ErrorKind.PROTOCOL,
                f"API request failed: {response.status_code} - {response.text[:500]}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            return _failure(ErrorKind.PROTOCOL, f"API response is not JSON: {e}")

        result = extract_content(body)
        if result.ok:
            LOG.info("Received completion", extra={"model": model, "chars": len(result.html)})
        return result

    async def generate_html(
        self, transcript: str, current_document: Optional[str] = None
    ) -> GenerationResult:
        """Prompt, call and sanitize using the configured model, key and policy."""

        pair = build_prompt(transcript, current_document, policy=self.config.prompt_policy)
        result = await self.generate(pair, self.config.model, self.config.api_key)
        if not result.ok:
            return result
        html = sanitize_html(result.html)
        if not html:
            return _failure(ErrorKind.EMPTY_RESULT, "Completion contained no HTML")
        return GenerationResult.success(html)
