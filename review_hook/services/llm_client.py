"""
LLM Client - talks to a local Ollama server over its /api/generate endpoint
"""
from typing import Optional

import httpx
from pydantic import ValidationError

from review_hook.prompts.review_prompts import get_review_system_prompt, get_review_user_prompt
from review_hook.schemas.review_responses import GenerateRequest, GenerateResponse, Verdict
from review_hook.utils.settings import Settings


class LLMClientError(Exception):
    """Base class for every per-file failure of the client."""


class LLMRequestError(LLMClientError):
    """The request could not be sent or the server answered with an error status."""


class ResponseDecodeError(LLMClientError):
    """The outer /api/generate envelope is not valid JSON or lacks `response`."""


class VerdictDecodeError(LLMClientError):
    """The `response` string does not hold a valid verdict."""


class OllamaClient:
    """
    Blocking client for Ollama's generate endpoint.

    One POST per file, no streaming, no timeout and no retries.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.settings = settings
        self.system_prompt = get_review_system_prompt(settings.language)
        self._http = http_client or httpx.Client(timeout=None)

    def build_request(self, filename: str, content: str) -> GenerateRequest:
        return GenerateRequest(
            model=self.settings.model,
            system=self.system_prompt,
            prompt=get_review_user_prompt(filename, content),
            format="json",
            stream=False,
        )

    def post_generate(self, request: GenerateRequest) -> bytes:
        """
        POST the request and return the raw response body.

        Raises:
            LLMRequestError: on transport failure or a non-2xx status
        """
        try:
            res = self._http.post(
                f"{self.settings.base_url}/api/generate",
                content=request.model_dump_json(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise LLMRequestError(f"error calling ollama: {e}") from e

        if res.is_error:
            raise LLMRequestError(
                f"ollama returned HTTP {res.status_code}: {_error_message(res)}"
            )
        return res.content

    def query(self, filename: str, content: str) -> Verdict:
        """Ask the model whether `content` follows best practices."""
        return self.send(self.build_request(filename, content))

    def send(self, request: GenerateRequest) -> Verdict:
        """
        Send a prepared request and decode the verdict.

        The body is decoded twice: first the envelope, then the JSON
        string held in its `response` field.

        Raises:
            LLMRequestError, ResponseDecodeError, VerdictDecodeError
        """
        body = self.post_generate(request)
        envelope = decode_envelope(body)
        return decode_verdict(envelope.response)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def decode_envelope(body) -> GenerateResponse:
    try:
        return GenerateResponse.model_validate_json(body)
    except ValidationError as e:
        raise ResponseDecodeError(f"error unmarshalling response: {e}") from e


def decode_verdict(raw: str) -> Verdict:
    try:
        return Verdict.model_validate_json(raw)
    except ValidationError as e:
        raise VerdictDecodeError(f"error unmarshalling LLM response: {e}") from e


def _error_message(res: httpx.Response) -> str:
    # Ollama reports failures as {"error": "..."}
    try:
        payload = res.json()
    except ValueError:
        return res.text.strip() or res.reason_phrase
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return res.text.strip()
