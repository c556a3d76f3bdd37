import logging

import httpx

from bizsearch.exceptions.custom import GeminiError, MissingCredentialError, RateLimitError
from bizsearch.schemas.gemini import GeminiCompletion, GenerateContentResponse

logger = logging.getLogger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TEMPERATURE = 0.7
EMPTY_TEXT = "No response text found."


def generate_url(model: str) -> str:
    return f"{API_BASE}/{model}:generateContent"


def _error_body(resp: httpx.Response) -> dict:
    """Google wraps errors either as ``{"error": ...}`` or ``[{"error": ...}]``."""
    try:
        body = resp.json()
    except ValueError:
        return {}
    if isinstance(body, list) and len(body) == 1:
        body = body[0]
    if not isinstance(body, dict):
        return {}
    error = body.get("error")
    return error if isinstance(error, dict) else {}


def _error_details(resp: httpx.Response) -> tuple[str, str | None]:
    """Pull message and RPC status out of a Google API error body."""
    error = _error_body(resp)
    if not error:
        return resp.text, None
    message = error.get("message") or resp.text
    status = error.get("status")
    return f"{resp.status_code} {message}", status if isinstance(status, str) else None


class GeminiService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self._client = client
        self._api_key = api_key.strip()
        self._model = model
        self._temperature = temperature

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    async def generate(self, prompt: str) -> GeminiCompletion:
        """Run one grounded completion with the Google Search tool enabled."""
        if not self._api_key:
            raise MissingCredentialError()

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "tools": [{"google_search": {}}],
            "generationConfig": {"temperature": self._temperature},
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }

        try:
            resp = await self._client.post(
                generate_url(self._model), json=payload, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.warning("Gemini request failed: %s", exc)
            raise GeminiError(str(exc) or exc.__class__.__name__) from exc

        if resp.status_code == 429:
            message, _ = _error_details(resp)
            raise RateLimitError("Gemini", message)
        if resp.status_code >= 400:
            message, status = _error_details(resp)
            raise GeminiError(message, status_code=resp.status_code, status=status)

        try:
            data = GenerateContentResponse.model_validate(resp.json())
        except ValueError as exc:
            logger.warning("Could not decode Gemini response: %s", exc)
            raise GeminiError("Unexpected Gemini response body") from exc

        return self._to_completion(data)

    @staticmethod
    def _to_completion(data: GenerateContentResponse) -> GeminiCompletion:
        if not data.candidates:
            logger.warning("Gemini returned no candidates")
            return GeminiCompletion(text=EMPTY_TEXT)

        candidate = data.candidates[0]
        parts = candidate.content.parts if candidate.content else []
        text = "".join(p.text for p in parts if p.text)

        chunks = []
        if candidate.groundingMetadata:
            chunks = candidate.groundingMetadata.groundingChunks

        return GeminiCompletion(text=text or EMPTY_TEXT, grounding_chunks=chunks)
