import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from bizsearch.mappers.error_classifier import classify_error
from bizsearch.schemas.search import ErrorCategory, SearchQuery

from .custom import GeminiError, MissingCredentialError, RateLimitError

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 60

_STATUS_BY_CATEGORY = {
    ErrorCategory.missing_credential: 503,
    ErrorCategory.auth_failed: 502,
    ErrorCategory.quota_exceeded: 429,
    ErrorCategory.unknown: 502,
}


def _request_query(request: Request) -> SearchQuery | None:
    return getattr(request.state, "search_query", None)


def _error_response(request: Request, exc: Exception) -> JSONResponse:
    service = getattr(request.app.state, "search_service", None)
    configured = service.credential_configured if service is not None else True
    error = classify_error(exc, _request_query(request), credential_configured=configured)

    content = {"error": error.model_dump(mode="json")}
    headers = None
    if error.retryable and error.query is not None:
        content["retry"] = {
            "method": "POST",
            "path": request.url.path,
            "body": error.query.model_dump(),
        }
        headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}

    return JSONResponse(
        status_code=_STATUS_BY_CATEGORY[error.category],
        content=content,
        headers=headers,
    )


async def gemini_error_handler(request: Request, exc: GeminiError) -> JSONResponse:
    logger.error("Gemini error: %s (status=%s)", exc.message, exc.status_code)
    return _error_response(request, exc)


async def missing_credential_handler(request: Request, exc: MissingCredentialError) -> JSONResponse:
    logger.error("Gemini credential missing: %s", exc.message)
    return _error_response(request, exc)


async def rate_limit_error_handler(request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return _error_response(request, exc)

