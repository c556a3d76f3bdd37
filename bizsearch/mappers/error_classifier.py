from bizsearch.exceptions.custom import GeminiError, MissingCredentialError, RateLimitError
from bizsearch.schemas.search import ErrorCategory, SearchError, SearchQuery

MESSAGES = {
    ErrorCategory.missing_credential: (
        "The Gemini API key is not configured. Set the GEMINI_API_KEY "
        "(or API_KEY) environment variable in your deployment settings "
        "and redeploy the service."
    ),
    ErrorCategory.auth_failed: (
        "The Gemini API key was rejected. Check that the key is valid and "
        "enabled in Google AI Studio, then redeploy the service."
    ),
    ErrorCategory.quota_exceeded: (
        "The Gemini API quota has been exceeded. Wait a minute and try the "
        "same search again."
    ),
    ErrorCategory.unknown: (
        "The search could not be completed. Check your connection and try "
        "again later."
    ),
}

_AUTH_STATUSES = frozenset({"UNAUTHENTICATED", "PERMISSION_DENIED"})
_QUOTA_STATUSES = frozenset({"RESOURCE_EXHAUSTED"})

# Last-resort markers for errors with no status code, or a bare 400
# (Gemini reports a bad key as 400 "API key not valid")
_SNIFFED_STATUS_CODES = frozenset({None, 400})
_AUTH_MARKERS = ("401", "403", "api key not valid", "unauthorized", "unauthenticated", "permission")
_QUOTA_MARKERS = ("429", "quota", "resource_exhausted", "too many requests")


def _from_status(status_code: int | None, status: str | None) -> ErrorCategory | None:
    if status_code == 429 or status in _QUOTA_STATUSES:
        return ErrorCategory.quota_exceeded
    if status_code in (401, 403) or status in _AUTH_STATUSES:
        return ErrorCategory.auth_failed
    return None


def _from_text(text: str) -> ErrorCategory:
    lowered = text.lower()
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return ErrorCategory.auth_failed
    if any(marker in lowered for marker in _QUOTA_MARKERS):
        return ErrorCategory.quota_exceeded
    return ErrorCategory.unknown


def categorize(exc: BaseException, credential_configured: bool = True) -> ErrorCategory:
    if not credential_configured or isinstance(exc, MissingCredentialError):
        return ErrorCategory.missing_credential
    if isinstance(exc, RateLimitError):
        return ErrorCategory.quota_exceeded
    if isinstance(exc, GeminiError):
        category = _from_status(exc.status_code, exc.status)
        if category is not None:
            return category
        if exc.status_code not in _SNIFFED_STATUS_CODES:
            return ErrorCategory.unknown
    return _from_text(str(exc))


def classify_error(
    exc: BaseException,
    query: SearchQuery | None = None,
    credential_configured: bool = True,
) -> SearchError:
    category = categorize(exc, credential_configured)
    return SearchError(
        category=category,
        message=MESSAGES[category],
        detail=str(exc) or exc.__class__.__name__,
        retryable=category is ErrorCategory.quota_exceeded,
        query=query,
    )
