class GeminiError(Exception):
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.status = status  # Google RPC status, e.g. "RESOURCE_EXHAUSTED"
        super().__init__(message)


class MissingCredentialError(Exception):
    def __init__(self, message: str = "Gemini API key is not configured"):
        self.message = message
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, service: str, message: str | None = None):
        self.service = service
        self.message = message or f"Rate limit exceeded for {service}"
        self.status_code = 429
        super().__init__(self.message)


class SearchInProgressError(Exception):
    def __init__(self):
        self.message = "A search is already running"
        super().__init__(self.message)
