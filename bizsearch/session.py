from __future__ import annotations

import logging

from pydantic import ValidationError

from bizsearch.exceptions.custom import SearchInProgressError
from bizsearch.mappers.error_classifier import classify_error
from bizsearch.schemas.search import SearchError, SearchQuery, SearchResult
from bizsearch.services.business_search import BusinessSearchService

logger = logging.getLogger(__name__)


class SearchSession:
    """Form state for one user: the inputs and the latest outcome.

    At most one of ``result`` and ``error`` is set. Both are cleared when
    a new attempt starts.
    """

    def __init__(self, service: BusinessSearchService, industry: str = "", location: str = ""):
        self._service = service
        self.industry = industry
        self.location = location
        self.loading = False
        self.last_query: SearchQuery | None = None
        self.result: SearchResult | None = None
        self.error: SearchError | None = None

    @property
    def can_retry(self) -> bool:
        return (
            not self.loading
            and self.error is not None
            and self.error.retryable
            and self.last_query is not None
        )

    def build_query(self) -> SearchQuery | None:
        try:
            return SearchQuery(industry=self.industry, location=self.location)
        except ValidationError:
            return None

    async def submit(self) -> bool:
        """Run a search for the current fields. Returns False for a blank form."""
        query = self.build_query()
        if query is None:
            return False
        await self._run(query)
        return True

    async def retry(self) -> None:
        if not self.can_retry:
            raise RuntimeError("Nothing to retry")
        await self._run(self.last_query)

    async def _run(self, query: SearchQuery) -> None:
        if self.loading:
            raise SearchInProgressError()

        self.loading = True
        self.result = None
        self.error = None
        self.last_query = query
        try:
            self.result = await self._service.search(query)
        except Exception as exc:
            self.error = classify_error(
                exc, query, credential_configured=self._service.credential_configured
            )
            logger.error(
                "Search failed (%s): %s", self.error.category.value, self.error.detail
            )
        finally:
            self.loading = False
