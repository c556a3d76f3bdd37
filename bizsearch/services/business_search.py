import logging

from bizsearch.mappers.prompt_builder import build_prompt
from bizsearch.mappers.response_extractor import (
    extract_narrative,
    extract_records,
    parse_citations,
)
from bizsearch.schemas.search import SearchQuery, SearchResult
from bizsearch.services.gemini import GeminiService

logger = logging.getLogger(__name__)


class BusinessSearchService:
    def __init__(
        self,
        gemini: GeminiService,
        region: str = "Malaysia",
        min_results: int = 15,
    ):
        self._gemini = gemini
        self._region = region
        self._min_results = min_results

    @property
    def credential_configured(self) -> bool:
        return self._gemini.has_credential

    async def search(self, query: SearchQuery) -> SearchResult:
        """Ask Gemini for businesses matching the query.

        Errors from the remote call propagate unchanged; callers classify
        them. A response without a usable JSON block still succeeds, with
        an empty record list.
        """
        prompt = build_prompt(query, region=self._region, min_results=self._min_results)
        completion = await self._gemini.generate(prompt)

        records = extract_records(completion.text)
        citations = parse_citations(completion.grounding_chunks)
        if not records:
            logger.warning(
                "No business records extracted for industry=%r location=%r",
                query.industry, query.location,
            )

        logger.info(
            "Search industry=%r location=%r: %d records, %d sources",
            query.industry, query.location, len(records), len(citations),
        )
        return SearchResult(
            narrative_text=extract_narrative(completion.text),
            records=records,
            citations=citations,
            raw_text=completion.text,
        )
