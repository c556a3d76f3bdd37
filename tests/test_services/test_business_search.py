from unittest.mock import AsyncMock, MagicMock

import pytest

from bizsearch.exceptions.custom import GeminiError
from bizsearch.schemas.gemini import GeminiCompletion, GroundingChunk, GroundingSource
from bizsearch.schemas.search import SearchQuery
from bizsearch.services.business_search import BusinessSearchService

PENANG_TEXT = (
    "Penang has many bakeries.\n"
    "```json\n"
    '[{"name":"ABC Bakery","industry":"Bakery","phone":"+60-4-1234567",'
    '"address":"1 Main St, Penang","email":"","website":"https://abc.my"}]\n'
    "```"
)


def _gemini(completion=None, side_effect=None):
    gemini = MagicMock()
    gemini.has_credential = True
    gemini.generate = AsyncMock(return_value=completion, side_effect=side_effect)
    return gemini


async def test_search_penang_bakeries():
    chunks = [GroundingChunk(web=GroundingSource(uri="https://abc.my", title="ABC"))]
    gemini = _gemini(GeminiCompletion(text=PENANG_TEXT, grounding_chunks=chunks))
    service = BusinessSearchService(gemini)

    result = await service.search(SearchQuery(industry="bakery", location="Penang"))

    assert result.narrative_text == "Penang has many bakeries.\n"
    assert len(result.records) == 1
    record = result.records[0]
    assert record.name == "ABC Bakery"
    assert record.industry == "Bakery"
    assert record.phone == "+60-4-1234567"
    assert record.address == "1 Main St, Penang"
    assert record.email == ""
    assert record.website == "https://abc.my"
    assert [c.uri for c in result.citations] == ["https://abc.my"]
    assert result.raw_text == PENANG_TEXT


async def test_search_passes_prompt_with_query_values():
    gemini = _gemini(GeminiCompletion(text="nothing"))
    service = BusinessSearchService(gemini, region="Singapore", min_results=3)

    await service.search(SearchQuery(industry="bakery", location="Penang"))

    prompt = gemini.generate.await_args.args[0]
    assert '"bakery"' in prompt
    assert '"Penang"' in prompt
    assert "Singapore" in prompt


async def test_search_without_block_succeeds_with_no_records():
    gemini = _gemini(GeminiCompletion(text="I could not find structured data."))
    service = BusinessSearchService(gemini)

    result = await service.search(SearchQuery(industry="bakery"))

    assert result.records == []
    assert result.narrative_text == "I could not find structured data."


async def test_search_propagates_remote_errors():
    gemini = _gemini(side_effect=GeminiError("429 Too Many Requests"))
    service = BusinessSearchService(gemini)

    with pytest.raises(GeminiError):
        await service.search(SearchQuery(industry="bakery"))


def test_credential_configured_reflects_client():
    gemini = _gemini()
    gemini.has_credential = False
    assert BusinessSearchService(gemini).credential_configured is False
