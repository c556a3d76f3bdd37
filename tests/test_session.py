import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from bizsearch.exceptions.custom import GeminiError, MissingCredentialError, SearchInProgressError
from bizsearch.schemas.search import ErrorCategory, SearchQuery, SearchResult
from bizsearch.session import SearchSession


def _service(**kwargs):
    service = MagicMock()
    service.credential_configured = True
    service.search = AsyncMock(**kwargs)
    return service


async def test_submit_success():
    result = SearchResult(narrative_text="ok")
    service = _service(return_value=result)
    session = SearchSession(service, industry=" bakery ", location="Penang")

    assert await session.submit() is True
    assert session.result == result
    assert session.error is None
    assert session.loading is False
    service.search.assert_awaited_once_with(SearchQuery(industry="bakery", location="Penang"))


async def test_blank_form_is_noop():
    service = _service()
    session = SearchSession(service, industry="  ", location="")

    assert await session.submit() is False
    service.search.assert_not_awaited()


async def test_failure_sets_error_not_result():
    service = _service(side_effect=GeminiError("401 Unauthorized", status_code=401))
    session = SearchSession(service, industry="bakery")

    await session.submit()

    assert session.result is None
    assert session.error.category == ErrorCategory.auth_failed
    assert session.can_retry is False


async def test_missing_credential_wins_when_unconfigured():
    service = _service(side_effect=MissingCredentialError())
    service.credential_configured = False
    session = SearchSession(service, location="Penang")

    await session.submit()

    assert session.error.category == ErrorCategory.missing_credential


async def test_previous_outcome_cleared_on_new_attempt():
    service = _service(side_effect=[GeminiError("429"), SearchResult(narrative_text="ok")])
    session = SearchSession(service, industry="bakery")

    await session.submit()
    assert session.error is not None

    await session.submit()
    assert session.error is None
    assert session.result.narrative_text == "ok"


async def test_retry_resends_identical_query():
    service = _service(side_effect=[GeminiError("429 Too Many Requests"), SearchResult(narrative_text="ok")])
    session = SearchSession(service, industry="bakery", location="Penang")

    await session.submit()
    assert session.error.category == ErrorCategory.quota_exceeded
    assert session.can_retry is True

    # Editing the form does not change what a retry sends
    session.industry = "florist"
    await session.retry()

    first, second = service.search.await_args_list
    assert first.args == second.args == (SearchQuery(industry="bakery", location="Penang"),)
    assert session.result.narrative_text == "ok"


async def test_retry_without_retryable_error():
    session = SearchSession(_service(return_value=SearchResult(narrative_text="ok")), industry="bakery")
    await session.submit()

    with pytest.raises(RuntimeError):
        await session.retry()


async def test_double_submit_rejected_while_loading():
    release = asyncio.Event()

    async def _slow_search(query):
        await release.wait()
        return SearchResult(narrative_text="done")

    service = MagicMock()
    service.credential_configured = True
    service.search = _slow_search
    session = SearchSession(service, industry="bakery")

    task = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    assert session.loading is True

    with pytest.raises(SearchInProgressError):
        await session.submit()

    release.set()
    await task
    assert session.loading is False
    assert session.result.narrative_text == "done"
