from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from bizsearch.dependencies import SearchServiceDep
from bizsearch.mappers.page_builder import render_page
from bizsearch.session import SearchSession

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def search_page(
    service: SearchServiceDep,
    industry: str | None = None,
    location: str | None = None,
) -> HTMLResponse:
    session = SearchSession(service, industry=industry or "", location=location or "")

    if industry is None and location is None:
        return HTMLResponse(render_page(session))

    if not await session.submit():
        return HTMLResponse(
            render_page(session, hint="Enter an industry or a location to search.")
        )
    return HTMLResponse(render_page(session))
