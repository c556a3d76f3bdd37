from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from bizsearch.dependencies import SearchServiceDep
from bizsearch.schemas.search import SearchQuery, SearchResult


router = APIRouter()


@router.post("/api/search", response_model=SearchResult)
async def search_businesses(
    query: SearchQuery,
    request: Request,
    service: SearchServiceDep,
) -> JSONResponse:
    # Read by the exception handlers to build the retry payload
    request.state.search_query = query
    result = await service.search(query)
    # Records are passed through as extracted, so skip response re-validation
    return JSONResponse(content=result.model_dump(mode="json"))


@router.get("/health")
async def health(service: SearchServiceDep) -> dict:
    return {"status": "ok", "credential_configured": service.credential_configured}
