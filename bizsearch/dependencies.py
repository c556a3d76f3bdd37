from typing import Annotated

from fastapi import Depends, Request

from bizsearch.services.business_search import BusinessSearchService


def get_search_service(request: Request) -> BusinessSearchService:
    return request.app.state.search_service


SearchServiceDep = Annotated[BusinessSearchService, Depends(get_search_service)]
