import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from bizsearch.config import Settings
from bizsearch.exceptions.custom import GeminiError, MissingCredentialError, RateLimitError
from bizsearch.exceptions.handlers import (
    gemini_error_handler,
    missing_credential_handler,
    rate_limit_error_handler,
)
from bizsearch.routers.pages import router as pages_router
from bizsearch.routers.search import router as search_router
from bizsearch.services.business_search import BusinessSearchService
from bizsearch.services.gemini import GeminiService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if not settings.credential_configured:
        logger.warning("GEMINI_API_KEY is not set; searches will fail until it is configured")

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        gemini = GeminiService(
            client,
            settings.gemini_api_key,
            model=settings.gemini_model,
            temperature=settings.gemini_temperature,
        )
        app.state.search_service = BusinessSearchService(
            gemini,
            region=settings.search_region,
            min_results=settings.min_results,
        )

        yield


app = FastAPI(title="Business Search", lifespan=lifespan)

app.add_exception_handler(GeminiError, gemini_error_handler)
app.add_exception_handler(MissingCredentialError, missing_credential_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(search_router)
app.include_router(pages_router)
