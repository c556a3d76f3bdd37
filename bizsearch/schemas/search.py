from __future__ import annotations

from enum import StrEnum
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, model_validator


class SearchQuery(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    industry: str = ""
    location: str = ""

    @model_validator(mode="after")
    def _require_one_field(self) -> SearchQuery:
        if not self.industry and not self.location:
            raise ValueError("industry or location is required")
        return self


class BusinessRecord(BaseModel):
    # The model may omit any field or add its own; keep whatever it sent.
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    industry: str | None = None
    phone: str | None = None
    address: str | None = None
    email: str | None = None
    website: str | None = None

    @property
    def maps_search_url(self) -> str:
        terms = " ".join(str(p) for p in (self.name, self.address) if p)
        return f"https://www.google.com/maps/search/?api=1&query={quote_plus(terms)}"

    @property
    def website_label(self) -> str | None:
        if not self.website:
            return None
        return str(self.website).removeprefix("https://").removeprefix("http://")


class Citation(BaseModel):
    source_kind: str  # "web" | "maps"
    uri: str | None = None
    title: str | None = None


class SearchResult(BaseModel):
    narrative_text: str
    records: list[BusinessRecord] = []
    citations: list[Citation] = []
    raw_text: str = ""


class ErrorCategory(StrEnum):
    missing_credential = "missing_credential"
    auth_failed = "auth_failed"
    quota_exceeded = "quota_exceeded"
    unknown = "unknown"


class SearchError(BaseModel):
    category: ErrorCategory
    message: str
    detail: str | None = None
    retryable: bool = False
    query: SearchQuery | None = None
