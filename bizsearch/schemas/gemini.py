from pydantic import BaseModel


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    parts: list[Part] = []
    role: str | None = None


class GroundingSource(BaseModel):
    uri: str | None = None
    title: str | None = None


class GroundingChunk(BaseModel):
    web: GroundingSource | None = None
    maps: GroundingSource | None = None


class GroundingMetadata(BaseModel):
    groundingChunks: list[GroundingChunk] = []
    webSearchQueries: list[str] = []


class Candidate(BaseModel):
    content: Content | None = None
    finishReason: str | None = None
    groundingMetadata: GroundingMetadata | None = None


class GenerateContentResponse(BaseModel):
    candidates: list[Candidate] = []
    modelVersion: str | None = None


class GeminiCompletion(BaseModel):
    text: str
    grounding_chunks: list[GroundingChunk] = []
