"""Turn a free-text Gemini answer into structured search output.

The model is asked to write a narrative followed by a fenced block::

    ```json
    [{"name": ..., "industry": ..., ...}]
    ```

Only the first such block is read. Anything that cannot be decoded yields
an empty record list; the narrative is still shown.
"""

import json
import logging

from pydantic import ValidationError

from bizsearch.schemas.gemini import GroundingChunk
from bizsearch.schemas.search import BusinessRecord, Citation

logger = logging.getLogger(__name__)

JSON_FENCE_START = "```json"
FENCE_END = "```"


def extract_narrative(text: str) -> str:
    """Text before the first ```json marker, so the block is never shown twice."""
    return text.split(JSON_FENCE_START, 1)[0]


def _fenced_json_body(text: str) -> str | None:
    start = text.find(JSON_FENCE_START)
    if start == -1:
        return None
    body_start = start + len(JSON_FENCE_START)
    end = text.find(FENCE_END, body_start)
    if end == -1:
        return None
    return text[body_start:end]


def _to_record(item: dict) -> BusinessRecord:
    try:
        return BusinessRecord.model_validate(item)
    except ValidationError:
        # Non-string values (e.g. a numeric phone) are passed through untouched
        return BusinessRecord.model_construct(**item)


def extract_records(text: str) -> list[BusinessRecord]:
    body = _fenced_json_body(text)
    if body is None:
        return []

    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, ValueError) as exc:
        logger.warning("Could not parse fenced JSON block: %s", exc)
        return []

    if isinstance(parsed, dict) and isinstance(parsed.get("businesses"), list):
        parsed = parsed["businesses"]
    if not isinstance(parsed, list):
        logger.warning("Fenced JSON block is %s, expected a list", type(parsed).__name__)
        return []

    return [_to_record(item) for item in parsed if isinstance(item, dict)]


def parse_citations(chunks: list[GroundingChunk]) -> list[Citation]:
    citations: list[Citation] = []
    for chunk in chunks:
        if chunk.web is not None:
            citations.append(
                Citation(source_kind="web", uri=chunk.web.uri, title=chunk.web.title)
            )
        elif chunk.maps is not None:
            citations.append(
                Citation(source_kind="maps", uri=chunk.maps.uri, title=chunk.maps.title)
            )
    return citations
