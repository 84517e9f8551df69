"""
Text Response Normalizer

Turns the model's free-text answer into a list of Candidate records.

The model is asked for a raw JSON array, but in practice it may:
- wrap the JSON in ```json ... ``` fences
- wrap the array in an object: {"recommendations": [...]}
- add prose before/after the JSON
- leave trailing commas or smart quotes in the JSON

Decoding strategy:
1. Strip a leading and a trailing code-fence marker
2. Direct json.loads, then an explicit tagged-union decode:
   - object with a "recommendations" list
   - bare list
   - anything else -> ResponseValidationError("expected array")
3. If the direct parse fails: regex search for an array of objects in the
   text, clean common LLM mistakes, parse that
4. Nothing parseable -> ResponseParseError
"""

import json
import logging
import re
from typing import Any, List

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from yourdayin.errors import ResponseParseError, ResponseValidationError
from yourdayin.schemas.recommendations import Candidate
from yourdayin.utils.constants import MAX_RECOMMENDATIONS

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r'^\s*```[\w-]*[ \t]*\r?\n?')
_TRAILING_FENCE = re.compile(r'\r?\n?[ \t]*```\s*$')
_ARRAY_OF_OBJECTS = re.compile(r'\[\s*\{[\s\S]*\}\s*\]')


# =============================================================================
# ACCEPTED SHAPES
# =============================================================================

class _WrappedCandidates(BaseModel):
    """Schema A: {"recommendations": [...]}"""
    recommendations: List[Any]


# Schema B: [...]
_BARE_LIST = TypeAdapter(List[Any])


def strip_code_fences(text: str) -> str:
    """Remove a leading ```/```json marker line and a trailing ``` marker."""
    text = _LEADING_FENCE.sub('', text, count=1)
    text = _TRAILING_FENCE.sub('', text, count=1)
    return text.strip()


def _clean_json_text(json_content: str) -> str:
    """Fix the usual LLM JSON mistakes before a second parse attempt."""
    # Remove trailing commas before } or ]
    json_content = re.sub(r',(\s*[}\]])', r'\1', json_content)

    # Control characters break json.loads
    json_content = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', json_content)

    # Curly quotes used as JSON delimiters
    json_content = json_content.replace('“', '"').replace('”', '"')
    return json_content


def _extract_array(text: str) -> Any:
    """
    Last resort: find an array-of-objects substring and parse it.

    Raises:
        ResponseParseError: If no such substring exists or it does not parse.
    """
    match = _ARRAY_OF_OBJECTS.search(text)
    if not match:
        raise ResponseParseError("Could not parse JSON from model response")

    candidate_text = match.group(0)
    try:
        return json.loads(candidate_text)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(_clean_json_text(candidate_text))
    except json.JSONDecodeError as e:
        raise ResponseParseError(
            f"Could not parse JSON array from model response: {e}"
        ) from e


def _decode_candidate_list(value: Any) -> List[Any]:
    """
    Decode a parsed JSON value as schema A or schema B.

    Raises:
        ResponseValidationError: If the value matches neither shape.
    """
    try:
        return _WrappedCandidates.model_validate(value).recommendations
    except PydanticValidationError:
        pass

    try:
        return _BARE_LIST.validate_python(value)
    except PydanticValidationError:
        pass

    raise ResponseValidationError(
        f"Model did not return a list of recommendations: expected array, got {type(value).__name__}"
    )


def normalize_candidates(raw_text: str, max_items: int = MAX_RECOMMENDATIONS) -> List[Candidate]:
    """
    Extract up to ``max_items`` candidates from the model's answer.

    Args:
        raw_text: Text returned by the generative backend
        max_items: Cap on returned candidates; extras are dropped silently

    Returns:
        Candidates in the order the model listed them.

    Raises:
        ResponseParseError: No list could be extracted by any strategy.
        ResponseValidationError: The extracted value is not an array of objects.
    """
    if not raw_text or not raw_text.strip():
        raise ResponseParseError("Model response is empty")

    logger.debug(f"Raw model response: {raw_text[:2000]}")

    json_content = strip_code_fences(raw_text)

    try:
        parsed = json.loads(json_content)
    except json.JSONDecodeError as e:
        logger.warning(f"Direct JSON parse failed ({e}), searching for an embedded array")
        parsed = _extract_array(json_content)

    items = _decode_candidate_list(parsed)

    if len(items) > max_items:
        logger.info(f"Model returned {len(items)} places, keeping the first {max_items}")
    items = items[:max_items]

    candidates = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise ResponseValidationError(
                f"Recommendation {idx} is not an object: expected array of objects"
            )
        candidates.append(Candidate.model_validate(item))

    logger.info(f"Parsed {len(candidates)} candidate(s): {[c.name for c in candidates]}")
    return candidates
