import json
import logging
import re
from typing import Any, List

from pydantic import ValidationError

from app.core.exceptions import MalformedResponseError
from app.schemas.interview import QuestionAnswer

logger = logging.getLogger(__name__)

# Compile regex patterns once at module level
_CODE_FENCE_PATTERN = re.compile(r'```json\n?|\n?```')
_CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x1F\x7F-\x9F]')


def clean_llm_json_output(raw_text: str) -> str:
    """
    Best-effort repair of near-JSON model output into a JSON array string.

    Strips code fences and control characters, then makes sure the text is
    bracketed. The result is not guaranteed to parse.
    """
    text = _CODE_FENCE_PATTERN.sub('', raw_text or '')
    # Newlines inside the array are control characters too; JSON does not need them
    text = _CONTROL_CHARS_PATTERN.sub('', text)
    text = text.strip()

    if not text.startswith('['):
        text = '[' + text
    if not text.endswith(']'):
        text = text + ']'
    return text


def sanitize_and_parse(raw_text: str) -> List[Any]:
    """
    Parse model output into a list.

    A bare object is wrapped in a one-element list. Anything that does not
    parse raises MalformedResponseError; no partial recovery is attempted.
    """
    cleaned = clean_llm_json_output(raw_text)
    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        # Deeply nested input exhausts the decoder before it reports a syntax error
        logger.error(f"JSON parsing error: {type(e).__name__}: {e}")
        logger.error(f"Raw output (first 500 chars): {str(raw_text)[:500]}")
        raise MalformedResponseError("Failed to parse LLM response", {"raw_text": raw_text}) from e

    return parsed if isinstance(parsed, list) else [parsed]


def parse_question_set(raw_text: str, strict: bool = True) -> List[dict]:
    """
    Sanitize the model output and check every element is a question/answer pair.

    Args:
        raw_text: Text content of the model reply.
        strict: If False, elements are returned as parsed without schema checks.

    Returns:
        List of {"question": ..., "answer": ...} dicts, in model order.
    """
    items = sanitize_and_parse(raw_text)
    if not strict:
        return items

    if not items:
        raise MalformedResponseError("LLM response contained no questions")

    try:
        return [QuestionAnswer.model_validate(item).model_dump() for item in items]
    except ValidationError as e:
        logger.error(f"LLM response does not match question schema: {e.error_count()} error(s)")
        logger.error(f"Raw output (first 500 chars): {str(raw_text)[:500]}")
        raise MalformedResponseError("LLM response does not match question schema", {"raw_text": raw_text}) from e
