import json
import logging
import re
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from aceinterview.core.exceptions import GenerationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


def clean_json_output(raw_text: str) -> str:
    """Strip markdown fences and any prose around the JSON object."""
    if not raw_text:
        return ""
    text = _FENCE_RE.sub("", raw_text).strip()

    try:
        json.loads(text)
        return text
    except json.JSONDecodeError:
        pass

    start_idx = text.find("{")
    end_idx = text.rfind("}")
    if start_idx != -1 and end_idx > start_idx:
        return text[start_idx:end_idx + 1]
    return text


def parse_model_output(raw_text: str, schema_class: Type[ModelT]) -> ModelT:
    """Parse LLM output into ``schema_class``; raise GenerationError if it does not validate."""
    cleaned = clean_json_output(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"❌ [PARSER] {schema_class.__name__}: invalid JSON ({e}). Raw: {raw_text[:300]}")
        raise GenerationError(f"AI returned malformed output for {schema_class.__name__}.") from e

    if data is None:
        raise GenerationError(f"AI returned no output for {schema_class.__name__}.")

    try:
        return schema_class.model_validate(data)
    except ValidationError as e:
        logger.error(f"❌ [PARSER] {schema_class.__name__} failed validation: {e}")
        raise GenerationError(f"AI output did not match the expected {schema_class.__name__} format.") from e
