# sevasetu/llm/parsing.py
from __future__ import annotations

import json
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from sevasetu.errors import RemoteCallError

ModelT = TypeVar("ModelT", bound=BaseModel)


def clean_json_from_llm(raw: str) -> dict:
    """
    Try to robustly parse JSON from the LLM response.
    Handles cases where the model wraps it in ```json ... ``` fences.
    """
    text = raw.strip()

    if text.startswith("```"):
        # e.g. ```json ... ```
        text = text.lstrip("`")
        if text.lower().startswith("json"):
            text = text[4:]
        text = text.rstrip("`").strip()

    return json.loads(text)


def parse_llm_json(raw: str, model: Type[ModelT]) -> ModelT:
    """
    Parse and validate a JSON reply against `model`.

    Malformed or incomplete output is a failed call; callers never see
    partial results.
    """
    try:
        return model.model_validate(clean_json_from_llm(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise RemoteCallError(f"Model returned unusable output: {e}") from e
