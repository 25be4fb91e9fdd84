"""JSON serializer for source documents.

Adapter for turning raw source text into validated collections.
Forbidden: file IO, join logic.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ParseError(Exception):
    """Raised when source text is not valid structured data."""

    def __init__(self, source: str, message: str):
        super().__init__(f"Failed to parse source '{source}': {message}")
        self.source = source


def parse_json(raw: str, source: str) -> Any:
    """Parse raw JSON text.

    Args:
        raw: Document text.
        source: Source name, for error reporting.

    Returns:
        Decoded JSON value.

    Raises:
        ParseError: If raw is not valid JSON.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ParseError(source, str(e)) from e


def parse_collection(raw: str, model: type[ModelT], source: str) -> list[ModelT]:
    """Parse raw JSON text into a list of model instances.

    The document must be a JSON array of objects matching model.

    Raises:
        ParseError: If raw is not valid JSON or has the wrong shape.
    """
    data = parse_json(raw, source)

    try:
        return TypeAdapter(list[model]).validate_python(data)
    except ValidationError as e:
        raise ParseError(source, f"{e.error_count()} validation error(s): {e}") from e
