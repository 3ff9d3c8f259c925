"""Request-building helpers shared by the resource clients."""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from .exceptions import UnexpectedResponseError
from .models import SearchFilter, WireModel

M = TypeVar("M", bound=WireModel)

FilterInput = SearchFilter | Mapping[str, Any]


def require_id(value: str, name: str) -> str:
    """Reject empty identifiers before they produce a malformed path."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required")
    return value


def path_segment(value: str) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(value, safe="")


def serialize_filters(filters: Sequence[FilterInput] | None) -> list[dict[str, Any]] | None:
    """
    Convert filters to their wire form, keeping the supplied order.

    Accepts SearchFilter objects or raw ``{"key": ..., "match": {"value": ...}}``
    mappings. No deduplication is performed.
    """
    if filters is None:
        return None

    serialized = []
    for item in filters:
        if isinstance(item, SearchFilter):
            serialized.append(item.to_wire())
        elif isinstance(item, Mapping):
            serialized.append(dict(item))
        else:
            raise TypeError(
                f"filters must contain SearchFilter objects or dicts, got {type(item).__name__}"
            )
    return serialized


def parse_response(model: type[M], data: Any) -> M:
    """Map a successful response body onto its model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise UnexpectedResponseError(
            f"Unexpected response shape for {model.__name__}",
            details=data,
        ) from e
