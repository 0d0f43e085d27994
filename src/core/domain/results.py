"""Result envelope models (Pydantic v2).

Why a single envelope:
- Every call returns the same shape (`success`, `status`, `title`,
  `exception`) whatever the HTTP outcome was, so callers inspect data instead
  of wrapping call sites in try/except.
- Resource specific payloads are added through the generic `Results[T]` and
  `PagedResults[T]` models instead of a class per resource.
"""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from core.errors import InvalidArgumentError

T = TypeVar("T")
E = TypeVar("E", bound="ResultEnvelope")


class ResultEnvelope(BaseModel):
    """Uniform response wrapper returned by every call."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    success: bool = Field(
        default=False,
        description="True only when the server answered 200 OK.",
    )
    status: int | None = Field(
        default=None,
        description="HTTP status, or 444 when the call failed locally.",
    )
    title: str | None = Field(
        default=None,
        description="Problem title, raw error body or 'Exception'.",
    )
    errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Validation errors keyed by field (400 responses).",
    )
    trace_id: str | None = Field(
        default=None,
        alias="traceId",
        description="Server side trace identifier, when provided.",
    )
    exception: BaseException | None = Field(
        default=None,
        exclude=True,
        description="Error captured while performing the call.",
    )

    @classmethod
    def create_from_json(cls: type[E], json: str | bytes | None) -> E:
        """Build an envelope from a JSON document.

        A parsed document is marked successful. Malformed JSON does not raise:
        an unsuccessful envelope carrying the validation error is returned.
        """

        if json is None:
            raise InvalidArgumentError("json")
        try:
            result = cls.model_validate_json(json)
        except ValidationError as exc:
            result = cls()
            result.success = False
            result.exception = exc
            return result
        result.success = True
        return result

    @classmethod
    async def create_from_json_async(cls: type[E], json: str | bytes | None) -> E:
        return await asyncio.to_thread(cls.create_from_json, json)


class Results(ResultEnvelope, Generic[T]):
    """Envelope with a typed `data` payload."""

    data: T | None = Field(
        default=None,
        description="Resource payload.",
    )


class PagedResults(ResultEnvelope, Generic[T]):
    """Envelope for paged collections."""

    data: list[T] = Field(
        default_factory=list,
        description="Items of the current page.",
    )
    total_count: int = Field(
        default=0,
        ge=0,
        alias="totalCount",
        description="Total number of items across all pages.",
    )
    page: int = Field(
        default=0,
        ge=0,
        description="Zero based index of the current page.",
    )
    page_size: int = Field(
        default=0,
        ge=0,
        alias="pageSize",
        description="Maximum number of items per page.",
    )
