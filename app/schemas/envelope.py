"""
Response Envelope Schemas

Every response of the books resource, success or failure, has the shape:

    {
        "status": true,
        "message": "success get list of book",
        "data": [...],
        "meta": {...},     # list responses only
        "error": [...]     # validation failures only
    }
"""

from typing import Any, Generic, TypeVar

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class Violation(BaseModel):
    """One failed field rule."""

    field: str = Field(..., description="Offending field, or 'body'", examples=["title"])
    message: str = Field(..., description="What is wrong with it")


class Meta(BaseModel):
    """
    Pagination metadata for list responses.

    total_page is at least 1, even when nothing matched, so clients can
    always render "page 1 of N".
    """

    take: int = Field(..., ge=1, description="Page size")
    page: int = Field(..., ge=1, description="Current page (1-based)")
    total: int = Field(..., ge=0, description="Books matching the filter")
    total_page: int = Field(..., ge=1, description="Number of pages")
    filter: dict[str, str] | None = Field(
        default=None,
        description="Filters that were applied, null when none",
    )

    model_config = ConfigDict(
        alias_generator=AliasGenerator(serialization_alias=to_camel),
        json_schema_extra={
            "example": {
                "take": 5,
                "page": 2,
                "total": 12,
                "totalPage": 3,
                "filter": {"title": "Dune"},
            }
        },
    )


class Envelope(BaseModel, Generic[DataT]):
    """Uniform success/failure wrapper."""

    status: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: DataT | None = Field(default=None, description="Payload")
    meta: Meta | None = Field(default=None, description="List pagination")
    error: list[Violation] | None = Field(
        default=None,
        description="Validation violations",
    )


# Used where the payload type is only known at runtime
AnyEnvelope = Envelope[Any]
