"""
Book Pydantic Schemas

- BookPayload: the inbound create/update body and its field rules
- BookResponse: the book as returned to clients

Field names are snake_case in Python and camelCase on the wire
(createdAt, updatedAt).
"""

import re
from datetime import UTC, datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Letters, digits and spaces only (ASCII)
TEXT_PATTERN = r"^[A-Za-z0-9 ]+$"
OPTIONAL_TEXT_PATTERN = r"^[A-Za-z0-9 ]*$"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
# strptime alone accepts single-digit fields such as 2024-1-5T1:2:3Z
TIMESTAMP_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z")


class BookPayload(BaseModel):
    """
    Schema for creating or updating a book.

    Both operations take the full payload (PUT replaces the editable
    fields). Unknown keys, including "id", are ignored.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "desc": "Spice and sandworms",
        "createdAt": "2024-01-15T10:30:00Z"
    }
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=50,
        pattern=TEXT_PATTERN,
        description="Book title",
        examples=["Dune"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=50,
        pattern=TEXT_PATTERN,
        description="Author name",
        examples=["Frank Herbert"],
    )

    desc: str | None = Field(
        default=None,
        max_length=255,
        pattern=OPTIONAL_TEXT_PATTERN,
        description="Short description",
        examples=["Spice and sandworms"],
    )

    created_at: datetime | None = Field(
        default=None,
        description="Creation time, YYYY-MM-DDTHH:mm:ssZ",
        examples=["2024-01-15T10:30:00Z"],
    )

    updated_at: datetime | None = Field(
        default=None,
        description="Last update time, YYYY-MM-DDTHH:mm:ssZ",
        examples=["2024-01-15T10:30:00Z"],
    )

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        extra="ignore",
    )

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def parse_timestamp(cls, v: object) -> datetime | None:
        """
        Accept only the fixed YYYY-MM-DDTHH:mm:ssZ format.

        Pydantic's own datetime parsing is more lenient (offsets,
        fractional seconds, unix numbers), so the string is parsed here.
        """
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("timestamp must be a string in YYYY-MM-DDTHH:mm:ssZ format")
        if not TIMESTAMP_PATTERN.fullmatch(v):
            raise ValueError("timestamp must be in YYYY-MM-DDTHH:mm:ssZ format")
        try:
            parsed = datetime.strptime(v, TIMESTAMP_FORMAT)
        except ValueError:
            raise ValueError(
                "timestamp must be in YYYY-MM-DDTHH:mm:ssZ format"
            ) from None
        return parsed.replace(tzinfo=UTC)

    def to_columns(self) -> dict:
        """
        Column values for the store.

        Timestamps the client did not send are left out so the database
        defaults apply.
        """
        return self.model_dump(exclude_none=True) | {"desc": self.desc}


class BookResponse(BaseModel):
    """
    Schema for book responses.

    Built from the ORM row with from_attributes=True.
    """

    id: int = Field(..., gt=0, description="Unique identifier")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Author name")
    desc: str | None = Field(default=None, description="Short description")
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "desc": "Spice and sandworms",
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )
