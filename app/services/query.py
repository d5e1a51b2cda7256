"""
List Query Normalization

Turns raw query parameters into a canonical ListQuery.

Query strings are ambiguous about multiplicity: ?take=5&take=7 yields a
list while ?take=5 yields a single value. The first value always wins.

Parsing is strict. Only an optional sign followed by digits is an
integer; anything else ("5abc", "1.5", "") falls back to the default, so
a malformed value can never produce a negative offset or a zero divisor.
"""

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

FILTER_KEYS = ("title", "author", "desc")

DEFAULT_TAKE = 10
MAX_TAKE = 20
DEFAULT_PAGE = 1

# Largest value the books.id INTEGER column can hold
MAX_BOOK_ID = 2**31 - 1
# Largest row offset the database drivers accept
MAX_SKIP = 2**63 - 1

_INTEGER = re.compile(r"[+-]?\d+")

RawParams = Mapping[str, str | Sequence[str]]


@dataclass(frozen=True)
class ListQuery:
    """
    Canonical list request.

    filter holds only the keys the client actually sent; an empty string
    value is a real filter, a missing key is no filter at all.
    """

    take: int = DEFAULT_TAKE
    page: int = DEFAULT_PAGE
    filter: dict[str, str] = field(default_factory=dict)

    @property
    def skip(self) -> int:
        """Rows before this page: take * (page - 1)."""
        return self.take * self.page - self.take

    def total_pages(self, total: int) -> int:
        """Page count for total rows, never less than 1."""
        return max(1, math.ceil(total / self.take))


def first_value(params: RawParams, key: str) -> str | None:
    """
    First value sent for key, or None when the key is absent.

    Works with plain dicts, dicts of lists, and Starlette's QueryParams
    (which exposes every value through getlist()).
    """
    if key not in params:
        return None
    getlist = getattr(params, "getlist", None)
    if getlist is not None:
        values = getlist(key)
    else:
        values = params[key]
    if isinstance(values, str):
        return values
    return values[0] if values else ""


def parse_int(value: str | None) -> int | None:
    """Strict integer parse; None when value is missing or malformed."""
    if value is None:
        return None
    value = value.strip()
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


def parse_book_id(params: RawParams) -> int | None:
    """
    Read the id scope parameter.

    Returns None when id is absent, 0 when it is present but malformed,
    otherwise the parsed value. Anything <= 0 means "no specific book".
    Values beyond the id column range cannot match a book and are also 0.
    """
    raw = first_value(params, "id")
    if raw is None:
        return None
    parsed = parse_int(raw)
    if parsed is None or parsed > MAX_BOOK_ID:
        return 0
    return parsed


def normalize_list_query(
    params: RawParams,
    default_take: int = DEFAULT_TAKE,
    max_take: int = MAX_TAKE,
) -> ListQuery:
    """
    Build a ListQuery from raw query parameters.

    - take: default when missing/malformed, clamped to [1, max_take]
    - page: 1 when missing/malformed, clamped so that 0 <= skip <= MAX_SKIP
    - filter: title/author/desc, included on presence
    """
    take = parse_int(first_value(params, "take"))
    if take is None:
        take = default_take
    take = min(max(take, 1), max_take)

    page = parse_int(first_value(params, "page"))
    if page is None:
        page = DEFAULT_PAGE
    page = min(max(page, 1), MAX_SKIP // take + 1)

    filters = {}
    for key in FILTER_KEYS:
        value = first_value(params, key)
        if value is not None:
            filters[key] = value

    return ListQuery(take=take, page=page, filter=filters)
