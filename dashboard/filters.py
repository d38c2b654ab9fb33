# dashboard/filters.py

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

ALL = "all"

# Text fields searched on each list page
BOOKING_SEARCH_FIELDS = ("booking_code", "concept", "province")
REQUEST_SEARCH_FIELDS = ("request_code", "concept", "province")
PAYMENT_SEARCH_FIELDS = ("booking_code", "order_code", "payment_id")
REVIEW_SEARCH_FIELDS = ("customer_name", "comment")
USER_SEARCH_FIELDS = ("full_name", "email", "phone_number")


def field_value(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        value = item.get(name)
    else:
        value = getattr(item, name, None)
    if isinstance(value, Enum):
        return value.value
    return value


def _matches_search(item: Any, term: str, fields: Sequence[str]) -> bool:
    for name in fields:
        value = field_value(item, name)
        if value is None:
            continue
        if term in str(value).lower():
            return True
    return False


def _matches_filter(item: Any, name: str, wanted: Any) -> bool:
    value = field_value(item, name)
    if value == wanted:
        return True
    # "5" from a select box still matches rating 5
    return value is not None and str(value) == str(wanted)


def filter_records(
    items: Optional[Iterable[Any]],
    search_term: str = "",
    search_fields: Sequence[str] = (),
    **filters: Any,
) -> List[Any]:
    """
    Returns the items matching the search term and every active filter.

    The search is a case-insensitive literal substring match over
    `search_fields` (no accent folding). A filter whose value is ALL
    (or None) is ignored. Order of `items` is kept.
    """
    if not items:
        return []

    term = (search_term or "").strip().lower()
    active = {k: v for k, v in filters.items() if v is not None and v != ALL}

    result = []
    for item in items:
        if term and not _matches_search(item, term, search_fields):
            continue
        if not all(_matches_filter(item, k, v) for k, v in active.items()):
            continue
        result.append(item)
    return result


def distinct_values(items: Optional[Iterable[Any]], name: str) -> List[Any]:
    """Distinct non-empty values of a field, in first-seen order."""
    seen = []
    for item in items or []:
        value = field_value(item, name)
        if value in (None, "") or value in seen:
            continue
        seen.append(value)
    return seen
