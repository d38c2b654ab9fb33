# dashboard/stats.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from dashboard.filters import field_value
from dashboard.models import PaymentStatus, UserRole


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def count_where(items: Optional[Iterable[Any]], predicate: Callable[[Any], bool]) -> int:
    return sum(1 for item in items or [] if predicate(item))


def sum_where(
    items: Optional[Iterable[Any]],
    predicate: Optional[Callable[[Any], bool]],
    field: str,
) -> float:
    """Sums `field` over matching items; missing or non-numeric values count as 0."""
    total = 0.0
    for item in items or []:
        if predicate is not None and not predicate(item):
            continue
        total += _as_number(field_value(item, field))
    return total


def percentage(match_count: float, total_count: float) -> int:
    if not total_count:
        return 0
    # half up, like Math.round
    return int(math.floor(match_count / total_count * 100 + 0.5))


def average(items: Optional[Iterable[Any]], field: str) -> float:
    values = [_as_number(field_value(item, field)) for item in items or []]
    if not values:
        return 0
    return round(sum(values) / len(values), 1)


def growth_rate(current: float, previous: float) -> float:
    # 0 instead of infinity when there was nothing last period
    current = _as_number(current)
    previous = _as_number(previous)
    if previous == 0:
        return 0
    return (current - previous) * 100 / previous


# ----------------- PAGE SUMMARIES ------------------------

def _is_paid(payment) -> bool:
    return PaymentStatus.parse(field_value(payment, "status")) is PaymentStatus.PAID


@dataclass
class PaymentSummary:
    total_count: int
    paid_count: int
    paid_amount: float
    success_rate: int


def payment_summary(payments) -> PaymentSummary:
    payments = list(payments or [])
    paid_count = count_where(payments, _is_paid)
    return PaymentSummary(
        total_count=len(payments),
        paid_count=paid_count,
        paid_amount=sum_where(payments, _is_paid, "amount"),
        success_rate=percentage(paid_count, len(payments)),
    )


@dataclass
class ReviewSummary:
    total_count: int
    average_rating: float
    five_star_count: int
    by_rating: Dict[int, int]


def review_summary(reviews) -> ReviewSummary:
    reviews = list(reviews or [])
    by_rating = {r: count_where(reviews, lambda x, r=r: field_value(x, "rating") == r) for r in range(5, 0, -1)}
    return ReviewSummary(
        total_count=len(reviews),
        average_rating=average(reviews, "rating"),
        five_star_count=by_rating[5],
        by_rating=by_rating,
    )


@dataclass
class UserSummary:
    total_users: int
    active_users: int
    customers: int
    photographers: int


def user_summary(users) -> UserSummary:
    users = list(users or [])
    return UserSummary(
        total_users=len(users),
        active_users=count_where(users, lambda u: bool(field_value(u, "is_active"))),
        customers=count_where(users, lambda u: UserRole.parse(field_value(u, "role")) is UserRole.CUSTOMER),
        photographers=count_where(
            users, lambda u: UserRole.parse(field_value(u, "role")) is UserRole.PHOTOGRAPHER
        ),
    )


DASHBOARD_METRICS = ("total_users", "total_photographers", "total_bookings", "total_revenue")


def comparison_growth(comparison: Optional[Dict[str, Any]], metrics=DASHBOARD_METRICS) -> Dict[str, Dict[str, float]]:
    """
    Reads a backend {current_month, previous_month} block.
    Returns {metric: {"current": .., "previous": .., "growth": ..}}.
    """
    comparison = comparison or {}
    current = comparison.get("current_month") or {}
    previous = comparison.get("previous_month") or {}
    result = {}
    for metric in metrics:
        cur = _as_number(current.get(metric))
        prev = _as_number(previous.get(metric))
        result[metric] = {"current": cur, "previous": prev, "growth": growth_rate(cur, prev)}
    return result
