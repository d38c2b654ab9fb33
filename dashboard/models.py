# dashboard/models.py
"""
Read-only records as returned by the admin API.

Every status set is a closed enum with an UNKNOWN member for values the
dashboard does not know about. Records keep the raw status string so the
tables can still show it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class _FallbackEnum(str, Enum):
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower() or member.value == value.upper():
                    return member
        return cls.UNKNOWN

    @classmethod
    def parse(cls, value: Any):
        if value is None:
            return cls.UNKNOWN
        return cls(value)


class BookingStatus(_FallbackEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ACCEPTED = "accepted"
    UNKNOWN = "unknown"


class BookingPaymentStatus(_FallbackEnum):
    DEPOSIT_PAID = "deposit_paid"
    FULLY_PAID = "fully_paid"
    UNKNOWN = "unknown"


class RequestStatus(_FallbackEnum):
    OPEN = "open"
    MATCHED = "matched"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    PENDING = "pending"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


class OfferStatus(_FallbackEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class PaymentStatus(_FallbackEnum):
    PAID = "PAID"
    PENDING = "PENDING"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"


class PaymentType(_FallbackEnum):
    FULL = "full"
    DEPOSIT = "deposit"
    UNKNOWN = "unknown"


class UserRole(_FallbackEnum):
    CUSTOMER = "customer"
    PHOTOGRAPHER = "photographer"
    UNKNOWN = "unknown"


# ----------------- PARSING HELPERS ------------------------

def _str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _opt_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value in (None, "") else str(value)


def _num(data: Dict[str, Any], key: str) -> float:
    try:
        return float(data.get(key) or 0)
    except (TypeError, ValueError):
        return 0.0


def _int(data: Dict[str, Any], key: str) -> int:
    try:
        return int(data.get(key) or 0)
    except (TypeError, ValueError):
        return 0


# ----------------- RECORDS ------------------------

@dataclass(frozen=True)
class Booking:
    booking_id: int
    booking_code: str = ""
    customer_id: int = 0
    photographer_id: int = 0
    service_id: int = 0
    booking_date: str = ""
    custom_location: str = ""
    province: str = ""
    concept: str = ""
    shooting_type: str = ""
    quantity: int = 0
    illustration_url: Optional[str] = None
    discount_code: Optional[str] = None
    status: str = ""
    total_price: float = 0.0
    payment_status: Optional[str] = None
    created_at: str = ""

    @property
    def status_kind(self) -> BookingStatus:
        return BookingStatus.parse(self.status)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Booking":
        return cls(
            booking_id=_int(data, "booking_id"),
            booking_code=_str(data, "booking_code"),
            customer_id=_int(data, "customer_id"),
            photographer_id=_int(data, "photographer_id"),
            service_id=_int(data, "service_id"),
            booking_date=_str(data, "booking_date"),
            custom_location=_str(data, "custom_location"),
            province=_str(data, "province"),
            concept=_str(data, "concept"),
            shooting_type=_str(data, "shooting_type"),
            quantity=_int(data, "quantity"),
            illustration_url=_opt_str(data, "illustration_url"),
            discount_code=_opt_str(data, "discount_code"),
            status=_str(data, "status"),
            total_price=_num(data, "total_price"),
            payment_status=_opt_str(data, "payment_status"),
            created_at=_str(data, "created_at"),
        )


@dataclass(frozen=True)
class Offer:
    request_offer_id: int
    request_id: int = 0
    photographer_id: int = 0
    service_id: int = 0
    custom_price: float = 0.0
    message: str = ""
    status: str = ""
    created_at: str = ""
    photographer_name: Optional[str] = None
    service_title: Optional[str] = None

    @property
    def status_kind(self) -> OfferStatus:
        return OfferStatus.parse(self.status)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Offer":
        return cls(
            request_offer_id=_int(data, "request_offer_id"),
            request_id=_int(data, "request_id"),
            photographer_id=_int(data, "photographer_id"),
            service_id=_int(data, "service_id"),
            custom_price=_num(data, "custom_price"),
            message=_str(data, "message"),
            status=_str(data, "status"),
            created_at=_str(data, "created_at"),
            photographer_name=_opt_str(data, "photographer_name"),
            service_title=_opt_str(data, "service_title"),
        )


@dataclass(frozen=True)
class Request:
    request_id: int
    request_code: str = ""
    user_id: int = 0
    request_date: str = ""
    concept: str = ""
    estimated_budget: float = 0.0
    shooting_type: str = ""
    location_text: str = ""
    province: str = ""
    illustration_url: Optional[str] = None
    status: str = ""
    created_at: str = ""
    offers: List[Offer] = field(default_factory=list)

    @property
    def status_kind(self) -> RequestStatus:
        return RequestStatus.parse(self.status)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Request":
        return cls(
            request_id=_int(data, "request_id"),
            request_code=_str(data, "request_code"),
            user_id=_int(data, "user_id"),
            request_date=_str(data, "request_date"),
            concept=_str(data, "concept"),
            estimated_budget=_num(data, "estimated_budget"),
            shooting_type=_str(data, "shooting_type"),
            location_text=_str(data, "location_text"),
            province=_str(data, "province"),
            illustration_url=_opt_str(data, "illustration_url"),
            status=_str(data, "status"),
            created_at=_str(data, "created_at"),
            offers=[Offer.from_api(o) for o in data.get("offers") or [] if isinstance(o, dict)],
        )


@dataclass(frozen=True)
class Payment:
    payment_id: str
    booking_code: str = ""
    order_code: str = ""
    user_id: int = 0
    amount: float = 0.0
    payment_type: str = ""
    status: str = ""
    paid_at: str = ""

    @property
    def status_kind(self) -> PaymentStatus:
        return PaymentStatus.parse(self.status)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Payment":
        return cls(
            payment_id=_str(data, "payment_id"),
            booking_code=_str(data, "booking_code"),
            order_code=_str(data, "order_code"),
            user_id=_int(data, "user_id"),
            amount=_num(data, "amount"),
            payment_type=_str(data, "payment_type"),
            status=_str(data, "status"),
            paid_at=_str(data, "paid_at"),
        )


@dataclass(frozen=True)
class Review:
    review_id: int
    booking_id: int = 0
    customer_id: int = 0
    photographer_id: int = 0
    customer_name: Optional[str] = None
    customer_avatar: Optional[str] = None
    rating: int = 0
    comment: str = ""
    created_at: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Review":
        return cls(
            review_id=_int(data, "review_id"),
            booking_id=_int(data, "booking_id"),
            customer_id=_int(data, "customer_id"),
            photographer_id=_int(data, "photographer_id"),
            customer_name=_opt_str(data, "customer_name"),
            customer_avatar=_opt_str(data, "customer_avatar"),
            rating=_int(data, "rating"),
            comment=_str(data, "comment"),
            created_at=_str(data, "created_at"),
        )


@dataclass(frozen=True)
class User:
    user_id: int
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    role: str = ""
    province: Optional[str] = None
    slug: str = ""
    avatar: Optional[str] = None
    is_active: bool = False
    created_at: str = ""

    @property
    def role_kind(self) -> UserRole:
        return UserRole.parse(self.role)

    @property
    def active_state(self) -> str:
        return "active" if self.is_active else "inactive"

    def with_active(self, is_active: bool) -> "User":
        return replace(self, is_active=is_active)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "User":
        return cls(
            user_id=_int(data, "user_id"),
            full_name=_str(data, "full_name"),
            email=_str(data, "email"),
            phone_number=_str(data, "phone_number"),
            role=_str(data, "role"),
            # older payloads call it "location"
            province=_opt_str(data, "province") or _opt_str(data, "location"),
            slug=_str(data, "slug"),
            avatar=_opt_str(data, "avatar"),
            is_active=bool(data.get("is_active", False)),
            created_at=_str(data, "created_at"),
        )
