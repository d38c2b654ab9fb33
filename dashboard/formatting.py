# dashboard/formatting.py
"""
Display helpers: money, dates, status labels and badge colors.
None of these raise on bad input.
"""

from __future__ import annotations

import html
import math
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from dashboard.models import (
    BookingPaymentStatus,
    BookingStatus,
    OfferStatus,
    PaymentStatus,
    PaymentType,
    RequestStatus,
    UserRole,
)

INVALID_DATE = "Invalid Date"

# Timestamps with an offset are shown in Vietnam local time
LOCAL_TZ = ZoneInfo("Asia/Ho_Chi_Minh")

# Color categories used by the badge renderer
SUCCESS = "success"
WARNING = "warning"
DANGER = "danger"
INFO = "info"
ACCENT = "accent"
NEUTRAL = "neutral"

BADGE_HEX = {
    SUCCESS: "#10b981",
    WARNING: "#f59e0b",
    DANGER: "#ef4444",
    INFO: "#3b82f6",
    ACCENT: "#8b5cf6",
    NEUTRAL: "#6b7280",
}


# ----------------- MONEY / NUMBERS ------------------------

def format_money(amount: Any) -> str:
    """1500000 -> '1.500.000 ₫', 0 -> '0 ₫'."""
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value):
        value = 0.0
    return f"{round(value):,}".replace(",", ".") + " ₫"


def format_growth(value: Any) -> str:
    try:
        value = float(value or 0)
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value):
        value = 0.0
    return f"{value:+.1f}%"


# ----------------- DATES ------------------------

def _parse_iso(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(LOCAL_TZ)
    return dt


def format_datetime(value: Any, seconds: bool = False) -> str:
    """ISO timestamp -> '14:30 15/03/2024' (vi-VN order)."""
    dt = _parse_iso(value)
    if dt is None:
        return INVALID_DATE
    return dt.strftime("%H:%M:%S %d/%m/%Y" if seconds else "%H:%M %d/%m/%Y")


def format_date(value: Any) -> str:
    dt = _parse_iso(value)
    if dt is None:
        return INVALID_DATE
    return dt.strftime("%d/%m/%Y")


# ----------------- STATUS COLORS ------------------------

_STATUS_COLORS = {
    "booking": {
        BookingStatus.CONFIRMED: SUCCESS,
        BookingStatus.ACCEPTED: ACCENT,
        BookingStatus.PENDING: WARNING,
        BookingStatus.CANCELLED: DANGER,
        BookingStatus.COMPLETED: INFO,
    },
    "request": {
        RequestStatus.PENDING: WARNING,
        RequestStatus.OPEN: WARNING,
        RequestStatus.MATCHED: ACCENT,
        RequestStatus.ACCEPTED: SUCCESS,
        RequestStatus.REJECTED: DANGER,
        RequestStatus.COMPLETED: INFO,
    },
    "offer": {
        OfferStatus.PENDING: WARNING,
        OfferStatus.ACCEPTED: SUCCESS,
        OfferStatus.REJECTED: DANGER,
    },
    "payment": {
        PaymentStatus.PAID: SUCCESS,
        PaymentStatus.PENDING: WARNING,
        PaymentStatus.FAILED: DANGER,
        PaymentStatus.CANCELLED: NEUTRAL,
    },
}

_KIND_ENUMS = {
    "booking": BookingStatus,
    "request": RequestStatus,
    "offer": OfferStatus,
    "payment": PaymentStatus,
}


def _parse_kind(kind: str, value: Any):
    enum = _KIND_ENUMS.get(kind)
    if enum is None:
        return None
    return enum.parse(value)


def status_color(kind: str, value: Any) -> str:
    member = _parse_kind(kind, value)
    return _STATUS_COLORS.get(kind, {}).get(member, NEUTRAL)


def rating_color(rating: Any) -> str:
    return {5: SUCCESS, 4: INFO, 3: WARNING, 2: ACCENT, 1: DANGER}.get(rating, NEUTRAL)


# ----------------- LABELS ------------------------

_STATUS_LABELS = {
    "booking": {
        BookingStatus.COMPLETED: "Hoàn thành",
        BookingStatus.CONFIRMED: "Đã thanh toán",
        BookingStatus.PENDING: "Đang chờ",
        BookingStatus.CANCELLED: "Đã hủy",
        BookingStatus.ACCEPTED: "Đã xác nhận",
    },
    "request": {
        RequestStatus.OPEN: "Chờ phản hồi",
        RequestStatus.MATCHED: "Đã ghép đôi",
        RequestStatus.PENDING: "Đang chờ",
        RequestStatus.ACCEPTED: "Đã chấp nhận",
        RequestStatus.REJECTED: "Đã từ chối",
        RequestStatus.COMPLETED: "Hoàn thành",
    },
    "offer": {
        OfferStatus.PENDING: "Đang chờ",
        OfferStatus.ACCEPTED: "Đã chấp nhận",
        OfferStatus.REJECTED: "Đã từ chối",
    },
    "payment": {
        PaymentStatus.PAID: "Đã thanh toán",
        PaymentStatus.PENDING: "Đang xử lý",
        PaymentStatus.FAILED: "Thất bại",
        PaymentStatus.CANCELLED: "Đã hủy",
    },
}

_TYPE_LABELS = {
    PaymentType.FULL: "Thanh toán đủ",
    PaymentType.DEPOSIT: "Đặt cọc",
}

_ROLE_LABELS = {
    UserRole.PHOTOGRAPHER: "Nhiếp ảnh gia",
    UserRole.CUSTOMER: "Khách hàng",
}

_SHOOTING_TYPE_LABELS = {
    "outdoor": "Ngoài trời",
    "studio": "Trong studio",
}


def _raw(value: Any) -> str:
    return "" if value is None else str(value)


def status_label(kind: str, value: Any) -> str:
    member = _parse_kind(kind, value)
    return _STATUS_LABELS.get(kind, {}).get(member, _raw(value))


def type_label(value: Any) -> str:
    return _TYPE_LABELS.get(PaymentType.parse(value), _raw(value))


def role_label(value: Any) -> str:
    return _ROLE_LABELS.get(UserRole.parse(value), _raw(value))


def shooting_type_label(value: Any) -> str:
    return _SHOOTING_TYPE_LABELS.get(_raw(value).lower(), _raw(value))


def active_label(is_active: bool) -> str:
    return "Hoạt động" if is_active else "Vô hiệu hóa"


def payment_status_text(booking_status: Any, payment_status: Any) -> str:
    """Payment progress of a booking, from its booking and payment status."""
    if not payment_status:
        return "Chưa thanh toán"
    booking = BookingStatus.parse(booking_status)
    payment = BookingPaymentStatus.parse(payment_status)
    if booking in (BookingStatus.CONFIRMED, BookingStatus.COMPLETED):
        if payment is BookingPaymentStatus.DEPOSIT_PAID:
            return "Đã thanh toán một phần (20%)"
        if payment is BookingPaymentStatus.FULLY_PAID:
            return "Đã thanh toán toàn bộ" if booking is BookingStatus.CONFIRMED else "Đã hoàn thành"
    return "Chưa thanh toán"


def badge(text: str, color: str) -> str:
    """Colored inline badge for st.markdown(..., unsafe_allow_html=True)."""
    hex_color = BADGE_HEX.get(color, BADGE_HEX[NEUTRAL])
    return (
        f'<span style="background-color:{hex_color}22;color:{hex_color};'
        f'padding:2px 8px;border-radius:8px;font-size:0.85em;">{html.escape(str(text))}</span>'
    )
