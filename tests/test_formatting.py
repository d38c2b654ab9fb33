from datetime import datetime, timezone

from dashboard.formatting import (
    DANGER,
    INFO,
    INVALID_DATE,
    NEUTRAL,
    SUCCESS,
    WARNING,
    active_label,
    badge,
    format_date,
    format_datetime,
    format_growth,
    format_money,
    payment_status_text,
    rating_color,
    role_label,
    shooting_type_label,
    status_color,
    status_label,
    type_label,
)


def test_format_money():
    assert format_money(1500000) == "1.500.000 ₫"
    assert format_money(0) == "0 ₫"
    assert format_money(None) == "0 ₫"
    assert format_money("250000") == "250.000 ₫"
    assert format_money("abc") == "0 ₫"
    assert format_money(999.6) == "1.000 ₫"


def test_non_finite_numbers_do_not_raise():
    assert format_money(float("inf")) == "0 ₫"
    assert format_money("-inf") == "0 ₫"
    assert format_money(float("nan")) == "0 ₫"
    assert format_growth(float("inf")) == "+0.0%"
    assert format_growth("nan") == "+0.0%"


def test_format_datetime():
    assert format_datetime("2024-03-15T14:30:00") == "14:30 15/03/2024"
    assert format_datetime("2024-03-15T14:30:05", seconds=True) == "14:30:05 15/03/2024"
    assert format_date("2024-03-15T14:30:00") == "15/03/2024"


def test_offset_timestamps_shown_in_vietnam_time():
    assert format_datetime("2024-03-15T20:30:00Z") == "03:30 16/03/2024"
    assert format_date("2024-03-15T18:00:00+00:00") == "16/03/2024"
    assert format_datetime("2024-03-15T14:30:00+07:00") == "14:30 15/03/2024"
    assert format_datetime(datetime(2024, 3, 15, 20, 30, tzinfo=timezone.utc)) == "03:30 16/03/2024"


def test_invalid_dates_do_not_raise():
    assert format_datetime("not a date") == INVALID_DATE
    assert format_datetime("") == INVALID_DATE
    assert format_datetime(None) == INVALID_DATE
    assert format_date("2024-13-45") == INVALID_DATE


def test_format_growth():
    assert format_growth(10) == "+10.0%"
    assert format_growth(-2.345) == "-2.3%"
    assert format_growth(None) == "+0.0%"


def test_status_color_known_and_unknown():
    assert status_color("booking", "confirmed") == SUCCESS
    assert status_color("booking", "Pending") == WARNING
    assert status_color("booking", "cancelled") == DANGER
    assert status_color("booking", "completed") == INFO
    assert status_color("payment", "paid") == SUCCESS
    assert status_color("payment", "FAILED") == DANGER
    assert status_color("booking", "on_hold") == NEUTRAL
    assert status_color("booking", None) == NEUTRAL
    assert status_color("spaceship", "pending") == NEUTRAL


def test_status_label_falls_back_to_raw():
    assert status_label("booking", "completed") == "Hoàn thành"
    assert status_label("request", "matched") == "Đã ghép đôi"
    assert status_label("payment", "PAID") == "Đã thanh toán"
    assert status_label("booking", "on_hold") == "on_hold"
    assert status_label("booking", None) == ""


def test_type_and_role_labels():
    assert type_label("full") == "Thanh toán đủ"
    assert type_label("DEPOSIT") == "Đặt cọc"
    assert type_label("installment") == "installment"
    assert role_label("photographer") == "Nhiếp ảnh gia"
    assert role_label("customer") == "Khách hàng"
    assert role_label("admin") == "admin"
    assert shooting_type_label("outdoor") == "Ngoài trời"
    assert shooting_type_label("drone") == "drone"
    assert active_label(True) == "Hoạt động"
    assert active_label(False) == "Vô hiệu hóa"


def test_rating_color():
    assert rating_color(5) == SUCCESS
    assert rating_color(1) == DANGER
    assert rating_color(0) == NEUTRAL


def test_payment_status_text():
    assert payment_status_text("confirmed", None) == "Chưa thanh toán"
    assert payment_status_text("confirmed", "deposit_paid") == "Đã thanh toán một phần (20%)"
    assert payment_status_text("confirmed", "fully_paid") == "Đã thanh toán toàn bộ"
    assert payment_status_text("completed", "deposit_paid") == "Đã thanh toán một phần (20%)"
    assert payment_status_text("completed", "fully_paid") == "Đã hoàn thành"
    assert payment_status_text("pending", "fully_paid") == "Chưa thanh toán"


def test_badge_escapes_its_text():
    html = badge("<b>x</b>", DANGER)
    assert "<b>" not in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html


def test_badge_uses_neutral_for_unknown_color():
    html = badge("x", "nope")
    assert "#6b7280" in html
    assert ">x</span>" in html
