import json

import httpx
import pytest

from backend.client import ApiClient, ApiError, unwrap_collection


def _client(handler, token="secret-token"):
    return ApiClient("https://api.test/", token=token, transport=httpx.MockTransport(handler))


def test_unwrap_collection_shapes():
    rows = [{"id": 1}, {"id": 2}]
    assert unwrap_collection(rows) == (rows, 2)
    assert unwrap_collection({"total": 10, "users": rows}, "users") == (rows, 10)
    assert unwrap_collection({"total": 2, "data": rows}) == (rows, 2)
    assert unwrap_collection({"items": rows}) == (rows, 2)
    assert unwrap_collection({"reviews": rows, "total": "x"}, "reviews") == (rows, 2)
    assert unwrap_collection(None) == ([], 0)
    assert unwrap_collection({"detail": "nope"}) == ([], 0)


@pytest.mark.anyio
async def test_get_users_sends_params_and_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"total": 1, "users": [{"user_id": 1}]})

    users, total = await _client(handler).get_users(page=1, limit=50, role="photographer")

    assert users == [{"user_id": 1}]
    assert total == 1
    assert seen["path"] == "/admin/users"
    assert seen["params"] == {"page": "1", "limit": "50", "role": "photographer"}
    assert seen["auth"] == "Bearer secret-token"


@pytest.mark.anyio
async def test_no_auth_header_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    await _client(handler, token="").get_bookings()
    assert seen["auth"] is None


@pytest.mark.anyio
async def test_bookings_accept_bare_list_and_wrapped():
    def bare(request):
        return httpx.Response(200, json=[{"booking_id": 1}, {"booking_id": 2}])

    def wrapped(request):
        return httpx.Response(200, json={"total": 5, "data": [{"booking_id": 1}]})

    assert await _client(bare).get_bookings() == ([{"booking_id": 1}, {"booking_id": 2}], 2)
    assert await _client(wrapped).get_bookings() == ([{"booking_id": 1}], 5)


@pytest.mark.anyio
async def test_update_user_status_patches_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"user_id": 3, "is_active": False})

    echoed = await _client(handler).update_user_status(3, False)

    assert seen == {"method": "PATCH", "path": "/admin/users/3/status", "body": {"is_active": False}}
    assert echoed == {"user_id": 3, "is_active": False}


@pytest.mark.anyio
async def test_delete_review_handles_204():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/admin/reviews/9"
        return httpx.Response(204)

    assert await _client(handler).delete_review(9) is None


@pytest.mark.anyio
async def test_bulk_delete_users_sends_ids():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(204)

    await _client(handler).delete_users([1, 2])
    assert seen["body"] == {"user_ids": [1, 2]}


@pytest.mark.anyio
async def test_http_error_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "boom"})

    with pytest.raises(ApiError) as exc:
        await _client(handler).get_reviews()

    assert exc.value.status_code == 500
    assert exc.value.path == "/admin/reviews"


@pytest.mark.anyio
async def test_transport_error_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as exc:
        await _client(handler).get_payments()

    assert exc.value.status_code is None


@pytest.mark.anyio
async def test_invalid_json_body_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b"<html>bad gateway</html>",
            headers={"content-type": "application/json"},
        )

    with pytest.raises(ApiError) as exc:
        await _client(handler).get_reviews()

    assert exc.value.status_code == 200
    assert exc.value.detail == "invalid JSON"


@pytest.mark.anyio
async def test_delete_user_hits_user_path():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(204)

    assert await _client(handler).delete_user(7) is None
    assert seen == {"method": "DELETE", "path": "/admin/users/7"}


@pytest.mark.anyio
async def test_booking_status_data_sends_timeframe():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"name": "completed", "value": 4}])

    points = await _client(handler).get_booking_status_data("week")

    assert points == [{"name": "completed", "value": 4}]
    assert seen == {"path": "/admin/dashboard/booking-status", "params": {"timeframe": "week"}}


@pytest.mark.anyio
async def test_payment_monthly_comparison_params():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"current_month": {"count": 1, "amount": 10}})

    result = await _client(handler).get_payment_monthly_comparison(2024, 5)

    assert seen["params"] == {"year": "2024", "month": "5"}
    assert result["current_month"]["count"] == 1


@pytest.mark.anyio
async def test_revenue_data_unwraps_series():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["timeframe"] == "week"
        return httpx.Response(200, json={"revenue_data": [{"name": "T2", "Doanh_thu": 100}]})

    assert await _client(handler).get_revenue_data("week") == [{"name": "T2", "Doanh_thu": 100}]


@pytest.mark.anyio
async def test_booking_by_code_and_distribution():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/admin/bookings/code/BK001":
            return httpx.Response(200, json={"booking_id": 1, "booking_code": "BK001"})
        if request.url.path == "/admin/distribution/booking":
            return httpx.Response(200, json={"pending": 2, "completed": 5})
        return httpx.Response(404)

    client = _client(handler)
    assert (await client.get_booking_by_code("BK001"))["booking_code"] == "BK001"
    assert await client.get_booking_distribution() == {"pending": 2, "completed": 5}
    with pytest.raises(ApiError) as exc:
        await client.get_booking_by_code("NOPE")
    assert exc.value.status_code == 404


@pytest.mark.anyio
async def test_export_users_returns_bytes():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"id,name\n1,An\n", headers={"content-type": "text/csv"})

    assert await _client(handler).export_users() == b"id,name\n1,An\n"
