import json

import httpx

from backend.client import ApiClient
from dashboard.list_state import ListState
from dashboard.models import Offer, Review, User
from dashboard.requests_page import offer_markup
from dashboard.reviews_page import delete_review_and_reload, review_markup
from dashboard.users_page import delete_user, set_user_active
from dashboard.widgets import run


def _review_backend(reviews):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/admin/reviews":
            return httpx.Response(200, json={"total": len(reviews), "reviews": list(reviews)})
        if request.method == "DELETE" and request.url.path.startswith("/admin/reviews/"):
            review_id = int(request.url.path.rsplit("/", 1)[1])
            before = len(reviews)
            reviews[:] = [r for r in reviews if r["review_id"] != review_id]
            return httpx.Response(204 if len(reviews) < before else 404)
        return httpx.Response(404)

    return ApiClient("https://api.test", transport=httpx.MockTransport(handler))


def test_delete_review_refetches_one_less():
    reviews = [
        {"review_id": 1, "rating": 5, "comment": "Đẹp"},
        {"review_id": 2, "rating": 2, "comment": "Trễ giờ"},
        {"review_id": 3, "rating": 4, "comment": "Ổn"},
    ]
    client = _review_backend(reviews)
    state = ListState(name="reviews", parse=Review.from_api)
    run(state.load(client.get_reviews))
    assert state.total == 3

    assert delete_review_and_reload(client, state, 2)

    assert [r.review_id for r in state.items] == [1, 3]
    assert state.total == 2


def test_delete_review_failure_keeps_list():
    client = _review_backend([{"review_id": 1, "rating": 5}])
    state = ListState(name="reviews", parse=Review.from_api)
    run(state.load(client.get_reviews))

    assert not delete_review_and_reload(client, state, 99)
    assert [r.review_id for r in state.items] == [1]


def test_set_user_active_uses_echoed_user():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json={"user_id": 2, "full_name": "Bình", "is_active": body["is_active"]})

    client = ApiClient("https://api.test", transport=httpx.MockTransport(handler))
    state = ListState(name="users", parse=User.from_api)
    state.items = [User(user_id=1, is_active=True), User(user_id=2, full_name="Binh", is_active=True)]

    assert set_user_active(client, state, state.items[1], False)

    assert state.items[1].is_active is False
    assert state.items[1].full_name == "Bình"
    assert state.items[0].is_active is True


def test_set_user_active_without_echo():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    client = ApiClient("https://api.test", transport=httpx.MockTransport(handler))
    state = ListState(name="users", parse=User.from_api)
    state.items = [User(user_id=1, is_active=False)]

    assert set_user_active(client, state, state.items[0], True)
    assert state.items[0].is_active is True


def test_set_user_active_failure_leaves_state():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403)

    client = ApiClient("https://api.test", transport=httpx.MockTransport(handler))
    state = ListState(name="users", parse=User.from_api)
    state.items = [User(user_id=1, is_active=True)]

    assert not set_user_active(client, state, state.items[0], False)
    assert state.items[0].is_active is True


def test_review_markup_escapes_comment():
    review = Review(review_id=1, rating=1, comment='<img src=x onerror="alert(1)">')

    html = review_markup(review)

    assert "<img" not in html
    assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in html
    assert "1 ★</span>" in html


def test_offer_markup_escapes_photographer_name():
    offer = Offer(request_offer_id=1, custom_price=500000, status="pending",
                  photographer_name="<script>alert(1)</script>")

    html = offer_markup(offer)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "500.000 ₫" in html


def test_offer_markup_falls_back_to_photographer_id():
    assert offer_markup(Offer(request_offer_id=1, photographer_id=9)).startswith("**Photographer #9**")


def test_delete_user_drops_record_after_backend_accepts():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(204)

    client = ApiClient("https://api.test", transport=httpx.MockTransport(handler))
    state = ListState(name="users", parse=User.from_api)
    state.items = [User(user_id=1), User(user_id=2)]
    state.total = 2

    assert delete_user(client, state, state.items[0])

    assert [u.user_id for u in state.items] == [2]
    assert state.total == 1


def test_delete_user_failure_keeps_record():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"detail": "user has bookings"})

    client = ApiClient("https://api.test", transport=httpx.MockTransport(handler))
    state = ListState(name="users", parse=User.from_api)
    state.items = [User(user_id=1)]
    state.total = 1

    assert not delete_user(client, state, state.items[0])
    assert [u.user_id for u in state.items] == [1]
    assert state.total == 1
