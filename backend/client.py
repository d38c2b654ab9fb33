# backend/client.py
"""
HTTP client for the SnapLink admin REST API.

Dashboard → Backend (bearer token from secrets)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
import streamlit as st

logger = logging.getLogger(__name__)

COLLECTION_KEYS = ("users", "payments", "reviews", "data", "items")

TIMEFRAMES = ("week", "month", "year")


class ApiError(Exception):
    """Transport failure, non-2xx answer or unreadable JSON body from the backend."""

    def __init__(self, method: str, path: str, status_code: Optional[int] = None, detail: str = ""):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.detail = detail
        if status_code is not None:
            message = f"{method} {path} -> {status_code}"
        else:
            message = f"{method} {path} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def unwrap_collection(payload: Any, key: Optional[str] = None) -> Tuple[List[Dict[str, Any]], int]:
    """
    Accepts either a bare array or an object like {"total": 3, "users": [...]}.
    Returns (items, total).
    """
    if payload is None:
        return [], 0
    if isinstance(payload, list):
        return payload, len(payload)
    if isinstance(payload, dict):
        keys = (key,) + COLLECTION_KEYS if key else COLLECTION_KEYS
        for k in keys:
            if isinstance(payload.get(k), list):
                items = payload[k]
                total = payload.get("total")
                return items, total if isinstance(total, int) else len(items)
    return [], 0


class ApiClient:
    """Async client for the admin endpoints."""

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                resp = await client.request(method, path, headers=headers, **kwargs)
            except httpx.HTTPError as e:
                logger.error(f"API request failed: {method} {path} -> {e}")
                raise ApiError(method, path, detail=str(e)) from e

        if resp.status_code >= 400:
            logger.error(f"API error: {method} {path} -> {resp.status_code}")
            raise ApiError(method, path, status_code=resp.status_code, detail=resp.text[:200])

        if resp.status_code == 204 or not resp.content:
            return None

        content_type = resp.headers.get("content-type", "")
        if "json" not in content_type:
            return resp.content
        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"API returned invalid JSON: {method} {path} -> {resp.status_code}")
            raise ApiError(method, path, status_code=resp.status_code, detail="invalid JSON") from e

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_users(
        self,
        page: int = 1,
        limit: int = 100,
        role: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[dict], int]:
        """GET /admin/users"""
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if role:
            params["role"] = role
        if status:
            params["status"] = status
        if search:
            params["search"] = search
        result = await self._request("GET", "/admin/users", params=params)
        return unwrap_collection(result, "users")

    async def update_user_status(self, user_id: int, is_active: bool) -> Optional[dict]:
        """PATCH /admin/users/{id}/status"""
        result = await self._request(
            "PATCH", f"/admin/users/{user_id}/status", json={"is_active": is_active}
        )
        logger.info(f"User {user_id} is_active set to {is_active}")
        return result if isinstance(result, dict) else None

    async def delete_user(self, user_id: int) -> None:
        """DELETE /admin/users/{id}"""
        await self._request("DELETE", f"/admin/users/{user_id}")
        logger.info(f"User {user_id} deleted")

    async def delete_users(self, user_ids: List[int]) -> None:
        """DELETE /admin/users/bulk-delete"""
        await self._request("DELETE", "/admin/users/bulk-delete", json={"user_ids": list(user_ids)})
        logger.info(f"Users {user_ids} deleted")

    async def export_users(self) -> bytes:
        """GET /admin/users/export: file produced by the backend."""
        result = await self._request("GET", "/admin/users/export")
        if isinstance(result, bytes):
            return result
        return b""

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    async def get_bookings(self) -> Tuple[List[dict], int]:
        """GET /admin/bookings"""
        result = await self._request("GET", "/admin/bookings")
        return unwrap_collection(result, "data")

    async def get_bookings_by_status(self, status: str) -> Tuple[List[dict], int]:
        """GET /admin/bookings/status/{status}"""
        result = await self._request("GET", f"/admin/bookings/status/{status}")
        return unwrap_collection(result, "data")

    async def get_booking_by_code(self, booking_code: str) -> Optional[dict]:
        """GET /admin/bookings/code/{code}"""
        result = await self._request("GET", f"/admin/bookings/code/{booking_code}")
        if isinstance(result, dict) and isinstance(result.get("data"), dict):
            return result["data"]
        return result if isinstance(result, dict) else None

    async def get_booking_distribution(self) -> Dict[str, int]:
        """GET /admin/distribution/booking"""
        result = await self._request("GET", "/admin/distribution/booking")
        return result or {}

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def get_requests(self) -> Tuple[List[dict], int]:
        """GET /admin/requests"""
        result = await self._request("GET", "/admin/requests")
        return unwrap_collection(result, "data")

    async def get_request_distribution(self) -> Dict[str, int]:
        """GET /admin/distribution/request"""
        result = await self._request("GET", "/admin/distribution/request")
        return result or {}

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    async def get_payments(self) -> Tuple[List[dict], int]:
        """GET /admin/payments"""
        result = await self._request("GET", "/admin/payments")
        return unwrap_collection(result, "payments")

    async def get_payment_statistics(self) -> dict:
        """GET /admin/payments/statistics"""
        result = await self._request("GET", "/admin/payments/statistics")
        return result or {}

    async def get_payment_monthly_comparison(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> dict:
        """GET /admin/payments/monthly-comparison"""
        params: Dict[str, Any] = {}
        if year:
            params["year"] = year
        if month:
            params["month"] = month
        result = await self._request("GET", "/admin/payments/monthly-comparison", params=params)
        return result or {}

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    async def get_reviews(self) -> Tuple[List[dict], int]:
        """GET /admin/reviews"""
        result = await self._request("GET", "/admin/reviews")
        return unwrap_collection(result, "reviews")

    async def delete_review(self, review_id: int) -> None:
        """DELETE /admin/reviews/{id}"""
        await self._request("DELETE", f"/admin/reviews/{review_id}")
        logger.info(f"Review {review_id} deleted")

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    async def get_monthly_comparison(self) -> dict:
        """GET /admin/monthly-comparison"""
        result = await self._request("GET", "/admin/monthly-comparison")
        return result or {}

    async def get_revenue_data(self, timeframe: str = "month") -> List[dict]:
        """GET /admin/dashboard/revenue"""
        result = await self._request("GET", "/admin/dashboard/revenue", params={"timeframe": timeframe})
        if isinstance(result, dict):
            return result.get("revenue_data") or []
        return result or []

    async def get_booking_data(self, timeframe: str = "month") -> List[dict]:
        """GET /admin/dashboard/bookings"""
        result = await self._request("GET", "/admin/dashboard/bookings", params={"timeframe": timeframe})
        return result or []

    async def get_user_distribution(self, timeframe: str = "month") -> List[dict]:
        """GET /admin/dashboard/user-distribution"""
        result = await self._request(
            "GET", "/admin/dashboard/user-distribution", params={"timeframe": timeframe}
        )
        return result or []

    async def get_booking_status_data(self, timeframe: str = "month") -> List[dict]:
        """GET /admin/dashboard/booking-status"""
        result = await self._request(
            "GET", "/admin/dashboard/booking-status", params={"timeframe": timeframe}
        )
        return result or []


def get_api_client(cfg) -> ApiClient:
    """
    Returns the ApiClient cached for this browser session.
    `cfg` is the ApiConfig loaded from the [api] section of the secrets.
    """
    if "api_client" not in st.session_state:
        st.session_state.api_client = ApiClient(cfg.base_url, cfg.token, cfg.timeout)

    return st.session_state.api_client
