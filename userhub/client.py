"""
Async HTTP client for the UserHub API.

Front ends talk to the service through this client instead of building
requests by hand. Every method maps to one endpoint and returns decoded JSON.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

import httpx


class ApiError(Exception):
    """Raised when the API answers with an error status or cannot be reached."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}" if status_code else message)
        self.status_code = status_code
        self.message = message


def _extract_error_message(response: httpx.Response) -> str:
    fallback = f"Request failed with status {response.status_code}"
    try:
        parsed = response.json()
    except ValueError:
        return response.text or fallback
    if isinstance(parsed, dict):
        for key in ("detail", "error"):
            value = parsed.get(key)
            if isinstance(value, str) and value:
                return value
        if parsed:
            # Request validation errors come back as {field: message}
            return "; ".join(f"{field}: {msg}" for field, msg in parsed.items())
    return fallback


class UserHubClient:
    """
    Usage:
        async with UserHubClient("http://localhost:8000") as client:
            user = await client.create_user("new@example.com", group_ids=[admin_id])
            await client.update_user(user["id"], active=False)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        cleaned = (base_url or "").strip()
        if not cleaned:
            raise ValueError("API base URL must not be empty")
        self._client = httpx.AsyncClient(
            base_url=cleaned.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "UserHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise ApiError(0, f"Failed to contact UserHub API: {exc}") from exc

        if response.status_code >= 400:
            raise ApiError(response.status_code, _extract_error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Users

    async def list_users(self) -> list[dict]:
        return await self._request("GET", "/api/users")

    async def get_user(self, user_id: str) -> dict:
        return await self._request("GET", f"/api/users/{user_id}")

    async def create_user(self, email: str, group_ids: Optional[Sequence[str]] = None) -> dict:
        payload: dict[str, Any] = {"email": email}
        if group_ids is not None:
            payload["group_ids"] = list(group_ids)
        return await self._request("POST", "/api/users", json=payload)

    async def update_user(
        self,
        user_id: str,
        *,
        email: Optional[str] = None,
        group_ids: Optional[Sequence[str]] = None,
        active: Optional[bool] = None,
    ) -> dict:
        payload: dict[str, Any] = {}
        if email is not None:
            payload["email"] = email
        if group_ids is not None:
            payload["group_ids"] = list(group_ids)
        if active is not None:
            payload["active"] = active
        return await self._request("PUT", f"/api/users/{user_id}", json=payload)

    async def delete_user(self, user_id: str) -> None:
        await self._request("DELETE", f"/api/users/{user_id}")

    # Groups and permissions

    async def list_groups(self) -> list[dict]:
        return await self._request("GET", "/api/groups")

    async def get_group(self, group_id: str) -> dict:
        return await self._request("GET", f"/api/groups/{group_id}")

    async def list_permissions(self) -> list[dict]:
        return await self._request("GET", "/api/groups/permissions")

    async def list_available_permissions(self, group_id: str) -> list[dict]:
        return await self._request("GET", f"/api/groups/{group_id}/available-permissions")

    async def add_permission(self, group_id: str, permission_id: str) -> dict:
        return await self._request(
            "POST",
            f"/api/groups/{group_id}/permissions",
            json={"permission_id": permission_id},
        )

    async def remove_permission(self, group_id: str, permission_id: str) -> dict:
        return await self._request("DELETE", f"/api/groups/{group_id}/permissions/{permission_id}")

    # Statistics

    async def total_user_count(self) -> int:
        return await self._request("GET", "/api/users/count")

    async def active_user_count(self) -> int:
        return await self._request("GET", "/api/users/count/active")

    async def user_count_per_group(self) -> dict[str, int]:
        return await self._request("GET", "/api/users/count/per-group")

    async def user_count_for_group(self, group_id: str) -> int:
        return await self._request("GET", f"/api/users/count/group/{group_id}")

    async def user_statistics(self) -> dict:
        return await self._request("GET", "/api/users/statistics")
