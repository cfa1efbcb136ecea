"""
Remote Data Client

Thin wrappers over the Breakfast4U REST API. One attempt per call: no retries,
no backoff, and a fresh httpx client for every request.
"""
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from storefront.auth.session import Session
from storefront.core.config import settings

log = logging.getLogger(__name__)


class ApiError(Exception):
    """Any failed backend call, carrying the message to display"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_message(data: Any, fallback: str) -> str:
    """Field-level messages first, then the server message, then the fallback"""
    if not isinstance(data, dict):
        return fallback

    errors = data.get("errors")
    if isinstance(errors, list):
        messages = [e["msg"] for e in errors if isinstance(e, dict) and e.get("msg")]
        if messages:
            return ", ".join(messages)

    return data.get("message") or fallback


def _session_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    # Backend may wrap the auth payload in a `data` envelope
    if "token" not in data and isinstance(data.get("data"), dict):
        return data["data"]
    return data


class ApiClient:
    def __init__(
        self,
        session: Session,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.transport = transport
        self.timeout = timeout if timeout is not None else settings.request_timeout

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
        auth: bool = False,
        fallback: str = "Request failed",
    ) -> Dict[str, Any]:
        headers = {}
        if body is not None:
            headers["Content-Type"] = "application/json"
        if auth and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    json=dict(body) if body is not None else None,
                    params=dict(params) if params else None,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            log.error("%s %s failed: %s", method, path, e)
            raise ApiError(fallback) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.is_success:
            raise ApiError(error_message(data, fallback), status_code=response.status_code)

        return data if isinstance(data, dict) else {"data": data}

    # ---------- Auth ----------

    async def register(self, user_data: Mapping[str, Any]) -> Dict[str, Any]:
        data = await self.request("POST", "/auth/register", body=user_data, fallback="Registration failed")
        payload = _session_payload(data)
        if payload.get("user"):
            self.session.start(payload.get("token"), payload["user"])
        return data

    async def login(self, credentials: Mapping[str, Any]) -> Dict[str, Any]:
        data = await self.request("POST", "/auth/login", body=credentials, fallback="Login failed")
        payload = _session_payload(data)
        if not payload.get("user"):
            raise ApiError("Login failed")
        self.session.start(payload.get("token"), payload["user"])
        return data

    async def logout(self) -> Dict[str, Any]:
        """Tell the server, then drop the local session no matter what it said"""
        try:
            return await self.request("POST", "/auth/logout", auth=True, fallback="Logout failed")
        except ApiError as e:
            log.warning("server logout failed: %s", e.message)
            return {"success": False, "message": e.message}
        finally:
            self.session.clear()

    async def get_current_user(self) -> Dict[str, Any]:
        return await self.request("GET", "/auth/me", auth=True, fallback="Failed to get user data")

    # ---------- Meals ----------

    async def list_public_meals(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", "/meals", params=filters, fallback="Failed to fetch meals")

    async def list_owner_meals(self) -> Dict[str, Any]:
        # Server scopes the collection to the bearer's store
        return await self.request("GET", "/meals", auth=True, fallback="Failed to fetch meals")

    async def create_meal(self, meal_data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", "/meals", body=meal_data, auth=True, fallback="Failed to create meal")

    async def update_meal(self, meal_id: str, meal_data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.request(
            "PUT", f"/meals/{meal_id}", body=meal_data, auth=True, fallback="Failed to update meal"
        )

    async def delete_meal(self, meal_id: str) -> Dict[str, Any]:
        return await self.request("DELETE", f"/meals/{meal_id}", auth=True, fallback="Failed to delete meal")

    # ---------- Stores & contact ----------

    async def list_stores(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", "/stores", params=filters, fallback="Failed to fetch stores")

    async def submit_contact_form(self, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", "/contact", body=form_data, fallback="Failed to submit contact form")
