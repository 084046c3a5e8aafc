"""
REST backend client.

Talks to the guardian/baby/appointment API over HTTP with httpx.
No retries. Non-2xx answers and transport errors are returned as failed
responses carrying the body text so flows can show it to the CHW.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .base import BackendAPI
from .types import BackendResponse

logger = logging.getLogger(__name__)


def _items(data: Any, key: str) -> List[Dict[str, Any]]:
    """
    Pull a list of records out of a listing response.

    Accepts a bare list, {key: [...]}, {"data": [...]} or a single record.
    """
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    if isinstance(data, dict):
        for candidate in (key, "data"):
            value = data.get(candidate)
            if isinstance(value, list):
                return [item for item in value if isinstance(item, dict)]
        if "id" in data:
            return [data]
    return []


def _error_text(response: httpx.Response) -> str:
    """Body of a failed response as text, compact JSON when it parses."""
    try:
        return json.dumps(response.json(), separators=(",", ":"))
    except ValueError:
        return response.text or f"HTTP {response.status_code}"


class RestBackendAPI(BackendAPI):
    """
    httpx client for the remote API.

    Paths are relative to base_url (for example "https://host/api"):
    /guardians, /babies, /appointments, /appointments/{id}.
    """

    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url:  API root, e.g. "http://127.0.0.1:8000/api"
            api_token: Optional bearer token
            timeout_s: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout_s = timeout_s
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> BackendResponse:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json_body, params=params)
        except httpx.RequestError as e:
            logger.error(
                f"Backend request failed: {method} {path}: {e}",
                extra={"method": method, "path": path, "error": str(e)},
            )
            return BackendResponse(status="failed", error=f"Backend unreachable: {e}")

        if not response.is_success:
            error_text = _error_text(response)
            logger.error(
                f"Backend error: {method} {path} -> {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "error_body": error_text,
                },
            )
            return BackendResponse(
                status="failed",
                status_code=response.status_code,
                error=error_text,
            )

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = response.text

        logger.info(f"Backend call ok: {method} {path} -> {response.status_code}")
        return BackendResponse(status="success", status_code=response.status_code, data=data)

    async def register_guardian(self, payload: Dict[str, Any]) -> BackendResponse:
        return await self._request("POST", "/guardians", json_body=payload)

    async def find_guardian(self, national_id: str) -> BackendResponse:
        result = await self._request("GET", "/guardians", params={"national_id": national_id})
        if not result.ok:
            return result

        # The API may ignore the filter and return every guardian.
        for guardian in _items(result.data, "guardians"):
            if str(guardian.get("national_id", "")).strip() == national_id:
                return BackendResponse(
                    status="success", status_code=result.status_code, data=guardian
                )
        return BackendResponse(status="not_found", status_code=result.status_code)

    async def register_baby(self, payload: Dict[str, Any]) -> BackendResponse:
        return await self._request("POST", "/babies", json_body=payload)

    async def create_appointment(self, payload: Dict[str, Any]) -> BackendResponse:
        return await self._request("POST", "/appointments", json_body=payload)

    async def list_appointments(self, baby_id: Union[int, str]) -> BackendResponse:
        result = await self._request("GET", "/appointments", params={"baby_id": baby_id})
        if not result.ok:
            return result

        appointments = [
            item
            for item in _items(result.data, "appointments")
            if str(item.get("baby_id", baby_id)) == str(baby_id)
        ]
        if not appointments:
            return BackendResponse(status="not_found", status_code=result.status_code)
        return BackendResponse(
            status="success", status_code=result.status_code, data=appointments
        )

    async def update_appointment(
        self, appointment_id: Union[int, str], payload: Dict[str, Any]
    ) -> BackendResponse:
        return await self._request("PUT", f"/appointments/{appointment_id}", json_body=payload)

    async def delete_appointment(self, appointment_id: Union[int, str]) -> BackendResponse:
        return await self._request("DELETE", f"/appointments/{appointment_id}")
