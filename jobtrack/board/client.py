"""HTTP client for the tracked application API."""

import logging
from datetime import datetime
from typing import Any

import httpx

from jobtrack.core.config import settings
from jobtrack.core.exceptions import OperationTimeoutError
from jobtrack.models.tracked_application import ApplicationStatus
from jobtrack.routers.dependencies import USER_ID_HEADER

logger = logging.getLogger(__name__)


class TrackerAPIError(Exception):
    """Non-success response from the tracking API."""

    def __init__(
        self, status_code: int, message: str, response_data: dict | None = None
    ):
        self.status_code = status_code
        self.message = message
        self.response_data = response_data or {}
        super().__init__(message)


class TrackerClient:
    """Tracking API client acting on behalf of one user."""

    BASE_PATH = "/tracked-applications"

    def __init__(
        self,
        user_id: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.user_id = user_id
        self.timeout = timeout or settings.status_update_timeout
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=httpx.Timeout(self.timeout),
            headers={USER_ID_HEADER: user_id, "Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out: {e}")
            raise OperationTimeoutError(f"{method} {path}", self.timeout) from e

        if response.is_error:
            try:
                data = response.json()
            except ValueError:
                data = {"message": response.text[:500]}
            if not isinstance(data, dict):
                data = {"detail": data}
            message = (
                data.get("message") or data.get("detail") or response.reason_phrase
            )
            logger.warning(f"{method} {path} failed ({response.status_code}): {message}")
            raise TrackerAPIError(response.status_code, str(message), data)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def set_status(
        self,
        job_id: int,
        status: ApplicationStatus,
        notes: str | None = None,
    ) -> dict:
        """Move the application for a job to a status."""
        payload: dict[str, Any] = {"status": ApplicationStatus(status).value}
        if notes is not None:
            payload["notes"] = notes
        return await self._request(
            "PUT", f"{self.BASE_PATH}/{job_id}/status", json=payload
        )

    async def update_application(self, application_id: int, **fields) -> dict:
        """Replace whole fields of an application."""
        payload = {}
        for key, value in fields.items():
            if key == "interview_dates" and value is not None:
                value = [d.isoformat() if isinstance(d, datetime) else d for d in value]
            elif key == "reminder_date" and isinstance(value, datetime):
                value = value.isoformat()
            payload[key] = value
        return await self._request(
            "PATCH", f"{self.BASE_PATH}/{application_id}", json=payload
        )

    async def list_applications(
        self,
        status: ApplicationStatus | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 100,
    ) -> dict:
        """Fetch one page of applications."""
        params: dict[str, Any] = {"page": page, "limit": limit}
        if status is not None:
            params["status"] = ApplicationStatus(status).value
        if search:
            params["search"] = search
        return await self._request("GET", self.BASE_PATH, params=params)

    async def get_stats(self) -> dict[str, int]:
        """Per-status counts for the user."""
        return await self._request("GET", f"{self.BASE_PATH}/stats")

    async def close(self):
        await self.client.aclose()
