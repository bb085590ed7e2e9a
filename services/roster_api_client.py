"""
Roster API Client - RosterRepository over the admin REST API

Speaks the /api/admin/rosters contract with httpx so that the engine and the
RosterStore can run against a remote deployment (see scripts/roster_cli.py).
HTTP errors are mapped back onto the exception hierarchy used server-side.
"""

from typing import Any

import httpx

from config import settings
from exceptions import (
    ConcurrencyConflictException,
    ExternalServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from logging_config import logger
from models.rosters import Roster, RosterMetadata
from utils import division_label, encode_age_group

SERVICE_NAME = "ROSTER_API"
ROSTERS_PATH = "/api/admin/rosters"
METADATA_PATH = "/api/admin/metadata"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return error.get("message") or response.reason_phrase
    return error or (body.get("message") if isinstance(body, dict) else None) or response.reason_phrase


def _unwrap_list(body: Any) -> list:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in ("rosters", "data"):
            if isinstance(body.get(key), list):
                return body[key]
    raise ExternalServiceException(SERVICE_NAME, "Unexpected roster list payload")


def _unwrap_roster(body: Any) -> dict | None:
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        body = body["data"]
    if isinstance(body, dict) and "ageGroup" in body and "teams" in body:
        return body
    return None


class RosterApiClient:
    """
    Async client for the roster admin API

    Usage:
        async with RosterApiClient() as api:
            rosters = await api.list_all("2025")
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS,
        )

    async def __aenter__(self) -> "RosterApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _request(self, method: str, url: str, resource_id: str = "", **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.bind(method=method, url=url).error(f"Network error calling roster API: {str(e)}")
            raise ExternalServiceException(
                SERVICE_NAME, f"Network error: {str(e)}", {"method": method, "url": url}
            ) from e

        if response.is_success:
            return response

        message = _error_message(response)
        logger.bind(method=method, url=url).warning(
            f"Roster API returned {response.status_code}: {message}"
        )
        if response.status_code == 404:
            raise ResourceNotFoundException(resource_type="Division", resource_id=resource_id)
        if response.status_code == 409:
            raise ConcurrencyConflictException(
                resource_type="Division", resource_id=resource_id, message=message
            )
        if response.status_code in (400, 422):
            raise ValidationException(field="roster", message=message)
        raise ExternalServiceException(
            SERVICE_NAME, message, {"status_code": response.status_code, "method": method, "url": url}
        )

    async def list_all(self, season: str | None = None) -> list[Roster]:
        params = {"year": season} if season else None
        response = await self._request("GET", ROSTERS_PATH, params=params)
        return [Roster(**doc) for doc in _unwrap_list(response.json())]

    async def get(self, age_group: str, season: str) -> Roster:
        response = await self._request(
            "GET",
            f"{ROSTERS_PATH}/{encode_age_group(age_group)}",
            resource_id=division_label(age_group, season),
            params={"season": season},
        )
        doc = _unwrap_roster(response.json())
        if doc is None:
            raise ExternalServiceException(SERVICE_NAME, "Unexpected roster payload")
        return Roster(**doc)

    async def create(self, roster: Roster) -> Roster:
        response = await self._request(
            "POST",
            ROSTERS_PATH,
            resource_id=division_label(*roster.key),
            json=roster.model_dump(mode="json"),
        )
        doc = _unwrap_roster(response.json())
        return Roster(**doc) if doc else roster

    async def replace(self, roster: Roster) -> Roster:
        response = await self._request(
            "PUT",
            f"{ROSTERS_PATH}/{encode_age_group(roster.ageGroup)}",
            resource_id=division_label(*roster.key),
            params={"season": roster.season},
            json=roster.model_dump(mode="json"),
        )
        doc = _unwrap_roster(response.json())
        return Roster(**doc) if doc else roster

    async def delete(self, age_group: str, season: str) -> int:
        response = await self._request(
            "DELETE",
            f"{ROSTERS_PATH}/{encode_age_group(age_group)}",
            resource_id=division_label(age_group, season),
            params={"season": season},
        )
        body = response.json()
        return int(body.get("deleted_count", 1)) if isinstance(body, dict) else 1

    async def metadata(self) -> RosterMetadata:
        response = await self._request("GET", METADATA_PATH)
        return RosterMetadata(**response.json())
