"""Unit tests for the REST client of the roster admin API"""
import json

import httpx
import pytest

from exceptions import (
    ConcurrencyConflictException,
    ExternalServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from services.roster_api_client import RosterApiClient
from services.roster_repository import RosterRepository
from tests.fixtures.data_fixtures import create_test_roster, create_test_roster_document


def make_client(handler) -> RosterApiClient:
    transport = httpx.MockTransport(handler)
    return RosterApiClient(client=httpx.AsyncClient(transport=transport, base_url="http://api.test"))


def error_body(status_code: int, message: str) -> dict:
    return {"error": {"message": message, "status_code": status_code}}


def test_implements_repository_protocol():
    assert isinstance(RosterApiClient(base_url="http://api.test"), RosterRepository)


@pytest.mark.asyncio
class TestReads:

    async def test_list_all(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[create_test_roster_document(age_group="U13")])

        rosters = await make_client(handler).list_all("2025")

        assert [r.ageGroup for r in rosters] == ["U13"]
        assert requests[0].url.path == "/api/admin/rosters"
        assert requests[0].url.params["year"] == "2025"

    async def test_list_all_unwraps_envelopes(self):
        def handler(request):
            return httpx.Response(200, json={"rosters": [create_test_roster_document()]})

        assert len(await make_client(handler).list_all()) == 1

    async def test_get_encodes_age_group(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=create_test_roster_document(age_group="U15 Girls/Boys"))

        roster = await make_client(handler).get("U15 Girls/Boys", "2025")

        assert roster.ageGroup == "U15 Girls/Boys"
        assert requests[0].url.raw_path.startswith(b"/api/admin/rosters/U15%20Girls%2FBoys")
        assert requests[0].url.params["season"] == "2025"

    async def test_metadata(self):
        def handler(request):
            return httpx.Response(200, json={"ageGroups": ["U13"], "seasons": ["2025", "2024"]})

        metadata = await make_client(handler).metadata()

        assert metadata.seasons == ["2025", "2024"]


@pytest.mark.asyncio
class TestWrites:

    async def test_replace_sends_the_whole_document(self):
        roster = create_test_roster(selectors=2, chair=1, version=4)
        sent = {}

        def handler(request):
            sent["method"] = request.method
            sent["body"] = json.loads(request.content)
            return httpx.Response(200, json={**sent["body"], "version": 5})

        saved = await make_client(handler).replace(roster)

        assert sent["method"] == "PUT"
        assert sent["body"]["version"] == 4
        assert len(sent["body"]["selectors"]) == 2
        assert sent["body"]["withdrawn"][0]["reason"] == "Injured"
        assert saved.version == 5

    async def test_replace_without_roster_body_returns_input(self):
        roster = create_test_roster()

        def handler(request):
            return httpx.Response(200, json={"success": True})

        assert await make_client(handler).replace(roster) == roster

    async def test_create(self):
        def handler(request):
            assert request.method == "POST"
            return httpx.Response(201, json={**json.loads(request.content), "version": 1})

        created = await make_client(handler).create(create_test_roster(version=None))

        assert created.version == 1

    async def test_delete(self):
        def handler(request):
            assert request.url.params["season"] == "2024"
            return httpx.Response(200, json={"success": True, "deleted_count": 1})

        assert await make_client(handler).delete("U15", "2024") == 1


@pytest.mark.asyncio
class TestErrors:

    @pytest.mark.parametrize(
        "status_code, expected",
        [
            (404, ResourceNotFoundException),
            (409, ConcurrencyConflictException),
            (400, ValidationException),
            (422, ValidationException),
            (500, ExternalServiceException),
        ],
    )
    async def test_status_mapping(self, status_code, expected):
        def handler(request):
            return httpx.Response(status_code, json=error_body(status_code, "nope"))

        with pytest.raises(expected):
            await make_client(handler).get("U15", "2025")

    async def test_conflict_keeps_server_message(self):
        def handler(request):
            return httpx.Response(409, json=error_body(409, "Roster already exists"))

        with pytest.raises(ConcurrencyConflictException) as exc_info:
            await make_client(handler).create(create_test_roster())
        assert exc_info.value.message == "Roster already exists"

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExternalServiceException) as exc_info:
            await make_client(handler).list_all()
        assert exc_info.value.status_code == 502
