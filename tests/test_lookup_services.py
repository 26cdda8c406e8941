"""Tests for the service unit and author lookups."""

import asyncio
import json
from datetime import date

import httpx

from dvids_submit.domain.enums import Branch
from dvids_submit.services.authors import AuthorService
from dvids_submit.services.service_units import ServiceUnitService
from tests.conftest import ScriptedApi, document, virin_data


def _unit(unit_id: str = "unit-123") -> dict[str, object]:
    return {
        "id": unit_id,
        "type": "service-unit",
        "attributes": {
            "name": "1st Battalion",
            "abbreviation": "1BN",
            "branch": "army",
        },
    }


def test_service_unit_virin_date_is_midnight_utc(api: ScriptedApi) -> None:
    api.replies.append(document(virin_data(), 201))
    service = ServiceUnitService(api.api_client())

    response = asyncio.run(service.create_virin("unit-123", date(2024, 10, 1)))

    assert response["data"]["attributes"]["virin"] == "241001-A-AB123-1001"
    payload = json.loads(api.requests[0].content)["data"]
    assert api.requests[0].url.path == "/service-unit/unit-123/virin"
    assert payload["type"] == "service-unit-virin"
    assert payload["attributes"]["date"] == "2024-10-01T00:00:00+00:00"
    assert payload["relationships"]["service_unit"]["data"]["id"] == "unit-123"


def test_my_service_units_sets_only_mine(api: ScriptedApi) -> None:
    api.replies.append(httpx.Response(200, json={"data": [_unit()]}))
    service = ServiceUnitService(api.api_client())

    page = asyncio.run(service.get_my_service_units())

    params = api.requests[0].url.params
    assert params["only_mine"] == "true"
    assert params["limit"] == "20"
    assert params["page"] == "0"
    assert page.data[0].branch is Branch.ARMY


def test_get_service_unit(api: ScriptedApi) -> None:
    api.replies.append(document(_unit("unit-7")))
    service = ServiceUnitService(api.api_client())

    unit = asyncio.run(service.get_service_unit("unit-7"))

    assert unit.id == "unit-7"
    assert api.requests[0].url.path == "/service-unit/unit-7"


def test_author_search_by_name_query(api: ScriptedApi) -> None:
    api.replies.append(
        httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": "author-1",
                        "type": "author",
                        "attributes": {"name": "Jane Smith"},
                    }
                ]
            },
        )
    )
    service = AuthorService(api.api_client())

    page = asyncio.run(service.search_by_name("Smith"))

    request = api.requests[0]
    assert request.url.path == "/author"
    assert request.url.query == b"name=Smith&page=1&limit=50"
    assert [author.name for author in page] == ["Jane Smith"]


def test_author_virin_request(api: ScriptedApi) -> None:
    api.replies.append(document(virin_data(), 201))
    service = AuthorService(api.api_client())

    asyncio.run(service.create_virin("author-1", date(2024, 10, 1)))

    payload = json.loads(api.requests[0].content)["data"]
    assert api.requests[0].url.path == "/author/author-1/virin"
    assert payload["type"] == "author-virin"
    assert payload["relationships"]["author"]["data"] == {
        "id": "author-1",
        "type": "author",
    }


def test_search_by_branch_uses_wire_value(api: ScriptedApi) -> None:
    api.replies.append(httpx.Response(200, json={"data": []}))
    service = ServiceUnitService(api.api_client())

    page = asyncio.run(service.search_by_branch(Branch.AIR_FORCE, page_size=5))

    assert api.requests[0].url.params["branch"] == "air-force"
    assert api.requests[0].url.params["limit"] == "5"
    assert len(page) == 0
