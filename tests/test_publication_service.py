"""Tests for the publication service."""

import asyncio
import json
from datetime import UTC, datetime
from pathlib import Path

import httpx

from dvids_submit.services.batches import BatchService
from dvids_submit.services.publications import PublicationService
from tests.conftest import ScriptedApi, batch_upload_data, document

CREATED_AT = datetime(2024, 10, 1, 12, 0, tzinfo=UTC)


def _publication_service(api: ScriptedApi) -> PublicationService:
    api_client = api.api_client()
    return PublicationService(api_client, BatchService(api_client))


def _issue_data() -> dict[str, object]:
    return {
        "id": "issue-1",
        "type": "publication-issue",
        "attributes": {
            "description": "October issue",
            "created_at": "2024-10-01T12:00:00+00:00",
            "status": "pending-processing",
        },
        "relationships": {
            "publication": {"data": {"id": "pub-1", "type": "publication"}},
        },
    }


def test_search_by_title_sends_filters_and_paging(api: ScriptedApi) -> None:
    api.replies.append(
        httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": "pub-1",
                        "type": "publication",
                        "attributes": {
                            "title": "Army Times",
                            "created_at": "2024-01-01T00:00:00Z",
                        },
                    }
                ],
                "links": {"next": "/publication?page=2"},
            },
        )
    )
    service = _publication_service(api)

    page = asyncio.run(service.search_by_title("Army", limit=10))

    params = api.requests[0].url.params
    assert api.requests[0].url.path == "/publication"
    assert params["title"] == "Army"
    assert params["page"] == "1"
    assert params["limit"] == "10"
    assert page.data[0].title == "Army Times"
    assert page.next_url == "/publication?page=2"


def test_issue_with_upload_sends_pdf_then_creates_issue(
    api: ScriptedApi, tmp_path: Path
) -> None:
    pdf = tmp_path / "issue.pdf"
    pdf.write_bytes(b"%PDF-1.7")
    api.replies.extend(
        [
            document(batch_upload_data(), 201),
            httpx.Response(200),
            document(_issue_data(), 201),
        ]
    )
    service = _publication_service(api)

    result = asyncio.run(
        service.create_publication_issue_with_upload(
            "batch-123", pdf, "October issue", CREATED_AT, "pub-1"
        )
    )

    assert result.publication_issue.id == "issue-1"
    assert result.upload_result.batch_upload.id == "upload-123"
    assert api.requests[1].headers["Content-Type"] == "application/pdf"
    assert api.calls[2] == (
        "POST",
        "submitapi.test",
        "/batch/batch-123/publication-issue",
    )
    submitted = json.loads(api.requests[2].content)["data"]
    assert submitted["type"] == "publication-issue"
    assert submitted["relationships"] == {
        "publication": {"data": {"id": "pub-1", "type": "publication"}},
        "batch_upload": {"data": {"id": "upload-123", "type": "batch-upload"}},
    }


def test_issue_crud_paths(api: ScriptedApi) -> None:
    api.replies.extend(
        [document(_issue_data()), document(_issue_data()), httpx.Response(204)]
    )
    service = _publication_service(api)

    async def run() -> bool:
        issue = await service.get_batch_publication_issue("batch-123", "issue-1")
        await service.update_batch_publication_issue("batch-123", "issue-1", issue)
        return await service.delete_batch_publication_issue("batch-123", "issue-1")

    assert asyncio.run(run()) is True
    assert [method for method, _, _ in api.calls] == ["GET", "PUT", "DELETE"]
    assert api.calls[0][2] == "/batch/batch-123/publication-issue/issue-1"
