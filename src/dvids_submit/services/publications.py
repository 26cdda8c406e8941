"""Publication lookups and publication issue submission."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dvids_submit.adapters.api_client import ApiClient
from dvids_submit.domain.batches import UploadResult
from dvids_submit.domain.jsonapi import (
    BatchUploadReference,
    PublicationReference,
    require_data,
)
from dvids_submit.domain.pages import ResourcePage
from dvids_submit.domain.publications import Publication, PublicationIssue
from dvids_submit.services.batches import BatchService

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class PublicationIssueUploadResult:
    """A created publication issue together with its PDF upload."""

    publication_issue: PublicationIssue
    upload_result: UploadResult


@dataclass
class PublicationService:
    """Service for publications and their issues."""

    api_client: ApiClient
    batch_service: BatchService

    async def get_publications(
        self,
        filters: Mapping[str, Any] | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> ResourcePage[Publication]:
        """List publications; filters are sent as query parameters."""
        query = {**(filters or {}), "page": page, "limit": limit}
        response = await self.api_client.get("/publication", query)
        return ResourcePage.from_document(
            response, Publication.from_dict, "publication"
        )

    async def search_by_title(
        self, title: str, page: int = 1, limit: int = 50
    ) -> ResourcePage[Publication]:
        return await self.get_publications({"title": title}, page, limit)

    async def create_batch_publication_issue(
        self, batch_id: str, issue: PublicationIssue
    ) -> PublicationIssue:
        response = await self.api_client.post(
            f"/batch/{batch_id}/publication-issue", {"data": issue.to_dict()}
        )
        return PublicationIssue.from_dict(require_data(response, "publication issue"))

    async def get_batch_publication_issue(
        self, batch_id: str, issue_id: str
    ) -> PublicationIssue:
        response = await self.api_client.get(
            f"/batch/{batch_id}/publication-issue/{issue_id}"
        )
        return PublicationIssue.from_dict(require_data(response, "publication issue"))

    async def update_batch_publication_issue(
        self, batch_id: str, issue_id: str, issue: PublicationIssue
    ) -> PublicationIssue:
        response = await self.api_client.put(
            f"/batch/{batch_id}/publication-issue/{issue_id}",
            {"data": issue.to_dict()},
        )
        return PublicationIssue.from_dict(require_data(response, "publication issue"))

    async def delete_batch_publication_issue(
        self, batch_id: str, issue_id: str
    ) -> bool:
        await self.api_client.delete(f"/batch/{batch_id}/publication-issue/{issue_id}")
        return True

    async def create_simple_publication_issue(  # noqa: PLR0913
        self,
        batch_id: str,
        description: str,
        created_at: datetime,
        publication_id: str,
        batch_upload_id: str,
    ) -> PublicationIssue:
        """Create an issue for an already uploaded PDF."""
        issue = PublicationIssue(
            id="",
            description=description,
            created_at=created_at,
            publication=PublicationReference(publication_id),
            batch_upload=BatchUploadReference(batch_upload_id),
        )
        return await self.create_batch_publication_issue(batch_id, issue)

    async def create_publication_issue_with_upload(  # noqa: PLR0913
        self,
        batch_id: str,
        pdf_file_path: str | os.PathLike[str],
        description: str,
        created_at: datetime,
        publication_id: str,
    ) -> PublicationIssueUploadResult:
        """Upload a PDF into the batch, then create the issue pointing at it."""
        upload_result = await self.batch_service.create_and_upload_file(
            batch_id, pdf_file_path, PDF_CONTENT_TYPE
        )
        issue = await self.create_simple_publication_issue(
            batch_id,
            description,
            created_at,
            publication_id,
            upload_result.batch_upload.id,
        )
        return PublicationIssueUploadResult(
            publication_issue=issue, upload_result=upload_result
        )
