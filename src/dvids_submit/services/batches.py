"""Batch and file upload service."""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from dvids_submit.adapters.api_client import ApiClient
from dvids_submit.domain.batches import Batch, BatchUpload, UploadResult
from dvids_submit.domain.jsonapi import (
    BatchReference,
    build_relationships,
    require_data,
)
from dvids_submit.errors import UnsupportedUploadError

_logger = logging.getLogger(__name__)


@dataclass
class BatchService:
    """Creates and closes batches and moves files into them."""

    api_client: ApiClient

    async def create_batch(self) -> Batch:
        """Create a new, open batch."""
        response = await self.api_client.post(
            "/batch", {"data": {"type": "batch", "attributes": {}}}
        )
        batch = Batch.from_dict(require_data(response, "batch"))
        _logger.debug("Created batch %s", batch.id)
        return batch

    async def get_batch(self, batch_id: str) -> Batch:
        """Fetch a batch by id."""
        response = await self.api_client.get(f"/batch/{batch_id}")
        return Batch.from_dict(require_data(response, "batch"))

    async def close_batch(
        self, batch_id: str, send_confirmation_email: bool = True
    ) -> Batch:
        """Close a batch, submitting its content for approval and publishing."""
        payload = {
            "data": {
                "id": batch_id,
                "type": "batch",
                "attributes": {
                    "closed": True,
                    "send_confirmation_email": send_confirmation_email,
                },
            }
        }
        response = await self.api_client.patch(f"/batch/{batch_id}", payload)
        return Batch.from_dict(require_data(response, "batch"))

    async def create_batch_upload(
        self, batch_id: str, use_cdn: bool = True
    ) -> BatchUpload:
        """Request a presigned URL for one file of up to 5GB."""
        payload = {
            "data": {
                "type": "batch-upload",
                "attributes": {"use_cdn": use_cdn},
                "relationships": build_relationships(batch=BatchReference(batch_id)),
            }
        }
        response = await self.api_client.post(f"/batch/{batch_id}/upload", payload)
        return BatchUpload.from_dict(require_data(response, "batch upload"))

    async def create_batch_multipart_upload(
        self, batch_id: str, content_type: str
    ) -> dict[str, Any]:
        """Start a multipart upload for files between 5GB and 5TB."""
        payload = {
            "data": {
                "type": "batch-multipart-upload",
                "attributes": {"content_type": content_type},
                "relationships": build_relationships(batch=BatchReference(batch_id)),
            }
        }
        return await self.api_client.post(
            f"/batch/{batch_id}/multipart-upload", payload
        )

    async def create_batch_multipart_upload_part(
        self, batch_id: str, multipart_upload_id: str, part_number: int
    ) -> dict[str, Any]:
        """Request the upload URL for one part of a multipart upload."""
        payload = {
            "data": {
                "type": "batch-multipart-upload-part",
                "attributes": {"part_number": part_number},
            }
        }
        return await self.api_client.post(
            f"/batch/{batch_id}/multipart-upload/{multipart_upload_id}/part",
            payload,
        )

    async def complete_batch_multipart_upload(
        self,
        batch_id: str,
        multipart_upload_id: str,
        parts: Sequence[dict[str, Any]],
    ) -> dict[str, Any]:
        """Finish a multipart upload from the uploaded parts' ETags."""
        payload = {
            "data": {
                "id": multipart_upload_id,
                "type": "batch-multipart-upload",
                "attributes": {"parts": list(parts)},
            }
        }
        return await self.api_client.patch(
            f"/batch/{batch_id}/multipart-upload/{multipart_upload_id}", payload
        )

    async def upload_file(
        self,
        batch_upload: BatchUpload,
        file_path: str | os.PathLike[str],
        content_type: str,
    ) -> UploadResult:
        """Send a file to the batch upload's presigned URL."""
        if batch_upload.is_multipart_form_upload:
            raise UnsupportedUploadError(
                "POST uploads with multipart form data are not implemented; "
                "request a PUT upload instead"
            )
        if not batch_upload.is_put_upload:
            raise UnsupportedUploadError(
                f"Unsupported HTTP method: {batch_upload.http_method}"
            )
        upload_result = await self.api_client.upload_file(
            batch_upload.upload_url, file_path, content_type
        )
        _logger.debug("Uploaded file for batch upload %s", batch_upload.id)
        return UploadResult(batch_upload=batch_upload, upload_result=upload_result)

    async def create_and_upload_file(
        self,
        batch_id: str,
        file_path: str | os.PathLike[str],
        content_type: str,
        use_cdn: bool = True,
    ) -> UploadResult:
        """Create a batch upload and send the file to it."""
        batch_upload = await self.create_batch_upload(batch_id, use_cdn)
        return await self.upload_file(batch_upload, file_path, content_type)
