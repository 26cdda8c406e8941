"""Shared behaviour of the photo and graphic services.

Media creation needs a VIRIN, which the API generates from either a service
unit or an author. The composite workflow runs a fixed sequence of calls:

1. create a batch, unless one is supplied
2. create a batch upload (presigned URL)
3. PUT the local file to that URL
4. generate the VIRIN
5. create the media record referencing the upload and the VIRIN
6. optionally close the batch

A failing step raises its own error unchanged. Remote resources created by
earlier steps are left in place.
"""

import logging
import os
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import ClassVar, Generic, TypeVar

from dvids_submit.adapters.api_client import ApiClient
from dvids_submit.domain.batches import Batch, UploadResult
from dvids_submit.domain.jsonapi import (
    AuthorReference,
    BatchUploadReference,
    ServiceUnitReference,
    require_data,
)
from dvids_submit.domain.media import Graphic, Photo, require_submittable
from dvids_submit.errors import BatchClosedError
from dvids_submit.services.authors import AuthorService
from dvids_submit.services.batches import BatchService
from dvids_submit.services.service_units import ServiceUnitService
from dvids_submit.services.virins import (
    AuthorVirinSource,
    ServiceUnitVirinSource,
    VirinSource,
    credit_author,
    extract_virin,
)

MediaT = TypeVar("MediaT", Photo, Graphic)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaWorkflowResult(Generic[MediaT]):
    """Everything produced by one run of the media workflow."""

    batch: Batch
    upload: UploadResult
    virin: str
    media: MediaT
    closed_batch: Batch | None = None


@dataclass
class MediaService(Generic[MediaT]):
    """CRUD and VIRIN-driven creation for one media kind within batches."""

    api_client: ApiClient
    batch_service: BatchService
    service_unit_service: ServiceUnitService
    author_service: AuthorService

    media_class: ClassVar[type]

    async def generate_virin(
        self, source: VirinSource, virin_date: date | datetime
    ) -> str:
        """Ask the service unit or the author for a VIRIN."""
        if isinstance(source, ServiceUnitVirinSource):
            document = await self.service_unit_service.create_virin(
                source.service_unit_id, virin_date
            )
            return extract_virin(document, "service unit")
        document = await self.author_service.create_virin(source.author_id, virin_date)
        return extract_virin(document, "author")

    async def create_with_generated_virin(
        self, batch_id: str, draft: MediaT, source: VirinSource
    ) -> MediaT:
        """Generate a VIRIN for the draft's date and create the media."""
        require_submittable(draft, ("title", "country"))
        virin = await self.generate_virin(source, draft.created_at)
        return await self._create(batch_id, apply_virin(draft, virin, source))

    async def run_workflow(  # noqa: PLR0913
        self,
        file_path: str | os.PathLike[str],
        draft: MediaT,
        source: VirinSource,
        *,
        content_type: str,
        batch: Batch | None = None,
        use_cdn: bool = True,
        close_batch: bool = False,
    ) -> MediaWorkflowResult[MediaT]:
        """Upload a file and create its media record in one go."""
        require_submittable(draft, ("title", "country"))
        if batch is not None and batch.closed:
            raise BatchClosedError(f"Batch {batch.id} is closed")

        if batch is None:
            batch = await self.batch_service.create_batch()
        upload = await self.batch_service.create_and_upload_file(
            batch.id, file_path, content_type, use_cdn
        )
        virin = await self.generate_virin(source, draft.created_at)
        media = replace(
            apply_virin(draft, virin, source),
            batch_upload=BatchUploadReference(upload.batch_upload.id),
        )
        created = await self._create(batch.id, media)
        closed_batch = None
        if close_batch:
            closed_batch = await self.batch_service.close_batch(batch.id)
        _logger.debug(
            "Created %s %s in batch %s",
            self.media_class.resource_type,
            created.id,
            batch.id,
        )
        return MediaWorkflowResult(
            batch=batch,
            upload=upload,
            virin=virin,
            media=created,
            closed_batch=closed_batch,
        )

    def _path(self, batch_id: str, media_id: str | None = None) -> str:
        path = f"/batch/{batch_id}/{self.media_class.resource_type}"
        return path if media_id is None else f"{path}/{media_id}"

    async def _create(self, batch_id: str, media: MediaT) -> MediaT:
        require_submittable(media)
        response = await self.api_client.post(
            self._path(batch_id), {"data": media.to_dict()}
        )
        return self.media_class.from_dict(
            require_data(response, self.media_class.resource_type)
        )

    async def _get(self, batch_id: str, media_id: str) -> MediaT:
        response = await self.api_client.get(self._path(batch_id, media_id))
        return self.media_class.from_dict(
            require_data(response, self.media_class.resource_type)
        )

    async def _update(self, batch_id: str, media_id: str, media: MediaT) -> MediaT:
        require_submittable(media)
        response = await self.api_client.put(
            self._path(batch_id, media_id), {"data": media.to_dict()}
        )
        return self.media_class.from_dict(
            require_data(response, self.media_class.resource_type)
        )

    async def _delete(self, batch_id: str, media_id: str) -> bool:
        await self.api_client.delete(self._path(batch_id, media_id))
        return True


def apply_virin(draft: MediaT, virin: str, source: VirinSource) -> MediaT:
    """Attach a generated VIRIN and the relationship implied by its source."""
    if isinstance(source, AuthorVirinSource):
        author_ids = credit_author(
            (author.id for author in draft.authors), source.author_id
        )
        return replace(
            draft,
            virin=virin,
            authors=tuple(AuthorReference(author_id) for author_id in author_ids),
        )
    service_unit = draft.service_unit or ServiceUnitReference(source.service_unit_id)
    return replace(draft, virin=virin, service_unit=service_unit)
