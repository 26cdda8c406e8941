"""Photo submission service."""

import os
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from dvids_submit.domain.batches import Batch
from dvids_submit.domain.jsonapi import (
    AuthorReference,
    BatchUploadReference,
    ServiceUnitReference,
    ThemeReference,
)
from dvids_submit.domain.media import Photo
from dvids_submit.services.media import MediaService, MediaWorkflowResult
from dvids_submit.services.virins import AuthorVirinSource, ServiceUnitVirinSource


def new_photo(  # noqa: PLR0913
    *,
    title: str,
    description: str,
    instructions: str,
    created_at: datetime,
    country: str,
    virin: str = "",
    batch_upload_id: str | None = None,
    service_unit_id: str | None = None,
    tags: Sequence[str] = (),
    subdiv: str | None = None,
    city: str | None = None,
    caption_writer: str | None = None,
    job_identifier: str | None = None,
    operation_name: str | None = None,
    author_ids: Sequence[str] = (),
    theme_ids: Sequence[str] = (),
) -> Photo:
    """Build an unsaved photo from plain ids and attribute values."""
    return Photo(
        id="",
        title=title,
        description=description,
        instructions=instructions,
        created_at=created_at,
        virin=virin,
        country=country,
        tags=tuple(tags),
        subdiv=subdiv,
        city=city,
        caption_writer=caption_writer,
        job_identifier=job_identifier,
        operation_name=operation_name,
        authors=tuple(AuthorReference(author_id) for author_id in author_ids),
        batch_upload=(
            BatchUploadReference(batch_upload_id) if batch_upload_id else None
        ),
        service_unit=(
            ServiceUnitReference(service_unit_id) if service_unit_id else None
        ),
        themes=tuple(ThemeReference(theme_id) for theme_id in theme_ids),
    )


@dataclass
class PhotoService(MediaService[Photo]):
    """Service for photos inside batches."""

    media_class = Photo

    async def create_batch_photo(self, batch_id: str, photo: Photo) -> Photo:
        """Create a photo in a batch."""
        return await self._create(batch_id, photo)

    async def get_batch_photo(self, batch_id: str, photo_id: str) -> Photo:
        """Fetch a photo from a batch."""
        return await self._get(batch_id, photo_id)

    async def update_batch_photo(
        self, batch_id: str, photo_id: str, photo: Photo
    ) -> Photo:
        """Replace a photo's metadata."""
        return await self._update(batch_id, photo_id, photo)

    async def delete_batch_photo(self, batch_id: str, photo_id: str) -> bool:
        """Delete a photo; returns True once the API accepted the request."""
        return await self._delete(batch_id, photo_id)

    async def create_simple_photo(  # noqa: PLR0913
        self,
        batch_id: str,
        *,
        title: str,
        description: str,
        instructions: str,
        created_at: datetime,
        virin: str,
        country: str,
        batch_upload_id: str,
        service_unit_id: str | None = None,
        tags: Sequence[str] = (),
        subdiv: str | None = None,
        city: str | None = None,
        caption_writer: str | None = None,
        job_identifier: str | None = None,
        operation_name: str | None = None,
        author_ids: Sequence[str] = (),
        theme_ids: Sequence[str] = (),
    ) -> Photo:
        """Create a photo that already has a VIRIN and an uploaded file."""
        photo = new_photo(
            title=title,
            description=description,
            instructions=instructions,
            created_at=created_at,
            virin=virin,
            country=country,
            batch_upload_id=batch_upload_id,
            service_unit_id=service_unit_id,
            tags=tags,
            subdiv=subdiv,
            city=city,
            caption_writer=caption_writer,
            job_identifier=job_identifier,
            operation_name=operation_name,
            author_ids=author_ids,
            theme_ids=theme_ids,
        )
        return await self._create(batch_id, photo)

    async def create_photo_with_service_unit_generated_virin(
        self, batch_id: str, photo: Photo, service_unit_id: str
    ) -> Photo:
        """Create a photo whose VIRIN the service unit generates.

        The photo is linked to the service unit unless it already names one.
        """
        return await self.create_with_generated_virin(
            batch_id, photo, ServiceUnitVirinSource(service_unit_id)
        )

    async def create_photo_with_author_generated_virin(
        self, batch_id: str, photo: Photo, author_id: str
    ) -> Photo:
        """Create a photo whose VIRIN the author generates; the author is credited."""
        return await self.create_with_generated_virin(
            batch_id, photo, AuthorVirinSource(author_id)
        )

    async def create_detailed_photo_workflow_with_service_unit_virin(
        self,
        batch_id: str,
        file_path: str | os.PathLike[str],
        photo: Photo,
        service_unit_id: str,
        content_type: str = "image/jpeg",
    ) -> MediaWorkflowResult[Photo]:
        """Upload into an existing batch and create the photo, leaving it open."""
        return await self.run_workflow(
            file_path,
            photo,
            ServiceUnitVirinSource(service_unit_id),
            content_type=content_type,
            batch=Batch(batch_id),
        )

    async def create_detailed_photo_workflow_with_author_virin(
        self,
        batch_id: str,
        file_path: str | os.PathLike[str],
        photo: Photo,
        author_id: str,
        content_type: str = "image/jpeg",
    ) -> MediaWorkflowResult[Photo]:
        """Author-VIRIN variant of the detailed workflow."""
        return await self.run_workflow(
            file_path,
            photo,
            AuthorVirinSource(author_id),
            content_type=content_type,
            batch=Batch(batch_id),
        )

    async def create_complete_photo_workflow_with_service_unit_virin(  # noqa: PLR0913
        self,
        file_path: str | os.PathLike[str],
        service_unit_id: str,
        created_at: datetime,
        title: str,
        description: str,
        instructions: str,
        tags: Sequence[str] = (),
        author_ids: Sequence[str] = (),
        country_code: str = "US",
        *,
        content_type: str = "image/jpeg",
        batch: Batch | None = None,
        close_batch: bool = True,
    ) -> Photo:
        """Create a batch, upload the file, create the photo and close the batch."""
        draft = new_photo(
            title=title,
            description=description,
            instructions=instructions,
            created_at=created_at,
            country=country_code,
            service_unit_id=service_unit_id,
            tags=tags,
            author_ids=author_ids,
        )
        result = await self.run_workflow(
            file_path,
            draft,
            ServiceUnitVirinSource(service_unit_id),
            content_type=content_type,
            batch=batch,
            close_batch=close_batch,
        )
        return result.media

    async def create_complete_photo_workflow_with_author_virin(  # noqa: PLR0913
        self,
        file_path: str | os.PathLike[str],
        author_id: str,
        created_at: datetime,
        title: str,
        description: str,
        instructions: str,
        service_unit_id: str | None = None,
        tags: Sequence[str] = (),
        author_ids: Sequence[str] = (),
        country_code: str = "US",
        *,
        content_type: str = "image/jpeg",
        batch: Batch | None = None,
        close_batch: bool = True,
    ) -> Photo:
        """Run the whole submission with an author-generated VIRIN."""
        draft = new_photo(
            title=title,
            description=description,
            instructions=instructions,
            created_at=created_at,
            country=country_code,
            service_unit_id=service_unit_id,
            tags=tags,
            author_ids=author_ids,
        )
        result = await self.run_workflow(
            file_path,
            draft,
            AuthorVirinSource(author_id),
            content_type=content_type,
            batch=batch,
            close_batch=close_batch,
        )
        return result.media
