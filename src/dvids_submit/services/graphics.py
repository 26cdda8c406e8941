"""Graphic submission service."""

import os
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from dvids_submit.domain.batches import Batch
from dvids_submit.domain.jsonapi import (
    AuthorReference,
    BatchUploadReference,
    GraphicCategoryReference,
    ServiceUnitReference,
    ThemeReference,
)
from dvids_submit.domain.media import Graphic
from dvids_submit.services.media import MediaService
from dvids_submit.services.virins import AuthorVirinSource, ServiceUnitVirinSource

DEFAULT_GRAPHIC_CONTENT_TYPE = "application/pdf"


def new_graphic(  # noqa: PLR0913
    *,
    title: str,
    description: str,
    instructions: str,
    created_at: datetime,
    country: str,
    virin: str = "",
    batch_upload_id: str | None = None,
    service_unit_id: str | None = None,
    category_id: str | None = None,
    tags: Sequence[str] = (),
    subdiv: str | None = None,
    city: str | None = None,
    caption_writer: str | None = None,
    author_ids: Sequence[str] = (),
    theme_ids: Sequence[str] = (),
) -> Graphic:
    return Graphic(
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
        authors=tuple(AuthorReference(author_id) for author_id in author_ids),
        batch_upload=(
            BatchUploadReference(batch_upload_id) if batch_upload_id else None
        ),
        category=GraphicCategoryReference(category_id) if category_id else None,
        service_unit=(
            ServiceUnitReference(service_unit_id) if service_unit_id else None
        ),
        themes=tuple(ThemeReference(theme_id) for theme_id in theme_ids),
    )


@dataclass
class GraphicService(MediaService[Graphic]):
    """Service for graphics inside batches."""

    media_class = Graphic

    async def create_batch_graphic(self, batch_id: str, graphic: Graphic) -> Graphic:
        return await self._create(batch_id, graphic)

    async def get_batch_graphic(self, batch_id: str, graphic_id: str) -> Graphic:
        return await self._get(batch_id, graphic_id)

    async def update_batch_graphic(
        self, batch_id: str, graphic_id: str, graphic: Graphic
    ) -> Graphic:
        return await self._update(batch_id, graphic_id, graphic)

    async def delete_batch_graphic(self, batch_id: str, graphic_id: str) -> bool:
        return await self._delete(batch_id, graphic_id)

    async def create_simple_graphic(  # noqa: PLR0913
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
        category_id: str | None = None,
        tags: Sequence[str] = (),
        subdiv: str | None = None,
        city: str | None = None,
        caption_writer: str | None = None,
        author_ids: Sequence[str] = (),
        theme_ids: Sequence[str] = (),
    ) -> Graphic:
        """Create a graphic that already has a VIRIN and an uploaded file."""
        graphic = new_graphic(
            title=title,
            description=description,
            instructions=instructions,
            created_at=created_at,
            virin=virin,
            country=country,
            batch_upload_id=batch_upload_id,
            service_unit_id=service_unit_id,
            category_id=category_id,
            tags=tags,
            subdiv=subdiv,
            city=city,
            caption_writer=caption_writer,
            author_ids=author_ids,
            theme_ids=theme_ids,
        )
        return await self._create(batch_id, graphic)

    async def create_graphic_with_service_unit_generated_virin(
        self, batch_id: str, graphic: Graphic, service_unit_id: str
    ) -> Graphic:
        return await self.create_with_generated_virin(
            batch_id, graphic, ServiceUnitVirinSource(service_unit_id)
        )

    async def create_graphic_with_author_generated_virin(
        self, batch_id: str, graphic: Graphic, author_id: str
    ) -> Graphic:
        return await self.create_with_generated_virin(
            batch_id, graphic, AuthorVirinSource(author_id)
        )

    async def create_complete_graphic_workflow_with_service_unit_virin(  # noqa: PLR0913
        self,
        file_path: str | os.PathLike[str],
        service_unit_id: str,
        created_at: datetime,
        title: str,
        description: str,
        instructions: str,
        category_id: str | None = None,
        tags: Sequence[str] = (),
        author_ids: Sequence[str] = (),
        country_code: str = "US",
        *,
        content_type: str = DEFAULT_GRAPHIC_CONTENT_TYPE,
        batch: Batch | None = None,
        close_batch: bool = True,
    ) -> Graphic:
        """Create a batch, upload the file, create the graphic and close the batch."""
        draft = new_graphic(
            title=title,
            description=description,
            instructions=instructions,
            created_at=created_at,
            country=country_code,
            service_unit_id=service_unit_id,
            category_id=category_id,
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

    async def create_complete_graphic_workflow_with_author_virin(  # noqa: PLR0913
        self,
        file_path: str | os.PathLike[str],
        author_id: str,
        created_at: datetime,
        title: str,
        description: str,
        instructions: str,
        service_unit_id: str | None = None,
        category_id: str | None = None,
        tags: Sequence[str] = (),
        author_ids: Sequence[str] = (),
        country_code: str = "US",
        *,
        content_type: str = DEFAULT_GRAPHIC_CONTENT_TYPE,
        batch: Batch | None = None,
        close_batch: bool = True,
    ) -> Graphic:
        """Run the whole graphic submission with an author-generated VIRIN."""
        draft = new_graphic(
            title=title,
            description=description,
            instructions=instructions,
            created_at=created_at,
            country=country_code,
            service_unit_id=service_unit_id,
            category_id=category_id,
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
