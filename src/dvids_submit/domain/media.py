"""Photo and graphic domain models.

Both media kinds share one layout: descriptive attributes, a VIRIN, an
uploaded file and credited authors. Decoding is lenient for descriptive
strings so partially filled server records can still be read; submitting
them is checked separately by `require_submittable`.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dvids_submit.domain.enums import GraphicStatus, PhotoStatus
from dvids_submit.domain.jsonapi import (
    AuthorReference,
    BatchUploadReference,
    GraphicCategoryReference,
    JsonObject,
    ServiceUnitReference,
    ThemeReference,
    build_relationships,
    format_timestamp,
    parse_optional_enum,
    parse_timestamp,
    put_optional,
    relationship_many,
    relationship_one,
    require,
    resource_object,
)
from dvids_submit.errors import MissingAttributeError

_SUBMISSION_REQUIRED = ("title", "virin", "country")


@dataclass(frozen=True)
class Photo:
    """A photo's metadata together with its uploaded file."""

    id: str
    title: str
    description: str
    instructions: str
    created_at: datetime
    virin: str
    country: str
    tags: tuple[str, ...] = ()
    subdiv: str | None = None
    city: str | None = None
    status: PhotoStatus | None = None
    caption_writer: str | None = None
    job_identifier: str | None = None
    operation_name: str | None = None
    thumbnail_url_template: str | None = None
    authors: tuple[AuthorReference, ...] = ()
    batch_upload: BatchUploadReference | None = None
    service_unit: ServiceUnitReference | None = None
    themes: tuple[ThemeReference, ...] = ()

    resource_type = "photo"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Photo":
        """Create a Photo from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        relationships = data.get("relationships") or {}
        return cls(
            id=data.get("id") or "",
            title=attributes.get("title") or "",
            description=attributes.get("description") or "",
            instructions=attributes.get("instructions") or "",
            created_at=parse_timestamp(
                require(attributes, "created_at", cls.resource_type)
            ),
            virin=attributes.get("virin") or "",
            country=attributes.get("country") or "",
            tags=tuple(attributes.get("tags") or ()),
            subdiv=attributes.get("subdiv"),
            city=attributes.get("city"),
            status=parse_optional_enum(PhotoStatus, attributes.get("status")),
            caption_writer=attributes.get("caption_writer"),
            job_identifier=attributes.get("job_identifier"),
            operation_name=attributes.get("operation_name"),
            thumbnail_url_template=attributes.get("thumbnail_url_template"),
            authors=relationship_many(relationships, "authors", AuthorReference),
            batch_upload=relationship_one(
                relationships, "batch_upload", BatchUploadReference
            ),
            service_unit=relationship_one(
                relationships, "service_unit", ServiceUnitReference
            ),
            themes=relationship_many(relationships, "themes", ThemeReference),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object.

        `thumbnail_url_template` is computed by the server and never sent.
        """
        attributes = _media_attributes(self)
        put_optional(
            attributes,
            status=self.status.value if self.status else None,
            caption_writer=self.caption_writer,
            job_identifier=self.job_identifier,
            operation_name=self.operation_name,
        )
        relationships = build_relationships(
            authors=self.authors,
            batch_upload=self.batch_upload,
            service_unit=self.service_unit,
            themes=self.themes,
        )
        return resource_object(self.id, self.resource_type, attributes, relationships)


@dataclass(frozen=True)
class Graphic:
    """A graphic's metadata together with its uploaded file.

    Accepted files include JPG, PNG, PDF, INDD, PSD, AI, MP4 and zip archives.
    """

    id: str
    title: str
    description: str
    instructions: str
    created_at: datetime
    virin: str
    country: str
    tags: tuple[str, ...] = ()
    subdiv: str | None = None
    city: str | None = None
    status: GraphicStatus | None = None
    caption_writer: str | None = None
    authors: tuple[AuthorReference, ...] = ()
    batch_upload: BatchUploadReference | None = None
    category: GraphicCategoryReference | None = None
    service_unit: ServiceUnitReference | None = None
    themes: tuple[ThemeReference, ...] = ()

    resource_type = "graphic"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Graphic":
        """Create a Graphic from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        relationships = data.get("relationships") or {}
        return cls(
            id=data.get("id") or "",
            title=attributes.get("title") or "",
            description=attributes.get("description") or "",
            instructions=attributes.get("instructions") or "",
            created_at=parse_timestamp(
                require(attributes, "created_at", cls.resource_type)
            ),
            virin=attributes.get("virin") or "",
            country=attributes.get("country") or "",
            tags=tuple(attributes.get("tags") or ()),
            subdiv=attributes.get("subdiv"),
            city=attributes.get("city"),
            status=parse_optional_enum(GraphicStatus, attributes.get("status")),
            caption_writer=attributes.get("caption_writer"),
            authors=relationship_many(relationships, "authors", AuthorReference),
            batch_upload=relationship_one(
                relationships, "batch_upload", BatchUploadReference
            ),
            category=relationship_one(
                relationships, "category", GraphicCategoryReference
            ),
            service_unit=relationship_one(
                relationships, "service_unit", ServiceUnitReference
            ),
            themes=relationship_many(relationships, "themes", ThemeReference),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = _media_attributes(self)
        put_optional(
            attributes,
            status=self.status.value if self.status else None,
            caption_writer=self.caption_writer,
        )
        relationships = build_relationships(
            authors=self.authors,
            batch_upload=self.batch_upload,
            category=self.category,
            service_unit=self.service_unit,
            themes=self.themes,
        )
        return resource_object(self.id, self.resource_type, attributes, relationships)


def require_submittable(
    media: Photo | Graphic, names: Sequence[str] = _SUBMISSION_REQUIRED
) -> None:
    """Refuse to submit media whose identifying attributes are blank."""
    for name in names:
        if not getattr(media, name):
            raise MissingAttributeError(
                f"{media.resource_type} cannot be submitted without {name!r}"
            )


def _media_attributes(media: Photo | Graphic) -> JsonObject:
    attributes: JsonObject = {
        "title": media.title,
        "description": media.description,
        "instructions": media.instructions,
        "created_at": format_timestamp(media.created_at),
        "virin": media.virin,
        "country": media.country,
        "tags": list(media.tags),
    }
    return put_optional(attributes, subdiv=media.subdiv, city=media.city)
