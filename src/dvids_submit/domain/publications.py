"""Publication domain models."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dvids_submit.domain.enums import PublicationIssueStatus
from dvids_submit.domain.jsonapi import (
    BatchUploadReference,
    JsonObject,
    PublicationReference,
    ServiceUnitReference,
    build_relationships,
    format_timestamp,
    parse_optional_enum,
    parse_timestamp,
    put_optional,
    relationship_one,
    require,
    require_id,
    resource_object,
)


@dataclass(frozen=True)
class Publication:
    """A titled publication whose issues are submitted separately."""

    id: str
    title: str
    description: str
    created_at: datetime
    service_unit: ServiceUnitReference | None = None

    resource_type = "publication"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Publication":
        """Create a Publication from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        relationships = data.get("relationships") or {}
        return cls(
            id=require_id(data, cls.resource_type),
            title=require(attributes, "title", cls.resource_type),
            description=attributes.get("description") or "",
            created_at=parse_timestamp(
                require(attributes, "created_at", cls.resource_type)
            ),
            service_unit=relationship_one(
                relationships, "service_unit", ServiceUnitReference
            ),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = {
            "title": self.title,
            "description": self.description,
            "created_at": format_timestamp(self.created_at),
        }
        return resource_object(
            self.id,
            self.resource_type,
            attributes,
            build_relationships(service_unit=self.service_unit),
        )


@dataclass(frozen=True)
class PublicationIssue:
    """One issue of a publication, backed by an uploaded PDF."""

    id: str
    description: str
    created_at: datetime
    status: PublicationIssueStatus | None = None
    publication: PublicationReference | None = None
    batch_upload: BatchUploadReference | None = None

    resource_type = "publication-issue"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PublicationIssue":
        """Create a PublicationIssue from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        relationships = data.get("relationships") or {}
        return cls(
            id=data.get("id") or "",
            description=attributes.get("description") or "",
            created_at=parse_timestamp(
                require(attributes, "created_at", cls.resource_type)
            ),
            status=parse_optional_enum(
                PublicationIssueStatus, attributes.get("status")
            ),
            publication=relationship_one(
                relationships, "publication", PublicationReference
            ),
            batch_upload=relationship_one(
                relationships, "batch_upload", BatchUploadReference
            ),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = put_optional(
            {
                "description": self.description,
                "created_at": format_timestamp(self.created_at),
            },
            status=self.status.value if self.status else None,
        )
        relationships = build_relationships(
            publication=self.publication,
            batch_upload=self.batch_upload,
        )
        return resource_object(self.id, self.resource_type, attributes, relationships)
