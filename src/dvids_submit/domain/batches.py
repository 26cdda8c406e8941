"""Batch domain models."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dvids_submit.domain.jsonapi import (
    BatchReference,
    JsonObject,
    build_relationships,
    format_optional_timestamp,
    parse_optional_timestamp,
    put_optional,
    relationship_one,
    require,
    require_id,
    resource_object,
)


@dataclass(frozen=True)
class Batch:
    """A collection of files submitted together for approval and publishing."""

    id: str
    created_at: datetime | None = None
    closed_at: datetime | None = None
    closed: bool = False
    send_confirmation_email: bool = True

    resource_type = "batch"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Batch":
        """Create a Batch from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        return cls(
            id=require_id(data, cls.resource_type),
            created_at=parse_optional_timestamp(attributes.get("created_at")),
            closed_at=parse_optional_timestamp(attributes.get("closed_at")),
            closed=attributes.get("closed", False),
            send_confirmation_email=attributes.get("send_confirmation_email", True),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = put_optional(
            {},
            created_at=format_optional_timestamp(self.created_at),
            closed_at=format_optional_timestamp(self.closed_at),
        )
        attributes["closed"] = self.closed
        attributes["send_confirmation_email"] = self.send_confirmation_email
        return resource_object(self.id, self.resource_type, attributes)


@dataclass(frozen=True)
class BatchUpload:
    """A presigned upload URL authorizing one file transfer into a batch."""

    id: str
    upload_url: str
    http_method: str = "PUT"
    use_cdn: bool = True
    multipart_form_upload_params: dict[str, Any] | None = None
    batch_id: str | None = None

    resource_type = "batch-upload"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BatchUpload":
        """Create a BatchUpload from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        batch = relationship_one(
            data.get("relationships") or {}, "batch", BatchReference
        )
        return cls(
            id=require_id(data, cls.resource_type),
            upload_url=require(attributes, "upload_url", cls.resource_type),
            http_method=attributes.get("http_method", "PUT"),
            use_cdn=attributes.get("use_cdn", True),
            multipart_form_upload_params=attributes.get(
                "multipart_form_upload_params"
            ),
            batch_id=batch.id if batch else None,
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = {
            "upload_url": self.upload_url,
            "http_method": self.http_method,
            "use_cdn": self.use_cdn,
        }
        put_optional(
            attributes, multipart_form_upload_params=self.multipart_form_upload_params
        )
        batch = BatchReference(self.batch_id) if self.batch_id is not None else None
        return resource_object(
            self.id,
            self.resource_type,
            attributes,
            build_relationships(batch=batch),
        )

    @property
    def is_multipart_form_upload(self) -> bool:
        """Whether the file must be POSTed as multipart form data."""
        return (
            self.http_method == "POST"
            and self.multipart_form_upload_params is not None
        )

    @property
    def is_put_upload(self) -> bool:
        """Whether the file is sent as the raw body of a PUT."""
        return self.http_method == "PUT"


@dataclass(frozen=True)
class UploadResult:
    """Outcome of sending a file to a batch upload URL."""

    batch_upload: BatchUpload
    upload_result: JsonObject
