"""JSON:API building blocks shared by the domain models."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, TypeVar

from dvids_submit.errors import (
    EntityDecodeError,
    InvalidEnumValueError,
    InvalidResponseFormatError,
    MissingAttributeError,
)

JsonObject = dict[str, Any]

EnumT = TypeVar("EnumT", bound=Enum)
RefT = TypeVar("RefT", bound="ResourceReference")


@dataclass(frozen=True)
class ResourceReference:
    """Pointer to another resource inside a relationship."""

    id: str
    type: str

    @classmethod
    def from_dict(cls: type[RefT], data: Mapping[str, Any]) -> RefT:
        """Create a reference from a resource identifier object."""
        if "type" in data:
            return cls(id=str(data["id"]), type=str(data["type"]))
        return cls(id=str(data["id"]))  # type: ignore[call-arg]

    def to_dict(self) -> JsonObject:
        """Convert to a resource identifier object."""
        return {"id": self.id, "type": self.type}


@dataclass(frozen=True)
class BatchReference(ResourceReference):
    type: str = "batch"


@dataclass(frozen=True)
class AuthorReference(ResourceReference):
    type: str = "author"


@dataclass(frozen=True)
class BatchUploadReference(ResourceReference):
    type: str = "batch-upload"


@dataclass(frozen=True)
class ServiceUnitReference(ResourceReference):
    type: str = "service-unit"


@dataclass(frozen=True)
class GraphicCategoryReference(ResourceReference):
    type: str = "graphic-category"


@dataclass(frozen=True)
class ThemeReference(ResourceReference):
    type: str = "theme"


@dataclass(frozen=True)
class PublicationReference(ResourceReference):
    type: str = "publication"


def relationship_one(
    relationships: Mapping[str, Any], name: str, ref_class: type[RefT]
) -> RefT | None:
    """Read a to-one relationship, returning None when absent."""
    data = _relationship_data(relationships, name)
    if not _is_identifier(data):
        return None
    return ref_class.from_dict(data)


def relationship_many(
    relationships: Mapping[str, Any], name: str, ref_class: type[RefT]
) -> tuple[RefT, ...]:
    """Read a to-many relationship, returning an empty tuple when absent."""
    data = _relationship_data(relationships, name)
    if not isinstance(data, list):
        return ()
    return tuple(ref_class.from_dict(item) for item in data if _is_identifier(item))


def _relationship_data(relationships: Mapping[str, Any], name: str) -> Any:
    relationship = relationships.get(name)
    if not isinstance(relationship, Mapping):
        return None
    return relationship.get("data")


def _is_identifier(data: Any) -> bool:
    return isinstance(data, Mapping) and data.get("id") is not None


def build_relationships(
    **relationships: ResourceReference | Iterable[ResourceReference] | None,
) -> JsonObject:
    """Build a relationships object, skipping empty entries."""
    result: JsonObject = {}
    for name, value in relationships.items():
        if value is None:
            continue
        if isinstance(value, ResourceReference):
            result[name] = {"data": value.to_dict()}
            continue
        items = [reference.to_dict() for reference in value]
        if items:
            result[name] = {"data": items}
    return result


def resource_object(
    resource_id: str,
    resource_type: str,
    attributes: JsonObject,
    relationships: JsonObject | None = None,
) -> JsonObject:
    """Assemble a resource object; empty `id` and `relationships` are left out."""
    data: JsonObject = {"type": resource_type, "attributes": attributes}
    if resource_id:
        data["id"] = resource_id
    if relationships:
        data["relationships"] = relationships
    return data


def put_optional(attributes: JsonObject, **values: Any) -> JsonObject:
    """Add attributes whose value is not None."""
    for key, value in values.items():
        if value is not None:
            attributes[key] = value
    return attributes


def require(attributes: Mapping[str, Any], name: str, resource_type: str) -> Any:
    """Return a required attribute or raise MissingAttributeError."""
    if attributes.get(name) is None:
        raise MissingAttributeError(f"{resource_type} is missing attribute {name!r}")
    return attributes[name]


def require_id(data: Mapping[str, Any], resource_type: str) -> str:
    """Return the resource id or raise MissingAttributeError."""
    if data.get("id") is None:
        raise MissingAttributeError(f"{resource_type} is missing its id")
    return str(data["id"])


def parse_enum(enum_class: type[EnumT], value: Any) -> EnumT:
    """Match a wire value exactly against an enum's variants."""
    try:
        return enum_class(value)
    except ValueError as exc:
        raise InvalidEnumValueError(enum_class.__name__, value) from exc


def parse_optional_enum(enum_class: type[EnumT], value: Any) -> EnumT | None:
    if value is None:
        return None
    return parse_enum(enum_class, value)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing `Z`."""
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise EntityDecodeError(f"Invalid timestamp: {value!r}") from exc


def parse_optional_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    return parse_timestamp(value)


def format_timestamp(value: date | datetime) -> str:
    """Format a date or datetime as ISO-8601.

    A bare date becomes midnight UTC. Datetimes keep their offset, or lack of
    one, so they decode back to an equal value.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=UTC)
    return value.isoformat()


def format_optional_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return format_timestamp(value)


def require_data(response: Mapping[str, Any], description: str) -> JsonObject:
    """Return the `data` resource object from a single-resource document."""
    data = response.get("data")
    if not isinstance(data, dict):
        raise InvalidResponseFormatError(f"Invalid {description} response format")
    return data


def require_data_list(
    response: Mapping[str, Any], description: str
) -> list[JsonObject]:
    """Return the `data` array from a collection document."""
    data = response.get("data")
    if not isinstance(data, list):
        raise InvalidResponseFormatError(f"Invalid {description} response format")
    return data
