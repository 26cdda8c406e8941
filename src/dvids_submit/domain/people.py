"""Author and service unit domain models."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dvids_submit.domain.enums import Branch
from dvids_submit.domain.jsonapi import (
    JsonObject,
    ServiceUnitReference,
    build_relationships,
    parse_enum,
    parse_optional_enum,
    put_optional,
    relationship_many,
    require,
    require_id,
    resource_object,
)


@dataclass(frozen=True)
class JobGrade:
    """Rank or grade of an author. Nested inside author attributes."""

    name: str
    associated_press_name: str
    abbreviation: str
    branch: Branch | None = None
    job_grade: str | None = None
    nato_code: str | None = None
    country_code: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobGrade":
        """Create a JobGrade from its attribute object."""
        return cls(
            name=require(data, "name", "job-grade"),
            associated_press_name=require(data, "associated_press_name", "job-grade"),
            abbreviation=require(data, "abbreviation", "job-grade"),
            branch=parse_optional_enum(Branch, data.get("branch")),
            job_grade=data.get("job_grade"),
            nato_code=data.get("nato_code"),
            country_code=data.get("country_code"),
        )

    def to_dict(self) -> JsonObject:
        return put_optional(
            {
                "name": self.name,
                "associated_press_name": self.associated_press_name,
                "abbreviation": self.abbreviation,
            },
            branch=self.branch.value if self.branch else None,
            job_grade=self.job_grade,
            nato_code=self.nato_code,
            country_code=self.country_code,
        )


@dataclass(frozen=True)
class Author:
    """Someone credited when a media asset is published."""

    id: str
    name: str
    vision_id: str | None = None
    job_grade: JobGrade | None = None
    service_units: tuple[ServiceUnitReference, ...] = ()

    resource_type = "author"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Author":
        """Create an Author from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        job_grade = attributes.get("job_grade")
        return cls(
            id=require_id(data, cls.resource_type),
            name=require(attributes, "name", cls.resource_type),
            vision_id=attributes.get("vision_id"),
            job_grade=JobGrade.from_dict(job_grade) if job_grade else None,
            service_units=relationship_many(
                data.get("relationships") or {}, "service_units", ServiceUnitReference
            ),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = put_optional(
            {"name": self.name},
            vision_id=self.vision_id,
            job_grade=self.job_grade.to_dict() if self.job_grade else None,
        )
        return resource_object(
            self.id,
            self.resource_type,
            attributes,
            build_relationships(service_units=self.service_units),
        )


@dataclass(frozen=True)
class ServiceUnit:
    """A unit of the armed services. Every unit belongs to exactly one branch."""

    id: str
    name: str
    abbreviation: str
    branch: Branch
    dvian: str | None = None
    requires_publishing_approval: bool = False

    resource_type = "service-unit"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceUnit":
        """Create a ServiceUnit from a JSON:API resource object."""
        attributes = data.get("attributes") or {}
        return cls(
            id=require_id(data, cls.resource_type),
            name=require(attributes, "name", cls.resource_type),
            abbreviation=attributes.get("abbreviation") or "",
            branch=parse_enum(
                Branch, require(attributes, "branch", cls.resource_type)
            ),
            dvian=attributes.get("dvian"),
            requires_publishing_approval=attributes.get(
                "requires_publishing_approval", False
            ),
        )

    def to_dict(self) -> JsonObject:
        """Convert to a JSON:API resource object."""
        attributes = put_optional(
            {
                "name": self.name,
                "abbreviation": self.abbreviation,
                "branch": self.branch.value,
            },
            dvian=self.dvian,
        )
        attributes["requires_publishing_approval"] = self.requires_publishing_approval
        return resource_object(self.id, self.resource_type, attributes)
