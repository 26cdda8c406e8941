"""VIRIN generation sources."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from dvids_submit.errors import InvalidResponseFormatError


@dataclass(frozen=True)
class ServiceUnitVirinSource:
    """Generate the VIRIN from a service unit, scoped to its branch."""

    service_unit_id: str


@dataclass(frozen=True)
class AuthorVirinSource:
    """Generate the VIRIN from an individual author.

    The author is always credited on the resulting media.
    """

    author_id: str


VirinSource = ServiceUnitVirinSource | AuthorVirinSource


def extract_virin(document: Mapping[str, Any], source: str) -> str:
    """Return `data.attributes.virin` from a VIRIN creation response."""
    data = document.get("data")
    attributes = data.get("attributes") if isinstance(data, Mapping) else None
    virin = attributes.get("virin") if isinstance(attributes, Mapping) else None
    if not isinstance(virin, str) or not virin:
        raise InvalidResponseFormatError(f"Failed to generate VIRIN from {source}")
    return virin


def credit_author(author_ids: Iterable[str], author_id: str) -> tuple[str, ...]:
    """Deduplicate credited authors, appending `author_id` if it is missing."""
    return tuple(dict.fromkeys([*author_ids, author_id]))
