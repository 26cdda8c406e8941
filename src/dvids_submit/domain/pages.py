"""Paginated collection results."""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from dvids_submit.domain.jsonapi import JsonObject, require_data_list

T = TypeVar("T")


@dataclass(frozen=True)
class ResourcePage(Generic[T]):
    """One page of decoded resources plus the document's pagination links."""

    data: list[T]
    links: dict[str, Any] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_document(
        cls,
        document: Mapping[str, Any],
        decode: Callable[[JsonObject], T],
        description: str,
    ) -> "ResourcePage[T]":
        """Decode every resource object of a collection document."""
        items = require_data_list(document, description)
        return cls(
            data=[decode(item) for item in items],
            links=dict(document.get("links") or {}),
            meta=dict(document.get("meta") or {}),
        )

    @property
    def next_url(self) -> str | None:
        """URL of the following page, if the server advertised one."""
        return self.links.get("next")

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
