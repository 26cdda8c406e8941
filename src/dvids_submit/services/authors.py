"""Author lookups and VIRIN generation."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from dvids_submit.adapters.api_client import ApiClient
from dvids_submit.domain.jsonapi import (
    AuthorReference,
    build_relationships,
    format_timestamp,
    require_data,
)
from dvids_submit.domain.pages import ResourcePage
from dvids_submit.domain.people import Author


@dataclass
class AuthorService:
    """Service for the `/author` resource."""

    api_client: ApiClient

    async def search_authors(
        self, query: Mapping[str, Any] | None = None
    ) -> ResourcePage[Author]:
        """Search authors with raw filter and paging parameters."""
        response = await self.api_client.get("/author", query)
        return ResourcePage.from_document(response, Author.from_dict, "author")

    async def search_by_name(
        self, name: str, page: int = 1, limit: int = 50
    ) -> ResourcePage[Author]:
        """Search authors by name."""
        return await self.search_authors({"name": name, "page": page, "limit": limit})

    async def get_author(self, author_id: str) -> Author:
        """Fetch an author by id."""
        response = await self.api_client.get(f"/author/{author_id}")
        return Author.from_dict(require_data(response, "author"))

    async def create_virin(
        self, author_id: str, virin_date: date | datetime
    ) -> dict[str, Any]:
        """Generate a VIRIN for the author and date; returns the raw document."""
        payload = {
            "data": {
                "type": "author-virin",
                "attributes": {"date": format_timestamp(virin_date)},
                "relationships": build_relationships(
                    author=AuthorReference(author_id)
                ),
            }
        }
        return await self.api_client.post(f"/author/{author_id}/virin", payload)
