"""Service unit lookups and VIRIN generation."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from dvids_submit.adapters.api_client import ApiClient
from dvids_submit.domain.enums import Branch
from dvids_submit.domain.jsonapi import (
    ServiceUnitReference,
    build_relationships,
    format_timestamp,
    require_data,
)
from dvids_submit.domain.pages import ResourcePage
from dvids_submit.domain.people import ServiceUnit


@dataclass
class ServiceUnitService:
    """Service for the `/service-unit` resource."""

    api_client: ApiClient

    async def search_service_units(
        self, query: Mapping[str, Any] | None = None
    ) -> ResourcePage[ServiceUnit]:
        """Search service units with raw filter and paging parameters."""
        response = await self.api_client.get("/service-unit", query)
        return ResourcePage.from_document(
            response, ServiceUnit.from_dict, "service unit"
        )

    async def get_service_unit(self, service_unit_id: str) -> ServiceUnit:
        """Fetch a service unit by id."""
        response = await self.api_client.get(f"/service-unit/{service_unit_id}")
        return ServiceUnit.from_dict(require_data(response, "service unit"))

    async def create_virin(
        self, service_unit_id: str, virin_date: date | datetime
    ) -> dict[str, Any]:
        """Generate a VIRIN for the unit and date; returns the raw document."""
        payload = {
            "data": {
                "type": "service-unit-virin",
                "attributes": {"date": format_timestamp(virin_date)},
                "relationships": build_relationships(
                    service_unit=ServiceUnitReference(service_unit_id)
                ),
            }
        }
        return await self.api_client.post(
            f"/service-unit/{service_unit_id}/virin", payload
        )

    async def search_by_name(
        self, name: str, page_size: int = 20, page_number: int = 0
    ) -> ResourcePage[ServiceUnit]:
        """Search service units by name."""
        return await self.search_service_units(
            {"name": name, "limit": page_size, "page": page_number}
        )

    async def search_by_branch(
        self, branch: Branch | str, page_size: int = 20, page_number: int = 0
    ) -> ResourcePage[ServiceUnit]:
        """Search service units belonging to one branch."""
        return await self.search_service_units(
            {"branch": str(branch), "limit": page_size, "page": page_number}
        )

    async def get_service_units(
        self, page_size: int = 20, page_number: int = 0
    ) -> ResourcePage[ServiceUnit]:
        """List service units one page at a time."""
        return await self.search_service_units(
            {"limit": page_size, "page": page_number}
        )

    async def get_my_service_units(
        self, page_size: int = 20, page_number: int = 0
    ) -> ResourcePage[ServiceUnit]:
        """List the service units the authenticated user belongs to."""
        return await self.search_service_units(
            {"only_mine": True, "limit": page_size, "page": page_number}
        )
