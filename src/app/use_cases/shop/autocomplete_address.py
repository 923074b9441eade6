"""Address Autocomplete Use Cases

Proxy city and street searches to the courier's location API.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.address_service import AddressLookupService
from src.domain.exceptions import DownstreamServiceError
from .dtos import AddressSearchResponseDTO


def _downstream_error(e: DownstreamServiceError) -> Error:
    return Error(
        code="DOWNSTREAM_FAILURE",
        message=f"{e.service} failed",
        reason=e.reason,
    )


class AutocompleteSites:
    """Use Case: Search cities/towns by term"""

    def __init__(self, address_service: AddressLookupService):
        self.address_service = address_service

    async def execute(self, term: Optional[str]) -> Result[AddressSearchResponseDTO]:
        if not term or not term.strip():
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Missing search term.",
                    reason="term is required",
                )
            )
        try:
            sites = await self.address_service.search_sites(term.strip())
            return Return.ok(AddressSearchResponseDTO(results=sites))
        except DownstreamServiceError as e:
            return Return.err(_downstream_error(e))


class AutocompleteStreets:
    """Use Case: Search streets within a city by term"""

    def __init__(self, address_service: AddressLookupService):
        self.address_service = address_service

    async def execute(
        self, site_id: Optional[int], term: Optional[str]
    ) -> Result[AddressSearchResponseDTO]:
        if site_id is None or not term or not term.strip():
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Missing siteId or term.",
                    reason="site_id and term are required",
                )
            )
        try:
            streets = await self.address_service.search_streets(site_id, term.strip())
            return Return.ok(AddressSearchResponseDTO(results=streets))
        except DownstreamServiceError as e:
            return Return.err(_downstream_error(e))
