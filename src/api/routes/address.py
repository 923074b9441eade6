"""Address Autocomplete API Routes

Thin proxy over the courier's location search.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from src.app.use_cases.shop.autocomplete_address import AutocompleteSites, AutocompleteStreets
from src.app.services.address_service import AddressLookupService
from src.depends import get_address_service
from src.api.error import ClientError

router = APIRouter(prefix="/autocomplete", tags=["Address"])


def _raise(error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ClientError(error, status_code=status.HTTP_502_BAD_GATEWAY)


@router.get("/sites")
async def autocomplete_sites(
    term: Optional[str] = Query(default=None),
    address_service: AddressLookupService = Depends(get_address_service),
):
    """Cities/towns matching `term`, in the vendor's shape."""
    result = await AutocompleteSites(address_service).execute(term)
    if result.is_err():
        _raise(result.error)
    return result.value.results


@router.get("/streets")
async def autocomplete_streets(
    site_id: Optional[int] = Query(default=None, alias="siteId"),
    term: Optional[str] = Query(default=None),
    address_service: AddressLookupService = Depends(get_address_service),
):
    """Streets in site `siteId` matching `term`, in the vendor's shape."""
    result = await AutocompleteStreets(address_service).execute(site_id, term)
    if result.is_err():
        _raise(result.error)
    return result.value.results
