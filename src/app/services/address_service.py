"""Address Lookup Service Interface

Defines the contract for the courier's address autocomplete.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class AddressLookupService(ABC):
    """
    Abstract address autocomplete

    Results are passed through in the vendor's shape.
    """

    @abstractmethod
    async def search_sites(self, term: str) -> List[Dict[str, Any]]:
        """
        Search cities/towns by name prefix

        Args:
            term: Search term

        Returns:
            List of vendor site records

        Raises:
            DownstreamServiceError: If the vendor call fails
        """
        pass

    @abstractmethod
    async def search_streets(self, site_id: int, term: str) -> List[Dict[str, Any]]:
        """
        Search streets within a site

        Args:
            site_id: Vendor site identifier
            term: Search term

        Returns:
            List of vendor street records

        Raises:
            DownstreamServiceError: If the vendor call fails
        """
        pass
