"""Speedy Address Lookup Implementation

Proxies city and street autocomplete to the Speedy courier API.
"""

import logging
from typing import Any, Dict, List, Optional
import httpx
from src.app.services.address_service import AddressLookupService
from src.domain.exceptions import DownstreamServiceError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://services.speedy.bg/api/"


class SpeedyAddressService(AddressLookupService):
    """
    Address autocomplete backed by Speedy

    Every call is a JSON POST carrying the account credentials.
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = DEFAULT_BASE_URL,
        language: str = "EN",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Speedy client

        Args:
            username: Speedy account user
            password: Speedy account password
            base_url: API root, must end with a slash
            language: Result language
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a mock)
        """
        self.username = username
        self.password = password
        self.base_url = base_url
        self.language = language
        self.timeout = timeout
        self.transport = transport

    async def _post(self, endpoint: str, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "userName": self.username,
            "password": self.password,
            "language": self.language,
            **data,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    endpoint,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Speedy request {endpoint} failed: {e}")
            raise DownstreamServiceError("address lookup", str(e)) from e
        except ValueError as e:
            logger.error(f"Speedy request {endpoint} returned invalid JSON: {e}")
            raise DownstreamServiceError("address lookup", "invalid JSON response") from e

        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.error(f"Speedy request {endpoint} rejected: {message}")
            raise DownstreamServiceError("address lookup", message or "vendor error")

        return body if isinstance(body, dict) else {}

    async def search_sites(self, term: str) -> List[Dict[str, Any]]:
        data = await self._post("location/site/", {"name": term})
        return data.get("sites") or []

    async def search_streets(self, site_id: int, term: str) -> List[Dict[str, Any]]:
        data = await self._post("location/street/", {"siteId": int(site_id), "name": term})
        return data.get("streets") or []
