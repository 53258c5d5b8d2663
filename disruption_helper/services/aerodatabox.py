"""
AeroDataBox API Client - Flight status lookups through RapidAPI
Wraps the 'flights by number' endpoint with a clean interface
"""

import requests
from typing import Optional, Dict, Any
from urllib.parse import quote
import logging

from disruption_helper.models.flight import VerifiedStatus, parse_aerodatabox_response

logger = logging.getLogger(__name__)


class AeroDataBoxAPIError(Exception):
    """Raised when the provider cannot be reached or answers unusably"""
    pass


class AeroDataBoxClient:
    """
    Client for the AeroDataBox flight status API

    lookup() distinguishes three outcomes:
    - VerifiedStatus: the flight was located
    - None: the provider answered but has no such flight
    - AeroDataBoxAPIError: transport, HTTP or payload failure
    """

    DEFAULT_HOST = "aerodatabox.p.rapidapi.com"
    NOT_FOUND_STATUS_CODES = (204, 404)

    def __init__(self, api_key: str, host: str = DEFAULT_HOST, timeout: int = 15):
        """
        Initialize AeroDataBox client

        Args:
            api_key: RapidAPI key
            host: RapidAPI host serving AeroDataBox
            timeout: Per-request timeout in seconds
        """
        if not api_key:
            raise ValueError("AeroDataBox API key not provided")
        self.api_key = api_key
        self.host = host
        self.timeout = timeout

    @property
    def base_url(self) -> str:
        return f"https://{self.host}"

    def _make_request(self, endpoint: str, params: Optional[Dict] = None) -> Optional[Any]:
        """
        Make authenticated request to AeroDataBox

        Args:
            endpoint: API endpoint path (without base URL)
            params: Optional query parameters

        Returns:
            Decoded JSON body, or None when the provider reports no content

        Raises:
            AeroDataBoxAPIError: If request fails
        """
        url = f"{self.base_url}/{endpoint}"
        headers = {
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.host,
            "Accept": "application/json"
        }

        try:
            response = requests.get(url, headers=headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"AeroDataBox request error: {str(e)}")
            raise AeroDataBoxAPIError(f"Request failed: {str(e)}")

        if response.status_code in self.NOT_FOUND_STATUS_CODES:
            return None

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError:
            logger.error(f"AeroDataBox HTTP error: {response.status_code} - {response.text[:200]}")
            raise AeroDataBoxAPIError(f"API request failed: {response.status_code}")

        if not response.content or not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"AeroDataBox returned non-JSON body: {str(e)}")
            raise AeroDataBoxAPIError("Malformed response payload")

    def lookup(self, flight_number: str, date: str) -> Optional[VerifiedStatus]:
        """
        Get status of a specific flight

        Args:
            flight_number: Flight number (e.g., 'IB6312', 'LH400')
            date: Date in YYYY-MM-DD format

        Returns:
            VerifiedStatus, or None if the flight was not found

        Raises:
            AeroDataBoxAPIError: If the provider call fails

        Example:
            client = AeroDataBoxClient(api_key)
            status = client.lookup('IB6312', '2026-03-01')
        """
        endpoint = f"flights/number/{quote(flight_number, safe='')}/{quote(date, safe='')}"

        logger.info(f"Querying flight status: {flight_number} on {date}")
        raw_data = self._make_request(endpoint, params={"withAircraftImage": "false", "withLocation": "false"})
        if raw_data is None:
            return None

        try:
            return parse_aerodatabox_response(raw_data)
        except ValueError as e:
            logger.error(f"Could not parse AeroDataBox payload: {str(e)}")
            raise AeroDataBoxAPIError(f"Malformed response payload: {str(e)}")


# Singleton pattern for easy reuse
_client_instance: Optional[AeroDataBoxClient] = None


def get_aerodatabox_client(api_key: Optional[str] = None) -> Optional[AeroDataBoxClient]:
    """
    Get singleton AeroDataBox client instance

    Args:
        api_key: Optional RapidAPI key (uses Settings if not provided)

    Returns:
        AeroDataBoxClient instance, or None if no key is configured
    """
    global _client_instance

    if _client_instance is None or api_key:
        from disruption_helper.core.config import get_settings
        settings = get_settings()

        api_key = api_key or settings.aerodatabox_api_key
        if not api_key:
            logger.warning("AERODATABOX_API_KEY not configured - flight status verification disabled")
            return None

        _client_instance = AeroDataBoxClient(
            api_key,
            host=settings.aerodatabox_host,
            timeout=settings.api_timeout
        )

    return _client_instance


if __name__ == "__main__":
    # Manual smoke test against the live API
    import sys
    from dotenv import load_dotenv

    load_dotenv()

    if len(sys.argv) != 3:
        print("usage: python -m disruption_helper.services.aerodatabox FLIGHT_NUMBER YYYY-MM-DD")
        sys.exit(2)

    client = get_aerodatabox_client()
    if client is None:
        print("AERODATABOX_API_KEY not configured")
        sys.exit(1)

    try:
        status = client.lookup(sys.argv[1], sys.argv[2])
    except AeroDataBoxAPIError as e:
        print(f"Provider error: {str(e)}")
        sys.exit(1)

    if status is None:
        print("Flight not found")
    else:
        print(status.model_dump_json(indent=2))
