"""
HTTP client for the shell-history counting service.
"""

from datetime import date

import requests

from echoes.logging_config import get_logger

logger = get_logger(__name__)


class AbacusClientError(Exception):
    """Base exception for history service errors."""

    pass


class AbacusClient:
    """Client for the atuin-abacus history API."""

    def __init__(self, base_url: str, timezone: str, timeout: float = 10):
        """
        Initialize the history client.

        Args:
            base_url: Service root, e.g. https://apis.evanpurkhiser.com/atuin-abacus
            timezone: IANA timezone the service should bucket days in
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timezone = timezone
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Prefer": f"timezone={timezone}",
                "Accept": "application/json",
            }
        )

    def get_total(self, start: date) -> int:
        """
        Fetch the total command count since start.

        Args:
            start: First date to count from

        Returns:
            Total number of commands

        Raises:
            AbacusClientError: If the request fails or the payload is malformed
        """
        data = self._get(f"{self.base_url}/", start)

        if not isinstance(data, dict) or "total" not in data:
            raise AbacusClientError(f"Unexpected total payload: {data!r}")

        return data["total"]

    def get_history(self, start: date) -> list[dict]:
        """
        Fetch daily command counts since start.

        Args:
            start: First date to fetch

        Returns:
            List of {"date": "YYYY-MM-DD", "count": int} dictionaries

        Raises:
            AbacusClientError: If the request fails or the payload is malformed
        """
        data = self._get(f"{self.base_url}/history", start)

        if not isinstance(data, list):
            raise AbacusClientError(f"Unexpected history payload: {data!r}")

        logger.debug("Fetched %d history entries since %s", len(data), start.isoformat())
        return data

    def _get(self, url: str, start: date):
        params = {"start": start.isoformat()}

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout:
            raise AbacusClientError(f"History service timed out after {self.timeout}s")
        except requests.RequestException as e:
            raise AbacusClientError(f"Could not reach history service: {e}")

        if response.status_code == 404:
            raise AbacusClientError(f"History endpoint not found: {url}")
        elif response.status_code == 429:
            raise AbacusClientError("History service rate limit exceeded.")
        elif not response.ok:
            raise AbacusClientError(
                f"History service error: {response.status_code} - {response.text}"
            )

        try:
            return response.json()
        except ValueError:
            raise AbacusClientError("History service returned invalid JSON")
