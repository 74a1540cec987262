from __future__ import annotations

from abc import ABC, abstractmethod


class GeoLocator(ABC):
    """Port for best-effort IP geolocation.

    Contract:
    - country_for() MUST NOT raise; any lookup failure returns None
    - Results are used for logging only and never affect a response
    """

    @abstractmethod
    def country_for(self, ip_address: str | None) -> str | None:
        """Resolve the country of an IP address.

        Args:
            ip_address: Client address as resolved from the request.

        Returns:
            A country code, "Unknown" or "Localhost" for addresses that are
            not looked up, or None when the lookup failed.
        """
