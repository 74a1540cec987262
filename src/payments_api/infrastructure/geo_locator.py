from __future__ import annotations

import httpx
import structlog

from payments_api.application.ports import GeoLocator
from payments_api.infrastructure.ip_address import UNKNOWN_IP, is_localhost

logger = structlog.get_logger(__name__)

DEFAULT_URL_TEMPLATE = "https://api.country.is/{ip}"


class HttpGeoLocator(GeoLocator):
    """GeoLocator backed by a JSON country lookup service (api.country.is).

    The service answers ``GET <template with {ip}>`` with ``{"country": "US"}``.
    Every failure mode (timeouts, non-2xx, bad JSON, missing field) is
    logged and reported as None; this adapter never raises.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_URL_TEMPLATE,
        timeout_seconds: float = 5.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._url_template = url_template
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def country_for(self, ip_address: str | None) -> str | None:
        if not ip_address or not ip_address.strip() or ip_address.lower() == UNKNOWN_IP.lower():
            logger.debug("geoip_lookup_skipped", ip=ip_address, reason="unknown_address")
            return UNKNOWN_IP

        if is_localhost(ip_address):
            logger.debug("geoip_lookup_skipped", ip=ip_address, reason="localhost")
            return "Localhost"

        url = self._url_template.replace("{ip}", ip_address)
        logger.debug("geoip_lookup_requested", url=url)

        try:
            response = self._client.get(url)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "geoip_lookup_http_error",
                ip=ip_address,
                status_code=e.response.status_code,
                body=e.response.text,
            )
            return None
        except httpx.HTTPError as e:
            logger.error("geoip_lookup_failed", ip=ip_address, error=str(e))
            return None
        except ValueError as e:
            logger.error("geoip_lookup_invalid_json", ip=ip_address, error=str(e))
            return None

        country = body.get("country") if isinstance(body, dict) else None
        if not isinstance(country, str):
            logger.warning("geoip_lookup_missing_country", ip=ip_address, body=body)
            return None
        if not country.strip():
            logger.warning("geoip_lookup_blank_country", ip=ip_address)
            return None

        logger.debug("geoip_lookup_resolved", ip=ip_address, country=country)
        return country

    def close(self) -> None:
        self._client.close()


class NullGeoLocator(GeoLocator):
    """GeoLocator used when lookups are disabled; resolves nothing."""

    def country_for(self, ip_address: str | None) -> str | None:  # noqa: ARG002
        return None
