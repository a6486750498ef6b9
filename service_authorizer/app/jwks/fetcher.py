"""
JWKS fetcher for the identity provider's key-publishing endpoint.
"""

from typing import List, Optional

import httpx

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..errors import KeySetEmpty, KeySetUnavailable
from .models import SigningKey


class KeySetFetcher:
    """Reads the current set of published signing keys.

    Each call to :meth:`fetch` performs exactly one GET against the
    configured endpoint, bounded by ``timeout``. Nothing is cached or
    retried here.
    """

    def __init__(
        self,
        jwks_url: str,
        timeout: float = 5.0,
        *,
        metrics: Optional[MetricsCollector] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.jwks_url = jwks_url
        self.timeout = timeout
        self.metrics = metrics
        self.logger = get_logger("authorizer.jwks")
        self._transport = transport

    async def fetch(self) -> List[SigningKey]:
        """Fetch the key set and return its entries in published order."""
        self.logger.info("Fetching signing keys", jwks_url=self.jwks_url)

        try:
            payload = await self._get_json()
        except KeySetUnavailable:
            self._record("error")
            raise

        keys = payload.get("keys") if isinstance(payload, dict) else None
        signing_keys = [
            SigningKey.from_jwk(entry)
            for entry in (keys if isinstance(keys, list) else [])
            if isinstance(entry, dict)
        ]
        if not signing_keys:
            self._record("empty")
            self.logger.warning("JWKS response contained no keys", jwks_url=self.jwks_url)
            raise KeySetEmpty(details={"jwks_url": self.jwks_url})

        self._record("ok")
        self.logger.info(
            "JWKS fetched successfully",
            jwks_url=self.jwks_url,
            keys_count=len(signing_keys),
        )
        return signing_keys

    async def _get_json(self):
        if self.metrics is not None:
            with self.metrics.time_operation("jwks_fetch_duration_seconds"):
                return await self._request()
        return await self._request()

    async def _request(self):
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.jwks_url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            self.logger.error(
                "JWKS endpoint returned an error status",
                jwks_url=self.jwks_url,
                status_code=status_code,
            )
            raise KeySetUnavailable(
                f"JWKS endpoint returned HTTP {status_code}",
                details={"jwks_url": self.jwks_url, "status_code": status_code},
            ) from e
        except httpx.TimeoutException as e:
            self.logger.error("JWKS endpoint timeout", jwks_url=self.jwks_url, timeout=self.timeout)
            raise KeySetUnavailable(
                "JWKS endpoint timed out",
                details={"jwks_url": self.jwks_url},
            ) from e
        except httpx.HTTPError as e:
            self.logger.error("JWKS request error", jwks_url=self.jwks_url, error=str(e))
            raise KeySetUnavailable(
                "JWKS endpoint unreachable",
                details={"jwks_url": self.jwks_url},
            ) from e
        except ValueError as e:
            self.logger.error("JWKS response is not valid JSON", jwks_url=self.jwks_url)
            raise KeySetUnavailable(
                "JWKS endpoint returned a non-JSON body",
                details={"jwks_url": self.jwks_url},
            ) from e

    def _record(self, status: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter("jwks_fetch_total", status=status)
