"""FastForex exchange-rate client."""

import json
import logging
from decimal import Decimal, InvalidOperation

import httpx

from finepay.core.exceptions import ConversionError
from finepay.domain.money import is_valid_rate

logger = logging.getLogger(__name__)


class FastForexClient:
    """Single-pair rate lookup against ``/fetch-one``."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, api_key: str):
        self._http = http_client
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def fetch_rate(self, source: str, target: str) -> Decimal:
        """Return how many ``target`` units one ``source`` unit buys.

        Raises:
            ConversionError: Provider unreachable, error status, malformed
                payload, or a rate that is not finite and positive
        """
        pair = f"{source}->{target}"
        try:
            response = await self._http.get(
                f"{self.base_url}/fetch-one",
                params={"from": source, "to": target, "api_key": self._api_key},
            )
        except httpx.HTTPError as e:
            # str(e) may embed the request URL, which carries the api key
            logger.error(f"Rate lookup {pair} failed: {type(e).__name__}")
            raise ConversionError() from e

        if response.is_error:
            logger.error(f"Rate lookup {pair} returned HTTP {response.status_code}")
            raise ConversionError()

        try:
            raw = response.json(parse_float=Decimal)["result"][target]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.error(f"Rate lookup {pair} returned a malformed payload")
            raise ConversionError() from e

        if isinstance(raw, bool):
            logger.error(f"Rate lookup {pair} returned a non-numeric rate")
            raise ConversionError()
        try:
            rate = Decimal(str(raw))
        except InvalidOperation as e:
            logger.error(f"Rate lookup {pair} returned a non-numeric rate")
            raise ConversionError() from e

        if not is_valid_rate(rate):
            logger.error(f"Rate lookup {pair} returned an invalid rate: {rate}")
            raise ConversionError()
        return rate
