"""Fine-management backend client.

Two read endpoints feed checkout initiation; one idempotent write marks a
fine paid after settlement.
"""

import json
import logging
from decimal import Decimal
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from finepay.core.exceptions import AmountValidationError, UpstreamLookupError
from finepay.domain.money import is_valid_amount
from finepay.schemas.fine import FineAmountEnvelope, FineReference, FineReferenceEnvelope

logger = logging.getLogger(__name__)


class FineBackendClient:
    """Async client for the fine-management backend."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str):
        self._http = http_client
        self.base_url = base_url.rstrip("/")

    def _url(self, *segments: str) -> str:
        return "/".join([self.base_url, *(quote(str(s), safe="") for s in segments)])

    async def _get_json(self, url: str, what: str):
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as e:
            logger.error(f"{what} request failed: {type(e).__name__}: {e}")
            raise UpstreamLookupError() from e

        if response.status_code == 404:
            logger.warning(f"{what} not found")
            raise UpstreamLookupError()
        if response.is_error:
            logger.error(f"{what} returned HTTP {response.status_code}")
            raise UpstreamLookupError()

        try:
            return response.json(parse_float=Decimal)
        except json.JSONDecodeError as e:
            logger.error(f"{what} returned a non-JSON body")
            raise UpstreamLookupError() from e

    async def get_fine_reference(self, fine_id: str) -> FineReference:
        """Fetch the fine and its owner.

        Raises:
            UpstreamLookupError: Unreachable, not found or malformed response
        """
        what = f"Fine {fine_id} lookup"
        body = await self._get_json(self._url("policeIssueFine", fine_id), what)
        try:
            fine = FineReferenceEnvelope.model_validate(body).data
        except ValidationError as e:
            logger.error(f"{what} returned a malformed payload: {e.error_count()} error(s)")
            raise UpstreamLookupError() from e
        return fine.model_copy(update={"fine_id": fine_id})

    async def get_fine_amount(self, fine_management_id: str) -> Decimal:
        """Fetch the fine amount in the local currency.

        Raises:
            UpstreamLookupError: Unreachable, not found or malformed response
            AmountValidationError: Amount is negative, NaN or infinite
        """
        what = f"Fine amount {fine_management_id} lookup"
        body = await self._get_json(self._url("fine", fine_management_id), what)
        try:
            amount = FineAmountEnvelope.model_validate(body).data.fine
        except ValidationError as e:
            logger.error(f"{what} returned a malformed payload: {e.error_count()} error(s)")
            raise UpstreamLookupError() from e

        if not is_valid_amount(amount):
            logger.error(f"{what} returned an invalid amount: {amount}")
            raise AmountValidationError()
        return amount

    async def mark_fine_paid(self, fine_id: str) -> None:
        """Set ``isPaid`` on the fine. The backend treats this as idempotent.

        Raises:
            UpstreamLookupError: Network failure or non-success status
        """
        try:
            response = await self._http.put(
                self._url("policeIssueFine", fine_id),
                json={"isPaid": True},
            )
        except httpx.HTTPError as e:
            logger.error(f"Fine {fine_id} update request failed: {type(e).__name__}: {e}")
            raise UpstreamLookupError() from e

        if response.is_error:
            logger.error(f"Fine {fine_id} update returned HTTP {response.status_code}")
            raise UpstreamLookupError()
