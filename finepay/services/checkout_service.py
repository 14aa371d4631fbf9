"""Checkout session initiation.

Runs the payment start-up sequence for one fine: input check, fine lookup,
ownership check, amount lookup, conversion, processor session. Each step
only runs once the previous one has succeeded, and nothing is retried.
"""

import logging
from dataclasses import dataclass

from finepay.core.exceptions import ClientInputError
from finepay.core.idempotency import generate_idempotency_key
from finepay.domain.authorization import assert_fine_owner
from finepay.gateways.base import CheckoutGateway, CheckoutRequest, CheckoutSession
from finepay.gateways.fine_backend import FineBackendClient
from finepay.services.currency_service import RateConverter

logger = logging.getLogger(__name__)


@dataclass
class CheckoutOptions:
    """Static checkout settings taken from configuration."""

    product_name: str
    success_url: str
    cancel_url: str
    idempotency_enabled: bool = False


class CheckoutService:
    """Starts a processor checkout for a fine."""

    def __init__(
        self,
        fine_backend: FineBackendClient,
        rate_converter: RateConverter,
        gateway: CheckoutGateway,
        options: CheckoutOptions,
    ):
        self.fine_backend = fine_backend
        self.rate_converter = rate_converter
        self.gateway = gateway
        self.options = options

    async def initiate_session(
        self,
        civil_nic: str | None,
        fine_id: str | None,
    ) -> CheckoutSession:
        """Create a checkout session for ``fine_id`` on behalf of ``civil_nic``.

        Raises:
            ClientInputError: Missing or empty input
            UpstreamLookupError: Fine or amount lookup failed
            AuthorizationError: ``civil_nic`` does not own the fine
            ConversionError: No usable exchange rate
            CheckoutSessionError: Processor call failed
        """
        if not civil_nic or not civil_nic.strip() or not fine_id or not fine_id.strip():
            raise ClientInputError()

        fine = await self.fine_backend.get_fine_reference(fine_id)
        assert_fine_owner(civil_nic, fine, fine_id)

        amount = await self.fine_backend.get_fine_amount(fine.fine_management_id)
        converted = await self.rate_converter.convert(amount)

        currency = self.rate_converter.target_currency
        idempotency_key = None
        if self.options.idempotency_enabled:
            idempotency_key = generate_idempotency_key(
                "checkout_session",
                fine_id,
                {
                    "civilNIC": civil_nic,
                    "amount": converted.minor_units,
                    "currency": currency,
                },
            )

        session = await self.gateway.create_checkout_session(
            CheckoutRequest(
                amount=converted.minor_units,
                currency=currency,
                product_name=self.options.product_name,
                description=f"Fine ID: {fine_id}",
                success_url=self.options.success_url,
                cancel_url=self.options.cancel_url,
                metadata={"fineId": fine_id, "civilNIC": civil_nic},
                idempotency_key=idempotency_key,
            )
        )
        logger.info(
            f"{self.gateway.gateway_type.value} checkout session {session.session_id} "
            f"opened for fine {fine_id}"
        )
        return session
