"""Stripe Checkout gateway adapter."""

import logging

import stripe
from pydantic import ValidationError

from finepay.core.exceptions import CheckoutSessionError, WebhookVerificationError
from finepay.gateways.base import (
    CheckoutGateway,
    CheckoutRequest,
    CheckoutSession,
    GatewayType,
)
from finepay.schemas.events import SettlementEvent

logger = logging.getLogger(__name__)


class StripeGateway(CheckoutGateway):
    """Stripe Checkout implementation."""

    def __init__(
        self,
        secret_key: str,
        webhook_secret: str,
        timeout: float = 10.0,
        webhook_tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
    ):
        self.webhook_secret = webhook_secret
        self.webhook_tolerance = webhook_tolerance
        self._http_client = stripe.HTTPXClient(timeout=timeout)
        self._client = stripe.StripeClient(secret_key, http_client=self._http_client)

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.STRIPE

    async def aclose(self) -> None:
        """Close the SDK's async HTTP pool."""
        await self._http_client.close_async()

    @staticmethod
    def build_session_params(request: CheckoutRequest) -> dict:
        """Translate a checkout request into Checkout Session parameters."""
        return {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": request.currency.lower(),
                        "product_data": {
                            "name": request.product_name,
                            "description": request.description,
                        },
                        "unit_amount": request.amount,
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "metadata": dict(request.metadata),
            "success_url": request.success_url,
            "cancel_url": request.cancel_url,
        }

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        """Create a Stripe Checkout Session."""
        options = {}
        if request.idempotency_key:
            options["idempotency_key"] = request.idempotency_key

        try:
            session = await self._client.checkout.sessions.create_async(
                params=self.build_session_params(request),
                options=options,
            )
        except stripe.StripeError as e:
            logger.error(
                f"Stripe checkout session creation failed: "
                f"{type(e).__name__} code={getattr(e, 'code', None)} {e.user_message or ''}"
            )
            raise CheckoutSessionError() from e

        if not session.url:
            logger.error(f"Stripe checkout session {session.id} returned no redirect URL")
            raise CheckoutSessionError()

        logger.info(
            f"Created checkout session {session.id} for "
            f"{request.amount} {request.currency.lower()} minor units"
        )
        return CheckoutSession(session_id=session.id, checkout_url=session.url)

    def verify_webhook(
        self,
        payload: bytes,
        signature: str | None,
    ) -> SettlementEvent:
        """Verify a Stripe webhook signature against the raw body."""
        if not signature:
            raise WebhookVerificationError("Missing Stripe-Signature header")

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError:
            raise WebhookVerificationError("Payload is not valid UTF-8")

        try:
            stripe.WebhookSignature.verify_header(
                body,
                signature,
                self.webhook_secret,
                tolerance=self.webhook_tolerance,
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(str(e.user_message or e)) from e

        try:
            return SettlementEvent.model_validate_json(body)
        except ValidationError as e:
            raise WebhookVerificationError("Invalid payload") from e
