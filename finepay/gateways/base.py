"""Base checkout gateway interface.

Gateway adapters only talk to the processor. Ownership checks, amount
lookup and conversion live in the services.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from finepay.schemas.events import SettlementEvent


class GatewayType(str, Enum):
    """Supported payment processors."""

    STRIPE = "stripe"


@dataclass
class CheckoutRequest:
    """Everything the processor needs to open a hosted checkout page."""

    amount: int
    currency: str
    product_name: str
    description: str
    success_url: str
    cancel_url: str
    metadata: dict[str, str] = field(default_factory=dict)
    idempotency_key: str | None = None


@dataclass
class CheckoutSession:
    """Processor-issued checkout session."""

    session_id: str
    checkout_url: str


class CheckoutGateway(ABC):
    """Abstract base class for checkout processors."""

    @property
    @abstractmethod
    def gateway_type(self) -> GatewayType:
        """Return the gateway type."""

    async def aclose(self) -> None:
        """Release network resources held by the gateway."""

    @abstractmethod
    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        """Create a hosted checkout session.

        Args:
            request: Amount in minor units, line item text, metadata and
                redirect URLs

        Returns:
            CheckoutSession with the redirect URL

        Raises:
            CheckoutSessionError: If the processor call fails
        """

    @abstractmethod
    def verify_webhook(
        self,
        payload: bytes,
        signature: str | None,
    ) -> SettlementEvent:
        """Verify webhook signature and parse payload.

        Args:
            payload: Raw request body, exactly as received
            signature: Webhook signature header

        Returns:
            Parsed event

        Raises:
            WebhookVerificationError: If the signature or payload is invalid
        """
