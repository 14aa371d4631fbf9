"""Payment processor webhook endpoint."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status

from finepay.api.deps import get_checkout_gateway, get_settlement_service
from finepay.core.exceptions import WebhookVerificationError
from finepay.gateways.base import CheckoutGateway
from finepay.schemas.payment import ErrorResponse, WebhookAck
from finepay.services.settlement_service import SettlementService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/webhook",
    response_model=WebhookAck,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}},
)
async def stripe_webhook(
    request: Request,
    gateway: Annotated[CheckoutGateway, Depends(get_checkout_gateway)],
    settlement_service: Annotated[SettlementService, Depends(get_settlement_service)],
    stripe_signature: Annotated[str | None, Header(alias="Stripe-Signature")] = None,
) -> WebhookAck:
    """Handle Stripe webhook events.

    No body model is declared: the signature covers the exact bytes sent,
    so the raw body is read untouched.
    """
    payload = await request.body()

    try:
        event = gateway.verify_webhook(payload, stripe_signature)
    except WebhookVerificationError as e:
        logger.warning(f"Webhook signature verification failed: {e.reason}")
        raise

    # Acknowledge regardless of the outcome
    await settlement_service.handle_event(event)
    return WebhookAck()
