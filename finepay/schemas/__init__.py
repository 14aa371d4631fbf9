"""Pydantic schemas for requests, responses and upstream payloads."""

from finepay.schemas.events import CHECKOUT_SESSION_COMPLETED, SettlementEvent
from finepay.schemas.fine import FineAmountEnvelope, FineReference, FineReferenceEnvelope
from finepay.schemas.payment import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    ErrorResponse,
    WebhookAck,
)

__all__ = [
    "CHECKOUT_SESSION_COMPLETED",
    "CheckoutSessionRequest",
    "CheckoutSessionResponse",
    "ErrorResponse",
    "FineAmountEnvelope",
    "FineReference",
    "FineReferenceEnvelope",
    "SettlementEvent",
    "WebhookAck",
]
