"""Core utilities: exceptions, logging and middleware."""

from finepay.core.exceptions import (
    AmountValidationError,
    AppException,
    AuthorizationError,
    CheckoutSessionError,
    ClientInputError,
    ConversionError,
    UpstreamLookupError,
    WebhookVerificationError,
)
from finepay.core.logging import configure_logging

__all__ = [
    "AmountValidationError",
    "AppException",
    "AuthorizationError",
    "CheckoutSessionError",
    "ClientInputError",
    "ConversionError",
    "UpstreamLookupError",
    "WebhookVerificationError",
    "configure_logging",
]
