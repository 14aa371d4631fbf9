"""Custom application exceptions.

Every failure a route can produce is an ``AppException``. The ``detail`` is
the only text returned to the caller; upstream specifics are logged where the
error is raised.
"""

from fastapi import HTTPException, status

GENERIC_CHECKOUT_FAILURE = "Checkout session failed"


class AppException(HTTPException):
    """Base application exception."""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ClientInputError(AppException):
    """Required request fields are missing or empty."""

    def __init__(self, detail: str = "Missing civilNIC or fineId") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthorizationError(AppException):
    """Caller does not own the fine."""

    def __init__(self, detail: str = "Not authorized to pay this fine") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UpstreamLookupError(AppException):
    """Fine-management backend call failed or returned an unusable payload."""

    def __init__(self, detail: str = GENERIC_CHECKOUT_FAILURE) -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class AmountValidationError(UpstreamLookupError):
    """Fine amount is not a finite, non-negative number."""


class ConversionError(AppException):
    """Exchange rate could not be fetched or is not a finite positive number."""

    def __init__(self, detail: str = GENERIC_CHECKOUT_FAILURE) -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class CheckoutSessionError(AppException):
    """Payment processor refused or failed to create the checkout session."""

    def __init__(self, detail: str = GENERIC_CHECKOUT_FAILURE) -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class WebhookVerificationError(AppException):
    """Webhook signature or payload could not be verified."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Webhook Error: {reason}",
        )
