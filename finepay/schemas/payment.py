"""Checkout endpoint schemas."""

from pydantic import BaseModel, ConfigDict, Field


class CheckoutSessionRequest(BaseModel):
    """Schema for starting a fine payment.

    Both fields are optional at the schema level so that a missing value is
    reported as a client input error (400) by the service rather than a 422.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    civil_nic: str | None = Field(default=None, alias="civilNIC")
    fine_id: str | None = Field(default=None, alias="fineId")


class CheckoutSessionResponse(BaseModel):
    """Schema for a created checkout session."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Checkout session created"
    checkout_url: str = Field(alias="checkoutUrl")


class WebhookAck(BaseModel):
    """Acknowledgment returned to the processor."""

    received: bool = True


class ErrorResponse(BaseModel):
    """Error body shared by every failing response."""

    error: str
