"""Checkout session endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from finepay.api.deps import get_checkout_service
from finepay.schemas.payment import (
    CheckoutSessionRequest,
    CheckoutSessionResponse,
    ErrorResponse,
)
from finepay.services.checkout_service import CheckoutService

router = APIRouter()


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_checkout_session(
    payload: CheckoutSessionRequest,
    checkout_service: Annotated[CheckoutService, Depends(get_checkout_service)],
) -> CheckoutSessionResponse:
    """Start a hosted checkout for a fine and return its redirect URL."""
    session = await checkout_service.initiate_session(payload.civil_nic, payload.fine_id)
    return CheckoutSessionResponse(checkout_url=session.checkout_url)
