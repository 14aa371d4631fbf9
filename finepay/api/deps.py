"""API dependencies.

Components are assembled per request from what ``create_application`` and
the lifespan put on ``app.state``. Tests swap any of them through
``app.dependency_overrides``.
"""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from finepay.config import Settings
from finepay.gateways.base import CheckoutGateway
from finepay.gateways.fastforex import FastForexClient
from finepay.gateways.fine_backend import FineBackendClient
from finepay.services.checkout_service import CheckoutOptions, CheckoutService
from finepay.services.currency_service import RateConverter
from finepay.services.settlement_service import SettlementService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client opened by the lifespan."""
    return request.app.state.http_client


def get_checkout_gateway(request: Request) -> CheckoutGateway:
    return request.app.state.checkout_gateway


def get_fine_backend(
    settings: Annotated[Settings, Depends(get_app_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> FineBackendClient:
    return FineBackendClient(http_client, settings.fine_backend_base_url)


def get_rate_converter(
    settings: Annotated[Settings, Depends(get_app_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> RateConverter:
    client = FastForexClient(
        http_client,
        base_url=settings.fastforex_base_url,
        api_key=settings.fastforex_api_key,
    )
    return RateConverter(
        client,
        source_currency=settings.source_currency,
        target_currency=settings.settlement_currency,
    )


def get_checkout_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
    fine_backend: Annotated[FineBackendClient, Depends(get_fine_backend)],
    rate_converter: Annotated[RateConverter, Depends(get_rate_converter)],
    gateway: Annotated[CheckoutGateway, Depends(get_checkout_gateway)],
) -> CheckoutService:
    options = CheckoutOptions(
        product_name=settings.checkout_product_name,
        success_url=settings.checkout_success_url,
        cancel_url=settings.checkout_cancel_url,
        idempotency_enabled=settings.checkout_idempotency_enabled,
    )
    return CheckoutService(fine_backend, rate_converter, gateway, options)


def get_settlement_service(
    fine_backend: Annotated[FineBackendClient, Depends(get_fine_backend)],
) -> SettlementService:
    return SettlementService(fine_backend)
