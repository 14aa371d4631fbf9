"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from finepay.api import checkout, webhooks

api_router = APIRouter()

# Checkout
api_router.include_router(checkout.router, tags=["Checkout"])

# Webhooks
api_router.include_router(webhooks.router, tags=["Webhooks"])
