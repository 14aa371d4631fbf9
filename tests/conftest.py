"""
Pytest configuration and fixtures.
"""
import hashlib
import hmac
import json
import time
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from finepay.api.deps import get_checkout_gateway, get_http_client
from finepay.config import Settings
from finepay.gateways.base import (
    CheckoutGateway,
    CheckoutRequest,
    CheckoutSession,
    GatewayType,
)
from finepay.main import create_application
from finepay.schemas.events import SettlementEvent

FINE_BACKEND_URL = "https://fines.test"
FASTFOREX_URL = "https://fx.test"
WEBHOOK_SECRET = "whsec_test_secret"
FX_API_KEY = "fx_test_key"

CIVIL_NIC = "199012345678"
FINE_ID = "F1"
FINE_MANAGEMENT_ID = "FM1"


class FakeUpstream:
    """In-memory fine backend and FastForex behind an ``httpx.MockTransport``.

    ``failures`` maps a route name ("fine", "amount", "rate", "update") to
    either an HTTP status code or an ``httpx`` exception class.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.fines: dict[str, dict[str, Any]] = {
            FINE_ID: {"civilNIC": CIVIL_NIC, "fineManagementId": FINE_MANAGEMENT_ID},
        }
        self.amounts: dict[str, Any] = {FINE_MANAGEMENT_ID: 5000}
        self.fx_result: dict[str, Any] = {"USD": 0.0031}
        self.failures: dict[str, Any] = {}

    def requests_to(self, route: str) -> list[httpx.Request]:
        return [r for r in self.requests if self._route(r) == route]

    @staticmethod
    def _route(request: httpx.Request) -> str:
        if request.url.host == "fx.test":
            return "rate"
        segment = request.url.path.strip("/").split("/")[0]
        if segment == "fine":
            return "amount"
        return "update" if request.method == "PUT" else "fine"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._route(request)

        failure = self.failures.get(route)
        if isinstance(failure, int):
            return httpx.Response(failure, json={"message": "upstream failure"})
        if failure is not None:
            raise failure("upstream unavailable", request=request)

        key = request.url.path.strip("/").split("/")[-1]
        if route == "fine":
            if key not in self.fines:
                return httpx.Response(404, json={"message": "not found"})
            return httpx.Response(200, json={"data": self.fines[key]})
        if route == "amount":
            if key not in self.amounts:
                return httpx.Response(404, json={"message": "not found"})
            return httpx.Response(200, json={"data": {"fine": self.amounts[key]}})
        if route == "rate":
            return httpx.Response(
                200,
                json={"base": "LKR", "result": self.fx_result, "updated": "2026-10-17 00:00:00"},
            )
        return httpx.Response(200, json={"message": "updated"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class RecordingGateway(CheckoutGateway):
    """Checkout gateway that records requests instead of calling Stripe."""

    def __init__(self, checkout_url: str = "https://checkout.stripe.test/c/pay/cs_test_1"):
        self.requests: list[CheckoutRequest] = []
        self.checkout_url = checkout_url
        self.error: Exception | None = None

    @property
    def gateway_type(self) -> GatewayType:
        return GatewayType.STRIPE

    async def create_checkout_session(self, request: CheckoutRequest) -> CheckoutSession:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return CheckoutSession(
            session_id=f"cs_test_{len(self.requests)}",
            checkout_url=self.checkout_url,
        )

    def verify_webhook(self, payload: bytes, signature: str | None) -> SettlementEvent:
        raise NotImplementedError


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a ``Stripe-Signature`` header for ``payload``."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_event(
    event_type: str = "checkout.session.completed",
    fine_id: str | None = FINE_ID,
    event_id: str = "evt_test_1",
) -> str:
    """Serialize a Stripe-shaped event body."""
    metadata = {"civilNIC": CIVIL_NIC}
    if fine_id is not None:
        metadata["fineId"] = fine_id
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "data": {
                "object": {
                    "id": "cs_test_1",
                    "object": "checkout.session",
                    "payment_status": "paid",
                    "metadata": metadata,
                }
            },
        }
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        _env_file=None,
        stripe_secret_key="sk_test_fake_key_for_testing",
        stripe_webhook_secret=WEBHOOK_SECRET,
        fastforex_api_key=FX_API_KEY,
        fine_backend_base_url=FINE_BACKEND_URL,
        fastforex_base_url=FASTFOREX_URL,
        log_level="DEBUG",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def app(test_settings: Settings, upstream: FakeUpstream):
    """Application wired to the fake upstream; the real Stripe gateway is kept."""
    application = create_application(test_settings)

    async def _http_client():
        async with upstream.client() as client:
            yield client

    application.dependency_overrides[get_http_client] = _http_client
    return application


@pytest.fixture
def client(app) -> TestClient:
    """HTTP client for webhook tests (real Stripe signature verification)."""
    return TestClient(app)


@pytest.fixture
def checkout_client(app, gateway: RecordingGateway) -> TestClient:
    """HTTP client with the processor replaced by ``gateway``."""
    app.dependency_overrides[get_checkout_gateway] = lambda: gateway
    return TestClient(app)
