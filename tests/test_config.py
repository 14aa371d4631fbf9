"""Tests for settings and application startup."""
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from finepay.config import Settings, get_settings
from finepay.main import create_application

REQUIRED = {
    "STRIPE_SECRET_KEY": "sk_test_fake_key_for_testing",
    "STRIPE_WEBHOOK_SECRET": "whsec_test_secret",
    "FASTFOREX_API_KEY": "fx_test_key",
}


@pytest.fixture
def env(monkeypatch):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_settings_from_environment(env):
    settings = Settings(_env_file=None)

    assert settings.stripe_webhook_secret == "whsec_test_secret"
    assert settings.fastforex_api_key == "fx_test_key"
    assert settings.source_currency == "LKR"
    assert settings.settlement_currency == "USD"
    assert settings.upstream_timeout_seconds == 10.0
    assert settings.checkout_idempotency_enabled is False


@pytest.mark.parametrize("missing", list(REQUIRED))
def test_missing_secret_is_rejected(env, missing):
    env.delenv(missing)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_empty_webhook_secret_is_rejected(env):
    env.setenv("STRIPE_WEBHOOK_SECRET", "")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_startup_fails_without_webhook_secret(env, tmp_path):
    env.delenv("STRIPE_WEBHOOK_SECRET")
    env.chdir(tmp_path)  # keep a developer .env out of the way

    with pytest.raises(ValidationError):
        create_application()


def test_create_application_from_environment(env, tmp_path):
    env.chdir(tmp_path)

    app = create_application()

    assert app.state.settings.stripe_webhook_secret == "whsec_test_secret"


def test_values_are_normalised(env):
    env.setenv("LOG_LEVEL", "debug")
    env.setenv("SETTLEMENT_CURRENCY", " usd ")
    env.setenv("FINE_BACKEND_BASE_URL", "https://fines.test/")

    settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.settlement_currency == "USD"
    assert settings.fine_backend_base_url == "https://fines.test"


def test_invalid_log_level(env):
    env.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_lifespan_opens_and_closes_shared_client(test_settings):
    app = create_application(test_settings)

    with TestClient(app) as client:
        http_client = app.state.http_client
        assert http_client.timeout == httpx.Timeout(test_settings.upstream_timeout_seconds)
        assert not http_client.is_closed
        assert client.get("/health").status_code == 200

    assert http_client.is_closed


def test_lifespan_closes_checkout_gateway(test_settings, monkeypatch):
    app = create_application(test_settings)
    close = AsyncMock()
    monkeypatch.setattr(app.state.checkout_gateway, "aclose", close)

    with TestClient(app):
        pass

    close.assert_awaited_once()
