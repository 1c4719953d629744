"""Config loading and startup logging redaction."""

from givepay.common.config import DonationSettings
from givepay.common.startup import _safe_env


def test_settings_read_from_environment(monkeypatch):
    """Settings load from environment variables with defaults filled in."""

    monkeypatch.setenv("POSTGRES_DSN", "sqlite://")
    monkeypatch.setenv("BRAINTREE_MERCHANT_ID", "merchant")
    monkeypatch.setenv("BRAINTREE_PUBLIC_KEY", "public")
    monkeypatch.setenv("BRAINTREE_PRIVATE_KEY", "private")
    monkeypatch.setenv("PERSIST_MODE", "background")

    settings = DonationSettings()

    assert settings.persist_mode == "background"
    assert settings.api_prefix == "/api/v1"
    assert settings.donations_collection == "donations"


def test_secret_like_variables_are_redacted(monkeypatch):
    """Startup config logging hides secret-like values and marks unset ones."""

    monkeypatch.setenv("BRAINTREE_PRIVATE_KEY", "private")
    monkeypatch.setenv("BRAINTREE_ENVIRONMENT", "sandbox")
    monkeypatch.delenv("BRAINTREE_MERCHANT_ID", raising=False)

    assert _safe_env("BRAINTREE_PRIVATE_KEY") == "<redacted>"
    assert _safe_env("BRAINTREE_ENVIRONMENT") == "sandbox"
    assert _safe_env("BRAINTREE_MERCHANT_ID") == "<unset>"
