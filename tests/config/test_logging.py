"""Tests for structlog processors."""

from ekram_prices.config import Settings
from ekram_prices.config.logging import redact_secrets, service_context
from ekram_prices.config.settings import StoreSettings


class TestRedactSecrets:
    def test_masks_secret_values(self):
        event = {"event": "x", "update_key": "s3cret", "token": "abc", "material": "barley"}
        result = redact_secrets(None, "info", event)
        assert result["update_key"] == "***"
        assert result["token"] == "***"
        assert result["material"] == "barley"

    def test_leaves_empty_values(self):
        result = redact_secrets(None, "info", {"event": "x", "remote_token": None})
        assert result["remote_token"] is None


class TestServiceContext:
    def test_binds_store_name(self):
        settings = Settings(_env_file=None, store=StoreSettings(name="ekram-test"))
        processor = service_context(settings)
        result = processor(None, "info", {"event": "x"})
        assert result["store"] == "ekram-test"
        assert result["app"] == settings.app_name

    def test_does_not_override_event_fields(self):
        processor = service_context(Settings(_env_file=None))
        result = processor(None, "info", {"event": "x", "store": "ok"})
        assert result["store"] == "ok"
