"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from storefront.domain.exceptions import ConfigurationError
from storefront.domain.service.inventory_ledger import StockPolicy
from storefront.infrastructure.config import Settings


class TestSettingsFromEnv:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.environment == "development"
        assert not settings.payment_demo_mode
        assert settings.stock_policy is StockPolicy.ABORT
        assert settings.currency == "INR"
        assert not settings.razorpay_configured
        assert not settings.stripe_configured

    def test_values_read(self):
        settings = Settings.from_env({
            "STOREFRONT_DATA_DIR": "/tmp/store",
            "STOREFRONT_STOCK_POLICY": "Skip",
            "STOREFRONT_CURRENCY": "usd",
            "STOREFRONT_PAYMENT_DEMO_MODE": "yes",
            "RAZORPAY_KEY_ID": "rzp_test_1",
            "RAZORPAY_KEY_SECRET": "secret",
        })
        assert settings.data_dir == Path("/tmp/store")
        assert settings.stock_policy is StockPolicy.SKIP
        assert settings.currency == "USD"
        assert settings.payment_demo_mode
        assert settings.razorpay_configured

    def test_blank_credentials_are_absent(self):
        assert Settings.from_env({"STRIPE_SECRET_KEY": "  "}).stripe_secret_key is None

    def test_demo_mode_refused_in_production(self):
        with pytest.raises(ConfigurationError, match="production"):
            Settings.from_env({
                "STOREFRONT_ENV": "production",
                "STOREFRONT_PAYMENT_DEMO_MODE": "true",
            })

    def test_bad_policy(self):
        with pytest.raises(ConfigurationError, match="STOREFRONT_STOCK_POLICY"):
            Settings.from_env({"STOREFRONT_STOCK_POLICY": "maybe"})

    def test_bad_flag(self):
        with pytest.raises(ConfigurationError, match="boolean"):
            Settings.from_env({"STOREFRONT_LOG_JSON": "sometimes"})

    def test_public_keys_hold_no_secrets(self):
        settings = Settings.from_env({
            "RAZORPAY_KEY_ID": "rzp_test_1",
            "RAZORPAY_KEY_SECRET": "secret",
            "STRIPE_SECRET_KEY": "sk_test",
            "STRIPE_PUBLISHABLE_KEY": "pk_test",
        })
        keys = settings.public_keys()
        assert keys == {"razorpayKeyId": "rzp_test_1", "stripePublishableKey": "pk_test"}

    def test_settings_are_hashable(self):
        assert hash(Settings.from_env({})) == hash(Settings.from_env({}))
