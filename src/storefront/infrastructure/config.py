"""Runtime settings, read once from the environment.

Every tunable of the process lives here.  Gateway credentials are
optional individually; a gateway whose keys are missing simply is not
wired, and any attempt to use it fails with a configuration error.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.exceptions import ConfigurationError
from storefront.domain.model.value_objects import DEFAULT_CURRENCY
from storefront.domain.service.inventory_ledger import StockPolicy

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _flag(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _optional(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    data_dir: Path = _DEFAULT_DATA_DIR
    payment_demo_mode: bool = False
    stock_policy: StockPolicy = StockPolicy.ABORT
    currency: str = DEFAULT_CURRENCY
    log_level: str = "INFO"
    log_json: bool = False

    razorpay_key_id: str | None = None
    razorpay_key_secret: str | None = None
    razorpay_webhook_secret: str | None = None
    stripe_secret_key: str | None = None
    stripe_publishable_key: str | None = None
    stripe_webhook_secret: str | None = None

    def __post_init__(self) -> None:
        if self.payment_demo_mode and self.is_production:
            raise ConfigurationError(
                "Payment demo mode cannot be enabled in production"
            )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def razorpay_configured(self) -> bool:
        return bool(self.razorpay_key_id and self.razorpay_key_secret)

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)

    def public_keys(self) -> dict[str, str | None]:
        """Client-safe gateway keys; secrets never leave the process."""
        return {
            "razorpayKeyId": self.razorpay_key_id,
            "stripePublishableKey": self.stripe_publishable_key,
        }

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        raw_policy = env.get("STOREFRONT_STOCK_POLICY", StockPolicy.ABORT.value)
        try:
            policy = StockPolicy(raw_policy.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"STOREFRONT_STOCK_POLICY must be one of "
                f"{', '.join(p.value for p in StockPolicy)}, got {raw_policy!r}"
            ) from None

        data_dir = _optional(env, "STOREFRONT_DATA_DIR")
        return Settings(
            environment=env.get("STOREFRONT_ENV", "development").strip().lower(),
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            payment_demo_mode=_flag(env, "STOREFRONT_PAYMENT_DEMO_MODE"),
            stock_policy=policy,
            currency=env.get("STOREFRONT_CURRENCY", DEFAULT_CURRENCY).strip().upper(),
            log_level=env.get("STOREFRONT_LOG_LEVEL", "INFO").strip().upper(),
            log_json=_flag(env, "STOREFRONT_LOG_JSON"),
            razorpay_key_id=_optional(env, "RAZORPAY_KEY_ID"),
            razorpay_key_secret=_optional(env, "RAZORPAY_KEY_SECRET"),
            razorpay_webhook_secret=_optional(env, "RAZORPAY_WEBHOOK_SECRET"),
            stripe_secret_key=_optional(env, "STRIPE_SECRET_KEY"),
            stripe_publishable_key=_optional(env, "STRIPE_PUBLISHABLE_KEY"),
            stripe_webhook_secret=_optional(env, "STRIPE_WEBHOOK_SECRET"),
        )
