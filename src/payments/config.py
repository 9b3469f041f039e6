"""Gateway settings loaded from ``RAZORPAY_*`` environment variables or ``.env``."""

from enum import Enum

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewayProvider(str, Enum):
    RAZORPAY = "razorpay"
    FAKE = "fake"


class GatewaySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RAZORPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: GatewayProvider = GatewayProvider.RAZORPAY
    key_id: str | None = None
    key_secret: SecretStr | None = None
    webhook_secret: SecretStr | None = None
    currency: str = Field(default="INR", min_length=3, max_length=3)
    base_url: str = "https://api.razorpay.com/v1"
    timeout: float = Field(default=10.0, gt=0)
    require_webhook_signature: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.key_id) and self.key_secret is not None and bool(self.key_secret.get_secret_value())

    def secret(self) -> str:
        return self.key_secret.get_secret_value() if self.key_secret else ""

    def webhook_secret_value(self) -> str:
        return self.webhook_secret.get_secret_value() if self.webhook_secret else ""
