"""Configuration settings loaded from environment variables."""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from venue_booking.services.pricing import PricingPolicy, RoomPricingMode, ServiceFees


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage: "local" (SQL key-value store) or "remote" (Redis with local fallback)
    storage_backend: str = "local"

    # Local durable store
    database_url: str = "sqlite+aiosqlite:///./venue_reservations.db"

    # Remote document store
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "venue"

    # Give the remote backend time to initialize before the first read
    startup_delay_seconds: float = 0.1

    # Pricing policy
    room_pricing_mode: RoomPricingMode = RoomPricingMode.COMPLIMENTARY
    food_state_tax_rate: Decimal = Decimal("0.06")
    food_city_tax_rate: Decimal = Decimal("0.01")
    alcohol_tax_rate: Decimal = Decimal("0.105")
    default_deposit_percentage: Decimal = Decimal("20")

    # Flat fees for additional services
    fee_audio_visual: Decimal = Decimal("0")
    fee_decorations: Decimal = Decimal("150")
    fee_waitstaff: Decimal = Decimal("100")
    fee_valet: Decimal = Decimal("50")

    # Logging
    log_level: str = "INFO"

    # Application
    app_name: str = "venue-booking"
    environment: str = "development"

    @property
    def uses_remote_store(self) -> bool:
        """Check if the remote document store is enabled."""
        return self.storage_backend.strip().lower() == "remote"

    def pricing_policy(self) -> PricingPolicy:
        """Build the pricing policy from configured rates and fees."""
        return PricingPolicy(
            room_pricing_mode=self.room_pricing_mode,
            food_state_tax_rate=self.food_state_tax_rate,
            food_city_tax_rate=self.food_city_tax_rate,
            alcohol_tax_rate=self.alcohol_tax_rate,
            default_deposit_percentage=self.default_deposit_percentage,
            service_fees=ServiceFees(
                audio_visual=self.fee_audio_visual,
                decorations=self.fee_decorations,
                waitstaff=self.fee_waitstaff,
                valet=self.fee_valet,
            ),
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    return Settings()
