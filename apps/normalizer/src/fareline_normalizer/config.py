"""Normalizer configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class NormalizerSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FARELINE_", env_file=".env", extra="ignore"
    )

    # Currency assumed when the price summary omits one
    default_currency: str = "BDT"

    # Placeholder for missing baggage routes and allowances
    not_available: str = "N/A"

    # Cabin word used in synthetic two-oneway fare labels
    fare_label_cabin: str = "Economy"

    # Passenger scope of a penalty rule without text info
    default_penalty_pax_type: str = "All"


settings = NormalizerSettings()
