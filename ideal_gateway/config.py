"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # iDEAL API
    ideal_api_base: str = "https://secure.mollie.nl/xml/ideal"
    ideal_partner_id: Optional[int] = None
    ideal_profile_key: str = ""
    ideal_testmode: bool = False

    # Service
    service_name: str = "ideal-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    trace_response_bodies: bool = False  # Log raw XML bodies at DEBUG


settings = Settings()
