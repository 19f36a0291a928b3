"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"

    # API
    rate_limit: str = "100/minute"

    # AviationStack flight lookup
    aviation_stack_url: str = "http://api.aviationstack.com/v1/flights"
    aviation_stack_key: str = ""
    aviation_stack_timeout_seconds: float = 10.0
    flight_status_filter: str = "landed,cancelled,incident"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
