from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Loads keys from process env, and also from a local .env file for convenience.
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8")

    data_dir: str = "data"

    # Keys
    gemini_api_key: str | None = None
    veo_api_key: str | None = None
    veo_api_url: str | None = None

    # Models
    gemini_image_model: str = "gemini-3-pro-image-preview"
    veo_model_version: str = "veo-3.1"

    # Transport
    max_retries: int = 3
    retry_delay_seconds: float = 1.0
    veo_timeout_seconds: float = 120.0  # videos take longer than images
    reference_fetch_timeout_seconds: float = 30.0

    # Polling budgets
    image_poll_interval_seconds: float = 2.0
    image_poll_max_attempts: int = 30
    video_poll_interval_seconds: float = 5.0
    video_poll_max_attempts: int = 120

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
    )
