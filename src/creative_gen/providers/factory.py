from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from creative_gen.config import Settings, settings as default_settings
from creative_gen.polling import PollingBudget
from creative_gen.providers.gemini_provider import GeminiConfig, GeminiProvider
from creative_gen.providers.veo_provider import VeoConfig, VeoProvider


@dataclass
class GenerationClients:
    # Either may be missing when its key is not configured.
    image: GeminiProvider | None = None
    video: VeoProvider | None = None


def gemini_config_from(s: Settings) -> GeminiConfig:
    return GeminiConfig(
        api_key=s.gemini_api_key or "",
        model=s.gemini_image_model,
        max_retries=s.max_retries,
        retry_delay=s.retry_delay_seconds,
        reference_fetch_timeout=s.reference_fetch_timeout_seconds,
        polling=PollingBudget(s.image_poll_interval_seconds, s.image_poll_max_attempts),
    )


def veo_config_from(s: Settings) -> VeoConfig:
    return VeoConfig(
        api_key=s.veo_api_key or "",
        api_url=s.veo_api_url or "",
        model_version=s.veo_model_version,
        max_retries=s.max_retries,
        retry_delay=s.retry_delay_seconds,
        timeout=s.veo_timeout_seconds,
        polling=PollingBudget(s.video_poll_interval_seconds, s.video_poll_max_attempts),
    )


def build_clients(s: Settings | None = None) -> GenerationClients:
    """Construct a fresh pair of clients from settings."""
    s = s or default_settings
    clients = GenerationClients()
    if s.gemini_api_key:
        clients.image = GeminiProvider(gemini_config_from(s))
    if s.veo_api_key and s.veo_api_url:
        clients.video = VeoProvider(veo_config_from(s))
    return clients


@lru_cache(maxsize=1)
def get_clients() -> GenerationClients:
    """Process-wide clients, built on first use."""
    return build_clients()


def reset_clients() -> None:
    get_clients.cache_clear()
