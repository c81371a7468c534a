import random
from functools import lru_cache

from app.packages.backend_proxy import BackendConfig
from app.packages.rate_fallback import RateFallbackGenerator
from app.settings import settings


@lru_cache
def backend_config_factory() -> BackendConfig:
    """Backend configuration, built once per process.

    The base URL is normalized here, so every route shares the same rule.
    """
    return BackendConfig(
        base_url=settings.GOLD_API_BASE_URL,
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
        user_agent=settings.BACKEND_USER_AGENT,
    )


def rate_fallback_factory() -> RateFallbackGenerator:
    """Fresh generator per request so no random state is shared across requests."""
    return RateFallbackGenerator(rng=random.Random(settings.FALLBACK_SEED))
