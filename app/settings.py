from pydantic import model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from app.utils.settings_utils import DockerSecretsSettingsSource


class GeneralConfig(BaseSettings):
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = ""


class UpstreamConfig(BaseSettings):
    GOLD_API_BASE_URL: str = "http://localhost:8080"
    """Base URL of the upstream REST backend. Trailing slashes are ignored."""

    BACKEND_TIMEOUT_SECONDS: float = 10.0
    HEALTH_TIMEOUT_SECONDS: float = 5.0
    BACKEND_USER_AGENT: str = "KnowAllRates-Frontend/1.0"

    @model_validator(mode="after")
    def validate_upstream(self):
        if not self.GOLD_API_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(
                "GOLD_API_BASE_URL must start with http:// or https://, "
                f"got {self.GOLD_API_BASE_URL!r}"
            )
        if self.BACKEND_TIMEOUT_SECONDS <= 0 or self.HEALTH_TIMEOUT_SECONDS <= 0:
            raise ValueError("Backend timeouts must be positive")
        return self


class UploadsConfig(BaseSettings):
    UPLOADS_DIR: str = "public/uploads/products"
    """Local directory used when the backend cannot serve a product image"""

    PLACEHOLDER_IMAGE_PATH: str = "/placeholder.svg?height=300&width=300"
    IMAGE_CACHE_CONTROL: str = "public, max-age=31536000, immutable"


class FallbackConfig(BaseSettings):
    FALLBACK_SEED: int | None = None
    """Seed for synthetic rate data. Leave unset outside of tests."""


class Settings(
    GeneralConfig,
    UpstreamConfig,
    UploadsConfig,
    FallbackConfig,
    BaseSettings,
):
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.prod", ".env.test"),
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Define the priority order for settings sources.

        Priority (highest to lowest):
        1. Docker secrets from files (reads *_FILE env vars)
        2. Environment variables
        3. .env files
        4. Default values
        """
        return (
            init_settings,
            DockerSecretsSettingsSource(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )


settings = Settings()
