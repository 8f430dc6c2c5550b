from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from square_payments.schemas.options import SquareEnvironmentName, SquarePluginOptions


class SquareSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SQUARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    access_token: Optional[str] = Field(default=None, description="Square API access token")
    environment: str = Field(default="sandbox", description="'sandbox' or 'production'")
    location_id: Optional[str] = Field(default=None, description="Square location that processes payments")
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    @model_validator(mode="before")
    @classmethod
    def normalize_credentials(cls, data: dict) -> dict:
        """
        Normalize raw environment values.

        Strips whitespace picked up from .env files and lower-cases the
        environment name before it is checked against the allowed values.
        """
        if not isinstance(data, dict):
            return data
        data = data.copy()

        for key in ("access_token", "location_id"):
            value = data.get(key)
            if isinstance(value, str):
                data[key] = value.strip() or None

        environment = data.get("environment")
        if isinstance(environment, str):
            environment = environment.strip().lower()
            allowed = {"sandbox", "production"}
            if environment not in allowed:
                raise ValueError(f"environment must be one of {sorted(allowed)}, got '{environment}'")
            data["environment"] = environment

        return data

    @property
    def is_configured(self) -> bool:
        return bool(self.access_token and self.location_id)

    def to_options(self) -> SquarePluginOptions:
        """
        Build plugin options from the loaded settings.

        Raises:
            ValueError: If the access token or location id is missing
        """
        missing = [
            name.upper()
            for name in ("access_token", "location_id")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(
                "Square settings incomplete, missing: "
                + ", ".join(f"SQUARE_{name}" for name in missing)
            )

        environment: SquareEnvironmentName = "production" if self.environment == "production" else "sandbox"
        return SquarePluginOptions(
            access_token=self.access_token,
            environment=environment,
            location_id=self.location_id,
        )


@lru_cache(maxsize=None)
def get_settings() -> SquareSettings:
    """
    Get cached settings instance.

    The environment is parsed once per process; call clear_settings_cache()
    to pick up changed variables.
    """
    return SquareSettings()


def clear_settings_cache() -> None:
    """Clear the cached settings instance."""
    get_settings.cache_clear()
