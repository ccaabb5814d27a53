"""
Application configuration

Environment variables (and an optional .env file) are read here and nowhere
else. Carrier classes receive explicit configuration objects such as
UPSCredentials; build those from Settings at the process boundary.
"""
import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_UPS_AUTH_URL = "https://onboarding.ups.com/security/v1/oauth/token"
DEFAULT_UPS_RATING_URL = "https://onlinetools.ups.com/api/rating/v2409/Shop"


@dataclass(frozen=True)
class UPSCredentials:
    """
    UPS API configuration passed explicitly to the token manager and carrier.

    client_id and client_secret may be left empty; the token manager raises
    AuthenticationError when it first needs them.
    """
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    auth_url: str = DEFAULT_UPS_AUTH_URL
    rating_url: str = DEFAULT_UPS_RATING_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # UPS OAuth client credentials
    UPS_CLIENT_ID: str = ""
    UPS_CLIENT_SECRET: str = ""
    UPS_AUTH_URL: str = DEFAULT_UPS_AUTH_URL
    UPS_RATING_URL: str = DEFAULT_UPS_RATING_URL

    HTTP_TIMEOUT_SECONDS: float = 30.0
    LOG_LEVEL: str = "INFO"

    # Carriers the factory is allowed to build; JSON array or comma-separated
    ENABLED_CARRIERS: Annotated[List[str], NoDecode] = ["ups"]

    @field_validator("ENABLED_CARRIERS", mode="before")
    @classmethod
    def parse_enabled_carriers(cls, v):
        if isinstance(v, list):
            return [str(code).strip().lower() for code in v if str(code).strip()]
        if isinstance(v, str):
            if not v.strip():
                return []
            if v.strip().startswith("["):
                try:
                    return [str(code).strip().lower() for code in json.loads(v)]
                except json.JSONDecodeError:
                    pass
            return [code.strip().lower() for code in v.split(",") if code.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def is_carrier_enabled(self, carrier_id: str) -> bool:
        return carrier_id.lower() in self.ENABLED_CARRIERS

    def ups_credentials(self) -> UPSCredentials:
        """Build explicit UPS configuration; empty strings become None."""
        return UPSCredentials(
            client_id=self.UPS_CLIENT_ID or None,
            client_secret=self.UPS_CLIENT_SECRET or None,
            auth_url=self.UPS_AUTH_URL or DEFAULT_UPS_AUTH_URL,
            rating_url=self.UPS_RATING_URL or DEFAULT_UPS_RATING_URL,
        )


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
