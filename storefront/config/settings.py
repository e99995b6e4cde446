"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = Field(default="Storefront API")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(
        default="Product listing, shopping carts and session authentication backed by MongoDB"
    )
    debug: bool = Field(default=False)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)

    # Database settings
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    database_name: str = Field(default="storefront")

    # MongoDB connection settings
    mongodb_server_selection_timeout_ms: int = Field(default=5000)
    mongodb_connect_timeout_ms: int = Field(default=5000)
    mongodb_socket_timeout_ms: int = Field(default=30000)
    mongodb_max_pool_size: int = Field(default=10)
    mongodb_min_pool_size: int = Field(default=1)
    mongodb_retry_writes: bool = Field(default=True)
    mongodb_connect_retries: int = Field(default=3, ge=1)
    mongodb_retry_backoff_seconds: float = Field(default=1.0, ge=0)

    # Logging settings
    log_level: str = Field(default="INFO")

    # Session settings
    session_secret: Optional[str] = Field(default=None)
    session_cookie: str = Field(default="storefront_session")
    session_max_age: int = Field(default=60 * 60 * 24 * 7)
    session_https_only: bool = Field(default=False)
    login_url: str = Field(default="/login")
    login_success_url: str = Field(default="/products")

    # GitHub OAuth settings
    github_client_id: Optional[str] = Field(default=None)
    github_client_secret: Optional[str] = Field(default=None)
    github_callback_url: Optional[str] = Field(default=None)

    # CORS
    cors_origins: List[str] = Field(default=["*"])

    @property
    def github_enabled(self) -> bool:
        return bool(self.github_client_id and self.github_client_secret)


@lru_cache()
def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
