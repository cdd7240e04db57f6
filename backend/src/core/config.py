"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Used only when neither AUTH_SECRET nor the D1 API token is set.
INSECURE_DEFAULT_SECRET = "bookmark-dev-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Cloudflare D1 - all three must be set for the remote backend to be used
    cloudflare_account_id: str = Field(default="", validation_alias="CLOUDFLARE_ACCOUNT_ID")
    cloudflare_d1_database_id: str = Field(
        default="", validation_alias="CLOUDFLARE_D1_DATABASE_ID",
    )
    cloudflare_d1_api_token: str = Field(
        default="", validation_alias="CLOUDFLARE_D1_API_TOKEN",
    )
    cloudflare_api_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        validation_alias="CLOUDFLARE_API_BASE_URL",
    )
    d1_timeout: float = Field(default=30.0, validation_alias="D1_TIMEOUT")

    # Session signing key
    auth_secret: str = Field(default="", validation_alias="AUTH_SECRET")

    # "production" turns on Secure cookies and forbids the default secret
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Field length limits
    max_title_length: int = Field(default=120, validation_alias="MAX_TITLE_LENGTH")
    max_description_length: int = Field(
        default=300, validation_alias="MAX_DESCRIPTION_LENGTH",
    )
    max_category_name_length: int = Field(
        default=60, validation_alias="MAX_CATEGORY_NAME_LENGTH",
    )
    max_tag_length: int = Field(default=30, validation_alias="MAX_TAG_LENGTH")
    max_tags: int = Field(default=8, validation_alias="MAX_TAGS")

    @model_validator(mode="after")
    def validate_production_secret(self) -> "Settings":
        """
        Prevent production deployments from signing sessions with the default secret.

        Anyone who knows the default can mint a session for any user id, so a
        production process must be given AUTH_SECRET (or at least a D1 token).
        """
        if self.is_production and self.session_secret == INSECURE_DEFAULT_SECRET:
            raise ValueError(
                "AUTH_SECRET must be set when ENVIRONMENT is 'production'. "
                "The built-in default secret is only for local development.",
            )
        return self

    @property
    def d1_configured(self) -> bool:
        """True when every credential needed to reach Cloudflare D1 is present."""
        return bool(
            self.cloudflare_account_id
            and self.cloudflare_d1_database_id
            and self.cloudflare_d1_api_token,
        )

    @property
    def d1_query_url(self) -> str:
        """Get the D1 HTTP query endpoint."""
        base = self.cloudflare_api_base_url.rstrip("/")
        return (
            f"{base}/accounts/{self.cloudflare_account_id}"
            f"/d1/database/{self.cloudflare_d1_database_id}/query"
        )

    @property
    def session_secret(self) -> str:
        """Key used to sign session tokens."""
        return self.auth_secret or self.cloudflare_d1_api_token or INSECURE_DEFAULT_SECRET

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
