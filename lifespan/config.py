"""
Configuration Management for the Life Expectancy Predictor

Environment-based configuration using Pydantic Settings.
"""
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LIFESPAN_",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = "Life Expectancy Predictor"
    app_version: str = "1.0.0"
    log_level: str = Field(default="INFO", description="Logging level for entry points")

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    streamlit_port: int = 8501

    # WHO Global Health Observatory
    who_api_base_url: str = "https://ghoapi.azureedge.net/api"
    who_api_timeout: float = Field(default=10.0, description="Seconds before a WHO request is abandoned")

    # Analysis
    unify_country_fallback: bool = Field(
        default=False,
        description="Compare unsupported countries against the default country instead of omitting the comparison"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
