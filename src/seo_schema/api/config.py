"""
Configuration management for the structured-data service.
"""

import os
from typing import List, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from seo_schema.core.schema_validator import DEFAULT_MAX_GRAPH_DEPTH

_DEFAULT_CORS_ORIGIN = "http://localhost:5173"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from .env
    )

    @classmethod
    def settings_customise_sources(cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings):
        # Allow tests to disable reading .env to avoid polluting constructor kwargs
        if os.getenv("PYTEST_DISABLE_DOTENV") == "1":
            return (init_settings, env_settings, file_secret_settings)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    # Application
    app_name: str = "SEO Schema API"
    app_version: str = "1.0.0"
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True)

    # Validation engine
    max_graph_depth: int = Field(
        default=DEFAULT_MAX_GRAPH_DEPTH,
        description="Maximum @graph-within-@graph nesting before a graph_depth_exceeded error is reported.",
    )
    report_unknown_types: bool = Field(
        default=False,
        description="Emit an unknown_type warning for @type values without registered rules.",
    )
    max_batch_size: int = Field(default=50)

    # CORS - accept string or list, will be converted to list
    cors_origins: Union[str, List[str]] = Field(default=_DEFAULT_CORS_ORIGIN)

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return (v or "development").strip().lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got '{v}'")
        return level

    @field_validator("max_graph_depth")
    @classmethod
    def validate_max_graph_depth(cls, v: int) -> int:
        if not 1 <= v <= 256:
            raise ValueError(f"MAX_GRAPH_DEPTH must be between 1 and 256, got {v}")
        return v

    @field_validator("max_batch_size")
    @classmethod
    def validate_max_batch_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"MAX_BATCH_SIZE must be at least 1, got {v}")
        return v

    @model_validator(mode="after")
    def parse_cors_origins(self):
        """Parse comma-separated CORS origins string into a list."""
        if isinstance(self.cors_origins, str):
            if "," in self.cors_origins:
                self.cors_origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
            else:
                self.cors_origins = [self.cors_origins.strip()] if self.cors_origins.strip() else [_DEFAULT_CORS_ORIGIN]
        elif isinstance(self.cors_origins, list):
            if not self.cors_origins:
                self.cors_origins = [_DEFAULT_CORS_ORIGIN]
        else:
            self.cors_origins = [_DEFAULT_CORS_ORIGIN]
        return self

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the shared settings instance."""
    return settings
