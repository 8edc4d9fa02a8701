"""
Configuration settings for the Coordinates Suite application.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Attributes:
        detection_sample_size: Number of numeric lines inspected to detect a block's format
        default_zone: UTM zone used for UTM input when the caller gives none
        default_hemisphere: Hemisphere used for UTM input when the caller gives none
        export_delimiter: Column delimiter for CSV export
        coordinate_precision: Decimals written for degrees
        metric_precision: Decimals written for meters
        kml_document_name: Document name for KML export
        log_file: Rotating log file for the API (JSON lines in production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="COORDSUITE_",
    )

    # Conversion settings
    detection_sample_size: int = Field(default=5, ge=1)
    default_zone: int = Field(default=30, ge=1, le=60)
    default_hemisphere: Literal["N", "S"] = "N"

    # Export settings
    export_delimiter: str = "\t"
    coordinate_precision: int = Field(default=6, ge=0, le=12)
    metric_precision: int = Field(default=2, ge=0, le=6)
    kml_document_name: str = "Coordinates"

    # Logging
    log_level: Optional[str] = None
    log_file: Optional[Path] = None

    # API settings
    api_v1_prefix: str = "/api/v1"
    port: int = 8000

    # CORS settings
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    @field_validator("default_hemisphere", mode="before")
    @classmethod
    def normalize_hemisphere(cls, value: object) -> object:
        """Accept 'north'/'south' and lowercase letters."""
        if isinstance(value, str):
            token = value.strip().lower()
            if token in ("n", "north"):
                return "N"
            if token in ("s", "south"):
                return "S"
        return value

    @field_validator("export_delimiter")
    @classmethod
    def check_delimiter(cls, value: str) -> str:
        """CSV delimiters are a single character."""
        if len(value) != 1:
            raise ValueError("export_delimiter must be a single character")
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
