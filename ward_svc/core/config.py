"""
Configuration module for the Ward Service API.
Uses Pydantic BaseSettings so a bad value fails at startup instead of mid-request.
"""
import logging
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings, read from the environment and an optional .env file.

    Clinical constants (bed capacity, fever threshold, observation window,
    accepted temperature range) live here so a deployment can adjust them
    without a code change.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Record store
    ward_svc_db_dir: str = Field(default="data", description="Record store directory")
    ward_svc_db_file: str = Field(default="ward.db", description="Record store filename")
    ward_svc_db_busy_timeout: int = Field(default=5000, ge=0, description="SQLite busy timeout in milliseconds")
    ward_svc_seed_demo_data: bool = Field(
        default=True,
        description="Seed the demonstration dataset when the patient collection is absent",
    )

    # API
    ward_svc_host: str = Field(default="0.0.0.0", description="API host")
    ward_svc_port: int = Field(default=8000, description="API port")
    ward_svc_reload: bool = Field(default=False, description="Enable hot reload")

    # Ward and clinical rules
    ward_svc_total_beds: int = Field(default=74, ge=1, description="Total bed capacity of the ward")
    ward_svc_fever_threshold: float = Field(
        default=37.5,
        description="Readings at or above this value (Celsius) count as fever",
    )
    ward_svc_fever_free_days: int = Field(
        default=3,
        ge=1,
        description="Length of the trailing fever-free window in calendar days",
    )
    ward_svc_min_temperature: float = Field(default=30.0, description="Lowest accepted reading (Celsius)")
    ward_svc_max_temperature: float = Field(default=45.0, description="Highest accepted reading (Celsius)")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="json", description="'json' or 'text'")

    @model_validator(mode="after")
    def validate_temperature_range(self) -> "Settings":
        """Reject a temperature range that cannot accept any reading."""
        if self.ward_svc_min_temperature >= self.ward_svc_max_temperature:
            raise ValueError(
                "ward_svc_min_temperature must be lower than ward_svc_max_temperature "
                f"(got {self.ward_svc_min_temperature} >= {self.ward_svc_max_temperature})"
            )
        if not self.ward_svc_min_temperature < self.ward_svc_fever_threshold <= self.ward_svc_max_temperature:
            logger.warning(
                "Fever threshold lies outside the accepted temperature range",
                extra={"fever_threshold": self.ward_svc_fever_threshold},
            )
        return self

    @property
    def database_path(self) -> str:
        """Get the full record store path."""
        return str(Path(self.ward_svc_db_dir) / self.ward_svc_db_file)

    def ensure_directories(self) -> None:
        """Ensure the record store directory exists."""
        Path(self.ward_svc_db_dir).mkdir(parents=True, exist_ok=True)


settings = Settings()

settings.ensure_directories()

# Backwards-compatible exports
DATABASE_DIR = settings.ward_svc_db_dir
DATABASE_FILE = settings.ward_svc_db_file
DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.ward_svc_db_busy_timeout

API_HOST = settings.ward_svc_host
API_PORT = settings.ward_svc_port
API_RELOAD = settings.ward_svc_reload

TOTAL_BEDS = settings.ward_svc_total_beds
FEVER_THRESHOLD = settings.ward_svc_fever_threshold
FEVER_FREE_DAYS = settings.ward_svc_fever_free_days
MIN_TEMPERATURE = settings.ward_svc_min_temperature
MAX_TEMPERATURE = settings.ward_svc_max_temperature
