"""
Configuration module for the Health Calculator app.
Uses Pydantic BaseSettings for validation - app fails fast on malformed config.
"""
import logging

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with validation.
    Every field has a default; environment variables or a .env file override them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server Configuration
    health_calc_host: str = Field(default="0.0.0.0", description="Server host")
    health_calc_port: int = Field(default=8000, description="Server port")
    health_calc_reload: bool = Field(default=False, description="Enable hot reload")

    # Calculator Configuration
    health_calc_calculation_delay_ms: int = Field(
        default=500,
        ge=0,
        description="Simulated latency before a calculation result is shown (milliseconds)",
    )

    # Logging Configuration
    health_calc_log_level: str = Field(default="INFO", description="Root log level")
    health_calc_log_format: str = Field(default="json", description="Log format: 'json' or 'text'")

    @model_validator(mode="after")
    def validate_logging(self) -> "Settings":
        """Normalize logging options and reject unknown values at startup."""
        self.health_calc_log_level = self.health_calc_log_level.upper()
        if not isinstance(logging.getLevelName(self.health_calc_log_level), int):
            raise ValueError(f"Unknown log level: {self.health_calc_log_level}")

        self.health_calc_log_format = self.health_calc_log_format.lower()
        if self.health_calc_log_format not in ("json", "text"):
            raise ValueError(
                f"Unknown log format: {self.health_calc_log_format} (expected 'json' or 'text')"
            )
        return self

    @property
    def calculation_delay_seconds(self) -> float:
        """Get the simulated calculation latency in seconds."""
        return self.health_calc_calculation_delay_ms / 1000.0

    @property
    def json_logs(self) -> bool:
        """True when logs should be emitted as single-line JSON."""
        return self.health_calc_log_format == "json"


# Create global settings instance - fails fast if config is malformed
settings = Settings()
