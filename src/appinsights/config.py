"""Runtime configuration for the telemetry toolkit."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from appinsights.models import SeverityLevel


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="APPINSIGHTS_", env_file=".env", extra="ignore")

    app_name: str = "appinsights-telemetry"
    log_level: str = "INFO"
    instrumentation_key: str = Field(
        default="",
        description="Instrumentation key copied into every context built by the CLI.",
    )
    default_severity: SeverityLevel = SeverityLevel.INFORMATION


settings = Settings()
