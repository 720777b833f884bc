"""
Name: Role Assignment Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the standard role workflow

Collaborators:
  - container.py: builds RoleAssignmentConfiguration and collaborators
  - crosscutting/logger.py: reads log_level / log_json

Constraints:
  - Lives in the crosscutting layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    Attributes:
        log_level: Logging level name (default: INFO)
        log_json: Emit JSON logs (default: True)
        validate_existing_roles: Look up roles the user already holds (default: True)
        allow_partial_failures: Keep going after a failing role (default: False)
        max_retry_attempts: Extra attempts for transient failures (default: 2)
        retry_delay_seconds: Linear backoff unit (default: 0.5)
        transaction_timeout_seconds: Workflow deadline (default: 300)
        special_departments: Comma-separated department codes with special coordinators
        validate_supervisors: Check supervisor existence before persisting (default: True)
        verbose_logging: Extra debug events per role (default: False)
        empty_catalog_is_success: Treat a department without roles as success (default: False)
        metrics_enabled: Record Prometheus metrics (default: True)
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Workflow behaviour
    validate_existing_roles: bool = True
    allow_partial_failures: bool = False
    validate_supervisors: bool = True
    verbose_logging: bool = False
    empty_catalog_is_success: bool = False

    # Retry/Resilience
    max_retry_attempts: int = 2
    retry_delay_seconds: float = 0.5
    transaction_timeout_seconds: float = 300.0

    # Role catalog
    special_departments: str = "SPECIAL-DEPT"

    # Observability
    metrics_enabled: bool = True

    @field_validator("max_retry_attempts")
    @classmethod
    def max_retry_attempts_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retry_attempts must be >= 0")
        return v

    @field_validator("retry_delay_seconds")
    @classmethod
    def retry_delay_must_be_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry_delay_seconds must be >= 0")
        return v

    @field_validator("transaction_timeout_seconds")
    @classmethod
    def transaction_timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("transaction_timeout_seconds must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    def get_special_departments_list(self) -> list[str]:
        """Parse comma-separated department codes into a list."""
        return [
            code.strip()
            for code in self.special_departments.split(",")
            if code.strip()
        ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
