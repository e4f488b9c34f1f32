"""Configuration management using Pydantic.

This module provides type-safe configuration with validation.
Settings are automatically loaded from .env file without needing load_dotenv().
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file in project root (parent of src/)
_PACKAGE_DIR = Path(__file__).parent
_PROJECT_ROOT = _PACKAGE_DIR.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

# Remediation function assets live next to the construct module
DEFAULT_ARTIFACT_ROOT = _PACKAGE_DIR / "remediation"


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class RemediationFunctionConfig(BaseModel):
    """Fixed parameters of the remediation Lambda function.

    Kept together so tests can point the artifact at a temporary directory
    or swap the runtime without touching the construct.
    """

    model_config = ConfigDict(frozen=True)

    artifact_root: Path = DEFAULT_ARTIFACT_ROOT
    artifact_sub_path: str = "remediate-resource-policy/dist"
    function_id: str = "RemediateResourcePolicyFunction"
    runtime_name: str = "nodejs16.x"
    handler: str = "index.handler"
    timeout_minutes: Annotated[int, Field(gt=0, le=15)] = 1
    description: str = "Lambda function to remediate non-compliant resource based policy"

    @property
    def deployment_package_path(self) -> Path:
        """Directory packaged as the function code asset."""
        return self.artifact_root / self.artifact_sub_path


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in project root (if it exists)
    3. Default values (lowest priority)

    The .env file is located at: <project_root>/.env
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic settings
    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO

    # Application metadata
    app_name: str = "Resource Policy Remediation CDK"
    app_version: str = "0.1.0"

    # Remediation function
    remediation: RemediationFunctionConfig = Field(default_factory=RemediationFunctionConfig)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Any) -> Environment:
        """Validate and convert environment string."""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION
