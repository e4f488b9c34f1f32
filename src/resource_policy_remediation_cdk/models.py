"""Typed inputs and results for the remediation construct."""

from pathlib import Path
from typing import Annotated, Any

from aws_cdk import aws_logs as logs
from pydantic import BaseModel, ConfigDict, Field, field_validator

# CloudWatch only accepts these retention periods
RETENTION_DAYS: dict[int, logs.RetentionDays] = {
    1: logs.RetentionDays.ONE_DAY,
    3: logs.RetentionDays.THREE_DAYS,
    5: logs.RetentionDays.FIVE_DAYS,
    7: logs.RetentionDays.ONE_WEEK,
    14: logs.RetentionDays.TWO_WEEKS,
    30: logs.RetentionDays.ONE_MONTH,
    60: logs.RetentionDays.TWO_MONTHS,
    90: logs.RetentionDays.THREE_MONTHS,
    120: logs.RetentionDays.FOUR_MONTHS,
    150: logs.RetentionDays.FIVE_MONTHS,
    180: logs.RetentionDays.SIX_MONTHS,
    365: logs.RetentionDays.ONE_YEAR,
    400: logs.RetentionDays.THIRTEEN_MONTHS,
    545: logs.RetentionDays.EIGHTEEN_MONTHS,
    731: logs.RetentionDays.TWO_YEARS,
    1096: logs.RetentionDays.THREE_YEARS,
    1827: logs.RetentionDays.FIVE_YEARS,
    2192: logs.RetentionDays.SIX_YEARS,
    2557: logs.RetentionDays.SEVEN_YEARS,
    2922: logs.RetentionDays.EIGHT_YEARS,
    3288: logs.RetentionDays.NINE_YEARS,
    3653: logs.RetentionDays.TEN_YEARS,
}


class PolicyFile(BaseModel):
    """A resource-based policy document to ship with the remediation function.

    ``path`` is the policy as authored in the configuration directory and
    ``temp_path`` is the rendered copy (placeholders already replaced) that
    gets staged into the deployment package.
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(min_length=1)]
    path: Path
    temp_path: Path


class DeploymentProperties(BaseModel):
    """Properties of the RemediateResourcePolicy construct."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    accelerator_prefix: Annotated[str, Field(min_length=1)]
    config_dir_path: Path
    home_region: Annotated[str, Field(min_length=1)]
    # Lambda log group encryption key
    kms_key_cloud_watch: Any
    # When omitted the AWS managed key encrypts the function environment
    kms_key_lambda: Any = None
    log_retention_in_days: int
    rbp_file_paths: tuple[PolicyFile, ...] = ()
    role: Any

    @field_validator("kms_key_cloud_watch")
    @classmethod
    def validate_cloud_watch_key(cls, v: Any) -> Any:
        """Require a KMS key reference for the log group."""
        if not hasattr(v, "key_arn"):
            raise ValueError("kms_key_cloud_watch must be a KMS key (aws_kms.IKey)")
        return v

    @field_validator("kms_key_lambda")
    @classmethod
    def validate_lambda_key(cls, v: Any) -> Any:
        """Allow None, otherwise require a KMS key reference."""
        if v is not None and not hasattr(v, "key_arn"):
            raise ValueError("kms_key_lambda must be a KMS key (aws_kms.IKey) or None")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: Any) -> Any:
        """Require an IAM role reference; the construct never creates one."""
        if not hasattr(v, "role_arn"):
            raise ValueError("role must be an IAM role (aws_iam.IRole)")
        return v

    @field_validator("log_retention_in_days")
    @classmethod
    def validate_retention(cls, v: int) -> int:
        """Only CloudWatch-supported retention periods are accepted."""
        if v not in RETENTION_DAYS:
            supported = ", ".join(str(days) for days in RETENTION_DAYS)
            raise ValueError(f"log_retention_in_days must be one of: {supported}")
        return v

    @property
    def log_retention(self) -> logs.RetentionDays:
        """Retention as the CDK enum."""
        return RETENTION_DAYS[self.log_retention_in_days]


class StagedArtifact(BaseModel):
    """Deployment package directory whose policies have been staged.

    Only a StagedArtifact may back the function code asset, so the asset can
    never be taken from a directory that staging has not finished with.
    """

    model_config = ConfigDict(frozen=True)

    directory: Path
    policy_files: tuple[Path, ...] = ()
