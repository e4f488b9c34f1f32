"""Immutable description of the resources the remediation construct declares.

Building the plan touches neither the filesystem nor a construct tree, so the
wiring rules (environment, timeout, suppressions, log group binding) can be
checked without synthesizing a stack.
"""

from pathlib import Path
from typing import Any

from aws_cdk import Aws, RemovalPolicy
from aws_cdk import aws_logs as logs
from pydantic import BaseModel, ConfigDict

from .config import RemediationFunctionConfig
from .models import DeploymentProperties, StagedArtifact

LOG_GROUP_NAME_PREFIX = "/aws/lambda/"


class FunctionSpec(BaseModel):
    """Remediation Lambda function parameters."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    construct_id: str
    code_directory: Path
    runtime_name: str
    handler: str
    description: str
    timeout_minutes: int
    environment: dict[str, str]
    environment_encryption: Any = None
    role: Any


class SuppressionSpec(BaseModel):
    """A cdk-nag finding acknowledged on the execution role."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    reason: str
    apply_to_children: bool = False

    def as_nag_pack_suppression(self) -> dict[str, str]:
        return {"id": self.rule_id, "reason": self.reason}


class LogGroupSpec(BaseModel):
    """Log group bound to the function by name."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    construct_id: str
    retention: logs.RetentionDays
    encryption_key: Any
    removal_policy: RemovalPolicy = RemovalPolicy.DESTROY

    def log_group_name(self, function_name: str) -> str:
        """Lambda writes to ``/aws/lambda/<function name>``; nothing else will do."""
        return f"{LOG_GROUP_NAME_PREFIX}{function_name}"


class RemediationPlan(BaseModel):
    """Everything RemediateResourcePolicy declares, in declaration order."""

    model_config = ConfigDict(frozen=True)

    function: FunctionSpec
    suppressions: tuple[SuppressionSpec, ...]
    log_group: LogGroupSpec


ROLE_SUPPRESSIONS = (
    # AwsSolutions-IAM4: The IAM user, role, or group uses AWS managed policies
    SuppressionSpec(
        rule_id="AwsSolutions-IAM4",
        reason="AWS Custom resource provider framework-role created by cdk.",
    ),
    # AwsSolutions-IAM5: The IAM entity contains wildcard permissions
    SuppressionSpec(
        rule_id="AwsSolutions-IAM5",
        reason="Allows only specific policy.",
        apply_to_children=True,
    ),
)


def build_environment(props: DeploymentProperties) -> dict[str, str]:
    """Environment variables the remediation code requires at runtime."""
    return {
        "ACCELERATOR_PREFIX": props.accelerator_prefix,
        "AWS_PARTITION": Aws.PARTITION,
        "HOME_REGION": props.home_region,
    }


def build_remediation_plan(
    props: DeploymentProperties,
    artifact: StagedArtifact,
    config: RemediationFunctionConfig,
) -> RemediationPlan:
    """Describe the function, role suppressions and log group for ``props``.

    Args:
        props: Validated construct properties
        artifact: Staged deployment package backing the function code
        config: Fixed runtime, handler and timeout parameters

    Returns:
        RemediationPlan ready to be declared
    """
    function = FunctionSpec(
        construct_id=config.function_id,
        code_directory=artifact.directory,
        runtime_name=config.runtime_name,
        handler=config.handler,
        description=config.description,
        timeout_minutes=config.timeout_minutes,
        environment=build_environment(props),
        environment_encryption=props.kms_key_lambda,
        role=props.role,
    )
    log_group = LogGroupSpec(
        construct_id=f"{config.function_id}LogGroup",
        retention=props.log_retention,
        encryption_key=props.kms_key_cloud_watch,
    )
    return RemediationPlan(function=function, suppressions=ROLE_SUPPRESSIONS, log_group=log_group)


__all__ = [
    "FunctionSpec",
    "LOG_GROUP_NAME_PREFIX",
    "LogGroupSpec",
    "RemediationPlan",
    "ROLE_SUPPRESSIONS",
    "SuppressionSpec",
    "build_environment",
    "build_remediation_plan",
]
