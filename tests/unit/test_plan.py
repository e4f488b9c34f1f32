"""Unit tests for the remediation plan builder and its inputs."""
from pathlib import Path
from types import SimpleNamespace

import pytest
from aws_cdk import Aws, RemovalPolicy
from aws_cdk import aws_logs as logs
from pydantic import ValidationError

from resource_policy_remediation_cdk.config import RemediationFunctionConfig
from resource_policy_remediation_cdk.models import (
    RETENTION_DAYS,
    DeploymentProperties,
    StagedArtifact,
)
from resource_policy_remediation_cdk.plan import (
    ROLE_SUPPRESSIONS,
    build_environment,
    build_remediation_plan,
)

KEY = SimpleNamespace(key_arn="arn:aws:kms:us-east-1:123456789012:key/cloudwatch")
LAMBDA_KEY = SimpleNamespace(key_arn="arn:aws:kms:us-east-1:123456789012:key/lambda")
ROLE = SimpleNamespace(role_arn="arn:aws:iam::123456789012:role/Remediation")


@pytest.fixture
def props() -> DeploymentProperties:
    """Props backed by stand-in key and role references."""
    return DeploymentProperties(
        accelerator_prefix="AWSAccelerator",
        config_dir_path=Path("/config"),
        home_region="eu-west-1",
        kms_key_cloud_watch=KEY,
        kms_key_lambda=LAMBDA_KEY,
        log_retention_in_days=30,
        role=ROLE,
    )


@pytest.fixture
def artifact(tmp_path: Path) -> StagedArtifact:
    return StagedArtifact(directory=tmp_path)


class TestBuildRemediationPlan:
    """Test suite for build_remediation_plan."""

    def test_function_spec(self, props, artifact) -> None:
        """Test that the function spec carries the fixed parameters."""
        plan = build_remediation_plan(props, artifact, RemediationFunctionConfig())

        assert plan.function.construct_id == "RemediateResourcePolicyFunction"
        assert plan.function.code_directory == artifact.directory
        assert plan.function.runtime_name == "nodejs16.x"
        assert plan.function.handler == "index.handler"
        assert plan.function.timeout_minutes == 1
        assert plan.function.role is ROLE
        assert plan.function.environment_encryption is LAMBDA_KEY

    def test_environment(self, props) -> None:
        """Test the three required environment variables."""
        assert build_environment(props) == {
            "ACCELERATOR_PREFIX": "AWSAccelerator",
            "AWS_PARTITION": Aws.PARTITION,
            "HOME_REGION": "eu-west-1",
        }

    def test_log_group_spec(self, props, artifact) -> None:
        """Test log group id, retention, key and removal policy."""
        plan = build_remediation_plan(props, artifact, RemediationFunctionConfig())

        assert plan.log_group.construct_id == "RemediateResourcePolicyFunctionLogGroup"
        assert plan.log_group.retention == logs.RetentionDays.ONE_MONTH
        assert plan.log_group.encryption_key is KEY
        assert plan.log_group.removal_policy == RemovalPolicy.DESTROY

    @pytest.mark.parametrize("function_name", ["fn", "AWSAccelerator-Remediate-1A2B3C"])
    def test_log_group_name(self, props, artifact, function_name) -> None:
        """Test that the log group name is the Lambda convention."""
        plan = build_remediation_plan(props, artifact, RemediationFunctionConfig())

        assert plan.log_group.log_group_name(function_name) == f"/aws/lambda/{function_name}"

    def test_suppressions(self, props, artifact) -> None:
        """Test that IAM4 is scoped to the role and IAM5 to its children."""
        plan = build_remediation_plan(props, artifact, RemediationFunctionConfig())

        assert plan.suppressions == ROLE_SUPPRESSIONS
        flags = {s.rule_id: s.apply_to_children for s in plan.suppressions}
        assert flags == {"AwsSolutions-IAM4": False, "AwsSolutions-IAM5": True}

    def test_plan_is_immutable(self, props, artifact) -> None:
        """Test that the plan cannot be modified after it is built."""
        plan = build_remediation_plan(props, artifact, RemediationFunctionConfig())

        with pytest.raises(ValidationError):
            plan.function.handler = "other.handler"


class TestDeploymentProperties:
    """Test suite for DeploymentProperties validation."""

    def test_lambda_key_optional(self) -> None:
        """Test that the Lambda key defaults to None."""
        props = DeploymentProperties(
            accelerator_prefix="AWSAccelerator",
            config_dir_path="/config",
            home_region="us-east-1",
            kms_key_cloud_watch=KEY,
            log_retention_in_days=7,
            role=ROLE,
        )

        assert props.kms_key_lambda is None
        assert props.rbp_file_paths == ()
        assert props.log_retention == logs.RetentionDays.ONE_WEEK

    def test_unsupported_retention_rejected(self) -> None:
        """Test that retention must be a CloudWatch value."""
        with pytest.raises(ValidationError, match="log_retention_in_days"):
            DeploymentProperties(
                accelerator_prefix="AWSAccelerator",
                config_dir_path="/config",
                home_region="us-east-1",
                kms_key_cloud_watch=KEY,
                log_retention_in_days=42,
                role=ROLE,
            )

    def test_missing_role_rejected(self) -> None:
        """Test that the role is required."""
        with pytest.raises(ValidationError):
            DeploymentProperties(
                accelerator_prefix="AWSAccelerator",
                config_dir_path="/config",
                home_region="us-east-1",
                kms_key_cloud_watch=KEY,
                log_retention_in_days=7,
            )

    def test_non_role_rejected(self) -> None:
        """Test that something other than a role is rejected."""
        with pytest.raises(ValidationError):
            DeploymentProperties(
                accelerator_prefix="AWSAccelerator",
                config_dir_path="/config",
                home_region="us-east-1",
                kms_key_cloud_watch=KEY,
                log_retention_in_days=7,
                role="arn:aws:iam::123456789012:role/Remediation",
            )

    def test_empty_prefix_rejected(self) -> None:
        """Test that the resource prefix cannot be empty."""
        with pytest.raises(ValidationError):
            DeploymentProperties(
                accelerator_prefix="",
                config_dir_path="/config",
                home_region="us-east-1",
                kms_key_cloud_watch=KEY,
                log_retention_in_days=7,
                role=ROLE,
            )

    def test_policy_dicts_coerced(self) -> None:
        """Test that plain dict policy entries are accepted."""
        props = DeploymentProperties(
            accelerator_prefix="AWSAccelerator",
            config_dir_path="/config",
            home_region="us-east-1",
            kms_key_cloud_watch=KEY,
            log_retention_in_days=7,
            rbp_file_paths=[{"name": "s3", "path": "/config/s3.json", "temp_path": "/tmp/s3.json"}],
            role=ROLE,
        )

        assert props.rbp_file_paths[0].temp_path == Path("/tmp/s3.json")

    def test_retention_table_matches_cdk(self) -> None:
        """Test a couple of entries of the retention lookup."""
        assert RETENTION_DAYS[365] == logs.RetentionDays.ONE_YEAR
        assert RETENTION_DAYS[3653] == logs.RetentionDays.TEN_YEARS
