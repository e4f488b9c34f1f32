"""Shared pytest fixtures for Resource Policy Remediation CDK."""

import json
from pathlib import Path
from typing import Any, Callable

import aws_cdk as cdk
import pytest
from aws_cdk import aws_iam as iam
from aws_cdk import aws_kms as kms

from resource_policy_remediation_cdk.config import RemediationFunctionConfig
from resource_policy_remediation_cdk.models import DeploymentProperties, PolicyFile

TEST_ENV = cdk.Environment(account="123456789012", region="us-east-1")


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables and settings cache for each test."""
    from resource_policy_remediation_cdk.settings import get_settings

    get_settings.cache_clear()
    for name in ("ENVIRONMENT", "LOG_LEVEL", "APP_NAME"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Configuration directory holding two rendered policies."""
    directory = tmp_path / "config"
    rendered = directory / "rendered"
    rendered.mkdir(parents=True)
    for name in ("s3", "kms"):
        policy = {"Version": "2012-10-17", "Statement": [{"Sid": f"{name}-only-org"}]}
        (directory / f"{name}.json").write_text(json.dumps(policy))
        (rendered / f"{name}.json").write_text(json.dumps(policy))
    return directory


@pytest.fixture
def policy_files(config_dir: Path) -> list[PolicyFile]:
    """Descriptors for the policies in config_dir."""
    return [
        PolicyFile(
            name=name,
            path=config_dir / f"{name}.json",
            temp_path=config_dir / "rendered" / f"{name}.json",
        )
        for name in ("s3", "kms")
    ]


@pytest.fixture
def function_config(tmp_path: Path) -> RemediationFunctionConfig:
    """Function config whose deployment package lives in a temp directory."""
    return RemediationFunctionConfig(artifact_root=tmp_path / "artifact")


@pytest.fixture
def stack() -> cdk.Stack:
    """Empty stack to host the construct under test."""
    app = cdk.App()
    return cdk.Stack(app, "TestRemediationStack", env=TEST_ENV)


@pytest.fixture
def role(stack: cdk.Stack) -> iam.Role:
    """Execution role supplied by the caller."""
    return iam.Role(
        stack,
        "RemediationRole",
        assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
    )


@pytest.fixture
def cloudwatch_key(stack: cdk.Stack) -> kms.Key:
    """Log group encryption key."""
    return kms.Key(stack, "CloudWatchKey")


@pytest.fixture
def make_props(
    config_dir: Path,
    policy_files: list[PolicyFile],
    role: iam.Role,
    cloudwatch_key: kms.Key,
) -> Callable[..., DeploymentProperties]:
    """Build DeploymentProperties with overridable fields."""

    def _make(**overrides: Any) -> DeploymentProperties:
        values: dict[str, Any] = {
            "accelerator_prefix": "AWSAccelerator",
            "config_dir_path": config_dir,
            "home_region": "us-east-1",
            "kms_key_cloud_watch": cloudwatch_key,
            "log_retention_in_days": 365,
            "rbp_file_paths": policy_files,
            "role": role,
        }
        values.update(overrides)
        return DeploymentProperties(**values)

    return _make
