#!/usr/bin/env python3
"""
Resource Policy Remediation CDK Application

Deploys the Lambda function that SSM Automation invokes to remediate
resource-based policies flagged as non-compliant by AWS Config.

Usage:
    DEPLOY_ENVIRONMENT=PROD cdk synth

cdk.json runs this file with PYTHONPATH=src so the package imports without
an install; `pip install -e .` works as well.
"""
import os
import sys
from pathlib import Path

import aws_cdk as cdk
from cdk_nag import AwsSolutionsChecks

from resource_policy_remediation_cdk.exceptions import ConfigurationError
from resource_policy_remediation_cdk.logger import get_logger
from resource_policy_remediation_cdk.logging_config import configure_from_settings
from resource_policy_remediation_cdk.project_config import (
    load_config,
    validate_environment_config,
)
from resource_policy_remediation_cdk.stacks.remediation_stack import (
    ResourcePolicyRemediationStack,
)

configure_from_settings()
logger = get_logger("app")

app = cdk.App()

environment = os.getenv("DEPLOY_ENVIRONMENT", "PROD")
project_root = Path(__file__).parent

try:
    config = load_config(project_root / "config.yaml")
    env_config = validate_environment_config(config, environment)
except (FileNotFoundError, ConfigurationError) as e:
    print(f"\n❌ Configuration Error: {e}\n", file=sys.stderr)
    sys.exit(1)

# Policy paths in config.yaml are relative to config_dir, itself relative to the project
env_config["config_dir"] = str(project_root / env_config["config_dir"])

env = cdk.Environment(
    account=str(env_config["account"]),
    region=env_config["region"],
)

stack = ResourcePolicyRemediationStack(
    app,
    f"{env_config['accelerator_prefix']}-ResourcePolicyRemediation-{environment}",
    env=env,
    config=env_config,
)

for key, value in env_config["tags"].items():
    cdk.Tags.of(app).add(key, value)

cdk.Aspects.of(app).add(AwsSolutionsChecks(verbose=True))

logger.info("synth_started", environment=environment, stack=stack.stack_name)
app.synth()
