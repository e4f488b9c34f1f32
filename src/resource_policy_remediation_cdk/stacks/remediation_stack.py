"""Resource Policy Remediation Stack.

Wires encryption keys and the execution role around the
RemediateResourcePolicy construct.
"""
from pathlib import Path

from aws_cdk import Aws, CfnOutput, RemovalPolicy, Stack
from aws_cdk import aws_iam as iam
from aws_cdk import aws_kms as kms
from constructs import Construct

from ..config import RemediationFunctionConfig
from ..models import DeploymentProperties, PolicyFile
from ..remediation.remediate_resource_policy import RemediateResourcePolicy


class ResourcePolicyRemediationStack(Stack):
    """Remediation function for non-compliant resource-based policies."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: dict,
        function_config: RemediationFunctionConfig | None = None,
        **kwargs,
    ) -> None:
        """Initialize Resource Policy Remediation Stack.

        Args:
            scope: CDK app
            construct_id: Unique identifier for this stack
            config: Environment configuration dict from config.yaml
            function_config: Overrides for the remediation function parameters
            **kwargs: Additional stack properties
        """
        super().__init__(scope, construct_id, **kwargs)

        prefix = config["accelerator_prefix"]
        config_dir = Path(config["config_dir"])
        lambda_config = config.get("lambda") or {}

        # ========================================
        # Encryption keys
        # ========================================

        self.cloudwatch_key = kms.Key(
            self,
            "CloudWatchKey",
            alias=f"alias/{prefix.lower()}/kms/cloudwatch/key",
            description="Key used to encrypt remediation function log groups",
            enable_key_rotation=True,
            removal_policy=RemovalPolicy.RETAIN,
        )
        # CloudWatch Logs needs the key to encrypt the log group
        self.cloudwatch_key.grant_encrypt_decrypt(
            iam.ServicePrincipal(f"logs.{Aws.REGION}.amazonaws.com")
        )

        self.lambda_key = None
        if lambda_config.get("encrypt_environment", False):
            self.lambda_key = kms.Key(
                self,
                "LambdaKey",
                alias=f"alias/{prefix.lower()}/kms/lambda/key",
                description="Key used to encrypt remediation function environment variables",
                enable_key_rotation=True,
                removal_policy=RemovalPolicy.RETAIN,
            )

        # ========================================
        # Execution role
        # ========================================

        self.remediation_role = iam.Role(
            self,
            "RemediateResourcePolicyRole",
            role_name=f"{prefix}-RemediateResourcePolicyRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            description="Execution role for the resource policy remediation function",
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole"
                )
            ],
        )

        # ========================================
        # Remediation function
        # ========================================

        policies = [
            PolicyFile(
                name=policy["name"],
                path=config_dir / policy["path"],
                temp_path=config_dir / policy.get("temp_path", policy["path"]),
            )
            for policy in config.get("policies") or []
        ]

        props = DeploymentProperties(
            accelerator_prefix=prefix,
            config_dir_path=config_dir,
            home_region=config["home_region"],
            kms_key_cloud_watch=self.cloudwatch_key,
            kms_key_lambda=self.lambda_key,
            log_retention_in_days=config["log_retention_days"],
            rbp_file_paths=policies,
            role=self.remediation_role,
        )
        self.remediation = RemediateResourcePolicy(
            self,
            "RemediateResourcePolicy",
            props=props,
            config=function_config,
        )

        # ========================================
        # Outputs
        # ========================================

        CfnOutput(
            self,
            "RemediationFunctionName",
            value=self.remediation.lambda_function.function_name,
            description="Resource policy remediation Lambda function name",
        )

        CfnOutput(
            self,
            "RemediationFunctionArn",
            value=self.remediation.lambda_function.function_arn,
            description="Resource policy remediation Lambda function ARN",
        )
