"""Remediate resource policy.

Creates a Lambda function, triggered by SSM Automation, that remediates any
non-compliant resource-based policy detected by an AWS Config rule.
"""
from aws_cdk import Duration
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_logs as logs
from cdk_nag import NagSuppressions
from constructs import Construct

from ..config import RemediationFunctionConfig
from ..logger import get_logger
from ..models import DeploymentProperties
from ..plan import RemediationPlan, build_remediation_plan
from ..settings import get_settings
from ..staging import copy_policies_to_deployment_package

logger = get_logger(__name__)


class RemediateResourcePolicy(Construct):
    """Remediation Lambda function with its log group and cdk-nag suppressions."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        props: DeploymentProperties,
        config: RemediationFunctionConfig | None = None,
    ) -> None:
        """Initialize the remediation construct.

        Args:
            scope: Parent construct
            construct_id: Unique identifier for this construct
            props: Validated construct properties
            config: Fixed function parameters (settings apply when omitted)

        Raises:
            StagingError: If a policy file cannot be staged
        """
        super().__init__(scope, construct_id)

        self.config = config or get_settings().remediation

        artifact = copy_policies_to_deployment_package(
            props.rbp_file_paths, self.config.deployment_package_path
        )
        self.plan = build_remediation_plan(props, artifact, self.config)

        self.lambda_function = self._create_function(self.plan)
        self._add_role_suppressions(self.plan)
        self.log_group = self._create_log_group(self.plan)

        logger.info(
            "remediation_function_declared",
            construct_path=self.node.path,
            function_id=self.lambda_function.node.id,
            policies=len(artifact.policy_files),
        )

    def _create_function(self, plan: RemediationPlan) -> lambda_.Function:
        """Declare the remediation function from the staged artifact."""
        spec = plan.function
        return lambda_.Function(
            self,
            spec.construct_id,
            code=lambda_.Code.from_asset(str(spec.code_directory)),
            runtime=lambda_.Runtime(spec.runtime_name, lambda_.RuntimeFamily.NODEJS),
            handler=spec.handler,
            description=spec.description,
            timeout=Duration.minutes(spec.timeout_minutes),
            environment=dict(spec.environment),
            environment_encryption=spec.environment_encryption,
            role=spec.role,
        )

    def _add_role_suppressions(self, plan: RemediationPlan) -> None:
        """Record the acknowledged cdk-nag findings against the execution role."""
        for suppression in plan.suppressions:
            NagSuppressions.add_resource_suppressions(
                self.lambda_function.role,
                [suppression.as_nag_pack_suppression()],
                apply_to_children=suppression.apply_to_children,
            )

    def _create_log_group(self, plan: RemediationPlan) -> logs.LogGroup:
        """Declare the function's log group, named after the function."""
        spec = plan.log_group
        return logs.LogGroup(
            self,
            spec.construct_id,
            log_group_name=spec.log_group_name(self.lambda_function.function_name),
            retention=spec.retention,
            encryption_key=spec.encryption_key,
            removal_policy=spec.removal_policy,
        )
