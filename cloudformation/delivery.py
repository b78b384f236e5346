"""
Continuous deployment of the website from a GitHub repository.

A push to the configured branch reaches CodePipeline through a webhook
signed with the GitHub token; the pipeline checks the repository out and
extracts it into the website bucket.
"""

import aws_cdk as cdk
from aws_cdk import aws_codepipeline as codepipeline
from aws_cdk import aws_codepipeline_actions as codepipeline_actions
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

SOURCE_STAGE = "Source"
DEPLOY_STAGE = "Deploy"
SOURCE_ACTION = "CheckoutWebsite"
DEPLOY_ACTION = "UpdateWebsite"
SOURCE_ARTIFACT = "Website"

# CodePipeline substitutes the action's Branch configuration into the filter.
BRANCH_REF_FILTER = "refs/heads/{Branch}"


class ContinuousDeployment(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        project_name: str,
        website_bucket: s3.IBucket,
        github_user: str,
        github_repo: str,
        github_branch: str,
        github_token: cdk.CfnParameter,
    ) -> None:
        super().__init__(scope, construct_id)

        self.secret = self._create_secret(project_name, github_token)
        self.artifact_bucket = self._create_artifact_bucket(project_name)
        self.role = self._create_pipeline_role(
            project_name, self.artifact_bucket, website_bucket
        )
        self.pipeline = self._create_pipeline(
            project_name, website_bucket, github_user, github_repo, github_branch
        )
        self.webhook = self._create_webhook(project_name)

    def _create_secret(
        self, project_name: str, github_token: cdk.CfnParameter
    ) -> secretsmanager.Secret:
        return secretsmanager.Secret(
            self,
            "GitHubSecret",
            secret_name=f"{project_name}-github-secret",
            description="GitHub personal access token",
            secret_string_value=cdk.SecretValue.cfn_parameter(github_token),
        )

    def _create_artifact_bucket(self, project_name: str) -> s3.Bucket:
        return s3.Bucket(
            self,
            "ArtifactBucket",
            bucket_name=f"{project_name}-codepipeline-artifacts",
            encryption=s3.BucketEncryption.S3_MANAGED,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            enforce_ssl=True,
        )

    def _create_pipeline_role(
        self,
        project_name: str,
        artifact_bucket: s3.IBucket,
        website_bucket: s3.IBucket,
    ) -> iam.Role:
        return iam.Role(
            self,
            "PipelineRole",
            role_name=f"{project_name}-codepipeline",
            assumed_by=iam.ServicePrincipal("codepipeline.amazonaws.com"),
            inline_policies={
                "s3-access": iam.PolicyDocument(
                    statements=[
                        iam.PolicyStatement(
                            actions=["s3:*"],
                            resources=[
                                artifact_bucket.bucket_arn,
                                artifact_bucket.arn_for_objects("*"),
                            ],
                        ),
                        iam.PolicyStatement(
                            actions=["s3:PutObject"],
                            resources=[website_bucket.arn_for_objects("*")],
                        ),
                    ]
                )
            },
        )

    def _create_pipeline(
        self,
        project_name: str,
        website_bucket: s3.IBucket,
        github_user: str,
        github_repo: str,
        github_branch: str,
    ) -> codepipeline.Pipeline:
        website = codepipeline.Artifact(SOURCE_ARTIFACT)

        # The webhook below triggers the pipeline, so the action neither polls
        # nor registers a webhook of its own.
        checkout = codepipeline_actions.GitHubSourceAction(
            action_name=SOURCE_ACTION,
            owner=github_user,
            repo=github_repo,
            branch=github_branch,
            oauth_token=self.secret.secret_value,
            output=website,
            trigger=codepipeline_actions.GitHubTrigger.NONE,
            run_order=1,
        )
        update = codepipeline_actions.S3DeployAction(
            action_name=DEPLOY_ACTION,
            bucket=website_bucket,
            input=website,
            extract=True,
            run_order=1,
        )

        return codepipeline.Pipeline(
            self,
            "Pipeline",
            pipeline_name=project_name,
            pipeline_type=codepipeline.PipelineType.V1,
            artifact_bucket=self.artifact_bucket,
            role=self.role,
            cross_account_keys=False,
            stages=[
                codepipeline.StageProps(stage_name=SOURCE_STAGE, actions=[checkout]),
                codepipeline.StageProps(stage_name=DEPLOY_STAGE, actions=[update]),
            ],
        )

    def _create_webhook(self, project_name: str) -> codepipeline.CfnWebhook:
        cfn_pipeline = self.pipeline.node.default_child

        return codepipeline.CfnWebhook(
            self,
            "Webhook",
            name=f"{project_name}-codepipeline-webhook",
            authentication="GITHUB_HMAC",
            authentication_configuration=codepipeline.CfnWebhook.WebhookAuthConfigurationProperty(
                secret_token=self.secret.secret_value.unsafe_unwrap(),
            ),
            filters=[
                codepipeline.CfnWebhook.WebhookFilterRuleProperty(
                    json_path="$.ref",
                    match_equals=BRANCH_REF_FILTER,
                )
            ],
            target_pipeline=self.pipeline.pipeline_name,
            target_action=SOURCE_ACTION,
            target_pipeline_version=cdk.Token.as_number(cfn_pipeline.attr_version),
            register_with_third_party=True,
        )
