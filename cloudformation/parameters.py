"""
Deploy-time parameters of the website template.

Parameter names, types and defaults form the template's public interface;
the logical ids below are what `cdk deploy --parameters` and the
CloudFormation console expect.
"""

from dataclasses import dataclass

import aws_cdk as cdk
from constructs import Construct

from cloudformation.settings import DOCUMENT_PATTERN, PROJECT_NAME_PATTERN, Settings

DOMAIN_NAME_PARAMETER_PATTERN = r"^[a-z0-9][a-z0-9.-]*\.[a-z0-9-]+$"


@dataclass(frozen=True)
class WebsiteParameters:
    github_repo: cdk.CfnParameter
    github_user: cdk.CfnParameter
    github_token: cdk.CfnParameter
    github_branch: cdk.CfnParameter
    project_name: cdk.CfnParameter
    domain_name: cdk.CfnParameter
    certificate_arn: cdk.CfnParameter
    hosted_zone_id: cdk.CfnParameter
    index_document: cdk.CfnParameter
    error_document: cdk.CfnParameter

    @classmethod
    def declare(cls, scope: Construct, settings: Settings) -> "WebsiteParameters":
        """Add the parameters to ``scope``, taking defaults from ``settings``."""
        return cls(
            github_repo=cdk.CfnParameter(
                scope,
                "GitHubRepo",
                type="String",
                description="GitHub repository holding the files for the static website",
            ),
            github_user=cdk.CfnParameter(
                scope,
                "GitHubUser",
                type="String",
                description="GitHub user",
            ),
            # NoEcho is required to feed a parameter into a secret.
            github_token=cdk.CfnParameter(
                scope,
                "GitHubPersonalAccessToken",
                type="String",
                description="GitHub personal access token",
                no_echo=True,
            ),
            github_branch=cdk.CfnParameter(
                scope,
                "GitHubBranch",
                type="String",
                description="Branch deployed to the website",
                default=settings.source_branch,
            ),
            project_name=cdk.CfnParameter(
                scope,
                "ProjectName",
                type="String",
                description="Project name",
                default=settings.project_name,
                allowed_pattern=PROJECT_NAME_PATTERN,
                constraint_description="lowercase letters, digits and hyphens",
            ),
            domain_name=cdk.CfnParameter(
                scope,
                "DomainName",
                type="String",
                description="Domain name to be created in Route 53",
                default=settings.domain_name,
                allowed_pattern=DOMAIN_NAME_PARAMETER_PATTERN,
                constraint_description="a lowercase fully qualified domain name",
            ),
            certificate_arn=cdk.CfnParameter(
                scope,
                "CertificateArn",
                type="String",
                description="The ARN of the certificate stored in Certificate Manager",
            ),
            hosted_zone_id=cdk.CfnParameter(
                scope,
                "HostedZoneId",
                type="String",
                description="The ID of the hosted zone in Route 53",
            ),
            index_document=cdk.CfnParameter(
                scope,
                "IndexDocument",
                type="String",
                description="Root object of the website",
                default=settings.index_document,
                allowed_pattern=DOCUMENT_PATTERN,
            ),
            error_document=cdk.CfnParameter(
                scope,
                "ErrorDocument",
                type="String",
                description="Error object of the website",
                default=settings.error_document,
                allowed_pattern=DOCUMENT_PATTERN,
            ),
        )

    def defaults(self) -> dict:
        """Parameter defaults by logical id, for logging. The token has none."""
        return {
            parameter.node.id: parameter.default
            for parameter in (
                self.github_branch,
                self.project_name,
                self.domain_name,
                self.index_document,
                self.error_document,
            )
        }
