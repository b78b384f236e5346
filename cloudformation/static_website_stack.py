import aws_cdk as cdk
from constructs import Construct

from cloudformation.delivery import ContinuousDeployment
from cloudformation.hosting import StaticWebsiteHosting
from cloudformation.logs import get_logger
from cloudformation.parameters import WebsiteParameters
from cloudformation.settings import Settings

logger = get_logger(__name__)

DESCRIPTION = (
    "Static website hosted on Amazon S3 and CloudFront under a Route 53 domain, "
    "deployed continuously from a GitHub repository by CodePipeline"
)


class StaticWebsitePipelineStack(cdk.Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        settings: Settings,
        **kwargs,
    ) -> None:
        kwargs.setdefault("description", DESCRIPTION)
        super().__init__(scope, construct_id, **kwargs)

        self.parameters = WebsiteParameters.declare(self, settings)
        logger.info(
            "Declared parameters for %s with defaults %s",
            construct_id,
            self.parameters.defaults(),
        )

        self.hosting = self._create_hosting(self.parameters)
        self.delivery = self._create_delivery(self.parameters, self.hosting)
        self._add_outputs()

    def _create_hosting(self, parameters: WebsiteParameters) -> StaticWebsiteHosting:
        return StaticWebsiteHosting(
            self,
            "Hosting",
            domain_name=parameters.domain_name.value_as_string,
            certificate_arn=parameters.certificate_arn.value_as_string,
            hosted_zone_id=parameters.hosted_zone_id.value_as_string,
            index_document=parameters.index_document.value_as_string,
            error_document=parameters.error_document.value_as_string,
        )

    def _create_delivery(
        self, parameters: WebsiteParameters, hosting: StaticWebsiteHosting
    ) -> ContinuousDeployment:
        return ContinuousDeployment(
            self,
            "Delivery",
            project_name=parameters.project_name.value_as_string,
            website_bucket=hosting.bucket,
            github_user=parameters.github_user.value_as_string,
            github_repo=parameters.github_repo.value_as_string,
            github_branch=parameters.github_branch.value_as_string,
            github_token=parameters.github_token,
        )

    def _add_outputs(self) -> None:
        outputs = {
            "WebsiteUrl": f"https://{self.hosting.domain_name}",
            "WebsiteBucketName": self.hosting.bucket.bucket_name,
            "DistributionId": self.hosting.distribution.distribution_id,
            "DistributionDomainName": self.hosting.distribution.distribution_domain_name,
            "PipelineName": self.delivery.pipeline.pipeline_name,
            "WebhookUrl": self.delivery.webhook.attr_url,
        }
        for output_id, value in outputs.items():
            cdk.CfnOutput(self, output_id, value=value)
