import aws_cdk as cdk
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cf
from aws_cdk import aws_iam as iam
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as route53_targets
from aws_cdk import aws_s3 as s3
from constructs import Construct

ORIGIN_MIN_TTL = cdk.Duration.seconds(60)
ORIGIN_DEFAULT_TTL = cdk.Duration.hours(1)
ORIGIN_MAX_TTL = cdk.Duration.days(1)


class StaticWebsiteHosting(Construct):
    """
    Website bucket served through CloudFront under a custom domain.

    The bucket blocks all public access; the distribution reads it through an
    origin access identity. The domain is aliased to the distribution in an
    existing Route 53 hosted zone.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        domain_name: str,
        certificate_arn: str,
        hosted_zone_id: str,
        index_document: str,
        error_document: str,
    ) -> None:
        super().__init__(scope, construct_id)

        self.domain_name = domain_name
        self.bucket = self._create_bucket(domain_name, index_document, error_document)
        self.cf_oai = self._configure_iam(self.bucket, domain_name)
        self.distribution = self._create_cloudfront_distribution(
            self.bucket,
            self.cf_oai,
            domain_name,
            certificate_arn,
            index_document,
            error_document,
        )
        self._configure_route53(domain_name, hosted_zone_id)

    def _create_bucket(
        self, domain_name: str, index_document: str, error_document: str
    ) -> s3.Bucket:
        return s3.Bucket(
            self,
            "WebsiteBucket",
            bucket_name=domain_name,
            encryption=s3.BucketEncryption.S3_MANAGED,
            website_index_document=index_document,
            website_error_document=error_document,
            removal_policy=cdk.RemovalPolicy.RETAIN,
            public_read_access=False,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        )

    def _configure_iam(
        self, bucket: s3.Bucket, domain_name: str
    ) -> cf.OriginAccessIdentity:
        cf_oai = cf.OriginAccessIdentity(
            self, "CloudFrontOAI", comment=f"Cloudfront OAI for {domain_name}"
        )
        principal = iam.CanonicalUserPrincipal(
            cf_oai.cloud_front_origin_access_identity_s3_canonical_user_id
        )

        # Without ListBucket S3 answers 403 for missing keys and the 404
        # error response below never fires.
        bucket.add_to_resource_policy(
            iam.PolicyStatement(
                actions=["s3:ListBucket"],
                resources=[bucket.bucket_arn],
                principals=[principal],
            )
        )
        bucket.add_to_resource_policy(
            iam.PolicyStatement(
                actions=["s3:GetObject"],
                resources=[bucket.arn_for_objects("*")],
                principals=[principal],
            )
        )

        return cf_oai

    def _create_cloudfront_distribution(
        self,
        bucket: s3.Bucket,
        origin_access_identity: cf.OriginAccessIdentity,
        domain_name: str,
        certificate_arn: str,
        index_document: str,
        error_document: str,
    ) -> cf.CloudFrontWebDistribution:
        certificate = acm.Certificate.from_certificate_arn(
            self, "WebsiteCertificate", certificate_arn=certificate_arn
        )

        viewer_cert = cf.ViewerCertificate.from_acm_certificate(
            certificate=certificate,
            ssl_method=cf.SSLMethod.SNI,
            aliases=[domain_name],
            security_policy=cf.SecurityPolicyProtocol.TLS_V1_2_2021,
        )

        return cf.CloudFrontWebDistribution(
            self,
            "WebsiteCDN",
            price_class=cf.PriceClass.PRICE_CLASS_100,
            viewer_certificate=viewer_cert,
            origin_configs=[
                cf.SourceConfiguration(
                    s3_origin_source=cf.S3OriginConfig(
                        s3_bucket_source=bucket,
                        origin_access_identity=origin_access_identity,
                    ),
                    behaviors=[
                        cf.Behavior(
                            is_default_behavior=True,
                            compress=True,
                            min_ttl=ORIGIN_MIN_TTL,
                            default_ttl=ORIGIN_DEFAULT_TTL,
                            max_ttl=ORIGIN_MAX_TTL,
                            allowed_methods=cf.CloudFrontAllowedMethods.GET_HEAD_OPTIONS,
                            cached_methods=cf.CloudFrontAllowedCachedMethods.GET_HEAD_OPTIONS,
                        )
                    ],
                )
            ],
            default_root_object=index_document,
            http_version=cf.HttpVersion.HTTP1_1,
            viewer_protocol_policy=cf.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
            error_configurations=[
                # CloudFront wants a leading slash, the S3 error document does not.
                cf.CfnDistribution.CustomErrorResponseProperty(
                    error_code=404,
                    response_code=200,
                    response_page_path=f"/{error_document}",
                ),
            ],
        )

    def _configure_route53(self, domain_name: str, hosted_zone_id: str) -> None:
        zone = route53.HostedZone.from_hosted_zone_attributes(
            self,
            "WebsiteHostedZone",
            hosted_zone_id=hosted_zone_id,
            zone_name=domain_name,
        )
        target = route53.RecordTarget.from_alias(
            route53_targets.CloudFrontTarget(self.distribution)
        )

        route53.ARecord(
            self,
            "WebsiteARecord",
            record_name=domain_name,
            target=target,
            zone=zone,
        )
        route53.AaaaRecord(
            self,
            "WebsiteAAAARecord",
            record_name=domain_name,
            target=target,
            zone=zone,
        )
