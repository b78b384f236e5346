"""Tests for the website bucket, CDN and DNS resources"""

import json

from aws_cdk.assertions import Match

BLOCK_ALL = {
    "BlockPublicAcls": True,
    "BlockPublicPolicy": True,
    "IgnorePublicAcls": True,
    "RestrictPublicBuckets": True,
}


class TestWebsiteBucket:
    def test_named_after_domain_with_website_documents(self, template):
        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "BucketName": {"Ref": "DomainName"},
                "WebsiteConfiguration": {
                    "IndexDocument": {"Ref": "IndexDocument"},
                    "ErrorDocument": {"Ref": "ErrorDocument"},
                },
            },
        )

    def test_encrypted_and_private(self, template):
        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "BucketName": {"Ref": "DomainName"},
                "BucketEncryption": {
                    "ServerSideEncryptionConfiguration": [
                        {"ServerSideEncryptionByDefault": {"SSEAlgorithm": "AES256"}}
                    ]
                },
                "PublicAccessBlockConfiguration": BLOCK_ALL,
            },
        )

    def test_retained_on_stack_deletion(self, template):
        template.has_resource(
            "AWS::S3::Bucket",
            {
                "Properties": Match.object_like({"BucketName": {"Ref": "DomainName"}}),
                "DeletionPolicy": "Retain",
            },
        )


class TestOriginAccess:
    def test_single_origin_access_identity(self, template):
        template.resource_count_is("AWS::CloudFront::CloudFrontOriginAccessIdentity", 1)

    def test_identity_may_list_bucket(self, template):
        template.has_resource_properties(
            "AWS::S3::BucketPolicy",
            {
                "PolicyDocument": {
                    "Statement": Match.array_with(
                        [
                            Match.object_like(
                                {
                                    "Action": "s3:ListBucket",
                                    "Effect": "Allow",
                                    "Principal": {"CanonicalUser": Match.any_value()},
                                }
                            )
                        ]
                    )
                }
            },
        )

    def test_identity_may_read_objects(self, template):
        template.has_resource_properties(
            "AWS::S3::BucketPolicy",
            {
                "PolicyDocument": {
                    "Statement": Match.array_with(
                        [
                            Match.object_like(
                                {
                                    "Action": "s3:GetObject",
                                    "Effect": "Allow",
                                    "Principal": {"CanonicalUser": Match.any_value()},
                                }
                            )
                        ]
                    )
                }
            },
        )

    def test_no_public_principal(self, template):
        for policy in template.find_resources("AWS::S3::BucketPolicy").values():
            for statement in policy["Properties"]["PolicyDocument"]["Statement"]:
                if statement["Effect"] == "Allow":
                    assert statement.get("Principal") != "*"


class TestDistribution:
    def test_aliases_domain_with_certificate(self, template):
        template.has_resource_properties(
            "AWS::CloudFront::Distribution",
            {
                "DistributionConfig": {
                    "Aliases": [{"Ref": "DomainName"}],
                    "Enabled": True,
                    "PriceClass": "PriceClass_100",
                    "DefaultRootObject": {"Ref": "IndexDocument"},
                    "ViewerCertificate": {
                        "AcmCertificateArn": {"Ref": "CertificateArn"},
                        "SslSupportMethod": "sni-only",
                        "MinimumProtocolVersion": "TLSv1.2_2021",
                    },
                }
            },
        )

    def test_serves_http_1_1(self, template):
        template.has_resource_properties(
            "AWS::CloudFront::Distribution",
            {"DistributionConfig": {"HttpVersion": "http1.1"}},
        )

    def test_default_cache_behavior(self, template):
        template.has_resource_properties(
            "AWS::CloudFront::Distribution",
            {
                "DistributionConfig": {
                    "DefaultCacheBehavior": {
                        "AllowedMethods": ["GET", "HEAD", "OPTIONS"],
                        "CachedMethods": ["GET", "HEAD", "OPTIONS"],
                        "Compress": True,
                        "MinTTL": 60,
                        "DefaultTTL": 3600,
                        "MaxTTL": 86400,
                        "ViewerProtocolPolicy": "redirect-to-https",
                        "ForwardedValues": {
                            "QueryString": False,
                            "Cookies": {"Forward": "none"},
                        },
                    }
                }
            },
        )

    def test_not_found_served_from_error_document(self, template):
        template.has_resource_properties(
            "AWS::CloudFront::Distribution",
            {
                "DistributionConfig": {
                    "CustomErrorResponses": [
                        {
                            "ErrorCode": 404,
                            "ResponseCode": 200,
                            "ResponsePagePath": {
                                "Fn::Join": ["", ["/", {"Ref": "ErrorDocument"}]]
                            },
                        }
                    ]
                }
            },
        )

    def test_origin_uses_access_identity(self, template):
        template.has_resource_properties(
            "AWS::CloudFront::Distribution",
            {
                "DistributionConfig": {
                    "Origins": [
                        Match.object_like(
                            {"S3OriginConfig": {"OriginAccessIdentity": Match.any_value()}}
                        )
                    ]
                }
            },
        )


class TestDns:
    def test_ipv4_and_ipv6_alias_records(self, template):
        template.resource_count_is("AWS::Route53::RecordSet", 2)
        for record_type in ("A", "AAAA"):
            template.has_resource_properties(
                "AWS::Route53::RecordSet",
                {
                    "Type": record_type,
                    "HostedZoneId": {"Ref": "HostedZoneId"},
                    "Name": {"Fn::Join": ["", [{"Ref": "DomainName"}, "."]]},
                    "AliasTarget": {"DNSName": Match.any_value()},
                },
            )

    def test_alias_uses_cloudfront_hosted_zone(self, template):
        assert "Z2FDTNDATAQYW2" in json.dumps(template.to_json())
