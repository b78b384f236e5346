"""Shared fixtures: synthesized templates for the website stack."""

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from cloudformation.settings import Settings
from cloudformation.static_website_stack import StaticWebsitePipelineStack


def _synth(settings: Settings) -> Template:
    stack = StaticWebsitePipelineStack(cdk.App(), "TestStack", settings=settings)
    return Template.from_stack(stack)


@pytest.fixture(scope="module")
def template():
    """Template synthesized with default settings."""
    return _synth(Settings())


@pytest.fixture
def synth():
    """Synthesize a template for custom settings."""
    return _synth
