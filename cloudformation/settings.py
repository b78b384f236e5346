"""
Synthesis settings loaded from environment variables.

The account and region follow the CDK convention of being optional: when
unset the stack is environment-agnostic. The remaining values seed the
defaults of the template parameters, so one synthesized template can still
be deployed with different values through CloudFormation.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_STACK_NAME = "StaticWebsitePipelineStack"
DEFAULT_PROJECT_NAME = "example-com"
DEFAULT_DOMAIN_NAME = "example.com"
DEFAULT_INDEX_DOCUMENT = "index.html"
DEFAULT_ERROR_DOCUMENT = "error.html"
DEFAULT_SOURCE_BRANCH = "main"
DEFAULT_LOG_LEVEL = "INFO"

# Prefixes bucket names, so it must satisfy S3 naming rules.
PROJECT_NAME_PATTERN = r"^[a-z0-9][a-z0-9-]{1,40}[a-z0-9]$"
DOMAIN_NAME_PATTERN = r"^(?!-)[a-z0-9-]{1,63}(?<!-)(\.(?!-)[a-z0-9-]{1,63}(?<!-))+$"
DOCUMENT_PATTERN = r"^[^/\s][^\s]*$"
BRANCH_PATTERN = r"^[^\s~^:?*\[\\]+$"
STACK_NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9-]{0,127}$"


class SettingsError(ValueError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, reason: str) -> None:
        super().__init__(f"{variable}={value!r}: {reason}")
        self.variable = variable
        self.value = value


def _check(variable: str, value: str, pattern: str, reason: str) -> str:
    if not re.match(pattern, value):
        raise SettingsError(variable, value, reason)
    return value


def _optional(environ: Mapping[str, str], variable: str) -> Optional[str]:
    value = environ.get(variable, "").strip()
    return value or None


def _with_default(environ: Mapping[str, str], variable: str, default: str) -> str:
    return _optional(environ, variable) or default


@dataclass(frozen=True)
class Settings:
    """
    Settings for one synthesis run.

    Attributes:
        stack_name: CloudFormation stack name.
        account_id: Target AWS account, or None for an environment-agnostic stack.
        region: Target AWS region, or None for an environment-agnostic stack.
        project_name: Default of the ProjectName parameter.
        domain_name: Default of the DomainName parameter.
        index_document: Default of the IndexDocument parameter.
        error_document: Default of the ErrorDocument parameter.
        source_branch: Default of the GitHubBranch parameter.
        log_level: Name of the logging level used during synthesis.
    """

    stack_name: str = DEFAULT_STACK_NAME
    account_id: Optional[str] = None
    region: Optional[str] = None
    project_name: str = DEFAULT_PROJECT_NAME
    domain_name: str = DEFAULT_DOMAIN_NAME
    index_document: str = DEFAULT_INDEX_DOCUMENT
    error_document: str = DEFAULT_ERROR_DOCUMENT
    source_branch: str = DEFAULT_SOURCE_BRANCH
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build Settings from environment variables, validating every value.

        Raises:
            SettingsError: If a variable is set to a value the template
                cannot use.
        """
        environ = os.environ if environ is None else environ

        stack_name = _check(
            "STACK_NAME",
            _with_default(environ, "STACK_NAME", DEFAULT_STACK_NAME),
            STACK_NAME_PATTERN,
            "must start with a letter and contain only letters, digits and hyphens",
        )
        project_name = _check(
            "PROJECT_NAME",
            _with_default(environ, "PROJECT_NAME", DEFAULT_PROJECT_NAME),
            PROJECT_NAME_PATTERN,
            "must be 3-42 lowercase letters, digits or hyphens",
        )
        domain_name = _check(
            "DOMAIN_NAME",
            _with_default(environ, "DOMAIN_NAME", DEFAULT_DOMAIN_NAME).lower(),
            DOMAIN_NAME_PATTERN,
            "must be a fully qualified domain name",
        )
        index_document = _check(
            "INDEX_DOCUMENT",
            _with_default(environ, "INDEX_DOCUMENT", DEFAULT_INDEX_DOCUMENT),
            DOCUMENT_PATTERN,
            "must be an object key without a leading slash",
        )
        error_document = _check(
            "ERROR_DOCUMENT",
            _with_default(environ, "ERROR_DOCUMENT", DEFAULT_ERROR_DOCUMENT),
            DOCUMENT_PATTERN,
            "must be an object key without a leading slash",
        )
        source_branch = _check(
            "SOURCE_BRANCH",
            _with_default(environ, "SOURCE_BRANCH", DEFAULT_SOURCE_BRANCH),
            BRANCH_PATTERN,
            "is not a valid git branch name",
        )

        log_level = _with_default(environ, "LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise SettingsError("LOG_LEVEL", log_level, "unknown logging level")

        return cls(
            stack_name=stack_name,
            account_id=_optional(environ, "ACCOUNT_ID"),
            region=_optional(environ, "REGION"),
            project_name=project_name,
            domain_name=domain_name,
            index_document=index_document,
            error_document=error_document,
            source_branch=source_branch,
            log_level=log_level,
        )
