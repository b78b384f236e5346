import aws_cdk as cdk

from cloudformation.logs import configure_logging, get_logger
from cloudformation.settings import Settings
from cloudformation.static_website_stack import StaticWebsitePipelineStack

logger = get_logger(__name__)


def build_app(settings: Settings) -> cdk.App:
    env = cdk.Environment(
        account=settings.account_id,
        region=settings.region,
    )
    application = cdk.App()
    stack = StaticWebsitePipelineStack(
        application,
        settings.stack_name,
        env=env,
        settings=settings,
    )

    cdk.Tags.of(stack).add("web-site", settings.project_name)
    return application


def main() -> None:
    settings = Settings.from_environ()
    configure_logging(settings.log_level)
    logger.info(
        "Synthesizing %s (account=%s, region=%s)",
        settings.stack_name,
        settings.account_id or "unresolved",
        settings.region or "unresolved",
    )

    application = build_app(settings)
    assembly = application.synth()
    logger.info("Cloud assembly written to %s", assembly.directory)


if __name__ == "__main__":
    main()
