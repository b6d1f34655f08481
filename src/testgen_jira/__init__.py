import logging
import os

import click
from dotenv import load_dotenv

from testgen_jira.utils.logging import setup_logging

__version__ = "0.3.0"

# Initialize logging with appropriate level
logging_level = logging.WARNING
if os.getenv("TESTGEN_VERBOSE", "").lower() in ("true", "1", "yes"):
    logging_level = logging.DEBUG

logger = setup_logging(logging_level)


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--port",
    default=8080,
    help="Port to listen on (default: 8080)",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to (default: 0.0.0.0)",
)
@click.option(
    "--cors-origins",
    help="Comma-separated list of browser origins allowed to call the API",
)
@click.option(
    "--jira-url",
    help="Jira URL for the default connection (e.g., https://your-domain.atlassian.net)",
)
@click.option("--jira-username", help="Jira username/email")
@click.option("--jira-token", help="Jira API token")
@click.option(
    "--jira-ssl-verify/--no-jira-ssl-verify",
    default=True,
    help="Verify SSL certificates for Jira Server/Data Center (default: verify)",
)
@click.option(
    "--jira-acceptance-criteria-field",
    help="Id of the custom field holding acceptance criteria (default: customfield_10020)",
)
def main(
    verbose: int,
    env_file: str | None,
    port: int,
    host: str,
    cors_origins: str | None,
    jira_url: str | None,
    jira_username: str | None,
    jira_token: str | None,
    jira_ssl_verify: bool,
    jira_acceptance_criteria_field: str | None,
) -> None:
    """testgen-jira - Jira projects, sprints and stories for test generation

    Serves the /api/jira endpoints used by the test generator's browser
    client. Credentials are normally sent with each connect request; the
    --jira-* options or JIRA_* variables set up a default connection.
    """
    if verbose == 1:
        current_logging_level = logging.INFO
    elif verbose >= 2:  # -vv or more
        current_logging_level = logging.DEBUG
    else:
        if os.getenv("TESTGEN_VERY_VERBOSE", "false").lower() in ("true", "1", "yes"):
            current_logging_level = logging.DEBUG
        elif os.getenv("TESTGEN_VERBOSE", "false").lower() in ("true", "1", "yes"):
            current_logging_level = logging.INFO
        else:
            current_logging_level = logging.WARNING

    global logger
    logger = setup_logging(current_logging_level)
    logger.debug(f"Logging level set to: {logging.getLevelName(current_logging_level)}")

    def was_option_provided(ctx: click.Context, param_name: str) -> bool:
        return (
            ctx.get_parameter_source(param_name)
            != click.core.ParameterSource.DEFAULT_MAP
            and ctx.get_parameter_source(param_name)
            != click.core.ParameterSource.DEFAULT
        )

    if env_file:
        logger.debug(f"Loading environment from file: {env_file}")
        load_dotenv(env_file, override=True)
    else:
        logger.debug(
            "Attempting to load environment from default .env file if it exists"
        )
        load_dotenv(override=True)

    click_ctx = click.get_current_context(silent=True)

    # Port precedence
    final_port = 8080
    if os.getenv("PORT", "").isdigit():
        final_port = int(os.environ["PORT"])
    if click_ctx and was_option_provided(click_ctx, "port"):
        final_port = port
    logger.debug(f"Final port: {final_port}")

    # Host precedence
    final_host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    if click_ctx and was_option_provided(click_ctx, "host"):
        final_host = host
    logger.debug(f"Final host: {final_host}")

    # Set env vars for downstream config
    if click_ctx and was_option_provided(click_ctx, "cors_origins"):
        os.environ["TESTGEN_CORS_ORIGINS"] = cors_origins
    if click_ctx and was_option_provided(click_ctx, "jira_url"):
        os.environ["JIRA_URL"] = jira_url
    if click_ctx and was_option_provided(click_ctx, "jira_username"):
        os.environ["JIRA_USERNAME"] = jira_username
    if click_ctx and was_option_provided(click_ctx, "jira_token"):
        os.environ["JIRA_API_TOKEN"] = jira_token
    if click_ctx and was_option_provided(click_ctx, "jira_ssl_verify"):
        os.environ["JIRA_SSL_VERIFY"] = str(jira_ssl_verify).lower()
    if click_ctx and was_option_provided(click_ctx, "jira_acceptance_criteria_field"):
        os.environ["JIRA_ACCEPTANCE_CRITERIA_FIELD"] = jira_acceptance_criteria_field

    import uvicorn

    from testgen_jira.servers import create_app

    logger.info(f"Starting server on http://{final_host}:{final_port}/api/jira")
    uvicorn.run(
        create_app(),
        host=final_host,
        port=final_port,
        log_level=logging.getLevelName(current_logging_level).lower(),
        log_config=None,
    )


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
