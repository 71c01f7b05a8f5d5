"""
Module: resolver.py
Description: Resolve action inputs into a validated Config.

Gathers values from the action inputs, falls back to the environment for
credentials and proxies, masks secrets as soon as they are found, and
raises ConfigurationError for missing or contradicting inputs.
"""

from typing import Optional

from slack_send.config.settings import Config, Environment, Retries, WebhookType
from slack_send.errors import ConfigurationError
from slack_send.utils.actions import ActionsCore
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


def _webhook_type(value: str) -> Optional[WebhookType]:
    if not value:
        return None
    try:
        return WebhookType(value.strip().lower())
    except ValueError:
        raise ConfigurationError(
            "Invalid input! The webhook type must be 'incoming-webhook' or 'webhook-trigger'."
        )


def _retries(value: str) -> Retries:
    if not value:
        return Retries.FIVE
    option = Retries.parse(value)
    if option is None:
        logger.warning(f'Invalid input! An unknown "retries" value was used: {value}')
        return Retries.FIVE
    return option


def resolve_config(core: ActionsCore, environment: Environment) -> Config:
    """
    Validate the action inputs and build the run configuration.

    Args:
        core: Source of action inputs and secret masking
        environment: Environment snapshot for fallback values

    Returns:
        Immutable configuration for this run

    Raises:
        ConfigurationError: If the inputs are missing or contradict each other
    """
    token = core.get_input("token") or environment.slack_token
    webhook = core.get_input("webhook") or environment.slack_webhook_url
    method = core.get_input("method") or None
    webhook_type = None

    if token and webhook:
        logger.debug("Setting the provided token and webhook as secret variables")
        core.set_secret(token)
        core.set_secret(webhook)
        raise ConfigurationError(
            "Invalid input! Either the token or webhook is required - not both."
        )
    elif token:
        logger.debug("Setting the provided token as a secret variable")
        core.set_secret(token)
        if not method:
            raise ConfigurationError(
                "Missing input! A method must be decided to use the token provided."
            )
    elif webhook:
        logger.debug("Setting the provided webhook as a secret variable")
        core.set_secret(webhook)
        webhook_type = _webhook_type(core.get_input("webhook-type"))
    else:
        raise ConfigurationError(
            "Missing input! Either a token or webhook is required to take action."
        )

    config = Config(
        errors=core.get_boolean_input("errors", default=True),
        method=method,
        token=token or None,
        webhook=webhook or None,
        webhook_type=webhook_type,
        api=core.get_input("api") or None,
        payload=core.get_input("payload") or None,
        payload_file_path=core.get_input("payload-file-path") or None,
        payload_templated=core.get_boolean_input("payload-templated"),
        payload_delimiter=core.get_input("payload-delimiter") or None,
        proxy=core.get_input("proxy") or environment.https_proxy,
        retries=_retries(core.get_input("retries")),
        debug=environment.runner_debug or core.is_debug(),
    )

    logger.debug(
        "Gathered action inputs",
        inputs=config.model_dump_json(exclude={"token", "webhook"}),
    )
    return config
