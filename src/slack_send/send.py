"""
Module: send.py
Description: Orchestrate a run from inputs to delivery to outputs.

Resolves the configuration and content, sends the content with the
technique matching the provided credential, and records the outcome as
step outputs.
"""

import time
from typing import Any, Dict, Optional

from slack_send.config.resolver import resolve_config
from slack_send.config.settings import AuthMode, Config, Environment
from slack_send.content import resolve_content
from slack_send.delivery import Delivery, TokenDelivery, WebhookDelivery
from slack_send.errors import DeliveryError, SlackSendError
from slack_send.models.result import DeliveryResult
from slack_send.utils.actions import ActionsCore
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


def select_delivery(config: Config) -> Delivery:
    """Pick the delivery technique for the provided credential."""
    if config.auth_mode == AuthMode.TOKEN:
        return TokenDelivery()
    return WebhookDelivery()


async def post(config: Config, content: Dict[str, Any]) -> DeliveryResult:
    """
    Send content with the configured technique.

    Args:
        config: Resolved run configuration
        content: Resolved request content

    Returns:
        Result of the delivery

    Raises:
        SlackSendError: If the delivery fails
    """
    delivery = select_delivery(config)
    try:
        return await delivery.post(config, content)
    except SlackSendError:
        raise
    except Exception as e:
        raise DeliveryError(str(e) or type(e).__name__, causes=[e]) from e


def _record(core: ActionsCore, result: DeliveryResult) -> None:
    for name, value in result.outputs():
        core.set_output(name, value)


async def send(core: ActionsCore, environment: Optional[Environment] = None) -> None:
    """
    Run the action with inputs from the runner.

    Configuration and content errors are always raised. Delivery errors are
    raised only when the "errors" input is true; outputs are recorded first
    in either case.

    Args:
        core: Source of inputs and sink for outputs
        environment: Environment snapshot (read from the process if omitted)

    Raises:
        SlackSendError: If the inputs are invalid or a delivery error is fatal
    """
    environment = environment or Environment()
    config = resolve_config(core, environment)
    content = resolve_content(config, environment.trigger_context(), environment.variables)

    try:
        result = await post(config, content)
    except SlackSendError as e:
        result = e.result if isinstance(e, DeliveryError) else DeliveryResult(ok=False, response=e.message)
        _record(core, result)
        core.set_output("time", int(time.time()))
        if config.errors:
            raise
        logger.warning(
            "Continuing after a failed delivery since errors are not fatal",
            error=e.message,
        )
        return

    _record(core, result)
    core.set_output("time", int(time.time()))
    logger.info("Content was sent", ok=result.ok)
