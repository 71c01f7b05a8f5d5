"""
Module: main.py
Description: Command line entry point for the slack-send action.

Runs a single send with inputs from the runner environment and translates
failures into a failed step.
"""

import asyncio

from slack_send.errors import SlackSendError
from slack_send.send import send
from slack_send.utils.actions import ActionsCore
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


def main() -> int:
    """
    Run the action.

    Returns:
        Process exit status, 1 when the step failed
    """
    core = ActionsCore()
    try:
        asyncio.run(send(core))
    except SlackSendError as e:
        core.set_failed(e.message)
        for cause in e.causes:
            logger.info(f"{type(cause).__name__}: {cause}")
        return core.exit_code
    return 0
