"""
Module: content
Description: Resolve the request content to send.

The content comes from exactly one of the inline payload, a payload file,
or the trigger context, and is then optionally templated and flattened.
"""

import copy
import json
from typing import Any, Dict, Mapping

from slack_send.config.settings import Config
from slack_send.content.parser import parse_payload, parse_payload_file
from slack_send.content.transform import apply_templates, flatten, render_template
from slack_send.errors import ContentParseError
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "apply_templates",
    "flatten",
    "parse_payload",
    "parse_payload_file",
    "render_template",
    "resolve_content",
]


def resolve_content(
    config: Config,
    context: Mapping[str, Any],
    variables: Mapping[str, str],
) -> Dict[str, Any]:
    """
    Build the content to send from the configured payload inputs.

    Args:
        config: Resolved run configuration
        context: Trigger context, used when no payload is provided
        variables: Environment variables available to templates

    Returns:
        Content mapping ready for delivery

    Raises:
        ContentParseError: If both payload sources are provided or parsing fails
    """
    if config.payload and config.payload_file_path:
        raise ContentParseError(
            "Invalid input! Just the payload or payload file path is required."
        )
    elif config.payload:
        values = parse_payload(config.payload)
    elif config.payload_file_path:
        values = parse_payload_file(config.payload_file_path)
    else:
        logger.debug("Missing payload so gathering inputs from action context")
        values = copy.deepcopy(dict(context))

    if config.payload_templated:
        values = apply_templates(values, {"env": dict(variables), "github": dict(context)})

    if config.payload_delimiter:
        values = flatten(values, config.payload_delimiter)

    logger.debug("Parsed request content", content=json.dumps(values, default=str))
    return values
