"""
Module: transform.py
Description: Post-processing of parsed request content.

Templated values are substituted in string leaves using Jinja2, and nested
content can be flattened into single level string values for webhook
triggers that only accept flat string fields.
"""

import json
from typing import Any, Dict, Mapping

from jinja2 import ChainableUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from slack_send.errors import ContentParseError
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


class MissingValue(ChainableUndefined):
    """Render missing template variables as a visible placeholder."""

    def __str__(self) -> str:
        return "???"


_templates = SandboxedEnvironment(
    undefined=MissingValue,
    autoescape=False,
    keep_trailing_newline=True,
)


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """
    Substitute variables in a template string.

    Expressions written as ${{ env.NAME }} are treated the same as
    {{ env.NAME }} so values can be shared with workflow syntax.

    Args:
        template: Template text
        context: Variables available to the template

    Returns:
        Rendered text
    """
    return _templates.from_string(template.replace("${{", "{{")).render(context)


def apply_templates(values: Any, context: Mapping[str, Any]) -> Any:
    """
    Render every string leaf of the content.

    Args:
        values: Parsed content (mappings, lists and scalars)
        context: Variables available to the templates

    Returns:
        Content with rendered strings; other leaves unchanged

    Raises:
        ContentParseError: If a string is not a valid template
    """
    if isinstance(values, list):
        return [apply_templates(value, context) for value in values]
    if isinstance(values, dict):
        return {key: apply_templates(value, context) for key, value in values.items()}
    if isinstance(values, str):
        try:
            return render_template(values, context)
        except TemplateError as error:
            raise ContentParseError(
                "Invalid input! Failed to template the payload values",
                causes=[error],
            ) from error
    return values


def stringify(value: Any) -> str:
    """Convert a flattened value to its string form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _flatten(values: Any, delimiter: str, prefix: str, result: Dict[str, Any]) -> None:
    if isinstance(values, dict):
        items = [(str(key), value) for key, value in values.items()]
    else:
        items = [(str(index), value) for index, value in enumerate(values)]

    for key, value in items:
        name = f"{prefix}{delimiter}{key}" if prefix else key
        if isinstance(value, (dict, list)) and value:
            _flatten(value, delimiter, name, result)
        else:
            result[name] = value


def flatten(values: Mapping[str, Any], delimiter: str) -> Dict[str, str]:
    """
    Collapse nested content into single level string values.

    Args:
        values: Nested content
        delimiter: Separator placed between joined keys

    Returns:
        Flat mapping with every value stringified

    Example:
        >>> flatten({"bananas": {"truthiness": True}}, "_")
        {'bananas_truthiness': 'true'}
    """
    result: Dict[str, Any] = {}
    _flatten(dict(values), delimiter, "", result)
    return {key: stringify(value) for key, value in result.items()}
