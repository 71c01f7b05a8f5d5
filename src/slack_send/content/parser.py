"""
Module: parser.py
Description: Parse payload text and payload files into request content.

Inline payloads are read as YAML restricted to JSON-compatible scalars,
which also accepts plain JSON and bare "key: value" fragments. Payloads
that are neither get one more chance as JSON that is missing its braces.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict

import yaml

from slack_send.errors import ContentParseError
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


class JsonSchemaLoader(yaml.SafeLoader):
    """YAML loader that only resolves null, boolean, integer and float scalars."""

    yaml_implicit_resolvers: Dict[Any, Any] = {}


JsonSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:null",
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)
JsonSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
JsonSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^-?(?:0|[1-9][0-9]*)$"),
    list("-0123456789"),
)
JsonSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r"^-?(?:0|[1-9][0-9]*)(?:\.[0-9]*)?(?:[eE][-+]?[0-9]+)?$"),
    list("-0123456789"),
)


def load_yaml(text: str) -> Any:
    """Load YAML text with JSON-compatible scalar types."""
    return yaml.load(text, Loader=JsonSchemaLoader)


def _as_mapping(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a mapping of values but found {type(value).__name__}")
    return value


def parse_payload(payload: str) -> Dict[str, Any]:
    """
    Parse an inline payload into request content.

    Args:
        payload: Payload text from the action input

    Returns:
        Parsed content mapping

    Raises:
        ContentParseError: If the payload is neither YAML nor JSON, with both
            parse errors attached, most recent first
    """
    trimmed = payload.strip()
    if trimmed.startswith("{") and trimmed.endswith("}"):
        # YAML decodes surrogate pair escapes as two separate characters
        try:
            return _as_mapping(json.loads(trimmed))
        except ValueError as error:
            logger.debug("Failed to parse input payload as a JSON object", error=str(error))

    try:
        return _as_mapping(load_yaml(payload))
    except (yaml.YAMLError, ValueError) as yaml_error:
        logger.debug("Failed to parse input payload as YAML", error=str(yaml_error))
        first_error = yaml_error

    try:
        if not (trimmed.startswith("{") and trimmed.endswith("}")):
            logger.debug("Wrapping input payload in braces to create valid JSON")
            trimmed = "{" + re.sub(r",$", "", trimmed) + "}"
        return _as_mapping(json.loads(trimmed))
    except ValueError as json_error:
        logger.error("Failed to parse input payload as JSON", error=str(json_error))
        raise ContentParseError(
            "Invalid input! Failed to parse contents of the provided payload",
            causes=[json_error, first_error],
        ) from json_error


def parse_payload_file(file_path: str) -> Dict[str, Any]:
    """
    Parse a payload file into request content.

    YAML files (.yaml, .yml) and JSON files (.json) are supported.

    Args:
        file_path: Location of the payload file

    Returns:
        Parsed content mapping

    Raises:
        ContentParseError: If the file is missing, unsupported, or invalid
    """
    path = Path(file_path).resolve()
    try:
        content = path.read_text(encoding="utf-8")
        extension = path.suffix.lower()
        if extension in (".yaml", ".yml"):
            return _as_mapping(load_yaml(content))
        if extension == ".json":
            return _as_mapping(json.loads(content))
        raise ValueError(f"Unsupported file extension: {extension or path.name}")
    except (OSError, yaml.YAMLError, ValueError) as error:
        logger.error("Failed to parse payload file", path=str(path), error=str(error))
        raise ContentParseError(
            "Invalid input! Failed to parse contents of the provided payload file",
            causes=[error],
        ) from error
