"""
Module: actions.py
Description: GitHub Actions runner toolkit.

Reads action inputs from the environment, masks secrets, records step
outputs and signals failure using the runner's file and workflow command
protocols.

Key Components:
- ActionsCore: Input source and output sink for a single run

Dependencies: json, uuid
"""

import json
import os
import sys
import uuid
from typing import Any, Dict, List, Mapping, Optional, TextIO

from slack_send.errors import ConfigurationError
from slack_send.utils.logger import escape_data, get_logger

logger = get_logger(__name__)

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


def to_command_value(value: Any) -> str:
    """
    Convert an output value to the string the runner expects.

    Args:
        value: Output value

    Returns:
        Strings unchanged, None as empty, anything else JSON encoded
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class ActionsCore:
    """
    Access to the inputs and outputs of the running action.

    Attributes:
        outputs: Output values set during this run
        secrets: Values masked during this run
        exit_code: 1 once the run has been marked as failed
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the toolkit.

        Args:
            environ: Environment to read inputs from (defaults to os.environ)
            stream: Stream for workflow commands (defaults to stdout)
        """
        self._environ = dict(os.environ if environ is None else environ)
        self._stream = stream
        self.outputs: Dict[str, str] = {}
        self.secrets: List[str] = []
        self.exit_code = 0

    def _write(self, line: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def get_input(self, name: str) -> str:
        """
        Get the value of an action input.

        Args:
            name: Input name as declared in action.yml

        Returns:
            Trimmed value, or an empty string when unset
        """
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        return self._environ.get(key, "").strip()

    def get_boolean_input(self, name: str, default: bool = False) -> bool:
        """
        Get a boolean action input.

        Args:
            name: Input name as declared in action.yml
            default: Value used when the input is unset

        Returns:
            Parsed boolean value

        Raises:
            ConfigurationError: If the value is not a YAML 1.2 core boolean
        """
        value = self.get_input(name)
        if not value:
            return default
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise ConfigurationError(
            f'Invalid input! The "{name}" input must be a boolean: '
            "true | True | TRUE | false | False | FALSE"
        )

    def set_secret(self, value: str) -> None:
        """Mask a value in all later log output."""
        if not value:
            return
        self.secrets.append(value)
        self._write(f"::add-mask::{escape_data(value)}")

    def set_output(self, name: str, value: Any) -> None:
        """
        Set a step output.

        Args:
            name: Output name
            value: Output value (non-strings are JSON encoded)
        """
        converted = to_command_value(value)
        self.outputs[name] = converted

        path = self._environ.get("GITHUB_OUTPUT")
        if path:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            with open(path, "a", encoding="utf-8") as handle:
                handle.write(f"{name}<<{delimiter}\n{converted}\n{delimiter}\n")
        else:
            self._write(f"::set-output name={name}::{escape_data(converted)}")

    def set_failed(self, message: str) -> None:
        """Mark the run as failed with the given message."""
        self.exit_code = 1
        logger.error(message)

    def is_debug(self) -> bool:
        """Whether the runner has step debug logging enabled."""
        return self._environ.get("RUNNER_DEBUG") == "1"
