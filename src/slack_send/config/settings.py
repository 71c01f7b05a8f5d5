"""
Module: settings.py
Description: Environment snapshot and resolved configuration.

Environment reads every variable slack-send cares about in one place using
pydantic-settings. Config is the immutable result of validating the action
inputs against that snapshot.
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

from slack_send.errors import ContentParseError
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


class Retries(str, Enum):
    """Named retry curves for failed requests."""

    # No retries, just hope that things go alright
    ZERO = "0"
    # Five retries in five minutes
    FIVE = "5"
    # Ten retries in about thirty minutes
    TEN = "10"
    # A burst of retries to keep things running fast
    RAPID = "RAPID"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Retries"]:
        """
        Match an input value against the known options.

        Args:
            value: Raw input value (whitespace and case are ignored)

        Returns:
            Matching option, or None if the value is unknown
        """
        if value is None:
            return None
        normalized = value.strip().upper()
        for option in cls:
            if option.value == normalized:
                return option
        return None


class WebhookType(str, Enum):
    """Kinds of Slack webhooks that accept posted content."""

    INCOMING_WEBHOOK = "incoming-webhook"
    WEBHOOK_TRIGGER = "webhook-trigger"


class AuthMode(str, Enum):
    """Technique used to deliver content."""

    TOKEN = "token"
    WEBHOOK = "webhook"


class Environment(BaseSettings):
    """Process environment captured once at startup."""

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    # Credential fallbacks
    slack_token: Optional[str] = Field(default=None, repr=False, description="Token fallback")
    slack_webhook_url: Optional[str] = Field(default=None, repr=False, description="Webhook fallback")
    https_proxy: Optional[str] = Field(default=None, description="Proxy fallback")

    # Runner settings
    runner_debug: bool = Field(default=False, description="Step debug logging enabled")

    # Trigger context
    github_event_path: Optional[str] = Field(default=None, description="Path of the event payload")
    github_event_name: Optional[str] = None
    github_sha: Optional[str] = None
    github_ref: Optional[str] = None
    github_workflow: Optional[str] = None
    github_action: Optional[str] = None
    github_actor: Optional[str] = None
    github_job: Optional[str] = None
    github_run_id: Optional[str] = None
    github_run_number: Optional[str] = None
    github_run_attempt: Optional[str] = None
    github_repository: Optional[str] = None
    github_server_url: str = "https://github.com"
    github_api_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"

    _variables: Dict[str, str] = PrivateAttr(default_factory=lambda: dict(os.environ))

    @property
    def variables(self) -> Dict[str, str]:
        """Copy of every environment variable at startup."""
        return dict(self._variables)

    def trigger_context(self) -> Dict[str, Any]:
        """
        Describe the event that triggered this run.

        Returns:
            Context mapping with the parsed event payload under "event"

        Raises:
            ContentParseError: If the event payload file is not valid JSON
        """
        event: Dict[str, Any] = {}
        if self.github_event_path:
            path = Path(self.github_event_path)
            if path.exists():
                try:
                    event = json.loads(path.read_text(encoding="utf-8"))
                except (OSError, ValueError) as e:
                    raise ContentParseError(
                        "Invalid input! Failed to parse contents of the event payload",
                        causes=[e],
                    ) from e
            else:
                logger.info("The event path does not exist", path=str(path))

        return {
            "event": event,
            "event_name": self.github_event_name,
            "sha": self.github_sha,
            "ref": self.github_ref,
            "workflow": self.github_workflow,
            "action": self.github_action,
            "actor": self.github_actor,
            "job": self.github_job,
            "run_id": self.github_run_id,
            "run_number": self.github_run_number,
            "run_attempt": self.github_run_attempt,
            "repository": self.github_repository,
            "server_url": self.github_server_url,
            "api_url": self.github_api_url,
            "graphql_url": self.github_graphql_url,
        }


class Config(BaseModel):
    """
    Validated options for a single run.

    Attributes:
        errors: If the job should fail after errors
        method: Web API method to call with a token
        token: Authentication value for the Web API
        webhook: Location for posting request payloads
        webhook_type: Kind of webhook, if provided
        api: Alternative Web API base URL
        payload: Inline request contents
        payload_file_path: Location of a JSON or YAML request payload
        payload_templated: If templated values are replaced
        payload_delimiter: Separator used to flatten nested attributes
        proxy: Proxied connection for requests
        retries: Retry curve for failed requests
        debug: Whether the runner is in debug mode
    """

    model_config = ConfigDict(frozen=True)

    errors: bool = True
    method: Optional[str] = None
    token: Optional[str] = Field(default=None, repr=False)
    webhook: Optional[str] = Field(default=None, repr=False)
    webhook_type: Optional[WebhookType] = None
    api: Optional[str] = None
    payload: Optional[str] = None
    payload_file_path: Optional[str] = None
    payload_templated: bool = False
    payload_delimiter: Optional[str] = None
    proxy: Optional[str] = None
    retries: Retries = Retries.FIVE
    debug: bool = False

    @property
    def auth_mode(self) -> AuthMode:
        """Delivery technique chosen by the provided credential."""
        return AuthMode.TOKEN if self.token else AuthMode.WEBHOOK
