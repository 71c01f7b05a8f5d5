"""
Module: errors.py
Description: Error taxonomy for slack-send.

Configuration and content errors abort a run before any request is made.
Delivery errors carry the failed result so the dispatcher can still record
outputs before deciding whether the job fails.
"""

from enum import Enum
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from slack_send.models.result import DeliveryResult


class SlackSendError(Exception):
    """
    Base class for known errors of slack-send.

    Attributes:
        message: Human readable reason for the failure
        causes: Underlying errors kept for diagnostics, most recent first
    """

    def __init__(self, message: str, causes: Sequence[BaseException] = ()):
        super().__init__(message)
        self.message = message
        self.causes = list(causes)


class ConfigurationError(SlackSendError):
    """Inputs are missing or contradict each other."""


class ContentParseError(SlackSendError):
    """The payload, payload file, or its templated values could not be parsed."""


class ProxyConfigurationError(SlackSendError):
    """A proxy could not be configured for a request."""


class DeliveryErrorKind(str, Enum):
    """Classified reasons a delivery failed."""

    REQUEST = "request"
    HTTP = "http"
    PLATFORM = "platform"
    RATE_LIMITED = "rate_limited"


class DeliveryError(SlackSendError):
    """
    Sending the content failed.

    Attributes:
        kind: Classified reason for the failure
        result: Failed result with the serialized error as its response
    """

    def __init__(
        self,
        message: str,
        kind: DeliveryErrorKind = DeliveryErrorKind.REQUEST,
        result: Optional["DeliveryResult"] = None,
        causes: Sequence[BaseException] = (),
    ):
        super().__init__(message, causes)
        self.kind = kind
        if result is None:
            from slack_send.models.result import DeliveryResult

            result = DeliveryResult(ok=False, response=message)
        self.result = result
