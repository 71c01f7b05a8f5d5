"""
Package: delivery
Description: Delivery strategies for request content.

Provides Web API calls with a token and posts to webhooks, each with its
own retry and proxy handling.
"""

from typing import Any, Dict, Protocol

from slack_send.config.settings import Config
from slack_send.models.result import DeliveryResult

from .client import TokenDelivery
from .webhook import WebhookDelivery


class Delivery(Protocol):
    """Technique for sending resolved content."""

    async def post(self, config: Config, content: Dict[str, Any]) -> DeliveryResult:
        ...


__all__ = [
    "Delivery",
    "TokenDelivery",
    "WebhookDelivery",
]
