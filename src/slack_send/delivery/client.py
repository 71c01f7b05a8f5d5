"""
Module: client.py
Description: Call a Slack Web API method with the request content.

Wraps slack_sdk's AsyncWebClient with the configured token, proxy, retry
handlers and logger, and classifies failures so the response output holds
a useful description of what went wrong.
"""

import asyncio
import json
from typing import Any, Dict, Mapping, Optional

import aiohttp
from slack_sdk.errors import SlackApiError, SlackRequestError
from slack_sdk.web.async_client import AsyncWebClient

from slack_send.config.settings import Config
from slack_send.delivery.retry import client_retry_handlers
from slack_send.errors import ConfigurationError, DeliveryError, DeliveryErrorKind
from slack_send.models.result import DeliveryResult
from slack_send.utils.logger import get_logger, get_sdk_logger

logger = get_logger(__name__)


def _header(headers: Optional[Mapping[str, Any]], name: str) -> Optional[Any]:
    for key, value in (headers or {}).items():
        if key.lower() == name:
            return value
    return None


def _channel_id(data: Mapping[str, Any]) -> Optional[str]:
    # Some methods return the channel object, others just its ID
    channel = data.get("channel")
    if isinstance(channel, Mapping):
        return channel.get("id")
    return channel or None


def method_arguments(content: Mapping[str, Any]) -> Dict[str, str]:
    """
    Encode content as form arguments of a Web API method.

    Text, numbers and booleans are sent as they are written. Other values
    such as blocks or attachments are sent as JSON text.

    Args:
        content: Resolved request content

    Returns:
        Form encoded arguments accepted by every method
    """
    arguments: Dict[str, str] = {}
    for key, value in content.items():
        if isinstance(value, bool):
            arguments[key] = "true" if value else "false"
        elif isinstance(value, (str, int, float)):
            arguments[key] = str(value)
        else:
            arguments[key] = json.dumps(value)
    return arguments


def classify_error(error: Exception) -> DeliveryError:
    """
    Convert a Web API failure into a DeliveryError.

    Args:
        error: Exception raised while calling the API

    Returns:
        Classified error with the serialized details as its response
    """
    if isinstance(error, SlackApiError):
        response = error.response
        data = response.data if isinstance(response.data, dict) else {"body": str(response.data)}
        if response.status_code == 429:
            retry_after = _header(response.headers, "retry-after")
            kind = DeliveryErrorKind.RATE_LIMITED
            body: Any = {
                "code": "slack_webapi_rate_limited_error",
                "retry_after": int(retry_after) if str(retry_after).strip().isdigit() else None,
            }
        elif response.status_code != 200:
            kind = DeliveryErrorKind.HTTP
            body = {
                "code": "slack_webapi_http_error",
                "status_code": response.status_code,
                "headers": dict(response.headers or {}),
                "data": data,
            }
        else:
            kind = DeliveryErrorKind.PLATFORM
            body = data
        message = data.get("error") or str(error)
    else:
        original = error.__cause__ or error
        kind = DeliveryErrorKind.REQUEST
        message = str(original) or type(original).__name__
        body = {"name": type(original).__name__, "message": message}

    return DeliveryError(
        message,
        kind=kind,
        result=DeliveryResult(ok=False, response=body),
        causes=[error],
    )


class TokenDelivery:
    """
    Client for calling Slack API methods with a token.

    See https://api.slack.com/methods for the available methods.
    """

    def client(self, config: Config) -> AsyncWebClient:
        """Create the Web API client for the configured token."""
        options: Dict[str, Any] = {
            "token": config.token,
            "logger": get_sdk_logger(config.debug),
            "retry_handlers": client_retry_handlers(config.retries),
        }
        if config.proxy:
            options["proxy"] = config.proxy
        if config.api:
            options["base_url"] = config.api
        return AsyncWebClient(**options)

    async def post(self, config: Config, content: Dict[str, Any]) -> DeliveryResult:
        """
        Perform the API call configured with the request content.

        Args:
            config: Resolved run configuration
            content: Resolved request content, sent as method arguments

        Returns:
            Result with the response data and any message identifiers

        Raises:
            ConfigurationError: If the method or token is missing
            DeliveryError: If the call fails
        """
        if not config.method:
            raise ConfigurationError("No API method was provided for use")
        if not config.token:
            raise ConfigurationError("No token was provided to post with")

        client = self.client(config)
        try:
            response = await client.api_call(config.method, data=method_arguments(content))
        except (SlackApiError, SlackRequestError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            error = classify_error(e)
            logger.debug(
                "API call failed",
                method=config.method,
                kind=error.kind.value,
                error=error.message,
            )
            raise error from e

        data = dict(response.data) if isinstance(response.data, dict) else {}
        message = data.get("message")
        return DeliveryResult(
            ok=bool(data.get("ok")),
            response=data,
            channel_id=_channel_id(data),
            thread_ts=message.get("thread_ts") if isinstance(message, Mapping) else None,
            ts=data.get("ts"),
        )
