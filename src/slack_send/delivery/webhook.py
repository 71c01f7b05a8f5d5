"""
Module: webhook.py
Description: Post content to a Slack webhook.

Implements HTTP push delivery with retries for transient failures and
optional tunneling through an HTTPS proxy.
"""

import json
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx
from tenacity import AsyncRetrying

from slack_send.config.settings import Config, Retries
from slack_send.delivery.retry import log_retry, webhook_retry_policy
from slack_send.errors import (
    ConfigurationError,
    DeliveryError,
    DeliveryErrorKind,
    ProxyConfigurationError,
)
from slack_send.models.result import DeliveryResult
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


def _response_data(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class WebhookDelivery:
    """
    HTTP client for posting content to a webhook.

    Incoming webhooks accept any message payload while webhook triggers
    expect the flat string values of a workflow's variables.
    """

    def __init__(self, timeout_seconds: float = 10):
        """
        Initialize webhook delivery.

        Args:
            timeout_seconds: HTTP timeout in seconds
        """
        self.timeout = httpx.Timeout(timeout_seconds, connect=timeout_seconds)

    def retries(self, option: Optional[Retries] = None) -> Dict[str, Any]:
        """
        Return tenacity options for the retries option.

        Args:
            option: Named retry curve (defaults to five retries)

        Returns:
            Keyword arguments for tenacity.AsyncRetrying
        """
        return webhook_retry_policy(option or Retries.FIVE)

    def proxies(self, config: Config) -> Dict[str, Any]:
        """
        Return httpx client options for the configured proxy.

        Proxies only apply to HTTPS webhooks. A plain HTTP proxy is used as an
        explicit tunnel with environment proxy settings ignored.

        Args:
            config: Resolved run configuration

        Returns:
            Keyword arguments for httpx.AsyncClient, empty for no proxy

        Raises:
            ConfigurationError: If no webhook is configured
        """
        if not config.webhook:
            raise ConfigurationError("No webhook was provided to proxy to")
        if not config.proxy:
            return {}
        try:
            if urlparse(config.webhook).scheme != "https":
                logger.debug("The webhook destination is not HTTPS so skipping the HTTPS proxy")
                return {}

            proxy = urlparse(config.proxy)
            if proxy.scheme not in ("http", "https"):
                raise ProxyConfigurationError(f"Unsupported URL protocol: {proxy.scheme}")
            if not proxy.hostname:
                raise ProxyConfigurationError("The proxy URL is missing a host")

            options: Dict[str, Any] = {
                "mounts": {"https://": httpx.AsyncHTTPTransport(proxy=config.proxy)},
            }
            if proxy.scheme == "http":
                options["trust_env"] = False
            return options

        except (ProxyConfigurationError, httpx.InvalidURL, ValueError) as error:
            logger.warning(
                "Failed to configure the HTTPS proxy so using the default configuration",
                error=str(error),
            )
            return {}

    async def post(self, config: Config, content: Dict[str, Any]) -> DeliveryResult:
        """
        Post content to the configured webhook.

        Args:
            config: Resolved run configuration
            content: Resolved request content

        Returns:
            Result with the response body

        Raises:
            ConfigurationError: If no webhook is configured
            DeliveryError: If the request fails after all retries
        """
        if not config.webhook:
            raise ConfigurationError("No webhook was provided to post to")

        retrying = AsyncRetrying(
            **self.retries(config.retries),
            before_sleep=log_retry,
            reraise=True,
        )

        async with httpx.AsyncClient(timeout=self.timeout, **self.proxies(config)) as client:
            try:
                async for attempt in retrying:
                    with attempt:
                        response = await client.post(config.webhook, json=content)
                        response.raise_for_status()

            except httpx.HTTPStatusError as e:
                message = f"Request failed with status code {e.response.status_code}"
                logger.debug(
                    "Webhook request failed",
                    status_code=e.response.status_code,
                    response=e.response.text[:500]  # Truncate large responses
                )
                raise DeliveryError(
                    message,
                    kind=DeliveryErrorKind.HTTP,
                    result=DeliveryResult(ok=False, response=message),
                    causes=[e],
                ) from e

            except httpx.TransportError as e:
                message = str(e) or type(e).__name__
                logger.debug("Webhook request could not be sent", error=message)
                raise DeliveryError(
                    message,
                    kind=DeliveryErrorKind.REQUEST,
                    result=DeliveryResult(ok=False, response=message),
                    causes=[e],
                ) from e

        data = _response_data(response)
        logger.debug(json.dumps(data))
        return DeliveryResult(ok=response.status_code == 200, response=data)
