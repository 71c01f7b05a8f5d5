"""
Module: test_resolver.py
Description: Unit tests for resolving action inputs into a Config.

Covers the mutually exclusive credentials, environment fallbacks, secret
masking, retries and proxy resolution.
"""

import pytest
from structlog.testing import capture_logs

from slack_send.config.resolver import resolve_config
from slack_send.config.settings import AuthMode, Environment, Retries, WebhookType
from slack_send.errors import ConfigurationError


class TestResolveConfig:
    """Test cases for resolve_config."""

    def test_valid_values_are_collected(self, core_factory, environment):
        """Test values from the action inputs are gathered."""
        core = core_factory({
            "api": "http://localhost:8080",
            "errors": "true",
            "method": "chat.postMessage",
            "payload": '"hello": "world"',
            "proxy": "https://example.com",
            "retries": "0",
            "token": "xoxb-example",
        })

        config = resolve_config(core, environment)

        assert config.api == "http://localhost:8080"
        assert config.errors is True
        assert config.method == "chat.postMessage"
        assert config.payload == '"hello": "world"'
        assert config.proxy == "https://example.com"
        assert config.retries == Retries.ZERO
        assert config.token == "xoxb-example"
        assert config.auth_mode == AuthMode.TOKEN
        assert "xoxb-example" in core.secrets

    def test_defaults(self, core_factory, environment):
        """Test defaults when only a webhook is provided."""
        core = core_factory({"webhook": "https://hooks.slack.com"})

        config = resolve_config(core, environment)

        assert config.auth_mode == AuthMode.WEBHOOK
        assert config.errors is True
        assert config.retries == Retries.FIVE
        assert config.payload_templated is False
        assert config.payload_delimiter is None
        assert config.proxy is None
        assert config.webhook_type is None
        assert core.secrets == ["https://hooks.slack.com"]

    def test_errors_when_token_and_webhook_provided(self, core_factory, environment):
        """Test both credentials fail after being masked."""
        core = core_factory({
            "token": "xoxb-example",
            "webhook": "https://example.com",
        })

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(core, environment)

        assert exc_info.value.message == (
            "Invalid input! Either the token or webhook is required - not both."
        )
        assert "xoxb-example" in core.secrets
        assert "https://example.com" in core.secrets

    def test_token_from_environment_conflicts_with_webhook(self, core_factory):
        """Test the token environment variable counts as a provided token."""
        core = core_factory({"webhook": "https://example.com"})
        environment = Environment(slack_token="xoxb-example", slack_webhook_url=None)

        with pytest.raises(ConfigurationError, match="not both"):
            resolve_config(core, environment)

        assert "xoxb-example" in core.secrets
        assert "https://example.com" in core.secrets

    def test_webhook_from_environment(self, core_factory):
        """Test the webhook environment variable is used as a fallback."""
        core = core_factory()
        environment = Environment(slack_token=None, slack_webhook_url="https://hooks.slack.com")

        config = resolve_config(core, environment)

        assert config.webhook == "https://hooks.slack.com"
        assert "https://hooks.slack.com" in core.secrets

    def test_errors_when_token_without_method(self, core_factory, environment):
        """Test a token requires a method."""
        core = core_factory({"token": "xoxb-example"})

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(core, environment)

        assert exc_info.value.message == (
            "Missing input! A method must be decided to use the token provided."
        )
        assert "xoxb-example" in core.secrets

    def test_errors_when_nothing_provided(self, core_factory, environment):
        """Test a credential is required."""
        core = core_factory({"method": "chat.postMessage"})

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(core, environment)

        assert exc_info.value.message == (
            "Missing input! Either a token or webhook is required to take action."
        )
        assert core.secrets == []

    def test_webhook_types(self, core_factory, environment):
        """Test known webhook types are accepted."""
        for value, expected in [
            ("incoming-webhook", WebhookType.INCOMING_WEBHOOK),
            ("webhook-trigger", WebhookType.WEBHOOK_TRIGGER),
        ]:
            core = core_factory({"webhook": "https://hooks.slack.com", "webhook-type": value})
            config = resolve_config(core, environment)
            assert config.webhook_type == expected

    def test_errors_for_unknown_webhook_type(self, core_factory, environment):
        """Test an unknown webhook type is rejected."""
        core = core_factory({"webhook": "https://hooks.slack.com", "webhook-type": "post"})

        with pytest.raises(ConfigurationError, match="'incoming-webhook' or 'webhook-trigger'"):
            resolve_config(core, environment)

    def test_retries_ignore_case_and_whitespace(self, core_factory, environment):
        """Test retries values are normalized before matching."""
        core = core_factory({"webhook": "https://hooks.slack.com", "retries": " rapid "})

        config = resolve_config(core, environment)

        assert config.retries == Retries.RAPID

    def test_unknown_retries_warns_and_uses_default(self, core_factory, environment):
        """Test an unknown retries value is not fatal."""
        core = core_factory({"webhook": "https://hooks.slack.com", "retries": "FOREVER"})

        with capture_logs() as logs:
            config = resolve_config(core, environment)

        assert config.retries == Retries.FIVE
        warnings = [entry for entry in logs if entry["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["event"] == (
            'Invalid input! An unknown "retries" value was used: FOREVER'
        )

    def test_proxy_from_environment(self, core_factory):
        """Test the HTTPS proxy environment variable is used as a fallback."""
        core = core_factory({"webhook": "https://hooks.slack.com"})
        environment = Environment(
            slack_token=None,
            slack_webhook_url=None,
            https_proxy="http://proxy.example.com:3128",
        )

        config = resolve_config(core, environment)

        assert config.proxy == "http://proxy.example.com:3128"

    def test_proxy_input_takes_precedence(self, core_factory):
        """Test the proxy input wins over the environment."""
        core = core_factory({
            "webhook": "https://hooks.slack.com",
            "proxy": "https://input.example.com",
        })
        environment = Environment(
            slack_token=None,
            slack_webhook_url=None,
            https_proxy="http://env.example.com",
        )

        config = resolve_config(core, environment)

        assert config.proxy == "https://input.example.com"

    def test_errors_input_must_be_boolean(self, core_factory, environment):
        """Test boolean inputs reject other values."""
        core = core_factory({"webhook": "https://hooks.slack.com", "errors": "sometimes"})

        with pytest.raises(ConfigurationError, match='"errors" input must be a boolean'):
            resolve_config(core, environment)

    def test_debug_mode_from_runner(self, core_factory, environment):
        """Test runner debug mode is carried into the config."""
        core = core_factory({"webhook": "https://hooks.slack.com"}, RUNNER_DEBUG="1")

        config = resolve_config(core, environment)

        assert config.debug is True

    def test_secrets_hidden_from_repr(self, core_factory, environment):
        """Test credentials are not shown in the config repr."""
        core = core_factory({"token": "xoxb-example", "method": "chat.postMessage"})

        config = resolve_config(core, environment)

        assert "xoxb-example" not in repr(config)
