"""
Module: conftest.py
Description: Shared pytest fixtures for slack-send tests.

Provides a runner toolkit backed by an in-memory environment, an
environment snapshot that ignores the real process variables, and sample
content used across tests.
"""

import io

import pytest

from slack_send.config.settings import Config, Environment, Retries
from slack_send.utils.actions import ActionsCore


def make_core(inputs=None, **environ):
    """
    Create an ActionsCore with the given action inputs.

    Args:
        inputs: Mapping of input name to value
        **environ: Extra environment variables

    Returns:
        ActionsCore writing commands to an in-memory stream
    """
    values = {f"INPUT_{name.upper()}": value for name, value in (inputs or {}).items()}
    values.update(environ)
    return ActionsCore(environ=values, stream=io.StringIO())


@pytest.fixture
def core_factory():
    """Provide a factory for runner toolkits with custom inputs."""
    return make_core


@pytest.fixture
def environment():
    """
    Provide an environment snapshot without credentials or proxies.

    Values are passed explicitly so variables of the machine running the
    tests do not leak into the configuration.
    """
    return Environment(
        slack_token=None,
        slack_webhook_url=None,
        https_proxy=None,
        runner_debug=False,
        github_event_path=None,
        github_event_name="push",
        github_sha="ffac537e6cbbf934b08745a378932722df287a53",
        github_ref="refs/heads/main",
        github_workflow="CI",
        github_actor="octocat",
        github_repository="octo-org/octo-repo",
    )


@pytest.fixture
def token_config():
    """Provide a configuration for calling chat.postMessage."""
    return Config(
        method="chat.postMessage",
        token="xoxb-example",
        retries=Retries.ZERO,
    )


@pytest.fixture
def webhook_config():
    """Provide a configuration for posting to an incoming webhook."""
    return Config(
        webhook="https://hooks.slack.com/services/T000/B000/XXXX",
        retries=Retries.ZERO,
    )


@pytest.fixture
def sample_content():
    """Provide message content for delivery tests."""
    return {
        "channel": "C0123456789",
        "text": "A new release was published",
        "blocks": [
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": "*v2.1.0* is out"},
            }
        ],
    }
