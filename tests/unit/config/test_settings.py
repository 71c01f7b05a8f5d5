"""
Module: test_settings.py
Description: Unit tests for the environment snapshot.
"""

import json

import pytest

from slack_send.config.settings import Environment
from slack_send.errors import ContentParseError


class TestTriggerContext:
    """Test cases for Environment.trigger_context."""

    def test_reads_event_payload(self, tmp_path):
        """Test the event file is parsed into the context."""
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps({"pull_request": {"number": 12}}), encoding="utf-8")
        environment = Environment(github_event_path=str(event_path), github_event_name="pull_request")

        context = environment.trigger_context()

        assert context["event"] == {"pull_request": {"number": 12}}
        assert context["event_name"] == "pull_request"

    def test_missing_event_file_is_empty(self, tmp_path):
        """Test a missing event file leaves the event empty."""
        environment = Environment(github_event_path=str(tmp_path / "missing.json"))

        assert environment.trigger_context()["event"] == {}

    def test_malformed_event_file(self, tmp_path):
        """Test an invalid event file raises a content error."""
        event_path = tmp_path / "event.json"
        event_path.write_text('{"pull_request": ', encoding="utf-8")
        environment = Environment(github_event_path=str(event_path))

        with pytest.raises(ContentParseError) as exc_info:
            environment.trigger_context()

        error = exc_info.value
        assert error.message == "Invalid input! Failed to parse contents of the event payload"
        assert isinstance(error.causes[0], json.JSONDecodeError)
