"""Tests for the Slack service wrappers (slack_sdk is mocked)."""

from unittest.mock import MagicMock

import pytest
from slack_sdk.errors import SlackApiError

from agentlink.core.types.events import AgentEvent
from agentlink.services import slack


@pytest.fixture
def client():
    return MagicMock(name="web_client")


def test_send_message(client):
    client.chat_postMessage.return_value = {"ok": True, "ts": "1700.01", "channel": "C123"}

    result = slack.send_message(client, "#agents", "hello")

    client.chat_postMessage.assert_called_once_with(channel="#agents", text="hello")
    assert result == {"ok": True, "ts": "1700.01", "channel": "C123"}


def test_send_message_api_error(client):
    client.chat_postMessage.side_effect = SlackApiError(
        "failed", {"ok": False, "error": "channel_not_found"}
    )

    assert slack.send_message(client, "#nope", "hi") == {"ok": False, "error": "channel_not_found"}


def test_create_client_uses_token():
    assert slack.create_client("xoxb-test").token == "xoxb-test"


@pytest.mark.parametrize(
    "kind, emoji",
    [("started", "🚀"), ("progress", "⏳"), ("completed", "🎉"), ("error", "❌"), ("blocked", "🚧")],
)
def test_format_agent_event(kind, emoji):
    text = slack.format_agent_event(AgentEvent(agent="agent-2", event=kind, message="Working"))
    assert text == f"{emoji} *agent-2* {kind}: Working"


def test_format_unknown_event_and_agent():
    assert slack.format_agent_event(AgentEvent(event="custom", message="m")) == "📢 *unknown* custom: m"


def test_notify_channel(client):
    client.chat_postMessage.return_value = {"ok": True, "ts": "1", "channel": "C1"}
    event = AgentEvent(agent="a", event="completed", message="done")

    slack.notify_channel(client, "#agents", event)

    client.chat_postMessage.assert_called_once_with(
        channel="#agents", text=slack.format_agent_event(event)
    )
