"""Slack service integration"""

import logging
from typing import Any, Dict

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from agentlink.core.types.events import AgentEvent

logger = logging.getLogger(__name__)

EVENT_EMOJI = {
    "started": "🚀",
    "progress": "⏳",
    "completed": "🎉",
    "error": "❌",
    "blocked": "🚧",
}

DEFAULT_EMOJI = "📢"


def create_client(token: str) -> WebClient:
    """Create a Slack Web API client for a bot token (xoxb-...).

    The client is thread-safe and can be reused across calls.
    """
    return WebClient(token=token)


def send_message(client: WebClient, channel: str, text: str) -> Dict[str, Any]:
    """Send a message to a channel name (#general) or ID (C01234...)"""
    try:
        response = client.chat_postMessage(channel=channel, text=text)
    except SlackApiError as e:
        error = e.response.get("error", str(e)) if e.response is not None else str(e)
        logger.warning("Slack message failed", extra={"channel": channel, "error": error})
        return {"ok": False, "error": error}

    return {"ok": True, "ts": response.get("ts"), "channel": response.get("channel")}


def format_agent_event(event: AgentEvent) -> str:
    """Format an agent event as Slack mrkdwn"""
    emoji = EVENT_EMOJI.get(event.event, DEFAULT_EMOJI)
    return f"{emoji} *{event.agent or 'unknown'}* {event.event or ''}: {event.message or ''}"


def notify_channel(client: WebClient, channel: str, event: AgentEvent) -> Dict[str, Any]:
    """Send a formatted agent event to a channel"""
    return send_message(client, channel, format_agent_event(event))
