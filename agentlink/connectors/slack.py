"""Slack connector"""

import logging
from typing import Any, Dict, Mapping, Set

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from agentlink.core.protocols import Connector, Handler
from agentlink.core.types.events import AgentEvent
from agentlink.services import slack as slack_service

logger = logging.getLogger(__name__)


class SlackConnector(Connector):
    """Connector for posting messages to Slack channels"""

    connector_id = "slack"

    def authenticate(self, credentials: Mapping[str, Any]) -> Dict[str, Any]:
        """Authenticate with a bot token (``{"token": "xoxb-..."}``)"""
        token = credentials.get("token")
        if not token:
            return {"ok": False, "error": "Missing token"}

        client = slack_service.create_client(token)
        try:
            response = client.auth_test()
        except SlackApiError as e:
            error = e.response.get("error", str(e)) if e.response is not None else str(e)
            logger.warning("Slack authentication failed", extra={"error": error})
            return {"ok": False, "error": error}

        return {
            "ok": True,
            "client": client,
            "team": response.get("team"),
            "user": response.get("user"),
        }

    def capabilities(self) -> Set[str]:
        return {"write"}

    def schema(self) -> Dict[str, Any]:
        return {"message": {"channel": str, "text": str, "ts": str}}

    def query(self, client: WebClient, params: Mapping[str, Any]) -> Dict[str, Any]:
        return {"ok": False, "error": "slack connector does not support queries"}

    def mutate(self, client: WebClient, op: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Perform ``send`` (channel, text) or ``notify`` (channel, event)"""
        channel = data.get("channel")
        if not channel:
            return {"ok": False, "error": "Missing channel"}

        if op == "send":
            result = slack_service.send_message(client, channel, data.get("text", ""))
        elif op == "notify":
            if data.get("event") is None:
                return {"ok": False, "error": "Missing field for notify: event"}
            result = slack_service.notify_channel(client, channel, AgentEvent.coerce(data["event"]))
        else:
            return {"ok": False, "error": f"slack connector does not support: {op}"}

        if not result["ok"]:
            return result
        return {"ok": True, "result": {k: v for k, v in result.items() if k != "ok"}}

    def subscribe(self, client: WebClient, event_type: str, callback: Handler) -> Dict[str, Any]:
        return {"ok": False, "error": "slack connector does not support subscriptions"}
