"""Normalized event types for AgentLink"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Mapping, Union


class EventKind(str, Enum):
    """Canonical webhook event kinds"""
    ISSUE_OPENED = "issue-opened"
    ISSUE_CLOSED = "issue-closed"
    ISSUE_REOPENED = "issue-reopened"
    ISSUE_COMMENT_CREATED = "issue-comment-created"
    PR_OPENED = "pr-opened"
    PR_MERGED = "pr-merged"
    PR_CLOSED = "pr-closed"
    PR_UPDATED = "pr-updated"
    PR_REVIEW_SUBMITTED = "pr-review-submitted"
    PUSH = "push"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RawWebhookRequest:
    """A single inbound delivery as received by the HTTP layer"""
    headers: Mapping[str, str]
    body: bytes
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        headers: Mapping[str, str],
        body: bytes,
        payload: Optional[Dict[str, Any]] = None
    ) -> 'RawWebhookRequest':
        """Create a request with lower-cased header names"""
        return cls(
            headers={k.lower(): v for k, v in headers.items()},
            body=body,
            payload=payload if payload is not None else {}
        )


@dataclass(frozen=True)
class NormalizedEvent:
    """Service-independent view of one webhook delivery"""
    kind: EventKind
    source: Optional[str]
    action: Optional[str]
    data: Dict[str, Any]
    raw: Dict[str, Any]


@dataclass(frozen=True)
class AgentEvent:
    """Status update from an agent, posted to issues or channels"""
    agent: Optional[str] = None
    event: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def coerce(cls, value: Union['AgentEvent', Mapping[str, Any]]) -> 'AgentEvent':
        """Accept an AgentEvent or a mapping with agent/event/message keys"""
        if isinstance(value, cls):
            return value
        return cls(
            agent=value.get('agent'),
            event=value.get('event'),
            message=value.get('message')
        )
