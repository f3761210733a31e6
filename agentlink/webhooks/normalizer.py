"""GitHub webhook payload normalization.

Maps a raw ``(event type, payload)`` pair from a GitHub delivery to a
:class:`NormalizedEvent` with a closed ``kind`` and a small ``data`` mapping.

Payload structure used here (abridged):
{
  "action": "opened",
  "repository": {"full_name": "owner/repo"},
  "issue": {"number": 42, "title": "...", "user": {"login": "..."}},
  "pull_request": {"number": 10, "title": "...", "merged": true,
                   "user": {"login": "..."}},
  "comment": {"id": 1, "body": "...", "user": {"login": "..."}},
  "ref": "refs/heads/main", "before": "...", "after": "...", "commits": [...]
}

Unrecognized combinations degrade to ``EventKind.UNKNOWN`` and missing
fields degrade to None; normalization never raises.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from agentlink.core.types.events import EventKind, NormalizedEvent

logger = logging.getLogger(__name__)

EVENT_KINDS: Dict[Tuple[str, Optional[str]], EventKind] = {
    ('issues', 'opened'): EventKind.ISSUE_OPENED,
    ('issues', 'closed'): EventKind.ISSUE_CLOSED,
    ('issues', 'reopened'): EventKind.ISSUE_REOPENED,
    ('issue_comment', 'created'): EventKind.ISSUE_COMMENT_CREATED,
    ('pull_request', 'opened'): EventKind.PR_OPENED,
    ('pull_request', 'synchronize'): EventKind.PR_UPDATED,
    ('pull_request_review', 'submitted'): EventKind.PR_REVIEW_SUBMITTED,
    ('push', None): EventKind.PUSH,
}


def _get(tree: Any, *path: str) -> Any:
    """Walk nested mappings, returning None on any missing level"""
    for key in path:
        if not isinstance(tree, Mapping):
            return None
        tree = tree.get(key)
    return tree


def classify(event_type: str, payload: Mapping[str, Any]) -> EventKind:
    """Return the event kind for an event type and payload"""
    action = payload.get('action')
    if action is not None and not isinstance(action, str):
        return EventKind.UNKNOWN

    if event_type == 'pull_request' and action == 'closed':
        if _get(payload, 'pull_request', 'merged') is True:
            return EventKind.PR_MERGED
        return EventKind.PR_CLOSED

    return EVENT_KINDS.get((event_type, action), EventKind.UNKNOWN)


def _issue_data(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        'number': _get(payload, 'issue', 'number'),
        'title': _get(payload, 'issue', 'title'),
        'author': _get(payload, 'issue', 'user', 'login'),
    }


def _pull_request_data(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        'number': _get(payload, 'pull_request', 'number'),
        'title': _get(payload, 'pull_request', 'title'),
        'author': _get(payload, 'pull_request', 'user', 'login'),
        'merged': _get(payload, 'pull_request', 'merged'),
    }


def _comment_data(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        'issue_number': _get(payload, 'issue', 'number'),
        'comment_id': _get(payload, 'comment', 'id'),
        'author': _get(payload, 'comment', 'user', 'login'),
        'body': _get(payload, 'comment', 'body'),
    }


def _push_data(payload: Mapping[str, Any]) -> Dict[str, Any]:
    commits = payload.get('commits')
    return {
        'ref': payload.get('ref'),
        'before': payload.get('before'),
        'after': payload.get('after'),
        'commits': len(commits) if isinstance(commits, list) else 0,
    }


# event type -> (top-level key that must be present, extractor)
EXTRACTORS: Dict[str, Tuple[Optional[str], Callable[[Mapping[str, Any]], Dict[str, Any]]]] = {
    'issues': ('issue', _issue_data),
    'pull_request': ('pull_request', _pull_request_data),
    'issue_comment': ('comment', _comment_data),
    'push': (None, _push_data),
}


def extract_data(event_type: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Return the kind-specific fields, or the raw payload as a fallback"""
    if event_type not in EXTRACTORS:
        return payload
    required_key, extractor = EXTRACTORS[event_type]
    if required_key is not None and not isinstance(payload.get(required_key), Mapping):
        return payload
    return extractor(payload)


def normalize(event_type: Optional[str], payload: Any) -> NormalizedEvent:
    """Normalize a GitHub webhook delivery"""
    if not isinstance(payload, dict):
        payload = {}
    event_type = event_type or ''

    kind = classify(event_type, payload)
    source = _get(payload, 'repository', 'full_name')
    action = payload.get('action')

    event = NormalizedEvent(
        kind=kind,
        source=source if isinstance(source, str) else None,
        action=action if isinstance(action, str) else None,
        data=extract_data(event_type, payload),
        raw=payload
    )

    logger.debug(
        "Normalized webhook event",
        extra={
            'event_type': event_type,
            'action': event.action,
            'kind': kind.value,
            'repository': event.source,
        }
    )
    return event
