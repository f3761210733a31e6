"""GitHub service integration"""

import logging
from itertools import islice
from typing import Any, Dict, List, Optional, Sequence

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from agentlink.core.types.events import AgentEvent

logger = logging.getLogger(__name__)

ISSUE_STATES = ("open", "closed", "all")

EVENT_EMOJI = {
    "started": "🚀",
    "progress": "⏳",
    "completed": "✅",
    "error": "❌",
    "blocked": "🚧",
}

EVENT_STATUS = {
    "started": "Started",
    "progress": "In Progress",
    "completed": "Completed",
    "error": "Error",
    "blocked": "Blocked",
}

DEFAULT_EMOJI = "📢"


def create_client(token: str) -> Github:
    """Create a GitHub client authenticated with a personal access token"""
    return Github(auth=Auth.Token(token))


def error_result(e: Exception) -> Dict[str, Any]:
    if isinstance(e, GithubException) and isinstance(e.data, dict) and e.data.get("message"):
        message = e.data["message"]
    else:
        message = str(e)
    logger.warning(
        "GitHub request failed",
        extra={"error": message, "error_type": type(e).__name__}
    )
    return {"ok": False, "error": message}


def _check_state(state: str) -> str:
    if state not in ISSUE_STATES:
        raise ValueError(f"Invalid state: {state!r}, expected one of {ISSUE_STATES}")
    return state


def get_repo(client: Github, repo: str) -> Repository:
    """Get a repository by ``owner/name``"""
    return client.get_repo(repo)


def create_issue(
    client: Github,
    repo: str,
    title: str,
    body: str,
    labels: Optional[Sequence[str]] = None,
    assignees: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """Create a new issue in a repository.

    Returns ``{"ok": True, "number": N, "url": "..."}`` on success.
    """
    kwargs: Dict[str, Any] = {"title": title, "body": body}
    if labels:
        kwargs["labels"] = list(labels)
    if assignees:
        kwargs["assignees"] = list(assignees)
    try:
        issue = get_repo(client, repo).create_issue(**kwargs)
    except (GithubException, requests.RequestException) as e:
        return error_result(e)

    logger.info("Created issue", extra={"repository": repo, "number": issue.number})
    return {"ok": True, "number": issue.number, "url": issue.html_url}


def comment_on_issue(client: Github, repo: str, number: int, body: str) -> Dict[str, Any]:
    """Add a comment to an issue or pull request"""
    try:
        comment = get_repo(client, repo).get_issue(number).create_comment(body)
    except (GithubException, requests.RequestException) as e:
        return error_result(e)
    return {"ok": True, "id": comment.id}


def _set_state(client: Github, repo: str, number: int, state: str) -> Dict[str, Any]:
    try:
        get_repo(client, repo).get_issue(number).edit(state=state)
    except (GithubException, requests.RequestException) as e:
        return error_result(e)
    logger.info("Changed issue state", extra={"repository": repo, "number": number, "state": state})
    return {"ok": True}


def close_issue(client: Github, repo: str, number: int) -> Dict[str, Any]:
    """Close an issue"""
    return _set_state(client, repo, number, "closed")


def reopen_issue(client: Github, repo: str, number: int) -> Dict[str, Any]:
    """Reopen a closed issue"""
    return _set_state(client, repo, number, "open")


def update_issue(
    client: Github,
    repo: str,
    number: int,
    title: Optional[str] = None,
    body: Optional[str] = None,
    labels: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """Update the title, body or labels of an issue; None leaves a field as is"""
    changes: Dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if body is not None:
        changes["body"] = body
    if labels is not None:
        changes["labels"] = list(labels)
    if not changes:
        return {"ok": True, "number": number}
    try:
        get_repo(client, repo).get_issue(number).edit(**changes)
    except (GithubException, requests.RequestException) as e:
        return error_result(e)
    return {"ok": True, "number": number}


def _issue_to_dict(issue) -> Dict[str, Any]:
    return {
        "number": issue.number,
        "title": issue.title,
        "state": issue.state,
        "url": issue.html_url,
        "labels": [label.name for label in issue.labels],
        "body": issue.body or "",
    }


def list_issues(
    client: Github,
    repo: str,
    state: str = "open",
    labels: Optional[Sequence[str]] = None,
    limit: Optional[int] = None
) -> List[Dict[str, Any]]:
    """List issues in a repository, excluding pull requests.

    Raises GithubException on API failures.
    """
    kwargs: Dict[str, Any] = {"state": _check_state(state)}
    if labels:
        kwargs["labels"] = list(labels)
    issues = (
        issue for issue in get_repo(client, repo).get_issues(**kwargs)
        if issue.pull_request is None
    )
    return [_issue_to_dict(issue) for issue in islice(issues, limit)]


def list_pull_requests(
    client: Github,
    repo: str,
    state: str = "open",
    limit: Optional[int] = None
) -> List[Dict[str, Any]]:
    """List pull requests in a repository.

    Raises GithubException on API failures.
    """
    pulls = get_repo(client, repo).get_pulls(state=_check_state(state))
    return [
        {
            "number": pr.number,
            "title": pr.title,
            "state": pr.state,
            "url": pr.html_url,
            "merged": pr.merged_at is not None,
            "author": pr.user.login if pr.user else None,
        }
        for pr in islice(pulls, limit)
    ]


def format_agent_event(event: AgentEvent) -> str:
    """Format an agent event as GitHub markdown"""
    emoji = EVENT_EMOJI.get(event.event, DEFAULT_EMOJI)
    status = EVENT_STATUS.get(event.event, event.event or "")
    return f"{emoji} **{event.agent or 'unknown'}** | {status}\n\n{event.message or ''}"


def notify_issue(client: Github, repo: str, number: int, event: AgentEvent) -> Dict[str, Any]:
    """Post a formatted agent event as a comment on an issue or PR"""
    return comment_on_issue(client, repo, number, format_agent_event(event))
