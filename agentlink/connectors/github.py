"""GitHub connector and data mapper"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Set

import requests
from github import Github, GithubException

from agentlink.core.exceptions import UnsupportedOperationError
from agentlink.core.protocols import Connector, DataMapper, Handler
from agentlink.core.types.events import AgentEvent
from agentlink.services import github as github_service

logger = logging.getLogger(__name__)

PRIORITY_LABEL_PREFIX = "priority:"
PRIORITIES = ("low", "medium", "high")
DEFAULT_PRIORITY = "medium"
SYSTEM_TAG = "github"


class GitHubConnector(Connector):
    """Connector for GitHub issues and pull requests"""

    connector_id = "github"

    def authenticate(self, credentials: Mapping[str, Any]) -> Dict[str, Any]:
        """Authenticate with a personal access token.

        Args:
            credentials: ``{"token": "ghp_..."}``

        Returns:
            ``{"ok": True, "client": Github, "login": str}`` on success
        """
        token = credentials.get("token")
        if not token:
            return {"ok": False, "error": "Missing token"}

        client = github_service.create_client(token)
        try:
            login = client.get_user().login
        except (GithubException, requests.RequestException) as e:
            logger.warning("GitHub authentication failed", extra={"error_type": type(e).__name__})
            return {"ok": False, "error": f"Authentication failed: {e}"}

        logger.info("Authenticated with GitHub", extra={"login": login})
        return {"ok": True, "client": client, "login": login}

    def capabilities(self) -> Set[str]:
        return {"read", "write", "webhook"}

    def schema(self) -> Dict[str, Any]:
        return {
            "issue": {
                "number": int,
                "title": str,
                "body": str,
                "state": str,
                "url": str,
                "labels": List[str],
            },
            "pull_request": {
                "number": int,
                "title": str,
                "state": str,
                "url": str,
                "merged": bool,
                "author": str,
            },
        }

    def query(self, client: Github, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Query issues or pull requests.

        Params: ``resource`` (issues | pull_requests), ``repo``, ``state``
        (open | closed | all), ``labels`` and ``limit``.
        """
        resource = params.get("resource")
        repo = params.get("repo")
        state = params.get("state", "open")
        limit = params.get("limit")
        if not repo:
            return {"ok": False, "error": "Missing repo"}

        try:
            if resource == "issues":
                data = github_service.list_issues(
                    client, repo, state=state, labels=params.get("labels"), limit=limit
                )
            elif resource == "pull_requests":
                data = github_service.list_pull_requests(client, repo, state=state, limit=limit)
            else:
                return {"ok": False, "error": f"Unsupported resource: {resource}"}
        except ValueError as e:
            return {"ok": False, "error": str(e)}
        except (GithubException, requests.RequestException) as e:
            return github_service.error_result(e)

        return {"ok": True, "data": data}

    def _operation(self, op: str) -> Callable[[Github, Mapping[str, Any]], Dict[str, Any]]:
        operations = {
            "create": lambda client, data: github_service.create_issue(
                client, data["repo"], data["title"], data.get("body", ""),
                labels=data.get("labels"), assignees=data.get("assignees"),
            ),
            "update": lambda client, data: github_service.update_issue(
                client, data["repo"], data["number"],
                title=data.get("title"), body=data.get("body"), labels=data.get("labels"),
            ),
            "comment": lambda client, data: github_service.comment_on_issue(
                client, data["repo"], data["number"], data["body"]
            ),
            "close": lambda client, data: github_service.close_issue(
                client, data["repo"], data["number"]
            ),
            "reopen": lambda client, data: github_service.reopen_issue(
                client, data["repo"], data["number"]
            ),
            "notify": lambda client, data: github_service.notify_issue(
                client, data["repo"], data["number"], AgentEvent.coerce(data["event"])
            ),
        }
        if op not in operations:
            raise UnsupportedOperationError(self.connector_id, op)
        return operations[op]

    def mutate(self, client: Github, op: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Perform ``op`` (create, update, comment, close, reopen, notify)"""
        try:
            operation = self._operation(op)
            result = operation(client, data)
        except UnsupportedOperationError as e:
            return {"ok": False, "error": str(e)}
        except KeyError as e:
            return {"ok": False, "error": f"Missing field for {op}: {e.args[0]}"}

        if not result["ok"]:
            return result
        return {"ok": True, "result": {k: v for k, v in result.items() if k != "ok"}}

    def subscribe(self, client: Github, event_type: str, callback: Handler) -> Dict[str, Any]:
        return {
            "ok": False,
            "error": "GitHub events are delivered by webhook; route them with GitHubWebhookHandler",
        }


class GitHubDataMapper(DataMapper):
    """Maps GitHub issues to memory entries and kanban tasks and back"""

    def _external_ref(self, issue: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "external_ref": {"system": SYSTEM_TAG, "id": str(issue.get("number"))},
            "external_url": issue.get("url"),
        }

    def _priority(self, labels: List[str]) -> str:
        for label in labels:
            if label.startswith(PRIORITY_LABEL_PREFIX):
                level = label[len(PRIORITY_LABEL_PREFIX):]
                if level in PRIORITIES:
                    return level
        return DEFAULT_PRIORITY

    def to_memory(self, external: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert an issue to a note entry"""
        labels = list(external.get("labels") or [])
        return {
            "type": "note",
            "content": f"# {external.get('title', '')}\n\n{external.get('body') or ''}",
            "tags": [SYSTEM_TAG] + labels,
            "metadata": self._external_ref(external),
        }

    def to_task(self, external: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert an issue to a kanban task; closed issues are done"""
        labels = list(external.get("labels") or [])
        state = str(external.get("state") or "open").lower()
        return {
            "title": external.get("title", ""),
            "description": external.get("body") or "",
            "status": "done" if state == "closed" else "todo",
            "priority": self._priority(labels),
            "metadata": self._external_ref(external),
        }

    def from_memory(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert a memory entry to issue fields.

        The first line of the content, without a leading ``#``, becomes the
        title and the rest the body.
        """
        content = entry.get("content") or ""
        first_line, _, rest = content.partition("\n")
        return {
            "title": first_line.lstrip("#").strip(),
            "body": rest,
            "labels": [tag for tag in entry.get("tags") or [] if tag != SYSTEM_TAG],
        }

    def from_task(self, task: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert a kanban task to issue fields"""
        priority = task.get("priority") or DEFAULT_PRIORITY
        return {
            "title": task.get("title", ""),
            "body": task.get("description") or "",
            "labels": [f"{PRIORITY_LABEL_PREFIX}{priority}"],
            "state": "closed" if task.get("status") == "done" else "open",
        }

