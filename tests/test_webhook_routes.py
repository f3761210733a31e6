"""Tests for the webhook HTTP endpoint."""

import json

from agentlink.app import create_app
from agentlink.config import TestingConfig
from agentlink.extensions import limiter
from agentlink.webhooks.signature import compute_signature

from helpers import issue_payload, pull_request_payload


def test_valid_delivery_is_dispatched(post_webhook, handled):
    response = post_webhook("issues", issue_payload())

    assert response.status_code == 200
    assert response.get_json() == {
        "status": "processed",
        "event": "issue-opened",
        "result": {"ok": True, "number": 42},
    }
    assert len(handled) == 1
    assert handled[0].source == "o/r"


def test_invalid_signature_is_rejected_before_dispatch(post_webhook, handled):
    response = post_webhook("issues", issue_payload(), secret="wrong-secret")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid signature"}
    assert handled == []


def test_missing_signature_is_rejected(post_webhook, handled):
    response = post_webhook("issues", issue_payload(), secret=None)

    assert response.status_code == 401
    assert handled == []


def test_signature_without_prefix_is_rejected(post_webhook):
    response = post_webhook("issues", issue_payload(), signature="deadbeef")
    assert response.status_code == 401


def test_signature_checked_before_event_type(post_webhook):
    response = post_webhook(None, issue_payload(), secret="wrong-secret")
    assert response.status_code == 401


def test_missing_event_type(post_webhook):
    response = post_webhook(None, issue_payload())
    assert response.status_code == 400


def test_ping(post_webhook):
    response = post_webhook("ping", {"zen": "Keep it logically awesome."})

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_non_object_payload(post_webhook):
    response = post_webhook("issues", None, body=b"not json")
    assert response.status_code == 400

    response = post_webhook("issues", None, body=json.dumps([1, 2]).encode())
    assert response.status_code == 400


def test_unhandled_event_is_acknowledged(post_webhook):
    response = post_webhook("pull_request", pull_request_payload(merged=True))

    assert response.status_code == 202
    body = response.get_json()
    assert body["status"] == "accepted"
    assert body["event"] == "pr-merged"
    assert body["result"] == {"ok": False, "error": "No handler for event: pr-merged"}


def test_unknown_event_is_acknowledged(post_webhook):
    response = post_webhook("release", {"action": "published"})

    assert response.status_code == 202
    assert response.get_json()["event"] == "unknown"


def test_handler_failure_returns_500():
    def broken(event):
        raise RuntimeError("handler exploded")

    app = create_app(TestingConfig(), handlers={"issue-opened": broken})
    body = json.dumps(issue_payload()).encode()
    response = app.test_client().post(
        "/api/webhooks/github",
        data=body,
        headers={
            "X-GitHub-Event": "issues",
            "X-Hub-Signature-256": compute_signature(body, TestingConfig.GITHUB_WEBHOOK_SECRET),
        },
    )

    assert response.status_code == 500
    assert response.get_json()["message"] == "handler exploded"


def test_unknown_service(client):
    response = client.post("/api/webhooks/gitlab", data=b"{}")
    assert response.status_code == 404


def test_unconfigured_secret_rejects_everything():
    app = create_app(TestingConfig(GITHUB_WEBHOOK_SECRET=None))
    body = json.dumps(issue_payload()).encode()
    response = app.test_client().post(
        "/api/webhooks/github",
        data=body,
        headers={"X-GitHub-Event": "issues", "X-Hub-Signature-256": compute_signature(body, "x")},
    )
    assert response.status_code == 401


def test_health_reports_metrics(client, post_webhook):
    post_webhook("issues", issue_payload())
    post_webhook("issues", issue_payload(), secret="wrong-secret")
    post_webhook("push", {"ref": "refs/heads/main", "commits": []})

    metrics = client.get("/api/webhooks/health").get_json()["metrics"]

    assert metrics == {"processed": 1, "unhandled": 1, "rejected": 1, "errors": 0}


def test_rate_limit():
    app = create_app(TestingConfig(RATELIMIT_ENABLED=True, WEBHOOK_RATE_LIMIT="1/minute"))
    limiter.reset()
    client = app.test_client()
    body = json.dumps({"zen": "ping"}).encode()
    headers = {
        "X-GitHub-Event": "ping",
        "X-Hub-Signature-256": compute_signature(body, TestingConfig.GITHUB_WEBHOOK_SECRET),
    }

    assert client.post("/api/webhooks/github", data=body, headers=headers).status_code == 200
    assert client.post("/api/webhooks/github", data=body, headers=headers).status_code == 429
