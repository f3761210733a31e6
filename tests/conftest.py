"""Pytest configuration for all tests."""

import json

import pytest

from agentlink.app import create_app
from agentlink.config import TestingConfig
from agentlink.webhooks.signature import compute_signature

WEBHOOK_SECRET = TestingConfig.GITHUB_WEBHOOK_SECRET


@pytest.fixture
def handled():
    """Records events seen by the handler table"""
    return []


@pytest.fixture
def app(handled):
    def on_issue_opened(event):
        handled.append(event)
        return {"ok": True, "number": event.data["number"]}

    return create_app(TestingConfig(), handlers={"issue-opened": on_issue_opened})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def post_webhook(client):
    """POST a signed GitHub delivery"""

    def _post(event_type, payload, secret=WEBHOOK_SECRET, signature=None, body=None):
        body = body if body is not None else json.dumps(payload).encode()
        headers = {"Content-Type": "application/json"}
        if event_type is not None:
            headers["X-GitHub-Event"] = event_type
        headers["X-GitHub-Delivery"] = "delivery-1"
        if signature is None and secret is not None:
            signature = compute_signature(body, secret)
        if signature is not None:
            headers["X-Hub-Signature-256"] = signature
        return client.post("/api/webhooks/github", data=body, headers=headers)

    return _post
