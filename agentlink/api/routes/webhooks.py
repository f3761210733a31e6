"""Webhook routes for AgentLink"""

from typing import Dict, Mapping, Optional

from flask import Blueprint, Flask, current_app, jsonify, request

from agentlink.core.exceptions import UnsupportedServiceError
from agentlink.core.protocols import Handler, WebhookHandler
from agentlink.core.types.events import RawWebhookRequest
from agentlink.extensions import limiter
from agentlink.webhooks.handlers import WebhookHandlerFactory

from ..exceptions import (
    InvalidPayloadError,
    InvalidSignatureError,
    MissingEventTypeError,
    UnknownServiceError,
    WebhookError,
)

HANDLERS_KEY = "webhook_handlers"
METRICS_KEY = "webhook_metrics"

webhooks_bp = Blueprint("webhooks", __name__)


def register_handlers(app: Flask, handlers: Optional[Mapping[str, Handler]] = None) -> None:
    """Attach the event handler table used by the webhook route"""
    table = dict(handlers or {})
    app.extensions[HANDLERS_KEY] = table
    app.extensions.setdefault(
        METRICS_KEY, {"processed": 0, "unhandled": 0, "rejected": 0, "errors": 0}
    )
    app.logger.info(
        "Webhook handlers registered",
        extra={
            "services": WebhookHandlerFactory.services(),
            "event_kinds": sorted(str(getattr(k, "value", k)) for k in table),
        },
    )


def _metrics() -> Dict[str, int]:
    return current_app.extensions.setdefault(
        METRICS_KEY, {"processed": 0, "unhandled": 0, "rejected": 0, "errors": 0}
    )


def _create_handler(service: str) -> WebhookHandler:
    try:
        return WebhookHandlerFactory.create(service)
    except UnsupportedServiceError as e:
        raise UnknownServiceError(str(e)) from e


@webhooks_bp.route("/webhooks/health")
def health():
    """Health check endpoint for webhooks"""
    return jsonify({"status": "healthy", "metrics": dict(_metrics())})


@webhooks_bp.route("/webhooks/<service>", methods=["POST"])
@limiter.limit(lambda: current_app.config["WEBHOOK_RATE_LIMIT"])
def webhook(service: str):
    """Verify, normalize and dispatch a webhook delivery"""
    try:
        handler = _create_handler(service)
        payload = request.get_json(silent=True, force=True)
        delivery = RawWebhookRequest.build(
            headers=dict(request.headers),
            body=request.get_data(),
            payload=payload if isinstance(payload, dict) else None,
        )
        event_type = handler.event_type(delivery)

        current_app.logger.info(
            f"Received {service} webhook",
            extra={
                "service": service,
                "event_type": event_type or "unknown",
                "content_length": request.content_length,
            },
        )

        # Signature gate runs before anything looks at the payload
        secret = current_app.config.get(f"{service.upper()}_WEBHOOK_SECRET")
        if not handler.validate_signature(delivery, secret):
            _metrics()["rejected"] += 1
            raise InvalidSignatureError("Invalid signature")

        if not event_type:
            raise MissingEventTypeError("Missing event type header")

        if event_type == "ping":
            return jsonify(
                {"status": "ok", "message": "Webhook configured successfully"}
            )

        if not isinstance(payload, dict):
            raise InvalidPayloadError("Payload must be a JSON object")

        event = handler.parse_event(delivery)
        handlers = current_app.extensions.get(HANDLERS_KEY, {})
        result = handler.route_event(event, handlers)

        if isinstance(result, Mapping) and result.get("ok") is False:
            _metrics()["unhandled"] += 1
            current_app.logger.info(
                "Webhook accepted without processing",
                extra={
                    "service": service,
                    "kind": event.kind.value,
                    "action": event.action,
                    "error": result.get("error"),
                },
            )
            return jsonify(
                {"status": "accepted", "event": event.kind.value, "result": result}
            ), 202

        _metrics()["processed"] += 1
        current_app.logger.info(
            "Webhook processed successfully",
            extra={
                "service": service,
                "kind": event.kind.value,
                "repository": event.source,
            },
        )
        return jsonify(
            {"status": "processed", "event": event.kind.value, "result": result}
        )

    except WebhookError as e:
        current_app.logger.warning(
            "Webhook error", extra={"error": str(e), "status_code": e.status_code}
        )
        return jsonify({"error": str(e)}), e.status_code

    except Exception as e:
        _metrics()["errors"] += 1
        current_app.logger.exception(
            "Webhook processing failed",
            extra={"error": str(e), "error_type": type(e).__name__, "service": service},
        )
        return jsonify({"error": "Internal server error", "message": str(e)}), 500
