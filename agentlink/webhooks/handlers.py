"""Webhook handlers for service events"""

import logging
from typing import Any, Dict, Type

from agentlink.core.exceptions import UnsupportedServiceError
from agentlink.core.protocols import HandlerTable, WebhookHandler
from agentlink.core.types.events import NormalizedEvent, RawWebhookRequest
from agentlink.webhooks.normalizer import normalize
from agentlink.webhooks.router import route
from agentlink.webhooks.signature import validate_signature

logger = logging.getLogger(__name__)


class WebhookHandlerFactory:
    """Factory for creating webhook handlers"""

    _handlers: Dict[str, Type[WebhookHandler]] = {}

    @classmethod
    def register(cls, service: str, handler_class: Type[WebhookHandler]) -> None:
        """Register a handler for a service"""
        cls._handlers[service] = handler_class

    @classmethod
    def create(cls, service: str) -> WebhookHandler:
        """Create a handler instance for a service"""
        if service not in cls._handlers:
            raise UnsupportedServiceError(f"No handler for service: {service}")
        return cls._handlers[service]()

    @classmethod
    def services(cls) -> list:
        return sorted(cls._handlers)


class GitHubWebhookHandler(WebhookHandler):
    """Handles GitHub webhook events"""

    SIGNATURE_HEADER = 'x-hub-signature-256'
    EVENT_HEADER = 'x-github-event'
    DELIVERY_HEADER = 'x-github-delivery'

    def validate_signature(self, request: RawWebhookRequest, secret: str) -> bool:
        """Validate webhook signature"""
        valid = validate_signature(
            request.body,
            request.headers.get(self.SIGNATURE_HEADER),
            secret
        )
        if not valid:
            logger.warning(
                "Rejected webhook signature",
                extra={
                    'delivery_id': request.headers.get(self.DELIVERY_HEADER),
                    'has_signature': self.SIGNATURE_HEADER in request.headers,
                }
            )
        return valid

    def event_type(self, request: RawWebhookRequest) -> str:
        """Return the X-GitHub-Event value"""
        return request.headers.get(self.EVENT_HEADER, '')

    def parse_event(self, request: RawWebhookRequest) -> NormalizedEvent:
        """Convert to normalized event format"""
        return normalize(self.event_type(request), request.payload)

    def route_event(
        self,
        event: NormalizedEvent,
        handlers: HandlerTable
    ) -> Dict[str, Any]:
        """Dispatch to the handler for the event kind"""
        return route(event, handlers)


WebhookHandlerFactory.register('github', GitHubWebhookHandler)
