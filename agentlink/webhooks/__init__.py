"""Webhook ingestion: signature verification, normalization and routing"""

from .handlers import GitHubWebhookHandler, WebhookHandlerFactory
from .normalizer import normalize
from .router import route
from .signature import compute_signature, validate_signature

__all__ = [
    'GitHubWebhookHandler',
    'WebhookHandlerFactory',
    'compute_signature',
    'normalize',
    'route',
    'validate_signature',
]
