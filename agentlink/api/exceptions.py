"""Webhook-specific exceptions"""

class WebhookError(Exception):
    """Base class for webhook errors"""
    status_code = 500

class InvalidSignatureError(WebhookError):
    """Invalid webhook signature"""
    status_code = 401

class MissingEventTypeError(WebhookError):
    """Delivery without an event type header"""
    status_code = 400

class InvalidPayloadError(WebhookError):
    """Delivery body is not a JSON object"""
    status_code = 400

class UnknownServiceError(WebhookError):
    """No webhook handler for the requested service"""
    status_code = 404
