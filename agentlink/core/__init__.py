"""
Core module for AgentLink event types and capability interfaces.
"""
from agentlink.core.types.events import AgentEvent, EventKind, NormalizedEvent, RawWebhookRequest

__all__ = ['AgentEvent', 'EventKind', 'NormalizedEvent', 'RawWebhookRequest']
