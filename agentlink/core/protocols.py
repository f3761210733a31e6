"""Capability interfaces for external service integrations"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Set

from agentlink.core.types.events import NormalizedEvent, RawWebhookRequest

Handler = Callable[[NormalizedEvent], Dict[str, Any]]
HandlerTable = Mapping[str, Handler]


class Connector(ABC):
    """Base class for external service connectors.

    Operations return result maps: ``{"ok": True, ...}`` on success and
    ``{"ok": False, "error": "..."}`` on failure.
    """

    connector_id: str = ""

    @abstractmethod
    def authenticate(self, credentials: Mapping[str, Any]) -> Dict[str, Any]:
        """Build an authenticated client; ``client`` key on success"""
        pass

    @abstractmethod
    def capabilities(self) -> Set[str]:
        """Supported operation groups: read, write, subscribe, search, webhook"""
        pass

    @abstractmethod
    def schema(self) -> Dict[str, Any]:
        """Describe the resources this connector exposes"""
        pass

    @abstractmethod
    def query(self, client: Any, params: Mapping[str, Any]) -> Dict[str, Any]:
        """Read resources from the external service"""
        pass

    @abstractmethod
    def mutate(self, client: Any, op: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Create, update or close resources on the external service"""
        pass

    @abstractmethod
    def subscribe(
        self,
        client: Any,
        event_type: str,
        callback: Handler
    ) -> Dict[str, Any]:
        """Subscribe to events pushed by the external service"""
        pass


class DataMapper(ABC):
    """Base class for mapping external records to memory entries and tasks"""

    @abstractmethod
    def to_memory(self, external: Mapping[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def to_task(self, external: Mapping[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def from_memory(self, entry: Mapping[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    def from_task(self, task: Mapping[str, Any]) -> Dict[str, Any]:
        pass


class WebhookHandler(ABC):
    """Base class for webhook handlers"""

    @abstractmethod
    def validate_signature(self, request: RawWebhookRequest, secret: str) -> bool:
        """Check the delivery signature against the shared secret"""
        pass

    @abstractmethod
    def event_type(self, request: RawWebhookRequest) -> str:
        """Return the service's event type for the delivery, or ''"""
        pass

    @abstractmethod
    def parse_event(self, request: RawWebhookRequest) -> NormalizedEvent:
        """Convert the delivery to a normalized event"""
        pass

    @abstractmethod
    def route_event(
        self,
        event: NormalizedEvent,
        handlers: HandlerTable
    ) -> Dict[str, Any]:
        """Dispatch the event to the matching handler"""
        pass
