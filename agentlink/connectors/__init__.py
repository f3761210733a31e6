"""Connectors for external collaboration services"""

from typing import Dict, List, Type

from agentlink.core.exceptions import ConnectorNotFoundError
from agentlink.core.protocols import Connector

from .github import GitHubConnector, GitHubDataMapper
from .slack import SlackConnector


class ConnectorFactory:
    """Factory for creating connectors"""

    _connectors: Dict[str, Type[Connector]] = {}

    @classmethod
    def register(cls, service: str, connector_class: Type[Connector]) -> None:
        """Register a connector for a service"""
        cls._connectors[service] = connector_class

    @classmethod
    def create(cls, service: str) -> Connector:
        """Create a connector instance for a service"""
        if service not in cls._connectors:
            raise ConnectorNotFoundError(service)
        return cls._connectors[service]()

    @classmethod
    def available(cls) -> List[str]:
        return sorted(cls._connectors)


ConnectorFactory.register(GitHubConnector.connector_id, GitHubConnector)
ConnectorFactory.register(SlackConnector.connector_id, SlackConnector)

__all__ = [
    'ConnectorFactory',
    'GitHubConnector',
    'GitHubDataMapper',
    'SlackConnector',
]
