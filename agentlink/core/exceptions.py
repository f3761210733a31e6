"""Core module exceptions"""

class CoreError(Exception):
    """Base class for core module errors"""
    pass

class ConnectorError(CoreError):
    """Base class for connector-related errors"""
    pass

class ConnectorNotFoundError(ConnectorError):
    """Raised when no connector is registered for a service"""
    def __init__(self, service: str):
        self.service = service
        super().__init__(f"No connector registered for service: {service}")

class UnsupportedOperationError(ConnectorError):
    """Raised when a connector is asked for an operation it does not offer"""
    def __init__(self, connector_id: str, operation: str):
        self.connector_id = connector_id
        self.operation = operation
        super().__init__(f"{connector_id} connector does not support: {operation}")

class UnsupportedServiceError(CoreError):
    """Raised when no webhook handler is registered for a service"""
    pass
