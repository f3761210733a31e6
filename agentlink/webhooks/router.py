"""Dispatch of normalized events to caller-supplied handlers"""

import logging
from typing import Any, Dict

from agentlink.core.protocols import HandlerTable
from agentlink.core.types.events import NormalizedEvent

logger = logging.getLogger(__name__)


def route(event: NormalizedEvent, handlers: HandlerTable) -> Dict[str, Any]:
    """Invoke the handler registered for ``event.kind``.

    The handler's result is returned as-is and its exceptions propagate.
    A missing handler yields ``{"ok": False, "error": ...}``.
    """
    kind = event.kind.value
    handler = handlers.get(event.kind)
    if handler is None:
        logger.info("No handler registered", extra={'kind': kind})
        return {"ok": False, "error": f"No handler for event: {kind}"}

    logger.debug(
        "Dispatching event",
        extra={'kind': kind, 'handler': getattr(handler, '__name__', repr(handler))}
    )
    return handler(event)
