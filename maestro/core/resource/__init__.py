"""Resource/Handler dispatch engine.

Documents are routed by their ``kind`` tag to a handler registered in the
process-wide ``HandlerRegistry``; see ``dispatch`` for the generic entry
points.
"""

from maestro.core.resource.base import BaseHandler, Handler, Resource
from maestro.core.resource.dispatch import apply, delete, get, list_resources, to_yaml
from maestro.core.resource.kind import detect_kind, split_documents
from maestro.core.resource.registry import HandlerRegistry, get_registry
from maestro.core.resource.scope import ActiveScope

__all__ = [
    "ActiveScope",
    "BaseHandler",
    "Handler",
    "HandlerRegistry",
    "Resource",
    "apply",
    "delete",
    "detect_kind",
    "get",
    "get_registry",
    "list_resources",
    "split_documents",
    "to_yaml",
]
