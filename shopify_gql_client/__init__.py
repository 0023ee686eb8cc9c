"""Public API exports."""
from .session import ShopifySession
from .client import GraphClient, Result, execute
from .errors import ShopifyGQLError, TransportError
from .response import ApiResponse
from .timestore import MemoryTimeStore, TimeStore

__all__ = [
    "ShopifySession",
    "GraphClient",
    "Result",
    "execute",
    "ShopifyGQLError",
    "TransportError",
    "ApiResponse",
    "MemoryTimeStore",
    "TimeStore",
]
