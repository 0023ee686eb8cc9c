"""Error classes for the Shopify GraphQL client."""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    import requests


class ShopifyGQLError(Exception):
    """Base class for HTTP errors raised while talking to Shopify."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        snippet = message if len(message) <= 300 else message[:300]
        if status_code is not None:
            msg = f"HTTP {status_code}: {snippet}"
        else:
            msg = snippet
        super().__init__(msg)
        self.status_code = status_code


class TransportError(ShopifyGQLError):
    """Raised by a transport when a request fails.

    ``response`` is set when the server answered with an error status and is
    ``None`` when no response was received (connection refused, DNS, timeout).
    ``request`` is the prepared request that was sent, when one exists.
    """

    def __init__(
        self,
        message: str,
        request: Optional["requests.PreparedRequest"] = None,
        response: Optional["requests.Response"] = None,
    ) -> None:
        status = getattr(response, "status_code", None)
        super().__init__(message, status)
        self.request = request
        self.response = response
