"""Session object for Shopify GraphQL API."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .timestore import MemoryTimeStore, TimeStore
from .transport import RequestsTransport, Transport


@dataclass
class ShopifySession:
    """Connection settings for one Shopify store's Admin GraphQL API.

    Attributes:
        shop_url: The base URL of the Shopify store (e.g., 'https://your-store.myshopify.com')
        access_token: The API access token for authentication
        api_version: Optional API version; when unset the unversioned endpoint is used
        transport: Transport used to send requests (defaults to RequestsTransport)
        time_store: Store of request timestamps read into every result
    """

    shop_url: str
    access_token: str
    api_version: Optional[str] = None
    transport: Transport = field(default_factory=RequestsTransport)
    time_store: TimeStore = field(default_factory=MemoryTimeStore)
    graphql_url: str = field(init=False)

    def __post_init__(self) -> None:
        self.shop_url = self.shop_url.strip().rstrip("/")
        if self.api_version:
            self.graphql_url = f"{self.shop_url}/admin/api/{self.api_version}/graphql.json"
        else:
            self.graphql_url = f"{self.shop_url}/admin/api/graphql.json"

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every GraphQL request."""
        return {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def close(self) -> None:
        """Release the transport's resources, when it holds any."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "ShopifySession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
