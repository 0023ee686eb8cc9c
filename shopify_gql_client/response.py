"""Decoded API response bodies."""
from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ApiResponse:
    """Read-only view over a decoded GraphQL response body.

    Shopify reports GraphQL failures under ``errors`` (a list) and some REST
    style failures under ``error``; both count as API errors.
    """

    def __init__(self, data: Any) -> None:
        self.data = data

    def has_errors(self) -> bool:
        if not isinstance(self.data, dict):
            return False
        return bool(self.data.get("errors") or self.data.get("error"))

    def get_errors(self) -> list[Any]:
        if not self.has_errors():
            return []
        errors = self.data.get("errors") or self.data.get("error")
        if isinstance(errors, list):
            return errors
        return [errors]

    def __getitem__(self, key: str) -> Any:
        if not isinstance(self.data, dict):
            raise KeyError(key)
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        if not isinstance(self.data, dict):
            return default
        return self.data.get(key, default)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiResponse):
            return NotImplemented
        return self.data == other.data

    def __repr__(self) -> str:
        return f"ApiResponse({self.data!r})"


def to_response(body: bytes | str | None) -> ApiResponse:
    """Decode a raw response body into an :class:`ApiResponse`.

    Bodies that are empty or not valid JSON decode to ``ApiResponse(None)``,
    which reports no errors.
    """
    if not body:
        return ApiResponse(None)
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    try:
        data = json.loads(body)
    except ValueError:
        logger.debug("Response body is not valid JSON: %.300s", body)
        return ApiResponse(None)
    return ApiResponse(data)
