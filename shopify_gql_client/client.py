"""GraphQL dispatcher for the Shopify Admin API."""
from __future__ import annotations

import asyncio
import json
import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from .errors import TransportError
from .reporting import ErrorReporter, LoggingReporter, report_safely
from .response import ApiResponse, to_response
from .session import ShopifySession
from .timestore import TimeStore
from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass
class Result:
    """Outcome of one GraphQL call, successful or not.

    ``errors`` is ``False`` on a clean response, the list of API errors when a
    2xx body reports them, and ``True`` whenever the transport failed.
    ``exception`` is only set on transport failure.
    """

    errors: bool | list[Any]
    response: Optional[requests.Response]
    status: Optional[int]
    body: ApiResponse | list[Any] | None
    timestamps: Any
    exception: Optional[TransportError] = None


def build_payload(query: str, variables: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the JSON payload for ``query``; ``variables`` only when non-empty."""
    payload: dict[str, Any] = {"query": query}
    if variables:
        payload["variables"] = dict(variables)
    return payload


class GraphClient:
    """Send GraphQL documents for one session and normalize the outcome.

    Both blocking and non-blocking calls funnel through
    :meth:`handle_success` and :meth:`handle_failure`, so callers get the same
    :class:`Result` shape either way and never see a transport exception.

    Args:
        session: The shop to talk to.
        transport: Overrides ``session.transport``.
        time_store: Overrides ``session.time_store``.
        log: Logger receiving the failure records (``error(msg, extra=...)``).
        reporter: Sink that receives every transport exception.
    """

    def __init__(
        self,
        session: ShopifySession,
        *,
        transport: Transport | None = None,
        time_store: TimeStore | None = None,
        log: Any = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self.session = session
        self.transport = transport if transport is not None else session.transport
        self.time_store = time_store if time_store is not None else session.time_store
        self.log = log if log is not None else logger
        self.reporter = reporter if reporter is not None else LoggingReporter()

    def request(
        self,
        query: str,
        variables: Mapping[str, Any] | None = None,
        sync: bool = True,
    ) -> "Result | Future[Result]":
        """Execute a GraphQL query against the Shopify Admin API.

        Args:
            query: The GraphQL query string to execute
            variables: Optional mapping of variables for the GraphQL query
            sync: Block for the result (default) or return a future

        Returns:
            A :class:`Result` when ``sync`` is true, otherwise a
            ``concurrent.futures.Future`` that resolves to one.

        Example:
            >>> client = GraphClient(ShopifySession(shop_url, access_token))
            >>> result = client.request("{ shop { name } }")
            >>> result.body["data"]["shop"]["name"]
        """
        body = json.dumps(build_payload(query, variables))
        url = self.session.graphql_url
        headers = self.session.headers

        if not sync:
            pending = self.transport.send_async("POST", url, body, headers)
            return self._chain(pending)

        try:
            resp = self.transport.send("POST", url, body, headers)
        except TransportError as exc:
            return self.handle_failure(exc)
        return self.handle_success(resp)

    async def request_async(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> Result:
        """Awaitable form of ``request(..., sync=False)`` for asyncio callers."""
        return await asyncio.wrap_future(self.request(query, variables, sync=False))

    def _chain(self, pending: "Future[requests.Response]") -> "Future[Result]":
        result: "Future[Result]" = Future()

        def _done(fut: "Future[requests.Response]") -> None:
            try:
                try:
                    resp = fut.result()
                except TransportError as exc:
                    outcome = self.handle_failure(exc)
                else:
                    outcome = self.handle_success(resp)
            except Exception as exc:
                result.set_exception(exc)
            else:
                result.set_result(outcome)

        pending.add_done_callback(_done)
        return result

    def handle_success(self, resp: requests.Response) -> Result:
        """Normalize a response the transport accepted."""
        body = to_response(resp.content)
        return Result(
            errors=body.get_errors() if body.has_errors() else False,
            response=resp,
            status=resp.status_code,
            body=body,
            timestamps=self.time_store.get(self.session),
        )

    def handle_failure(self, exc: TransportError) -> Result:
        """Normalize a transport failure, logging and reporting it."""
        report_safely(self.reporter, exc, self.log)

        resp = exc.response
        body: list[Any] | None = None
        status: int | None = None
        log_context: dict[str, Any] = {}

        if resp is not None:
            status = resp.status_code
            raw = resp.content
            if raw is not None:
                parsed = to_response(raw)
                body = parsed.get_errors() if parsed.has_errors() else None
            log_context["shopify_response"] = {
                "status_code": status,
                "body": body,
                "headers": dict(resp.headers),
            }

        log_context["shopify_request"] = _describe_request(exc.request)
        self.log.error("Shopify API request failed", extra=log_context)

        return Result(
            errors=True,
            response=resp,
            status=status,
            body=body,
            exception=exc,
            timestamps=self.time_store.get(self.session),
        )


def _describe_request(request: Optional[requests.PreparedRequest]) -> dict[str, Any]:
    if request is None:
        return {"api_type": "GraphQL", "uri": None, "method": None, "headers": None, "body": None}
    body = request.body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return {
        "api_type": "GraphQL",
        "uri": request.url,
        "method": request.method,
        "headers": {
            k: ("[redacted]" if k.lower() == "x-shopify-access-token" else v)
            for k, v in request.headers.items()
        },
        "body": body,
    }


def execute(
    session: ShopifySession,
    query: str,
    variables: Mapping[str, Any] | None = None,
    sync: bool = True,
) -> "Result | Future[Result]":
    """Shortcut for ``GraphClient(session).request(query, variables, sync)``."""
    return GraphClient(session).request(query, variables, sync)
