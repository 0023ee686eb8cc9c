"""Transport abstractions."""
from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Mapping, Optional

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract transport interface.

    Implementations raise :class:`TransportError` for every failed request,
    attaching the response when the server sent one.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        body: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:  # noqa: D401
        """Send a request and block until the response arrives."""
        raise NotImplementedError

    def send_async(
        self,
        method: str,
        url: str,
        body: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "Future[requests.Response]":
        """Send a request without blocking.

        The default runs :meth:`send` inline and returns an already completed
        future; transports with real concurrency override this.
        """
        future: "Future[requests.Response]" = Future()
        try:
            future.set_result(self.send(method, url, body, headers))
        except Exception as exc:
            future.set_exception(exc)
        return future


class RequestsTransport(Transport):
    """Transport using the requests library.

    Each call makes exactly one attempt. Responses with a status of 400 or
    above are raised as :class:`TransportError` with the response attached.

    Args:
        timeout: Request timeout in seconds. Defaults to the
            ``SHOPIFY_GQL_TIMEOUT`` env var or ``30``.
        max_workers: Size of the thread pool backing :meth:`send_async`.
            Defaults to the ``SHOPIFY_GQL_MAX_WORKERS`` env var or ``4``.
        force_close: If True, send ``Connection: close`` with each request to
            disable keep-alives. Set to False to allow persistent connections.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        max_workers: int | None = None,
        force_close: bool = True,
    ) -> None:
        self.timeout = timeout if timeout is not None else float(
            os.getenv("SHOPIFY_GQL_TIMEOUT", "30")
        )
        self.max_workers = max_workers if max_workers is not None else int(
            os.getenv("SHOPIFY_GQL_MAX_WORKERS", "4")
        )
        if self.max_workers < 1:
            raise ValueError(
                f"max_workers (SHOPIFY_GQL_MAX_WORKERS) must be at least 1, got {self.max_workers}"
            )
        session = requests.Session()
        if force_close:
            session.headers["Connection"] = "close"
        self._session = session
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(
        self,
        method: str,
        url: str,
        body: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        prepared: requests.PreparedRequest | None = None
        try:
            # Bad URLs and header values fail here, before anything is sent.
            prepared = self._session.prepare_request(
                requests.Request(
                    method, url, data=body.encode("utf-8"), headers=dict(headers or {})
                )
            )
            resp = self._session.send(prepared, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(
                str(exc), request=prepared, response=getattr(exc, "response", None)
            ) from exc
        if resp.status_code >= 400:
            raise TransportError(
                f"{method} {url}: {resp.text[:300]}",
                request=prepared,
                response=resp,
            )
        return resp

    def send_async(
        self,
        method: str,
        url: str,
        body: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "Future[requests.Response]":
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="shopify-gql"
                )
            executor = self._executor
        return executor.submit(self.send, method, url, body, headers)

    def close(self) -> None:
        """Shut down the worker pool, if one was started, and the HTTP session."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self._session.close()
        logger.debug("Closed transport %r", self)
