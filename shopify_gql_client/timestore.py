"""Per-shop store of request timestamps used for rate-limit bookkeeping."""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import ShopifySession


class TimeStore(ABC):
    """Abstract store of request timestamps keyed by session."""

    @abstractmethod
    def get(self, session: "ShopifySession") -> list[float]:
        """Return the timestamps recorded for ``session``."""
        raise NotImplementedError

    @abstractmethod
    def set(self, session: "ShopifySession", timestamps: list[float]) -> None:
        raise NotImplementedError

    def push(self, session: "ShopifySession", timestamp: float) -> None:
        """Append one timestamp, most recent first."""
        self.set(session, [timestamp, *self.get(session)])

    def reset(self, session: "ShopifySession") -> None:
        self.set(session, [])


@dataclass
class MemoryTimeStore(TimeStore):
    """Thread-safe in-process store.

    Entries are keyed by the session's ``shop_url`` so that separate session
    objects for the same shop share their timestamps.
    """

    _data: dict[str, list[float]] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)

    def get(self, session: "ShopifySession") -> list[float]:
        with self.lock:
            return list(self._data.get(session.shop_url, []))

    def set(self, session: "ShopifySession", timestamps: list[float]) -> None:
        with self.lock:
            self._data[session.shop_url] = list(timestamps)

    def push(self, session: "ShopifySession", timestamp: float) -> None:
        with self.lock:
            self._data.setdefault(session.shop_url, []).insert(0, timestamp)

    def reset(self, session: "ShopifySession") -> None:
        with self.lock:
            self._data.pop(session.shop_url, None)
