import pathlib
import sys
import threading

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from shopify_gql_client.session import ShopifySession
from shopify_gql_client.timestore import MemoryTimeStore
from shopify_gql_client.transport import Transport


class NullTransport(Transport):
    def send(self, method, url, body, headers=None):  # pragma: no cover - unused
        raise AssertionError


def make_session(url="https://test.myshopify.com"):
    return ShopifySession(url, "token", transport=NullTransport())


def test_push_keeps_most_recent_first():
    store = MemoryTimeStore()
    session = make_session()
    store.push(session, 1.0)
    store.push(session, 2.0)
    assert store.get(session) == [2.0, 1.0]


def test_get_returns_copy():
    store = MemoryTimeStore()
    session = make_session()
    store.set(session, [1.0])
    store.get(session).append(99.0)
    assert store.get(session) == [1.0]


def test_keyed_by_shop():
    store = MemoryTimeStore()
    a = make_session("https://a.myshopify.com")
    b = make_session("https://b.myshopify.com/")
    store.push(a, 1.0)
    assert store.get(b) == []
    assert store.get(make_session("https://a.myshopify.com/")) == [1.0]
    store.reset(a)
    assert store.get(a) == []


def test_concurrent_pushes():
    store = MemoryTimeStore()
    session = make_session()

    def worker():
        for i in range(100):
            store.push(session, float(i))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert len(store.get(session)) == 400
