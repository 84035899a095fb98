"""Tests for the query cache."""

from dompet.domain.cache import DASHBOARD, TRANSACTIONS, QueryCache


def test_key_ignores_parameter_order():
    assert QueryCache.key(TRANSACTIONS, start="a", end="b") == QueryCache.key(
        TRANSACTIONS, end="b", start="a"
    )
    assert QueryCache.key(TRANSACTIONS) != QueryCache.key(DASHBOARD)


def test_store_and_get():
    cache = QueryCache()
    key = QueryCache.key(TRANSACTIONS, period="this-month")

    ticket = cache.begin(key)
    assert cache.store(key, ticket, ["row"])
    assert cache.get(key) == ["row"]
    assert key in cache


def test_superseded_fetch_is_dropped():
    cache = QueryCache()
    key = QueryCache.key(DASHBOARD, period="today")

    slow = cache.begin(key)
    fast = cache.begin(key)
    assert cache.store(key, fast, "new")
    assert not cache.store(key, slow, "old")
    assert cache.get(key) == "new"


def test_invalidate_drops_entries_and_in_flight_fetches():
    cache = QueryCache()
    txn_key = QueryCache.key(TRANSACTIONS)
    dash_key = QueryCache.key(DASHBOARD, period="today")
    cache.store(dash_key, cache.begin(dash_key), "view")

    in_flight = cache.begin(txn_key)
    cache.invalidate(TRANSACTIONS)

    assert not cache.store(txn_key, in_flight, ["stale"])
    assert txn_key not in cache
    assert cache.get(dash_key) == "view"


def test_fetch_loads_once():
    cache = QueryCache()
    key = QueryCache.key(TRANSACTIONS)
    calls = []

    def loader():
        calls.append(1)
        return ["row"]

    assert cache.fetch(key, loader) == ["row"]
    assert cache.fetch(key, loader) == ["row"]
    assert len(calls) == 1

    cache.clear()
    assert cache.get(key) is None
    cache.fetch(key, loader)
    assert len(calls) == 2
