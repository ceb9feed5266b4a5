from infrastructure.storage.token_storage import BrowserTokenStorage, InMemoryTokenStorage


def test_in_memory_slot_round_trip():
    storage = InMemoryTokenStorage()
    assert storage.get() is None
    storage.set("T")
    assert storage.get() == "T"
    storage.clear()
    storage.clear()
    assert storage.get() is None


def test_empty_token_reads_as_empty_slot():
    assert InMemoryTokenStorage("").get() is None
    storage = InMemoryTokenStorage()
    storage.set("")
    assert storage.get() is None


def test_browser_slot_is_seeded_from_cookie_value():
    storage = BrowserTokenStorage(token="abc")
    assert storage.key == "adminToken"
    assert storage.get() == "abc"
    assert storage.take_pending_sync() is None


def test_browser_slot_queues_write_through():
    storage = BrowserTokenStorage()

    storage.set("T")
    assert storage.take_pending_sync() == ("set", "T")
    assert storage.take_pending_sync() is None

    storage.clear()
    assert storage.take_pending_sync() == ("clear", None)


def test_browser_slot_keeps_only_latest_change():
    storage = BrowserTokenStorage(token="old")
    storage.set("new")
    storage.clear()
    assert storage.take_pending_sync() == ("clear", None)


def test_browser_slot_skips_noop_changes():
    storage = BrowserTokenStorage(token="T")
    storage.set("T")
    assert storage.take_pending_sync() is None

    empty = BrowserTokenStorage()
    empty.clear()
    assert empty.take_pending_sync() is None


def test_browser_slots_are_independent():
    a = BrowserTokenStorage()
    b = BrowserTokenStorage()
    a.set("secret-admin-token")
    assert b.get() is None
