from datetime import datetime

import pytest

from tinyapp.errors import NotFound, ValidationError
from tinyapp.store import normalize_url


@pytest.mark.parametrize("raw, expected", [
    ("example.com", "http://example.com"),
    ("https://example.com", "https://example.com"),
    ("http://example.com", "http://example.com"),
    ("ftp://files.example.com", "ftp://files.example.com"),
    ("  example.com/path ", "http://example.com/path"),
    ("", ""),
])
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_create_then_get(store):
    t = datetime(2020, 1, 1)
    store.create("abc123", "example.com", None, t)
    link = store.get("abc123")
    assert link.destination_url == "http://example.com"
    assert link.created_at == t
    assert (link.total_views, link.unique_views) == (0, 0)


def test_create_keeps_scheme(store):
    store.create("abc123", "https://example.com", None)
    assert store.get("abc123").destination_url == "https://example.com"


def test_shorten_allocates_fresh_code(store):
    first = store.shorten("example.com", None)
    second = store.shorten("example.org", None)
    assert first.code != second.code
    assert store.get(first.code).destination_url == "http://example.com"


def test_get_missing(store):
    assert store.get("nope00") is None


def test_update_keeps_counters(store):
    from tinyapp.visits import VisitedSet

    store.create("abc123", "example.com", None, datetime(2020, 1, 1))
    store.record_visit("abc123", VisitedSet())
    later = datetime(2021, 6, 1)
    link = store.update("abc123", "example.org", later)
    assert link.destination_url == "http://example.org"
    assert link.created_at == later
    assert (link.total_views, link.unique_views) == (1, 1)


def test_update_can_reset_counters(store):
    from tinyapp.visits import VisitedSet

    store.create("abc123", "example.com", None)
    store.record_visit("abc123", VisitedSet())
    link = store.update("abc123", "example.org", reset_stats=True)
    assert (link.total_views, link.unique_views) == (0, 0)
    assert store.visitors_for("abc123") == []


def test_update_missing_raises(store):
    with pytest.raises(NotFound):
        store.update("nope00", "example.com")


def test_delete_is_idempotent(store):
    store.create("abc123", "example.com", None)
    store.create("def456", "example.org", None)
    store.delete("abc123")
    once = {code: link.to_dict() for code, link in store.all_links().items()}
    store.delete("abc123")
    twice = {code: link.to_dict() for code, link in store.all_links().items()}
    assert once == twice
    assert list(twice) == ["def456"]


def test_delete_drops_visitor_records(store):
    from tinyapp.visits import VisitedSet

    store.create("abc123", "example.com", None)
    store.record_visit("abc123", VisitedSet())
    store.delete("abc123")
    assert store.visitors_for("abc123") == []


def test_list_for_owner(store):
    alice = store.add_user("alice@example.com", "x")
    bob = store.add_user("bob@example.com", "x")
    carol = store.add_user("carol@example.com", "x")
    a1 = store.shorten("a.example", alice.id)
    a2 = store.shorten("b.example", alice.id)
    b1 = store.shorten("c.example", bob.id)
    assert set(store.list_for_owner(alice.id)) == {a1.code, a2.code}
    assert set(store.list_for_owner(bob.id)) == {b1.code}
    assert store.list_for_owner(carol.id) == {}


def test_all_links(store):
    store.create("abc123", "example.com", "u1")
    data = store.all_links()["abc123"].to_dict()
    assert data["url"] == "http://example.com"
    assert data["owner_id"] == "u1"


@pytest.mark.parametrize("code", ["abc", "abc1234", "abc-12", "", None])
def test_create_rejects_malformed_code(store, code):
    with pytest.raises(ValidationError):
        store.create(code, "example.com", None)
    assert store.all_links() == {}


def test_deleted_code_is_not_generated_again(store, monkeypatch):
    from tinyapp import ids

    store.create("abc123", "example.com", None)
    store.delete("abc123")
    draws = iter(["abc123", "zzzzzz"])
    monkeypatch.setattr(ids, "random_id", lambda n=6: next(draws))
    assert store.shorten("example.org", None).code == "zzzzzz"
    assert store.get("abc123") is None
