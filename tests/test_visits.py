from datetime import datetime

import pytest

from tinyapp.errors import NotFound
from tinyapp.visits import MAX_VISITED, VisitedSet


def test_visited_set_exact_tokens():
    visited = VisitedSet.parse("bc1234")
    assert "bc1234" in visited
    assert "abc123" not in visited
    assert "c1234" not in visited


def test_visited_set_dump_parse():
    visited = VisitedSet()
    visited.add("abc123")
    visited.add("XYZ789")
    token = visited.dump()
    assert set(VisitedSet.parse(token)) == {"abc123", "XYZ789"}


def test_visited_set_ignores_garbage():
    visited = VisitedSet.parse("abc123..abc123bc1234.x.!!!!!!")
    assert list(visited) == ["abc123"]
    assert len(VisitedSet.parse(None)) == 0
    assert len(VisitedSet.parse(["abc123"])) == 0


def test_visited_set_rejects_bad_code():
    with pytest.raises(ValueError):
        VisitedSet().add("abc.12")


def test_first_and_repeat_visit(store):
    store.create("abc123", "example.com", None)
    visited = VisitedSet()
    link, first = store.record_visit("abc123", visited)
    assert first
    assert (link.total_views, link.unique_views) == (1, 1)
    assert "abc123" in visited
    link, first = store.record_visit("abc123", visited)
    assert not first
    assert (link.total_views, link.unique_views) == (2, 1)
    assert len(store.visitors_for("abc123")) == 1


def test_substring_visit_does_not_count(store):
    store.create("abc123", "example.com", None)
    store.create("bc1234", "example.org", None)
    visited = VisitedSet()
    store.record_visit("bc1234", visited)
    link, first = store.record_visit("abc123", visited)
    assert first
    assert link.unique_views == 1


def test_separate_sessions_are_unique(store):
    store.create("abc123", "example.com", None)
    store.record_visit("abc123", VisitedSet())
    link, _ = store.record_visit("abc123", VisitedSet())
    assert (link.total_views, link.unique_views) == (2, 2)
    assert len({v.id for v in store.visitors_for("abc123")}) == 2


def test_visitor_record_timestamp(store):
    store.create("abc123", "example.com", None)
    t = datetime(2022, 3, 4, 5, 6, 7)
    store.record_visit("abc123", VisitedSet(), now=t)
    [visitor] = store.visitors_for("abc123")
    assert visitor.visited_at == t
    assert visitor.code == "abc123"


def test_missing_code_mutates_nothing(store):
    visited = VisitedSet()
    with pytest.raises(NotFound):
        store.record_visit("nope00", visited)
    assert len(visited) == 0
    assert store.visitors_for("nope00") == []


def test_malformed_code_mutates_nothing(store):
    visited = VisitedSet()
    with pytest.raises(NotFound):
        store.record_visit("abc", visited)
    assert len(visited) == 0
    assert store.visitors_for("abc") == []


def test_visited_set_is_capped():
    visited = VisitedSet(limit=3)
    for code in ["aaaaa1", "aaaaa2", "aaaaa3", "aaaaa4"]:
        visited.add(code)
    assert list(visited) == ["aaaaa2", "aaaaa3", "aaaaa4"]
    assert "aaaaa1" not in visited


def test_visited_set_cap_keeps_cookie_small():
    visited = VisitedSet()
    for i in range(MAX_VISITED + 50):
        visited.add(f"{i:06d}")
    assert len(visited) == MAX_VISITED
    assert len(VisitedSet.parse(visited.dump())) == MAX_VISITED
    assert len(visited.dump()) < 2500
    assert f"{MAX_VISITED + 49:06d}" in visited
    assert "000000" not in visited


def test_revisit_refreshes_position():
    visited = VisitedSet(limit=2)
    visited.add("aaaaa1")
    visited.add("aaaaa2")
    visited.add("aaaaa1")
    visited.add("aaaaa3")
    assert list(visited) == ["aaaaa1", "aaaaa3"]
