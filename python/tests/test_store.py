import pytest

from llsparse.errors import InvariantError
from llsparse.sparse.element import Element
from llsparse.sparse.store import ElementStore


def make_store(ncols=4, zero=0):
    return ElementStore(lambda r, c: r * ncols + c, zero)


def triples(store):
    return [e.as_tuple() for e in store]


def test_empty_store_reads_zero():
    s = make_store()
    assert len(s) == 0
    assert s.get(2, 3) == 0
    assert s.find(2, 3) is None


def test_set_keeps_row_major_order():
    s = make_store()
    s.set(2, 1, 5)
    s.set(0, 3, 1)
    s.set(1, 0, 7)
    s.set(0, 0, 9)
    s.set(3, 3, 2)
    assert triples(s) == [(0, 0, 9), (0, 3, 1), (1, 0, 7), (2, 1, 5), (3, 3, 2)]
    s.check()


def test_set_overwrites_in_place():
    s = make_store()
    s.set(1, 1, 3)
    elem = s.find(1, 1)
    s.set(1, 1, 8)
    assert len(s) == 1
    assert s.find(1, 1) is elem
    assert elem.value == 8


def test_set_zero_removes():
    s = make_store()
    s.set(1, 1, 3)
    s.set(1, 1, 0)
    assert len(s) == 0
    s.set(2, 2, 0)
    assert len(s) == 0


def test_remove_reports_whether_removed():
    s = make_store()
    s.set(0, 1, 4)
    assert s.remove(0, 1) is True
    assert s.remove(0, 1) is False
    assert len(s) == 0


def test_update_merges_and_last_wins():
    s = make_store()
    s.set(0, 0, 1)
    s.set(1, 1, 2)
    s.set(3, 0, 3)
    s.update([(1, 1, 20), (2, 2, 5), (2, 2, 6), (3, 0, 0), (0, 2, 4)])
    assert triples(s) == [(0, 0, 1), (0, 2, 4), (1, 1, 20), (2, 2, 6)]
    s.check()


def test_update_with_empty_batch_is_noop():
    s = make_store()
    s.set(0, 0, 1)
    s.update([])
    assert triples(s) == [(0, 0, 1)]


def test_row_span():
    s = make_store()
    for r, c in [(0, 1), (0, 3), (2, 0), (2, 2), (2, 3), (3, 1)]:
        s.set(r, c, 1)
    assert s.row_span(0) == (0, 2)
    assert s.row_span(1) == (2, 2)
    assert s.row_span(2) == (2, 5)
    assert s.row_span(3) == (5, 6)
    assert [s[i].col for i in range(*s.row_span(2))] == [0, 2, 3]


def test_position_is_recomputed_from_current_width():
    width = {"ncols": 2}
    s = ElementStore(lambda r, c: r * width["ncols"] + c, 0)
    s.set(0, 1, 1)
    s.set(1, 0, 2)
    width["ncols"] = 5
    s.set(0, 4, 3)
    assert triples(s) == [(0, 1, 1), (0, 4, 3), (1, 0, 2)]
    assert s.get(1, 0) == 2


def test_resort_after_index_rewrite():
    s = make_store(ncols=3)
    s.update([(0, 1, 1), (0, 2, 2), (1, 0, 3)])
    for elem in s:
        elem.transpose()
    with pytest.raises(InvariantError):
        s.check()
    s.resort()
    assert triples(s) == [(0, 1, 3), (1, 0, 1), (2, 0, 2)]


def test_check_rejects_stored_zero():
    s = make_store()
    s.set(0, 0, 1)
    s[0].value = 0
    with pytest.raises(InvariantError):
        s.check()


def test_copy_is_deep():
    s = make_store()
    s.set(1, 2, 3)
    c = s.copy()
    c.set(1, 2, 9)
    c.set(0, 0, 1)
    assert triples(s) == [(1, 2, 3)]
    assert triples(c) == [(0, 0, 1), (1, 2, 9)]


def test_iteration_is_restartable():
    s = make_store()
    s.update([(0, 0, 1), (1, 1, 2)])
    assert list(s) == list(s) == [Element(0, 0, 1), Element(1, 1, 2)]


def test_debug_checks_run_after_mutation(debug_checks):
    s = make_store()
    s.set(0, 0, 1)
    s[0].value = 0
    with pytest.raises(InvariantError):
        s.set(1, 1, 2)
