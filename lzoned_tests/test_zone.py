from unittest.mock import Mock

import pytest

from lzoned.zone import Arena, ZoneOps, ZoneState
from lzoned.zoned import Zoned


def test_arena_is_initially_empty(arena):
    assert len(arena) == 0


def test_add_zone_returns_sequential_handles(arena):
    assert arena.add_zone(ZoneOps()) == 0
    assert arena.add_zone(ZoneOps()) == 1
    assert arena.add_zone(ZoneOps()) == 2
    assert len(arena) == 3


def test_add_zone_allows_duplicate_ops(arena):
    ops = ZoneOps(fetch=Mock(), flush=Mock())
    first = arena.add_zone(ops)
    second = arena.add_zone(ops)
    assert first != second
    assert arena.ops(first) is arena.ops(second)


def test_ops_returns_registered_ops(arena):
    ops = ZoneOps(fetch=Mock(), flush=Mock(), name="profile")
    zone = arena.add_zone(ops)
    assert arena.ops(zone) is ops


def test_ops_rejects_unknown_zone(arena):
    arena.add_zone(ZoneOps())
    with pytest.raises(IndexError):
        arena.ops(1)
    with pytest.raises(IndexError):
        arena.ops(-1)


def test_zone_ops_are_immutable():
    ops = ZoneOps()
    with pytest.raises(AttributeError):
        ops.fetch = Mock()  # type: ignore[misc]


def test_zone_ops_callbacks_are_optional():
    ops = ZoneOps()
    assert ops.fetch is None
    assert ops.flush is None
    assert ops.name is None


def test_zones_added_after_init_are_not_visible(arena):
    zone_a = arena.add_zone(ZoneOps())
    zoned = Zoned(arena, object())
    zone_b = arena.add_zone(ZoneOps())

    assert zoned.zone_count == 1
    assert zoned.get_state(zone_a) == ZoneState.EMPTY
    with pytest.raises(IndexError):
        zoned.get_state(zone_b)

    # A fresh instance sees both.
    assert Zoned(arena, object()).zone_count == 2


def test_arena_is_shared_between_instances(arena):
    fetch = Mock()
    zone = arena.add_zone(ZoneOps(fetch=fetch))
    host_a, host_b = object(), object()
    zoned_a = Zoned(arena, host_a)
    zoned_b = Zoned(arena, host_b)

    zoned_a.fetch(zone)
    assert zoned_b.get_state(zone) == ZoneState.EMPTY
    zoned_b.fetch(zone)

    assert fetch.call_count == 2
    assert fetch.call_args_list[0][0] == (host_a,)
    assert fetch.call_args_list[1][0] == (host_b,)


@pytest.fixture
def arena():
    return Arena()
