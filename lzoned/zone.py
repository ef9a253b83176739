import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, TypeVar

_LOGGER = logging.getLogger(__name__)

HostT = TypeVar("HostT")

FetchCallback = Callable[[HostT], None]
FlushCallback = Callable[[HostT, frozenset[str]], None]


class ZoneState(Enum):
    # Data in this zone is unloaded and needs to be fetched.
    EMPTY = "EMPTY"
    # Data in this zone matches its source.
    CLEAN = "CLEAN"
    # Data in this zone has changed and needs to be flushed.
    DIRTY = "DIRTY"


@dataclass(frozen=True)
class ZoneOps(Generic[HostT]):
    """
    Fetch and flush bindings for a single zone.

    :param fetch: Populates the zone's fields on the host. ``None`` for zones
        which are never loaded from anywhere.
    :param flush: Persists the zone's fields from the host. Receives the set of
        dirty tags as a hint of what changed and signals failure by raising.
        ``None`` for read-only zones.
    :param name: Optional label used in logs and error messages.
    """

    fetch: FetchCallback[HostT] | None = None
    flush: FlushCallback[HostT] | None = None
    name: str | None = None


class Arena(Generic[HostT]):
    """
    Append-only registry of zone operations, usually one per host type.

    A zone handle is the index its operations were registered at. Handles are
    never removed or reused. Register every zone before binding any
    :py:class:`~lzoned.zoned.Zoned` to the arena, since instances only see
    the zones that existed when they were initialised.
    """

    def __init__(self) -> None:
        self._ops: List[ZoneOps[HostT]] = []

    def add_zone(self, ops: ZoneOps[HostT]) -> int:
        self._ops.append(ops)
        zone = len(self._ops) - 1
        _LOGGER.debug("Registered zone %d (%s)", zone, ops.name or "unnamed")
        return zone

    def ops(self, zone: int) -> ZoneOps[HostT]:
        if not 0 <= zone < len(self._ops):
            raise IndexError("Zone {} is not registered in this arena".format(zone))
        return self._ops[zone]

    def __len__(self) -> int:
        return len(self._ops)

    def __repr__(self) -> str:
        return "<{} zones={}>".format(self.__class__.__name__, len(self._ops))
