import logging
from dataclasses import dataclass, field
from typing import Generic, List, Set

from .exceptions import CommitError, ZoneFetchError, ZoneFlushError
from .zone import Arena, HostT, ZoneState

_LOGGER = logging.getLogger(__name__)


class Zoned(Generic[HostT]):
    """
    Per-instance freshness tracking for the zones of an :py:class:`Arena`.

    Hold one of these on the host object and bind it to the arena shared by
    the host's type::

        class User:
            def __init__(self) -> None:
                self.zones = Zoned(USER_ARENA, self)

    Call :py:meth:`fetch` before reading a zone, :py:meth:`set_dirty` after
    changing it and :py:meth:`commit` to persist every dirty zone.

    Instances are not thread-safe; callers must serialise access.
    """

    @dataclass
    class Slot:
        state: ZoneState = ZoneState.EMPTY
        tags: Set[str] = field(default_factory=set)
        # Bumped on every set_dirty so a commit can tell whether the zone
        # changed while its flush callback was running.
        generation: int = 0

    def __init__(
        self, arena: Arena[HostT] | None = None, host: HostT | None = None
    ) -> None:
        self._arena: Arena[HostT] | None = None
        self._host: HostT | None = None
        self._slots: List[Zoned.Slot] | None = None
        if arena is not None:
            self.init(arena, host)

    def init(self, arena: Arena[HostT], host: HostT | None) -> None:
        """
        Bind to ``arena`` and ``host``, starting every zone EMPTY.

        Calling this again discards all previous zone state. Zones added to
        the arena afterwards are not visible to this instance.
        """
        self._slots = [Zoned.Slot() for _ in range(len(arena))]
        self._arena = arena
        self._host = host

    @property
    def initialized(self) -> bool:
        return self._slots is not None

    @property
    def arena(self) -> Arena[HostT]:
        self._require_init()
        return self._arena  # type: ignore[return-value]

    @property
    def host(self) -> HostT | None:
        self._require_init()
        return self._host

    @property
    def zone_count(self) -> int:
        return len(self._require_init())

    def get_state(self, zone: int) -> ZoneState:
        return self._slot(zone).state

    def get_tags(self, zone: int) -> frozenset[str]:
        return frozenset(self._slot(zone).tags)

    def is_dirty(self, zone: int) -> bool:
        return self._slot(zone).state == ZoneState.DIRTY

    def dirty_zones(self) -> List[int]:
        return [
            zone
            for zone, slot in enumerate(self._require_init())
            if slot.state == ZoneState.DIRTY
        ]

    def set_dirty(self, zone: int, *tags: str) -> None:
        slot = self._slot(zone)
        slot.state = ZoneState.DIRTY
        slot.tags.update(tags)
        slot.generation += 1

    def set_clean(self, zone: int) -> None:
        slot = self._slot(zone)
        slot.state = ZoneState.CLEAN
        slot.tags.clear()

    def fetch(self, zone: int) -> None:
        """
        Load ``zone`` if it has never been loaded, then mark it dirty.

        The fetch callback only runs while the zone is EMPTY, so repeated
        calls are cheap. If the callback raises, the zone stays EMPTY and a
        :py:class:`ZoneFetchError` is raised.
        """
        slot = self._slot(zone)
        if slot.state == ZoneState.EMPTY:
            ops = self.arena.ops(zone)
            if ops.fetch is not None:
                _LOGGER.debug("Fetching zone %d (%s)", zone, ops.name or "unnamed")
                try:
                    ops.fetch(self._host)
                except Exception as e:
                    raise ZoneFetchError(zone, e) from e

        self.set_dirty(zone)

    def commit(self) -> List[int]:
        """
        Flush every dirty zone, in zone order.

        EMPTY and CLEAN zones are skipped. A zone whose flush callback raises
        stays DIRTY with its tags intact and the remaining zones are still
        attempted. Once all zones have been tried, a :py:class:`CommitError`
        listing every failure is raised.

        :return: The zones that were flushed.
        """
        flushed: List[int] = []
        failures: List[ZoneFlushError] = []
        for zone, slot in enumerate(self._require_init()):
            if slot.state != ZoneState.DIRTY:
                continue

            try:
                self._flush_zone(zone, slot)
            except ZoneFlushError as e:
                failures.append(e)
            else:
                flushed.append(zone)

        if failures:
            raise CommitError(failures, flushed)

        return flushed

    flush = commit

    def _flush_zone(self, zone: int, slot: "Zoned.Slot") -> None:
        ops = self.arena.ops(zone)
        tags = frozenset(slot.tags)
        generation = slot.generation
        # Tags set while the callback runs land in the fresh set.
        slot.tags = set()

        if ops.flush is not None:
            _LOGGER.debug(
                "Flushing zone %d (%s) with tags %s",
                zone,
                ops.name or "unnamed",
                sorted(tags),
            )
            try:
                ops.flush(self._host, tags)
            except Exception as e:
                slot.state = ZoneState.DIRTY
                slot.tags.update(tags)
                raise ZoneFlushError(zone, tags, e) from e

        if slot.generation == generation:
            slot.state = ZoneState.CLEAN
            slot.tags.clear()
        else:
            # Marked dirty again by the flush callback; keep only the new tags.
            slot.state = ZoneState.DIRTY
            _LOGGER.debug("Zone %d changed during flush, leaving it dirty", zone)

    def _require_init(self) -> List["Zoned.Slot"]:
        if self._slots is None:
            raise RuntimeError("Zoned instance used before init()")
        return self._slots

    def _slot(self, zone: int) -> "Zoned.Slot":
        slots = self._require_init()
        if not isinstance(zone, int):
            raise TypeError("Zone handle must be an int, not {!r}".format(zone))
        if not 0 <= zone < len(slots):
            raise IndexError(
                "Zone {} was not registered when this instance was "
                "initialised ({} zones)".format(zone, len(slots))
            )
        return slots[zone]

    def __repr__(self) -> str:
        if self._slots is None:
            return "<{} uninitialized>".format(self.__class__.__name__)
        return "<{} {}>".format(
            self.__class__.__name__,
            [slot.state.name for slot in self._slots],
        )
