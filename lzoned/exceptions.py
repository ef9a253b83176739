from typing import List


class LZonedError(Exception):
    """Base class for errors raised while moving zone data."""


class ZoneFetchError(LZonedError):
    """A zone's fetch callback raised. The zone is left EMPTY."""

    def __init__(self, zone: int, cause: BaseException) -> None:
        super().__init__("Fetching zone {} failed: {!r}".format(zone, cause))
        self.zone = zone
        self.cause = cause


class ZoneFlushError(LZonedError):
    """
    A zone's flush callback raised during a commit.

    The zone is left DIRTY and ``tags`` holds the tag snapshot the callback
    was given, so a later commit retries with the same hint.
    """

    def __init__(self, zone: int, tags: frozenset[str], cause: BaseException) -> None:
        super().__init__("Flushing zone {} failed: {!r}".format(zone, cause))
        self.zone = zone
        self.tags = tags
        self.cause = cause


class CommitError(LZonedError):
    """
    Raised by a commit pass in which at least one flush failed.

    :param failures: One :py:class:`ZoneFlushError` per failed zone, in zone
        order.
    :param flushed: Zones that were flushed successfully in the same pass.
    """

    def __init__(self, failures: List[ZoneFlushError], flushed: List[int]) -> None:
        super().__init__(
            "{} zone(s) failed to flush: {}".format(
                len(failures), ", ".join(str(f.zone) for f in failures)
            )
        )
        self.failures = failures
        self.flushed = flushed

    @property
    def zones(self) -> List[int]:
        return [f.zone for f in self.failures]
