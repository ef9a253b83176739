import logging
import time
from typing import Any, Callable, List

from justbackoff import Backoff

from .exceptions import CommitError
from .zoned import Zoned

_LOGGER = logging.getLogger(__name__)


def commit_with_backoff(
    zoned: Zoned[Any],
    attempts: int = 3,
    min_ms: float = 100,
    max_ms: float = 10000,
    factor: float = 2,
    jitter: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> List[int]:
    """
    Commit ``zoned``, retrying failed zones with exponential backoff.

    Failed zones keep their state and tags, so each retry only flushes the
    zones that are still dirty.

    :param attempts: Total number of commit passes, including the first.
    :param sleep: Called with the delay (in seconds) between attempts.
    :return: Every zone flushed across all attempts, each listed once in the
        order it was first flushed.
    :raises CommitError: From the last attempt, if it still failed.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1, got {}".format(attempts))

    backoff = Backoff(min_ms=min_ms, max_ms=max_ms, factor=factor, jitter=jitter)
    flushed: List[int] = []
    attempt = 0
    while True:
        attempt += 1
        try:
            _extend_unique(flushed, zoned.commit())
            return flushed
        except CommitError as e:
            _extend_unique(flushed, e.flushed)
            if attempt == attempts:
                raise

            delay = backoff.duration()
            _LOGGER.warning(
                "Commit attempt %d/%d failed for zones %s, retrying in %.2fs",
                attempt,
                attempts,
                e.zones,
                delay,
            )
            sleep(delay)


def _extend_unique(flushed: List[int], zones: List[int]) -> None:
    for zone in zones:
        if zone not in flushed:
            flushed.append(zone)
