"""Public package API exports for lzoned."""

from .zone import Arena, ZoneOps, ZoneState
from .zoned import Zoned
from .exceptions import CommitError, LZonedError, ZoneFetchError, ZoneFlushError
from .retry import commit_with_backoff

try:  # pragma: no cover - version is generated at build time
    from ._version import version as __version__
except ImportError:  # pragma: no cover - fallback for source builds
    __version__ = "0.0.0"

__all__ = [
    "Arena",
    "ZoneOps",
    "ZoneState",
    "Zoned",
    "LZonedError",
    "ZoneFetchError",
    "ZoneFlushError",
    "CommitError",
    "commit_with_backoff",
]
