"""A JSON-file backed host used by the command line tools."""

import json
import logging
import os
import tempfile
from typing import Any, Callable, Dict

from ..zone import Arena, ZoneOps
from ..zoned import Zoned

_LOGGER = logging.getLogger(__name__)


class JsonStore:
    """Reads and writes named sections of a single JSON document."""

    def __init__(self, path: str) -> None:
        self._path = path

    def load(self, section: str) -> Dict[str, Any]:
        if not os.path.exists(self._path):
            return {}
        with open(self._path) as fp:
            document = json.load(fp)
        return dict(document.get(section, {}))

    def save(self, section: str, values: Dict[str, Any]) -> None:
        document: Dict[str, Any] = {}
        if os.path.exists(self._path):
            with open(self._path) as fp:
                document = json.load(fp)
        document[section] = values
        # Serialise before touching the file so a bad value leaves it intact.
        payload = json.dumps(document, indent=2, sort_keys=True)

        directory = os.path.dirname(os.path.abspath(self._path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as fp:
                fp.write(payload)
            os.replace(tmp_path, self._path)
        except Exception:
            os.unlink(tmp_path)
            raise
        _LOGGER.debug("Wrote section '%s' to %s", section, self._path)


class Profile:
    """A user profile split into a ``profile`` zone and a ``settings`` zone."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store
        self.profile: Dict[str, Any] = {}
        self.settings: Dict[str, Any] = {}
        self.zones: Zoned[Profile] = Zoned(PROFILE_ARENA, self)


def _fetch_section(section: str) -> Callable[[Profile], None]:
    def fetch(host: Profile) -> None:
        setattr(host, section, host.store.load(section))

    return fetch


def _flush_section(section: str) -> Callable[[Profile, frozenset[str]], None]:
    def flush(host: Profile, tags: frozenset[str]) -> None:
        values: Dict[str, Any] = getattr(host, section)
        if tags:
            # Only persist the keys that were tagged as changed.
            stored = host.store.load(section)
            for key in tags:
                if key in values:
                    stored[key] = values[key]
                else:
                    stored.pop(key, None)
            values = stored
        host.store.save(section, values)

    return flush


PROFILE_ARENA: Arena[Profile] = Arena()
PROFILE_ZONE = PROFILE_ARENA.add_zone(
    ZoneOps(
        fetch=_fetch_section("profile"),
        flush=_flush_section("profile"),
        name="profile",
    )
)
SETTINGS_ZONE = PROFILE_ARENA.add_zone(
    ZoneOps(
        fetch=_fetch_section("settings"),
        flush=_flush_section("settings"),
        name="settings",
    )
)
