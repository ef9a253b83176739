import logging

from lzoned import Arena, CommitError, ZoneOps, Zoned

logging.basicConfig(level=logging.DEBUG)

DATABASE = {
    "profile": {"name": "Ada", "email": "ada@example.com"},
    "settings": {"theme": "light"},
}


class User:
    def __init__(self) -> None:
        self.profile: dict = {}
        self.settings: dict = {}
        self.zones: Zoned[User] = Zoned(USER_ARENA, self)


def load_profile(user: User) -> None:
    user.profile = dict(DATABASE["profile"])


def save_profile(user: User, tags: frozenset) -> None:
    for key in tags or user.profile:
        DATABASE["profile"][key] = user.profile[key]


def load_settings(user: User) -> None:
    user.settings = dict(DATABASE["settings"])


def save_settings(user: User, tags: frozenset) -> None:
    raise ConnectionError("settings backend unavailable")


USER_ARENA: Arena[User] = Arena()
PROFILE = USER_ARENA.add_zone(ZoneOps(load_profile, save_profile, "profile"))
SETTINGS = USER_ARENA.add_zone(ZoneOps(load_settings, save_settings, "settings"))

user = User()
user.zones.fetch(PROFILE)
user.profile["email"] = "ada@lovelace.dev"
user.zones.set_dirty(PROFILE, "email")

user.zones.fetch(SETTINGS)
user.settings["theme"] = "dark"
user.zones.set_dirty(SETTINGS, "theme")

try:
    user.zones.commit()
except CommitError as e:
    for failure in e.failures:
        print(f"Zone {failure.zone} not saved ({failure.cause}), tags {set(failure.tags)}")

print(DATABASE)
print(user.zones)
