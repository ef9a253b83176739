import json

import click

from ..exceptions import CommitError, ZoneFetchError
from ..zone import ZoneState
from .store import PROFILE_ZONE, SETTINGS_ZONE, JsonStore, Profile

ZONE_NAMES = {PROFILE_ZONE: "profile", SETTINGS_ZONE: "settings"}


def _print_states(profile: Profile) -> None:
    for zone, name in ZONE_NAMES.items():
        state = profile.zones.get_state(zone)
        tags = sorted(profile.zones.get_tags(zone))
        if state == ZoneState.DIRTY and tags:
            print(f"{name}: {state.name} {tags}")
        else:
            print(f"{name}: {state.name}")


def _fetch_all(profile: Profile) -> None:
    for zone in ZONE_NAMES:
        try:
            profile.zones.fetch(zone)
        except ZoneFetchError as e:
            raise click.ClickException(str(e)) from e


@click.command(help="Load, change and commit a JSON backed profile")
@click.option("--store", "path", type=click.Path(dir_okay=False), required=True)
@click.option("--name", help="New display name for the profile zone")
@click.option("--theme", help="New theme for the settings zone")
def demo(path: str, name: str | None, theme: str | None) -> None:
    profile = Profile(JsonStore(path))
    _print_states(profile)

    _fetch_all(profile)
    # Nothing changed yet, so there is nothing worth writing back.
    for zone in ZONE_NAMES:
        profile.zones.set_clean(zone)

    if name is not None:
        profile.profile["name"] = name
        profile.zones.set_dirty(PROFILE_ZONE, "name")
    if theme is not None:
        profile.settings["theme"] = theme
        profile.zones.set_dirty(SETTINGS_ZONE, "theme")
    _print_states(profile)

    try:
        flushed = profile.zones.commit()
    except CommitError as e:
        _print_states(profile)
        raise click.ClickException(str(e)) from e

    print("Flushed: {}".format(", ".join(ZONE_NAMES[z] for z in flushed) or "nothing"))
    _print_states(profile)


@click.command(name="inspect", help="Print the zones stored in a JSON profile")
@click.option("--store", "path", type=click.Path(dir_okay=False), required=True)
def inspect_store(path: str) -> None:
    profile = Profile(JsonStore(path))
    _fetch_all(profile)
    document = {"profile": profile.profile, "settings": profile.settings}
    print(json.dumps(document, indent=2, sort_keys=True))
