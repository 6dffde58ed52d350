"""
Immutable updates of a leg collection.

Every operation returns a new list; legs are matched by `id`, never by position.
"""

from typing import Iterable, Mapping, Union

from strategy_lab.data.models import GroupSettings, Leg


LegId = Union[str, int]


def add_leg(legs: Iterable[Leg], leg: Leg) -> list[Leg]:
    legs = list(legs)
    if any(existing.id == leg.id for existing in legs):
        raise ValueError(f"Duplicate leg id: {leg.id}")
    return legs + [leg]


def update_leg(legs: Iterable[Leg], leg_id: LegId, **changes) -> list[Leg]:
    """Replace the leg with `leg_id` by a copy carrying `changes`."""
    if "id" in changes:
        raise ValueError("A leg's id cannot be changed")
    return [
        Leg.model_validate({**leg.model_dump(), **changes}) if leg.id == leg_id else leg
        for leg in legs
    ]


def toggle_leg(legs: Iterable[Leg], leg_id: LegId) -> list[Leg]:
    return [
        leg.model_copy(update={"active": not leg.active}) if leg.id == leg_id else leg
        for leg in legs
    ]


def delete_leg(legs: Iterable[Leg], leg_id: LegId) -> list[Leg]:
    return [leg for leg in legs if leg.id != leg_id]


def active_legs(legs: Iterable[Leg]) -> list[Leg]:
    return [leg for leg in legs if leg.active]


def sync_group_settings(
    legs: Iterable[Leg],
    group_settings: Mapping[str, GroupSettings],
) -> dict[str, GroupSettings]:
    """Settings with a default entry added for every group that has none."""
    synced = dict(group_settings)
    for leg in legs:
        gid = leg.resolved_group_id
        if gid not in synced:
            synced[gid] = GroupSettings.default_for(gid)
    return synced
