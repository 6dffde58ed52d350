"""Data layer: legs, market inputs, templates and saved strategies."""

from strategy_lab.data.models import (
    DEFAULT_GROUP_ID,
    Action,
    GroupSettings,
    InstrumentType,
    Leg,
    MarketState,
    ModelParameters,
    SampledCurve,
    StrategySnapshot,
)
from strategy_lab.data.legs import (
    active_legs,
    add_leg,
    delete_leg,
    sync_group_settings,
    toggle_leg,
    update_leg,
)
from strategy_lab.data.store import (
    delete_snapshot,
    dump_library,
    find_snapshot,
    load_library,
    save_snapshot,
)
from strategy_lab.data.templates import TEMPLATES, apply_template

__all__ = [
    "DEFAULT_GROUP_ID",
    "Action",
    "GroupSettings",
    "InstrumentType",
    "Leg",
    "MarketState",
    "ModelParameters",
    "SampledCurve",
    "StrategySnapshot",
    "active_legs",
    "add_leg",
    "delete_leg",
    "sync_group_settings",
    "toggle_leg",
    "update_leg",
    "delete_snapshot",
    "dump_library",
    "find_snapshot",
    "load_library",
    "save_snapshot",
    "TEMPLATES",
    "apply_template",
]
