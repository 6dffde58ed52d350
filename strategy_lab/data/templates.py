"""
Predefined strategy templates.
"""

from dataclasses import dataclass

from strategy_lab.data.models import Action, InstrumentType, Leg


@dataclass(frozen=True)
class LegBlueprint:
    action: Action
    instrument_type: InstrumentType
    strike: float
    premium: float
    quantity: int = 1
    group_id: str = "1"


@dataclass(frozen=True)
class StrategyTemplate:
    name: str
    legs: tuple[LegBlueprint, ...]


BUY, SELL = Action.BUY, Action.SELL
CALL, PUT, UNDERLYING = InstrumentType.CALL, InstrumentType.PUT, InstrumentType.UNDERLYING

TEMPLATES: dict[str, StrategyTemplate] = {
    t.name: t
    for t in (
        StrategyTemplate("Long Call", (LegBlueprint(BUY, CALL, 100, 5),)),
        StrategyTemplate("Long Put", (LegBlueprint(BUY, PUT, 100, 5),)),
        StrategyTemplate(
            "Covered Call",
            (
                LegBlueprint(BUY, UNDERLYING, 0, 100),
                LegBlueprint(SELL, CALL, 105, 2),
            ),
        ),
        StrategyTemplate(
            "Long Straddle",
            (
                LegBlueprint(BUY, CALL, 100, 3),
                LegBlueprint(BUY, PUT, 100, 3),
            ),
        ),
        StrategyTemplate(
            "Iron Condor",
            (
                LegBlueprint(SELL, PUT, 95, 2),
                LegBlueprint(BUY, PUT, 90, 1),
                LegBlueprint(SELL, CALL, 105, 2),
                LegBlueprint(BUY, CALL, 110, 1),
            ),
        ),
    )
}


def apply_template(name: str) -> list[Leg]:
    """Fresh, active legs for the named template. Raises KeyError if unknown."""
    template = TEMPLATES[name]
    return [
        Leg(
            action=bp.action,
            instrument_type=bp.instrument_type,
            strike=bp.strike,
            premium=bp.premium,
            quantity=bp.quantity,
            group_id=bp.group_id,
        )
        for bp in template.legs
    ]
