"""
Data models for legs, market state and saved strategies.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from strategy_lab.config import settings


DEFAULT_GROUP_ID = "1"


class InstrumentType(str, Enum):
    """Instrument type enumeration."""
    CALL = "call"
    PUT = "put"
    UNDERLYING = "underlying"


class Action(str, Enum):
    """Leg direction enumeration."""
    BUY = "buy"
    SELL = "sell"


def new_leg_id() -> str:
    return uuid.uuid4().hex[:10]


class Leg(BaseModel):
    """One component of a multi-leg strategy."""

    model_config = ConfigDict(frozen=True)

    id: Union[str, int] = Field(default_factory=new_leg_id)
    action: Action
    instrument_type: InstrumentType
    strike: float = Field(default=0.0, ge=0)
    premium: float = Field(ge=0)  # Entry price for underlying legs
    quantity: int = Field(default=1, ge=1)
    active: bool = True
    group_id: Optional[str] = None
    comment: str = ""

    @property
    def is_option(self) -> bool:
        return self.instrument_type != InstrumentType.UNDERLYING

    @property
    def resolved_group_id(self) -> str:
        return self.group_id or DEFAULT_GROUP_ID

    @property
    def effective_strike(self) -> float:
        """Strike used by the pricing model (0 for underlying legs)."""
        return self.strike if self.is_option else 0.0


class MarketState(BaseModel):
    """Current state of the underlying."""

    model_config = ConfigDict(frozen=True)

    underlying_price: float = Field(default_factory=lambda: settings.pricing.underlying_price)


class ModelParameters(BaseModel):
    """Black-Scholes inputs shared by every leg in a valuation pass."""

    model_config = ConfigDict(frozen=True)

    time_to_expiry_days: float = Field(
        default_factory=lambda: settings.pricing.time_to_expiry_days, ge=0
    )
    risk_free_rate_percent: float = Field(
        default_factory=lambda: settings.pricing.risk_free_rate_percent
    )
    volatility_percent: float = Field(
        default_factory=lambda: settings.pricing.volatility_percent, ge=0
    )

    @property
    def time_to_expiry_years(self) -> float:
        return self.time_to_expiry_days / 365.0

    @property
    def risk_free_rate(self) -> float:
        return self.risk_free_rate_percent / 100.0

    @property
    def volatility(self) -> float:
        return self.volatility_percent / 100.0


class GroupSettings(BaseModel):
    """Display settings for a group of legs."""

    name: str
    enabled: bool = True

    @classmethod
    def default_for(cls, group_id: str) -> "GroupSettings":
        return cls(name=f"Group {group_id}")


class StrategySnapshot(BaseModel):
    """Saved state of a strategy: legs, market state and model inputs."""

    model_config = ConfigDict(protected_namespaces=())

    name: str
    legs: list[Leg] = Field(default_factory=list)
    underlying_price: float = Field(default_factory=lambda: settings.pricing.underlying_price)
    group_settings: dict[str, GroupSettings] = Field(default_factory=dict)
    model_parameters: ModelParameters = Field(default_factory=ModelParameters)

    @property
    def market_state(self) -> MarketState:
        return MarketState(underlying_price=self.underlying_price)

    def group_names(self) -> dict[str, str]:
        """Display name per group id, falling back to the default label."""
        names = {gid: gs.name for gid, gs in self.group_settings.items()}
        for leg in self.legs:
            gid = leg.resolved_group_id
            if gid not in names:
                names[gid] = GroupSettings.default_for(gid).name
        return names


@dataclass(frozen=True)
class SampledCurve:
    """Ordered (price, value) samples."""

    prices: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return len(self.prices)

    @property
    def is_empty(self) -> bool:
        return len(self.prices) == 0

    @property
    def step(self) -> float:
        """Grid spacing (0 for fewer than two samples)."""
        if len(self.prices) < 2:
            return 0.0
        return float(self.prices[1] - self.prices[0])

    def points(self) -> list[tuple[float, float]]:
        return [(float(p), float(v)) for p, v in zip(self.prices, self.values)]

    @classmethod
    def empty(cls) -> "SampledCurve":
        return cls(prices=np.array([], dtype=float), values=np.array([], dtype=float))
