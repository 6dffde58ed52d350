"""
Terminal (expiration) payoff of a single leg.
"""

from typing import Union

import numpy as np

from strategy_lab.data.models import Action, InstrumentType, Leg


CONTRACT_SIZE = 100

PriceLike = Union[float, np.ndarray]


def action_sign(leg: Leg) -> int:
    """+1 for bought legs, -1 for sold legs."""
    return 1 if leg.action == Action.BUY else -1


def contract_multiplier(leg: Leg) -> int:
    """Units per quantity: contract size for options, 1 share for the underlying."""
    return CONTRACT_SIZE if leg.is_option else 1


def intrinsic_value(settlement_price: PriceLike, leg: Leg) -> PriceLike:
    """Exercise value of one option unit at the settlement price."""
    if leg.instrument_type == InstrumentType.CALL:
        return np.maximum(0.0, settlement_price - leg.strike)
    return np.maximum(0.0, leg.strike - settlement_price)


def payoff(settlement_price: PriceLike, leg: Leg) -> PriceLike:
    """
    P&L of a leg held to expiration, settled at `settlement_price`.

    Underlying legs pay the signed price move from their entry price
    (`premium`) times quantity. Option legs pay intrinsic value net of the
    premium, times quantity and the contract size.

    Accepts a scalar price or a numpy array of prices.
    """
    sign = action_sign(leg)

    if leg.instrument_type == InstrumentType.UNDERLYING:
        return sign * (settlement_price - leg.premium) * leg.quantity

    per_unit = sign * (intrinsic_value(settlement_price, leg) - leg.premium)
    result = per_unit * leg.quantity * CONTRACT_SIZE
    if np.ndim(result) == 0:
        return float(result)
    return result
