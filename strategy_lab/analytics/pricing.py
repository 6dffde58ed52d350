"""
Option pricing model: Black-Scholes value and Greeks.
"""

from dataclasses import dataclass

import numpy as np

from strategy_lab.data.models import InstrumentType, Leg, ModelParameters


# Abramowitz-Stegun coefficients for the normal CDF
_B1 = 0.319381530
_B2 = -0.356563782
_B3 = 1.781477937
_B4 = -1.821255978
_B5 = 1.330274429
_P = 0.2316419
_C = 0.39894228

# Substituted for t <= 0 in d1/d2 only
EXPIRY_EPSILON = 1e-6


def norm_cdf(x: float) -> float:
    """Standard normal CDF (Abramowitz-Stegun rational approximation)."""
    x = np.float64(x)
    with np.errstate(over="ignore", invalid="ignore"):
        if x >= 0.0:
            t = 1.0 / (1.0 + _P * x)
            poly = t * (t * (t * (t * (t * _B5 + _B4) + _B3) + _B2) + _B1)
            return float(1.0 - _C * np.exp(-x * x / 2.0) * poly)
        # Phi(-x) = 1 - Phi(x); also reached by NaN, which propagates
        t = 1.0 / (1.0 - _P * x)
        poly = t * (t * (t * (t * (t * _B5 + _B4) + _B3) + _B2) + _B1)
        return float(_C * np.exp(-x * x / 2.0) * poly)


def norm_pdf(x: float) -> float:
    """Standard normal PDF."""
    x = np.float64(x)
    with np.errstate(over="ignore"):
        return float(np.exp(-0.5 * x * x) / np.sqrt(2 * np.pi))


@dataclass(frozen=True)
class Greeks:
    """Sensitivities of one instrument (or an aggregate of them)."""

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0

    def scaled(self, factor: float) -> "Greeks":
        return Greeks(
            delta=self.delta * factor,
            gamma=self.gamma * factor,
            theta=self.theta * factor,
            vega=self.vega * factor,
        )

    def __add__(self, other: "Greeks") -> "Greeks":
        return Greeks(
            delta=self.delta + other.delta,
            gamma=self.gamma + other.gamma,
            theta=self.theta + other.theta,
            vega=self.vega + other.vega,
        )


UNDERLYING_GREEKS = Greeks(delta=1.0)


class BlackScholes:
    """
    Black-Scholes model for European calls and puts.

    Inputs are spot S, strike K, time to expiry T (years), risk-free rate r and
    volatility sigma, the last two as decimals. Formulas are evaluated in
    numpy floating point: sigma = 0 with T > 0, or K = 0, yields inf/NaN
    rather than raising.
    """

    @staticmethod
    def d1(S: float, K: float, T: float, r: float, sigma: float) -> float:
        """Calculate d1 parameter."""
        if T <= 0:
            T = EXPIRY_EPSILON
        S, K, T, sigma = np.float64(S), np.float64(K), np.float64(T), np.float64(sigma)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float((np.log(S / K) + (r + sigma**2 / 2) * T) / (sigma * np.sqrt(T)))

    @staticmethod
    def d2(S: float, K: float, T: float, r: float, sigma: float) -> float:
        """Calculate d2 parameter."""
        if T <= 0:
            T = EXPIRY_EPSILON
        return BlackScholes.d1(S, K, T, r, sigma) - sigma * np.sqrt(T)

    @staticmethod
    def price(
        S: float,
        K: float,
        T: float,
        r: float,
        sigma: float,
        option_type: InstrumentType,
    ) -> float:
        """
        Calculate Black-Scholes option price.

        Args:
            S: Spot price
            K: Strike price
            T: Time to expiry (years)
            r: Risk-free rate
            sigma: Volatility
            option_type: Call, put or underlying

        Returns:
            Theoretical price; intrinsic value at expiry, spot for the underlying
        """
        if option_type == InstrumentType.UNDERLYING:
            return float(S)

        if T <= 0:
            if option_type == InstrumentType.CALL:
                return float(max(0.0, S - K))
            return float(max(0.0, K - S))

        d1 = BlackScholes.d1(S, K, T, r, sigma)
        d2 = BlackScholes.d2(S, K, T, r, sigma)
        discounted_strike = K * np.exp(-r * T)

        if option_type == InstrumentType.CALL:
            return float(S * norm_cdf(d1) - discounted_strike * norm_cdf(d2))
        return float(discounted_strike * norm_cdf(-d2) - S * norm_cdf(-d1))

    @staticmethod
    def delta(
        S: float,
        K: float,
        T: float,
        r: float,
        sigma: float,
        option_type: InstrumentType,
    ) -> float:
        """Calculate option delta."""
        if option_type == InstrumentType.UNDERLYING:
            return 1.0

        # At S == K both limits report 0, not the one-sided value
        if T <= 0:
            if option_type == InstrumentType.CALL:
                return 1.0 if S > K else 0.0
            return -1.0 if S < K else 0.0

        d1 = BlackScholes.d1(S, K, T, r, sigma)

        if option_type == InstrumentType.CALL:
            return norm_cdf(d1)
        return norm_cdf(d1) - 1

    @staticmethod
    def gamma(S: float, K: float, T: float, r: float, sigma: float) -> float:
        """Calculate option gamma (same for calls and puts)."""
        if T <= 0:
            return 0.0

        d1 = BlackScholes.d1(S, K, T, r, sigma)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(norm_pdf(d1) / (S * np.float64(sigma) * np.sqrt(T)))

    @staticmethod
    def theta(
        S: float,
        K: float,
        T: float,
        r: float,
        sigma: float,
        option_type: InstrumentType,
    ) -> float:
        """Calculate option theta (per calendar day)."""
        if T <= 0:
            return 0.0

        d1 = BlackScholes.d1(S, K, T, r, sigma)
        d2 = BlackScholes.d2(S, K, T, r, sigma)

        decay = -(S * norm_pdf(d1) * sigma) / (2 * np.sqrt(T))

        if option_type == InstrumentType.CALL:
            carry = -r * K * np.exp(-r * T) * norm_cdf(d2)
        else:
            carry = r * K * np.exp(-r * T) * norm_cdf(-d2)

        return float((decay + carry) / 365)

    @staticmethod
    def vega(S: float, K: float, T: float, r: float, sigma: float) -> float:
        """Calculate option vega (per 1% change in volatility)."""
        if T <= 0:
            return 0.0

        d1 = BlackScholes.d1(S, K, T, r, sigma)
        return float(S * norm_pdf(d1) * np.sqrt(T) / 100)

    @staticmethod
    def full_greeks(
        S: float,
        K: float,
        T: float,
        r: float,
        sigma: float,
        option_type: InstrumentType,
    ) -> Greeks:
        """Calculate all Greeks at once."""
        if option_type == InstrumentType.UNDERLYING:
            return UNDERLYING_GREEKS

        return Greeks(
            delta=BlackScholes.delta(S, K, T, r, sigma, option_type),
            gamma=BlackScholes.gamma(S, K, T, r, sigma),
            theta=BlackScholes.theta(S, K, T, r, sigma, option_type),
            vega=BlackScholes.vega(S, K, T, r, sigma),
        )


def theoretical_price(
    instrument_type: InstrumentType,
    spot: float,
    strike: float,
    rate: float,
    vol: float,
    time_years: float,
) -> float:
    """Model price of a call, put or underlying."""
    return BlackScholes.price(spot, strike, time_years, rate, vol, InstrumentType(instrument_type))


def greeks(
    instrument_type: InstrumentType,
    spot: float,
    strike: float,
    rate: float,
    vol: float,
    time_years: float,
) -> Greeks:
    """Delta, gamma, theta and vega of a single unit."""
    return BlackScholes.full_greeks(spot, strike, time_years, rate, vol, InstrumentType(instrument_type))


def leg_theoretical_price(leg: Leg, spot: float, params: ModelParameters) -> float:
    """Model price of one unit of a leg under the shared model parameters."""
    return theoretical_price(
        leg.instrument_type,
        spot,
        leg.effective_strike,
        params.risk_free_rate,
        params.volatility,
        params.time_to_expiry_years,
    )


def leg_greeks(leg: Leg, spot: float, params: ModelParameters) -> Greeks:
    """Greeks of one unit of a leg under the shared model parameters."""
    return greeks(
        leg.instrument_type,
        spot,
        leg.effective_strike,
        params.risk_free_rate,
        params.volatility,
        params.time_to_expiry_years,
    )
