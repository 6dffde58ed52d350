"""
Strategy Lab: risk profile of multi-leg option strategies

- Black-Scholes pricing and Greeks
- Expiration payoff curves per group and in total
- Breakevens, max profit/loss and return on risk
- Scenario P&L tables over spot shocks
"""

__version__ = "0.1.0"
