"""
Configuration management for the strategy lab.
Uses Pydantic for validation and environment variable loading.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingDefaults(BaseSettings):
    """Default market state and Black-Scholes parameters for new strategies."""

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    underlying_price: float = 100.0
    time_to_expiry_days: float = 30.0
    risk_free_rate_percent: float = 5.0
    volatility_percent: float = 20.0


class SamplingConfig(BaseSettings):
    """Price grid construction parameters."""

    model_config = SettingsConfigDict(env_prefix="SAMPLER_")

    # Chart grid: +/- fraction of spot
    chart_view_fraction: float = 0.5
    chart_steps: int = 200

    # Summary grid: anchored on strikes and entry prices
    summary_steps: int = 500
    summary_min_range: float = 40.0
    summary_range_extension: float = 1.5
    default_anchor_low: float = 80.0
    default_anchor_high: float = 120.0


class ScenarioConfig(BaseSettings):
    """Shock grid for the scenario P&L table."""

    model_config = SettingsConfigDict(env_prefix="SCENARIO_")

    max_shock_percent: int = 20
    shock_step_percent: int = 2


class DisplayConfig(BaseSettings):
    """Number formatting for reports and the CLI."""

    model_config = SettingsConfigDict(env_prefix="DISPLAY_")

    decimal_comma: bool = True  # 1.234,56
    currency_symbol: str = "$"
    unavailable_text: str = "N/A"


class Settings(BaseSettings):
    """Main settings container."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-configurations
    pricing: PricingDefaults = Field(default_factory=PricingDefaults)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    # Paths
    project_root: Path = Path(__file__).parent.parent
    reports_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "reports")
    log_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "logs")

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
