from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Subdivision rules
    min_lot_size_sqm: float = 90
    min_social_club_percentage: int = 10
    max_social_club_percentage: int = 30
    social_club_percentage_step: int = 1
    default_social_club_percentage: int = 20
    lot_area_tie_threshold_sqm: float = 5  # near-tie band for the squarer-lot preference
    common_area_tolerance_pct: float = 0.01

    # Soft performance budgets (logged, never enforced)
    scenario_sweep_budget_ms: float = 2000
    financial_recalc_budget_ms: float = 1000

    # Financial defaults
    default_currency: str = "USD"
    default_exchange_rate: float = 58.5  # DOP per USD
    default_profit_margins: list[float] = [15, 20, 25, 30]

    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
