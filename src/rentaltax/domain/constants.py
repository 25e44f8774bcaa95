"""Rates, limits and defaults for the rental property tax model.

Values are held in frozen dataclasses so calculators can be run against an
alternate rate table (e.g. a future tax year) without touching module state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TaxConfig:
    """Fixed rates used by the calculators."""

    # Standard Medicare Levy rate (2% as of 2024-25)
    default_medicare_levy_rate: float = 0.02
    # Division 43 capital works rate, per annum
    capital_works_rate: float = 0.025
    weeks_per_year: int = 52


@dataclass(frozen=True)
class ValidationLimits:
    """Bounds enforced by the validation gate, never by the calculators."""

    min_weekly_rent: float = 0
    max_weekly_rent: float = 10000

    min_vacancy_weeks: float = 0
    max_vacancy_weeks: float = 52

    min_ownership_pct: float = 0
    max_ownership_pct: float = 100

    # Can be 0 for offset accounts
    min_interest_rate: float = 0
    max_interest_rate: float = 0.25

    min_loan_term: int = 1
    max_loan_term: int = 40

    min_marginal_rate: float = 0
    max_marginal_rate: float = 0.47

    # Includes the Medicare Levy Surcharge
    min_medicare_rate: float = 0
    max_medicare_rate: float = 0.035


DEFAULT_CONFIG = TaxConfig()
DEFAULT_LIMITS = ValidationLimits()

# Years at which the amortization schedule is sampled
MILESTONE_YEARS = (1, 5, 10, 15, 20, 25, 30)

# 2024-25 brackets, offered as flat marginal rates for planning
MARGINAL_TAX_RATES = (
    (0.0, "0% (Up to $18,200)"),
    (0.16, "16% ($18,201 - $45,000)"),
    (0.30, "30% ($45,001 - $135,000)"),
    (0.37, "37% ($135,001 - $190,000)"),
    (0.45, "45% (Over $190,000)"),
)

# LVR above which lenders typically charge mortgage insurance
LMI_LVR_THRESHOLD = 80.0

# Rental loss above this share of base income is flagged as high gearing
HIGH_GEARING_INCOME_SHARE = 0.5

# Marginal rate from which negative gearing is called out as a bracket advantage
HIGH_MARGINAL_RATE = 0.37
