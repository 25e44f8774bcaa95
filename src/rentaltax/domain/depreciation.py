"""Division 43 and Division 40 depreciation calculations.

Division 43 (capital works) allows a fixed percentage of the original
construction cost (excluding land) each year. Division 40 (plant and
equipment) is taken as a user-supplied annual estimate; no per-asset
schedule, prime cost or diminishing value method is modelled.
"""

from rentaltax.domain.constants import DEFAULT_CONFIG, TaxConfig
from rentaltax.domain.entities import DepreciationInputs, DepreciationResults


def calculate_capital_works_deduction(
    construction_value: float,
    ownership_pct: float,
    config: TaxConfig = DEFAULT_CONFIG,
) -> float:
    """Calculate the Division 43 deduction.

    Example:
        >>> calculate_capital_works_deduction(300000, 1.0)
        7500.0
    """
    return float(construction_value * config.capital_works_rate * ownership_pct)


def calculate_plant_equipment_deduction(annual_estimate: float, ownership_pct: float) -> float:
    """Scale the Division 40 annual estimate by ownership."""
    return float(annual_estimate * ownership_pct)


def calculate_total_depreciation(capital_works: float, plant_equipment: float) -> float:
    """Sum both depreciation components (already ownership adjusted)."""
    return float(capital_works + plant_equipment)


def calculate_depreciation_results(
    depreciation: DepreciationInputs,
    ownership_pct: float,
    config: TaxConfig = DEFAULT_CONFIG,
) -> DepreciationResults:
    """Calculate complete depreciation results."""
    capital_works_deduction = calculate_capital_works_deduction(
        depreciation.construction_value, ownership_pct, config
    )
    plant_equipment_deduction = calculate_plant_equipment_deduction(
        depreciation.plant_equipment_annual, ownership_pct
    )

    return DepreciationResults(
        capital_works_deduction=capital_works_deduction,
        plant_equipment_deduction=plant_equipment_deduction,
        total_depreciation=calculate_total_depreciation(
            capital_works_deduction, plant_equipment_deduction
        ),
    )
