"""Rental income and cashflow calculations.

Pure functions. Full precision is kept throughout; rounding belongs to the
display layer. Inputs are assumed to have passed the validation gate, so
nothing here clamps or range-checks.
"""

from rentaltax.domain.constants import DEFAULT_CONFIG, TaxConfig
from rentaltax.domain.entities import (
    CashflowResults,
    OperatingExpensesInputs,
    RentalIncomeInputs,
)


def calculate_gross_rent(
    weekly_rent: float,
    vacancy_weeks: float,
    ownership_pct: float,
    config: TaxConfig = DEFAULT_CONFIG,
) -> float:
    """Calculate annual gross rental income.

    Formula: (52 - vacancy_weeks) x weekly_rent x ownership_pct

    Args:
        weekly_rent: Weekly rent amount
        vacancy_weeks: Expected vacancy weeks per year
        ownership_pct: Ownership as a decimal (1.0 = 100%)
        config: Rate table supplying weeks per year

    Returns:
        Annual gross rental income

    Example:
        >>> calculate_gross_rent(550, 2, 1.0)
        27500.0
    """
    rentable_weeks = config.weeks_per_year - vacancy_weeks
    return float(rentable_weeks * weekly_rent * ownership_pct)


def calculate_interest_expense(
    loan_amount: float, interest_rate: float, ownership_pct: float
) -> float:
    """Calculate annual interest expense on the investment loan.

    Flat annual approximation: loan_amount x interest_rate x ownership_pct.
    No monthly compounding and no amortization feedback.

    Example:
        >>> calculate_interest_expense(480000, 0.06, 1.0)
        28800.0
    """
    return float(loan_amount * interest_rate * ownership_pct)


def calculate_total_operating_expenses(
    expenses: OperatingExpensesInputs, ownership_pct: float
) -> float:
    """Sum the seven cash expense items and scale by ownership."""
    return float(sum(expenses.amounts()) * ownership_pct)


def calculate_net_cashflow_pre_tax(
    gross_rent: float, total_expenses: float, interest_expense: float
) -> float:
    """Net cash position before depreciation and tax. May be negative.

    Example:
        >>> calculate_net_cashflow_pre_tax(27500, 7000, 28800)
        -8300.0
    """
    return float(gross_rent - total_expenses - interest_expense)


def calculate_cashflow_results(
    rental_income: RentalIncomeInputs,
    operating_expenses: OperatingExpensesInputs,
    loan_amount: float,
    interest_rate: float,
    ownership_pct: float,
    config: TaxConfig = DEFAULT_CONFIG,
) -> CashflowResults:
    """Calculate complete cashflow results.

    Args:
        rental_income: Rental income inputs
        operating_expenses: Operating expense inputs
        loan_amount: Total loan amount
        interest_rate: Annual interest rate as a decimal
        ownership_pct: Ownership as a decimal
        config: Rate table

    Returns:
        CashflowResults for the owner's share
    """
    gross_rental_income = calculate_gross_rent(
        rental_income.weekly_rent,
        rental_income.vacancy_weeks_per_year,
        ownership_pct,
        config,
    )
    total_operating_expenses = calculate_total_operating_expenses(
        operating_expenses, ownership_pct
    )
    interest_expense = calculate_interest_expense(loan_amount, interest_rate, ownership_pct)
    net_cashflow_pre_tax = calculate_net_cashflow_pre_tax(
        gross_rental_income, total_operating_expenses, interest_expense
    )

    return CashflowResults(
        gross_rental_income=gross_rental_income,
        total_operating_expenses=total_operating_expenses,
        interest_expense=interest_expense,
        net_cashflow_pre_tax=net_cashflow_pre_tax,
    )
