"""Loan repayment and amortization calculations.

Standard fixed-rate mortgage arithmetic for principal and interest (P&I)
and interest-only (I/O) loans. Used for the loan comparison display only;
the tax pipeline uses the flat interest expense from the rental module.
"""

from typing import Iterable, Optional

from rentaltax.domain.constants import MILESTONE_YEARS
from rentaltax.domain.entities import AmortizationMilestone, LoanComparisonResults


def calculate_lvr(loan_amount: float, purchase_price: float) -> Optional[float]:
    """Return the loan-to-value ratio as a percentage, or None without a price."""
    if purchase_price <= 0:
        return None
    return loan_amount / purchase_price * 100


def calculate_monthly_pi_repayment(
    loan_amount: float, annual_interest_rate: float, loan_term_years: float
) -> float:
    """Calculate the monthly P&I repayment.

    Formula: M = P x r(1+r)^n / ((1+r)^n - 1), with r the monthly rate and
    n the number of monthly payments. A zero rate falls back to straight-line
    repayment; a non-positive amount or term returns 0.

    Args:
        loan_amount: Principal
        annual_interest_rate: Annual rate as a decimal
        loan_term_years: Term in years

    Returns:
        Monthly repayment amount

    Example:
        >>> round(calculate_monthly_pi_repayment(480000, 0.06, 30), 2)
        2877.84
    """
    if loan_amount <= 0 or loan_term_years <= 0:
        return 0.0
    if annual_interest_rate <= 0:
        return loan_amount / (loan_term_years * 12)

    monthly_rate = annual_interest_rate / 12
    number_of_payments = loan_term_years * 12

    factor = (1 + monthly_rate) ** number_of_payments
    return loan_amount * (monthly_rate * factor) / (factor - 1)


def calculate_monthly_io_repayment(loan_amount: float, annual_interest_rate: float) -> float:
    """Calculate the monthly interest-only repayment."""
    if loan_amount <= 0 or annual_interest_rate <= 0:
        return 0.0
    return (loan_amount * annual_interest_rate) / 12


def calculate_total_interest_pi(
    loan_amount: float, annual_interest_rate: float, loan_term_years: float
) -> float:
    """Total interest paid over the full term of a P&I loan."""
    monthly_payment = calculate_monthly_pi_repayment(
        loan_amount, annual_interest_rate, loan_term_years
    )
    return monthly_payment * loan_term_years * 12 - loan_amount


def calculate_total_interest_io(
    loan_amount: float, annual_interest_rate: float, years: float
) -> float:
    """Total interest paid on an I/O loan over the given number of years."""
    return float(loan_amount * annual_interest_rate * years)


def calculate_loan_comparison(
    loan_amount: float, annual_interest_rate: float, loan_term_years: float
) -> LoanComparisonResults:
    """Compare P&I and I/O repayments over the same term.

    Args:
        loan_amount: Principal
        annual_interest_rate: Annual rate as a decimal
        loan_term_years: Term in years

    Returns:
        LoanComparisonResults. An I/O loan never reduces principal, so
        principal_remaining_io is always the original loan amount.
    """
    monthly_pi = calculate_monthly_pi_repayment(loan_amount, annual_interest_rate, loan_term_years)
    monthly_io = calculate_monthly_io_repayment(loan_amount, annual_interest_rate)
    total_interest_pi = calculate_total_interest_pi(
        loan_amount, annual_interest_rate, loan_term_years
    )
    total_interest_io = calculate_total_interest_io(
        loan_amount, annual_interest_rate, loan_term_years
    )

    return LoanComparisonResults(
        monthly_pi=monthly_pi,
        annual_pi=monthly_pi * 12,
        monthly_io=monthly_io,
        annual_io=monthly_io * 12,
        monthly_savings_io=monthly_pi - monthly_io,
        total_interest_pi=total_interest_pi,
        total_interest_io=total_interest_io,
        extra_interest_io=total_interest_io - total_interest_pi,
        principal_remaining_io=float(loan_amount),
    )


def calculate_amortization_milestones(
    loan_amount: float,
    annual_interest_rate: float,
    loan_term_years: int,
    milestone_years: Iterable[int] = MILESTONE_YEARS,
) -> list[AmortizationMilestone]:
    """Walk a P&I loan month by month and snapshot cumulative totals.

    Every month is processed, including those between milestones, since
    interest is charged on the declining balance. The walk stops once the
    last requested milestone inside the term has been captured.

    Args:
        loan_amount: Principal
        annual_interest_rate: Annual rate as a decimal
        loan_term_years: Term in years
        milestone_years: Years to sample; those beyond the term are dropped

    Returns:
        Milestones in ascending year order, or an empty list if the amount,
        rate or term is not positive
    """
    if loan_amount <= 0 or annual_interest_rate <= 0 or loan_term_years <= 0:
        return []

    monthly_rate = annual_interest_rate / 12
    monthly_payment = calculate_monthly_pi_repayment(
        loan_amount, annual_interest_rate, loan_term_years
    )

    years = sorted(year for year in set(milestone_years) if 0 < year <= loan_term_years)
    milestones: list[AmortizationMilestone] = []

    balance = float(loan_amount)
    total_principal_paid = 0.0
    total_interest_paid = 0.0
    next_index = 0
    total_months = int(loan_term_years * 12)

    for month in range(1, total_months + 1):
        if next_index >= len(years):
            break

        interest_payment = balance * monthly_rate
        principal_payment = monthly_payment - interest_payment

        balance -= principal_payment
        total_principal_paid += principal_payment
        total_interest_paid += interest_payment

        if month == years[next_index] * 12:
            milestones.append(
                AmortizationMilestone(
                    year=years[next_index],
                    principal_paid=total_principal_paid,
                    interest_paid=total_interest_paid,
                    remaining_balance=max(0.0, balance),
                )
            )
            next_index += 1

    return milestones
