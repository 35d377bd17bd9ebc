"""Affordability engine - NCA minimum norms and disposable income"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional

from origination_gateway.domain.models import (
    AffordabilityAssessment,
    AffordabilityCalculation,
    AffordabilityData,
    AffordabilityItem,
    IncomeBand,
    MinimumNorms,
)

# Ordered, first match wins. Upper limits are inclusive: an income of exactly
# 25 000 belongs to the 6 250 - 25 000 band.
INCOME_BANDS = (
    IncomeBand("0-800", 800, MinimumNorms(0, 0, 0)),
    IncomeBand("800-6250", 6_250, MinimumNorms(800, 0, 0)),
    IncomeBand("6250-25000", 25_000, MinimumNorms(1167.88, 0, 0)),
    IncomeBand("25000-50000", 50_000, MinimumNorms(2855.38, 0.082, 25_000)),
    IncomeBand("50000+", None, MinimumNorms(4905.38, 0, 0)),
)

# Declared expenses below this share of gross income are treated as understated
EXPECTED_EXPENSE_RATIO = 0.7


def find_income_band(gross_income: float) -> IncomeBand:
    """
    Locate the income band for a gross monthly income.

    Negative incomes land in the first band. NaN compares false against every
    limit and lands in the catch-all band.
    """
    for band in INCOME_BANDS[:-1]:
        if gross_income <= band.upper_limit:
            return band
    return INCOME_BANDS[-1]


def calculate_minimum_norms(gross_income: float) -> MinimumNorms:
    """Minimum-norm formula (fixed factor, marginal rate, threshold) for an income"""
    return find_income_band(gross_income).norms


def calculate_minimum_expenses(gross_income: float) -> float:
    """
    Statutory minimum monthly living expenses for a gross income.

    Only the 25 000 - 50 000 band adds a marginal percentage above its
    threshold; every other band is a flat amount. The result jumps at band
    edges (1167.88 at 25 000, 2855.38 just above it).
    """
    norms = calculate_minimum_norms(gross_income)
    minimum_expenses = norms.fixed_factor

    if norms.percentage_above > 0 and gross_income > norms.threshold:
        minimum_expenses += (gross_income - norms.threshold) * norms.percentage_above

    return minimum_expenses


def _amount(value: Any) -> float:
    """Coerce a declared amount to float, treating missing or NaN as 0"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def _total(items: Optional[Iterable[AffordabilityItem]]) -> float:
    if not items:
        return 0.0
    return sum(_amount(item.amount) for item in items)


def calculate_affordability(
    monthly_income: float = 0,
    affordability_data: Optional[AffordabilityData] = None,
) -> AffordabilityCalculation:
    """
    Net disposable income from the application's declared figures.

    Formula: (monthly_income + additional_income) - deductions - expenses
    """
    base_income = _amount(monthly_income)

    additional_income = 0.0
    total_deductions = 0.0
    total_expenses = 0.0
    if affordability_data is not None:
        additional_income = _total(affordability_data.income)
        total_deductions = _total(affordability_data.deductions)
        total_expenses = _total(affordability_data.expenses)

    total_gross_income = base_income + additional_income
    net_income = total_gross_income - total_deductions
    disposable_income = net_income - total_expenses

    return AffordabilityCalculation(
        monthly_income=base_income,
        additional_income=additional_income,
        total_gross_income=total_gross_income,
        total_deductions=total_deductions,
        total_expenses=total_expenses,
        net_income=net_income,
        disposable_income=disposable_income,
    )


def disposable_income_status(disposable_income: float) -> str:
    """
    Map disposable income to a review status.

    - below 0:      negative
    - 0 - 1000:     low
    - 1000 - 3000:  moderate
    - 3000+:        healthy
    """
    if disposable_income < 0:
        return "negative"
    elif disposable_income < 1_000:
        return "low"
    elif disposable_income < 3_000:
        return "moderate"
    else:
        return "healthy"


def assess_affordability(
    monthly_income: float = 0,
    affordability_data: Optional[AffordabilityData] = None,
) -> AffordabilityAssessment:
    """
    Main entry point: compare declared expenses with the minimum norms.

    The surplus is what remains of disposable income once the statutory
    minimum living expenses for the applicant's gross income are reserved.
    """
    calculation = calculate_affordability(monthly_income, affordability_data)
    gross = calculation.total_gross_income

    band = find_income_band(gross)
    minimum_expenses = calculate_minimum_expenses(gross)

    expenses_below_norms = gross > 0 and calculation.total_expenses < minimum_expenses
    expenses_unrealistic = gross > 0 and calculation.total_expenses < gross * EXPECTED_EXPENSE_RATIO

    return AffordabilityAssessment(
        calculation=calculation,
        income_band=band,
        minimum_expenses=minimum_expenses,
        surplus=calculation.disposable_income - minimum_expenses,
        expenses_below_norms=expenses_below_norms,
        expenses_unrealistic=expenses_unrealistic,
        disposable_status=disposable_income_status(calculation.disposable_income),
    )


def format_rand(amount: float) -> str:
    """Whole-Rand display string, e.g. 25000 -> 'R25 000', -300 -> '-R300'"""
    rounded = int(Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}R{abs(rounded):,}".replace(",", " ")


def format_affordability_calculation(calculation: AffordabilityCalculation) -> Dict[str, Any]:
    """Display strings for every figure, plus the raw numbers for further calculations"""
    return {
        "monthly_income": format_rand(calculation.monthly_income),
        "additional_income": format_rand(calculation.additional_income),
        "total_gross_income": format_rand(calculation.total_gross_income),
        "total_deductions": format_rand(calculation.total_deductions),
        "total_expenses": format_rand(calculation.total_expenses),
        "net_income": format_rand(calculation.net_income),
        "disposable_income": format_rand(calculation.disposable_income),
        "raw": calculation,
    }
