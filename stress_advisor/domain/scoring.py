"""Stress scoring engine - core business logic for household financial stress"""

import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from stress_advisor.domain.models import (
    EXPENSE_CATEGORIES,
    MonthlyInputs,
    RiskLevel,
    StressResult,
)

RATIO_SENTINEL = 999.0  # income <= 0
BUFFER_SENTINEL = 12.0  # total expenses <= 0
MIN_PRESSURE_SHARE = 0.05
MAX_PRESSURE_SOURCES = 2

Band = Tuple[float, int]

# (upper bound, sub-score): first band with ratio <= bound wins
EXPENSE_RATIO_BANDS: Sequence[Band] = (
    (0.50, 10),
    (0.70, 30),
    (0.85, 60),
    (1.00, 85),
)

DEBT_RATIO_BANDS: Sequence[Band] = (
    (0.10, 10),
    (0.20, 35),
    (0.35, 70),
)

# (lower bound, sub-score): first band with months >= bound wins
BUFFER_MONTHS_BANDS: Sequence[Band] = (
    (6.0, 10),
    (3.0, 35),
    (1.0, 70),
)

SATURATED_SUB_SCORE = 100

# (max score, level), checked in ascending order
RISK_BANDS: Sequence[Tuple[int, RiskLevel]] = (
    (39, RiskLevel.LOW),
    (69, RiskLevel.MODERATE),
    (100, RiskLevel.HIGH),
)


@dataclass(frozen=True)
class ScoringWeights:
    """Weights applied to the three sub-scores (sum to 1.0)"""

    expense: float = 0.45
    buffer: float = 0.35
    debt: float = 0.20


DEFAULT_WEIGHTS = ScoringWeights()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero for positives"""
    return int(math.floor(value + 0.5))


def _first_band(value: float, bands: Sequence[Band], matches: Callable[[float, float], bool]) -> int:
    for bound, score in bands:
        if matches(value, bound):
            return score
    return SATURATED_SUB_SCORE


def score_expense_ratio(ratio: float) -> int:
    """Expense/income ratio -> sub-score (higher ratio is worse)"""
    return _first_band(ratio, EXPENSE_RATIO_BANDS, lambda v, bound: v <= bound)


def score_debt_ratio(ratio: float) -> int:
    """Debt/income ratio -> sub-score (higher ratio is worse)"""
    return _first_band(ratio, DEBT_RATIO_BANDS, lambda v, bound: v <= bound)


def score_buffer_months(months: float) -> int:
    """Savings runway in months -> sub-score (larger buffer is safer)"""
    return _first_band(months, BUFFER_MONTHS_BANDS, lambda v, bound: v >= bound)


def total_expenses(inputs: MonthlyInputs) -> float:
    """Sum of the six monthly expense categories"""
    return sum(getattr(inputs, attr) for _, attr in EXPENSE_CATEGORIES)


def monthly_balance(inputs: MonthlyInputs) -> float:
    """Income minus total expenses for the month"""
    return inputs.income - total_expenses(inputs)


def risk_level_from_score(score: int) -> RiskLevel:
    """Map stress score to a risk tier; scores above every band are High"""
    for max_score, level in RISK_BANDS:
        if score <= max_score:
            return level
    return RiskLevel.HIGH


def top_pressure_sources(inputs: MonthlyInputs, expenses: float) -> List[str]:
    """
    Rank the categories that drive spending.

    Keeps categories with at least a 5% share of total expenses, sorted by share
    descending, top two only. sorted() is stable, so equal shares keep the
    category enumeration order.
    """
    if expenses <= 0:
        return []

    shares = [(name, getattr(inputs, attr) / expenses) for name, attr in EXPENSE_CATEGORIES]
    significant = [item for item in shares if item[1] >= MIN_PRESSURE_SHARE]
    ranked = sorted(significant, key=lambda item: item[1], reverse=True)
    return [name for name, _ in ranked[:MAX_PRESSURE_SOURCES]]


def calculate_stress(inputs: MonthlyInputs, weights: ScoringWeights = DEFAULT_WEIGHTS) -> StressResult:
    """
    Score one household-month.

    Scoring weights (defaults):
    - 45%: Expense ratio (total expenses / income)
    - 35%: Buffer months (savings / total expenses)
    - 20%: Debt ratio (debt / income)

    Division-by-zero cases use sentinels instead of raising:
    income <= 0 -> both ratios 999; total expenses <= 0 -> buffer 12 months.
    """
    expenses = total_expenses(inputs)
    income = inputs.income

    expense_ratio = expenses / income if income > 0 else RATIO_SENTINEL
    debt_ratio = inputs.debt / income if income > 0 else RATIO_SENTINEL
    buffer_months = inputs.savings_balance / expenses if expenses > 0 else BUFFER_SENTINEL

    raw = (
        weights.expense * score_expense_ratio(expense_ratio)
        + weights.buffer * score_buffer_months(buffer_months)
        + weights.debt * score_debt_ratio(debt_ratio)
    )
    stress_score = round_half_up(min(max(raw, 0.0), 100.0))

    return StressResult(
        stress_score=stress_score,
        risk_level=risk_level_from_score(stress_score),
        expense_ratio=round(expense_ratio, 3),
        debt_ratio=round(debt_ratio, 3),
        buffer_months=round(buffer_months, 2),
        pressure_sources=top_pressure_sources(inputs, expenses),
    )
