"""Scenario comparison - what-if changes to a household-month"""

import math
from dataclasses import replace
from typing import Any, Mapping

from stress_advisor.domain.models import (
    MonthlyInputs,
    ScenarioDelta,
    ScenarioResult,
    normalize_fields,
)
from stress_advisor.domain.scoring import calculate_stress, monthly_balance, total_expenses

SURVIVAL_SENTINEL = 999  # cashflow sustains itself


def apply_changes(base: MonthlyInputs, changes: Mapping[str, Any]) -> MonthlyInputs:
    """Overwrite only the recognized fields present in `changes`"""
    return replace(base, **normalize_fields(changes))


def survival_months(inputs: MonthlyInputs) -> int:
    """
    Whole months the savings balance covers expenses if income stops.

    Floored, so the estimate never overstates the runway. Returns 999 when the
    month's cashflow is non-negative (or there is nothing to spend).
    """
    expenses = total_expenses(inputs)
    if monthly_balance(inputs) >= 0 or expenses <= 0:
        return SURVIVAL_SENTINEL
    return int(math.floor(inputs.savings_balance / expenses))


def simulate(base: MonthlyInputs, changes: Mapping[str, Any]) -> ScenarioResult:
    """Score baseline and modified inputs and compute the deltas between them"""
    after = apply_changes(base, changes)

    base_result = calculate_stress(base)
    after_result = calculate_stress(after)

    return ScenarioResult(
        base=base_result,
        after=after_result,
        delta=ScenarioDelta(
            stress_score=after_result.stress_score - base_result.stress_score,
            monthly_balance=monthly_balance(after) - monthly_balance(base),
            survival_months=survival_months(after),
        ),
    )
