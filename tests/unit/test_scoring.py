"""Unit tests for stress scoring logic"""

import pytest
from stress_advisor.api.v1.schemas import MonthlyFigures
from stress_advisor.domain.models import MonthlyInputs, RiskLevel
from stress_advisor.domain.scoring import (
    BUFFER_SENTINEL,
    RATIO_SENTINEL,
    ScoringWeights,
    calculate_stress,
    monthly_balance,
    risk_level_from_score,
    score_buffer_months,
    score_debt_ratio,
    score_expense_ratio,
    top_pressure_sources,
    total_expenses,
)


@pytest.mark.parametrize(
    "ratio, expected",
    [(0.0, 10), (0.5, 10), (0.5001, 30), (0.7, 30), (0.85, 60), (1.0, 85), (1.0001, 100), (999, 100)],
)
def test_score_expense_ratio_bands(ratio, expected):
    """Upper bounds are inclusive; first matching band wins"""
    assert score_expense_ratio(ratio) == expected


@pytest.mark.parametrize(
    "ratio, expected",
    [(0.0, 10), (0.1, 10), (0.15, 35), (0.2, 35), (0.35, 70), (0.36, 100), (999, 100)],
)
def test_score_debt_ratio_bands(ratio, expected):
    assert score_debt_ratio(ratio) == expected


@pytest.mark.parametrize(
    "months, expected",
    [(12, 10), (6, 10), (5.99, 35), (3, 35), (1, 70), (0.99, 100), (0, 100)],
)
def test_score_buffer_months_bands(months, expected):
    """Larger buffer is safer, so the sub-score falls as months grow"""
    assert score_buffer_months(months) == expected


def test_risk_level_bands():
    assert risk_level_from_score(0) == RiskLevel.LOW
    assert risk_level_from_score(39) == RiskLevel.LOW
    assert risk_level_from_score(40) == RiskLevel.MODERATE
    assert risk_level_from_score(69) == RiskLevel.MODERATE
    assert risk_level_from_score(70) == RiskLevel.HIGH
    assert risk_level_from_score(100) == RiskLevel.HIGH
    # Beyond every band defaults to the highest tier
    assert risk_level_from_score(150) == RiskLevel.HIGH


def test_total_expenses_and_balance(sample_inputs: MonthlyInputs):
    assert total_expenses(sample_inputs) == 3670
    assert monthly_balance(sample_inputs) == 530


def test_calculate_stress_typical_household(sample_inputs: MonthlyInputs):
    """Expense 85, buffer 70, debt 10 -> 0.45*85 + 0.35*70 + 0.2*10 = 64.75"""
    result = calculate_stress(sample_inputs)

    assert result.expense_ratio == 0.874
    assert result.debt_ratio == 0.083
    assert result.buffer_months == 1.36
    assert result.stress_score == 65
    assert result.risk_level == RiskLevel.MODERATE
    assert result.pressure_sources == ["Rent", "Food"]


def test_calculate_stress_low_risk():
    inputs = MonthlyInputs(income=10000, rent=2000, food=1000, savings_balance=30000)
    result = calculate_stress(inputs)

    assert result.stress_score == 10
    assert result.risk_level == RiskLevel.LOW


def test_calculate_stress_saturates_at_100():
    inputs = MonthlyInputs(income=3000, rent=1200, food=500, debt=1500, savings_balance=0)
    result = calculate_stress(inputs)

    assert result.stress_score == 100
    assert result.risk_level == RiskLevel.HIGH


def test_zero_income_uses_ratio_sentinel():
    """No income: both ratios are 999 and their sub-scores saturate"""
    inputs = MonthlyInputs(rent=1000, food=400, debt=300, savings_balance=0)
    result = calculate_stress(inputs)

    assert result.expense_ratio == RATIO_SENTINEL
    assert result.debt_ratio == RATIO_SENTINEL
    assert result.stress_score == 100


def test_zero_expenses_uses_buffer_sentinel():
    inputs = MonthlyInputs(income=1000)
    result = calculate_stress(inputs)

    assert result.buffer_months == BUFFER_SENTINEL
    assert result.pressure_sources == []
    assert result.stress_score == 10


def test_calculate_stress_is_deterministic(sample_inputs: MonthlyInputs):
    assert calculate_stress(sample_inputs) == calculate_stress(sample_inputs)


def test_stress_never_decreases_as_expenses_grow():
    """Debt and buffer sub-scores held fixed; only the expense ratio moves"""
    previous = -1
    for food in range(0, 6000, 50):
        inputs = MonthlyInputs(income=4000, rent=1000, debt=200, food=food, savings_balance=10**9)
        score = calculate_stress(inputs).stress_score
        assert 0 <= score <= 100
        assert score >= previous
        previous = score


def test_custom_weights():
    inputs = MonthlyInputs(income=1000, rent=2000, savings_balance=100000)
    result = calculate_stress(inputs, ScoringWeights(expense=1.0, buffer=0.0, debt=0.0))

    assert result.stress_score == 100


def test_pressure_sources_skip_small_categories():
    """Subscriptions is under 5% of spending and never listed"""
    inputs = MonthlyInputs(rent=100, subscriptions=4)
    assert top_pressure_sources(inputs, total_expenses(inputs)) == ["Rent"]


def test_pressure_sources_top_two_by_share():
    inputs = MonthlyInputs(rent=500, utilities=100, transport=900, food=700, debt=300, subscriptions=50)
    assert top_pressure_sources(inputs, total_expenses(inputs)) == ["Transport", "Food"]


def test_pressure_sources_ties_keep_category_order():
    inputs = MonthlyInputs(food=300, utilities=300, rent=300)
    assert top_pressure_sources(inputs, total_expenses(inputs)) == ["Rent", "Utilities"]

    inputs = MonthlyInputs(subscriptions=200, transport=200, rent=100)
    assert top_pressure_sources(inputs, total_expenses(inputs)) == ["Transport", "Subscriptions"]


def test_pressure_sources_empty_without_expenses():
    assert top_pressure_sources(MonthlyInputs(income=5000), 0) == []


def test_from_mapping_sanitizes_boundary_values():
    """Missing, null, negative, and junk values become 0; unknown keys are ignored"""
    inputs = MonthlyInputs.from_mapping(
        {
            "incomeMonthly": 3000,
            "rent": -50,
            "food": None,
            "transport": "abc",
            "savingsBalance": "1200",
            "pets": 80,
        }
    )

    assert inputs == MonthlyInputs(income=3000, savings_balance=1200)


def test_request_figures_go_through_from_mapping():
    """Wire names, nulls, and negatives from a request end up as the same sanitized inputs"""
    payload = {"incomeMonthly": 3000, "rentMonthly": -50, "food": None, "savingsBalance": 1200, "pets": 80}

    inputs = MonthlyFigures.model_validate(payload).to_inputs()

    assert inputs == MonthlyInputs.from_mapping(payload)
    assert inputs == MonthlyInputs(income=3000, savings_balance=1200)
