"""
Explanation building blocks: fact payloads, prompt, tolerant parsing, and the
deterministic fallback used whenever the text service can't be used.

Everything here is pure; the network call lives in the infrastructure layer.
"""

import json
import math
from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator

from stress_advisor.domain.exceptions import InvalidExplanationError
from stress_advisor.domain.models import Explanation, ExplainType, ScenarioResult, StressResult
from stress_advisor.domain.scenario import SURVIVAL_SENTINEL
from stress_advisor.domain.scoring import round_half_up

FALLBACK_CONFIDENCE = 60
GENERIC_FALLBACK_CONFIDENCE = 55


def stress_facts(result: StressResult) -> Dict[str, Any]:
    """Flat fact record for a stress explanation"""
    return {
        "stressScore": result.stress_score,
        "riskLevel": result.risk_level.value,
        "expenseRatio": result.expense_ratio,
        "debtRatio": result.debt_ratio,
        "bufferMonths": result.buffer_months,
        "pressureSources": list(result.pressure_sources),
    }


def scenario_facts(result: ScenarioResult) -> Dict[str, Any]:
    """Flat fact record for a scenario explanation"""
    return {
        "baseStressScore": result.base.stress_score,
        "afterStressScore": result.after.stress_score,
        "afterRiskLevel": result.after.risk_level.value,
        "deltaStressScore": result.delta.stress_score,
        "deltaMonthlyBalance": round(result.delta.monthly_balance, 2),
        "survivalMonths": result.delta.survival_months,
    }


def build_prompt(explain_type: str, facts: Mapping[str, Any]) -> str:
    """Constrained prompt embedding the type and the verbatim facts"""
    return "\n".join(
        [
            "You are a financial assistant for household cost-of-living planning.",
            "Return ONLY valid JSON with keys: headline, reason, tradeoff, confidence (0-100).",
            "No markdown. No extra keys. No advice to buy or invest in specific financial products.",
            "",
            f"TYPE: {explain_type}",
            "FACTS (do not change numbers):",
            json.dumps(dict(facts), default=str),
            "",
            "Now output JSON only.",
        ]
    )


def clamp_confidence(value: float) -> int:
    """
    Round, then clamp into [0, 100].

    Out-of-range values (including infinities and arbitrarily large ints) are
    compared before rounding so they never go through a float conversion.
    """
    if value >= 100:
        return 100
    if value <= 0:
        return 0
    return round_half_up(value)


class ModelExplanation(BaseModel):
    """Shape the text service must return; no type coercion"""

    headline: StrictStr
    reason: StrictStr
    tradeoff: StrictStr
    confidence: Union[StrictInt, StrictFloat]

    @field_validator("confidence")
    @classmethod
    def reject_nan(cls, value: Union[int, float]) -> Union[int, float]:
        if isinstance(value, float) and math.isnan(value):
            raise ValueError("confidence is NaN")
        return value


def parse_explanation(text: str) -> Explanation:
    """
    Extract an explanation from model output.

    The JSON object is taken from the first '{' to the last '}' so prose or
    markdown fences around it are tolerated.

    Raises:
        InvalidExplanationError: No object found, bad JSON, or missing/ill-typed keys
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise InvalidExplanationError("No JSON object in model output")

    try:
        parsed = json.loads(text[start : end + 1])
    except ValueError as e:
        raise InvalidExplanationError(f"Unparsable model output: {e}") from e

    try:
        output = ModelExplanation.model_validate(parsed)
    except ValidationError as e:
        raise InvalidExplanationError(f"Ill-typed model output: {e.error_count()} error(s)") from e

    return Explanation(
        headline=output.headline,
        reason=output.reason,
        tradeoff=output.tradeoff,
        confidence=clamp_confidence(output.confidence),
    )


def _fact_number(facts: Mapping[str, Any], key: str, default: float) -> float:
    value = facts.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return default
        return parsed if math.isfinite(parsed) else default
    return default


def _display(value: float) -> str:
    # 5.0 renders as "5", 2.5 as "2.5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def fallback_explanation(explain_type: str, facts: Mapping[str, Any]) -> Explanation:
    """
    Deterministic templated explanation.

    - scenario: driven by deltaStressScore, deltaMonthlyBalance, survivalMonths
    - stress: driven by stressScore and pressureSources
    - anything else: generic summary with lower confidence
    """
    if explain_type == ExplainType.SCENARIO.value:
        delta_score = _fact_number(facts, "deltaStressScore", 0)
        delta_balance = _fact_number(facts, "deltaMonthlyBalance", 0)
        survival = _fact_number(facts, "survivalMonths", SURVIVAL_SENTINEL)

        verb = "increases" if delta_score > 0 else "changes"
        if survival == SURVIVAL_SENTINEL:
            tradeoff = "Cashflow is non-negative in this scenario."
        else:
            tradeoff = f"Estimated survival: {_display(survival)} months if income stops."

        return Explanation(
            headline=f"Stress {verb} by {_display(delta_score)}",
            reason=f"Monthly balance changes by {_display(delta_balance)}.",
            tradeoff=tradeoff,
            confidence=FALLBACK_CONFIDENCE,
        )

    if explain_type == ExplainType.STRESS.value:
        score = _fact_number(facts, "stressScore", 0)
        sources = facts.get("pressureSources")
        if isinstance(sources, (list, tuple)) and sources:
            sources_text = " + ".join(str(source) for source in sources)
        else:
            sources_text = "key expenses"

        return Explanation(
            headline=f"Stress score is {_display(score)}",
            reason=f"Main pressure comes from {sources_text}.",
            tradeoff="Reducing top pressure categories improves score fastest.",
            confidence=FALLBACK_CONFIDENCE,
        )

    return Explanation(
        headline="Recommendation summary",
        reason="Based on your spending pattern and constraints.",
        tradeoff="Higher savings usually requires reducing discretionary spending.",
        confidence=GENERIC_FALLBACK_CONFIDENCE,
    )
