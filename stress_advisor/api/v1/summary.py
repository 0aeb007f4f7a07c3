"""POST /v1/summary - score one household-month"""

import time

from fastapi import APIRouter, Depends, Request

from stress_advisor.api.dependencies import get_explainer, get_request_id
from stress_advisor.api.v1.schemas import (
    ExplainResponse,
    MonthlyFigures,
    StressResultSchema,
    SummaryExplainResponse,
    SummaryResponse,
)
from stress_advisor.domain.explanations import stress_facts
from stress_advisor.domain.models import ExplainType, MonthlyInputs, StressResult
from stress_advisor.domain.scoring import calculate_stress, monthly_balance, total_expenses
from stress_advisor.infrastructure.clients.explainer import Explainer
from stress_advisor.infrastructure.observability.logging import log_stress_summary
from stress_advisor.infrastructure.observability.metrics import record_stress

router = APIRouter()


def _summarize(inputs: MonthlyInputs, request_id: str) -> tuple[StressResult, SummaryResponse]:
    start_time = time.time()
    result = calculate_stress(inputs)

    record_stress(result.stress_score, result.risk_level.value)
    log_stress_summary(
        request_id,
        result.stress_score,
        result.risk_level.value,
        result.pressure_sources,
        (time.time() - start_time) * 1000,
    )

    summary = SummaryResponse(
        **StressResultSchema.from_domain(result).model_dump(),
        total_expenses=total_expenses(inputs),
        monthly_balance=monthly_balance(inputs),
    )
    return result, summary


@router.post("/summary", response_model=SummaryResponse)
def create_summary(request_body: MonthlyFigures, request: Request):
    """
    Compute stress score, risk tier, ratios, buffer months, and pressure sources.

    Missing, null, or negative amounts count as 0.
    """
    _, summary = _summarize(request_body.to_inputs(), get_request_id(request))
    return summary


@router.post("/summary/explain", response_model=SummaryExplainResponse)
async def create_summary_explanation(
    request_body: MonthlyFigures,
    request: Request,
    explainer: Explainer = Depends(get_explainer),
):
    """Score a household-month and explain the result in plain language"""
    request_id = get_request_id(request)
    result, summary = _summarize(request_body.to_inputs(), request_id)
    explanation = await explainer.explain(ExplainType.STRESS.value, stress_facts(result), request_id)

    return SummaryExplainResponse(
        summary=summary,
        explanation=ExplainResponse.from_domain(explanation),
    )
