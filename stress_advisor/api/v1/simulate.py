"""POST /v1/simulate - compare a baseline household-month against a what-if"""

import time

from fastapi import APIRouter, Depends, Request

from stress_advisor.api.dependencies import get_explainer, get_request_id
from stress_advisor.api.v1.schemas import (
    ExplainResponse,
    ScenarioExplainResponse,
    ScenarioResponse,
    SimulateRequest,
)
from stress_advisor.domain.explanations import scenario_facts
from stress_advisor.domain.models import ExplainType, ScenarioResult
from stress_advisor.domain.scenario import simulate
from stress_advisor.infrastructure.clients.explainer import Explainer
from stress_advisor.infrastructure.observability.logging import log_simulation
from stress_advisor.infrastructure.observability.metrics import record_simulation

router = APIRouter()


def _run_scenario(request_body: SimulateRequest, request_id: str) -> ScenarioResult:
    start_time = time.time()
    result = simulate(request_body.base.to_inputs(), request_body.changes.overrides())

    record_simulation(result.delta.stress_score)
    log_simulation(
        request_id,
        result.delta.stress_score,
        result.delta.survival_months,
        (time.time() - start_time) * 1000,
    )
    return result


@router.post("/simulate", response_model=ScenarioResponse)
def create_simulation(request_body: SimulateRequest, request: Request):
    """
    Score baseline and modified inputs and return both with their deltas.

    Only fields present in `changes` override the baseline; unknown keys are ignored.
    """
    result = _run_scenario(request_body, get_request_id(request))
    return ScenarioResponse.from_domain(result)


@router.post("/simulate/explain", response_model=ScenarioExplainResponse)
async def create_simulation_explanation(
    request_body: SimulateRequest,
    request: Request,
    explainer: Explainer = Depends(get_explainer),
):
    """Run a what-if scenario and explain the change in plain language"""
    request_id = get_request_id(request)
    result = _run_scenario(request_body, request_id)
    explanation = await explainer.explain(ExplainType.SCENARIO.value, scenario_facts(result), request_id)

    return ScenarioExplainResponse(
        scenario=ScenarioResponse.from_domain(result),
        explanation=ExplainResponse.from_domain(explanation),
    )
