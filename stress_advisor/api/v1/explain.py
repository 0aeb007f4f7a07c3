"""POST /v1/explain - natural-language explanation for caller-supplied facts"""

from fastapi import APIRouter, Depends, Request

from stress_advisor.api.dependencies import get_explainer, get_request_id
from stress_advisor.api.v1.schemas import ExplainRequest, ExplainResponse
from stress_advisor.infrastructure.clients.explainer import Explainer

router = APIRouter()


@router.post("/explain", response_model=ExplainResponse)
async def create_explanation(
    request_body: ExplainRequest,
    request: Request,
    explainer: Explainer = Depends(get_explainer),
):
    """
    Explain a stress or scenario result.

    Always answers 200: when the text service is unconfigured, unreachable, or
    returns malformed output, a deterministic templated explanation is served.
    """
    explanation = await explainer.explain(request_body.type, request_body.facts, get_request_id(request))
    return ExplainResponse.from_domain(explanation)
