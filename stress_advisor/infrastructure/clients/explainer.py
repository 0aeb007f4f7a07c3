"""Explanation façade: live text service with a deterministic local fallback"""

import logging
import time
from typing import Any, Mapping, Protocol

from stress_advisor.domain.exceptions import ExplanationServiceError, InvalidExplanationError
from stress_advisor.domain.explanations import build_prompt, fallback_explanation, parse_explanation
from stress_advisor.domain.models import Explanation, ExplainType
from stress_advisor.infrastructure.observability.logging import log_explanation
from stress_advisor.infrastructure.observability.metrics import record_explanation

KNOWN_TYPES = {t.value for t in ExplainType}


class TextGenerator(Protocol):
    async def generate_text(self, prompt: str) -> str: ...


class Explainer:
    """
    Produces explanations for stress and scenario results.

    The text client is injected at construction; with no client every call is
    answered by the fallback. explain() never raises: service errors and
    malformed output both degrade to the fallback, which has the same shape.
    """

    def __init__(self, client: TextGenerator | None = None):
        self.client = client

    async def explain(
        self,
        explain_type: str,
        facts: Mapping[str, Any],
        request_id: str = "unknown",
    ) -> Explanation:
        explain_type = getattr(explain_type, "value", explain_type)
        metric_type = explain_type if explain_type in KNOWN_TYPES else "other"
        start_time = time.time()

        if self.client is None:
            return self._fallback(explain_type, metric_type, facts, "not_configured", request_id, start_time)

        try:
            text = await self.client.generate_text(build_prompt(explain_type, facts))
            explanation = parse_explanation(text)
        except ExplanationServiceError as e:
            logging.warning(f"Text service failed: {e}", extra={"request_id": request_id, "explain_type": explain_type})
            return self._fallback(explain_type, metric_type, facts, "service_error", request_id, start_time)
        except InvalidExplanationError as e:
            logging.warning(f"Invalid explanation output: {e}", extra={"request_id": request_id, "explain_type": explain_type})
            return self._fallback(explain_type, metric_type, facts, "invalid_output", request_id, start_time)
        except Exception as e:
            logging.error(f"Unexpected explanation error: {e}", extra={"request_id": request_id, "explain_type": explain_type})
            return self._fallback(explain_type, metric_type, facts, "unexpected_error", request_id, start_time)

        record_explanation(metric_type, "model")
        log_explanation(request_id, explain_type, "model", (time.time() - start_time) * 1000)
        return explanation

    def _fallback(
        self,
        explain_type: str,
        metric_type: str,
        facts: Mapping[str, Any],
        reason: str,
        request_id: str,
        start_time: float,
    ) -> Explanation:
        explanation = fallback_explanation(explain_type, facts)
        record_explanation(metric_type, "fallback", reason)
        log_explanation(request_id, explain_type, "fallback", (time.time() - start_time) * 1000)
        return explanation
