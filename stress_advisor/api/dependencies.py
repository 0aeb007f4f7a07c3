"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from stress_advisor.config import settings
from stress_advisor.infrastructure.clients.explainer import Explainer
from stress_advisor.infrastructure.clients.gemini import GeminiClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_explainer() -> Explainer:
    """Provide explanation façade; without an API key it only serves fallbacks"""
    if not settings.gemini_api_key:
        return Explainer()
    return Explainer(GeminiClient(api_key=settings.gemini_api_key))
