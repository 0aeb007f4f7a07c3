"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from stress_advisor.api.main import create_app
from stress_advisor.api.dependencies import get_explainer
from stress_advisor.domain.models import MonthlyInputs
from stress_advisor.infrastructure.clients.explainer import Explainer


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a fallback-only explainer"""
    app = create_app()
    app.dependency_overrides[get_explainer] = lambda: Explainer()
    return TestClient(app)


@pytest.fixture
def sample_inputs() -> MonthlyInputs:
    """Typical renting household with a thin savings buffer"""
    return MonthlyInputs(
        income=4200,
        rent=1600,
        utilities=250,
        transport=450,
        food=900,
        debt=350,
        subscriptions=120,
        savings_balance=5000,
    )


@pytest.fixture
def sample_payload() -> dict:
    """Same household as sample_inputs, in the web client's wire format"""
    return {
        "incomeMonthly": 4200,
        "rentMonthly": 1600,
        "utilitiesMonthly": 250,
        "transportMonthly": 450,
        "foodMonthly": 900,
        "debtMonthly": 350,
        "subscriptionsMonthly": 120,
        "savingsBalance": 5000,
    }
