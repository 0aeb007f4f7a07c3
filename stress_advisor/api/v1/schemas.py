"""Pydantic schemas for API request/response validation"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from stress_advisor.domain.models import (
    FIELD_ALIASES,
    Explanation,
    MonthlyInputs,
    RiskLevel,
    ScenarioResult,
    StressResult,
    to_amount,
)


class CamelModel(BaseModel):
    """Response base: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MonthlyFigures(BaseModel):
    """
    Monthly household figures as sent by clients.

    Accepts snake_case, camelCase, and the web client's `*Monthly` names.
    Null or negative amounts become 0; unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    income: Optional[float] = None
    rent: Optional[float] = None
    utilities: Optional[float] = None
    transport: Optional[float] = None
    food: Optional[float] = None
    debt: Optional[float] = None
    subscriptions: Optional[float] = None
    savings_balance: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def rename_wire_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {FIELD_ALIASES.get(key, key): value for key, value in data.items()}
        return data

    @field_validator("*", mode="after")
    @classmethod
    def non_negative(cls, value: Optional[float]) -> float:
        return to_amount(value)

    def overrides(self) -> Dict[str, float]:
        """Only the fields the client actually sent"""
        return self.model_dump(exclude_unset=True)

    def to_inputs(self) -> MonthlyInputs:
        return MonthlyInputs.from_mapping(self.overrides())


class SimulateRequest(BaseModel):
    """Request body for POST /v1/simulate"""

    base: MonthlyFigures
    changes: MonthlyFigures = Field(default_factory=MonthlyFigures)


class ExplainRequest(BaseModel):
    """Request body for POST /v1/explain"""

    type: Literal["stress", "scenario", "optimize"]
    facts: Dict[str, Any] = Field(default_factory=dict)


class StressResultSchema(CamelModel):
    """Scored household-month"""

    stress_score: int
    risk_level: RiskLevel
    expense_ratio: float
    debt_ratio: float
    buffer_months: float
    pressure_sources: List[str]

    @classmethod
    def from_domain(cls, result: StressResult) -> "StressResultSchema":
        return cls(
            stress_score=result.stress_score,
            risk_level=result.risk_level,
            expense_ratio=result.expense_ratio,
            debt_ratio=result.debt_ratio,
            buffer_months=result.buffer_months,
            pressure_sources=result.pressure_sources,
        )


class SummaryResponse(StressResultSchema):
    """Response for POST /v1/summary"""

    total_expenses: float
    monthly_balance: float


class ScenarioDeltaSchema(CamelModel):
    stress_score: int
    monthly_balance: float
    survival_months: int


class ScenarioResponse(CamelModel):
    """Response for POST /v1/simulate"""

    base: StressResultSchema
    after: StressResultSchema
    delta: ScenarioDeltaSchema

    @classmethod
    def from_domain(cls, result: ScenarioResult) -> "ScenarioResponse":
        return cls(
            base=StressResultSchema.from_domain(result.base),
            after=StressResultSchema.from_domain(result.after),
            delta=ScenarioDeltaSchema(
                stress_score=result.delta.stress_score,
                monthly_balance=result.delta.monthly_balance,
                survival_months=result.delta.survival_months,
            ),
        )


class ExplainResponse(CamelModel):
    """Response for POST /v1/explain"""

    headline: str
    reason: str
    tradeoff: str
    confidence: int = Field(..., ge=0, le=100)

    @classmethod
    def from_domain(cls, explanation: Explanation) -> "ExplainResponse":
        return cls(
            headline=explanation.headline,
            reason=explanation.reason,
            tradeoff=explanation.tradeoff,
            confidence=explanation.confidence,
        )


class SummaryExplainResponse(CamelModel):
    """Response for POST /v1/summary/explain"""

    summary: SummaryResponse
    explanation: ExplainResponse


class ScenarioExplainResponse(CamelModel):
    """Response for POST /v1/simulate/explain"""

    scenario: ScenarioResponse
    explanation: ExplainResponse
