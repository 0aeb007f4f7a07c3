"""Domain models - pure Python dataclasses representing a household-month and its scores"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping


class RiskLevel(str, Enum):
    """Risk tier derived from the stress score"""

    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class ExplainType(str, Enum):
    """Kinds of explanation the text service is asked for"""

    STRESS = "stress"
    SCENARIO = "scenario"
    OPTIMIZE = "optimize"


# Display name -> MonthlyInputs attribute, in tie-break order
EXPENSE_CATEGORIES = (
    ("Rent", "rent"),
    ("Utilities", "utilities"),
    ("Transport", "transport"),
    ("Food", "food"),
    ("Debt", "debt"),
    ("Subscriptions", "subscriptions"),
)

MONEY_FIELDS = (
    "income",
    "rent",
    "utilities",
    "transport",
    "food",
    "debt",
    "subscriptions",
    "savings_balance",
)

# Wire names used by the web client, mapped onto field names
FIELD_ALIASES = {
    "incomeMonthly": "income",
    "rentMonthly": "rent",
    "utilitiesMonthly": "utilities",
    "transportMonthly": "transport",
    "transportCost": "transport",
    "foodMonthly": "food",
    "debtMonthly": "debt",
    "subscriptionsMonthly": "subscriptions",
    "savingsBalance": "savings_balance",
    "savings": "savings_balance",
}


def to_amount(value: Any) -> float:
    """Coerce a raw monetary value: missing, non-numeric, non-finite or negative -> 0.0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def normalize_fields(data: Mapping[str, Any]) -> dict[str, float]:
    """
    Map raw input keys onto MonthlyInputs field names.

    Unknown keys are dropped. Only keys actually present in `data` are returned,
    which is what partial scenario overrides rely on.
    """
    normalized: dict[str, float] = {}
    for key, value in data.items():
        name = FIELD_ALIASES.get(key, key)
        if name in MONEY_FIELDS:
            normalized[name] = to_amount(value)
    return normalized


@dataclass(frozen=True)
class MonthlyInputs:
    """Immutable snapshot of one household-month (currency-agnostic)"""

    income: float = 0.0
    rent: float = 0.0
    utilities: float = 0.0
    transport: float = 0.0
    food: float = 0.0
    debt: float = 0.0
    subscriptions: float = 0.0
    savings_balance: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MonthlyInputs":
        """Build a sanitized snapshot from an untrusted mapping"""
        return cls(**normalize_fields(data))


@dataclass
class StressResult:
    """Output of the stress engine"""

    stress_score: int
    risk_level: RiskLevel
    expense_ratio: float
    debt_ratio: float
    buffer_months: float
    pressure_sources: List[str] = field(default_factory=list)


@dataclass
class ScenarioDelta:
    """Difference between the modified and the baseline scenario"""

    stress_score: int
    monthly_balance: float
    survival_months: int


@dataclass
class ScenarioResult:
    """Baseline vs. what-if comparison"""

    base: StressResult
    after: StressResult
    delta: ScenarioDelta


@dataclass
class Explanation:
    """Natural-language explanation returned to callers"""

    headline: str
    reason: str
    tradeoff: str
    confidence: int
