from enum import Enum
from typing import Annotated, Any, Optional
from pydantic import BeforeValidator, Field
from app.schemas.record import Identity, Number, Record, Payload


class Comparator(str, Enum):
    AT_LEAST = "at-least"
    AT_MOST = "at-most"


# Older front ends wrote the comparator as a symbol
LEGACY_COMPARATORS = {">=": Comparator.AT_LEAST.value, "<=": Comparator.AT_MOST.value}


def normalize_comparator(value: Any) -> Optional[Comparator]:
    """Read a stored comparator; empty or unrecognized values read as None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    try:
        return Comparator(LEGACY_COMPARATORS.get(value, value))
    except ValueError:
        return None


def _coerce_comparator(value):
    if isinstance(value, str):
        return LEGACY_COMPARATORS.get(value.strip(), value)
    return value


ComparatorField = Annotated[Comparator, BeforeValidator(_coerce_comparator)]


# --- Objectives (measurable children of a goal) ---
class LegacyObjective(Record):
    """Objective as stored before secondary metrics existed (schema v2 and v3)."""

    goal_id: Identity = None
    title: Any = None
    description: Any = None
    unit: Any = None
    target_value: Any = None
    target_comparator: Any = None
    baseline_value: Any = None
    mastery_criteria: Any = None
    allowable_variance: Any = None
    start_date: Any = None
    end_date: Any = None

    @property
    def comparator(self) -> Comparator:
        return normalize_comparator(self.target_comparator) or Comparator.AT_LEAST


class Objective(LegacyObjective):
    has_secondary_metric: Any = None
    secondary_metric_name: Any = None


class ObjectiveCreate(Payload):
    goal_id: str
    title: str
    description: str = Field(..., description="Specific objective text")
    unit: str = Field(..., description="e.g. '% accuracy', 'trials', 'minutes'")
    target_value: Number
    target_comparator: ComparatorField = Comparator.AT_LEAST
    baseline_value: Number
    has_secondary_metric: bool = False
    secondary_metric_name: Optional[str] = None
    mastery_criteria: Optional[str] = Field(None, description="e.g. '4 out of 5 consecutive trials'")
    allowable_variance: Optional[Number] = Field(None, ge=0)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
