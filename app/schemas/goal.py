from pydantic import Field
from typing import Any, Optional
from app.schemas.record import Identity, Record, Payload

DEFAULT_CATEGORY = "General"

# --- Goals (parent of objectives) ---
class Goal(Record):
    student_id: Identity = None
    category: Any = None
    description: Any = None
    present_level: Any = None
    created_at: Any = None
    report_observation: Any = None

class GoalCreate(Payload):
    student_id: str
    category: str = DEFAULT_CATEGORY
    description: str = Field(..., description="The broad IEP goal text")
    present_level: str = Field("", description="Present Levels of Academic Achievement and Functional Performance")
    report_observation: Optional[str] = None
