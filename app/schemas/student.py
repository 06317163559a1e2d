from pydantic import Field
from typing import Any, Optional
from app.schemas.record import Record, Payload

# --- Students ---
class Student(Record):
    name: Any = None
    grade: Any = None
    teacher: Any = None
    report_summary: Any = None

class StudentCreate(Payload):
    name: str = Field(..., min_length=1)
    grade: str
    teacher: str
    report_summary: Optional[str] = Field(None, description="General teacher comments for the report")
