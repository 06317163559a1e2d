from typing import Any, Optional
from app.schemas.record import Identity, Number, Record, Payload

# --- Data points ---
class DataPoint(Record):
    objective_id: Identity = None
    date: Any = None
    value: Any = None
    secondary_value: Any = None
    notes: Any = None
    recorded_by: Any = None

class DataPointCreate(Payload):
    objective_id: str
    date: str
    value: Number
    secondary_value: Optional[Number] = None
    notes: Optional[str] = None
    recorded_by: str
