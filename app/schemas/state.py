from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from app.schemas.student import Student
from app.schemas.goal import Goal
from app.schemas.objective import Objective
from app.schemas.data_point import DataPoint


class Snapshot(BaseModel):
    """A whole persisted document: flat record collections cross-referenced by id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_document(self) -> Dict[str, Any]:
        return {
            to_camel(name): [record.to_document() for record in getattr(self, name)]
            for name in type(self).model_fields
        }


# --- Current schema (v4) ---
class AppState(Snapshot):
    students: List[Student] = Field(default_factory=list)
    goals: List[Goal] = Field(default_factory=list)
    objectives: List[Objective] = Field(default_factory=list)
    data_points: List[DataPoint] = Field(default_factory=list)

    def counts(self) -> Dict[str, int]:
        return {name: len(getattr(self, name)) for name in type(self).model_fields}
