"""Document shapes of the schema versions before the current one.

Each version gets its own snapshot model so an upgrader can only see the
fields that version actually had; anything else a document carries rides
along as an extra field and is written back untouched.
"""
from typing import Any, List
from pydantic import Field
from app.schemas.record import Identity, Record
from app.schemas.state import Snapshot
from app.schemas.student import Student
from app.schemas.goal import Goal
from app.schemas.objective import LegacyObjective
from app.schemas.data_point import DataPoint


# --- v1: goals were the measurable items, data points hung off goals ---
class MeasurableGoal(Record):
    student_id: Identity = None
    category: Any = None
    title: Any = None
    description: Any = None
    present_level: Any = None
    unit: Any = None
    target_value: Any = None
    target_comparator: Any = None
    baseline_value: Any = None
    mastery_criteria: Any = None
    created_at: Any = None
    start_date: Any = None
    end_date: Any = None


class GoalDataPoint(Record):
    goal_id: Identity = None
    date: Any = None
    value: Any = None
    notes: Any = None
    recorded_by: Any = None


class StateV1(Snapshot):
    students: List[Student] = Field(default_factory=list)
    goals: List[MeasurableGoal] = Field(default_factory=list)
    data_points: List[GoalDataPoint] = Field(default_factory=list)


# --- v2: goal/objective split; category and comparator not yet guaranteed ---
class StateV2(Snapshot):
    students: List[Student] = Field(default_factory=list)
    goals: List[Goal] = Field(default_factory=list)
    objectives: List[LegacyObjective] = Field(default_factory=list)
    data_points: List[DataPoint] = Field(default_factory=list)


# --- v3: every goal has a category and every objective a comparator ---
class StateV3(StateV2):
    pass
