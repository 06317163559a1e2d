"""Cascading deletes over the Student -> Goal -> Objective -> DataPoint hierarchy.

A delete is computed in two steps. First a ``DeletionPlan`` collects the ids
to remove, walking down from the deleted record one level at a time. Then
``apply_deletion`` rewrites all four collections at once from that plan, so
no snapshot with dangling children is ever produced.
"""
import logging
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterable

from app.schemas.record import Record
from app.schemas.state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeletionPlan:
    students: FrozenSet[str] = frozenset()
    goals: FrozenSet[str] = frozenset()
    objectives: FrozenSet[str] = frozenset()
    data_points: FrozenSet[str] = frozenset()

    def size(self) -> int:
        return len(self.students) + len(self.goals) + len(self.objectives) + len(self.data_points)


def child_ids(records: Iterable[Record], parent_attr: str, parent_ids: AbstractSet[str]) -> FrozenSet[str]:
    return frozenset(record.id for record in records if getattr(record, parent_attr) in parent_ids)


def plan_data_point_deletion(state: AppState, data_point_id: str) -> DeletionPlan:
    return DeletionPlan(data_points=frozenset({data_point_id}))


def plan_objective_deletion(state: AppState, objective_id: str) -> DeletionPlan:
    objective_ids = frozenset({objective_id})
    return DeletionPlan(
        objectives=objective_ids,
        data_points=child_ids(state.data_points, "objective_id", objective_ids),
    )


def _plan_from_goals(state: AppState, goal_ids: FrozenSet[str], student_ids: FrozenSet[str] = frozenset()) -> DeletionPlan:
    objective_ids = child_ids(state.objectives, "goal_id", goal_ids)
    return DeletionPlan(
        students=student_ids,
        goals=goal_ids,
        objectives=objective_ids,
        data_points=child_ids(state.data_points, "objective_id", objective_ids),
    )


def plan_goal_deletion(state: AppState, goal_id: str) -> DeletionPlan:
    return _plan_from_goals(state, frozenset({goal_id}))


def plan_student_deletion(state: AppState, student_id: str) -> DeletionPlan:
    student_ids = frozenset({student_id})
    return _plan_from_goals(state, child_ids(state.goals, "student_id", student_ids), student_ids)


def apply_deletion(state: AppState, plan: DeletionPlan) -> AppState:
    return AppState(
        students=[s for s in state.students if s.id not in plan.students],
        goals=[g for g in state.goals if g.id not in plan.goals],
        objectives=[o for o in state.objectives if o.id not in plan.objectives],
        data_points=[dp for dp in state.data_points if dp.id not in plan.data_points],
    )


def delete_student(state: AppState, student_id: str) -> AppState:
    plan = plan_student_deletion(state, student_id)
    logger.info(f"Deleting student {student_id} with {len(plan.goals)} goals, {len(plan.objectives)} objectives, {len(plan.data_points)} data points")
    return apply_deletion(state, plan)


def delete_goal(state: AppState, goal_id: str) -> AppState:
    plan = plan_goal_deletion(state, goal_id)
    logger.info(f"Deleting goal {goal_id} with {len(plan.objectives)} objectives, {len(plan.data_points)} data points")
    return apply_deletion(state, plan)


def delete_objective(state: AppState, objective_id: str) -> AppState:
    plan = plan_objective_deletion(state, objective_id)
    logger.info(f"Deleting objective {objective_id} with {len(plan.data_points)} data points")
    return apply_deletion(state, plan)


def delete_data_point(state: AppState, data_point_id: str) -> AppState:
    return apply_deletion(state, plan_data_point_deletion(state, data_point_id))
