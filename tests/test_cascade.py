"""Cascading deletes across students, goals, objectives and data points."""
from conftest import DATA_POINTS, GOAL, OBJECTIVE, STUDENT, make_state

from app.services.cascade import (
    DeletionPlan,
    apply_deletion,
    delete_data_point,
    delete_goal,
    delete_objective,
    delete_student,
    plan_goal_deletion,
    plan_student_deletion,
)


def two_student_state():
    return make_state(
        [STUDENT, {"id": "S2", "name": "Blake"}],
        [GOAL, {**GOAL, "id": "G2", "studentId": "S1"}, {**GOAL, "id": "G3", "studentId": "S2"}],
        [OBJECTIVE, {**OBJECTIVE, "id": "O2", "goalId": "G2"}, {**OBJECTIVE, "id": "O3", "goalId": "G3"}],
        DATA_POINTS + [
            {"id": "D3", "objectiveId": "O2", "value": 10},
            {"id": "D4", "objectiveId": "O3", "value": 12},
        ],
    )


def ids(records):
    return [record.id for record in records]


class TestDeleteGoal:
    def test_goal_delete_removes_objectives_and_data(self, sample_state):
        state = delete_goal(sample_state, "G1")

        assert state.goals == []
        assert state.objectives == []
        assert state.data_points == []
        assert ids(state.students) == ["S1"]

    def test_only_descendants_are_removed(self):
        state = delete_goal(two_student_state(), "G1")

        assert ids(state.goals) == ["G2", "G3"]
        assert ids(state.objectives) == ["O2", "O3"]
        assert ids(state.data_points) == ["D3", "D4"]
        assert all(o.goal_id != "G1" for o in state.objectives)

    def test_plan_is_computed_before_removal(self):
        plan = plan_goal_deletion(two_student_state(), "G2")
        assert plan == DeletionPlan(goals=frozenset({"G2"}), objectives=frozenset({"O2"}), data_points=frozenset({"D3"}))


class TestDeleteStudent:
    def test_student_delete_cascades_through_all_levels(self):
        state = delete_student(two_student_state(), "S1")

        assert ids(state.students) == ["S2"]
        assert ids(state.goals) == ["G3"]
        assert ids(state.objectives) == ["O3"]
        assert ids(state.data_points) == ["D4"]

    def test_plan_sizes(self):
        plan = plan_student_deletion(two_student_state(), "S1")
        assert plan.goals == frozenset({"G1", "G2"})
        assert plan.objectives == frozenset({"O1", "O2"})
        assert plan.data_points == frozenset({"D1", "D2", "D3"})
        assert plan.size() == 8


class TestDeleteObjectiveAndDataPoint:
    def test_objective_delete_removes_its_data(self):
        state = delete_objective(two_student_state(), "O1")

        assert ids(state.objectives) == ["O2", "O3"]
        assert ids(state.data_points) == ["D3", "D4"]
        assert ids(state.goals) == ["G1", "G2", "G3"]

    def test_data_point_delete_is_a_leaf_removal(self, sample_state):
        state = delete_data_point(sample_state, "D2")

        assert ids(state.data_points) == ["D1"]
        assert ids(state.objectives) == ["O1"]


class TestDeletionEdges:
    def test_unknown_id_is_a_no_op(self, sample_state):
        assert delete_goal(sample_state, "nope") == sample_state
        assert delete_student(sample_state, "nope") == sample_state

    def test_input_state_is_not_changed(self, sample_state):
        before = sample_state.to_document()
        delete_student(sample_state, "S1")
        assert sample_state.to_document() == before

    def test_empty_plan_keeps_everything(self, sample_state):
        assert apply_deletion(sample_state, DeletionPlan()) == sample_state
