from fastapi import APIRouter, Depends, HTTPException
from app.schemas.goal import Goal, GoalCreate
from app.schemas.student import Student
from app.dependencies.store import state_repository
from app.services import cascade
from app.services.errors import RecordNotFound
from app.services.records import add_record, find_record, get_record, replace_record
from app.utils.ids import generate_id, utc_now_iso

router = APIRouter()

@router.post("/goal")
def create_goal(goal: GoalCreate, repository=Depends(state_repository)):
    record = Goal(id=generate_id(), created_at=utc_now_iso(), **goal.model_dump(exclude_none=True))

    def operation(state):
        get_record(state, Student, record.student_id)
        return add_record(state, record)

    try:
        repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Student not found")
    return record.to_document()

@router.get("/student/{student_id}")
def get_goals_for_student(student_id: str, repository=Depends(state_repository)):
    goals = repository.load().goals
    return [goal.to_document() for goal in goals if goal.student_id == student_id]

@router.get("/goal/{goal_id}")
def get_goal(goal_id: str, repository=Depends(state_repository)):
    goal = find_record(repository.load(), Goal, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal.to_document()

@router.put("/goal/{goal_id}")
def update_goal(goal_id: str, goal: GoalCreate, repository=Depends(state_repository)):
    def operation(state):
        existing = get_record(state, Goal, goal_id)
        get_record(state, Student, goal.student_id)
        # createdAt is set once, at creation
        fields = goal.model_dump(exclude_none=True)
        if existing.created_at is not None:
            fields["created_at"] = existing.created_at
        return replace_record(state, Goal(id=goal_id, **fields))

    try:
        state = repository.apply(operation)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return get_record(state, Goal, goal_id).to_document()

@router.delete("/goal/{goal_id}")
def delete_goal(goal_id: str, repository=Depends(state_repository)):
    def operation(state):
        get_record(state, Goal, goal_id)
        return cascade.delete_goal(state, goal_id)

    try:
        repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"message": "Deleted"}
