from datetime import datetime, timezone
from dateutil.relativedelta import relativedelta
from fastapi import APIRouter, Depends, HTTPException
from app.schemas.goal import Goal
from app.schemas.objective import Objective, ObjectiveCreate
from app.dependencies.store import state_repository
from app.services import cascade
from app.services.errors import RecordNotFound
from app.services.records import add_record, find_record, get_record, replace_record
from app.utils.ids import generate_id

router = APIRouter()

def default_schedule():
    """Objectives run for one year from today unless dates are given."""
    start = datetime.now(timezone.utc)
    return start.isoformat(), (start + relativedelta(years=1)).isoformat()

def objective_fields(obj: ObjectiveCreate) -> dict:
    fields = obj.model_dump(mode="json", exclude_none=True)
    if not obj.has_secondary_metric:
        fields.pop("secondary_metric_name", None)
    return fields

# -------- Objectives --------

@router.post("/objective")
def create_objective(obj: ObjectiveCreate, repository=Depends(state_repository)):
    start_date, end_date = default_schedule()
    fields = {"start_date": start_date, "end_date": end_date, **objective_fields(obj)}
    record = Objective(id=generate_id(), **fields)

    def operation(state):
        get_record(state, Goal, record.goal_id)
        return add_record(state, record)

    try:
        repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Goal not found")
    return record.to_document()

@router.get("/goal/{goal_id}")
def get_objectives_for_goal(goal_id: str, repository=Depends(state_repository)):
    objectives = repository.load().objectives
    return [obj.to_document() for obj in objectives if obj.goal_id == goal_id]

@router.get("/objective/{id}")
def get_objective(id: str, repository=Depends(state_repository)):
    obj = find_record(repository.load(), Objective, id)
    if obj is None:
        raise HTTPException(status_code=404, detail="Objective not found")
    return obj.to_document()

@router.put("/objective/{id}")
def update_objective(id: str, obj: ObjectiveCreate, repository=Depends(state_repository)):
    def operation(state):
        existing = get_record(state, Objective, id)
        get_record(state, Goal, obj.goal_id)
        # Keep the existing schedule when the edit does not carry one
        fields = {"start_date": existing.start_date, "end_date": existing.end_date, **objective_fields(obj)}
        fields = {key: value for key, value in fields.items() if value is not None}
        return replace_record(state, Objective(id=id, **fields))

    try:
        state = repository.apply(operation)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return get_record(state, Objective, id).to_document()

@router.delete("/objective/{id}")
def delete_objective(id: str, repository=Depends(state_repository)):
    def operation(state):
        get_record(state, Objective, id)
        return cascade.delete_objective(state, id)

    try:
        repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Objective not found")
    return {"message": "Deleted"}
