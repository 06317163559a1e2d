from fastapi import APIRouter, Depends, HTTPException
from app.schemas.data_point import DataPoint, DataPointCreate
from app.schemas.objective import Objective
from app.dependencies.store import state_repository
from app.services import cascade
from app.services.errors import RecordNotFound
from app.services.records import add_record, get_record
from app.services.report import date_sort_key
from app.utils.ids import generate_id

router = APIRouter()

# -------- Data points --------

@router.post("/data-point")
def create_data_point(data_point: DataPointCreate, repository=Depends(state_repository)):
    record = DataPoint(id=generate_id(), **data_point.model_dump(exclude_none=True))

    def operation(state):
        get_record(state, Objective, record.objective_id)
        return add_record(state, record)

    try:
        repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Objective not found")
    return record.to_document()

# Data points of one objective, oldest first
@router.get("/objective/{objective_id}")
def get_data_points_for_objective(objective_id: str, repository=Depends(state_repository)):
    points = [dp for dp in repository.load().data_points if dp.objective_id == objective_id]
    points.sort(key=date_sort_key)
    return [dp.to_document() for dp in points]

@router.delete("/data-point/{id}")
def delete_data_point(id: str, repository=Depends(state_repository)):
    def operation(state):
        get_record(state, DataPoint, id)
        return cascade.delete_data_point(state, id)

    try:
        repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Data point not found")
    return {"message": "Deleted"}
