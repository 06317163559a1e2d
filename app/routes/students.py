from fastapi import APIRouter, HTTPException, Depends
from app.schemas.student import Student, StudentCreate
from app.dependencies.store import state_repository
from app.services import cascade
from app.services.errors import RecordNotFound
from app.services.records import add_record, find_record, get_record, replace_record
from app.utils.ids import generate_id

router = APIRouter()

# Get all students
@router.get("/students")
def get_all_students(repository=Depends(state_repository)):
    return [student.to_document() for student in repository.load().students]

# Get single student by id
@router.get("/student/{student_id}")
def get_student_by_id(student_id: str, repository=Depends(state_repository)):
    student = find_record(repository.load(), Student, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student.to_document()

# Create student
@router.post("/student")
def create_student(student: StudentCreate, repository=Depends(state_repository)):
    record = Student(id=generate_id(), **student.model_dump(exclude_none=True))
    repository.apply(lambda state: add_record(state, record))
    return record.to_document()

# Edit student (whole record is replaced)
@router.put("/student/{student_id}")
def update_student(student_id: str, student: StudentCreate, repository=Depends(state_repository)):
    record = Student(id=student_id, **student.model_dump(exclude_none=True))
    try:
        repository.apply(lambda state: replace_record(state, record))
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Student not found")
    return record.to_document()

# Delete student together with its goals, objectives and data points
@router.delete("/student/{student_id}")
def delete_student(student_id: str, repository=Depends(state_repository)):
    def operation(state):
        get_record(state, Student, student_id)
        return cascade.delete_student(state, student_id)

    try:
        state = repository.apply(operation)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Student not found")
    return {"message": "Deleted", "counts": state.counts()}
