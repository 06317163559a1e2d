from fastapi import APIRouter, Depends, HTTPException
from app.schemas.student import Student
from app.dependencies.store import state_repository
from app.services.llm import generate_progress_summary
from app.services.records import find_record
from app.services.report import student_report

router = APIRouter()

def build_report(student_id: str, repository):
    state = repository.load()
    student = find_record(state, Student, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student, student_report(state, student)

@router.get("/student/{student_id}")
def get_student_report(student_id: str, repository=Depends(state_repository)):
    _, report = build_report(student_id, repository)
    return {"student_id": student_id, "report": report}

# Narrative summary written by Gemini; the teacher decides whether to keep it
@router.post("/student/{student_id}/summary")
def create_student_summary(student_id: str, repository=Depends(state_repository)):
    student, report = build_report(student_id, repository)
    return {"student_id": student_id, "summary": generate_progress_summary(student.name or "the student", report)}
