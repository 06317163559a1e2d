from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from app.dependencies.store import state_repository
from app.services.errors import ImportValidationError
from app.services.transfer import export_document, export_filename, import_and_merge
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

# Backup / share: the whole snapshot as a pretty-printed JSON file
@router.get("/export")
def export_data(repository=Depends(state_repository)):
    return Response(
        content=export_document(repository.load()),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )

# Import / merge: adds records with new ids, never changes or removes existing ones
@router.post("/import")
async def import_data(file: UploadFile = File(...), repository=Depends(state_repository)):
    raw = await file.read()
    logger.info(f"Received {len(raw)} bytes to merge from {file.filename}")

    try:
        state = repository.apply(lambda current: import_and_merge(current, raw))
    except ImportValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"message": "Data merged successfully!", "counts": state.counts()}
