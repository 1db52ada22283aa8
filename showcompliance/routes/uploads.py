"""Upload routes for checklist evidence documents."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlmodel import Session

from showcompliance.core.database import get_session
from showcompliance.documents.storage import LocalDocumentStorage, UploadRejected
from showcompliance.models.upload import FileUploadRead

router = APIRouter(prefix="/uploads", tags=["uploads"])


def get_document_storage() -> LocalDocumentStorage:
    """Dependency for the document store."""
    return LocalDocumentStorage()


@router.post("/checklist-document", status_code=201, response_model=FileUploadRead)
async def upload_checklist_document(
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    storage: LocalDocumentStorage = Depends(get_document_storage),
):
    """
    Store an evidence document.

    Returns the upload id to attach to a checklist item with
    PATCH /shows/{show_id}/checklist/items/{item_id}.
    """
    data = await file.read()
    try:
        upload = storage.save(session, file.filename or "document", file.content_type, data)
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    return FileUploadRead(
        file_upload_id=upload.id,
        file_name=upload.file_name,
        public_url=upload.public_url,
    )
