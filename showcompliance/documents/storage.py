"""Local storage for checklist evidence documents.

Files are written under settings.upload_dir and recorded as FileUpload
rows. Checklist items only ever see the returned id, file name and public
URL.
"""
import logging
from pathlib import Path
from uuid import uuid4

from sqlmodel import Session

from showcompliance.core.config import settings
from showcompliance.models import FileUpload

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/webp",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class UploadRejected(Exception):
    """The file cannot be accepted as a checklist document."""


def validate_upload(content_type: str | None, size: int, max_bytes: int | None = None) -> None:
    """Check content type and size before anything is written."""
    max_bytes = max_bytes or settings.max_upload_bytes
    if content_type not in ALLOWED_TYPES:
        raise UploadRejected("Allowed file types: PDF, JPEG, PNG, WebP, Word documents")
    if size == 0:
        raise UploadRejected("File is empty")
    if size > max_bytes:
        raise UploadRejected(f"File is too large (maximum {max_bytes // (1024 * 1024)} MB)")


class LocalDocumentStorage:
    """Stores documents on the local filesystem."""

    def __init__(self, root: Path | None = None, base_url: str | None = None):
        self.root = Path(root or settings.upload_dir)
        self.base_url = (base_url or settings.upload_base_url).rstrip("/")

    def public_url(self, storage_key: str) -> str:
        return f"{self.base_url}/{storage_key}"

    def save(
        self,
        session: Session,
        file_name: str,
        content_type: str | None,
        data: bytes,
    ) -> FileUpload:
        """
        Validate and store a document, returning its metadata record.

        The stored name is random so two uploads of "insurance.pdf" never
        overwrite each other; the original name is kept for display.
        """
        validate_upload(content_type, len(data))

        ext = Path(file_name).suffix.lstrip(".") or "bin"
        storage_key = f"checklist-docs/{uuid4()}.{ext}"
        path = self.root / storage_key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

        upload = FileUpload(
            file_name=file_name,
            mime_type=content_type,
            size_bytes=len(data),
            storage_key=storage_key,
            public_url=self.public_url(storage_key),
        )
        session.add(upload)
        session.commit()
        session.refresh(upload)
        logger.info(f"Stored checklist document {file_name} as {storage_key}")
        return upload
