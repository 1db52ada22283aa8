"""Uploaded document metadata.

This module defines the FileUpload model which records where an evidence
document (insurance certificate, risk assessment, judge acceptance letter)
was stored. Checklist items reference uploads by id and cache the display
fields; they never own the file itself.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class FileUpload(SQLModel, table=True):
    """Metadata for a stored document.

    Attributes:
        id: Unique identifier (UUID).
        file_name: Original file name as uploaded.
        mime_type: Content type reported by the client.
        size_bytes: Size of the stored file.
        storage_key: Path of the file relative to the upload directory.
        public_url: URL the document can be downloaded from.
        created_at: When the upload was recorded.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    file_name: str
    mime_type: str
    size_bytes: int
    storage_key: str = Field(index=True)
    public_url: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class FileUploadRead(SQLModel):
    file_upload_id: UUID
    file_name: str
    public_url: str | None
