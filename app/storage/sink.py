from pathlib import Path

from app.config.settings import Settings
from app.database.repositories.attachment_repository import AttachmentRepository
from app.logging.logger import Log
from app.routing.base import BaseStorageSink
from app.routing.models import AttachInstruction, LotRef, RawUpload
from app.storage.file_store import FileStore
from app.storage.models import StoredAttachment


class DatabaseStorageSink(BaseStorageSink):
    """Stores blobs on local disk and attachment records in PostgreSQL.

    Bytes are written first. If the database transaction then fails, the blob
    is removed again so no orphaned file is left behind.
    """

    def __init__(self, file_store: FileStore, attachment_repo: AttachmentRepository) -> None:
        self._file_store = file_store
        self._attachment_repo = attachment_repo

    def store(self, instruction: AttachInstruction, upload: RawUpload) -> StoredAttachment:
        blob = self._file_store.save(upload.byte_source)
        Log.debug(
            f"Wrote {blob.byte_size} bytes of '{upload.original_filename}' to blob {blob.key}"
        )
        try:
            attachment = self._attachment_repo.create(
                instruction,
                content_type=upload.content_type,
                blob=blob,
            )
        except Exception:
            Log.exception(
                f"Database write failed, removing blob {blob.key} "
                f"of '{upload.original_filename}'"
            )
            self._file_store.delete(blob.key)
            raise
        Log.info(
            f"Attached '{attachment.filename}' to {attachment.record_type} "
            f"{attachment.record_id} as {attachment.name}"
            + (f" (sequence {attachment.sequence})" if attachment.sequence is not None else "")
        )
        return attachment

    def ordered_pictures(self, lot: LotRef) -> list[StoredAttachment]:
        return self._attachment_repo.ordered_pictures(lot.id)


def build_storage_sink(settings: Settings, files_root: Path | None = None) -> DatabaseStorageSink:
    """Build the database-backed sink with the configured blob directory."""
    file_store = FileStore(
        files_root=files_root if files_root is not None else settings.files_root,
        storage_disk=settings.storage_disk,
    )
    return DatabaseStorageSink(file_store=file_store, attachment_repo=AttachmentRepository())
