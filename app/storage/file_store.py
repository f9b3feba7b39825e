import hashlib
import uuid
from pathlib import Path
from typing import BinaryIO

from app.storage.exceptions import BlobWriteError, UnsupportedStorageDiskError
from app.storage.models import StoredBlob

_CHUNK_SIZE = 64 * 1024


def blob_file_path(files_root: Path, key: str) -> Path:
    """Build path to a blob: {files_root}/{key[0:2]}/{key[2:4]}/{key}"""
    return files_root / key[0:2] / key[2:4] / key


class FileStore:
    """Writes uploaded bytes to the local blob directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None, storage_disk: str = "local") -> None:
        if storage_disk != "local":
            raise UnsupportedStorageDiskError(
                f"storage_disk '{storage_disk}' is not supported"
            )
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def save(self, byte_source: BinaryIO) -> StoredBlob:
        """Copy byte_source into a new blob and return its key, size and checksum.

        Raises:
            BlobWriteError: if the blob file cannot be written.
        """
        key = uuid.uuid4().hex
        path = blob_file_path(self._files_root, key)
        sha256 = hashlib.sha256()
        byte_size = 0
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as target:
                for chunk in iter(lambda: byte_source.read(_CHUNK_SIZE), b""):
                    sha256.update(chunk)
                    byte_size += len(chunk)
                    target.write(chunk)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise BlobWriteError(f"Failed to write blob {key}: {exc}") from exc
        return StoredBlob(key=key, byte_size=byte_size, checksum_sha256=sha256.hexdigest())

    def load(self, key: str) -> bytes:
        """Read blob bytes from disk.

        Raises:
            FileNotFoundError: if no blob exists for key.
        """
        path = blob_file_path(self._files_root, key)
        if not path.exists():
            raise FileNotFoundError(f"Blob not found: {path}")
        return path.read_bytes()

    def delete(self, key: str) -> None:
        blob_file_path(self._files_root, key).unlink(missing_ok=True)
