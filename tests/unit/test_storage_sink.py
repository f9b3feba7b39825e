import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from app.config.settings import Settings
from app.database.repositories.attachment_repository import AttachmentRepository
from app.routing.models import AttachInstruction, Category, LotRef, OwnerKind, RawUpload
from app.storage.exceptions import UnsupportedStorageDiskError
from app.storage.file_store import FileStore
from app.storage.models import StoredBlob
from app.storage.sink import DatabaseStorageSink, build_storage_sink


def _make_instruction() -> AttachInstruction:
    return AttachInstruction(
        owner_kind=OwnerKind.LOT,
        owner_key="1A",
        owner_id=101,
        category=Category.PICTURES,
        stored_filename="some_name.png",
        sequence=2,
    )


def _make_upload() -> RawUpload:
    return RawUpload("1A_2_some_name.png", "image/png", io.BytesIO(b"\x89PNG"))


def _make_sink() -> tuple[DatabaseStorageSink, MagicMock, MagicMock]:
    file_store = MagicMock(spec=FileStore)
    attachment_repo = MagicMock(spec=AttachmentRepository)
    file_store.save.return_value = StoredBlob(key="k1", byte_size=4, checksum_sha256="c" * 64)
    return DatabaseStorageSink(file_store, attachment_repo), file_store, attachment_repo


class TestStore:
    def test_writes_blob_then_records(self) -> None:
        sink, file_store, attachment_repo = _make_sink()
        upload = _make_upload()
        instruction = _make_instruction()

        result = sink.store(instruction, upload)

        file_store.save.assert_called_once_with(upload.byte_source)
        attachment_repo.create.assert_called_once_with(
            instruction,
            content_type="image/png",
            blob=file_store.save.return_value,
        )
        assert result is attachment_repo.create.return_value

    def test_removes_blob_and_reraises_when_database_fails(self) -> None:
        sink, file_store, attachment_repo = _make_sink()
        attachment_repo.create.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            sink.store(_make_instruction(), _make_upload())

        file_store.delete.assert_called_once_with("k1")

    def test_does_not_touch_database_when_blob_write_fails(self) -> None:
        sink, file_store, attachment_repo = _make_sink()
        file_store.save.side_effect = OSError("disk full")

        with pytest.raises(OSError, match="disk full"):
            sink.store(_make_instruction(), _make_upload())

        attachment_repo.create.assert_not_called()


class TestOrderedPictures:
    def test_queries_by_lot_id(self) -> None:
        sink, _store, attachment_repo = _make_sink()
        lot = LotRef(id=101, auction_id=7, lot_number="1A")

        result = sink.ordered_pictures(lot)

        attachment_repo.ordered_pictures.assert_called_once_with(101)
        assert result is attachment_repo.ordered_pictures.return_value


class TestBuildStorageSink:
    def test_builds_database_sink(self, tmp_path: Path) -> None:
        sink = build_storage_sink(Settings(), files_root=tmp_path)

        assert isinstance(sink, DatabaseStorageSink)

    def test_rejects_unsupported_disk(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE_DISK", "s3")

        with pytest.raises(UnsupportedStorageDiskError):
            build_storage_sink(Settings())
