"""In-memory lot directory and storage sink.

No database or disk access. Useful for local development, tests, and as a
reference when implementing new storage adapters.
"""

import hashlib
import itertools
import uuid
from collections.abc import Iterable

from app.routing.base import BaseLotDirectory, BaseStorageSink
from app.routing.models import Auction, AttachInstruction, Category, LotRef, OwnerKind, RawUpload
from app.storage.models import StoredAttachment


class InMemoryLotDirectory(BaseLotDirectory):
    def __init__(self, lots: Iterable[LotRef] = ()) -> None:
        self._lots: dict[tuple[int, str], LotRef] = {}
        for lot in lots:
            self.add(lot)

    def add(self, lot: LotRef) -> None:
        self._lots[(lot.auction_id, lot.lot_number)] = lot

    def lookup(self, auction: Auction, key: str) -> LotRef | None:
        return self._lots.get((auction.id, key))


class InMemoryStorageSink(BaseStorageSink):
    """Keeps attachments and blob bytes in process memory."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.attachments: list[StoredAttachment] = []
        self.blobs: dict[str, bytes] = {}

    def store(self, instruction: AttachInstruction, upload: RawUpload) -> StoredAttachment:
        data = upload.byte_source.read()
        key = uuid.uuid4().hex
        self.blobs[key] = data
        attachment = StoredAttachment(
            id=next(self._ids),
            name=instruction.category.value,
            record_type=instruction.record_type,
            record_id=instruction.owner_id,
            filename=instruction.stored_filename,
            content_type=upload.content_type,
            byte_size=len(data),
            checksum_sha256=hashlib.sha256(data).hexdigest(),
            blob_key=key,
            sequence=instruction.sequence,
        )
        self.attachments.append(attachment)
        return attachment

    def ordered_pictures(self, lot: LotRef) -> list[StoredAttachment]:
        pictures = [
            a
            for a in self.attachments
            if a.record_type == OwnerKind.LOT.value
            and a.record_id == lot.id
            and a.name == Category.PICTURES.value
        ]
        return sorted(
            pictures,
            key=lambda a: (a.sequence is None, a.sequence or 0, a.id),
        )
