from abc import ABC, abstractmethod

from app.routing.models import Auction, AttachInstruction, LotRef, RawUpload
from app.storage.models import StoredAttachment


class BaseLotDirectory(ABC):
    """Contract for looking up the lots of an auction."""

    @abstractmethod
    def lookup(self, auction: Auction, key: str) -> LotRef | None:
        """Return the lot whose lot number equals key exactly, or None."""


class BaseStorageSink(ABC):
    """Contract for persisting routed uploads."""

    @abstractmethod
    def store(self, instruction: AttachInstruction, upload: RawUpload) -> StoredAttachment:
        """Store the upload's bytes and attach them as the instruction says.

        When instruction.sequence is set, a sequence record pointing at the
        new attachment is written together with it.

        Raises:
            StorageError: if the bytes or the records cannot be written.
        """

    @abstractmethod
    def ordered_pictures(self, lot: LotRef) -> list[StoredAttachment]:
        """Return the lot's pictures ascending by sequence, unsequenced last."""
