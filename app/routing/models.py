from dataclasses import dataclass
from enum import StrEnum
from typing import BinaryIO


class Category(StrEnum):
    """Logical grouping name of a stored file."""

    PICTURES = "pictures"
    DOCUMENTS = "documents"


class OwnerKind(StrEnum):
    LOT = "Lot"
    AUCTION = "Auction"


@dataclass(frozen=True)
class Auction:
    id: int
    title: str | None = None


@dataclass(frozen=True)
class LotRef:
    """A lot known to the lot directory."""

    id: int
    auction_id: int
    lot_number: str


@dataclass(frozen=True)
class RawUpload:
    """One inbound file, as received from the client."""

    original_filename: str
    content_type: str
    byte_source: BinaryIO


@dataclass(frozen=True)
class DecodedName:
    """Output of the filename decoder.

    sequence is set only when the name carried a valid digit run
    right after the first underscore.
    """

    owner_key_candidate: str | None
    sequence: int | None
    stored_filename: str


@dataclass(frozen=True)
class AttachInstruction:
    """What the storage sink must do with one routed upload."""

    owner_kind: OwnerKind
    owner_key: str | None
    owner_id: int
    category: Category
    stored_filename: str
    sequence: int | None = None

    @property
    def record_type(self) -> str:
        return self.owner_kind.value
