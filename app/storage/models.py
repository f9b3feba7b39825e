from dataclasses import dataclass


@dataclass(frozen=True)
class StoredBlob:
    """Bytes written to the blob store."""

    key: str
    byte_size: int
    checksum_sha256: str


@dataclass(frozen=True)
class StoredAttachment:
    """An attachment row joined with its blob and optional sequence."""

    id: int
    name: str  # category, e.g. "pictures"
    record_type: str  # "Lot" or "Auction"
    record_id: int
    filename: str
    content_type: str
    byte_size: int
    checksum_sha256: str
    blob_key: str
    sequence: int | None = None
