from dataclasses import dataclass, field

from app.storage.models import StoredAttachment


@dataclass(frozen=True)
class FailedUpload:
    """An upload that was routed but could not be stored."""

    filename: str
    error: str


@dataclass
class UnloadReport:
    """Accumulates the outcome of every upload in one batch."""

    auction_id: int
    attached: list[StoredAttachment] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[FailedUpload] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed
