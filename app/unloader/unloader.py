from collections.abc import Iterable
from pathlib import Path

from app.config.settings import Settings
from app.database.repositories.lot_repository import LotRepository
from app.logging.logger import Log
from app.routing.base import BaseStorageSink
from app.routing.models import Auction, RawUpload
from app.routing.resolver import OwnerResolver
from app.routing.router import AttachmentRouter
from app.storage.sink import build_storage_sink
from app.unloader.models import FailedUpload, UnloadReport


class AuctionAttachmentsUnloader:
    """Routes a batch of uploads of one auction and stores each of them.

    Files are independent: a lot lookup or storage failure is recorded in the
    report and the next file is processed as usual. Nothing is rolled back
    across files.
    """

    def __init__(self, router: AttachmentRouter, storage_sink: BaseStorageSink) -> None:
        self._router = router
        self._storage_sink = storage_sink

    def unload(self, auction: Auction, uploads: Iterable[RawUpload]) -> UnloadReport:
        report = UnloadReport(auction_id=auction.id)
        for upload in uploads:
            try:
                instruction = self._router.route(auction, upload)
                if instruction is None:
                    report.skipped.append(upload.original_filename)
                    continue
                attachment = self._storage_sink.store(instruction, upload)
            except Exception as exc:
                Log.error(f"Failed to unload '{upload.original_filename}': {exc}")
                report.failed.append(FailedUpload(upload.original_filename, str(exc)))
                continue
            report.attached.append(attachment)

        Log.info(
            f"Unloaded auction {auction.id}: {len(report.attached)} attached, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report


def build_unloader(
    settings: Settings,
    files_root: Path | None = None,
) -> AuctionAttachmentsUnloader:
    """Build an unloader wired to PostgreSQL and the local blob store."""
    router = AttachmentRouter(resolver=OwnerResolver(LotRepository()))
    storage_sink = build_storage_sink(settings, files_root=files_root)
    return AuctionAttachmentsUnloader(router=router, storage_sink=storage_sink)
