import argparse
import mimetypes
import sys
from collections.abc import Sequence
from contextlib import ExitStack
from pathlib import Path

from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.auction_repository import AuctionRepository
from app.logging.logger import Log
from app.routing.models import RawUpload
from app.unloader.exceptions import AuctionNotFoundError
from app.unloader.unloader import build_unloader

EXIT_FAILED_UPLOADS = 1
EXIT_UNKNOWN_AUCTION = 2


def guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or "application/octet-stream"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="auction-unload",
        description="Attach local files to an auction or its lots based on their names.",
    )
    parser.add_argument("--auction-id", type=int, required=True)
    parser.add_argument("files", nargs="+", type=Path)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: settings -> pool -> auction -> unload files."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        try:
            auction = AuctionRepository().find_by_id(args.auction_id)
        except AuctionNotFoundError as exc:
            Log.error(str(exc))
            return EXIT_UNKNOWN_AUCTION

        unloader = build_unloader(settings)
        with ExitStack() as stack:
            uploads = [
                RawUpload(
                    original_filename=path.name,
                    content_type=guess_content_type(path.name),
                    byte_source=stack.enter_context(path.open("rb")),
                )
                for path in args.files
            ]
            report = unloader.unload(auction, uploads)
    finally:
        close_pool()

    return 0 if report.ok else EXIT_FAILED_UPLOADS


if __name__ == "__main__":
    sys.exit(main())
