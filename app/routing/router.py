from app.logging.logger import Log
from app.routing.classifier import CategoryClassifier
from app.routing.decoder import FilenameDecoder
from app.routing.models import AttachInstruction, Auction, OwnerKind, RawUpload
from app.routing.resolver import OwnerResolver


class AttachmentRouter:
    """Decides where a single uploaded file of an auction belongs.

    classify -> decode -> resolve owner -> AttachInstruction.

    A file goes to a lot only when its name carries both a sequence number and
    a lot number known to the auction. Everything else is attached to the
    auction itself under its original, unmodified name.
    """

    def __init__(
        self,
        resolver: OwnerResolver,
        classifier: CategoryClassifier | None = None,
        decoder: FilenameDecoder | None = None,
    ) -> None:
        self._resolver = resolver
        self._classifier = classifier if classifier is not None else CategoryClassifier()
        self._decoder = decoder if decoder is not None else FilenameDecoder()

    def route(self, auction: Auction, upload: RawUpload) -> AttachInstruction | None:
        """Return the attach instruction for upload, or None if it is rejected."""
        filename = upload.original_filename
        category = self._classifier.classify(upload.content_type, filename)
        if category is None:
            Log.info(
                f"Skipping '{filename}' ({upload.content_type}): unsupported file type"
            )
            return None

        decoded = self._decoder.decode(filename)
        # Set only when the name has a sequence AND a known lot number.
        lot = (
            self._resolver.resolve(auction, decoded.owner_key_candidate)
            if decoded.sequence is not None
            else None
        )

        if lot is not None:
            Log.debug(
                f"Routing '{filename}' to lot {lot.lot_number} "
                f"as '{decoded.stored_filename}' (sequence {decoded.sequence})"
            )
            return AttachInstruction(
                owner_kind=OwnerKind.LOT,
                owner_key=lot.lot_number,
                owner_id=lot.id,
                category=category,
                stored_filename=decoded.stored_filename,
                sequence=decoded.sequence,
            )

        Log.debug(f"Routing '{filename}' to auction {auction.id}")
        return AttachInstruction(
            owner_kind=OwnerKind.AUCTION,
            owner_key=None,
            owner_id=auction.id,
            category=category,
            stored_filename=filename,
            sequence=None,
        )
