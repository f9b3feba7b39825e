from app.routing.base import BaseLotDirectory
from app.routing.models import Auction, LotRef


class OwnerResolver:
    """Finds the lot a decoded owner key refers to."""

    def __init__(self, lot_directory: BaseLotDirectory) -> None:
        self._lot_directory = lot_directory

    def resolve(self, auction: Auction, owner_key_candidate: str | None) -> LotRef | None:
        """Exact, case-sensitive lookup. A miss returns None."""
        if owner_key_candidate is None:
            return None
        return self._lot_directory.lookup(auction, owner_key_candidate)
