from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.routing.models import Auction
from app.unloader.exceptions import AuctionNotFoundError


class AuctionRepository:
    """Database operations for the auctions table."""

    def find_by_id(self, auction_id: int) -> Auction:
        """Find an auction by ID.

        Raises:
            AuctionNotFoundError: if no auction with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "SELECT id, title FROM auctions WHERE id = %s",
                    (auction_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise AuctionNotFoundError(f"Auction {auction_id} not found")

        return Auction(id=row["id"], title=row["title"])
