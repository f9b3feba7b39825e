from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.routing.base import BaseLotDirectory
from app.routing.models import Auction, LotRef


class LotRepository(BaseLotDirectory):
    """Lot directory backed by the lots table."""

    def lookup(self, auction: Auction, key: str) -> LotRef | None:
        """Find the auction's lot whose lot_number equals key (case-sensitive)."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, auction_id, lot_number
                    FROM lots
                    WHERE auction_id = %s AND lot_number = %s
                    LIMIT 1
                    """,
                    (auction.id, key),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return LotRef(
            id=row["id"],
            auction_id=row["auction_id"],
            lot_number=row["lot_number"],
        )
