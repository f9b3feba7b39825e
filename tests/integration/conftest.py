import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import build_conninfo, close_pool, get_connection, init_pool
from app.routing.models import Auction, LotRef

SCHEMA_PATH = Path(__file__).with_name("schema.sql")
LOT_NUMBERS = ("1A", "1B", "4", "9")


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "auctions_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        with psycopg.connect(build_conninfo(test_settings), connect_timeout=3) as conn:
            conn.execute(SCHEMA_PATH.read_text())
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env.")
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_auction(
    db_conn: psycopg.Connection[Any],
) -> Generator[tuple[Auction, dict[str, LotRef]], None, None]:
    """An auction with lots 1A, 1B, 4 and 9. Removed with its attachments afterwards."""
    with db_conn.cursor() as cur:
        cur.execute(
            "INSERT INTO auctions (title) VALUES (%s) RETURNING id",
            ("Integration sale",),
        )
        row = cur.fetchone()
        assert row is not None
        auction = Auction(id=row[0], title="Integration sale")
        lots: dict[str, LotRef] = {}
        for lot_number in LOT_NUMBERS:
            cur.execute(
                "INSERT INTO lots (auction_id, lot_number) VALUES (%s, %s) RETURNING id",
                (auction.id, lot_number),
            )
            lot_row = cur.fetchone()
            assert lot_row is not None
            lots[lot_number] = LotRef(id=lot_row[0], auction_id=auction.id, lot_number=lot_number)
    db_conn.commit()

    try:
        yield auction, lots
    finally:
        with db_conn.cursor() as cur:
            cur.execute(
                """
                DELETE FROM attachment_blobs
                WHERE id IN (
                    SELECT blob_id FROM attachments
                    WHERE (record_type = 'Auction' AND record_id = %s)
                       OR (record_type = 'Lot' AND record_id = ANY(%s))
                )
                """,
                (auction.id, [lot.id for lot in lots.values()]),
            )
            cur.execute("DELETE FROM auctions WHERE id = %s", (auction.id,))
        db_conn.commit()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path
