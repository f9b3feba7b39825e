import io
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.routing.models import Auction, LotRef, RawUpload

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + b"\x00" * 16 + b"\xff\xd9"
ZIP_BYTES = b"PK\x03\x04" + b"\x00" * 26


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Lot catalogue")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def make_upload(sample_pdf_bytes: bytes) -> Callable[[str, str], RawUpload]:
    """Build a RawUpload whose bytes match its content type."""

    def _make(filename: str, content_type: str) -> RawUpload:
        if content_type == "application/pdf":
            data = sample_pdf_bytes
        elif content_type == "image/png":
            data = PNG_BYTES
        elif content_type.startswith("image/"):
            data = JPEG_BYTES
        else:
            data = ZIP_BYTES
        return RawUpload(
            original_filename=filename,
            content_type=content_type,
            byte_source=io.BytesIO(data),
        )

    return _make


@pytest.fixture()
def auction() -> Auction:
    return Auction(id=7, title="Spring sale")


@pytest.fixture()
def lots(auction: Auction) -> list[LotRef]:
    """Lots 1A, 1B, 4 and 9 of the auction."""
    return [
        LotRef(id=101, auction_id=auction.id, lot_number="1A"),
        LotRef(id=102, auction_id=auction.id, lot_number="1B"),
        LotRef(id=104, auction_id=auction.id, lot_number="4"),
        LotRef(id=109, auction_id=auction.id, lot_number="9"),
    ]
