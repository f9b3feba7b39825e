from typing import Any

from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.routing.models import AttachInstruction, Category, OwnerKind
from app.storage.models import StoredAttachment, StoredBlob

_SELECT_ATTACHMENTS = """
    SELECT a.id, a.name, a.record_type, a.record_id,
           b.filename, b.content_type, b.byte_size, b.checksum_sha256,
           b.key AS blob_key, s.sequence
    FROM attachments a
    JOIN attachment_blobs b ON b.id = a.blob_id
    LEFT JOIN asset_sequences s ON s.attachment_id = a.id
"""


class AttachmentRepository:
    """Database operations for attachments, their blobs and asset sequences."""

    def create(
        self,
        instruction: AttachInstruction,
        content_type: str,
        blob: StoredBlob,
    ) -> StoredAttachment:
        """Insert blob, attachment and (optional) sequence rows in one transaction.

        Returns:
            The stored attachment, including its sequence when one was written.
        """
        with get_connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO attachment_blobs
                        (key, filename, content_type, byte_size, checksum_sha256)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING id
                        """,
                        (
                            blob.key,
                            instruction.stored_filename,
                            content_type,
                            blob.byte_size,
                            blob.checksum_sha256,
                        ),
                    )
                    blob_id = _returned_id(cur.fetchone())

                    cur.execute(
                        """
                        INSERT INTO attachments (name, record_type, record_id, blob_id)
                        VALUES (%s, %s, %s, %s)
                        RETURNING id
                        """,
                        (
                            instruction.category.value,
                            instruction.record_type,
                            instruction.owner_id,
                            blob_id,
                        ),
                    )
                    attachment_id = _returned_id(cur.fetchone())

                    if instruction.sequence is not None:
                        cur.execute(
                            """
                            INSERT INTO asset_sequences (sequence, attachment_id)
                            VALUES (%s, %s)
                            """,
                            (instruction.sequence, attachment_id),
                        )

        return StoredAttachment(
            id=attachment_id,
            name=instruction.category.value,
            record_type=instruction.record_type,
            record_id=instruction.owner_id,
            filename=instruction.stored_filename,
            content_type=content_type,
            byte_size=blob.byte_size,
            checksum_sha256=blob.checksum_sha256,
            blob_key=blob.key,
            sequence=instruction.sequence,
        )

    def ordered_pictures(self, lot_id: int) -> list[StoredAttachment]:
        """Pictures of a lot by ascending sequence number, unsequenced ones last."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    _SELECT_ATTACHMENTS
                    + """
                    WHERE a.record_type = %s AND a.record_id = %s AND a.name = %s
                    ORDER BY s.sequence ASC NULLS LAST, a.id ASC
                    """,
                    (OwnerKind.LOT.value, lot_id, Category.PICTURES.value),
                )
                rows = cur.fetchall()

        return [_to_stored_attachment(row) for row in rows]

    def list_for_record(self, record_type: str, record_id: int) -> list[StoredAttachment]:
        """All attachments of a lot or an auction, oldest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    _SELECT_ATTACHMENTS
                    + """
                    WHERE a.record_type = %s AND a.record_id = %s
                    ORDER BY a.id ASC
                    """,
                    (record_type, record_id),
                )
                rows = cur.fetchall()

        return [_to_stored_attachment(row) for row in rows]


def _returned_id(row: tuple[Any, ...] | None) -> int:
    if row is None:
        raise RuntimeError("INSERT ... RETURNING id returned no row")
    return int(row[0])


def _to_stored_attachment(row: dict[str, Any]) -> StoredAttachment:
    return StoredAttachment(
        id=row["id"],
        name=row["name"],
        record_type=row["record_type"],
        record_id=row["record_id"],
        filename=row["filename"],
        content_type=row["content_type"],
        byte_size=row["byte_size"],
        checksum_sha256=row["checksum_sha256"],
        blob_key=row["blob_key"],
        sequence=row["sequence"],
    )
