"""Storage of payments and payment summaries."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from kurban.models import PembayaranKurban, ProgressPembayaran, TotalPembayaranPerHewan

_COLUMNS = (
    "id, order_id, transaction_id, pekurban_id, metode, payment_type, va_number, "
    "status, fraud_status, approval_code, transaction_time, tanggal_pembayaran, jumlah, "
    "created_at, updated_at"
)

_TOTAL_PER_HEWAN_QUERY = """
SELECT
    h.id AS hewan_id,
    h.jenis,
    h.harga AS harga_target,
    COALESCE(SUM(ph.porsi * h.harga), 0) AS total_masuk
FROM hewan_kurban h
LEFT JOIN pekurban_hewan ph ON h.id = ph.hewan_id
LEFT JOIN pembayaran_kurban pk ON ph.pekurban_id = pk.pekurban_id
    AND pk.status IN ('settlement', 'capture')
GROUP BY h.id
ORDER BY h.tanggal_pendaftaran
"""

_PROGRESS_QUERY = """
SELECT
    p.id AS pekurban_id,
    COALESCE(p.name, 'Tanpa Nama') AS nama_pekurban,
    COALESCE(SUM(ph.porsi), 0) AS total_porsi,
    COALESCE(SUM(ph.porsi * h.harga), 0) AS total_tagihan,
    COALESCE((
        SELECT SUM(h2.harga * ph2.porsi)
        FROM pembayaran_kurban pk2
        JOIN pekurban_hewan ph2 ON ph2.pekurban_id = pk2.pekurban_id
        JOIN hewan_kurban h2 ON h2.id = ph2.hewan_id
        WHERE pk2.pekurban_id = p.id
        AND pk2.status IN ('settlement', 'capture')
    ), 0) AS total_bayar
FROM pekurban p
LEFT JOIN pekurban_hewan ph ON p.id = ph.pekurban_id
LEFT JOIN hewan_kurban h ON h.id = ph.hewan_id
GROUP BY p.id, p.name
ORDER BY p.created_at
"""


def _row_to_pembayaran(row: Sequence[Any]) -> PembayaranKurban:
    return PembayaranKurban(
        id=uuid.UUID(row[0]),
        order_id=row[1],
        transaction_id=row[2],
        pekurban_id=uuid.UUID(row[3]),
        metode=row[4],
        payment_type=row[5],
        va_number=row[6],
        status=row[7],
        fraud_status=row[8],
        approval_code=row[9],
        transaction_time=datetime.fromisoformat(row[10]) if row[10] is not None else None,
        tanggal_pembayaran=datetime.fromisoformat(row[11]),
        jumlah=float(row[12]),
        created_at=datetime.fromisoformat(row[13]),
        updated_at=datetime.fromisoformat(row[14]),
    )


class PembayaranKurbanRepository:
    """Reads and writes the pembayaran_kurban table and its summaries."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _find_one(self, where: str, *params: Any) -> Optional[PembayaranKurban]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM pembayaran_kurban WHERE {where}", params
        ).fetchone()
        return _row_to_pembayaran(row) if row is not None else None

    def create(self, p: PembayaranKurban) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO pembayaran_kurban ({_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(p.id),
                    p.order_id,
                    p.transaction_id,
                    str(p.pekurban_id),
                    p.metode,
                    p.payment_type,
                    p.va_number,
                    p.status,
                    p.fraud_status,
                    p.approval_code,
                    p.transaction_time.isoformat() if p.transaction_time is not None else None,
                    p.tanggal_pembayaran.isoformat(),
                    p.jumlah,
                    p.created_at.isoformat(),
                    p.updated_at.isoformat(),
                ),
            )

    def find_by_id(self, payment_id: uuid.UUID) -> Optional[PembayaranKurban]:
        return self._find_one("id = ?", str(payment_id))

    def find_by_order_id(self, order_id: str) -> Optional[PembayaranKurban]:
        return self._find_one("order_id = ?", order_id)

    def get_all(self) -> list[PembayaranKurban]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM pembayaran_kurban").fetchall()
        return [_row_to_pembayaran(r) for r in rows]

    def get_total_pembayaran_per_hewan(self) -> list[TotalPembayaranPerHewan]:
        """Per animal, its target price and the share value counted against it."""
        return [
            TotalPembayaranPerHewan(
                hewan_id=uuid.UUID(row[0]),
                jenis=row[1],
                harga_target=float(row[2]),
                total_masuk=float(row[3]),
            )
            for row in self.conn.execute(_TOTAL_PER_HEWAN_QUERY)
        ]

    def get_progress_pembayaran_pekurban(self) -> list[ProgressPembayaran]:
        """Per pekurban, total shares, amount billed and amount settled."""
        return [
            ProgressPembayaran(
                pekurban_id=uuid.UUID(row[0]),
                nama_pekurban=row[1],
                porsi_total=float(row[2]),
                total_tagihan=float(row[3]),
                total_bayar=float(row[4]),
            )
            for row in self.conn.execute(_PROGRESS_QUERY)
        ]