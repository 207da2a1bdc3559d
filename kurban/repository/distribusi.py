"""Storage of meat distributions."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from kurban.models import DistribusiDaging, NotFoundError

_COLUMNS = (
    "id, penerima_id, hewan_id, jumlah_paket, tanggal_distribusi, created_at, updated_at"
)


def _row_to_distribusi(row: Sequence[Any]) -> DistribusiDaging:
    return DistribusiDaging(
        id=uuid.UUID(row[0]),
        penerima_id=uuid.UUID(row[1]),
        hewan_id=uuid.UUID(row[2]),
        jumlah_paket=int(row[3]),
        tanggal_distribusi=datetime.fromisoformat(row[4]),
        created_at=datetime.fromisoformat(row[5]),
        updated_at=datetime.fromisoformat(row[6]),
    )


class DistribusiDagingRepository:
    """Reads and writes the distribusi_daging table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create(self, d: DistribusiDaging) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO distribusi_daging ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    str(d.id),
                    str(d.penerima_id),
                    str(d.hewan_id),
                    d.jumlah_paket,
                    d.tanggal_distribusi.isoformat(),
                    d.created_at.isoformat(),
                    d.updated_at.isoformat(),
                ),
            )

    def get_all(self) -> list[DistribusiDaging]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM distribusi_daging").fetchall()
        return [_row_to_distribusi(r) for r in rows]

    def get_by_id(self, distribusi_id: uuid.UUID) -> DistribusiDaging:
        """Return one distribution; raise NotFoundError if it does not exist."""
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM distribusi_daging WHERE id = ?", (str(distribusi_id),)
        ).fetchone()
        if row is None:
            raise NotFoundError("Distribusi daging not found")
        return _row_to_distribusi(row)

    def find_by_penerima_id(self, penerima_id: uuid.UUID) -> Optional[DistribusiDaging]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM distribusi_daging WHERE penerima_id = ?",
            (str(penerima_id),),
        ).fetchone()
        return _row_to_distribusi(row) if row is not None else None

    def count_total_paket(self) -> int:
        """Total number of packages handed out."""
        (total,) = self.conn.execute(
            "SELECT COALESCE(SUM(jumlah_paket), 0) FROM distribusi_daging"
        ).fetchone()
        return int(total)

    def delete(self, distribusi_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute(
                "DELETE FROM distribusi_daging WHERE id = ?", (str(distribusi_id),)
            )
        if cur.rowcount == 0:
            raise NotFoundError("Distribusi daging not found")