"""Storage of pekurban and meat recipients."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from kurban.models import NotFoundError, Pekurban, PenerimaDaging

_PEKURBAN_COLUMNS = "id, user_id, name, phone, email, alamat, created_at, updated_at"
_PENERIMA_COLUMNS = "id, name, alamat, phone, status, pekurban_id, created_at, updated_at"


def _optional_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    return uuid.UUID(value) if value is not None else None


def _optional_str(value: Optional[uuid.UUID]) -> Optional[str]:
    return str(value) if value is not None else None


def _row_to_pekurban(row: Sequence[Any]) -> Pekurban:
    return Pekurban(
        id=uuid.UUID(row[0]),
        user_id=_optional_uuid(row[1]),
        name=row[2],
        phone=row[3],
        email=row[4],
        alamat=row[5],
        created_at=datetime.fromisoformat(row[6]),
        updated_at=datetime.fromisoformat(row[7]),
    )


def _row_to_penerima(row: Sequence[Any]) -> PenerimaDaging:
    return PenerimaDaging(
        id=uuid.UUID(row[0]),
        name=row[1],
        alamat=row[2],
        phone=row[3],
        status=row[4],
        pekurban_id=_optional_uuid(row[5]),
        created_at=datetime.fromisoformat(row[6]),
        updated_at=datetime.fromisoformat(row[7]),
    )


class PekurbanRepository:
    """Reads and writes the pekurban table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _find_one(self, where: str, *params: Any) -> Optional[Pekurban]:
        row = self.conn.execute(
            f"SELECT {_PEKURBAN_COLUMNS} FROM pekurban WHERE {where}", params
        ).fetchone()
        return _row_to_pekurban(row) if row is not None else None

    def create(self, p: Pekurban) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO pekurban ({_PEKURBAN_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(p.id),
                    _optional_str(p.user_id),
                    p.name,
                    p.phone,
                    p.email,
                    p.alamat,
                    p.created_at.isoformat(),
                    p.updated_at.isoformat(),
                ),
            )

    def find_all(self) -> list[Pekurban]:
        rows = self.conn.execute(f"SELECT {_PEKURBAN_COLUMNS} FROM pekurban").fetchall()
        return [_row_to_pekurban(r) for r in rows]

    def find_by_id(self, pekurban_id: uuid.UUID) -> Optional[Pekurban]:
        return self._find_one("id = ?", str(pekurban_id))

    def find_by_user_id(self, user_id: uuid.UUID) -> Optional[Pekurban]:
        return self._find_one("user_id = ?", str(user_id))

    def update(self, p: Pekurban) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE pekurban SET name = ?, phone = ?, email = ?, alamat = ? WHERE id = ?",
                (p.name, p.phone, p.email, p.alamat, str(p.id)),
            )

    def delete(self, pekurban_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute("DELETE FROM pekurban WHERE id = ?", (str(pekurban_id),))
        if cur.rowcount == 0:
            raise NotFoundError("Pekurban not found")


class PenerimaDagingRepository:
    """Reads and writes the penerima_daging table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create(self, p: PenerimaDaging) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO penerima_daging ({_PENERIMA_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(p.id),
                    p.name,
                    p.alamat,
                    p.phone,
                    p.status,
                    _optional_str(p.pekurban_id),
                    p.created_at.isoformat(),
                    p.updated_at.isoformat(),
                ),
            )

    def get_by_id(self, penerima_id: uuid.UUID) -> Optional[PenerimaDaging]:
        row = self.conn.execute(
            f"SELECT {_PENERIMA_COLUMNS} FROM penerima_daging WHERE id = ?",
            (str(penerima_id),),
        ).fetchone()
        return _row_to_penerima(row) if row is not None else None

    def get_all(self) -> list[PenerimaDaging]:
        rows = self.conn.execute(
            f"SELECT {_PENERIMA_COLUMNS} FROM penerima_daging"
        ).fetchall()
        return [_row_to_penerima(r) for r in rows]

    def update(self, p: PenerimaDaging) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE penerima_daging SET name = ?, alamat = ?, phone = ?, status = ?, "
                "pekurban_id = ? WHERE id = ?",
                (
                    p.name,
                    p.alamat,
                    p.phone,
                    p.status,
                    _optional_str(p.pekurban_id),
                    str(p.id),
                ),
            )

    def delete(self, penerima_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute(
                "DELETE FROM penerima_daging WHERE id = ?", (str(penerima_id),)
            )
        if cur.rowcount == 0:
            raise NotFoundError("Penerima daging not found")