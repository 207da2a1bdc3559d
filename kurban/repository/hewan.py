"""Storage of animals, their slaughters and the shares pekurban hold in them."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from kurban.models import (
    HewanKurban,
    JenisHewan,
    NotFoundError,
    PekurbanHewan,
    Penyembelihan,
)

_HEWAN_COLUMNS = (
    "id, jenis, berat, harga, is_private, tanggal_pendaftaran, created_at, updated_at"
)
_PENYEMBELIHAN_COLUMNS = (
    "id, hewan_id, tanggal_penyembelihan, lokasi, urutan_rencana, urutan_aktual, "
    "created_at, updated_at"
)
_PEKURBAN_HEWAN_COLUMNS = "pekurban_id, hewan_id, porsi"


def _row_to_hewan(row: Sequence[Any]) -> HewanKurban:
    return HewanKurban(
        id=uuid.UUID(row[0]),
        jenis=JenisHewan(row[1]),
        berat=float(row[2]),
        harga=float(row[3]),
        is_private=bool(row[4]),
        tanggal_pendaftaran=datetime.fromisoformat(row[5]),
        created_at=datetime.fromisoformat(row[6]),
        updated_at=datetime.fromisoformat(row[7]),
    )


def _row_to_penyembelihan(row: Sequence[Any]) -> Penyembelihan:
    return Penyembelihan(
        id=uuid.UUID(row[0]),
        hewan_id=uuid.UUID(row[1]),
        tgl_penyembelihan=datetime.fromisoformat(row[2]),
        lokasi=row[3],
        urutan_rencana=int(row[4]),
        urutan_aktual=int(row[5]) if row[5] is not None else None,
        created_at=datetime.fromisoformat(row[6]),
        updated_at=datetime.fromisoformat(row[7]),
    )


def _row_to_pekurban_hewan(row: Sequence[Any]) -> PekurbanHewan:
    return PekurbanHewan(
        pekurban_id=uuid.UUID(row[0]),
        hewan_id=uuid.UUID(row[1]),
        porsi=float(row[2]),
    )


def _jenis_value(jenis: Any) -> str:
    return JenisHewan(jenis).value


class HewanKurbanRepository:
    """Reads and writes the hewan_kurban table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create(self, h: HewanKurban) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO hewan_kurban ({_HEWAN_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(h.id),
                    _jenis_value(h.jenis),
                    h.berat,
                    h.harga,
                    int(h.is_private),
                    h.tanggal_pendaftaran.isoformat(),
                    h.created_at.isoformat(),
                    h.updated_at.isoformat(),
                ),
            )

    def get_all(self) -> list[HewanKurban]:
        rows = self.conn.execute(f"SELECT {_HEWAN_COLUMNS} FROM hewan_kurban").fetchall()
        return [_row_to_hewan(r) for r in rows]

    def get_by_id(self, hewan_id: uuid.UUID) -> Optional[HewanKurban]:
        row = self.conn.execute(
            f"SELECT {_HEWAN_COLUMNS} FROM hewan_kurban WHERE id = ?", (str(hewan_id),)
        ).fetchone()
        return _row_to_hewan(row) if row is not None else None

    def update(self, h: HewanKurban) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE hewan_kurban SET jenis = ?, berat = ?, harga = ?, is_private = ?, "
                "tanggal_pendaftaran = ? WHERE id = ?",
                (
                    _jenis_value(h.jenis),
                    h.berat,
                    h.harga,
                    int(h.is_private),
                    h.tanggal_pendaftaran.isoformat(),
                    str(h.id),
                ),
            )

    def delete(self, hewan_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute("DELETE FROM hewan_kurban WHERE id = ?", (str(hewan_id),))
        if cur.rowcount == 0:
            raise NotFoundError("Hewan kurban not found")


class PenyembelihanRepository:
    """Reads and writes the penyembelihan table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create(self, p: Penyembelihan) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO penyembelihan ({_PENYEMBELIHAN_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(p.id),
                    str(p.hewan_id),
                    p.tgl_penyembelihan.isoformat(),
                    p.lokasi,
                    p.urutan_rencana,
                    p.urutan_aktual,
                    p.created_at.isoformat(),
                    p.updated_at.isoformat(),
                ),
            )

    def get_all(self) -> list[Penyembelihan]:
        rows = self.conn.execute(
            f"SELECT {_PENYEMBELIHAN_COLUMNS} FROM penyembelihan"
        ).fetchall()
        return [_row_to_penyembelihan(r) for r in rows]

    def get_by_id(self, penyembelihan_id: uuid.UUID) -> Optional[Penyembelihan]:
        row = self.conn.execute(
            f"SELECT {_PENYEMBELIHAN_COLUMNS} FROM penyembelihan WHERE id = ?",
            (str(penyembelihan_id),),
        ).fetchone()
        return _row_to_penyembelihan(row) if row is not None else None

    def get_by_hewan_id(self, hewan_id: uuid.UUID) -> Penyembelihan:
        """Return the slaughter of an animal; raise NotFoundError if it has none."""
        row = self.conn.execute(
            f"SELECT {_PENYEMBELIHAN_COLUMNS} FROM penyembelihan WHERE hewan_id = ? LIMIT 1",
            (str(hewan_id),),
        ).fetchone()
        if row is None:
            raise NotFoundError("Penyembelihan not found")
        return _row_to_penyembelihan(row)

    def update(self, p: Penyembelihan) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE penyembelihan SET tanggal_penyembelihan = ?, lokasi = ?, "
                "urutan_rencana = ?, urutan_aktual = ? WHERE id = ?",
                (
                    p.tgl_penyembelihan.isoformat(),
                    p.lokasi,
                    p.urutan_rencana,
                    p.urutan_aktual,
                    str(p.id),
                ),
            )

    def delete(self, penyembelihan_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute(
                "DELETE FROM penyembelihan WHERE id = ?", (str(penyembelihan_id),)
            )
        if cur.rowcount == 0:
            raise NotFoundError("ID penyembelihan not found")


class PekurbanHewanRepository:
    """Reads and writes the pekurban_hewan table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _select(self, where: str = "", *params: Any) -> list[PekurbanHewan]:
        query = f"SELECT {_PEKURBAN_HEWAN_COLUMNS} FROM pekurban_hewan"
        if where:
            query += f" WHERE {where}"
        return [_row_to_pekurban_hewan(r) for r in self.conn.execute(query, params)]

    def create(self, ph: PekurbanHewan) -> None:
        with self.conn:
            self.conn.execute(
                f"INSERT INTO pekurban_hewan ({_PEKURBAN_HEWAN_COLUMNS}) VALUES (?, ?, ?)",
                (str(ph.pekurban_id), str(ph.hewan_id), ph.porsi),
            )

    def find_all(self) -> list[PekurbanHewan]:
        return self._select()

    def get_by_hewan_id(self, hewan_id: uuid.UUID) -> list[PekurbanHewan]:
        return self._select("hewan_id = ?", str(hewan_id))

    def get_by_pekurban_id(self, pekurban_id: uuid.UUID) -> list[PekurbanHewan]:
        return self._select("pekurban_id = ?", str(pekurban_id))

    def update(self, ph: PekurbanHewan) -> None:
        with self.conn:
            cur = self.conn.execute(
                "UPDATE pekurban_hewan SET porsi = ? WHERE pekurban_id = ? AND hewan_id = ?",
                (ph.porsi, str(ph.pekurban_id), str(ph.hewan_id)),
            )
        if cur.rowcount == 0:
            raise NotFoundError("data not found")

    def delete(self, pekurban_id: uuid.UUID, hewan_id: uuid.UUID) -> None:
        with self.conn:
            cur = self.conn.execute(
                "DELETE FROM pekurban_hewan WHERE pekurban_id = ? AND hewan_id = ?",
                (str(pekurban_id), str(hewan_id)),
            )
        if cur.rowcount == 0:
            raise NotFoundError("Data not found or already deleted")