"""Request and response shapes for animals, shares, slaughters and distributions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from kurban.models import (
    DistribusiDaging,
    HewanKurban,
    JenisHewan,
    PekurbanHewan,
    Penyembelihan,
)

JENIS_VALUES = tuple(j.value for j in JenisHewan)
MAX_JUMLAH_ORANG = 7


def _require(value: object, field_name: str) -> None:
    if not value:
        raise ValueError(f"{field_name} is required")


def _require_uuid(value: str, field_name: str) -> None:
    _require(value, field_name)
    try:
        uuid.UUID(value)
    except (ValueError, AttributeError, TypeError) as exc:
        raise ValueError(f"{field_name} must be a valid UUID") from exc


def _require_jenis(jenis: str) -> None:
    if jenis not in JENIS_VALUES:
        raise ValueError(f"jenis must be one of {', '.join(JENIS_VALUES)}")


def _require_jumlah_orang(jumlah_orang: int) -> None:
    if jumlah_orang <= 0 or jumlah_orang > MAX_JUMLAH_ORANG:
        raise ValueError(
            f"jumlah_orang must be greater than 0 and at most {MAX_JUMLAH_ORANG}"
        )


def _rfc3339(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.astimezone()
    text = dt.strftime("%Y-%m-%dT%H:%M:%S")
    offset = dt.utcoffset()
    if not offset:
        return text + "Z"
    total_minutes = int(offset.total_seconds()) // 60
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass(kw_only=True)
class CreateHewanKurbanRequest:
    jenis: str
    berat: float
    tgl_pendaftaran: str
    harga: Optional[float] = None
    is_private: Optional[bool] = None

    def __post_init__(self) -> None:
        _require(self.jenis, "jenis")
        _require_jenis(self.jenis)
        if not self.berat or self.berat <= 0:
            raise ValueError("berat must be greater than 0")
        _require(self.tgl_pendaftaran, "tanggal_pendaftaran")


@dataclass(kw_only=True)
class UpdateHewanKurbanRequest:
    jenis: str = ""
    berat: float = 0.0
    harga: float = 0.0
    is_private: Optional[bool] = None
    tgl_pendaftaran: str = ""

    def __post_init__(self) -> None:
        if self.jenis:
            _require_jenis(self.jenis)
        if self.berat and self.berat <= 0:
            raise ValueError("berat must be greater than 0")
        if self.harga and self.harga <= 0:
            raise ValueError("harga must be greater than 0")


@dataclass
class HewanKurbanResponse:
    id: str
    jenis: str
    berat: float
    harga: float
    is_private: bool
    tgl_pendaftaran: str
    status_penyembelihan: str
    created_at: str
    updated_at: str


@dataclass(kw_only=True)
class CreatePekurbanHewanRequest:
    pekurban_id: str
    hewan_id: str
    jumlah_orang: int

    def __post_init__(self) -> None:
        _require_uuid(self.pekurban_id, "pekurban_id")
        _require_uuid(self.hewan_id, "hewan_id")
        _require_jumlah_orang(self.jumlah_orang)


@dataclass(kw_only=True)
class UpdatePekurbanHewanRequest:
    jumlah_orang: int

    def __post_init__(self) -> None:
        _require_jumlah_orang(self.jumlah_orang)


@dataclass
class PekurbanHewanResponse:
    pekurban_id: str
    hewan_id: str
    porsi: float


@dataclass(kw_only=True)
class CreatePenyembelihanRequest:
    hewan_id: str
    tanggal_penyembelihan: datetime
    lokasi: str
    urutan_rencana: int = 0

    def __post_init__(self) -> None:
        _require_uuid(self.hewan_id, "hewan_id")
        if not isinstance(self.tanggal_penyembelihan, datetime):
            raise ValueError("tanggal_penyembelihan is required")
        _require(self.lokasi, "lokasi")
        if self.urutan_rencana and self.urutan_rencana < 1:
            raise ValueError("urutan_rencana must be at least 1")


@dataclass(kw_only=True)
class UpdatePenyembelihanRequest:
    tanggal_penyembelihan: datetime
    lokasi: str
    urutan_rencana: int = 0
    urutan_aktual: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.tanggal_penyembelihan, datetime):
            raise ValueError("tanggal_penyembelihan is required")
        _require(self.lokasi, "lokasi")
        if self.urutan_rencana and self.urutan_rencana < 1:
            raise ValueError("urutan_rencana must be at least 1")


@dataclass
class PenyembelihanResponse:
    id: str
    hewan_id: str
    tanggal_penyembelihan: datetime
    lokasi: str
    urutan_rencana: int
    urutan_aktual: Optional[int]


@dataclass(kw_only=True)
class CreateDistribusiRequest:
    penerima_id: str
    hewan_id: str
    jumlah_paket: int
    tanggal_distribusi: str

    def __post_init__(self) -> None:
        _require_uuid(self.penerima_id, "penerima_id")
        _require_uuid(self.hewan_id, "hewan_id")
        if not self.jumlah_paket or self.jumlah_paket < 1:
            raise ValueError("jumlah_paket must be at least 1")
        _require(self.tanggal_distribusi, "tanggal_distribusi")


@dataclass
class DistribusiResponse:
    id: str
    penerima_id: str
    hewan_id: str
    jumlah_paket: int
    tanggal_distribusi: datetime


def to_hewan_kurban_response(h: HewanKurban, sudah_disembelih: bool) -> HewanKurbanResponse:
    """Public view of an animal with its slaughter status."""
    return HewanKurbanResponse(
        id=str(h.id),
        jenis=JenisHewan(h.jenis).value,
        berat=h.berat,
        harga=h.harga,
        is_private=h.is_private,
        tgl_pendaftaran=h.tanggal_pendaftaran.strftime("%Y-%m-%d"),
        status_penyembelihan="sudah" if sudah_disembelih else "belum",
        created_at=_rfc3339(h.created_at),
        updated_at=_rfc3339(h.updated_at),
    )


def to_pekurban_hewan_response(ph: PekurbanHewan) -> PekurbanHewanResponse:
    return PekurbanHewanResponse(
        pekurban_id=str(ph.pekurban_id),
        hewan_id=str(ph.hewan_id),
        porsi=ph.porsi,
    )


def to_penyembelihan_response(p: Penyembelihan) -> PenyembelihanResponse:
    return PenyembelihanResponse(
        id=str(p.id),
        hewan_id=str(p.hewan_id),
        tanggal_penyembelihan=p.tgl_penyembelihan,
        lokasi=p.lokasi,
        urutan_rencana=p.urutan_rencana,
        urutan_aktual=p.urutan_aktual,
    )


def to_distribusi_response(d: DistribusiDaging) -> DistribusiResponse:
    return DistribusiResponse(
        id=str(d.id),
        penerima_id=str(d.penerima_id),
        hewan_id=str(d.hewan_id),
        jumlah_paket=d.jumlah_paket,
        tanggal_distribusi=d.tanggal_distribusi,
    )