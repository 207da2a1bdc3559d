"""Domain records for the kurban management system."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


class DomainError(Exception):
    """A business rule was broken or a request could not be served."""


class NotFoundError(DomainError):
    """A requested record does not exist."""


class JenisHewan(str, enum.Enum):
    """Kind of sacrificial animal."""

    SAPI = "sapi"
    KAMBING = "kambing"
    DOMBA = "domba"


def _new_id() -> uuid.UUID:
    return uuid.uuid4()


@dataclass(kw_only=True)
class User:
    """An account that can log in to the system."""

    username: str
    name: str
    email: str
    password: str = ""
    role: str = "user"
    is_verified: bool = False
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class Pekurban:
    """A person who offers a sacrifice, optionally linked to a user account."""

    user_id: Optional[uuid.UUID] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    alamat: Optional[str] = None
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class HewanKurban:
    """A sacrificial animal registered for the event."""

    jenis: JenisHewan
    berat: float
    tanggal_pendaftaran: datetime
    harga: float = 0.0
    is_private: bool = False
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class PekurbanHewan:
    """The share (porsi) a pekurban holds in one animal."""

    pekurban_id: uuid.UUID
    hewan_id: uuid.UUID
    porsi: float


@dataclass(kw_only=True)
class Penyembelihan:
    """A planned or completed slaughter of one animal."""

    hewan_id: uuid.UUID
    tgl_penyembelihan: datetime
    lokasi: str
    urutan_rencana: int = 0
    urutan_aktual: Optional[int] = None
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class PenerimaDaging:
    """A recipient of meat."""

    name: str
    status: str
    alamat: Optional[str] = None
    phone: Optional[str] = None
    pekurban_id: Optional[uuid.UUID] = None
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class DistribusiDaging:
    """A delivery of meat packages to one recipient."""

    penerima_id: uuid.UUID
    hewan_id: uuid.UUID
    jumlah_paket: int
    tanggal_distribusi: datetime
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class PembayaranKurban:
    """A payment made through the payment gateway."""

    order_id: str
    transaction_id: str
    pekurban_id: uuid.UUID
    metode: str
    status: str
    jumlah: float
    payment_type: Optional[str] = None
    va_number: Optional[str] = None
    fraud_status: Optional[str] = None
    approval_code: Optional[str] = None
    transaction_time: Optional[datetime] = None
    tanggal_pembayaran: datetime = field(default_factory=datetime.now)
    id: uuid.UUID = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


@dataclass(kw_only=True)
class TotalPembayaranPerHewan:
    """Funds collected against one animal's target price."""

    hewan_id: uuid.UUID
    jenis: str
    harga_target: float
    total_masuk: float


@dataclass(kw_only=True)
class ProgressPembayaran:
    """Billing and payment totals for one pekurban."""

    pekurban_id: uuid.UUID
    nama_pekurban: str
    porsi_total: float
    total_tagihan: float
    total_bayar: float