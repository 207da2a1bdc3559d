"""Business rules for meat distributions."""

from __future__ import annotations

import uuid
from datetime import datetime

from kurban.dto.hewan import CreateDistribusiRequest, DistribusiResponse, to_distribusi_response
from kurban.dto.people import PenerimaResponse, to_penerima_response
from kurban.models import DistribusiDaging, DomainError, NotFoundError
from kurban.repository.distribusi import DistribusiDagingRepository
from kurban.repository.hewan import HewanKurbanRepository
from kurban.repository.pekurban import PenerimaDagingRepository


def _parse_uuid(value: str, message: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError) as exc:
        raise DomainError(message) from exc


class DistribusiDagingService:
    """Records deliveries of meat, one per recipient."""

    def __init__(
        self,
        repo: DistribusiDagingRepository,
        penerima_repo: PenerimaDagingRepository,
        hewan_repo: HewanKurbanRepository,
    ):
        self.repo = repo
        self.penerima_repo = penerima_repo
        self.hewan_repo = hewan_repo

    def create(self, req: CreateDistribusiRequest) -> DistribusiResponse:
        """Record a delivery; each recipient may receive only once."""
        penerima_id = _parse_uuid(req.penerima_id, "Invalid Penerima ID")
        hewan_id = _parse_uuid(req.hewan_id, "Invalid Hewan ID")
        try:
            tanggal = datetime.strptime(req.tanggal_distribusi, "%Y-%m-%d")
        except ValueError as exc:
            raise DomainError("Invalid date format. Use YYYY-MM-DD") from exc

        if self.penerima_repo.get_by_id(penerima_id) is None:
            raise NotFoundError("Penerima not found")
        if self.hewan_repo.get_by_id(hewan_id) is None:
            raise NotFoundError("Hewan not found")
        if self.repo.find_by_penerima_id(penerima_id) is not None:
            raise DomainError("Penerima already received distribution")

        now = datetime.now()
        d = DistribusiDaging(
            penerima_id=penerima_id,
            hewan_id=hewan_id,
            jumlah_paket=req.jumlah_paket,
            tanggal_distribusi=tanggal,
            created_at=now,
            updated_at=now,
        )
        self.repo.create(d)
        return to_distribusi_response(d)

    def get_all(self) -> list[DistribusiResponse]:
        return [to_distribusi_response(d) for d in self.repo.get_all()]

    def get_by_id(self, distribusi_id: uuid.UUID) -> DistribusiResponse:
        """Return one distribution; raise NotFoundError if it does not exist."""
        return to_distribusi_response(self.repo.get_by_id(distribusi_id))

    def delete(self, distribusi_id: uuid.UUID) -> None:
        self.repo.delete(distribusi_id)

    def get_total_distribusi_paket(self) -> int:
        """Total number of packages handed out."""
        return self.repo.count_total_paket()

    def get_penerima_belum_terdistribusi(self) -> list[PenerimaResponse]:
        """Recipients that have not received any distribution yet."""
        return [
            to_penerima_response(p)
            for p in self.penerima_repo.get_all()
            if self.repo.find_by_penerima_id(p.id) is None
        ]