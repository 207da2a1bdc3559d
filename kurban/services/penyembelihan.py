"""Business rules for slaughter scheduling."""

from __future__ import annotations

import uuid
from datetime import datetime

from kurban.dto.hewan import (
    CreatePenyembelihanRequest,
    PenyembelihanResponse,
    UpdatePenyembelihanRequest,
    to_penyembelihan_response,
)
from kurban.models import NotFoundError, Penyembelihan
from kurban.repository.hewan import PenyembelihanRepository


class PenyembelihanService:
    """Plans slaughters and records their actual order."""

    def __init__(self, repo: PenyembelihanRepository):
        self.repo = repo

    def create(self, req: CreatePenyembelihanRequest) -> PenyembelihanResponse:
        """Plan a slaughter; the actual order starts unset."""
        now = datetime.now()
        p = Penyembelihan(
            hewan_id=uuid.UUID(req.hewan_id),
            tgl_penyembelihan=req.tanggal_penyembelihan,
            lokasi=req.lokasi,
            urutan_rencana=req.urutan_rencana,
            urutan_aktual=None,
            created_at=now,
            updated_at=now,
        )
        self.repo.create(p)
        return to_penyembelihan_response(p)

    def get_all(self) -> list[PenyembelihanResponse]:
        return [to_penyembelihan_response(p) for p in self.repo.get_all()]

    def get_by_id(self, penyembelihan_id: uuid.UUID) -> PenyembelihanResponse:
        """Return one slaughter; raise NotFoundError if it does not exist."""
        p = self.repo.get_by_id(penyembelihan_id)
        if p is None:
            raise NotFoundError("Penyembelihan not found")
        return to_penyembelihan_response(p)

    def update(self, penyembelihan_id: uuid.UUID, req: UpdatePenyembelihanRequest) -> None:
        """Replace date, place and order; an unknown id is left alone."""
        existing = self.repo.get_by_id(penyembelihan_id)
        if existing is None:
            return
        existing.tgl_penyembelihan = req.tanggal_penyembelihan
        existing.lokasi = req.lokasi
        existing.urutan_rencana = req.urutan_rencana
        existing.urutan_aktual = req.urutan_aktual
        self.repo.update(existing)

    def delete(self, penyembelihan_id: uuid.UUID) -> None:
        self.repo.delete(penyembelihan_id)