"""Business rules for animals and the shares pekurban hold in them."""

from __future__ import annotations

import uuid
from datetime import datetime

from kurban.dto.hewan import (
    CreateHewanKurbanRequest,
    CreatePekurbanHewanRequest,
    HewanKurbanResponse,
    PekurbanHewanResponse,
    UpdateHewanKurbanRequest,
    UpdatePekurbanHewanRequest,
    to_hewan_kurban_response,
    to_pekurban_hewan_response,
)
from kurban.models import DomainError, HewanKurban, JenisHewan, NotFoundError, PekurbanHewan
from kurban.repository.hewan import (
    HewanKurbanRepository,
    PekurbanHewanRepository,
    PenyembelihanRepository,
)

_DATE_FORMAT = "%Y-%m-%d"
_MAX_SAPI_ORANG = 7
_SMALL_ANIMALS = (JenisHewan.KAMBING, JenisHewan.DOMBA)


def _parse_date(text: str, message: str) -> datetime:
    try:
        return datetime.strptime(text, _DATE_FORMAT)
    except (ValueError, TypeError) as exc:
        raise DomainError(message) from exc


def _parse_uuid(value: str, message: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError) as exc:
        raise DomainError(message) from exc


class HewanKurbanService:
    """Registers animals and reports whether they have been slaughtered."""

    def __init__(self, repo: HewanKurbanRepository, penyembelihan_repo: PenyembelihanRepository):
        self.repo = repo
        self.penyembelihan_repo = penyembelihan_repo

    def _sudah_disembelih(self, hewan_id: uuid.UUID) -> bool:
        try:
            self.penyembelihan_repo.get_by_hewan_id(hewan_id)
        except NotFoundError:
            return False
        return True

    def create(self, req: CreateHewanKurbanRequest) -> HewanKurbanResponse:
        """Register an animal; a non-private animal needs a positive price."""
        tanggal = _parse_date(req.tgl_pendaftaran, "Invalid date format, must be YYYY-MM-DD")
        is_private = bool(req.is_private) if req.is_private is not None else False

        if is_private:
            harga = 0.0
        else:
            if req.harga is None or req.harga <= 0:
                raise DomainError(
                    "Field harga must be filled and greater than 0 if hewan is not private"
                )
            harga = req.harga

        now = datetime.now()
        h = HewanKurban(
            jenis=JenisHewan(req.jenis),
            berat=req.berat,
            harga=harga,
            is_private=is_private,
            tanggal_pendaftaran=tanggal,
            created_at=now,
            updated_at=now,
        )
        self.repo.create(h)
        return to_hewan_kurban_response(h, False)

    def get_by_id(self, hewan_id: uuid.UUID) -> HewanKurbanResponse:
        """Return one animal; raise NotFoundError if it does not exist."""
        h = self.repo.get_by_id(hewan_id)
        if h is None:
            raise NotFoundError("Hewan kurban not found")
        return to_hewan_kurban_response(h, self._sudah_disembelih(hewan_id))

    def get_all(self) -> list[HewanKurbanResponse]:
        return [
            to_hewan_kurban_response(h, self._sudah_disembelih(h.id))
            for h in self.repo.get_all()
        ]

    def update(self, hewan_id: uuid.UUID, req: UpdateHewanKurbanRequest) -> None:
        """Change the fields that are given; raise NotFoundError for an unknown id."""
        existing = self.repo.get_by_id(hewan_id)
        if existing is None:
            raise NotFoundError("Hewan kurban not found")

        if req.jenis:
            existing.jenis = JenisHewan(req.jenis)
        if req.berat > 0:
            existing.berat = req.berat
        if req.harga > 0:
            existing.harga = req.harga
        if req.is_private is not None:
            existing.is_private = req.is_private
        if req.tgl_pendaftaran:
            existing.tanggal_pendaftaran = _parse_date(req.tgl_pendaftaran, "Invalid date format")

        self.repo.update(existing)

    def delete(self, hewan_id: uuid.UUID) -> None:
        self.repo.delete(hewan_id)


class PekurbanHewanService:
    """Assigns shares (porsi) of animals to pekurban."""

    def __init__(self, repo: PekurbanHewanRepository, hewan_repo: HewanKurbanRepository):
        self.repo = repo
        self.hewan_repo = hewan_repo

    def create(self, req: CreatePekurbanHewanRequest) -> None:
        """Add a share; the shares of one animal may not exceed a whole."""
        pekurban_id = _parse_uuid(req.pekurban_id, "Invalid pekurban ID")
        hewan_id = _parse_uuid(req.hewan_id, "Invalid hewan ID")

        hewan = self.hewan_repo.get_by_id(hewan_id)
        if hewan is None:
            raise NotFoundError("Hewan kurban not found")

        if hewan.jenis == JenisHewan.SAPI:
            porsi = req.jumlah_orang / 7.0
            if req.jumlah_orang > _MAX_SAPI_ORANG:
                raise DomainError("The maximum number of people for a sapi is 7")
        elif hewan.jenis in _SMALL_ANIMALS:
            if req.jumlah_orang != 1:
                raise DomainError("Kambing/domba can only be for one person")
            porsi = 1.0
        else:
            raise DomainError("Invalid jenis hewan")

        existing = self.repo.get_by_hewan_id(hewan_id)

        if hewan.is_private:
            if existing:
                raise DomainError("Hewan private can only be owned by one pekurban")
            if porsi != 1.0:
                raise DomainError("Hewan private must be fully owned (porsi 1.0)")

        total = 0.0
        for ph in existing:
            total += ph.porsi
        if total + porsi > 1.0:
            raise DomainError("Total portion exceeds the maximum limit")

        self.repo.create(PekurbanHewan(pekurban_id=pekurban_id, hewan_id=hewan_id, porsi=porsi))

    def get_all(self) -> list[PekurbanHewanResponse]:
        return [to_pekurban_hewan_response(ph) for ph in self.repo.find_all()]

    def get_by_hewan_id(self, hewan_id: uuid.UUID) -> list[PekurbanHewanResponse]:
        return [to_pekurban_hewan_response(ph) for ph in self.repo.get_by_hewan_id(hewan_id)]

    def get_by_pekurban_id(self, pekurban_id: uuid.UUID) -> list[PekurbanHewanResponse]:
        return [
            to_pekurban_hewan_response(ph) for ph in self.repo.get_by_pekurban_id(pekurban_id)
        ]

    def update(
        self,
        pekurban_id: uuid.UUID,
        hewan_id: uuid.UUID,
        req: UpdatePekurbanHewanRequest,
    ) -> None:
        """Recompute one pekurban's share of an animal from a new head count."""
        if req.jumlah_orang <= 0 or req.jumlah_orang > _MAX_SAPI_ORANG:
            raise DomainError("jumlah orang harus antara 1 dan 7")

        hewan = self.hewan_repo.get_by_id(hewan_id)
        if hewan is None:
            raise NotFoundError("hewan tidak ditemukan")

        small = hewan.jenis in _SMALL_ANIMALS
        if not hewan.is_private and small and req.jumlah_orang != 1:
            raise DomainError("kambing dan domba hanya boleh 1 orang")

        porsi = 1.0 if hewan.is_private or small else req.jumlah_orang / 7.0

        total = 0.0
        for ph in self.repo.get_by_hewan_id(hewan_id):
            if ph.pekurban_id != pekurban_id:
                total += ph.porsi
        if total + porsi > 1.0:
            raise DomainError("total porsi melebihi batas maksimal")

        self.repo.update(PekurbanHewan(pekurban_id=pekurban_id, hewan_id=hewan_id, porsi=porsi))

    def delete(self, pekurban_id: uuid.UUID, hewan_id: uuid.UUID) -> None:
        self.repo.delete(pekurban_id, hewan_id)