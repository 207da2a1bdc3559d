"""Business rules for pekurban and meat recipients."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from kurban.dto.people import (
    CreatePekurbanRequest,
    CreatePenerimaRequest,
    PekurbanResponse,
    PenerimaResponse,
    UpdatePekurbanRequest,
    UpdatePenerimaRequest,
    to_pekurban_response,
    to_penerima_response,
)
from kurban.models import DomainError, NotFoundError, Pekurban, PenerimaDaging
from kurban.repository.pekurban import PekurbanRepository, PenerimaDagingRepository
from kurban.repository.users import UserRepository


def _parse_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    """Parse value as a UUID; an absent or malformed value gives None."""
    if value is None:
        return None
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        return None


class PekurbanService:
    """Registers and maintains pekurban."""

    def __init__(self, pekurban_repo: PekurbanRepository, user_repo: UserRepository):
        self.pekurban_repo = pekurban_repo
        self.user_repo = user_repo

    def create(self, req: CreatePekurbanRequest) -> PekurbanResponse:
        """Register a pekurban; a linked account fills in a missing name or email."""
        name = req.name
        email = req.email
        user_id = _parse_uuid(req.user_id)
        if user_id is not None and (not name or not email):
            user = self.user_repo.find_by_id(user_id)
            if user is None:
                raise DomainError("Invalid user ID")
            name = name or user.name
            email = email or user.email

        now = datetime.now()
        p = Pekurban(
            user_id=user_id,
            name=name,
            phone=req.phone,
            email=email,
            alamat=req.alamat,
            created_at=now,
            updated_at=now,
        )
        self.pekurban_repo.create(p)
        return to_pekurban_response(p)

    def get_all(self) -> list[PekurbanResponse]:
        return [to_pekurban_response(p) for p in self.pekurban_repo.find_all()]

    def get_by_id(self, pekurban_id: uuid.UUID) -> Optional[PekurbanResponse]:
        p = self.pekurban_repo.find_by_id(pekurban_id)
        return to_pekurban_response(p) if p is not None else None

    def get_by_user_id(self, user_id: uuid.UUID) -> Optional[PekurbanResponse]:
        p = self.pekurban_repo.find_by_user_id(user_id)
        return to_pekurban_response(p) if p is not None else None

    def get_me(self, user_id: uuid.UUID) -> Optional[PekurbanResponse]:
        """The pekurban record linked to the given account, if any."""
        return self.get_by_user_id(user_id)

    def update(self, pekurban_id: uuid.UUID, req: UpdatePekurbanRequest) -> None:
        """Change the given fields; an unknown id is left alone."""
        p = self.pekurban_repo.find_by_id(pekurban_id)
        if p is None:
            return
        if req.name is not None:
            p.name = req.name
        if req.phone is not None:
            p.phone = req.phone
        if req.email is not None:
            p.email = req.email
        if req.alamat is not None:
            p.alamat = req.alamat
        self.pekurban_repo.update(p)

    def delete(self, pekurban_id: uuid.UUID) -> None:
        self.pekurban_repo.delete(pekurban_id)


class PenerimaDagingService:
    """Registers and maintains meat recipients."""

    def __init__(self, repo: PenerimaDagingRepository, pekurban_repo: PekurbanRepository):
        self.repo = repo
        self.pekurban_repo = pekurban_repo

    def create(self, req: CreatePenerimaRequest) -> PenerimaResponse:
        """Register a recipient; a linked pekurban fills in missing contact data."""
        name = req.name
        alamat = req.alamat
        phone = req.phone
        pekurban_id = _parse_uuid(req.pekurban_id)
        if pekurban_id is not None:
            pekurban = self.pekurban_repo.find_by_id(pekurban_id)
            if pekurban is None:
                raise NotFoundError("Pekurban not found")
            if not name and pekurban.name is not None:
                name = pekurban.name
            if alamat is None and pekurban.alamat is not None:
                alamat = pekurban.alamat
            if phone is None and pekurban.phone is not None:
                phone = pekurban.phone

        now = datetime.now()
        p = PenerimaDaging(
            name=name,
            alamat=alamat,
            phone=phone,
            status=req.status,
            pekurban_id=pekurban_id,
            created_at=now,
            updated_at=now,
        )
        self.repo.create(p)
        return to_penerima_response(p)

    def get_all(self) -> list[PenerimaResponse]:
        return [to_penerima_response(p) for p in self.repo.get_all()]

    def get_by_id(self, penerima_id: uuid.UUID) -> Optional[PenerimaResponse]:
        p = self.repo.get_by_id(penerima_id)
        return to_penerima_response(p) if p is not None else None

    def update(self, penerima_id: uuid.UUID, req: UpdatePenerimaRequest) -> None:
        """Change the given fields and the status; an unknown id is left alone."""
        existing = self.repo.get_by_id(penerima_id)
        if existing is None:
            return
        if req.name is not None:
            existing.name = req.name
        if req.alamat is not None:
            existing.alamat = req.alamat
        if req.phone is not None:
            existing.phone = req.phone
        existing.status = req.status
        pekurban_id = _parse_uuid(req.pekurban_id)
        if pekurban_id is not None:
            existing.pekurban_id = pekurban_id
        self.repo.update(existing)

    def delete(self, penerima_id: uuid.UUID) -> None:
        self.repo.delete(penerima_id)