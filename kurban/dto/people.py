"""Request and response shapes for users, pekurban and meat recipients."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from kurban.models import PenerimaDaging, Pekurban, User

PENERIMA_STATUSES = ("warga", "dhuafa", "panitia", "pekurban")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require(value: Optional[str], field_name: str) -> None:
    if not value:
        raise ValueError(f"{field_name} is required")


def _require_email(value: str, field_name: str = "email") -> None:
    _require(value, field_name)
    if not _EMAIL_RE.match(value):
        raise ValueError(f"{field_name} must be a valid email address")


def _require_status(status: str) -> None:
    _require(status, "status")
    if status not in PENERIMA_STATUSES:
        raise ValueError(f"status must be one of {', '.join(PENERIMA_STATUSES)}")


def _without_none(data: dict[str, Any], *optional: str) -> dict[str, Any]:
    return {k: v for k, v in data.items() if not (k in optional and v is None)}


@dataclass
class UpdateUserRequest:
    username: str
    name: str
    email: str

    def __post_init__(self) -> None:
        _require(self.username, "username")
        _require(self.name, "name")
        _require_email(self.email)


@dataclass
class UserResponse:
    id: str
    username: str
    name: str
    email: str
    role: str


@dataclass
class ChangePasswordRequest:
    old_password: str
    new_password: str
    confirm_password: str

    def __post_init__(self) -> None:
        _require(self.old_password, "old_password")
        _require(self.new_password, "new_password")
        if len(self.new_password) < 8:
            raise ValueError("new_password must be at least 8 characters")
        _require(self.confirm_password, "confirm_password")
        if self.confirm_password != self.new_password:
            raise ValueError("confirm_password must match new_password")


@dataclass(kw_only=True)
class CreatePekurbanRequest:
    phone: str
    alamat: str
    user_id: Optional[str] = None
    name: str = ""
    email: str = ""

    def __post_init__(self) -> None:
        _require(self.phone, "phone")
        _require(self.alamat, "alamat")


@dataclass(kw_only=True)
class UpdatePekurbanRequest:
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    alamat: Optional[str] = None


@dataclass
class PekurbanResponse:
    id: str
    user_id: Optional[str]
    name: str
    phone: str
    email: str
    alamat: str

    def to_dict(self) -> dict[str, Any]:
        """JSON form; user_id is left out when absent."""
        return _without_none(
            {
                "id": self.id,
                "user_id": self.user_id,
                "name": self.name,
                "phone": self.phone,
                "email": self.email,
                "alamat": self.alamat,
            },
            "user_id",
        )


@dataclass(kw_only=True)
class CreatePenerimaRequest:
    status: str
    name: str = ""
    alamat: Optional[str] = None
    phone: Optional[str] = None
    pekurban_id: Optional[str] = None

    def __post_init__(self) -> None:
        _require_status(self.status)


@dataclass(kw_only=True)
class UpdatePenerimaRequest:
    status: str
    name: Optional[str] = None
    alamat: Optional[str] = None
    phone: Optional[str] = None
    pekurban_id: Optional[str] = None

    def __post_init__(self) -> None:
        _require_status(self.status)


@dataclass
class PenerimaResponse:
    id: str
    name: str
    alamat: Optional[str]
    phone: Optional[str]
    status: str
    pekurban_id: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        """JSON form; absent optional fields are left out."""
        return _without_none(
            {
                "id": self.id,
                "name": self.name,
                "alamat": self.alamat,
                "phone": self.phone,
                "status": self.status,
                "pekurban_id": self.pekurban_id,
            },
            "alamat",
            "phone",
            "pekurban_id",
        )


def to_user_response(user: User) -> UserResponse:
    """Public view of a user, without the password hash."""
    return UserResponse(
        id=str(user.id),
        username=user.username,
        name=user.name,
        email=user.email,
        role=user.role,
    )


def to_user_response_list(users: Iterable[User]) -> list[UserResponse]:
    return [to_user_response(u) for u in users]


def to_pekurban_response(p: Pekurban) -> PekurbanResponse:
    return PekurbanResponse(
        id=str(p.id),
        user_id=str(p.user_id) if p.user_id is not None else None,
        name=p.name or "",
        phone=p.phone or "",
        email=p.email or "",
        alamat=p.alamat or "",
    )


def to_penerima_response(p: PenerimaDaging) -> PenerimaResponse:
    return PenerimaResponse(
        id=str(p.id),
        name=p.name,
        alamat=p.alamat,
        phone=p.phone,
        status=p.status,
        pekurban_id=str(p.pekurban_id) if p.pekurban_id is not None else None,
    )