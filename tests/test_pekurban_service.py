import uuid

import pytest

from kurban.database import connect
from kurban.dto.people import (
    CreatePekurbanRequest,
    CreatePenerimaRequest,
    UpdatePekurbanRequest,
    UpdatePenerimaRequest,
)
from kurban.models import DomainError, NotFoundError, User
from kurban.repository.pekurban import PekurbanRepository, PenerimaDagingRepository
from kurban.repository.users import UserRepository
from kurban.services.pekurban import PekurbanService, PenerimaDagingService


@pytest.fixture
def conn():
    c = connect(":memory:")
    yield c
    c.close()


@pytest.fixture
def user_repo(conn):
    return UserRepository(conn)


@pytest.fixture
def pekurban_service(conn, user_repo):
    return PekurbanService(PekurbanRepository(conn), user_repo)


@pytest.fixture
def penerima_service(conn):
    return PenerimaDagingService(PenerimaDagingRepository(conn), PekurbanRepository(conn))


def _user(user_repo):
    user = User(username="budisantoso", name="Budi", email="budi@example.com")
    user_repo.create(user)
    return user


def test_create_without_user(pekurban_service):
    res = pekurban_service.create(
        CreatePekurbanRequest(name="Ani", phone="0800", email="ani@example.com", alamat="Jl. A")
    )
    assert res.user_id is None
    assert (res.name, res.phone, res.email, res.alamat) == ("Ani", "0800", "ani@example.com", "Jl. A")
    assert pekurban_service.get_by_id(uuid.UUID(res.id)) == res


def test_create_fills_from_user(pekurban_service, user_repo):
    user = _user(user_repo)
    res = pekurban_service.create(
        CreatePekurbanRequest(user_id=str(user.id), phone="0800", alamat="Jl. B")
    )
    assert res.user_id == str(user.id)
    assert res.name == user.name
    assert res.email == user.email


def test_create_unknown_user_raises(pekurban_service):
    with pytest.raises(DomainError, match="Invalid user ID"):
        pekurban_service.create(
            CreatePekurbanRequest(user_id=str(uuid.uuid4()), phone="0800", alamat="Jl. C")
        )


def test_create_with_full_data_skips_user_lookup(pekurban_service):
    uid = uuid.uuid4()
    res = pekurban_service.create(
        CreatePekurbanRequest(
            user_id=str(uid), name="Cici", email="cici@example.com", phone="0800", alamat="Jl. D"
        )
    )
    assert res.user_id == str(uid)
    assert res.name == "Cici"


def test_create_malformed_user_id_is_ignored(pekurban_service):
    res = pekurban_service.create(
        CreatePekurbanRequest(user_id="not-a-uuid", name="Dedi", phone="0800", alamat="Jl. E")
    )
    assert res.user_id is None


def test_get_by_user_id_and_me(pekurban_service, user_repo):
    user = _user(user_repo)
    created = pekurban_service.create(
        CreatePekurbanRequest(user_id=str(user.id), phone="0800", alamat="Jl. F")
    )
    assert pekurban_service.get_by_user_id(user.id) == created
    assert pekurban_service.get_me(user.id) == created
    assert pekurban_service.get_me(uuid.uuid4()) is None


def test_get_all_and_missing(pekurban_service):
    for name in ("A", "B"):
        pekurban_service.create(CreatePekurbanRequest(name=name, phone="0800", alamat="Jl"))
    assert sorted(p.name for p in pekurban_service.get_all()) == ["A", "B"]
    assert pekurban_service.get_by_id(uuid.uuid4()) is None


def test_update_changes_only_given_fields(pekurban_service):
    res = pekurban_service.create(
        CreatePekurbanRequest(name="Eka", phone="0800", email="eka@example.com", alamat="Jl. G")
    )
    pekurban_service.update(uuid.UUID(res.id), UpdatePekurbanRequest(phone="0811", alamat="Jl. H"))
    updated = pekurban_service.get_by_id(uuid.UUID(res.id))
    assert (updated.name, updated.phone, updated.email, updated.alamat) == (
        "Eka", "0811", "eka@example.com", "Jl. H"
    )


def test_update_missing_leaves_store_unchanged(pekurban_service):
    pekurban_service.update(uuid.uuid4(), UpdatePekurbanRequest(name="X"))
    assert pekurban_service.get_all() == []


def test_delete(pekurban_service):
    res = pekurban_service.create(CreatePekurbanRequest(name="F", phone="0800", alamat="Jl"))
    pekurban_service.delete(uuid.UUID(res.id))
    assert pekurban_service.get_by_id(uuid.UUID(res.id)) is None
    with pytest.raises(NotFoundError):
        pekurban_service.delete(uuid.UUID(res.id))


def test_penerima_create_fills_from_pekurban(pekurban_service, penerima_service):
    pk = pekurban_service.create(CreatePekurbanRequest(name="Gita", phone="0800", alamat="Jl. I"))
    res = penerima_service.create(CreatePenerimaRequest(status="pekurban", pekurban_id=pk.id))
    assert (res.name, res.alamat, res.phone, res.pekurban_id) == ("Gita", "Jl. I", "0800", pk.id)


def test_penerima_explicit_values_kept(pekurban_service, penerima_service):
    pk = pekurban_service.create(CreatePekurbanRequest(name="Gita", phone="0800", alamat="Jl. I"))
    res = penerima_service.create(
        CreatePenerimaRequest(status="pekurban", name="Hadi", phone="0899", pekurban_id=pk.id)
    )
    assert res.name == "Hadi"
    assert res.phone == "0899"
    assert res.alamat == "Jl. I"


def test_penerima_unknown_pekurban(penerima_service):
    with pytest.raises(DomainError, match="Pekurban not found"):
        penerima_service.create(
            CreatePenerimaRequest(status="warga", name="Ika", pekurban_id=str(uuid.uuid4()))
        )


def test_penerima_roundtrip_and_update(penerima_service):
    res = penerima_service.create(CreatePenerimaRequest(status="warga", name="Joko"))
    pid = uuid.UUID(res.id)
    assert penerima_service.get_by_id(pid) == res
    new_pk = uuid.uuid4()
    penerima_service.update(
        pid, UpdatePenerimaRequest(status="dhuafa", name="Joko W", pekurban_id=str(new_pk))
    )
    updated = penerima_service.get_by_id(pid)
    assert updated.status == "dhuafa"
    assert updated.name == "Joko W"
    assert updated.pekurban_id == str(new_pk)
    assert [p.id for p in penerima_service.get_all()] == [res.id]


def test_penerima_delete(penerima_service):
    res = penerima_service.create(CreatePenerimaRequest(status="warga", name="Kiki"))
    penerima_service.delete(uuid.UUID(res.id))
    assert penerima_service.get_by_id(uuid.UUID(res.id)) is None
    with pytest.raises(NotFoundError):
        penerima_service.delete(uuid.UUID(res.id))