import uuid
from datetime import datetime

import pytest

from kurban.database import connect
from kurban.dto.hewan import CreatePenyembelihanRequest, UpdatePenyembelihanRequest
from kurban.models import NotFoundError
from kurban.repository.hewan import PenyembelihanRepository
from kurban.services.penyembelihan import PenyembelihanService


@pytest.fixture
def service():
    conn = connect(":memory:")
    yield PenyembelihanService(PenyembelihanRepository(conn))
    conn.close()


def _create(service, hewan_id=None, urutan=1):
    return service.create(
        CreatePenyembelihanRequest(
            hewan_id=str(hewan_id or uuid.uuid4()),
            tanggal_penyembelihan=datetime(2024, 6, 17, 7, 30),
            lokasi="Masjid",
            urutan_rencana=urutan,
        )
    )


def test_create_roundtrip(service):
    hewan_id = uuid.uuid4()
    res = _create(service, hewan_id, urutan=2)
    assert res.hewan_id == str(hewan_id)
    assert res.tanggal_penyembelihan == datetime(2024, 6, 17, 7, 30)
    assert res.lokasi == "Masjid"
    assert res.urutan_rencana == 2
    assert res.urutan_aktual is None
    assert service.get_by_id(uuid.UUID(res.id)) == res


def test_get_all(service):
    a = _create(service)
    b = _create(service, urutan=2)
    assert sorted(p.id for p in service.get_all()) == sorted([a.id, b.id])


def test_get_by_id_missing(service):
    with pytest.raises(NotFoundError):
        service.get_by_id(uuid.uuid4())


def test_update(service):
    res = _create(service)
    pid = uuid.UUID(res.id)
    service.update(
        pid,
        UpdatePenyembelihanRequest(
            tanggal_penyembelihan=datetime(2024, 6, 18, 8, 0),
            lokasi="Lapangan",
            urutan_rencana=3,
            urutan_aktual=1,
        ),
    )
    updated = service.get_by_id(pid)
    assert updated.tanggal_penyembelihan == datetime(2024, 6, 18, 8, 0)
    assert updated.lokasi == "Lapangan"
    assert updated.urutan_rencana == 3
    assert updated.urutan_aktual == 1
    assert updated.hewan_id == res.hewan_id


def test_update_missing_leaves_store_unchanged(service):
    service.update(
        uuid.uuid4(),
        UpdatePenyembelihanRequest(tanggal_penyembelihan=datetime(2024, 6, 18), lokasi="X"),
    )
    assert service.get_all() == []


def test_delete(service):
    res = _create(service)
    service.delete(uuid.UUID(res.id))
    assert service.get_all() == []
    with pytest.raises(NotFoundError, match="ID penyembelihan not found"):
        service.delete(uuid.UUID(res.id))