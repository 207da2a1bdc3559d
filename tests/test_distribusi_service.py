import uuid
from datetime import datetime

import pytest

from kurban.database import connect
from kurban.dto.hewan import CreateDistribusiRequest
from kurban.models import DomainError, HewanKurban, JenisHewan, NotFoundError, PenerimaDaging
from kurban.repository.distribusi import DistribusiDagingRepository
from kurban.repository.hewan import HewanKurbanRepository
from kurban.repository.pekurban import PenerimaDagingRepository
from kurban.services.distribusi import DistribusiDagingService


@pytest.fixture
def conn():
    c = connect(":memory:")
    yield c
    c.close()


@pytest.fixture
def penerima_repo(conn):
    return PenerimaDagingRepository(conn)


@pytest.fixture
def hewan_repo(conn):
    return HewanKurbanRepository(conn)


@pytest.fixture
def service(conn, penerima_repo, hewan_repo):
    return DistribusiDagingService(DistribusiDagingRepository(conn), penerima_repo, hewan_repo)


def _penerima(repo, name="Lina"):
    p = PenerimaDaging(name=name, status="warga")
    repo.create(p)
    return p


def _hewan(repo):
    h = HewanKurban(
        jenis=JenisHewan.KAMBING, berat=30.0, harga=3000000.0,
        tanggal_pendaftaran=datetime(2024, 6, 1),
    )
    repo.create(h)
    return h


def _req(penerima, hewan, jumlah=3, tanggal="2024-06-17"):
    return CreateDistribusiRequest(
        penerima_id=str(penerima.id), hewan_id=str(hewan.id),
        jumlah_paket=jumlah, tanggal_distribusi=tanggal,
    )


def test_create_and_get(service, penerima_repo, hewan_repo):
    p, h = _penerima(penerima_repo), _hewan(hewan_repo)
    res = service.create(_req(p, h))
    assert res.penerima_id == str(p.id)
    assert res.hewan_id == str(h.id)
    assert res.jumlah_paket == 3
    assert res.tanggal_distribusi == datetime(2024, 6, 17)
    assert service.get_by_id(uuid.UUID(res.id)) == res
    assert service.get_all() == [res]


def test_second_distribution_to_same_penerima_rejected(service, penerima_repo, hewan_repo):
    p, h = _penerima(penerima_repo), _hewan(hewan_repo)
    service.create(_req(p, h))
    with pytest.raises(DomainError, match="Penerima already received distribution"):
        service.create(_req(p, h))


def test_bad_date(service, penerima_repo, hewan_repo):
    p, h = _penerima(penerima_repo), _hewan(hewan_repo)
    with pytest.raises(DomainError, match="Invalid date format"):
        service.create(_req(p, h, tanggal="17/06/2024"))


def test_missing_penerima(service, hewan_repo):
    h = _hewan(hewan_repo)
    ghost = PenerimaDaging(name="ghost", status="warga")
    with pytest.raises(NotFoundError, match="Penerima not found"):
        service.create(_req(ghost, h))


def test_missing_hewan(service, penerima_repo):
    p = _penerima(penerima_repo)
    ghost = HewanKurban(jenis=JenisHewan.SAPI, berat=1.0, tanggal_pendaftaran=datetime(2024, 1, 1))
    with pytest.raises(NotFoundError, match="Hewan not found"):
        service.create(_req(p, ghost))


def test_total_paket(service, penerima_repo, hewan_repo):
    assert service.get_total_distribusi_paket() == 0
    h = _hewan(hewan_repo)
    service.create(_req(_penerima(penerima_repo, "A"), h, jumlah=3))
    service.create(_req(_penerima(penerima_repo, "B"), h, jumlah=4))
    assert service.get_total_distribusi_paket() == 3 + 4


def test_penerima_belum_terdistribusi(service, penerima_repo, hewan_repo):
    h = _hewan(hewan_repo)
    served = _penerima(penerima_repo, "Served")
    waiting = _penerima(penerima_repo, "Waiting")
    service.create(_req(served, h))
    pending = service.get_penerima_belum_terdistribusi()
    assert [p.id for p in pending] == [str(waiting.id)]


def test_get_by_id_missing(service):
    with pytest.raises(NotFoundError):
        service.get_by_id(uuid.uuid4())


def test_delete(service, penerima_repo, hewan_repo):
    res = service.create(_req(_penerima(penerima_repo), _hewan(hewan_repo)))
    service.delete(uuid.UUID(res.id))
    assert service.get_all() == []
    with pytest.raises(NotFoundError):
        service.delete(uuid.UUID(res.id))