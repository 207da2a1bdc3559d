import uuid
from datetime import datetime, timedelta

import pytest

from kurban.database import connect
from kurban.models import PembayaranKurban
from kurban.repository.pembayaran import PembayaranKurbanRepository


@pytest.fixture
def conn():
    connection = connect(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def repo(conn):
    return PembayaranKurbanRepository(conn)


def _add_hewan(conn, jenis, harga, registered):
    hewan_id = uuid.uuid4()
    now = datetime.now().isoformat()
    conn.execute(
        "INSERT INTO hewan_kurban (id, jenis, berat, harga, is_private, "
        "tanggal_pendaftaran, created_at, updated_at) VALUES (?, ?, ?, ?, 0, ?, ?, ?)",
        (str(hewan_id), jenis, 100.0, harga, registered.isoformat(), now, now),
    )
    conn.commit()
    return hewan_id


def _add_pekurban(conn, name, created):
    pekurban_id = uuid.uuid4()
    conn.execute(
        "INSERT INTO pekurban (id, user_id, name, phone, email, alamat, created_at, updated_at) "
        "VALUES (?, NULL, ?, NULL, NULL, NULL, ?, ?)",
        (str(pekurban_id), name, created.isoformat(), created.isoformat()),
    )
    conn.commit()
    return pekurban_id


def _add_share(conn, pekurban_id, hewan_id, porsi):
    conn.execute(
        "INSERT INTO pekurban_hewan (pekurban_id, hewan_id, porsi) VALUES (?, ?, ?)",
        (str(pekurban_id), str(hewan_id), porsi),
    )
    conn.commit()


def _payment(pekurban_id, status="settlement", **overrides):
    values = dict(
        order_id=f"ORDER-{uuid.uuid4().hex[:8]}",
        transaction_id=str(uuid.uuid4()),
        pekurban_id=pekurban_id,
        metode="bank_transfer",
        status=status,
        jumlah=1000.0,
    )
    values.update(overrides)
    return PembayaranKurban(**values)


def test_create_and_find_by_id_round_trip(repo):
    p = _payment(
        uuid.uuid4(),
        payment_type="bank_transfer",
        va_number="va-placeholder",
        fraud_status="accept",
        approval_code="code",
        transaction_time=datetime(2024, 6, 1, 10, 30, 0),
    )
    repo.create(p)
    assert repo.find_by_id(p.id) == p


def test_round_trip_without_optional_fields(repo):
    p = _payment(uuid.uuid4(), status="pending")
    repo.create(p)
    found = repo.find_by_id(p.id)
    assert found.transaction_time is None
    assert found.va_number is None
    assert found.payment_type is None
    assert found.status == "pending"


def test_find_by_id_missing(repo):
    assert repo.find_by_id(uuid.uuid4()) is None


def test_find_by_order_id(repo):
    p = _payment(uuid.uuid4())
    repo.create(p)
    found = repo.find_by_order_id(p.order_id)
    assert found.id == p.id
    assert repo.find_by_order_id("ORDER-missing") is None


def test_get_all(repo):
    payments = [_payment(uuid.uuid4()) for _ in range(3)]
    for p in payments:
        repo.create(p)
    assert {p.id for p in repo.get_all()} == {p.id for p in payments}


def test_total_per_hewan_without_shares_is_zero(conn, repo):
    hewan_id = _add_hewan(conn, "sapi", 21000000.0, datetime(2024, 6, 1))
    rows = repo.get_total_pembayaran_per_hewan()
    assert len(rows) == 1
    assert rows[0].hewan_id == hewan_id
    assert rows[0].jenis == "sapi"
    assert rows[0].harga_target == 21000000.0
    assert rows[0].total_masuk == 0.0


def test_total_per_hewan_counts_full_share_with_settled_payment(conn, repo):
    harga = 3000000.0
    hewan_id = _add_hewan(conn, "kambing", harga, datetime(2024, 6, 1))
    pekurban_id = _add_pekurban(conn, "Budi", datetime(2024, 5, 1))
    _add_share(conn, pekurban_id, hewan_id, 1.0)
    repo.create(_payment(pekurban_id, status="settlement"))
    rows = repo.get_total_pembayaran_per_hewan()
    assert rows[0].total_masuk == harga
    assert rows[0].harga_target == harga


def test_total_per_hewan_ordered_by_registration_date(conn, repo):
    later = _add_hewan(conn, "sapi", 1.0, datetime(2024, 6, 10))
    earlier = _add_hewan(conn, "domba", 1.0, datetime(2024, 6, 1))
    rows = repo.get_total_pembayaran_per_hewan()
    assert [r.hewan_id for r in rows] == [earlier, later]


def test_progress_with_settled_payment(conn, repo):
    harga = 2500000.0
    hewan_id = _add_hewan(conn, "domba", harga, datetime(2024, 6, 1))
    pekurban_id = _add_pekurban(conn, "Siti", datetime(2024, 5, 1))
    _add_share(conn, pekurban_id, hewan_id, 1.0)
    repo.create(_payment(pekurban_id, status="capture"))
    rows = repo.get_progress_pembayaran_pekurban()
    assert len(rows) == 1
    row = rows[0]
    assert row.pekurban_id == pekurban_id
    assert row.nama_pekurban == "Siti"
    assert row.porsi_total == 1.0
    assert row.total_tagihan == harga
    assert row.total_bayar == harga


def test_progress_ignores_pending_payment(conn, repo):
    harga = 2500000.0
    hewan_id = _add_hewan(conn, "domba", harga, datetime(2024, 6, 1))
    pekurban_id = _add_pekurban(conn, "Siti", datetime(2024, 5, 1))
    _add_share(conn, pekurban_id, hewan_id, 1.0)
    repo.create(_payment(pekurban_id, status="pending"))
    row = repo.get_progress_pembayaran_pekurban()[0]
    assert row.total_tagihan == harga
    assert row.total_bayar == 0.0


def test_progress_unnamed_pekurban_without_shares(conn, repo):
    pekurban_id = _add_pekurban(conn, None, datetime(2024, 5, 1))
    row = repo.get_progress_pembayaran_pekurban()[0]
    assert row.pekurban_id == pekurban_id
    assert row.nama_pekurban == "Tanpa Nama"
    assert row.porsi_total == 0.0
    assert row.total_tagihan == 0.0
    assert row.total_bayar == 0.0


def test_progress_ordered_by_creation(conn, repo):
    base = datetime(2024, 5, 1)
    second = _add_pekurban(conn, "B", base + timedelta(days=1))
    first = _add_pekurban(conn, "A", base)
    rows = repo.get_progress_pembayaran_pekurban()
    assert [r.pekurban_id for r in rows] == [first, second]