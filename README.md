# kurban

A library for running a qurban (kurban) drive: registering participants
(*pekurban*), the animals they contribute to (*hewan kurban*), shared
portions (*patungan*), the slaughter schedule (*penyembelihan*), meat
recipients (*penerima daging*), distribution of meat packages
(*distribusi daging*) and payments through a Midtrans-style charge API.

Data is kept in SQLite through the standard library's `sqlite3`.

## Installing

```
pip install .
pip install ".[test]"   # with pytest and responses for the test suite
```

## Layout

| Module | What it holds |
| --- | --- |
| `kurban.models` | Domain records (`User`, `Pekurban`, `HewanKurban`, `PekurbanHewan`, `Penyembelihan`, `PenerimaDaging`, `DistribusiDaging`, `PembayaranKurban`, `TotalPembayaranPerHewan`, `ProgressPembayaran`), the `JenisHewan` enum and the `DomainError` / `NotFoundError` exceptions |
| `kurban.database` | `connect(path)` and `init_schema(conn)` |
| `kurban.security` | `generate_password_hash`, `verify_password_hash`, `generate_order_id` |
| `kurban.payments` | Charge request/response records, `MidtransService`, `MidtransError` |
| `kurban.dto.people` | Requests and responses for users, pekurban and recipients |
| `kurban.dto.hewan` | Requests and responses for animals, portions, slaughters and distributions |
| `kurban.dto.pembayaran` | Requests and responses for payments and fund summaries |
| `kurban.repository.users` | `UserRepository` and `seed_initial_admin` |
| `kurban.repository.pekurban` | `PekurbanRepository`, `PenerimaDagingRepository` |
| `kurban.repository.hewan` | `HewanKurbanRepository`, `PenyembelihanRepository`, `PekurbanHewanRepository` |
| `kurban.repository.distribusi` | `DistribusiDagingRepository` |
| `kurban.repository.pembayaran` | `PembayaranKurbanRepository` |
| `kurban.services.pekurban` | `PekurbanService`, `PenerimaDagingService` |
| `kurban.services.hewan` | `HewanKurbanService`, `PekurbanHewanService` |
| `kurban.services.penyembelihan` | `PenyembelihanService` |
| `kurban.services.distribusi` | `DistribusiDagingService` |
| `kurban.services.pembayaran` | `PembayaranKurbanService` |

## Getting started

`connect(path)` opens the database, makes rows addressable by column name
and creates any missing tables.

```python
from kurban.database import connect
from kurban.repository.users import UserRepository, seed_initial_admin

conn = connect("kurban.db")

users = UserRepository(conn)
password = "password"
seed_initial_admin(users, "admin@example.com", password)

admin = users.find_by_email_or_username("admin@example.com")
print(admin.username, admin.role)   # superadmin admin
```

`seed_initial_admin` returns the new `User`, or `None` when an account with
that e-mail already exists.

## Sharing an animal

```python
from kurban.database import connect
from kurban.dto.hewan import CreateHewanKurbanRequest, CreatePekurbanHewanRequest
from kurban.dto.people import CreatePekurbanRequest
from kurban.repository.hewan import (
    HewanKurbanRepository,
    PekurbanHewanRepository,
    PenyembelihanRepository,
)
from kurban.repository.pekurban import PekurbanRepository
from kurban.repository.users import UserRepository
from kurban.services.hewan import HewanKurbanService, PekurbanHewanService
from kurban.services.pekurban import PekurbanService

conn = connect(":memory:")
hewan_repo = HewanKurbanRepository(conn)

hewan = HewanKurbanService(hewan_repo, PenyembelihanRepository(conn)).create(
    CreateHewanKurbanRequest(
        jenis="sapi", berat=300, tgl_pendaftaran="2025-06-01", harga=21000000
    )
)
pekurban = PekurbanService(PekurbanRepository(conn), UserRepository(conn)).create(
    CreatePekurbanRequest(name="Budi", phone="unknown", alamat="Jalan Contoh")
)

shares = PekurbanHewanService(PekurbanHewanRepository(conn), hewan_repo)
shares.create(
    CreatePekurbanHewanRequest(pekurban_id=pekurban.id, hewan_id=hewan.id, jumlah_orang=3)
)
print(shares.get_by_hewan_id(hewan_repo.get_all()[0].id)[0].porsi)   # 3/7
```

## Passwords and order ids

```python
from kurban.security import (
    generate_order_id,
    generate_password_hash,
    verify_password_hash,
)

password = "password"
encoded = generate_password_hash(password)   # "argon2id$v=19$<salt>$<hash>"
assert verify_password_hash(encoded, password)

print(generate_order_id())                   # "ORDER-YYYYMMDD-xxxxxxxx"
```

`verify_password_hash` raises `ValueError` for a hash that is not in that
four-part form or whose parts are not valid base64.

## Rules the services enforce

- A *sapi* (cow) may be shared by up to 7 people; each person's portion is
  `jumlah_orang / 7`. A *kambing* or *domba* belongs to exactly one person.
- A private animal has a single owner holding the full portion, and is
  registered with a price of 0; any other animal needs a positive price.
- The portions of one animal never add up to more than 1.0.
- A recipient receives at most one distribution.
- A payment charges the sum of `porsi * harga` over every animal the
  participant shares, rounded to two decimals.
- Fund summaries per animal are reported as `belum lunas`, `lunas` or
  `melebihi target`; progress per participant as `belum bayar`,
  `sebagian`, `lunas` or `lebih`.
- An animal counts as slaughtered (`status_penyembelihan == "sudah"`) once
  a slaughter is recorded for it.

Request records check their own fields when built and raise `ValueError`
for a missing or out-of-range value. Services raise
`kurban.models.DomainError`, or its subclass `NotFoundError` when a record
does not exist. Repository `delete` methods raise `NotFoundError` when no
row was removed.

## Payments

`MidtransService(server_key, base_url)` posts to `<base_url>/v2/charge`
with Basic authentication built from the server key; `base_url` defaults to
the sandbox endpoint. `MidtransService.from_env()` reads the key from the
`MIDTRANS_SERVER_KEY` environment variable and raises `RuntimeError` if it
is missing. `charge(request)` posts a `MidtransChargeRequest` and returns a
`MidtransChargeResponse`, taking the QR link from a `generate-qr-code`
action when there is one; it raises `MidtransError` when the API answers
with an error status or a body that is not a JSON object.

## What this package does not do

It is a library only. It offers no HTTP API, no command-line program, no
login or access-token handling, no role checks and no sending of
verification or password-reset e-mails. Applications that need these build
them on top of the services.