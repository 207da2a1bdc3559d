"""SQLite storage for the kurban records."""

from __future__ import annotations

import os
import sqlite3
from typing import Union

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'user' CHECK (role IN ('admin', 'panitia', 'user')),
    is_verified INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS pekurban (
    id TEXT PRIMARY KEY,
    user_id TEXT,
    name TEXT,
    phone TEXT,
    email TEXT,
    alamat TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS hewan_kurban (
    id TEXT PRIMARY KEY,
    jenis TEXT NOT NULL CHECK (jenis IN ('sapi', 'kambing', 'domba')),
    berat REAL NOT NULL,
    harga REAL NOT NULL DEFAULT 0,
    is_private INTEGER NOT NULL DEFAULT 0,
    tanggal_pendaftaran TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS pekurban_hewan (
    pekurban_id TEXT NOT NULL,
    hewan_id TEXT NOT NULL,
    porsi REAL NOT NULL,
    PRIMARY KEY (pekurban_id, hewan_id)
);

CREATE TABLE IF NOT EXISTS penyembelihan (
    id TEXT PRIMARY KEY,
    hewan_id TEXT NOT NULL,
    tanggal_penyembelihan TEXT NOT NULL,
    lokasi TEXT NOT NULL,
    urutan_rencana INTEGER NOT NULL DEFAULT 0,
    urutan_aktual INTEGER,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS penerima_daging (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    alamat TEXT,
    phone TEXT,
    status TEXT NOT NULL CHECK (status IN ('warga', 'dhuafa', 'panitia', 'pekurban')),
    pekurban_id TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS distribusi_daging (
    id TEXT PRIMARY KEY,
    penerima_id TEXT NOT NULL,
    hewan_id TEXT NOT NULL,
    jumlah_paket INTEGER NOT NULL,
    tanggal_distribusi TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS pembayaran_kurban (
    id TEXT PRIMARY KEY,
    order_id TEXT NOT NULL UNIQUE,
    transaction_id TEXT NOT NULL,
    pekurban_id TEXT NOT NULL,
    metode TEXT NOT NULL,
    payment_type TEXT,
    va_number TEXT,
    status TEXT NOT NULL,
    fraud_status TEXT,
    approval_code TEXT,
    transaction_time TEXT,
    tanggal_pembayaran TEXT NOT NULL,
    jumlah REAL NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def init_schema(conn: sqlite3.Connection) -> None:
    """Create every table that does not exist yet."""
    conn.executescript(SCHEMA)
    conn.commit()


def connect(path: Union[str, "os.PathLike[str]"]) -> sqlite3.Connection:
    """Open the database at path, with rows addressable by column name, and ensure the schema."""
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    init_schema(conn)
    return conn