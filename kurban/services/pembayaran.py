"""Business rules for payments and fund summaries."""

from __future__ import annotations

import math
import uuid
from datetime import datetime
from typing import Optional

from kurban.dto.pembayaran import (
    CreatePaymentRequest,
    PaymentResponse,
    ProgressPembayaranPekurban,
    RekapDanaHewanResponse,
    to_midtrans_charge_request,
    to_payment_response,
)
from kurban.models import DomainError, NotFoundError, PembayaranKurban
from kurban.payments import MidtransService
from kurban.repository.hewan import HewanKurbanRepository, PekurbanHewanRepository
from kurban.repository.pekurban import PekurbanRepository
from kurban.repository.pembayaran import PembayaranKurbanRepository
from kurban.security import generate_order_id

_TRANSACTION_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _round_cents(value: float) -> float:
    """Round to two decimals, halves away from zero."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5), value) / 100


def _parse_transaction_time(text: str) -> Optional[datetime]:
    try:
        return datetime.strptime(text, _TRANSACTION_TIME_FORMAT)
    except (ValueError, TypeError):
        return None


def _rekap_status(total_masuk: float, harga_target: float) -> str:
    if total_masuk > harga_target:
        return "melebihi target"
    if total_masuk == harga_target:
        return "lunas"
    return "belum lunas"


def _progress_status(total_bayar: float, total_tagihan: float) -> str:
    if total_tagihan <= 0 or total_bayar == 0:
        return "belum bayar"
    if total_bayar < total_tagihan:
        return "sebagian"
    if total_bayar == total_tagihan:
        return "lunas"
    return "lebih"


class PembayaranKurbanService:
    """Charges pekurban through the gateway and summarises collected funds."""

    def __init__(
        self,
        repo: PembayaranKurbanRepository,
        midtrans_service: MidtransService,
        pekurban_hewan_repo: PekurbanHewanRepository,
        hewan_repo: HewanKurbanRepository,
        pekurban_repo: PekurbanRepository,
    ):
        self.repo = repo
        self.midtrans_service = midtrans_service
        self.pekurban_hewan_repo = pekurban_hewan_repo
        self.hewan_repo = hewan_repo
        self.pekurban_repo = pekurban_repo

    def create(self, req: CreatePaymentRequest) -> PaymentResponse:
        """Bill a pekurban for all their shares and record the gateway's answer."""
        order_id = generate_order_id()

        pekurban = self.pekurban_repo.find_by_id(req.pekurban_id)
        if pekurban is None:
            raise NotFoundError("pekurban not found")
        if pekurban.name is None or pekurban.email is None or pekurban.phone is None:
            raise DomainError("data pekurban tidak lengkap (nama, email, atau phone kosong)")

        shares = self.pekurban_hewan_repo.get_by_pekurban_id(req.pekurban_id)
        if not shares:
            raise DomainError("pekurban tidak memiliki relasi dengan hewan kurban")

        total = 0.0
        for share in shares:
            hewan = self.hewan_repo.get_by_id(share.hewan_id)
            if hewan is None:
                raise DomainError("data hewan kurban not found")
            total = _round_cents(total + share.porsi * hewan.harga)

        payload = to_midtrans_charge_request(
            order_id, total, pekurban.name, pekurban.email, pekurban.phone, req
        )
        mid = self.midtrans_service.charge(payload)

        va_number = mid.va_numbers[0].va_number if mid.va_numbers else None
        now = datetime.now()
        payment = PembayaranKurban(
            order_id=order_id,
            transaction_id=mid.transaction_id,
            pekurban_id=req.pekurban_id,
            metode=req.metode,
            payment_type=mid.payment_type,
            va_number=va_number,
            status=mid.transaction_status,
            fraud_status=mid.fraud_status,
            approval_code=mid.approval_code,
            transaction_time=_parse_transaction_time(mid.transaction_time),
            jumlah=total,
            tanggal_pembayaran=now,
            created_at=now,
            updated_at=now,
        )
        self.repo.create(payment)
        return to_payment_response(payment, total, mid)

    def get_by_id(self, payment_id: uuid.UUID) -> PaymentResponse:
        """Return one payment; raise NotFoundError if it does not exist."""
        p = self.repo.find_by_id(payment_id)
        if p is None:
            raise NotFoundError("pembayaran not found")
        return to_payment_response(p, p.jumlah, None)

    def get_by_order_id(self, order_id: str) -> PaymentResponse:
        """Return the payment for an order; raise NotFoundError if there is none."""
        p = self.repo.find_by_order_id(order_id)
        if p is None:
            raise NotFoundError("order ID not found")
        return to_payment_response(p, p.jumlah, None)

    def get_all(self) -> list[PaymentResponse]:
        return [to_payment_response(p, p.jumlah, None) for p in self.repo.get_all()]

    def get_rekap_dana_per_hewan(self) -> list[RekapDanaHewanResponse]:
        """Per animal, collected funds against its target with a status."""
        return [
            RekapDanaHewanResponse(
                hewan_id=h.hewan_id,
                jenis=h.jenis,
                harga_target=h.harga_target,
                total_masuk=h.total_masuk,
                status=_rekap_status(h.total_masuk, h.harga_target),
            )
            for h in self.repo.get_total_pembayaran_per_hewan()
        ]

    def get_progress_pembayaran(self) -> list[ProgressPembayaranPekurban]:
        """Per pekurban, the paid fraction of their bill with a status."""
        return [
            ProgressPembayaranPekurban(
                pekurban_id=d.pekurban_id,
                nama_pekurban=d.nama_pekurban,
                jumlah_porsi=d.porsi_total,
                total_tagihan=d.total_tagihan,
                total_bayar=d.total_bayar,
                progress=d.total_bayar / d.total_tagihan if d.total_tagihan > 0 else 0.0,
                status=_progress_status(d.total_bayar, d.total_tagihan),
            )
            for d in self.repo.get_progress_pembayaran_pekurban()
        ]