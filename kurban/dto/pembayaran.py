"""Request and response shapes for payments and fund summaries."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Optional

from kurban.models import PembayaranKurban
from kurban.payments import (
    QRIS,
    BankTransfer,
    CustomerDetails,
    MidtransChargeRequest,
    MidtransChargeResponse,
    TransactionDetails,
)


@dataclass(kw_only=True)
class CreatePaymentRequest:
    pekurban_id: uuid.UUID
    metode: str
    bank: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.pekurban_id, uuid.UUID) or self.pekurban_id.int == 0:
            raise ValueError("pekurban_id is required")
        if not self.metode:
            raise ValueError("metode is required")


@dataclass
class PaymentResponse:
    id: str
    order_id: str
    transaction_id: str
    pekurban_id: str
    metode: str
    payment_type: Optional[str]
    va_number: Optional[str]
    status: str
    fraud_status: Optional[str]
    approval_code: Optional[str]
    transaction_time: Optional[str]
    redirect_url: Optional[str]
    jumlah: float

    def to_dict(self) -> dict[str, Any]:
        """JSON form; absent optional fields are left out."""
        optional = {
            "payment_type",
            "va_number",
            "fraud_status",
            "approval_code",
            "transaction_time",
            "redirect_url",
        }
        data = {
            "id": self.id,
            "order_id": self.order_id,
            "transaction_id": self.transaction_id,
            "pekurban_id": self.pekurban_id,
            "metode": self.metode,
            "payment_type": self.payment_type,
            "va_number": self.va_number,
            "status": self.status,
            "fraud_status": self.fraud_status,
            "approval_code": self.approval_code,
            "transaction_time": self.transaction_time,
            "redirect_url": self.redirect_url,
            "jumlah": self.jumlah,
        }
        return {k: v for k, v in data.items() if not (k in optional and v is None)}


@dataclass
class RekapDanaHewanResponse:
    hewan_id: uuid.UUID
    jenis: str
    harga_target: float
    total_masuk: float
    status: str


@dataclass
class ProgressPembayaranPekurban:
    pekurban_id: uuid.UUID
    nama_pekurban: str
    jumlah_porsi: float
    total_tagihan: float
    total_bayar: float
    progress: float
    status: str


def to_payment_response(
    p: PembayaranKurban,
    jumlah: float,
    mid: Optional[MidtransChargeResponse],
) -> PaymentResponse:
    """Public view of a payment; the QR link comes from the gateway answer, if any."""
    trx_time = (
        p.transaction_time.strftime("%Y-%m-%d %H:%M:%S")
        if p.transaction_time is not None
        else None
    )
    redirect_url = mid.qr_url if mid is not None and mid.qr_url is not None else None
    return PaymentResponse(
        id=str(p.id),
        order_id=p.order_id,
        transaction_id=p.transaction_id,
        pekurban_id=str(p.pekurban_id),
        metode=p.metode,
        payment_type=p.payment_type,
        va_number=p.va_number,
        status=p.status,
        fraud_status=p.fraud_status,
        approval_code=p.approval_code,
        transaction_time=trx_time,
        redirect_url=redirect_url,
        jumlah=jumlah,
    )


def to_midtrans_charge_request(
    order_id: str,
    gross_amount: float,
    name: str,
    email: str,
    phone: str,
    req: CreatePaymentRequest,
) -> MidtransChargeRequest:
    """Build the gateway charge body for a payment request."""
    payload = MidtransChargeRequest(
        payment_type=req.metode,
        transaction_details=TransactionDetails(order_id=order_id, gross_amount=gross_amount),
        customer_details=CustomerDetails(first_name=name, email=email, phone=phone),
    )
    if req.metode == "bank_transfer":
        payload.bank_transfer = BankTransfer(bank=req.bank)
    if req.metode == "qris":
        payload.qr = QRIS()
    return payload