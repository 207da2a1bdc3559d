"""Client for the Midtrans charge API."""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

SANDBOX_BASE_URL = "https://api.sandbox.midtrans.com"
QR_ACTION_NAME = "generate-qr-code"


@dataclass
class TransactionDetails:
    order_id: str
    gross_amount: float


@dataclass
class CustomerDetails:
    first_name: str
    email: str
    phone: str


@dataclass
class BankTransfer:
    bank: str


@dataclass
class QRIS:
    """Marker for a QRIS payment; carries no options."""


@dataclass
class Action:
    name: str
    url: str


@dataclass
class VANumber:
    bank: str
    va_number: str


@dataclass
class MidtransChargeRequest:
    """Body of a charge call."""

    payment_type: str
    transaction_details: TransactionDetails
    customer_details: CustomerDetails
    bank_transfer: Optional[BankTransfer] = None
    qr: Optional[QRIS] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body sent to the gateway."""
        body: dict[str, Any] = {
            "payment_type": self.payment_type,
            "transaction_details": {
                "order_id": self.transaction_details.order_id,
                "gross_amount": self.transaction_details.gross_amount,
            },
            "customer_details": {
                "first_name": self.customer_details.first_name,
                "email": self.customer_details.email,
                "phone": self.customer_details.phone,
            },
        }
        if self.bank_transfer is not None:
            body["bank_transfer"] = {"bank": self.bank_transfer.bank}
        if self.qr is not None:
            body["qris"] = {}
        return body


@dataclass
class MidtransChargeResponse:
    """Answer to a charge call."""

    status_code: str = ""
    status_message: str = ""
    transaction_id: str = ""
    order_id: str = ""
    gross_amount: str = ""
    payment_type: str = ""
    transaction_time: str = ""
    transaction_status: str = ""
    fraud_status: Optional[str] = None
    approval_code: Optional[str] = None
    va_numbers: list[VANumber] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    qr_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MidtransChargeResponse":
        """Build a response from the decoded JSON body."""
        return cls(
            status_code=data.get("status_code", ""),
            status_message=data.get("status_message", ""),
            transaction_id=data.get("transaction_id", ""),
            order_id=data.get("order_id", ""),
            gross_amount=data.get("gross_amount", ""),
            payment_type=data.get("payment_type", ""),
            transaction_time=data.get("transaction_time", ""),
            transaction_status=data.get("transaction_status", ""),
            fraud_status=data.get("fraud_status"),
            approval_code=data.get("approval_code"),
            va_numbers=[
                VANumber(bank=v.get("bank", ""), va_number=v.get("va_number", ""))
                for v in data.get("va_numbers") or []
            ],
            actions=[
                Action(name=a.get("name", ""), url=a.get("url", ""))
                for a in data.get("actions") or []
            ],
            qr_url=data.get("qr_code_url"),
        )


class MidtransError(Exception):
    """The gateway rejected a charge."""

    def __init__(self, status_message: str):
        super().__init__(f"Midtrans error: {status_message}")
        self.status_message = status_message


class MidtransService:
    """Sends charge requests to the gateway with server-key authentication."""

    def __init__(self, server_key: str, base_url: str = SANDBOX_BASE_URL):
        self.server_key = server_key
        self.base_url = base_url.rstrip("/")
        self._session = requests.Session()

    @classmethod
    def from_env(cls) -> "MidtransService":
        """Build a service from MIDTRANS_SERVER_KEY; the key is required."""
        key = os.environ.get("MIDTRANS_SERVER_KEY", "")
        if not key:
            raise RuntimeError("MIDTRANS_SERVER_KEY is required")
        return cls(key)

    def charge(self, request: MidtransChargeRequest) -> MidtransChargeResponse:
        """Create a transaction and return the gateway's answer."""
        credentials = base64.b64encode(f"{self.server_key}:".encode()).decode()
        resp = self._session.post(
            f"{self.base_url}/v2/charge",
            json=request.to_dict(),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Authorization": f"Basic {credentials}",
            },
        )

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.status_code >= 400:
            message = payload.get("status_message", "") if isinstance(payload, dict) else ""
            raise MidtransError(message)
        if not isinstance(payload, dict):
            raise MidtransError("invalid response body")

        result = MidtransChargeResponse.from_dict(payload)
        qr_url = next((a.url for a in result.actions if a.name == QR_ACTION_NAME), None)
        if qr_url is not None:
            result.qr_url = qr_url
        return result