"""Builders for stand-in Square SDK response objects."""

from typing import Any
from unittest.mock import Mock


def make_square_payment(payment_id: str = "pay_1", status: str = "AUTHORIZED", **extra: Any) -> Mock:
    payment = Mock()
    payment.id = payment_id
    payment.status = status
    payment.receipt_url = extra.get("receipt_url")
    payment.order_id = extra.get("order_id")
    return payment


def make_square_refund(refund_id: str = "ref_1", status: str = "PENDING") -> Mock:
    refund = Mock()
    refund.id = refund_id
    refund.status = status
    return refund


def make_response(**fields: Any) -> Mock:
    response = Mock()
    response.payment = fields.get("payment")
    response.refund = fields.get("refund")
    return response
