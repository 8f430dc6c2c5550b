"""
Payment method handler contract

Result shapes and the handler registry shared by processor integrations.
"""

from .base import (
    CreatePaymentResult,
    CreateRefundResult,
    LocalizedString,
    PaymentHandlerError,
    PaymentHandlerRegistry,
    PaymentMethodHandler,
    PaymentState,
    RefundState,
    SettlePaymentResult,
)

__all__ = [
    "CreatePaymentResult",
    "CreateRefundResult",
    "LocalizedString",
    "PaymentHandlerError",
    "PaymentHandlerRegistry",
    "PaymentMethodHandler",
    "PaymentState",
    "RefundState",
    "SettlePaymentResult",
]
