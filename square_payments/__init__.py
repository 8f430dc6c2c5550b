"""Square payment method handler for authorize, settle and refund."""

from square_payments.integrations.payment_handlers.base import (
    CreatePaymentResult,
    CreateRefundResult,
    PaymentHandlerRegistry,
    PaymentState,
    RefundState,
    SettlePaymentResult,
)
from square_payments.integrations.square import (
    SquareConfigurationError,
    SquarePaymentHandler,
    SquareTimeoutError,
    TimedOutCall,
)
from square_payments.plugin import SquarePlugin
from square_payments.schemas import Order, PaymentRecord, RefundInput, SquarePluginOptions

__all__ = [
    "CreatePaymentResult",
    "CreateRefundResult",
    "Order",
    "PaymentHandlerRegistry",
    "PaymentRecord",
    "PaymentState",
    "RefundInput",
    "RefundState",
    "SettlePaymentResult",
    "SquareConfigurationError",
    "SquarePaymentHandler",
    "SquarePlugin",
    "SquarePluginOptions",
    "SquareTimeoutError",
    "TimedOutCall",
]
