from .host import Order, PaymentRecord, RefundInput
from .options import SquareEnvironmentName, SquarePluginOptions

__all__ = [
    "Order",
    "PaymentRecord",
    "RefundInput",
    "SquareEnvironmentName",
    "SquarePluginOptions",
]
