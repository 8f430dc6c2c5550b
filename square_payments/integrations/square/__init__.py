"""
Square integration

Client accessor, call deadline, idempotency keys and the payment method
handler for the Square Payments API.
"""

from .client import SquareClientProvider, build_square_client
from .errors import SquareAPIError, SquareConfigurationError, SquareTimeoutError
from .handler import HANDLER_CODE, SquarePaymentHandler, TimedOutCall
from .timeouts import DEFAULT_TIMEOUT_SECONDS, with_timeout

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "HANDLER_CODE",
    "SquareAPIError",
    "SquareClientProvider",
    "SquareConfigurationError",
    "SquarePaymentHandler",
    "SquareTimeoutError",
    "TimedOutCall",
    "build_square_client",
    "with_timeout",
]
