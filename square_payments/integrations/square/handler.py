"""
Square Payment Method Handler

Relays the host platform's payment lifecycle (authorize, settle, refund) to
the Square Payments and Refunds APIs and maps each response back to a
handler result. Every call is attempted once; nothing is retried.
"""

import asyncio
import inspect
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from square_payments.core.logging import get_logger
from square_payments.integrations.payment_handlers.base import (
    CreatePaymentResult,
    CreateRefundResult,
    LocalizedString,
    PaymentMethodHandler,
    SettlePaymentResult,
)
from square_payments.schemas.host import Order, PaymentRecord, RefundInput

from .client import SquareClientProvider
from .errors import SquareTimeoutError, describe_error
from .idempotency import payment_key, refund_key
from .timeouts import DEFAULT_TIMEOUT_SECONDS, with_timeout

logger = get_logger(__name__)

HANDLER_CODE = "square-payment"

SQUARE_STATUS_COMPLETED = "COMPLETED"
SQUARE_STATUS_PENDING = "PENDING"
REFUND_SUCCESS_STATUSES = frozenset({SQUARE_STATUS_COMPLETED, SQUARE_STATUS_PENDING})

DEFAULT_REFUND_REASON = "Customer refund request"


@dataclass(frozen=True)
class TimedOutCall:
    """A Square call the handler stopped waiting for."""
    operation: str
    order_code: str
    idempotency_key: Optional[str]
    task: Optional[asyncio.Task]


TimeoutHook = Callable[[TimedOutCall], Union[None, Awaitable[None]]]


def _elapsed_ms(started: float) -> int:
    return round((time.perf_counter() - started) * 1000)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SquarePaymentHandler(PaymentMethodHandler):
    """Square payment method handler."""

    code = HANDLER_CODE
    description = (LocalizedString(language_code="en", value="Square Payment"),)

    def __init__(
        self,
        client_provider: SquareClientProvider,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        on_timeout: Optional[TimeoutHook] = None,
    ):
        """
        Initialize the handler.

        Args:
            client_provider: Source of the Square client and credentials
            timeout: Deadline in seconds for each Square call
            on_timeout: Called with a TimedOutCall whenever a call is
                abandoned, so the caller can reconcile it later
        """
        self.client_provider = client_provider
        self.timeout = timeout
        self.on_timeout = on_timeout

    async def create_payment(
        self,
        order: Order,
        amount: int,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> CreatePaymentResult:
        """
        Authorize a payment with Square without capturing it.

        The storefront Web Payments SDK supplies a one-time token as
        ``sourceId`` (or ``token``) in the call metadata.
        """
        started = time.perf_counter()
        client, options = self.client_provider.acquire()

        metadata = metadata or {}
        source_id = metadata.get("sourceId") or metadata.get("token")
        if not source_id:
            logger.warning(
                "square.payment.declined",
                order_code=order.code,
                reason="missing_source_id",
                elapsed_ms=_elapsed_ms(started),
            )
            return CreatePaymentResult.declined(
                amount, "Missing Square payment token (sourceId) from frontend"
            )

        idempotency_key = payment_key(order.code, source_id)
        try:
            response = await with_timeout(
                client.payments.create(
                    source_id=source_id,
                    idempotency_key=idempotency_key,
                    amount_money={"amount": amount, "currency": order.currency_code},
                    location_id=options.location_id,
                    reference_id=order.code,
                    note=f"Order {order.code}",
                    # Authorize only; capture happens in settle_payment.
                    autocomplete=False,
                ),
                self.timeout,
                "Square payment creation timeout",
            )
        except Exception as error:
            message = describe_error(error)
            await self._handle_failure(error, "create_payment", order.code, idempotency_key)
            logger.error(
                "square.payment.declined",
                order_code=order.code,
                error=message,
                elapsed_ms=_elapsed_ms(started),
            )
            return CreatePaymentResult.declined(amount, message, {"error": message})

        payment = getattr(response, "payment", None)
        if payment is None:
            logger.error(
                "square.payment.declined",
                order_code=order.code,
                reason="no_payment_object",
                elapsed_ms=_elapsed_ms(started),
            )
            return CreatePaymentResult.declined(
                amount, "Square payment creation failed - no payment object returned"
            )

        logger.info(
            "square.payment.authorized",
            order_code=order.code,
            amount=amount,
            transaction_id=payment.id,
            elapsed_ms=_elapsed_ms(started),
        )
        return CreatePaymentResult.authorized(
            amount,
            payment.id or "",
            {
                "squarePaymentId": payment.id,
                "status": payment.status,
                "receiptUrl": getattr(payment, "receipt_url", None),
                "orderId": getattr(payment, "order_id", None),
            },
        )

    async def settle_payment(self, order: Order, payment: PaymentRecord) -> SettlePaymentResult:
        """Capture a payment previously authorized by create_payment."""
        started = time.perf_counter()
        client, _ = self.client_provider.acquire()

        square_payment_id = payment.transaction_id
        if not square_payment_id:
            logger.warning(
                "square.payment.settle_failed",
                order_code=order.code,
                reason="missing_transaction_id",
                elapsed_ms=_elapsed_ms(started),
            )
            return SettlePaymentResult.failed("Missing Square payment ID - cannot settle payment")

        try:
            response = await with_timeout(
                client.payments.complete(payment_id=square_payment_id),
                self.timeout,
                "Square payment settlement timeout",
            )
        except Exception as error:
            message = describe_error(error)
            await self._handle_failure(error, "settle_payment", order.code, None)
            logger.error(
                "square.payment.settle_failed",
                order_code=order.code,
                transaction_id=square_payment_id,
                error=message,
                elapsed_ms=_elapsed_ms(started),
            )
            return SettlePaymentResult.failed(message, {"error": message})

        completed = getattr(response, "payment", None)
        status = getattr(completed, "status", None)
        if status != SQUARE_STATUS_COMPLETED:
            logger.error(
                "square.payment.settle_failed",
                order_code=order.code,
                transaction_id=square_payment_id,
                status=status,
                elapsed_ms=_elapsed_ms(started),
            )
            return SettlePaymentResult.failed(
                f"Square payment not completed. Status: {status}", {"status": status}
            )

        logger.info(
            "square.payment.settled",
            order_code=order.code,
            transaction_id=completed.id,
            elapsed_ms=_elapsed_ms(started),
        )
        return SettlePaymentResult.settled(
            {
                "squarePaymentId": completed.id,
                "status": status,
                "completedAt": _utc_now_iso(),
            }
        )

    async def create_refund(
        self,
        refund: RefundInput,
        amount: int,
        order: Order,
        payment: PaymentRecord,
    ) -> CreateRefundResult:
        """Refund all or part of a Square payment."""
        started = time.perf_counter()
        client, _ = self.client_provider.acquire()

        square_payment_id = payment.transaction_id
        if not square_payment_id:
            logger.warning(
                "square.refund.failed",
                order_code=order.code,
                reason="missing_transaction_id",
                elapsed_ms=_elapsed_ms(started),
            )
            return CreateRefundResult.failed("Missing Square payment ID")

        idempotency_key = refund_key(order.code, payment.id, refund_id=refund.id)
        try:
            response = await with_timeout(
                client.refunds.refund_payment(
                    idempotency_key=idempotency_key,
                    payment_id=square_payment_id,
                    amount_money={"amount": amount, "currency": order.currency_code},
                    reason=refund.reason or DEFAULT_REFUND_REASON,
                ),
                self.timeout,
                "Square refund timeout",
            )
        except Exception as error:
            message = describe_error(error)
            await self._handle_failure(error, "create_refund", order.code, idempotency_key)
            logger.error(
                "square.refund.failed",
                order_code=order.code,
                transaction_id=square_payment_id,
                error=message,
                elapsed_ms=_elapsed_ms(started),
            )
            return CreateRefundResult.failed(message)

        square_refund = getattr(response, "refund", None)
        status = getattr(square_refund, "status", None)
        if status not in REFUND_SUCCESS_STATUSES:
            logger.error(
                "square.refund.failed",
                order_code=order.code,
                transaction_id=square_payment_id,
                status=status,
                elapsed_ms=_elapsed_ms(started),
            )
            return CreateRefundResult.failed(f"Refund failed with status: {status}", {"status": status})

        logger.info(
            "square.refund.settled",
            order_code=order.code,
            refund_id=square_refund.id,
            amount=amount,
            status=status,
            elapsed_ms=_elapsed_ms(started),
        )
        return CreateRefundResult.settled(
            square_refund.id or "",
            {
                "squareRefundId": square_refund.id,
                "status": status,
                "refundedAt": _utc_now_iso(),
            },
        )

    async def _handle_failure(
        self,
        error: Exception,
        operation: str,
        order_code: str,
        idempotency_key: Optional[str],
    ) -> None:
        if not isinstance(error, SquareTimeoutError):
            return

        if error.pending is not None:
            error.pending.add_done_callback(
                lambda task: _log_late_outcome(task, operation, order_code)
            )

        if self.on_timeout is None:
            return
        call = TimedOutCall(
            operation=operation,
            order_code=order_code,
            idempotency_key=idempotency_key,
            task=error.pending,
        )
        try:
            outcome = self.on_timeout(call)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            logger.exception("square.timeout_hook.failed", operation=operation, order_code=order_code)


def _log_late_outcome(task: asyncio.Task, operation: str, order_code: str) -> None:
    if task.cancelled():
        logger.warning("square.call.cancelled_after_timeout", operation=operation, order_code=order_code)
        return
    error = task.exception()
    if error is not None:
        logger.warning(
            "square.call.failed_after_timeout",
            operation=operation,
            order_code=order_code,
            error=describe_error(error),
        )
    else:
        logger.warning("square.call.completed_after_timeout", operation=operation, order_code=order_code)
