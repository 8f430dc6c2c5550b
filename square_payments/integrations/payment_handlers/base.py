"""
Payment Method Handler Base Classes and Interfaces

Defines the contract a payment method handler fulfils towards the host
platform, the result shapes it returns, and the registry the host routes
payments through.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from square_payments.schemas.host import Order, PaymentRecord, RefundInput


class PaymentState(str, Enum):
    """Outcome of an authorization attempt."""
    AUTHORIZED = "Authorized"
    DECLINED = "Declined"


class RefundState(str, Enum):
    """Outcome of a refund attempt."""
    SETTLED = "Settled"
    FAILED = "Failed"


@dataclass(frozen=True)
class LocalizedString:
    language_code: str
    value: str


@dataclass
class CreatePaymentResult:
    """Result of create_payment. Build through authorized() or declined()."""
    amount: int
    state: PaymentState
    transaction_id: Optional[str] = None
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def authorized(
        cls, amount: int, transaction_id: str, metadata: Optional[Dict[str, Any]] = None
    ) -> "CreatePaymentResult":
        return cls(
            amount=amount,
            state=PaymentState.AUTHORIZED,
            transaction_id=transaction_id,
            metadata=metadata or {},
        )

    @classmethod
    def declined(
        cls, amount: int, error_message: str, metadata: Optional[Dict[str, Any]] = None
    ) -> "CreatePaymentResult":
        return cls(
            amount=amount,
            state=PaymentState.DECLINED,
            error_message=error_message,
            metadata=metadata or {},
        )

    @property
    def success(self) -> bool:
        return self.state is PaymentState.AUTHORIZED


@dataclass
class SettlePaymentResult:
    """Result of settle_payment."""
    success: bool
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def settled(cls, metadata: Optional[Dict[str, Any]] = None) -> "SettlePaymentResult":
        return cls(success=True, metadata=metadata or {})

    @classmethod
    def failed(
        cls, error_message: str, metadata: Optional[Dict[str, Any]] = None
    ) -> "SettlePaymentResult":
        return cls(success=False, error_message=error_message, metadata=metadata or {})


@dataclass
class CreateRefundResult:
    """Result of create_refund."""
    state: RefundState
    transaction_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def settled(
        cls, transaction_id: str, metadata: Optional[Dict[str, Any]] = None
    ) -> "CreateRefundResult":
        return cls(state=RefundState.SETTLED, transaction_id=transaction_id, metadata=metadata or {})

    @classmethod
    def failed(cls, error: str, metadata: Optional[Dict[str, Any]] = None) -> "CreateRefundResult":
        payload = {"error": error}
        if metadata:
            payload.update(metadata)
        return cls(state=RefundState.FAILED, metadata=payload)

    @property
    def success(self) -> bool:
        return self.state is RefundState.SETTLED


class PaymentHandlerError(Exception):
    """Base class for errors raised by payment method handlers."""

    def __init__(self, message: str, error_code: Optional[str] = None, provider: Optional[str] = None):
        super().__init__(message)
        self.error_message = message
        self.error_code = error_code
        self.provider = provider


class PaymentMethodHandler(ABC):
    """Abstract base class for payment method handlers."""

    code: str = ""
    description: Tuple[LocalizedString, ...] = ()

    @abstractmethod
    async def create_payment(
        self,
        order: Order,
        amount: int,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> CreatePaymentResult:
        """
        Authorize a payment for an order.

        Args:
            order: Order being paid
            amount: Amount in minor currency units
            metadata: Call-supplied data, typically the storefront payment token

        Returns:
            CreatePaymentResult tagged Authorized or Declined
        """
        pass

    @abstractmethod
    async def settle_payment(self, order: Order, payment: PaymentRecord) -> SettlePaymentResult:
        """
        Capture a previously authorized payment.

        Args:
            order: Order the payment belongs to
            payment: Payment record carrying the processor transaction id

        Returns:
            SettlePaymentResult with success flag
        """
        pass

    @abstractmethod
    async def create_refund(
        self,
        refund: RefundInput,
        amount: int,
        order: Order,
        payment: PaymentRecord,
    ) -> CreateRefundResult:
        """
        Refund a payment, fully or in part.

        Args:
            refund: Refund request from the host
            amount: Amount to refund in minor currency units
            order: Order the payment belongs to
            payment: Payment record carrying the processor transaction id

        Returns:
            CreateRefundResult tagged Settled or Failed
        """
        pass

    def describe(self, language_code: str = "en") -> str:
        for entry in self.description:
            if entry.language_code == language_code:
                return entry.value
        return self.description[0].value if self.description else self.code


class PaymentHandlerRegistry:
    """Maps handler codes to handler instances."""

    def __init__(self) -> None:
        self._handlers: Dict[str, PaymentMethodHandler] = {}

    def register(self, handler: PaymentMethodHandler) -> None:
        if not handler.code:
            raise ValueError(f"{handler.__class__.__name__} has no handler code")
        if handler.code in self._handlers:
            raise ValueError(f"Payment handler already registered: {handler.code}")
        self._handlers[handler.code] = handler

    def get(self, code: str) -> PaymentMethodHandler:
        if code not in self._handlers:
            raise KeyError(f"Unknown payment handler: {code}")
        return self._handlers[code]

    def codes(self) -> List[str]:
        return list(self._handlers.keys())

    def __contains__(self, code: object) -> bool:
        return code in self._handlers
