import asyncio
from typing import Any, Dict, List, Optional

from square.core.api_error import ApiError

from square_payments.integrations.payment_handlers.base import PaymentHandlerError

PROVIDER = "square"


class SquareConfigurationError(PaymentHandlerError):
    """Square credentials were never configured."""

    def __init__(self, message: str = "Square options not configured - call SquarePlugin.init() first"):
        super().__init__(message, error_code="square_not_configured", provider=PROVIDER)


class SquareTimeoutError(PaymentHandlerError):
    """
    A Square call did not finish before its deadline.

    The request is not cancelled; ``pending`` is the task still running
    against Square and may yet succeed.
    """

    def __init__(self, message: str, *, timeout: float, pending: Optional[asyncio.Task] = None):
        super().__init__(message, error_code="square_timeout", provider=PROVIDER)
        self.timeout = timeout
        self.pending = pending


class SquareAPIError(PaymentHandlerError):
    """Square answered with an error payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        first_code = errors[0].get("code") if errors else None
        super().__init__(message, error_code=first_code or "square_api_error", provider=PROVIDER)
        self.status_code = status_code
        self.errors = errors or []

    @classmethod
    def from_api_error(cls, error: ApiError) -> "SquareAPIError":
        errors = _extract_errors(error.body)
        if errors:
            details = "; ".join(
                e.get("detail") or e.get("code") or "unknown error" for e in errors
            )
        else:
            details = str(error.body) if error.body else "no details"
        return cls(
            message=f"Square API error ({error.status_code}): {details}",
            status_code=error.status_code,
            errors=errors,
        )


def _extract_errors(body: Any) -> List[Dict[str, Any]]:
    if isinstance(body, dict):
        raw = body.get("errors") or []
    else:
        raw = getattr(body, "errors", None) or []

    errors = []
    for item in raw:
        if isinstance(item, dict):
            errors.append(item)
        elif hasattr(item, "model_dump"):
            errors.append(item.model_dump())
    return errors


def describe_error(error: BaseException) -> str:
    """Human readable message for a failed Square call."""
    if isinstance(error, ApiError):
        return SquareAPIError.from_api_error(error).error_message
    if isinstance(error, PaymentHandlerError):
        return error.error_message
    return str(error) or error.__class__.__name__
