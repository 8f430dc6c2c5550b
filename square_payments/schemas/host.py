from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class HostModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)


class Order(HostModel):
    """Order as seen by the payment handler. Owned and mutated by the host."""
    code: str
    total: int = Field(ge=0, description="Order total in minor currency units")
    currency_code: str = Field(min_length=3, max_length=3)


class PaymentRecord(HostModel):
    """A payment previously created through this handler."""
    id: str
    transaction_id: Optional[str] = None
    amount: int = Field(default=0, ge=0)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class RefundInput(HostModel):
    id: Optional[str] = None
    reason: Optional[str] = None
    amount: Optional[int] = Field(default=None, ge=0)
