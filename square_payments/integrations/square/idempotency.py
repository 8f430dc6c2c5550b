import hashlib
import uuid
from typing import Optional

# Square rejects idempotency keys longer than this.
MAX_KEY_LENGTH = 45

_KEY_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://connect.squareup.com/idempotency")


def _fit(raw_key: str) -> str:
    if len(raw_key) <= MAX_KEY_LENGTH:
        return raw_key
    return str(uuid.uuid5(_KEY_NAMESPACE, raw_key))


def payment_key(order_code: str, source_id: str) -> str:
    """
    Idempotency key for authorizing an order with a given payment token.

    Retrying with the same token reuses the key; a new token from the
    storefront is a new attempt and gets a new key.
    """
    token_hash = hashlib.sha256(source_id.encode()).hexdigest()[:12]
    return _fit(f"{order_code}-create-{token_hash}")


def refund_key(order_code: str, payment_id: str, refund_id: Optional[str] = None) -> str:
    """
    Idempotency key for refunding a payment.

    Uses the host's refund id when there is one, so a retried refund reuses
    its key. Without one every call is a separate refund and gets a fresh
    random discriminator; two equal partial refunds must not collide.
    """
    discriminator = refund_id if refund_id else uuid.uuid4().hex[:16]
    return _fit(f"{order_code}-refund-{payment_id}-{discriminator}")
