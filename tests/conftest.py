"""
Shared test configuration and fixtures for the Square payment handler.
"""

from typing import Dict
from unittest.mock import AsyncMock, Mock

import pytest

from square_payments.core.config import clear_settings_cache
from square_payments.plugin import SquarePlugin
from square_payments.schemas.host import Order, PaymentRecord, RefundInput
from square_payments.schemas.options import SquarePluginOptions

from tests.factories import make_response, make_square_payment, make_square_refund


@pytest.fixture
def square_options() -> SquarePluginOptions:
    return SquarePluginOptions(access_token="tok", environment="sandbox", location_id="L1")


@pytest.fixture
def square_client() -> Mock:
    """Stand-in for square.AsyncSquare with awaitable endpoints."""
    client = Mock()
    client.payments.create = AsyncMock(
        return_value=make_response(payment=make_square_payment("pay_1", "AUTHORIZED"))
    )
    client.payments.complete = AsyncMock(
        return_value=make_response(payment=make_square_payment("pay_1", "COMPLETED"))
    )
    client.refunds.refund_payment = AsyncMock(
        return_value=make_response(refund=make_square_refund("ref_1", "PENDING"))
    )
    return client


@pytest.fixture
def client_factory(square_client):
    factory = Mock(return_value=square_client)
    return factory


@pytest.fixture
def plugin(client_factory, square_options) -> SquarePlugin:
    return SquarePlugin(client_factory=client_factory).init(square_options)


@pytest.fixture
def handler(plugin):
    return plugin.payment_handler


@pytest.fixture
def order() -> Order:
    return Order(code="ORD1", total=1000, currency_code="USD")


@pytest.fixture
def authorized_payment() -> PaymentRecord:
    return PaymentRecord(id="42", transaction_id="pay_1", amount=1000)


@pytest.fixture
def refund_input() -> RefundInput:
    return RefundInput(reason="damaged", amount=500)


@pytest.fixture
def square_env(monkeypatch) -> Dict[str, str]:
    values = {
        "SQUARE_ACCESS_TOKEN": "EAAA-test-token",
        "SQUARE_ENVIRONMENT": "sandbox",
        "SQUARE_LOCATION_ID": "LOC123",
    }
    for key, value in values.items():
        monkeypatch.setenv(key, value)
    clear_settings_cache()
    yield values
    clear_settings_cache()
