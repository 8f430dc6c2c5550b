import asyncio

import pytest

from square_payments.integrations.square.errors import SquareTimeoutError
from square_payments.integrations.square.timeouts import with_timeout


@pytest.mark.asyncio
async def test_returns_result_in_time():
    async def fast():
        return "done"

    assert await with_timeout(fast(), 1.0, "should not fire") == "done"


@pytest.mark.asyncio
async def test_propagates_call_errors():
    async def broken():
        raise ValueError("bad request")

    with pytest.raises(ValueError, match="bad request"):
        await with_timeout(broken(), 1.0)


@pytest.mark.asyncio
async def test_timeout_raises_with_message():
    release = asyncio.Event()

    async def slow():
        await release.wait()
        return "late"

    with pytest.raises(SquareTimeoutError) as exc_info:
        await with_timeout(slow(), 0.01, "Square payment creation timeout")

    error = exc_info.value
    assert error.error_message.startswith("Square payment creation timeout")
    assert "timed out" in error.error_message
    assert "may still complete" in error.error_message
    assert error.timeout == 0.01
    assert error.error_code == "square_timeout"

    release.set()
    assert await error.pending == "late"


@pytest.mark.asyncio
async def test_timeout_does_not_cancel_call():
    release = asyncio.Event()

    async def slow():
        await release.wait()

    with pytest.raises(SquareTimeoutError) as exc_info:
        await with_timeout(slow(), 0.01)

    pending = exc_info.value.pending
    assert not pending.cancelled()
    assert not pending.done()
    release.set()
    await pending
    assert pending.done() and not pending.cancelled()
