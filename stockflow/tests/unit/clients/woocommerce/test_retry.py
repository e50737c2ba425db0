import pytest
from unittest.mock import AsyncMock, call, patch

from stockflow.clients.woocommerce.errors import WooCommerceNetworkError, WooCommerceNotFoundError
from stockflow.clients.woocommerce.retry import retry_with_backoff

SLEEP_PATH = "stockflow.clients.woocommerce.retry.asyncio.sleep"


def _flaky(failures: list[Exception], result="ok") -> AsyncMock:
    """AsyncMock that raises each of `failures` in turn, then returns `result`."""
    return AsyncMock(side_effect=[*failures, result])


class TestRetryWithBackoff:
    async def test_returns_first_success_without_sleeping(self):
        operation = AsyncMock(return_value="ok")
        with patch(SLEEP_PATH, new_callable=AsyncMock) as mock_sleep:
            assert await retry_with_backoff(operation) == "ok"
        operation.assert_awaited_once()
        mock_sleep.assert_not_called()

    async def test_succeeds_after_two_failures(self):
        operation = _flaky([WooCommerceNetworkError(), WooCommerceNetworkError()], result={"id": 1})

        result = await retry_with_backoff(operation, max_retries=3, base_delay=0.01)

        assert result == {"id": 1}
        assert operation.await_count == 3

    async def test_reraises_last_error_after_exhausting_retries(self):
        errors = [RuntimeError(f"failure {i}") for i in range(1, 5)]
        operation = AsyncMock(side_effect=errors)

        with pytest.raises(RuntimeError) as exc_info:
            await retry_with_backoff(operation, max_retries=2, base_delay=0.01)

        assert exc_info.value is errors[2]
        assert operation.await_count == 3

    async def test_sleeps_with_exponential_backoff(self):
        operation = AsyncMock(side_effect=WooCommerceNetworkError())
        with patch(SLEEP_PATH, new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(WooCommerceNetworkError):
                await retry_with_backoff(operation, max_retries=3, base_delay=1.0)

        assert operation.await_count == 4
        assert mock_sleep.await_args_list == [call(1.0), call(2.0), call(4.0)]

    async def test_retries_every_error_kind_the_same_way(self):
        operation = _flaky([WooCommerceNotFoundError(), ValueError("bad")])
        with patch(SLEEP_PATH, new_callable=AsyncMock):
            assert await retry_with_backoff(operation, max_retries=2) == "ok"
        assert operation.await_count == 3

    async def test_zero_retries_means_single_attempt(self):
        operation = AsyncMock(side_effect=WooCommerceNetworkError("down"))
        with pytest.raises(WooCommerceNetworkError, match="down"):
            await retry_with_backoff(operation, max_retries=0)
        operation.assert_awaited_once()

    async def test_rejects_negative_retries(self):
        with pytest.raises(ValueError):
            await retry_with_backoff(AsyncMock(), max_retries=-1)
