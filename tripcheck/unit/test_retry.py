import pytest

from tripcheck.ui_testing.framework import retry_utils
from tripcheck.ui_testing.framework.retry_utils import RetryOptions, compute_delay, retry, with_retry


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []

    async def fake_sleep(ms):
        recorded.append(ms)

    monkeypatch.setattr(retry_utils, "sleep_ms", fake_sleep)
    return recorded


def failing(*errors, result="ok"):
    """Operation that raises each queued error once, then returns `result`."""
    queue = list(errors)
    calls = []

    async def operation():
        calls.append(len(calls) + 1)
        if queue:
            raise queue.pop(0)
        return result

    operation.calls = calls
    return operation


@pytest.mark.asyncio
async def test_success_on_first_attempt_does_not_sleep(sleeps):
    op = failing()
    assert await retry(op, RetryOptions(retries=3)) == "ok"
    assert op.calls == [1]
    assert sleeps == []


@pytest.mark.asyncio
async def test_always_failing_runs_every_attempt_and_raises_last_error(sleeps):
    errors = [RuntimeError(f"flaky {i}") for i in range(1, 4)]
    op = failing(*errors, RuntimeError("never reached"))

    with pytest.raises(RuntimeError) as exc:
        await retry(op, RetryOptions(retries=3, base_delay_ms=100, max_delay_ms=1000, jitter=False))

    assert exc.value is errors[-1]
    assert op.calls == [1, 2, 3]
    assert sleeps == [100, 200]


@pytest.mark.asyncio
async def test_linear_backoff(sleeps):
    op = failing(*[RuntimeError("flaky")] * 3)
    options = RetryOptions(retries=4, base_delay_ms=100, max_delay_ms=10000, exponential=False, jitter=False)

    assert await retry(op, options) == "ok"
    assert sleeps == [100, 200, 300]


@pytest.mark.asyncio
async def test_fatal_error_is_raised_after_single_attempt(sleeps):
    op = failing(Exception("Invalid selector: //bad[["))

    with pytest.raises(Exception, match="Invalid selector"):
        await retry(op, RetryOptions(retries=5, base_delay_ms=10))

    assert op.calls == [1]
    assert sleeps == []


@pytest.mark.asyncio
async def test_type_error_is_fatal(sleeps):
    op = failing(TypeError("'NoneType' object is not callable"))

    with pytest.raises(TypeError):
        await retry(op, RetryOptions(retries=3, base_delay_ms=10))

    assert op.calls == [1]


@pytest.mark.asyncio
async def test_single_attempt_never_sleeps(sleeps):
    op = failing(RuntimeError("flaky"))

    with pytest.raises(RuntimeError):
        await retry(op, RetryOptions(retries=1, base_delay_ms=10))

    assert op.calls == [1]
    assert sleeps == []


@pytest.mark.asyncio
async def test_on_retry_receives_attempt_and_error(sleeps):
    seen = []
    first = RuntimeError("element not visible")
    op = failing(first)

    await retry(op, RetryOptions(retries=2, base_delay_ms=10, on_retry=lambda a, e: seen.append((a, e))))

    assert seen == [(1, first)]


@pytest.mark.asyncio
async def test_async_on_retry_is_awaited(sleeps):
    seen = []

    async def callback(attempt, error):
        seen.append(attempt)

    await retry(failing(RuntimeError("a"), RuntimeError("b")), RetryOptions(retries=3, on_retry=callback))
    assert seen == [1, 2]


@pytest.mark.asyncio
async def test_on_retry_errors_are_ignored(sleeps):
    def callback(attempt, error):
        raise ValueError("callback exploded")

    op = failing(RuntimeError("flaky"))
    assert await retry(op, RetryOptions(retries=2, base_delay_ms=10, on_retry=callback)) == "ok"
    assert op.calls == [1, 2]


@pytest.mark.asyncio
async def test_keyword_overrides(sleeps):
    op = failing(RuntimeError("a"), RuntimeError("b"))
    assert await retry(op, retries=3, base_delay_ms=50, jitter=False) == "ok"
    assert sleeps == [50, 100]


@pytest.mark.asyncio
async def test_with_retry_decorator(sleeps):
    attempts = []

    @with_retry(RetryOptions(retries=2, base_delay_ms=10))
    async def flaky(value):
        attempts.append(value)
        if len(attempts) == 1:
            raise RuntimeError("Timeout 30000ms exceeded")
        return value * 2

    assert await flaky(21) == 42
    assert attempts == [21, 21]


def test_package_export_does_not_shadow_retry_module():
    from tripcheck.ui_testing import framework

    assert framework.retry is retry
    assert framework.retry_utils is retry_utils
    assert callable(retry_utils.sleep_ms)


def test_retries_below_one_rejected():
    with pytest.raises(ValueError):
        RetryOptions(retries=0)


def test_compute_delay_exponential_without_jitter():
    assert [compute_delay(1000, n, 100000, jitter=False) for n in (1, 2, 3, 4)] == [1000, 2000, 4000, 8000]


def test_compute_delay_is_capped():
    assert compute_delay(3000, 3, 9000, jitter=False) == 9000
    assert compute_delay(3000, 10, 9000, jitter=True) == 9000


def test_compute_delay_jitter_is_scaled_to_base(monkeypatch):
    monkeypatch.setattr(retry_utils.random, "random", lambda: 0.5)
    # 2000 * 2 + 0.5 * 2000 * 0.5
    assert compute_delay(2000, 2, 100000) == 4500


def test_compute_delay_stays_within_bounds():
    for attempt in range(1, 8):
        delay = compute_delay(3000, attempt, 9000)
        assert 0 <= delay <= 9000


def test_compute_delay_never_negative():
    assert compute_delay(-500, 1, 9000, jitter=False) == 0
    assert compute_delay(-500, 3, 9000, jitter=True) == 0


def test_jittered_delays_vary_between_unjittered_delay_and_cap():
    delays = [compute_delay(1000, 2, 9000) for _ in range(50)]
    assert all(2000 <= d <= 9000 for d in delays)
    assert len(set(delays)) > 1
