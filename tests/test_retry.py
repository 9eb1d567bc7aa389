"""Tests for the fixed-delay retry helper."""

import pytest

from elpais_opinion.errors import SessionConnectionError
from elpais_opinion.retry import attempt


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class TestAttempt:
    @pytest.mark.asyncio
    async def test_returns_first_success_without_sleeping(self) -> None:
        """A successful first call shall return immediately."""
        sleep = SleepRecorder()

        async def action():
            return 42

        assert await attempt(action, sleep=sleep) == 42
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_succeeds_on_third_call_after_two_delays(self) -> None:
        """Two failures then a success shall yield two delayed retries."""
        sleep = SleepRecorder()
        calls = 0

        async def action():
            nonlocal calls
            calls += 1
            if calls < 3:
                raise OSError(f"boom {calls}")
            return "session"

        result = await attempt(action, max_attempts=3, delay_ms=5000, sleep=sleep)

        assert result == "session"
        assert calls == 3
        assert sleep.delays == [5.0, 5.0]

    @pytest.mark.asyncio
    async def test_always_failing_action_raises_after_max_attempts(self) -> None:
        """An action that never succeeds shall be called exactly max_attempts times."""
        sleep = SleepRecorder()
        calls = 0

        async def action():
            nonlocal calls
            calls += 1
            raise OSError(f"boom {calls}")

        with pytest.raises(SessionConnectionError) as info:
            await attempt(action, max_attempts=4, delay_ms=250, sleep=sleep)

        assert calls == 4
        assert sleep.delays == [0.25, 0.25, 0.25]
        assert str(info.value.last_error) == "boom 4"
        assert info.value.__cause__ is info.value.last_error

    @pytest.mark.asyncio
    async def test_error_is_a_builtin_connection_error(self) -> None:
        """Callers catching ConnectionError shall see exhausted retries."""

        async def action():
            raise ValueError("nope")

        with pytest.raises(ConnectionError):
            await attempt(action, max_attempts=1, sleep=SleepRecorder())

    @pytest.mark.asyncio
    async def test_logs_attempt_number_with_label(self, capsys) -> None:
        """Each failure shall be printed with its attempt number."""

        async def action():
            raise RuntimeError("hub timeout")

        with pytest.raises(SessionConnectionError):
            await attempt(action, max_attempts=2, label="Edge", sleep=SleepRecorder())

        out = capsys.readouterr().out
        assert "[Edge] Attempt 1 failed: hub timeout" in out
        assert "[Edge] Attempt 2 failed: hub timeout" in out
        assert out.count("Retrying in") == 1
