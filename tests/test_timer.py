"""Comprehensive tests for the timer state machine."""

import pytest

from focustimer.core.timer import (
    Finished,
    Idle,
    NoCommand,
    Quit,
    Reset,
    Running,
    Step,
    SubmitDuration,
    apply,
    parse_duration,
    remaining,
    tick,
)

ALL_STATES = [Idle(), Running(started_at=10.0, duration=25.0), Finished()]

# ---------------------------------------------------------------------------
# parse_duration()
# ---------------------------------------------------------------------------


class TestParseDuration:
    """Only whole, unsigned decimal seconds are accepted."""

    @pytest.mark.parametrize("text, expected", [("0", 0), ("25", 25), ("90", 90), ("007", 7)])
    def test_accepts_whole_seconds(self, text: str, expected: int) -> None:
        assert parse_duration(text) == expected

    def test_ignores_surrounding_whitespace(self) -> None:
        assert parse_duration("  42 ") == 42

    @pytest.mark.parametrize("text", ["", "   ", "-3", "+3", "12.5", "abc", "1 2", "５"])
    def test_rejects_malformed_text(self, text: str) -> None:
        assert parse_duration(text) is None


# ---------------------------------------------------------------------------
# apply()
# ---------------------------------------------------------------------------


class TestApplyQuit:
    """Quit signals termination from every state."""

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_quit_signals_termination(self, state) -> None:
        step = apply(state, Quit(), 100.0)
        assert step.quit is True
        assert step.state == state
        assert step.clear_input is False


class TestApplySubmit:
    """SubmitDuration starts a countdown when the text is valid."""

    @pytest.mark.parametrize("text, seconds", [("0", 0), ("25", 25), ("90", 90)])
    def test_valid_text_starts_running(self, text: str, seconds: int) -> None:
        step = apply(Idle(), SubmitDuration(text), 50.0)
        assert step == Step(Running(started_at=50.0, duration=float(seconds)), clear_input=True)

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_valid_text_restarts_from_any_state(self, state) -> None:
        step = apply(state, SubmitDuration("5"), 200.0)
        assert step.state == Running(started_at=200.0, duration=5.0)
        assert step.clear_input is True

    @pytest.mark.parametrize("text", ["", "-3", "12.5", "abc"])
    @pytest.mark.parametrize("state", ALL_STATES)
    def test_malformed_text_is_silently_ignored(self, state, text: str) -> None:
        step = apply(state, SubmitDuration(text), 200.0)
        assert step.state == state
        assert step.clear_input is False
        assert step.quit is False


class TestApplyReset:
    """Reset always returns to Idle."""

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_reset_returns_idle(self, state) -> None:
        assert apply(state, Reset(), 0.0).state == Idle()

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_reset_is_idempotent(self, state) -> None:
        once = apply(state, Reset(), 5.0).state
        assert apply(once, Reset(), 5.0).state == Idle()

    def test_reset_does_not_touch_input(self) -> None:
        assert apply(Finished(), Reset(), 0.0).clear_input is False


class TestApplyNoCommand:
    @pytest.mark.parametrize("state", ALL_STATES)
    def test_state_unchanged(self, state) -> None:
        assert apply(state, NoCommand(), 1000.0) == Step(state)


# ---------------------------------------------------------------------------
# tick()
# ---------------------------------------------------------------------------


class TestTick:
    """tick() finishes a running countdown once its duration has elapsed."""

    def test_exact_boundary_finishes(self) -> None:
        state = Running(started_at=100.0, duration=5.0)
        assert tick(state, 105.0) == Finished()

    def test_just_before_boundary_keeps_running(self) -> None:
        state = Running(started_at=100.0, duration=5.0)
        assert tick(state, 104.999) == state

    def test_well_past_expiry_finishes(self) -> None:
        assert tick(Running(started_at=0.0, duration=60.0), 500.0) == Finished()

    def test_zero_duration_finishes_immediately(self) -> None:
        step = apply(Idle(), SubmitDuration("0"), 7.0)
        assert tick(step.state, 7.0) == Finished()

    @pytest.mark.parametrize("state", [Idle(), Finished()])
    def test_idle_and_finished_unchanged(self, state) -> None:
        assert tick(state, 1_000_000.0) == state

    @pytest.mark.parametrize("later", [105.0, 106.0, 1000.0])
    def test_expiry_is_monotonic(self, later: float) -> None:
        state = Running(started_at=100.0, duration=5.0)
        assert tick(state, 105.0) == Finished()
        assert tick(state, later) == Finished()
        assert tick(tick(state, 105.0), later) == Finished()


# ---------------------------------------------------------------------------
# remaining()
# ---------------------------------------------------------------------------


class TestRemaining:
    """remaining() is derived from the start instant and never negative."""

    def test_full_duration_at_start(self) -> None:
        assert remaining(Running(started_at=10.0, duration=25.0), 10.0) == 25.0

    def test_decreases_over_time(self) -> None:
        state = Running(started_at=0.0, duration=25 * 60.0)
        assert remaining(state, 10.0) == pytest.approx(25 * 60.0 - 10.0)

    def test_never_negative(self) -> None:
        assert remaining(Running(started_at=0.0, duration=60.0), 120.0) == 0.0

    @pytest.mark.parametrize("state", [Idle(), Finished()])
    def test_zero_when_not_running(self, state) -> None:
        assert remaining(state, 50.0) == 0.0
