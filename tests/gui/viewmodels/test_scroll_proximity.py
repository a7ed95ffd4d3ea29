"""Tests for ScrollProximity."""

from __future__ import annotations

from contactsync.application.options import SyncOptions
from contactsync.gui.viewmodels.scroll_proximity import ScrollProximity


class _Clock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestScrollProximity:
    def test_far_from_bottom_is_not_visible(self):
        prox = ScrollProximity(clock=_Clock())
        assert prox.sample(0, 5000) is False

    def test_within_threshold_is_visible(self):
        prox = ScrollProximity(clock=_Clock())
        assert prox.sample(4500, 5000) is True

    def test_unscrollable_content_is_visible(self):
        prox = ScrollProximity(clock=_Clock())
        assert prox.sample(0, 0) is True
        assert prox.sample(0, 0) is True

    def test_slow_scroll_keeps_normal_window(self):
        prox = ScrollProximity(clock=_Clock())
        assert prox.sample(3900, 5000) is False

        assert prox.sample(4000, 5000) is False
        assert prox.velocity == 100
        # Exactly at the velocity limit the normal window still applies.
        assert prox.threshold() == 600

    def test_velocity_above_limit_uses_wide_window(self):
        prox = ScrollProximity(clock=_Clock())
        prox.sample(3000, 5000)

        assert prox.sample(3900, 5000) is True
        assert prox.threshold() == 1200

    def test_triggers_are_rate_limited(self):
        clock = _Clock()
        prox = ScrollProximity(clock=clock)
        assert prox.sample(4800, 5000) is True

        clock.now += 0.1
        assert prox.sample(4810, 5000) is False
        assert prox.suppressed is True

        clock.now += 0.25
        assert prox.sample(4820, 5000) is True
        assert prox.suppressed is False

    def test_custom_options(self):
        options = SyncOptions(proximity_threshold=100, min_trigger_interval_ms=0)
        prox = ScrollProximity(options, clock=_Clock())
        assert prox.sample(800, 1000) is False
        assert prox.sample(810, 1000) is False
        assert prox.sample(905, 1000) is True
        assert prox.min_interval_ms == 0

    def test_reset_forgets_history(self):
        clock = _Clock()
        prox = ScrollProximity(clock=clock)
        prox.sample(0, 5000)
        prox.sample(4900, 5000)

        prox.reset()

        assert prox.velocity == 0.0
        assert prox.sample(4900, 5000) is True
