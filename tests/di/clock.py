"""Fixed clock provider for testing."""

from dishka import Scope, provide

from yard.util.clock import Clock, FixedClock
from yard.util.di.clock import ClockProvider


class MockClockProvider(ClockProvider):
    """Clock that tests move by hand through ``FixedClock.advance``."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_fixed_clock(self) -> FixedClock:
        return FixedClock()

    @provide(scope=Scope.APP)
    def get_clock(self, clock: FixedClock) -> Clock:
        return clock
