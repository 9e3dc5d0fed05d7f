"""Frame timesteps and simple wall-clock timers for profiling."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import Callable, TextIO

Clock = Callable[[], int]


class Timestep(float):
    """Duration of a frame in seconds; behaves as a float."""

    def __new__(cls, time_seconds: float = 0.0) -> "Timestep":
        return super().__new__(cls, time_seconds)

    @property
    def seconds(self) -> float:
        return float(self)

    @property
    def milliseconds(self) -> float:
        return float(self) * 1000.0


class Timer:
    """Measures time elapsed since creation or the last reset."""

    def __init__(self, clock: Clock = time.perf_counter_ns) -> None:
        self._clock = clock
        self._start = 0
        self.reset()

    def reset(self) -> None:
        """Restart the measurement from now."""
        self._start = self._clock()

    def elapsed(self) -> float:
        """Seconds elapsed."""
        return (self._clock() - self._start) * 1e-9

    def elapsed_millis(self) -> float:
        """Milliseconds elapsed."""
        return self.elapsed() * 1000.0


class ScopedTimer:
    """Context manager that prints how long its block took."""

    def __init__(
        self,
        name: str,
        stream: TextIO | None = None,
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        self.name = name
        self._stream = stream
        self._timer = Timer(clock)

    def __enter__(self) -> "ScopedTimer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        elapsed = self._timer.elapsed_millis()
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"[TIMER] {self.name} - {elapsed:g}ms\n")


@dataclass(frozen=True)
class ProfileResult:
    """A named duration in milliseconds."""

    name: str
    time: float


class ProfileTimer:
    """Reports a ProfileResult to a callback when stopped or when its block ends."""

    def __init__(
        self,
        name: str,
        func: Callable[[ProfileResult], object],
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        self.name = name
        self._func = func
        self._clock = clock
        self._stopped = False
        self._start = clock()

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self) -> ProfileResult:
        """Measure the duration at microsecond resolution and report it."""
        end = self._clock()
        start_us = self._start // 1000
        end_us = end // 1000
        self._stopped = True
        result = ProfileResult(self.name, (end_us - start_us) * 0.001)
        self._func(result)
        return result

    def __enter__(self) -> "ProfileTimer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._stopped:
            self.stop()