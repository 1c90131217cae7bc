"""Second-order Butterworth low-pass filter with time-stamped samples."""

from __future__ import annotations

import logging
import math
import time as _time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DebugSink = Callable[[float, float, float], None]


class LowPassFilter:
    """Bilinear-transform Butterworth low-pass filter.

    The sample period is taken from the timestamps passed to :meth:`input`.
    A ``cutoff_frequency`` of -1 (or any non-positive value) keeps the
    previous filter coefficient. If ``debug_sink`` is given, it is called
    with ``(time, raw, filtered)`` after every filtered sample.
    """

    def __init__(self, cutoff_frequency: float = -1.0, debug_sink: Optional[DebugSink] = None) -> None:
        self.cutoff_frequency = cutoff_frequency
        self._debug_sink = debug_sink
        self._in = [0.0, 0.0, 0.0]
        self._out = [0.0, 0.0, 0.0]
        self._prev_time = 0.0
        self._c = 1.0

    def input(self, value: float, time: Optional[float] = None) -> None:
        if time is None:
            time = _time.time()
        self._in = [value, self._in[0], self._in[1]]

        if self._prev_time == 0:
            self._prev_time = time
            return
        delta_t = time - self._prev_time
        self._prev_time = time
        if delta_t == 0:
            logger.error(
                "delta_t is 0, skipping this loop. Possible overloaded cpu at time: %f", time
            )
            return

        if self.cutoff_frequency > 0:
            tan_filt = math.tan((self.cutoff_frequency * 6.2832) * delta_t / 2.0)
            if -0.01 < tan_filt <= 0.0:
                tan_filt = -0.01
            if 0.0 <= tan_filt < 0.01:
                tan_filt = 0.01
            self._c = 1 / tan_filt

        c = self._c
        sqrt2 = math.sqrt(2.0)
        new_out = (1 / (1 + c * c + sqrt2 * c)) * (
            self._in[2]
            + 2 * self._in[1]
            + self._in[0]
            - (c * c - sqrt2 * c + 1) * self._out[1]
            - (-2 * c * c + 2) * self._out[0]
        )
        self._out = [new_out, self._out[0], self._out[1]]

        if self._debug_sink is not None:
            self._debug_sink(time, self._in[0], self._out[0])

    def output(self) -> float:
        return self._out[0]

    def reset(self) -> None:
        self._in = [0.0, 0.0, 0.0]
        self._out = [0.0, 0.0, 0.0]