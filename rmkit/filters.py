"""Discrete-time scalar filters for sensor and command smoothing."""

from __future__ import annotations

import math
import struct
from collections import deque


def min_abs(value: float, limit: float) -> float:
    """Return ``value`` with its magnitude capped at ``limit``, keeping its sign."""
    sign = -1.0 if value < 0.0 else 1.0
    return sign * min(abs(value), limit)


def _as_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


class MovingAverageFilter:
    """Mean of the last ``num_data`` samples, with a zero-filled start."""

    def __init__(self, num_data: int) -> None:
        if num_data <= 0:
            raise ValueError("num_data must be positive")
        self._num_data = num_data
        self._buffer = [0.0] * num_data
        self._idx = 0
        self._sum = 0.0

    def input(self, value: float) -> None:
        self._sum += value - self._buffer[self._idx]
        self._buffer[self._idx] = value
        self._idx = (self._idx + 1) % self._num_data

    def output(self) -> float:
        return self._sum / self._num_data

    def clear(self) -> None:
        self._sum = 0.0
        self._buffer = [0.0] * self._num_data


class ButterworthFilter:
    """FIR approximation of a second-order Butterworth impulse response."""

    def __init__(self, num_sample: int, dt: float, cutoff_frequency: float) -> None:
        if num_sample <= 0:
            raise ValueError("num_sample must be positive")
        self._num_sample = num_sample
        self._buffer: deque[float] = deque([0.0] * num_sample, maxlen=num_sample)
        sqrt_2 = math.sqrt(2.0)
        self._weights = [
            sqrt_2
            / cutoff_frequency
            * math.exp(-1.0 / sqrt_2 * (j * dt))
            * math.sin(cutoff_frequency / sqrt_2 * (j * dt))
            * dt
            for j in range(num_sample)
        ]
        self._value = 0.0

    def input(self, value: float) -> None:
        self._buffer.appendleft(value)
        self._value = sum(w * x for w, x in zip(self._weights, self._buffer))

    def output(self) -> float:
        return self._value

    def clear(self) -> None:
        self._buffer = deque([0.0] * self._num_sample, maxlen=self._num_sample)


class _SecondOrderFilter:
    """Direct-form biquad: y = b0 x + b1 x[-1] + b2 x[-2] + a1 y[-1] + a2 y[-2]."""

    def __init__(self, b0: float, b1: float, b2: float, a1: float, a2: float) -> None:
        self._b = (b0, b1, b2)
        self._a = (a1, a2)
        self._in_prev = [0.0, 0.0]
        self._out_prev = [0.0, 0.0]
        self._out = 0.0

    def _step(self, value: float) -> None:
        b0, b1, b2 = self._b
        a1, a2 = self._a
        self._out = (
            b0 * value
            + b1 * self._in_prev[0]
            + b2 * self._in_prev[1]
            + a1 * self._out_prev[0]
            + a2 * self._out_prev[1]
        )
        self._shift(value)

    def _shift(self, value: float) -> None:
        self._in_prev = [value, self._in_prev[0]]
        self._out_prev = [self._out, self._out_prev[0]]

    def _reset(self) -> None:
        self._in_prev = [0.0, 0.0]
        self._out_prev = [0.0, 0.0]


def _feedback_coefficients(t_s: float, w_c: float) -> tuple[float, float, float]:
    a = 1.4142
    den = 4 + 2 * a * w_c * t_s + t_s * t_s * w_c * w_c
    out1 = -1.0 * (-8 + t_s * t_s * w_c * w_c * 2) / den
    out2 = -1.0 * (4 - 2 * a * w_c * t_s + t_s * t_s * w_c * w_c) / den
    return den, out1, out2


class DigitalLpFilter(_SecondOrderFilter):
    """Second-order digital low-pass filter with cutoff ``w_c`` and period ``t_s``."""

    def __init__(self, w_c: float, t_s: float) -> None:
        k = t_s * t_s * w_c * w_c
        den = _as_float32(2500 * k + 7071 * t_s * w_c + 10000)
        super().__init__(
            2500 * k / den,
            5000 * k / den,
            2500 * k / den,
            -(5000 * k - 20000) / den,
            -(2500 * k - 7071 * t_s * w_c + 10000) / den,
        )

    def input(self, value: float) -> None:
        self._step(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class DerivLpFilter(_SecondOrderFilter):
    """Low-pass filtered derivative of the input signal."""

    def __init__(self, w_c: float, t_s: float) -> None:
        den, out1, out2 = _feedback_coefficients(t_s, w_c)
        super().__init__(
            2 * t_s * w_c * w_c / den,
            0.0,
            -2.0 * t_s * w_c * w_c / den,
            out1,
            out2,
        )

    def input(self, value: float) -> None:
        self._step(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class FF01Filter(_SecondOrderFilter):
    """Feed-forward filter for an inertia plus damping model."""

    def __init__(self, t_s: float, w_c: float) -> None:
        _, out1, out2 = _feedback_coefficients(t_s, w_c)
        inertia = 0.00008
        damping = 0.0002
        k = t_s * t_s * w_c * w_c
        super().__init__(
            damping * k + 2 * inertia * t_s * w_c * w_c,
            2 * damping * k,
            damping * k - 2 * inertia * t_s * w_c * w_c,
            out1,
            out2,
        )

    def input(self, value: float) -> None:
        self._step(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class FF02Filter(_SecondOrderFilter):
    """Feed-forward filter for a pure inertia model."""

    def __init__(self, t_s: float, w_c: float) -> None:
        den, out1, out2 = _feedback_coefficients(t_s, w_c)
        inertia = 0.003216
        super().__init__(
            inertia * 2 * t_s * w_c * w_c / den,
            0.0,
            -2.0 * inertia * t_s * w_c * w_c / den,
            out1,
            out2,
        )

    def _shift(self, value: float) -> None:
        # Both history slots take the newest sample.
        self._in_prev = [value, value]
        self._out_prev = [self._out, self._out]

    def input(self, value: float) -> None:
        self._step(value)

    def output(self) -> float:
        return self._out

    def clear(self) -> None:
        self._reset()


class AverageFilter:
    """First-order smoother that ignores jumps larger than ``limit``."""

    def __init__(self, dt: float, t_const: float, limit: float) -> None:
        self.dt = dt
        self.t_const = t_const
        self.limit = limit
        self._estimate = 0.0

    def input(self, value: float) -> None:
        update = value - self._estimate
        if abs(update) > self.limit:
            update = 0.0
        self._estimate += (self.dt / (self.dt + self.t_const)) * update

    def output(self) -> float:
        return self._estimate

    def clear(self) -> None:
        self._estimate = 0.0


class RampFilter:
    """Rate limiter: the output moves toward the input by at most ``acc * dt``."""

    def __init__(self, acc: float, dt: float) -> None:
        self.acc = acc
        self.dt = dt
        self._last = 0.0

    def input(self, value: float) -> None:
        self._last += min_abs(value - self._last, self.acc * self.dt)

    def output(self) -> float:
        return self._last

    def clear(self, last_value: float = 0.0) -> None:
        self._last = last_value


def _alpha(cutoff: float, freq: float) -> float:
    te = 1.0 / freq
    tau = 1.0 / (2 * math.pi * cutoff)
    return 1.0 / (1.0 + tau / te)


class OneEuroFilter:
    """Speed-adaptive low-pass filter (the "1 euro" filter)."""

    def __init__(self, freq: float, mincutoff: float, beta: float, dcutoff: float) -> None:
        self.freq = freq
        self.mincutoff = mincutoff
        self.beta = beta
        self.dcutoff = dcutoff
        self._first = True
        self._x_prev = 0.0
        self._hat_x_prev = 0.0
        self._dhat_x_prev = 0.0
        self._filtered = 0.0

    def input(self, value: float) -> None:
        dx = 0.0
        if self._first:
            self._dhat_x_prev = dx
        else:
            dx = (value - self._x_prev) * self.freq
        a_d = _alpha(self.dcutoff, self.freq)
        edx = a_d * dx + (1 - a_d) * self._dhat_x_prev
        self._dhat_x_prev = edx
        cutoff = self.mincutoff + self.beta * abs(edx)

        if self._first:
            self._hat_x_prev = value
        a = _alpha(cutoff, self.freq)
        self._filtered = a * value + (1 - a) * self._hat_x_prev
        self._hat_x_prev = self._filtered
        self._first = False

    def output(self) -> float:
        return self._filtered

    def clear(self) -> None:
        self._first = True
        self._x_prev = 0.0
        self._hat_x_prev = 0.0
        self._dhat_x_prev = 0.0