"""Remote-controller (DBus) receiver: frame decoding and serial reading."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import serial

FRAME_SIZE = 18
CHANNEL_OFFSET = 1024
CHANNEL_LIMIT = 660
CHANNEL_DEADBAND = 10
MOUSE_SCALE = 1600.0
BAUDRATE = 100000
MAX_IDLE_READS = 10

_KEY_NAMES = (
    "w", "s", "a", "d", "shift", "ctrl", "q", "e",
    "r", "f", "g", "z", "x", "c", "v", "b",
)


class DBusFrameError(ValueError):
    """A frame whose stick channels are out of range."""


class _Port(Protocol):
    def read(self, size: int = 1) -> bytes: ...


def _int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _channel(bits: int) -> int:
    value = (bits & 0x07FF) - CHANNEL_OFFSET
    return 0 if -CHANNEL_DEADBAND <= value <= CHANNEL_DEADBAND else value


@dataclass(frozen=True)
class DBusRaw:
    """Decoded fields of one receiver frame, in receiver units."""

    ch0: int = 0
    ch1: int = 0
    ch2: int = 0
    ch3: int = 0
    s0: int = 0
    s1: int = 0
    wheel: int = 0
    x: int = 0
    y: int = 0
    z: int = 0
    l: int = 0  # noqa: E741
    r: int = 0
    key: int = 0


def unpack(frame: bytes) -> DBusRaw:
    """Decode an 18-byte frame.

    Stick values within the dead band around the centre read as zero.
    Raises :class:`DBusFrameError` if any stick channel exceeds the limit.
    """
    b = bytes(frame)
    if len(b) != FRAME_SIZE:
        raise ValueError(f"a DBus frame is {FRAME_SIZE} bytes, got {len(b)}")
    ch0 = _channel(b[0] | b[1] << 8)
    ch1 = _channel(b[1] >> 3 | b[2] << 5)
    ch2 = _channel(b[2] >> 6 | b[3] << 2 | b[4] << 10)
    ch3 = _channel(b[4] >> 1 | b[5] << 7)
    s0 = (b[5] >> 4) & 0x03
    s1 = ((b[5] >> 4) & 0x0C) >> 2
    if any(abs(c) > CHANNEL_LIMIT for c in (ch0, ch1, ch2, ch3)):
        raise DBusFrameError("stick channel out of range")
    return DBusRaw(
        ch0=ch0,
        ch1=ch1,
        ch2=ch2,
        ch3=ch3,
        s0=s0,
        s1=s1,
        wheel=_int16((b[16] | b[17] << 8) - CHANNEL_OFFSET),
        x=_int16(b[6] | b[7] << 8),
        y=_int16(b[8] | b[9] << 8),
        z=_int16(b[10] | b[11] << 8),
        l=b[12],
        r=b[13],
        key=b[14] | b[15] << 8,
    )


@dataclass
class DbusData:
    """Normalised controller state as published to the rest of the robot."""

    ch_r_x: float = 0.0
    ch_r_y: float = 0.0
    ch_l_x: float = 0.0
    ch_l_y: float = 0.0
    m_x: float = 0.0
    m_y: float = 0.0
    m_z: float = 0.0
    wheel: float = 0.0
    s_l: int = 0
    s_r: int = 0
    p_l: int = 0
    p_r: int = 0
    key_w: bool = False
    key_s: bool = False
    key_a: bool = False
    key_d: bool = False
    key_shift: bool = False
    key_ctrl: bool = False
    key_q: bool = False
    key_e: bool = False
    key_r: bool = False
    key_f: bool = False
    key_g: bool = False
    key_z: bool = False
    key_x: bool = False
    key_c: bool = False
    key_v: bool = False
    key_b: bool = False
    stamp: float = 0.0

    def update_from(self, raw: DBusRaw, stamp: Optional[float] = None) -> None:
        """Copy ``raw`` in; a switch reading of 0 keeps the previous position."""
        self.ch_r_x = raw.ch0 / 660.0
        self.ch_r_y = raw.ch1 / 660.0
        self.ch_l_x = raw.ch2 / 660.0
        self.ch_l_y = raw.ch3 / 660.0
        self.m_x = raw.x / MOUSE_SCALE
        self.m_y = raw.y / MOUSE_SCALE
        self.m_z = raw.z / MOUSE_SCALE
        self.wheel = raw.wheel / 660.0
        if raw.s1 != 0:
            self.s_l = raw.s1
        if raw.s0 != 0:
            self.s_r = raw.s0
        self.p_l = raw.l
        self.p_r = raw.r
        for bit, name in enumerate(_KEY_NAMES):
            setattr(self, f"key_{name}", bool((raw.key >> bit) & 1))
        if stamp is not None:
            self.stamp = stamp


class DBus:
    """Reads receiver bytes from a port and keeps the latest decoded frame."""

    def __init__(self, port: _Port, clock: Callable[[], float] = time.time) -> None:
        self._port = port
        self._clock = clock
        self._buffer: deque[int] = deque([0] * FRAME_SIZE, maxlen=FRAME_SIZE)
        self._raw = DBusRaw()
        self._success = False
        self._updated = False

    @property
    def raw(self) -> DBusRaw:
        return self._raw

    @property
    def is_success(self) -> bool:
        return self._success

    @property
    def is_updated(self) -> bool:
        return self._updated

    def read(self) -> bool:
        """Drain the port until it stays idle, then decode the last 18 bytes.

        Returns whether a full frame arrived during this call.
        """
        idle = 0
        count = 0
        while idle < MAX_IDLE_READS:
            chunk = self._port.read(1)
            if not chunk:
                idle += 1
            else:
                self._buffer.append(chunk[0])
                count += 1
        try:
            self._raw = unpack(bytes(self._buffer))
            self._success = True
        except DBusFrameError:
            self._success = False
        if count < FRAME_SIZE - 1:
            self._raw = DBusRaw()
            self._updated = False
        else:
            self._updated = True
        return self._updated

    def fill(self, data: DbusData) -> None:
        """Write the latest frame into ``data`` if the last decode succeeded."""
        if self._success:
            data.update_from(self._raw, self._clock() if self._updated else None)


def open_serial(device: str) -> serial.Serial:
    """Open ``device`` at 100 kbaud, 8E1, non-blocking, without flow control."""
    return serial.Serial(
        port=device,
        baudrate=BAUDRATE,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_EVEN,
        stopbits=serial.STOPBITS_ONE,
        timeout=0,
        xonxoff=False,
        rtscts=False,
        dsrdtr=False,
    )