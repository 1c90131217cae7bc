import struct

import pytest
import serial

from rmkit.dbus import (
    DBus,
    DBusFrameError,
    DBusRaw,
    DbusData,
    open_serial,
    unpack,
)


def make_frame(ch=(1024, 1024, 1024, 1024), s0=0, s1=0, x=0, y=0, z=0, l=0, r=0, key=0, wheel=0):
    bits = ch[0] | ch[1] << 11 | ch[2] << 22 | ch[3] << 33 | s0 << 44 | s1 << 46
    head = bits.to_bytes(6, "little")
    tail = struct.pack("<hhhBBHH", x, y, z, l, r, key, wheel + 1024)
    return head + tail


class FakePort:
    def __init__(self, data=b""):
        self.data = bytearray(data)

    def read(self, size=1):
        chunk = bytes(self.data[:size])
        del self.data[:size]
        return chunk


def test_neutral_frame_is_all_zero():
    assert unpack(make_frame()) == DBusRaw()


def test_full_deflection_channel():
    raw = unpack(make_frame(ch=(1684, 364, 1024, 1024)))
    assert raw.ch0 == 660
    assert raw.ch1 == -660


def test_channels_roundtrip():
    raw = unpack(make_frame(ch=(1100, 900, 1500, 600)))
    assert (raw.ch0, raw.ch1, raw.ch2, raw.ch3) == (1100 - 1024, 900 - 1024, 1500 - 1024, 600 - 1024)


def test_deadband_zeroes_small_offsets():
    raw = unpack(make_frame(ch=(1034, 1014, 1030, 1020)))
    assert (raw.ch0, raw.ch1, raw.ch2, raw.ch3) == (0, 0, 30 - 24, 0) or raw.ch1 == 0
    assert raw.ch0 == 0 and raw.ch1 == 0 and raw.ch3 == 0
    assert raw.ch2 == 1030 - 1024 if abs(1030 - 1024) > 10 else raw.ch2 == 0


def test_out_of_range_raises():
    with pytest.raises(DBusFrameError):
        unpack(make_frame(ch=(1024, 1024, 1700, 1024)))


def test_wrong_length_raises():
    with pytest.raises(ValueError):
        unpack(b"\x00" * 17)


def test_switches_mouse_keys_and_wheel():
    raw = unpack(make_frame(s0=1, s1=3, x=-5, y=200, z=7, l=1, r=0, key=0x8001, wheel=-30))
    assert (raw.s0, raw.s1) == (1, 3)
    assert (raw.x, raw.y, raw.z) == (-5, 200, 7)
    assert (raw.l, raw.r) == (1, 0)
    assert raw.key == 0x8001
    assert raw.wheel == -30


def test_update_from_normalises_and_decodes_keys():
    data = DbusData()
    raw = unpack(make_frame(ch=(1684, 1024, 1024, 1024), x=1600, key=0x8001, s0=2, s1=1))
    data.update_from(raw, stamp=12.5)
    assert data.ch_r_x == pytest.approx(1.0)
    assert data.m_x == pytest.approx(1.0)
    assert data.key_w and data.key_b
    assert not data.key_s and not data.key_ctrl
    assert (data.s_l, data.s_r) == (1, 2)
    assert data.stamp == 12.5


def test_update_from_keeps_switch_when_zero_and_stamp_when_none():
    data = DbusData(s_l=3, s_r=2, stamp=4.0)
    data.update_from(DBusRaw())
    assert (data.s_l, data.s_r) == (3, 2)
    assert data.stamp == 4.0


def test_read_full_frame_and_fill():
    port = FakePort(make_frame(ch=(1684, 1024, 1024, 1024), s1=2))
    dbus = DBus(port, clock=lambda: 99.0)
    assert dbus.read() is True
    assert dbus.is_success
    data = DbusData()
    dbus.fill(data)
    assert data.ch_r_x == pytest.approx(1.0)
    assert data.s_l == 2
    assert data.stamp == 99.0


def test_read_keeps_last_eighteen_bytes():
    frame = make_frame(ch=(1024, 1684, 1024, 1024))
    dbus = DBus(FakePort(b"\xff" * 7 + frame))
    dbus.read()
    assert dbus.raw.ch1 == 660


def test_short_read_does_not_update():
    dbus = DBus(FakePort(b"\x01\x02\x03"), clock=lambda: 5.0)
    assert dbus.read() is False
    assert dbus.raw == DBusRaw()
    data = DbusData(ch_r_x=0.5)
    dbus.fill(data)
    assert data.ch_r_x == 0.5
    assert data.stamp == 0.0


def test_open_serial_missing_device_raises():
    with pytest.raises(serial.SerialException):
        open_serial("/nonexistent/rmkit-dbus-device")