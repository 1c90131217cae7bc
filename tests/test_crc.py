import pytest

from rmkit.crc import (
    CRC8_INIT,
    CRC8_TABLE,
    CRC16_INIT,
    CRC16_TABLE,
    append_crc8,
    append_crc16,
    crc8,
    crc16,
    verify_crc8,
    verify_crc16,
)


def test_default_initial_values():
    assert crc8(b"") == 0xFF
    assert crc16(b"") == 0xFFFF


@pytest.mark.parametrize(
    "index, expected",
    [(0, 0x00), (1, 0x5E), (2, 0xBC), (128, 0x8C), (255, 0x35)],
)
def test_crc8_single_byte_values(index, expected):
    assert crc8(bytes([index]), 0) == expected


@pytest.mark.parametrize(
    "index, expected",
    [(0, 0x0000), (1, 0x1189), (2, 0x2312), (128, 0x8408), (255, 0x0F78)],
)
def test_crc16_single_byte_values(index, expected):
    assert crc16(bytes([index]), 0) == expected


def test_single_byte_checksums_are_distinct():
    assert len({crc8(bytes([i]), 0) for i in range(256)}) == 256
    assert len({crc16(bytes([i]), 0) for i in range(256)}) == 256


def test_crc8_check_value():
    assert crc8(b"123456789", 0) == 0xA1


def test_crc16_check_value():
    assert crc16(b"123456789", 0xFFFF) == 0x6F91


def test_empty_data_returns_init():
    assert crc8(b"") == CRC8_INIT
    assert crc16(b"") == CRC16_INIT
    assert crc8(b"", 0x12) == 0x12


def test_crc8_single_byte_uses_table():
    assert crc8(bytes([0x00])) == CRC8_TABLE[0xFF]
    assert crc8(bytes([0x01]), 0) == CRC8_TABLE[1]


def test_crc16_single_byte_uses_table():
    assert crc16(bytes([0x01]), 0) == CRC16_TABLE[1]


def test_crc_is_incremental():
    data = b"referee frame payload"
    assert crc8(data[5:], crc8(data[:5])) == crc8(data)
    assert crc16(data[7:], crc16(data[:7])) == crc16(data)


def test_append_crc8_header_round_trip():
    header = bytes([0xA5, 0x0A, 0x00, 0x01, 0x00])
    framed = append_crc8(header)
    assert len(framed) == 5
    assert framed[:4] == header[:4]
    assert verify_crc8(framed)
    assert framed[4] == crc8(header[:4])


def test_append_crc16_round_trip():
    frame = bytes([0xA5, 0x02, 0x00, 0x07, 0x00, 0x01, 0x02, 0x33, 0x44, 0x00, 0x00])
    framed = append_crc16(frame)
    assert len(framed) == len(frame)
    assert framed[:-2] == frame[:-2]
    assert verify_crc16(framed)
    assert int.from_bytes(framed[-2:], "little") == crc16(frame[:-2])


def test_verify_detects_corruption():
    framed8 = append_crc8(bytes([0xA5, 0x10, 0x00, 0x03, 0x00]))
    framed16 = append_crc16(bytes(range(20)) + b"\x00\x00")
    for position in range(len(framed8)):
        corrupted = bytearray(framed8)
        corrupted[position] ^= 0x01
        assert not verify_crc8(bytes(corrupted))
    for position in range(len(framed16)):
        corrupted = bytearray(framed16)
        corrupted[position] ^= 0x80
        assert not verify_crc16(bytes(corrupted))


@pytest.mark.parametrize("frame", [b"", b"\x01", b"\x01\x02"])
def test_short_frames_fail_verification(frame):
    assert verify_crc8(frame) is False
    assert verify_crc16(frame) is False


@pytest.mark.parametrize("frame", [b"", b"\x01", b"\x01\x02"])
def test_short_frames_are_not_changed(frame):
    assert append_crc8(frame) == frame
    assert append_crc16(frame) == frame


def test_append_accepts_bytearray_and_returns_bytes():
    frame = bytearray([1, 2, 3, 0])
    framed = append_crc8(frame)
    assert isinstance(framed, bytes)
    assert verify_crc8(framed)
    assert frame == bytearray([1, 2, 3, 0])


def test_full_frame_with_both_checksums():
    header = append_crc8(bytes([0xA5, 0x03, 0x00, 0x05, 0x00]))
    body = header + bytes([0x01, 0x02, 0x0A, 0x0B, 0x0C]) + b"\x00\x00"
    frame = append_crc16(body)
    assert verify_crc8(frame[:5])
    assert verify_crc16(frame)