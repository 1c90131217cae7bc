"""CRC-8 and CRC-16 checksums used by the referee serial protocol.

Frames carry their checksum in the trailing byte(s): CRC-8 in the last byte
of the frame header, CRC-16 little-endian in the last two bytes of a frame.
"""

from __future__ import annotations

CRC8_INIT = 0xFF
CRC16_INIT = 0xFFFF

_CRC8_POLY = 0x8C  # reflected 0x31
_CRC16_POLY = 0x8408  # reflected 0x1021


def _reflected_table(poly: int) -> tuple[int, ...]:
    def entry(value: int) -> int:
        for _ in range(8):
            value = (value >> 1) ^ poly if value & 1 else value >> 1
        return value

    return tuple(entry(i) for i in range(256))


CRC8_TABLE = _reflected_table(_CRC8_POLY)
CRC16_TABLE = _reflected_table(_CRC16_POLY)


def crc8(data: bytes, init: int = CRC8_INIT) -> int:
    """Return the CRC-8 of ``data`` starting from ``init``."""
    crc = init & 0xFF
    for byte in data:
        crc = CRC8_TABLE[crc ^ byte]
    return crc


def verify_crc8(frame: bytes) -> bool:
    """Check that the last byte of ``frame`` is the CRC-8 of the bytes before it."""
    if len(frame) <= 2:
        return False
    return crc8(frame[:-1]) == frame[-1]


def append_crc8(frame: bytes) -> bytes:
    """Return ``frame`` with its last byte replaced by the CRC-8 of the rest.

    Frames of two bytes or fewer are returned unchanged.
    """
    frame = bytes(frame)
    if len(frame) <= 2:
        return frame
    return frame[:-1] + bytes([crc8(frame[:-1])])


def crc16(data: bytes, init: int = CRC16_INIT) -> int:
    """Return the CRC-16 of ``data`` starting from ``init``."""
    crc = init & 0xFFFF
    for byte in data:
        crc = (crc >> 8) ^ CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc


def verify_crc16(frame: bytes) -> bool:
    """Check that the last two bytes of ``frame`` hold its CRC-16, little-endian."""
    if len(frame) <= 2:
        return False
    expected = crc16(frame[:-2])
    return frame[-2] == (expected & 0xFF) and frame[-1] == ((expected >> 8) & 0xFF)


def append_crc16(frame: bytes) -> bytes:
    """Return ``frame`` with its last two bytes replaced by the CRC-16 of the rest.

    Frames of two bytes or fewer are returned unchanged.
    """
    frame = bytes(frame)
    if len(frame) <= 2:
        return frame
    return frame[:-2] + crc16(frame[:-2]).to_bytes(2, "little")