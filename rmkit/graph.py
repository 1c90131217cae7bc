"""Client UI graphic elements and their packed wire configuration."""

from __future__ import annotations

import dataclasses
import struct
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from rmkit.protocol import GraphType

_FIELD_BITS = {
    "operate_type": 3,
    "graphic_type": 3,
    "layer": 4,
    "color": 4,
    "start_angle": 9,
    "end_angle": 9,
    "width": 10,
    "start_x": 11,
    "start_y": 11,
    "radius": 10,
    "end_x": 11,
    "end_y": 11,
}


def _as_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class GraphConfig:
    """One graphic element; integer fields are truncated to their bit widths."""

    graphic_id: bytes = b"\x00\x00\x00"
    operate_type: int = 0
    graphic_type: int = 0
    layer: int = 0
    color: int = 0
    start_angle: int = 0
    end_angle: int = 0
    width: int = 0
    start_x: int = 0
    start_y: int = 0
    radius: int = 0
    end_x: int = 0
    end_y: int = 0

    FORMAT: ClassVar[str] = "<3sIII"
    SIZE: ClassVar[int] = struct.calcsize("<3sIII")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "graphic_id":
            value = bytes(value)
            if len(value) != 3:
                raise ValueError("graphic_id must be exactly 3 bytes")
        elif name in _FIELD_BITS:
            value = int(value) & ((1 << _FIELD_BITS[name]) - 1)
        super().__setattr__(name, value)

    def to_bytes(self) -> bytes:
        word1 = (
            self.operate_type
            | self.graphic_type << 3
            | self.layer << 6
            | self.color << 10
            | self.start_angle << 14
            | self.end_angle << 23
        )
        word2 = self.width | self.start_x << 10 | self.start_y << 21
        word3 = self.radius | self.end_x << 10 | self.end_y << 21
        return struct.pack(self.FORMAT, self.graphic_id, word1, word2, word3)

    @classmethod
    def from_bytes(cls, data: bytes) -> GraphConfig:
        if len(data) < cls.SIZE:
            raise ValueError(f"GraphConfig needs {cls.SIZE} bytes, got {len(data)}")
        graphic_id, word1, word2, word3 = struct.unpack_from(cls.FORMAT, data)
        return cls(
            graphic_id=graphic_id,
            operate_type=word1,
            graphic_type=word1 >> 3,
            layer=word1 >> 6,
            color=word1 >> 10,
            start_angle=word1 >> 14,
            end_angle=word1 >> 23,
            width=word2,
            start_x=word2 >> 10,
            start_y=word2 >> 21,
            radius=word3,
            end_x=word3 >> 10,
            end_y=word3 >> 21,
        )


@dataclass
class Graph:
    """A UI element with optional text, remembering what was last sent."""

    config: GraphConfig = field(default_factory=GraphConfig)
    title: str = ""
    content: str = ""

    def __post_init__(self) -> None:
        self._last_config = GraphConfig()
        self._last_title = ""
        self._last_content = ""

    def set_content(self, content: str) -> None:
        """Set the text; the text length is carried in ``end_angle``."""
        self.content = content
        if self.title or self.content:
            self.config.end_angle = len(self.characters().encode("utf-8"))

    def set_int_num(self, num: int) -> None:
        """Spread a 32-bit integer over ``radius``, ``end_x`` and ``end_y``."""
        self.config.radius = num & 1023
        self.config.end_x = (num >> 10) & 2047
        self.config.end_y = num >> 21

    def set_float_num(self, value: float) -> None:
        """Store ``value`` in thousandths, as for :meth:`set_int_num`."""
        self.set_int_num(int(_as_float32(_as_float32(value) * 1000)))

    def set_start_angle(self, angle: int) -> None:
        """Set the start angle; values outside 0..360 are ignored."""
        if 0 <= angle <= 360:
            self.config.start_angle = angle

    def set_end_angle(self, angle: int) -> None:
        """Set the end angle; values outside 0..360 are ignored."""
        if 0 <= angle <= 360:
            self.config.end_angle = angle

    def characters(self) -> str:
        return self.title + self.content

    def is_repeated(self) -> bool:
        """True when nothing changed since :meth:`update_last_config`."""
        return (
            self.config == self._last_config
            and self.title == self._last_title
            and self.content == self._last_content
        )

    def is_string(self) -> bool:
        return self.config.graphic_type == GraphType.STRING

    def update_last_config(self) -> None:
        self._last_content = self.content
        self._last_title = self.title
        self._last_config = dataclasses.replace(self.config)

    @property
    def last_config(self) -> Optional[GraphConfig]:
        return self._last_config