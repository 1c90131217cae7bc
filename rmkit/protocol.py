"""Referee serial protocol: command identifiers and fixed-layout records."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar


class RefereeCmdId(IntEnum):
    GAME_STATUS_CMD = 0x0001
    GAME_RESULT_CMD = 0x0002
    GAME_ROBOT_HP_CMD = 0x0003
    DART_STATUS_CMD = 0x0004
    ICRA_ZONE_STATUS_CMD = 0x0005
    FIELD_EVENTS_CMD = 0x0101
    SUPPLY_PROJECTILE_ACTION_CMD = 0x0102
    REFEREE_WARNING_CMD = 0x0104
    DART_INFO_CMD = 0x0105
    ROBOT_STATUS_CMD = 0x0201
    POWER_HEAT_DATA_CMD = 0x0202
    ROBOT_POS_CMD = 0x0203
    BUFF_CMD = 0x0204
    AERIAL_ROBOT_ENERGY_CMD = 0x0205
    ROBOT_HURT_CMD = 0x0206
    SHOOT_DATA_CMD = 0x0207
    BULLET_REMAINING_CMD = 0x0208
    ROBOT_RFID_STATUS_CMD = 0x0209
    DART_CLIENT_CMD = 0x020A
    ROBOTS_POS_CMD = 0x020B
    RADAR_MARK_CMD = 0x020C
    SENTRY_INFO_CMD = 0x020D
    RADAR_INFO_CMD = 0x020E
    INTERACTIVE_DATA_CMD = 0x0301
    CUSTOM_CONTROLLER_CMD = 0x0302
    TARGET_POS_CMD = 0x0303
    ROBOT_COMMAND_CMD = 0x0304
    CLIENT_MAP_CMD = 0x0305
    CUSTOM_CLIENT_CMD = 0x0306
    MAP_SENTRY_CMD = 0x0307
    CUSTOM_TO_ROBOT_CMD = 0x0308
    ROBOT_TO_CUSTOM_CMD = 0x0309
    POWER_MANAGEMENT_SAMPLE_AND_STATUS_DATA_CMD = 0x8301
    POWER_MANAGEMENT_INITIALIZATION_EXCEPTION_CMD = 0x8302
    POWER_MANAGEMENT_SYSTEM_EXCEPTION_CMD = 0x8303
    POWER_MANAGEMENT_PROCESS_STACK_OVERFLOW_CMD = 0x8304
    POWER_MANAGEMENT_UNKNOWN_EXCEPTION_CMD = 0x8305


class DataCmdId(IntEnum):
    ROBOT_INTERACTIVE_CMD_MIN = 0x0200
    ROBOT_INTERACTIVE_CMD_MAX = 0x02FF
    CLIENT_GRAPH_DELETE_CMD = 0x0100
    CLIENT_GRAPH_SINGLE_CMD = 0x0101
    CLIENT_GRAPH_DOUBLE_CMD = 0x0102
    CLIENT_GRAPH_FIVE_CMD = 0x0103
    CLIENT_GRAPH_SEVEN_CMD = 0x0104
    CLIENT_CHARACTER_CMD = 0x0110
    SENTRY_CMD = 0x0120
    RADAR_CMD = 0x0121
    # Values shared with the interactive range above become aliases.
    BULLET_NUM_SHARE_CMD = 0x0200
    SENTRY_TO_RADAR_CMD = 0x0201
    RADAR_TO_SENTRY_CMD = 0x0202


class RobotId(IntEnum):
    RED_HERO = 1
    RED_ENGINEER = 2
    RED_STANDARD_3 = 3
    RED_STANDARD_4 = 4
    RED_STANDARD_5 = 5
    RED_AERIAL = 6
    RED_SENTRY = 7
    RED_RADAR = 9
    RED_OUTPOST = 10
    RED_BASE = 11
    BLUE_HERO = 101
    BLUE_ENGINEER = 102
    BLUE_STANDARD_3 = 103
    BLUE_STANDARD_4 = 104
    BLUE_STANDARD_5 = 105
    BLUE_AERIAL = 106
    BLUE_SENTRY = 107
    BLUE_RADAR = 109
    BLUE_OUTPOST = 110
    BLUE_BASE = 111


class ClientId(IntEnum):
    RED_HERO_CLIENT = 0x0101
    RED_ENGINEER_CLIENT = 0x0102
    RED_STANDARD_3_CLIENT = 0x0103
    RED_STANDARD_4_CLIENT = 0x0104
    RED_STANDARD_5_CLIENT = 0x0105
    RED_AERIAL_CLIENT = 0x0106
    BLUE_HERO_CLIENT = 0x0165
    BLUE_ENGINEER_CLIENT = 0x0166
    BLUE_STANDARD_3_CLIENT = 0x0167
    BLUE_STANDARD_4_CLIENT = 0x0168
    BLUE_STANDARD_5_CLIENT = 0x0169
    BLUE_AERIAL_CLIENT = 0x016A
    REFEREE_SERVER = 0x8080


class GraphOperation(IntEnum):
    ADD = 1
    UPDATE = 2
    DELETE = 3


class GraphColor(IntEnum):
    MAIN_COLOR = 0
    YELLOW = 1
    GREEN = 2
    ORANGE = 3
    PURPLE = 4
    PINK = 5
    CYAN = 6
    BLACK = 7
    WHITE = 8


class GraphType(IntEnum):
    LINE = 0
    RECTANGLE = 1
    CIRCLE = 2
    ELLIPSE = 3
    ARC = 4
    FLOAT_NUM = 5
    INT_NUM = 6
    STRING = 7


def _unpack(name: str, fmt: str, data: bytes) -> tuple:
    size = struct.calcsize(fmt)
    if len(data) < size:
        raise ValueError(f"{name} needs {size} bytes, got {len(data)}")
    return struct.unpack_from(fmt, data)


@dataclass
class FrameHeader:
    """Five-byte header that starts every referee frame."""

    sof: int
    data_length: int
    seq: int
    crc_8: int

    FORMAT: ClassVar[str] = "<BHBB"
    SIZE: ClassVar[int] = struct.calcsize("<BHBB")

    @classmethod
    def from_bytes(cls, data: bytes) -> FrameHeader:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))

    def to_bytes(self) -> bytes:
        return struct.pack(self.FORMAT, self.sof, self.data_length, self.seq, self.crc_8)


@dataclass(frozen=True)
class GameStatus:
    game_type: int
    game_progress: int
    stage_remain_time: int
    sync_time_stamp: int

    FORMAT: ClassVar[str] = "<BHQ"
    SIZE: ClassVar[int] = struct.calcsize("<BHQ")

    @classmethod
    def from_bytes(cls, data: bytes) -> GameStatus:
        bits, remain, stamp = _unpack(cls.__name__, cls.FORMAT, data)
        return cls(bits & 0x0F, (bits >> 4) & 0x0F, remain, stamp)


@dataclass(frozen=True)
class GameRobotHp:
    red_1_robot_hp: int
    red_2_robot_hp: int
    red_3_robot_hp: int
    red_4_robot_hp: int
    reserved_1: int
    red_7_robot_hp: int
    red_outpost_hp: int
    red_base_hp: int
    blue_1_robot_hp: int
    blue_2_robot_hp: int
    blue_3_robot_hp: int
    blue_4_robot_hp: int
    reserved_2: int
    blue_7_robot_hp: int
    blue_outpost_hp: int
    blue_base_hp: int

    FORMAT: ClassVar[str] = "<16H"
    SIZE: ClassVar[int] = struct.calcsize("<16H")

    @classmethod
    def from_bytes(cls, data: bytes) -> GameRobotHp:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))


@dataclass(frozen=True)
class GameRobotStatus:
    robot_id: int
    robot_level: int
    remain_hp: int
    max_hp: int
    shooter_cooling_rate: int
    shooter_cooling_limit: int
    chassis_power_limit: int
    mains_power_gimbal_output: bool
    mains_power_chassis_output: bool
    mains_power_shooter_output: bool

    FORMAT: ClassVar[str] = "<BBHHHHHB"
    SIZE: ClassVar[int] = struct.calcsize("<BBHHHHHB")

    @classmethod
    def from_bytes(cls, data: bytes) -> GameRobotStatus:
        *fields, bits = _unpack(cls.__name__, cls.FORMAT, data)
        return cls(*fields, bool(bits & 0x01), bool(bits & 0x02), bool(bits & 0x04))


@dataclass(frozen=True)
class PowerHeatData:
    reserved_1: int
    reserved_2: int
    reserved_3: float
    chassis_power_buffer: int
    shooter_id_1_17_mm_cooling_heat: int
    shooter_id_2_17_mm_cooling_heat: int
    shooter_id_1_42_mm_cooling_heat: int

    FORMAT: ClassVar[str] = "<HHfHHHH"
    SIZE: ClassVar[int] = struct.calcsize("<HHfHHHH")

    @classmethod
    def from_bytes(cls, data: bytes) -> PowerHeatData:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))


@dataclass(frozen=True)
class RobotHurt:
    armor_id: int
    hurt_type: int

    FORMAT: ClassVar[str] = "<B"
    SIZE: ClassVar[int] = 1

    @classmethod
    def from_bytes(cls, data: bytes) -> RobotHurt:
        (bits,) = _unpack(cls.__name__, cls.FORMAT, data)
        return cls(bits & 0x0F, (bits >> 4) & 0x0F)


@dataclass(frozen=True)
class ShootData:
    bullet_type: int
    shooter_id: int
    bullet_freq: int
    bullet_speed: float

    FORMAT: ClassVar[str] = "<BBBf"
    SIZE: ClassVar[int] = struct.calcsize("<BBBf")

    @classmethod
    def from_bytes(cls, data: bytes) -> ShootData:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))


@dataclass(frozen=True)
class BulletAllowance:
    bullet_allowance_num_17_mm: int
    bullet_allowance_num_42_mm: int
    coin_remaining_num: int

    FORMAT: ClassVar[str] = "<HHH"
    SIZE: ClassVar[int] = struct.calcsize("<HHH")

    @classmethod
    def from_bytes(cls, data: bytes) -> BulletAllowance:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))


@dataclass(frozen=True)
class Buff:
    recovery_buff: int
    cooling_buff: int
    defence_buff: int
    vulnerability_buff: int
    attack_buff: int
    remaining_energy: int

    FORMAT: ClassVar[str] = "<BBBBHB"
    SIZE: ClassVar[int] = struct.calcsize("<BBBBHB")

    @classmethod
    def from_bytes(cls, data: bytes) -> Buff:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))


@dataclass
class InteractiveDataHeader:
    """Header of robot-to-robot and robot-to-client interactive data."""

    data_cmd_id: int
    sender_id: int
    receiver_id: int

    FORMAT: ClassVar[str] = "<HHH"
    SIZE: ClassVar[int] = struct.calcsize("<HHH")

    @classmethod
    def from_bytes(cls, data: bytes) -> InteractiveDataHeader:
        return cls(*_unpack(cls.__name__, cls.FORMAT, data))

    def to_bytes(self) -> bytes:
        return struct.pack(self.FORMAT, self.data_cmd_id, self.sender_id, self.receiver_id)


@dataclass(frozen=True)
class PowerManagementSampleAndStatusData:
    chassis_power_high_8_bit: int
    chassis_power_low_8_bit: int
    chassis_expect_power_high_8_bit: int
    chassis_expect_power_low_8_bit: int
    capacity_recent_charge_power_high_8_bit: int
    capacity_recent_charge_power_low_8_bit: int
    capacity_remain_charge_high_8_bit: int
    capacity_remain_charge_low_8_bit: int
    capacity_expect_charge_power: int
    power_management_topology: int
    power_management_protection_info: int
    state_machine_running_state: int

    FORMAT: ClassVar[str] = "<10B"
    SIZE: ClassVar[int] = 10

    @classmethod
    def from_bytes(cls, data: bytes) -> PowerManagementSampleAndStatusData:
        *fields, bits = _unpack(cls.__name__, cls.FORMAT, data)
        return cls(*fields, bits & 0x03, (bits >> 2) & 0x03, (bits >> 4) & 0x0F)