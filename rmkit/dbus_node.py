"""Polls the remote-controller receiver and publishes its state."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
import time
from typing import Callable, Optional, Sequence

import serial

from rmkit.dbus import DBus, DbusData, open_serial

logger = logging.getLogger(__name__)

DEFAULT_SERIAL_PORT = "/dev/usbDbus"
LOOP_RATE_HZ = 60.0


class DBusNode:
    """Reads the receiver once per :meth:`run` and publishes the result."""

    def __init__(
        self,
        publish: Callable[[DbusData], None],
        serial_port: str = DEFAULT_SERIAL_PORT,
        dbus: Optional[DBus] = None,
    ) -> None:
        self.serial_port = serial_port
        self._publish = publish
        self._dbus = dbus if dbus is not None else DBus(open_serial(serial_port))
        self.data = DbusData()

    def run(self) -> DbusData:
        self._dbus.read()
        self._dbus.fill(self.data)
        self._publish(self.data)
        return self.data


def _print_json(data: DbusData) -> None:
    print(json.dumps(dataclasses.asdict(data)), flush=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Publish remote-controller state as JSON lines.")
    parser.add_argument("--serial-port", default=DEFAULT_SERIAL_PORT)
    parser.add_argument("--rate", type=float, default=LOOP_RATE_HZ, help="loop rate in Hz")
    parser.add_argument("--count", type=int, default=None, help="stop after this many cycles")
    args = parser.parse_args(argv)

    try:
        node = DBusNode(_print_json, serial_port=args.serial_port)
    except serial.SerialException as exc:
        logger.error("Unable to open dbus: %s", exc)
        print(f"Unable to open dbus: {exc}", file=sys.stderr)
        return 1

    period = 1.0 / args.rate
    cycles = 0
    next_tick = time.monotonic()
    try:
        while args.count is None or cycles < args.count:
            node.run()
            cycles += 1
            next_tick += period
            delay = next_tick - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            else:
                next_tick = time.monotonic()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())