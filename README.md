# rmkit

Building blocks for competition robots:

- **Filters** (`rmkit.filters`): `MovingAverageFilter`, `ButterworthFilter`,
  `DigitalLpFilter`, `DerivLpFilter`, `FF01Filter`, `FF02Filter`,
  `AverageFilter`, `RampFilter` and `OneEuroFilter`, each with `input()`,
  `output()` and `clear()`, plus the helper `min_abs()`.
- **Time-stamped low-pass filter** (`rmkit.lp_filter`): `LowPassFilter`, a
  second-order Butterworth filter whose sample period comes from the
  timestamps given to `input(value, time)`; an optional `debug_sink` callable
  receives `(time, raw, filtered)` after each filtered sample.
- **Orientation** (`rmkit.orientation`): `quat_to_rpy()`, `yaw_from_quat()`,
  `average_quaternion()` and `rotation_matrix_to_quaternion()`. Quaternions
  are `(x, y, z, w)` tuples.
- **Referee protocol** (`rmkit.crc`, `rmkit.protocol`, `rmkit.graph`):
  CRC-8/CRC-16 checksums (`crc8`, `crc16`, `verify_crc8`, `append_crc8`,
  `verify_crc16`, `append_crc16`), command and robot identifier enums, decoders
  for fixed-layout records (`FrameHeader`, `GameStatus`, `GameRobotHp`,
  `GameRobotStatus`, `PowerHeatData`, `RobotHurt`, `ShootData`,
  `BulletAllowance`, `Buff`, `InteractiveDataHeader`,
  `PowerManagementSampleAndStatusData`), and client UI elements (`GraphConfig`
  with bit-packed `to_bytes()`/`from_bytes()`, and `Graph`, which tracks
  whether its configuration changed since it was last sent).
- **Remote-controller receiver** (`rmkit.dbus`, `rmkit.dbus_node`): decoding
  of 18-byte receiver frames into stick, switch, mouse and keyboard state,
  reading from a serial port, and a polling node.
- **Transform broadcasting** (`rmkit.tf_broadcaster`): `TfBroadcaster` and
  `StaticTfBroadcaster` hand `TransformStamped` batches to a publish callable
  without blocking; the static one keeps one transform per child frame and
  republishes the full set.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

Smoothing a noisy signal:

```python
from rmkit.filters import OneEuroFilter

smoother = OneEuroFilter(120.0, 2.543785, 0.000001, 1.0)
for sample in (1.0, 1.2, 0.9, 1.1):
    smoother.input(sample)
print(smoother.output())
```

Checksumming a referee frame header. The append functions return a new
`bytes` object with the trailing checksum byte(s) filled in:

```python
from rmkit.crc import append_crc8, verify_crc8
from rmkit.protocol import FrameHeader

header = append_crc8(bytes([0xA5, 0x0A, 0x00, 0x01, 0x00]))
assert verify_crc8(header)
print(FrameHeader.from_bytes(header))
```

Decoding a remote-controller frame with all sticks centred:

```python
from rmkit.dbus import DbusData, unpack

frame = bytes([0x00, 0x04, 0x20, 0x00, 0x01, 0x08] + [0] * 10 + [0x00, 0x04])
raw = unpack(frame)          # raises DBusFrameError if a stick is out of range
state = DbusData()
state.update_from(raw)
print(state.ch_r_x, state.key_w)
```

To read from hardware, open the port with `open_serial(device)` (100 kbaud,
8E1, non-blocking), wrap it in `DBus`, call `read()` and then `fill(data)`.

## Command line

`rmkit-dbus` reads the remote-controller receiver and prints each decoded
state as one JSON line on standard output:

```
rmkit-dbus --serial-port /dev/usbDbus --rate 60
```

Options: `--serial-port` (default `/dev/usbDbus`), `--rate` in Hz (default
60) and `--count` to stop after that many cycles. It exits with status 1 if
the port cannot be opened.

## What it does not do

rmkit has no message bus of its own: the node and the broadcasters hand
their data to a callable you supply (the command prints JSON). It decodes and
checksums referee records but does not read the referee serial link, assemble
outgoing UI frames or run a referee client, and it includes no simulator
interface.