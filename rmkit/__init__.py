"""Filters, orientation helpers, remote-controller decoding, referee-protocol records and transform broadcasting."""

__version__ = "0.1.0"

__all__ = [
    "crc",
    "dbus",
    "dbus_node",
    "filters",
    "graph",
    "lp_filter",
    "orientation",
    "protocol",
    "tf_broadcaster",
]