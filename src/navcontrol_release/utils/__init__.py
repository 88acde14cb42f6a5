"""Shared utility helpers."""

from navcontrol_release.utils.paths import (
    atomic_temp_path,
    copy_file_atomically,
    write_json_atomically,
)
from navcontrol_release.utils.time_utils import Clock, fixed_clock, now_local, parse_iso_timestamp

__all__ = [
    "atomic_temp_path",
    "copy_file_atomically",
    "write_json_atomically",
    "Clock",
    "fixed_clock",
    "now_local",
    "parse_iso_timestamp",
]
