#!/usr/bin/env python3

# Standard Library
import decimal
import math
import os
import sys

_QUIET_MODE = False

#============================================

def set_quiet_mode(quiet: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(quiet)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def info(message: str = "") -> None:
	if _QUIET_MODE:
		return
	print(message)
	return

#============================================

def warn(message: str) -> None:
	sys.stderr.write(f"WARNING: {message}\n")
	return

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.isfile(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def full_scale(bit_depth: int) -> float:
	"""
	Magnitude that maps to 1.0 when normalizing integer samples.

	Unknown bit depths fall back to 16-bit semantics.
	"""
	if bit_depth == 24:
		return 8388608.0
	if bit_depth == 32:
		return 2147483648.0
	return 32768.0

#============================================

def max_sample_value(bit_depth: int) -> int:
	"""
	Largest positive integer sample for the bit depth, 16-bit by default.
	"""
	return int(full_scale(bit_depth)) - 1

#============================================

def amplitude_to_db(value: float) -> float:
	"""
	Convert linear amplitude to dBFS.

	Args:
		value: Linear amplitude.

	Returns:
		float: dBFS value, -inf for zero amplitude.
	"""
	if value is None or value <= 0:
		return -math.inf
	return 20.0 * math.log10(value)

#============================================

def seconds_to_millis(seconds: float) -> int:
	"""
	Round a region time to whole milliseconds, half up.

	The float is rounded through its decimal string representation.

	Args:
		seconds: Time in seconds.

	Returns:
		int: Milliseconds, never negative.
	"""
	millis = decimal.Decimal(str(seconds)) * 1000
	millis = millis.quantize(decimal.Decimal("1"), rounding=decimal.ROUND_HALF_UP)
	return max(0, int(millis))

#============================================

def format_timestamp(seconds: float) -> str:
	"""
	Format a region boundary as an HH:MM:SS.mmm timecode.

	Args:
		seconds: Time in seconds.

	Returns:
		str: Timecode used in console summaries and reports.
	"""
	seconds_total, millis_part = divmod(seconds_to_millis(seconds), 1000)
	minutes_total, seconds_part = divmod(seconds_total, 60)
	hours, minutes = divmod(minutes_total, 60)
	return f"{hours:02d}:{minutes:02d}:{seconds_part:02d}.{millis_part:03d}"

#============================================

def format_db(value: float) -> str:
	if value == -math.inf:
		return "-inf"
	return f"{value:.1f}"

#============================================

def percent(part: float, whole: float) -> float:
	if whole <= 0:
		return 0.0
	return (part / whole) * 100.0

#============================================

def generate_output_filename(input_file: str, suffix: str) -> str:
	dirname = os.path.dirname(input_file)
	basename, ext = os.path.splitext(os.path.basename(input_file))
	return os.path.join(dirname, basename + suffix + ext)
