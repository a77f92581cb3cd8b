#!/usr/bin/env python3

"""
Loudness measurement approximated from RMS.

This is not an ITU-R BS.1770-4 meter: there is no K-weighting and no
gating. Integrated loudness is the whole-file RMS level in dBFS with a
fixed calibration offset.
"""

# Standard Library
import math
from dataclasses import dataclass

# local repo modules
from voidcutterlib.audio import levels
from voidcutterlib.core import utils
from voidcutterlib.core.errors import ConfigurationError

LUFS_CALIBRATION_OFFSET = 0.691
MAX_TARGET_LUFS = -6.0
MIN_TARGET_LUFS = -30.0

#============================================

@dataclass(frozen=True)
class LoudnessResult:
	filename: str
	integrated_loudness: float
	rms_level: float
	true_peak: float
	loudness_range: float = 0.0

	#============================
	@property
	def measurable(self) -> bool:
		return not math.isinf(self.integrated_loudness)

#============================================

def measure_loudness(buffer) -> LoudnessResult:
	"""
	Measure approximate loudness of a whole buffer.

	An empty or all-zero buffer reports -inf for every level.
	"""
	rms_db = levels.rms_dbfs(buffer)
	peak_db = utils.amplitude_to_db(levels.peak_amplitude(buffer))
	return LoudnessResult(
		filename=buffer.filename,
		integrated_loudness=rms_db - LUFS_CALIBRATION_OFFSET,
		rms_level=rms_db,
		true_peak=peak_db,
	)

#============================================

def calculate_gain(current_lufs: float, target_lufs: float) -> float:
	return math.pow(10.0, (target_lufs - current_lufs) / 20.0)

#============================================

def validate_target_loudness(target_lufs: float) -> None:
	# Apple Podcasts -16, Spotify and YouTube -14, EBU R128 broadcast -23
	if math.isnan(target_lufs):
		raise ConfigurationError("target loudness must be a number, got NaN")
	if target_lufs > MAX_TARGET_LUFS:
		raise ConfigurationError(
			f"target loudness {target_lufs:.1f} LUFS is too high (risk of severe clipping)"
		)
	if target_lufs < MIN_TARGET_LUFS:
		raise ConfigurationError(
			f"target loudness {target_lufs:.1f} LUFS is too low (audio will be very quiet)"
		)
	return
