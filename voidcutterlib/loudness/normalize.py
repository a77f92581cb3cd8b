#!/usr/bin/env python3

# Standard Library
import math
from dataclasses import dataclass

# PIP3 modules
import numpy

# local repo modules
from voidcutterlib.core import utils
from voidcutterlib.core.errors import ConfigurationError
from voidcutterlib.loudness.measure import calculate_gain
from voidcutterlib.loudness.measure import measure_loudness
from voidcutterlib.loudness.measure import validate_target_loudness

CLIPPING_MARGIN_DB = -0.1
MAX_GAIN_DB_ON_CLIP = 6.0

#============================================

@dataclass(frozen=True)
class NormalizationResult:
	filename: str
	original_loudness: float
	target_loudness: float
	applied_gain: float
	gain_db: float
	clipping_risk: bool
	clipped_samples: int = 0

#============================================

def apply_gain(buffer, gain: float) -> int:
	"""
	Scale samples by a linear gain, clamping to the bit depth range.

	Scaled values are truncated toward zero.

	Returns:
		int: Number of samples that had to be clamped.
	"""
	if buffer.sample_count == 0:
		return 0
	max_value = utils.max_sample_value(buffer.bit_depth)
	min_value = -max_value - 1
	scaled = buffer.samples.astype(numpy.float64) * gain
	clipped = int(numpy.count_nonzero((scaled > max_value) | (scaled < min_value)))
	numpy.clip(scaled, min_value, max_value, out=scaled)
	buffer.samples = numpy.trunc(scaled).astype(numpy.int32)
	if clipped > 0:
		clip_pct = utils.percent(clipped, buffer.sample_count)
		utils.warn(f"clipped {clipped} samples ({clip_pct:.2f}%) in {buffer.filename}")
	return clipped

#============================================

def normalize_audio(buffer, target_lufs: float) -> NormalizationResult:
	"""
	Apply a single gain so the buffer's approximate loudness hits the target.

	When the gain would push the true peak above -0.1 dBFS the result is
	flagged as a clipping risk, and gains above +6 dB are limited to +6 dB.
	A buffer with no measurable loudness is left unchanged.

	Args:
		buffer: SampleBuffer, mutated in place.
		target_lufs: Target loudness in LUFS.

	Returns:
		NormalizationResult: Applied gain and clipping info.
	"""
	validate_target_loudness(target_lufs)
	loudness = measure_loudness(buffer)
	if not loudness.measurable:
		utils.warn(f"no measurable loudness in {buffer.filename}, gain not applied")
		return NormalizationResult(
			filename=buffer.filename,
			original_loudness=loudness.integrated_loudness,
			target_loudness=target_lufs,
			applied_gain=1.0,
			gain_db=0.0,
			clipping_risk=False,
		)
	gain = calculate_gain(loudness.integrated_loudness, target_lufs)
	gain_db = 20.0 * math.log10(gain)
	clipping_risk = False
	if loudness.true_peak + gain_db > CLIPPING_MARGIN_DB:
		clipping_risk = True
		if gain_db > MAX_GAIN_DB_ON_CLIP:
			utils.warn(
				f"limiting gain from {gain_db:.1f} dB to {MAX_GAIN_DB_ON_CLIP:.1f} dB "
				f"to prevent severe clipping in {buffer.filename}"
			)
			gain_db = MAX_GAIN_DB_ON_CLIP
			gain = math.pow(10.0, gain_db / 20.0)
	clipped = apply_gain(buffer, gain)
	return NormalizationResult(
		filename=buffer.filename,
		original_loudness=loudness.integrated_loudness,
		target_loudness=target_lufs,
		applied_gain=gain,
		gain_db=gain_db,
		clipping_risk=clipping_risk,
		clipped_samples=clipped,
	)

#============================================

def normalize_multiple_audio(buffers: list, target_lufs: float) -> list:
	if len(buffers) == 0:
		raise ConfigurationError("no audio files provided")
	results = []
	for buffer in buffers:
		results.append(normalize_audio(buffer, target_lufs))
	return results
