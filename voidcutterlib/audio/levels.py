#!/usr/bin/env python3

"""
Energy and level measurements shared by loudness normalization and
silence detection, so both agree on how bit depth maps to full scale.
"""

# Standard Library
import math

# PIP3 modules
import numpy

# local repo modules
from voidcutterlib.core import utils

#============================================

def sample_range(buffer, start_frame: int, end_frame: int) -> tuple:
	"""
	Convert a frame range to a clamped sample index range.

	Args:
		buffer: SampleBuffer to index.
		start_frame: First frame of the range.
		end_frame: Frame after the last frame of the range.

	Returns:
		tuple: (start_sample, end_sample), possibly empty.
	"""
	total = buffer.sample_count
	start_sample = min(max(0, start_frame * buffer.channel_count), total)
	end_sample = min(max(0, end_frame * buffer.channel_count), total)
	return (start_sample, end_sample)

#============================================

def normalized_samples(samples: numpy.ndarray, bit_depth: int) -> numpy.ndarray:
	scaled = samples.astype(numpy.float64) / utils.full_scale(bit_depth)
	return numpy.clip(scaled, -1.0, 1.0)

#============================================

def rms_energy(buffer, start_frame: int = 0, end_frame: int = None) -> float:
	"""
	Normalized RMS energy of a frame range.

	Args:
		buffer: SampleBuffer to measure.
		start_frame: First frame of the range.
		end_frame: Frame after the last frame, whole buffer when None.

	Returns:
		float: RMS in [0, 1]; 0.0 for an empty or inverted range.
	"""
	if end_frame is None:
		end_frame = buffer.frame_count
	start_sample, end_sample = sample_range(buffer, start_frame, end_frame)
	if end_sample <= start_sample:
		return 0.0
	window = normalized_samples(buffer.samples[start_sample:end_sample],
		buffer.bit_depth)
	mean_sq = float(numpy.mean(window * window))
	return math.sqrt(mean_sq)

#============================================

def rms_dbfs(buffer, start_frame: int = 0, end_frame: int = None) -> float:
	return utils.amplitude_to_db(rms_energy(buffer, start_frame, end_frame))

#============================================

def peak_amplitude(buffer) -> float:
	"""
	Largest absolute sample relative to the positive full-scale value.

	Returns:
		float: Peak in [0, 1].
	"""
	if buffer.sample_count == 0:
		return 0.0
	max_abs = int(numpy.max(numpy.abs(buffer.samples.astype(numpy.int64))))
	peak = max_abs / float(utils.max_sample_value(buffer.bit_depth))
	return min(peak, 1.0)

#============================================

def is_silent(buffer, start_frame: int, end_frame: int,
	threshold_dbfs: float) -> bool:
	"""
	Classify a frame range as silent against a dBFS threshold.

	Ranges that start past the end of the buffer, or are empty, count as
	silent, as does any range with zero energy.
	"""
	if start_frame >= buffer.frame_count or start_frame >= end_frame:
		return True
	rms = rms_energy(buffer, start_frame, end_frame)
	if rms == 0:
		return True
	return 20.0 * math.log10(rms) <= threshold_dbfs
