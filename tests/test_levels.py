#!/usr/bin/env python3

"""
Unit tests for energy analysis and chunk classification.
"""

# Standard Library
import math
import os
import sys

# PIP3 modules
import numpy
import pytest

TESTS_DIR = os.path.abspath(os.path.dirname(__file__))
if TESTS_DIR not in sys.path:
	sys.path.insert(0, TESTS_DIR)
from audio_fixtures import make_buffer

# local repo modules
from voidcutterlib.audio import levels
from voidcutterlib.core import utils

#============================================

def test_full_scale_per_bit_depth() -> None:
	"""
	Ensure each bit depth maps to its own full-scale value, 16-bit by default.
	"""
	assert utils.full_scale(16) == 32768.0
	assert utils.full_scale(24) == 8388608.0
	assert utils.full_scale(32) == 2147483648.0
	assert utils.full_scale(12) == 32768.0
	assert utils.max_sample_value(24) == 8388607

#============================================

def test_rms_of_constant_signal() -> None:
	"""
	Ensure a constant half-scale signal measures 0.5.
	"""
	buffer = make_buffer(numpy.full(100, 16384))
	assert levels.rms_energy(buffer, 0, 100) == pytest.approx(0.5)

#============================================

def test_rms_uses_bit_depth() -> None:
	"""
	Ensure the same integer value is quieter at 24 bits than at 16.
	"""
	samples = numpy.full(50, 16384)
	rms16 = levels.rms_energy(make_buffer(samples, bit_depth=16), 0, 50)
	rms24 = levels.rms_energy(make_buffer(samples, bit_depth=24), 0, 50)
	assert rms16 == pytest.approx(0.5)
	assert rms24 == pytest.approx(16384 / 8388608.0)

#============================================

def test_rms_clamps_out_of_range_samples() -> None:
	"""
	Ensure samples beyond full scale are clamped before squaring.
	"""
	buffer = make_buffer(numpy.full(10, 100000), bit_depth=16)
	assert levels.rms_energy(buffer, 0, 10) == pytest.approx(1.0)

#============================================

def test_rms_empty_and_inverted_ranges() -> None:
	"""
	Ensure empty, inverted and out-of-bounds ranges measure zero.
	"""
	buffer = make_buffer(numpy.full(100, 1000))
	assert levels.rms_energy(buffer, 50, 50) == 0.0
	assert levels.rms_energy(buffer, 60, 40) == 0.0
	assert levels.rms_energy(buffer, 200, 300) == 0.0

#============================================

def test_rms_frame_range_on_stereo() -> None:
	"""
	Ensure frame ranges cover every channel of each frame.
	"""
	left = numpy.zeros(20, dtype=numpy.int32)
	right = numpy.zeros(20, dtype=numpy.int32)
	right[10:] = 32768
	samples = numpy.stack((left, right), axis=1).reshape(-1)
	buffer = make_buffer(samples, channels=2)
	assert levels.rms_energy(buffer, 0, 10) == 0.0
	assert levels.rms_energy(buffer, 10, 20) == pytest.approx(math.sqrt(0.5))

#============================================

def test_zero_energy_is_always_silent() -> None:
	"""
	Ensure digital silence is silent even with the lowest threshold.
	"""
	buffer = make_buffer(numpy.zeros(100, dtype=numpy.int32))
	assert levels.is_silent(buffer, 0, 100, -120.0)
	assert levels.is_silent(buffer, 0, 100, 0.0)

#============================================

def test_threshold_comparison_is_inclusive() -> None:
	"""
	Ensure a chunk exactly at the threshold counts as silent.
	"""
	buffer = make_buffer(numpy.full(100, 16384))
	db = 20.0 * math.log10(0.5)
	assert levels.is_silent(buffer, 0, 100, db)
	assert not levels.is_silent(buffer, 0, 100, db - 0.01)

#============================================

def test_out_of_bounds_chunks_are_silent() -> None:
	"""
	Ensure chunks past the end of a buffer or empty chunks are silent.
	"""
	buffer = make_buffer(numpy.full(100, 30000))
	assert levels.is_silent(buffer, 100, 110, -50.0)
	assert levels.is_silent(buffer, 40, 40, -50.0)
	assert not levels.is_silent(buffer, 95, 110, -50.0)

#============================================

def test_clone_is_independent() -> None:
	"""
	Ensure a cloned buffer does not share sample storage.
	"""
	buffer = make_buffer(numpy.full(10, 500), filename="host.wav")
	copy = buffer.clone()
	copy.samples[0] = 0
	assert int(buffer.samples[0]) == 500
	assert copy.filename == "host.wav"
	assert copy.frame_count == buffer.frame_count

#============================================

def test_peak_amplitude() -> None:
	"""
	Ensure peak uses the positive full-scale value and clamps to 1.
	"""
	buffer = make_buffer(numpy.array([0, -32768, 100], dtype=numpy.int32))
	assert levels.peak_amplitude(buffer) == 1.0
	buffer = make_buffer(numpy.array([0, 32767 // 2], dtype=numpy.int32))
	assert levels.peak_amplitude(buffer) == pytest.approx(0.5, abs=1e-4)
	assert levels.peak_amplitude(make_buffer(numpy.array([], dtype=numpy.int32))) == 0.0
