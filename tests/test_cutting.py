#!/usr/bin/env python3

# Standard Library
import os
import sys
import unittest

# PIP3 modules
import numpy

TESTS_DIR = os.path.abspath(os.path.dirname(__file__))
if TESTS_DIR not in sys.path:
	sys.path.insert(0, TESTS_DIR)

# local repo modules
from audio_fixtures import interleave
from audio_fixtures import make_buffer
from audio_fixtures import tone_with_gaps

from voidcutterlib.core.errors import ConfigurationError
from voidcutterlib.silence.cutting import cut_silence_in_files
from voidcutterlib.silence.cutting import cut_silence_regions
from voidcutterlib.silence.detection import detect_common_silence
from voidcutterlib.silence.regions import DetectionConfig
from voidcutterlib.silence.regions import SilenceRegion

#============================================

def _ramp_buffer(frames: int = 1000, channels: int = 1):
	"""Buffer whose sample values equal their sample index."""
	samples = numpy.arange(frames * channels, dtype=numpy.int32)
	return make_buffer(samples, sample_rate=1000, channels=channels)

#============================================

def _region(start: int, end: int, sample_rate: int = 1000) -> SilenceRegion:
	return SilenceRegion.from_frames(start, end, sample_rate)

#============================================

class CutSilenceRegionsTest(unittest.TestCase):
	#============================================
	def test_short_region_is_kept(self) -> None:
		"""Ensure a region no longer than the keep span leaves the buffer alone."""
		buffer = _ramp_buffer()
		original = buffer.samples.copy()
		result = cut_silence_regions(buffer, [_region(100, 200)], 250)
		numpy.testing.assert_array_equal(buffer.samples, original)
		self.assertEqual(result.removed_frames, 0)
		self.assertEqual(result.removed_duration, 0.0)
		self.assertEqual(result.regions_cut, ())
		self.assertEqual(result.new_duration, result.original_duration)

	#============================================
	def test_region_equal_to_keep_is_kept(self) -> None:
		"""Ensure duration equal to keep is treated as short enough."""
		buffer = _ramp_buffer()
		result = cut_silence_regions(buffer, [_region(100, 200)], 100)
		self.assertEqual(result.removed_frames, 0)
		self.assertEqual(buffer.frame_count, 1000)

	#============================================
	def test_front_of_region_is_kept(self) -> None:
		"""Ensure the first keep frames survive and the rest is deleted."""
		buffer = _ramp_buffer()
		result = cut_silence_regions(buffer, [_region(100, 200)], 40)
		self.assertEqual(buffer.frame_count, 940)
		self.assertEqual(result.removed_frames, 60)
		self.assertAlmostEqual(result.removed_duration, 0.06)
		self.assertAlmostEqual(result.new_duration, 0.94)
		self.assertAlmostEqual(result.original_duration, 1.0)
		expected = numpy.concatenate((numpy.arange(0, 140), numpy.arange(200, 1000)))
		numpy.testing.assert_array_equal(buffer.samples, expected)
		self.assertEqual(len(result.regions_cut), 1)

	#============================================
	def test_zero_keep_removes_whole_region(self) -> None:
		"""Ensure keep of zero deletes every frame of the region."""
		buffer = _ramp_buffer()
		cut_silence_regions(buffer, [_region(100, 200)], 0)
		self.assertEqual(buffer.frame_count, 900)
		self.assertEqual(int(buffer.samples[99]), 99)
		self.assertEqual(int(buffer.samples[100]), 200)

	#============================================
	def test_multiple_regions_use_original_indices(self) -> None:
		"""Ensure later cuts never shift earlier region indices."""
		buffer = _ramp_buffer()
		regions = [_region(100, 200), _region(400, 600), _region(800, 1000)]
		result = cut_silence_regions(buffer, regions, 50)
		expected = numpy.concatenate((
			numpy.arange(0, 150),
			numpy.arange(200, 450),
			numpy.arange(600, 850),
		))
		numpy.testing.assert_array_equal(buffer.samples, expected)
		self.assertEqual(result.removed_frames, 50 + 150 + 150)
		self.assertEqual(buffer.frame_count, 1000 - result.removed_frames)
		self.assertEqual([r.start_frame for r in result.regions_cut], [100, 400, 800])

	#============================================
	def test_stereo_interleaving_preserved(self) -> None:
		"""Ensure cuts land on frame boundaries in multichannel audio."""
		left = numpy.arange(1000, dtype=numpy.int32)
		right = -numpy.arange(1000, dtype=numpy.int32)
		buffer = make_buffer(interleave(left, right), sample_rate=1000, channels=2)
		cut_silence_regions(buffer, [_region(100, 200)], 40)
		self.assertEqual(buffer.frame_count, 940)
		frames = buffer.frames()
		numpy.testing.assert_array_equal(frames[:, 0], -frames[:, 1])
		self.assertEqual(int(frames[139, 0]), 139)
		self.assertEqual(int(frames[140, 0]), 200)

	#============================================
	def test_region_past_buffer_end_is_clamped(self) -> None:
		"""Ensure a region running past the buffer only removes what exists."""
		buffer = _ramp_buffer(frames=900)
		result = cut_silence_regions(buffer, [_region(800, 1000)], 50)
		self.assertEqual(result.removed_frames, 50)
		self.assertEqual(buffer.frame_count, 850)

	#============================================
	def test_clamped_region_shorter_than_keep(self) -> None:
		"""Ensure a clamped span shorter than keep is kept whole."""
		buffer = _ramp_buffer(frames=820)
		result = cut_silence_regions(buffer, [_region(800, 1000)], 50)
		self.assertEqual(result.removed_frames, 0)
		self.assertEqual(buffer.frame_count, 820)
		self.assertEqual(result.regions_cut, ())

	#============================================
	def test_negative_keep_rejected(self) -> None:
		"""Ensure a negative keep duration is a configuration error."""
		with self.assertRaises(ConfigurationError):
			cut_silence_regions(_ramp_buffer(), [_region(100, 200)], -1)

	#============================================
	def test_empty_buffer_is_no_op(self) -> None:
		"""Ensure cutting an empty buffer returns an empty result."""
		buffer = make_buffer(numpy.array([], dtype=numpy.int32))
		result = cut_silence_regions(buffer, [_region(100, 200)], 0)
		self.assertEqual(result.removed_frames, 0)
		self.assertEqual(buffer.frame_count, 0)

#============================================

class CutMultipleFilesTest(unittest.TestCase):
	#============================================
	def test_tracks_stay_aligned(self) -> None:
		"""Ensure detected regions cut every track by the same frames."""
		gaps = [(100, 300), (600, 900)]
		track_a = make_buffer(tone_with_gaps(1000, 1000, gaps), filename="a.wav")
		track_b = make_buffer(tone_with_gaps(1200, 1000, gaps), filename="b.wav")
		config = DetectionConfig(min_duration_ms=100, chunk_size_ms=10)
		detection = detect_common_silence([track_a, track_b], config)
		results = cut_silence_in_files([track_a, track_b], detection.regions, 50)
		self.assertEqual(results[0].removed_frames, results[1].removed_frames)
		self.assertEqual(results[0].removed_frames, 150 + 250)
		self.assertEqual(track_a.frame_count, 600)
		# unanalyzed tail of the longer track is preserved
		self.assertEqual(track_b.frame_count, 800)
		numpy.testing.assert_array_equal(track_a.samples, track_b.samples[:600])

	#============================================
	def test_no_buffers_rejected(self) -> None:
		"""Ensure an empty buffer list is a configuration error."""
		with self.assertRaises(ConfigurationError):
			cut_silence_in_files([], [], 100)

	#============================================
	def test_deterministic_on_clones(self) -> None:
		"""Ensure cutting two copies of a buffer gives identical results."""
		gaps = [(100, 300), (600, 900)]
		track = make_buffer(tone_with_gaps(1000, 1000, gaps), filename="a.wav")
		config = DetectionConfig(min_duration_ms=100, chunk_size_ms=10)
		regions = detect_common_silence([track], config).regions
		first = track.clone()
		second = track.clone()
		first_result = cut_silence_regions(first, regions, 50)
		second_result = cut_silence_regions(second, regions, 50)
		self.assertEqual(first_result, second_result)
		numpy.testing.assert_array_equal(first.samples, second.samples)
		# the source buffer is untouched by cutting its clones
		self.assertEqual(track.frame_count, 1000)

	#============================================
	def test_idempotent_when_keep_covers_regions(self) -> None:
		"""Ensure a keep span longer than every region changes nothing."""
		gaps = [(100, 300), (600, 900)]
		track = make_buffer(tone_with_gaps(1000, 1000, gaps))
		original = track.samples.copy()
		config = DetectionConfig(min_duration_ms=100, chunk_size_ms=10)
		detection = detect_common_silence([track], config)
		cut_silence_in_files([track], detection.regions, 300)
		numpy.testing.assert_array_equal(track.samples, original)

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
