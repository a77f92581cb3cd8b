#!/usr/bin/env python3

# PIP3 modules
import numpy

#============================================

class SampleBuffer():
	"""
	Decoded PCM audio: interleaved integer samples plus format metadata.

	Samples are held as a flat int32 numpy array. Stages that change the
	audio (gain, silence cutting) replace or rewrite `samples` in place on
	this object, so every holder of the buffer sees the edited audio.
	"""
	def __init__(self, samples, sample_rate: int, channel_count: int,
		bit_depth: int = 16, filename: str = None):
		if sample_rate <= 0:
			raise RuntimeError("sample rate must be positive")
		if channel_count < 1:
			raise RuntimeError("channel count must be at least 1")
		data = numpy.asarray(samples, dtype=numpy.int32).reshape(-1)
		if data.size % channel_count != 0:
			raise RuntimeError(
				f"sample count {data.size} is not a multiple of {channel_count} channels"
			)
		self.samples = data
		self.sample_rate = int(sample_rate)
		self.channel_count = int(channel_count)
		self.bit_depth = int(bit_depth)
		self.filename = filename

	#============================
	@property
	def sample_count(self) -> int:
		return int(self.samples.size)

	#============================
	@property
	def frame_count(self) -> int:
		return self.sample_count // self.channel_count

	#============================
	@property
	def duration(self) -> float:
		return self.frame_count / float(self.sample_rate)

	#============================
	def clone(self):
		return SampleBuffer(self.samples.copy(), self.sample_rate,
			self.channel_count, self.bit_depth, self.filename)

	#============================
	def frames(self) -> numpy.ndarray:
		"""Samples viewed as a (frame_count, channel_count) array."""
		return self.samples.reshape(self.frame_count, self.channel_count)

	#============================
	def __repr__(self) -> str:
		return (
			f"SampleBuffer(filename={self.filename!r}, frames={self.frame_count}, "
			f"sample_rate={self.sample_rate}, channels={self.channel_count}, "
			f"bit_depth={self.bit_depth})"
		)
