#!/usr/bin/env python3

# Standard Library
from dataclasses import dataclass

# local repo modules
from voidcutterlib.core.errors import ConfigurationError

DEFAULT_THRESHOLD_DBFS = -50.0
DEFAULT_MIN_DURATION_MS = 500
DEFAULT_CHUNK_SIZE_MS = 10

#============================================

@dataclass(frozen=True)
class SilenceRegion:
	"""Span of frames, end exclusive, that is silent in every track."""

	start_frame: int
	end_frame: int
	start_time: float
	end_time: float
	duration: float

	#============================
	@classmethod
	def from_frames(cls, start_frame: int, end_frame: int, sample_rate: int):
		if start_frame < 0 or end_frame <= start_frame:
			raise ValueError(
				f"invalid silence region frames: {start_frame}..{end_frame}"
			)
		return cls(
			start_frame=start_frame,
			end_frame=end_frame,
			start_time=start_frame / float(sample_rate),
			end_time=end_frame / float(sample_rate),
			duration=(end_frame - start_frame) / float(sample_rate),
		)

	#============================
	@property
	def frame_count(self) -> int:
		return self.end_frame - self.start_frame

#============================================

@dataclass(frozen=True)
class DetectionConfig:
	threshold_dbfs: float = DEFAULT_THRESHOLD_DBFS
	min_duration_ms: float = DEFAULT_MIN_DURATION_MS
	chunk_size_ms: float = DEFAULT_CHUNK_SIZE_MS

	#============================
	def __post_init__(self):
		# negated comparisons so NaN fails every check
		if not (-120.0 <= self.threshold_dbfs <= 0.0):
			raise ConfigurationError(
				"silence threshold must be between -120.0 and 0.0 dBFS"
			)
		if not (self.min_duration_ms > 0):
			raise ConfigurationError("minimum silence duration must be positive")
		if not (self.chunk_size_ms > 0):
			raise ConfigurationError("analysis chunk size must be positive")

	#============================
	@property
	def min_duration_seconds(self) -> float:
		return self.min_duration_ms / 1000.0
