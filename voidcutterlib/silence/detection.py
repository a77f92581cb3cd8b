#!/usr/bin/env python3

# Standard Library
import math
from dataclasses import dataclass, field

# PIP3 modules
import numpy

# local repo modules
from voidcutterlib.audio import levels
from voidcutterlib.core.errors import ConfigurationError
from voidcutterlib.silence.regions import DetectionConfig
from voidcutterlib.silence.regions import SilenceRegion

#============================================

@dataclass(frozen=True)
class DetectionResult:
	regions: tuple
	total_duration: float
	analyzed_frames: int
	chunk_frames: int
	sample_rate: int
	track_count: int
	config: DetectionConfig
	chunk_db: numpy.ndarray = field(default=None, repr=False, compare=False)

	#============================
	@property
	def analyzed_duration(self) -> float:
		return self.analyzed_frames / float(self.sample_rate)

#============================================

def chunk_size_frames(chunk_size_ms: float, sample_rate: int) -> int:
	return max(1, int(chunk_size_ms * sample_rate // 1000))

#============================================

def _loudest_chunk_db(buffers: list, frame_start: int, frame_end: int) -> float:
	loudest = 0.0
	for buffer in buffers:
		loudest = max(loudest, levels.rms_energy(buffer, frame_start, frame_end))
	if loudest <= 0:
		return -120.0
	return max(-120.0, 20.0 * math.log10(loudest))

#============================================

def detect_common_silence(buffers: list, config: DetectionConfig,
	include_series: bool = False) -> DetectionResult:
	"""
	Find regions that are silent in every track at the same time.

	All buffers must already share sample rate and channel count. Analysis
	stops at the shortest track; later frames of longer tracks are never
	classified.

	Args:
		buffers: SampleBuffer list, read only.
		config: Detection thresholds.
		include_series: Also record per-chunk loudest-track dBFS.

	Returns:
		DetectionResult: Ordered, non-overlapping common silence regions.
	"""
	if len(buffers) == 0:
		raise ConfigurationError("no audio files provided")
	reference = buffers[0]
	sample_rate = reference.sample_rate
	chunk_frames = chunk_size_frames(config.chunk_size_ms, sample_rate)
	analysis_frames = min(buffer.frame_count for buffer in buffers)
	min_seconds = config.min_duration_seconds

	regions = []
	chunk_db = [] if include_series else None
	candidate_start = None

	for frame_start in range(0, analysis_frames, chunk_frames):
		frame_end = min(frame_start + chunk_frames, analysis_frames)
		common_silence = all(
			levels.is_silent(buffer, frame_start, frame_end, config.threshold_dbfs)
			for buffer in buffers
		)
		if include_series:
			chunk_db.append(_loudest_chunk_db(buffers, frame_start, frame_end))
		if common_silence:
			if candidate_start is None:
				candidate_start = frame_start
			continue
		if candidate_start is not None:
			region = SilenceRegion.from_frames(candidate_start, frame_start, sample_rate)
			if region.duration >= min_seconds:
				regions.append(region)
			candidate_start = None

	# silence running into the end of the analyzed span
	if candidate_start is not None and candidate_start < analysis_frames:
		region = SilenceRegion.from_frames(candidate_start, analysis_frames, sample_rate)
		if region.duration >= min_seconds:
			regions.append(region)

	total_duration = sum(region.duration for region in regions)
	series = None
	if include_series:
		series = numpy.array(chunk_db, dtype=numpy.float64)
	return DetectionResult(
		regions=tuple(regions),
		total_duration=total_duration,
		analyzed_frames=analysis_frames,
		chunk_frames=chunk_frames,
		sample_rate=sample_rate,
		track_count=len(buffers),
		config=config,
		chunk_db=series,
	)
