#!/usr/bin/env python3

# Standard Library
from dataclasses import dataclass

# PIP3 modules
import numpy

# local repo modules
from voidcutterlib.core.errors import ConfigurationError

#============================================

@dataclass(frozen=True)
class CuttingResult:
	filename: str
	original_duration: float
	new_duration: float
	removed_duration: float
	removed_frames: int
	regions_cut: tuple
	keep_duration_ms: float

#============================================

def cut_silence_regions(buffer, regions, keep_duration_ms: float) -> CuttingResult:
	"""
	Shorten each silence region of one buffer down to keep_duration_ms.

	The kept silence is the front of each region; the rest of the region
	is deleted. Regions must be sorted by start_frame and are processed
	from the last to the first so earlier frame indices stay valid.

	Args:
		buffer: SampleBuffer, mutated in place.
		regions: Ordered SilenceRegion sequence.
		keep_duration_ms: Silence to keep per region in milliseconds.

	Returns:
		CuttingResult: Summary of what was removed.
	"""
	if buffer is None:
		raise ConfigurationError("audio data is missing")
	if keep_duration_ms < 0:
		raise ConfigurationError("keep silence duration must be non-negative")
	channels = buffer.channel_count
	original_duration = buffer.duration
	keep_seconds = keep_duration_ms / 1000.0
	keep_samples_full = int(keep_duration_ms * buffer.sample_rate // 1000) * channels

	samples = buffer.samples
	removed_samples = 0
	regions_cut = []
	for region in reversed(list(regions)):
		if region.duration <= keep_seconds:
			continue
		start_sample = min(max(0, region.start_frame * channels), samples.size)
		end_sample = min(max(0, region.end_frame * channels), samples.size)
		keep_samples = keep_samples_full
		if start_sample + keep_samples > end_sample:
			# clamped region is shorter than the keep span, keep all of it
			keep_samples = end_sample - start_sample
		cut_start = start_sample + keep_samples
		cut_end = end_sample
		if cut_end <= cut_start:
			continue
		samples = numpy.concatenate((samples[:cut_start], samples[cut_end:]))
		removed_samples += cut_end - cut_start
		regions_cut.append(region)

	if removed_samples > 0:
		buffer.samples = samples
	removed_frames = removed_samples // channels
	regions_cut.reverse()
	return CuttingResult(
		filename=buffer.filename,
		original_duration=original_duration,
		new_duration=buffer.duration,
		removed_duration=removed_frames / float(buffer.sample_rate),
		removed_frames=removed_frames,
		regions_cut=tuple(regions_cut),
		keep_duration_ms=keep_duration_ms,
	)

#============================================

def cut_silence_in_files(buffers: list, regions, keep_duration_ms: float) -> list:
	"""
	Apply the same common silence regions to every buffer.
	"""
	if len(buffers) == 0:
		raise ConfigurationError("no audio files provided")
	regions = tuple(regions)
	results = []
	for buffer in buffers:
		results.append(cut_silence_regions(buffer, regions, keep_duration_ms))
	return results
