#!/usr/bin/env python3

# local repo modules
from voidcutterlib.core import utils
from voidcutterlib.core.errors import ConfigurationError

DURATION_SKEW_WARN_SECONDS = 1.0

#============================================

def validate_audio_files(buffers: list) -> list:
	"""
	Check that all buffers can be analyzed in lock step.

	Sample rate and channel count must match the first buffer. Duration
	differences are reported as warnings only.

	Returns:
		list: Warning messages for duration skew.
	"""
	if len(buffers) == 0:
		raise ConfigurationError("no audio files provided")
	reference = buffers[0]
	warnings = []
	for index, buffer in enumerate(buffers[1:], start=2):
		if buffer.sample_rate != reference.sample_rate:
			raise ConfigurationError(
				f"sample rate mismatch: file {buffer.filename} ({buffer.sample_rate} Hz) "
				f"vs {reference.filename} ({reference.sample_rate} Hz)"
			)
		if buffer.channel_count != reference.channel_count:
			raise ConfigurationError(
				f"channel count mismatch: file {buffer.filename} "
				f"({buffer.channel_count} channels) vs {reference.filename} "
				f"({reference.channel_count} channels)"
			)
		skew = abs(buffer.duration - reference.duration)
		if skew > DURATION_SKEW_WARN_SECONDS:
			message = (
				f"significant duration difference: file {buffer.filename} "
				f"({buffer.duration:.2f}s) vs {reference.filename} ({reference.duration:.2f}s)"
			)
			utils.warn(message)
			warnings.append(message)
		utils.info(
			f"Audio file {index} validated: {buffer.filename} ({buffer.duration:.2f}s, "
			f"{buffer.sample_rate}Hz, {buffer.channel_count}ch)"
		)
	utils.info(
		f"Reference audio: {reference.filename} ({reference.duration:.2f}s, "
		f"{reference.sample_rate}Hz, {reference.channel_count}ch)"
	)
	return warnings
