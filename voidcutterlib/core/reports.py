#!/usr/bin/env python3

"""
Console summaries and on-disk reports for a void cutter run.
"""

# Standard Library
import os

# PIP3 modules
import numpy
import yaml

# local repo modules
from voidcutterlib.core import utils

#============================================

def print_config_banner(input_files: list, settings: dict) -> None:
	utils.info(f"void-cutter started with {len(input_files)} input files")
	utils.info("Configuration:")
	if settings['normalize']:
		utils.info(f"  Target Loudness: {settings['target_lufs']:.1f} LUFS")
	else:
		utils.info("  Target Loudness: [normalization disabled]")
	utils.info(f"  Silence Threshold: {settings['threshold_db']:.1f} dBFS")
	utils.info(f"  Min Silence Duration: {settings['min_duration_ms']} ms")
	utils.info(f"  Keep Silence Duration: {settings['keep_duration_ms']} ms")
	utils.info(f"  Analysis Chunk: {settings['chunk_size_ms']} ms")
	utils.info(f"  Output Suffix: {settings['output_suffix']}")
	utils.info("")
	return

#============================================

def print_buffer_info(buffer) -> None:
	utils.info(f"Audio File: {buffer.filename}")
	utils.info(f"  Duration: {buffer.duration:.2f} seconds")
	utils.info(f"  Sample Rate: {buffer.sample_rate} Hz")
	utils.info(f"  Channels: {buffer.channel_count}")
	utils.info(f"  Bit Depth: {buffer.bit_depth} bits")
	utils.info(f"  Total Samples: {buffer.sample_count}")
	utils.info(f"  Frames: {buffer.frame_count}")
	return

#============================================

def analyze_content(buffer) -> dict:
	"""
	Collect sample statistics used by the debug-info listing.

	Args:
		buffer: SampleBuffer to inspect.

	Returns:
		dict: Sample statistics, empty values when there are no samples.
	"""
	stats = {
		'filename': buffer.filename,
		'sample_count': buffer.sample_count,
		'min_sample': None,
		'max_sample': None,
		'zero_samples': 0,
		'zero_pct': 0.0,
		'rms_db': None,
		'first_second_pct': None,
		'last_second_pct': None,
	}
	if buffer.sample_count == 0:
		return stats
	samples = buffer.samples
	zero_samples = int(numpy.count_nonzero(samples == 0))
	scaled = samples.astype(numpy.float64) / utils.full_scale(buffer.bit_depth)
	rms = float(numpy.sqrt(numpy.mean(scaled * scaled)))
	stats['min_sample'] = int(numpy.min(samples))
	stats['max_sample'] = int(numpy.max(samples))
	stats['zero_samples'] = zero_samples
	stats['zero_pct'] = utils.percent(zero_samples, buffer.sample_count)
	stats['rms_db'] = utils.amplitude_to_db(rms)
	second = buffer.sample_rate * buffer.channel_count
	if buffer.sample_count >= second:
		head = samples[:second]
		tail = samples[-second:]
		stats['first_second_pct'] = utils.percent(numpy.count_nonzero(head), second)
		stats['last_second_pct'] = utils.percent(numpy.count_nonzero(tail), second)
	return stats

#============================================

def print_content_analysis(buffer) -> None:
	utils.info("")
	utils.info(f"=== Audio Content Analysis: {buffer.filename} ===")
	print_buffer_info(buffer)
	stats = analyze_content(buffer)
	if stats['sample_count'] == 0:
		utils.warn(f"no audio samples found in {buffer.filename}")
		return
	nonzero = stats['sample_count'] - stats['zero_samples']
	utils.info("Sample Analysis:")
	utils.info(f"  Min Sample: {stats['min_sample']}")
	utils.info(f"  Max Sample: {stats['max_sample']}")
	utils.info(f"  Zero Samples: {stats['zero_samples']} ({stats['zero_pct']:.1f}%)")
	utils.info(f"  Non-Zero Samples: {nonzero} ({100.0 - stats['zero_pct']:.1f}%)")
	utils.info(f"  RMS Level: {utils.format_db(stats['rms_db'])} dBFS")
	if stats['zero_pct'] > 95:
		utils.warn(
			f"{buffer.filename} is {stats['zero_pct']:.1f}% silent, "
			"may be empty or a very quiet recording"
		)
	elif stats['zero_pct'] > 80:
		utils.warn(f"{buffer.filename} has {stats['zero_pct']:.1f}% silence")
	else:
		utils.info(f"  File contains {100.0 - stats['zero_pct']:.1f}% audio content")
	if stats['first_second_pct'] is not None:
		utils.info("Content Distribution:")
		utils.info(f"  First second: {stats['first_second_pct']:.1f}% audio")
		utils.info(f"  Last second: {stats['last_second_pct']:.1f}% audio")
	return

#============================================

def print_loudness_table(results: list) -> None:
	for index, result in enumerate(results, start=1):
		utils.info(
			f"[{index}/{len(results)}] {result.filename}: "
			f"{utils.format_db(result.integrated_loudness)} LUFS, "
			f"peak {utils.format_db(result.true_peak)} dBFS"
		)
		if result.true_peak > -0.1:
			utils.warn(f"true peak of {result.filename} is close to 0 dBFS")
	return

#============================================

def print_normalization_summary(results: list) -> None:
	if len(results) == 0:
		return
	utils.info("")
	utils.info("Loudness Normalization Summary:")
	utils.info(f"Target: {results[0].target_loudness:.1f} LUFS")
	risky = 0
	for index, result in enumerate(results, start=1):
		mark = "ok"
		if result.clipping_risk:
			mark = "clipping risk"
			risky += 1
		utils.info(
			f"[{index}] {result.filename}: {utils.format_db(result.original_loudness)} -> "
			f"{result.target_loudness:.1f} LUFS ({result.gain_db:.1f} dB) {mark}"
		)
	if risky > 0:
		utils.info(f"{risky} file(s) have potential clipping risk")
	else:
		utils.info("All files normalized without clipping risk")
	return

#============================================

def print_detection_result(result, reference_duration: float) -> None:
	config = result.config
	utils.info("")
	utils.info("Silence Detection Results:")
	utils.info(f"Threshold: {config.threshold_dbfs:.1f} dBFS")
	utils.info(f"Min Duration: {config.min_duration_ms} ms")
	utils.info(f"Total Files: {result.track_count}")
	utils.info(
		f"Analyzed: {result.analyzed_frames} frames in chunks of "
		f"{result.chunk_frames} frames ({config.chunk_size_ms} ms)"
	)
	utils.info(f"Common Silence Regions: {len(result.regions)}")
	if len(result.regions) == 0:
		utils.info("No common silence regions found with current settings.")
		return
	for index, region in enumerate(result.regions, start=1):
		utils.info(
			f"[{index}] {utils.format_timestamp(region.start_time)} - "
			f"{utils.format_timestamp(region.end_time)} ({region.duration:.2f}s)"
		)
	share = utils.percent(result.total_duration, reference_duration)
	utils.info(f"Total common silence: {result.total_duration:.2f}s ({share:.1f}% of audio)")
	return

#============================================

def print_cutting_summary(results: list) -> None:
	utils.info("")
	utils.info("Silence Cutting Summary:")
	total_original = 0.0
	total_new = 0.0
	total_removed = 0.0
	for index, result in enumerate(results, start=1):
		utils.info(
			f"[{index}] {result.filename}: {result.original_duration:.2f}s -> "
			f"{result.new_duration:.2f}s ({result.removed_duration:.2f}s removed, "
			f"{len(result.regions_cut)} regions)"
		)
		total_original += result.original_duration
		total_new += result.new_duration
		total_removed += result.removed_duration
	utils.info("Total Summary:")
	utils.info(f"  Original Total: {total_original:.2f}s")
	utils.info(f"  New Total: {total_new:.2f}s")
	share = utils.percent(total_removed, total_original)
	utils.info(f"  Total Removed: {total_removed:.2f}s ({share:.1f}%)")
	return

#============================================

def region_to_dict(region) -> dict:
	return {
		'start_frame': region.start_frame,
		'end_frame': region.end_frame,
		'start': round(region.start_time, 6),
		'end': round(region.end_time, 6),
		'duration': round(region.duration, 6),
		'start_tc': utils.format_timestamp(region.start_time),
		'end_tc': utils.format_timestamp(region.end_time),
	}

#============================================

def build_report(input_files: list, detection=None, cutting_results: list = None,
	normalization_results: list = None) -> dict:
	"""
	Build a plain-data report of a run, suitable for yaml.safe_dump.
	"""
	report = {
		'void_cutter_report': 1,
		'inputs': list(input_files),
	}
	if normalization_results:
		report['normalization'] = [
			{
				'file': result.filename,
				'original_lufs': round(float(result.original_loudness), 3),
				'target_lufs': float(result.target_loudness),
				'gain_db': round(float(result.gain_db), 3),
				'clipping_risk': bool(result.clipping_risk),
				'clipped_samples': int(result.clipped_samples),
			}
			for result in normalization_results
		]
	if detection is not None:
		report['detection'] = {
			'threshold_db': float(detection.config.threshold_dbfs),
			'min_duration_ms': detection.config.min_duration_ms,
			'chunk_size_ms': detection.config.chunk_size_ms,
			'sample_rate': detection.sample_rate,
			'analyzed_frames': detection.analyzed_frames,
			'total_silence': round(detection.total_duration, 6),
			'regions': [region_to_dict(region) for region in detection.regions],
		}
	if cutting_results:
		report['cutting'] = [
			{
				'file': result.filename,
				'original_duration': round(result.original_duration, 6),
				'new_duration': round(result.new_duration, 6),
				'removed_duration': round(result.removed_duration, 6),
				'removed_frames': result.removed_frames,
				'regions_cut': len(result.regions_cut),
				'keep_duration_ms': result.keep_duration_ms,
			}
			for result in cutting_results
		]
	return report

#============================================

def write_yaml_report(output_file: str, report: dict) -> str:
	os.makedirs(os.path.dirname(output_file) or '.', exist_ok=True)
	with open(output_file, 'w', encoding='utf-8') as handle:
		yaml.safe_dump(report, handle, sort_keys=False)
	return output_file

#============================================

def default_debug_path(input_file: str) -> str:
	return f"{input_file}.silence.debug.txt"

#============================================

def default_plot_path(input_file: str) -> str:
	return f"{input_file}.silence.debug.png"

#============================================

def build_debug_report(buffers: list, detection) -> str:
	"""
	Build a debug report for common silence detection.

	Args:
		buffers: Analyzed SampleBuffer list.
		detection: DetectionResult, with chunk series when available.

	Returns:
		str: Debug report text.
	"""
	config = detection.config
	lines = []
	lines.append(f"threshold_db: {config.threshold_dbfs:.2f}")
	lines.append(f"min_duration_ms: {config.min_duration_ms}")
	lines.append(f"chunk_size_ms: {config.chunk_size_ms}")
	lines.append(f"chunk_frames: {detection.chunk_frames}")
	lines.append(f"analyzed_frames: {detection.analyzed_frames}")
	lines.append(f"analyzed_duration: {detection.analyzed_duration:.3f}")
	lines.append("")
	lines.append("tracks:")
	for buffer in buffers:
		lines.append(
			f"- {buffer.filename}: frames {buffer.frame_count}, "
			f"{buffer.sample_rate} Hz, {buffer.channel_count} ch, {buffer.bit_depth} bit"
		)
		if buffer.frame_count > detection.analyzed_frames:
			tail = (buffer.frame_count - detection.analyzed_frames) / float(buffer.sample_rate)
			lines.append(f"  unanalyzed tail: {tail:.3f}s")
	lines.append("")
	series = detection.chunk_db
	if series is not None and series.size > 0:
		below = int(numpy.sum(series <= config.threshold_dbfs))
		lines.append("chunk_scan:")
		lines.append(f"chunk_count: {series.size}")
		lines.append(f"below_chunks: {below}")
		lines.append(f"below_pct: {utils.percent(below, series.size):.2f}")
		lines.append(f"loudest_chunk_db: {float(numpy.max(series)):.2f}")
		lines.append(f"quietest_chunk_db: {float(numpy.min(series)):.2f}")
		lines.append("")
	lines.append(f"regions: {len(detection.regions)}")
	for region in detection.regions:
		lines.append(
			f"- frames {region.start_frame}..{region.end_frame} "
			f"{utils.format_timestamp(region.start_time)} - "
			f"{utils.format_timestamp(region.end_time)} ({region.duration:.3f}s)"
		)
	lines.append(f"total_silence: {detection.total_duration:.3f}")
	lines.append("")
	return "\n".join(lines)

#============================================

def write_text_report(output_file: str, text: str) -> str:
	with open(output_file, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return output_file

#============================================

def require_matplotlib():
	"""
	Import matplotlib for debug plots.

	Returns:
		module: The matplotlib module.
	"""
	try:
		import matplotlib
	except ImportError as exc:
		raise RuntimeError("matplotlib is required for --debug plots") from exc
	return matplotlib

#============================================

def write_debug_plot(output_file: str, detection) -> None:
	"""
	Write a per-chunk loudest-track loudness plot with the threshold line.
	"""
	series = detection.chunk_db
	if series is None or series.size == 0:
		return
	matplotlib = require_matplotlib()
	matplotlib.use("Agg")
	import matplotlib.pyplot as pyplot
	chunk_seconds = detection.chunk_frames / float(detection.sample_rate)
	times = numpy.arange(series.size) * chunk_seconds + (chunk_seconds * 0.5)
	pyplot.figure(figsize=(12, 4))
	pyplot.plot(times, series, linewidth=0.6, label="loudest track")
	pyplot.axhline(detection.config.threshold_dbfs, color='red', linestyle='--',
		linewidth=1.0)
	for region in detection.regions:
		pyplot.axvspan(region.start_time, region.end_time, color='grey', alpha=0.2)
	pyplot.xlabel("Seconds")
	pyplot.ylabel("dBFS")
	pyplot.title("Chunk RMS Loudness")
	pyplot.legend(loc="upper right")
	pyplot.tight_layout()
	pyplot.savefig(output_file)
	pyplot.close()
	return
