#!/usr/bin/env python3

# Standard Library
import os

# PIP3 modules
from tqdm import tqdm

# local repo modules
from voidcutterlib.core import config
from voidcutterlib.core import reports
from voidcutterlib.core import utils
from voidcutterlib.core.errors import ConfigurationError
from voidcutterlib.loudness.measure import measure_loudness
from voidcutterlib.loudness.normalize import normalize_multiple_audio
from voidcutterlib.media import wav
from voidcutterlib.silence.cutting import cut_silence_in_files
from voidcutterlib.silence.detection import detect_common_silence

#============================================

class VoidCutterJob():
	"""
	Normalize and cut common silence across a set of synchronized wav files.

	Every stage works on in-memory buffers. Output audio, the YAML report
	and the debug files are only written after all other stages succeeded,
	and a dry run writes no files at all.
	"""
	def __init__(self, input_files: list, settings: dict = None,
		dry_run: bool = False, test_copy: bool = False, debug_info: bool = False,
		debug: bool = False, report_file: str = None):
		if settings is None:
			settings = config.build_settings()
		self.input_files = list(input_files)
		self.settings = settings
		self.dry_run = dry_run
		self.test_copy = test_copy
		self.debug_info = debug_info
		self.debug = debug
		self.report_file = report_file
		self.buffers = []
		self.output_files = []
		self.loudness_results = []
		self.normalization_results = []
		self.detection = None
		self.cutting_results = []
		self.debug_text = None
		self.debug_files = []

	#============================
	def validate_inputs(self) -> None:
		if len(self.input_files) == 0:
			raise ConfigurationError("no input files specified")
		config.validate_settings(self.settings)
		for input_file in self.input_files:
			if not os.path.isfile(input_file):
				raise ConfigurationError(f"input file not found: {input_file}")
			if not input_file.lower().endswith(".wav"):
				raise ConfigurationError(f"input file must be a WAV file: {input_file}")
		self.output_files = []
		for input_file in self.input_files:
			output_file = utils.generate_output_filename(input_file,
				self.settings['output_suffix'])
			if os.path.abspath(output_file) == os.path.abspath(input_file):
				raise ConfigurationError(f"output would overwrite input: {input_file}")
			self.output_files.append(output_file)
		if len(set(self.output_files)) != len(self.output_files):
			raise ConfigurationError("two inputs map to the same output file")
		if self._writes_debug_files():
			# fail before any stage runs rather than after writing the text report
			reports.require_matplotlib()
		return

	#============================
	def _writes_debug_files(self) -> bool:
		return (self.debug and not self.dry_run and not self.test_copy
			and self.settings['cut_silence'])

	#============================
	def _progress(self, items: list):
		if utils.is_quiet_mode():
			return items
		return tqdm(items)

	#============================
	def load(self) -> list:
		utils.info("Loading audio files...")
		self.buffers = []
		for input_file in self._progress(self.input_files):
			self.buffers.append(wav.load_wav(input_file))
		for index, buffer in enumerate(self.buffers, start=1):
			utils.info(
				f"[{index}/{len(self.buffers)}] Loaded: {buffer.filename} "
				f"({buffer.duration:.2f}s, {buffer.sample_rate}Hz, "
				f"{buffer.channel_count}ch, {buffer.bit_depth}bit)"
			)
		return self.buffers

	#============================
	def validate(self) -> None:
		utils.info("")
		utils.info("Validating audio compatibility...")
		wav.validate_audio_files(self.buffers)
		utils.info("All audio files are compatible")
		if self.debug_info:
			utils.info("")
			utils.info("=== DEBUG INFORMATION ===")
			for buffer in self.buffers:
				reports.print_content_analysis(buffer)
		return

	#============================
	def normalize(self) -> list:
		utils.info("")
		utils.info("Measuring loudness...")
		self.loudness_results = [measure_loudness(buffer) for buffer in self.buffers]
		reports.print_loudness_table(self.loudness_results)
		target = self.settings['target_lufs']
		utils.info("")
		utils.info(f"Applying loudness normalization (target: {target:.1f} LUFS)...")
		self.normalization_results = normalize_multiple_audio(self.buffers, target)
		reports.print_normalization_summary(self.normalization_results)
		return self.normalization_results

	#============================
	def detect(self):
		utils.info("")
		utils.info("Detecting common silence regions...")
		detection_config = config.detection_config(self.settings)
		self.detection = detect_common_silence(self.buffers, detection_config,
			include_series=self.debug)
		reports.print_detection_result(self.detection, self.buffers[0].duration)
		if self.debug:
			# built before cutting so track lengths match the analysis
			self.debug_text = reports.build_debug_report(self.buffers, self.detection)
		return self.detection

	#============================
	def cut(self) -> list:
		if self.detection is None or len(self.detection.regions) == 0:
			utils.info("")
			utils.info("No silence regions to cut.")
			self.cutting_results = []
			return self.cutting_results
		keep_ms = self.settings['keep_duration_ms']
		utils.info("")
		utils.info(f"Cutting silence regions (keeping {keep_ms} ms)...")
		self.cutting_results = cut_silence_in_files(self.buffers,
			self.detection.regions, keep_ms)
		reports.print_cutting_summary(self.cutting_results)
		return self.cutting_results

	#============================
	def save(self) -> list:
		utils.info("")
		utils.info("Generating output files...")
		pairs = list(zip(self.buffers, self.output_files))
		for buffer, output_file in self._progress(pairs):
			wav.save_wav(buffer, output_file)
		for index, (buffer, output_file) in enumerate(pairs, start=1):
			utils.info(f"[{index}/{len(pairs)}] Saved: {output_file} ({buffer.duration:.2f}s)")
		return self.output_files

	#============================
	def write_report(self) -> None:
		if self.report_file is None:
			return
		report = reports.build_report(self.input_files, detection=self.detection,
			cutting_results=self.cutting_results,
			normalization_results=self.normalization_results)
		reports.write_yaml_report(self.report_file, report)
		utils.info(f"Report: {self.report_file}")
		return

	#============================
	def write_debug(self) -> list:
		"""
		Write the silence debug report and loudness plot next to the first input.

		Returns:
			list: Written debug file paths, empty when nothing was detected.
		"""
		self.debug_files = []
		if not self.debug or self.debug_text is None:
			return self.debug_files
		debug_file = reports.default_debug_path(self.input_files[0])
		plot_file = reports.default_plot_path(self.input_files[0])
		reports.write_text_report(debug_file, self.debug_text)
		reports.write_debug_plot(plot_file, self.detection)
		self.debug_files = [debug_file, plot_file]
		utils.info(f"Debug file: {debug_file}")
		utils.info(f"Debug plot: {plot_file}")
		return self.debug_files

	#============================
	def run(self) -> dict:
		self.validate_inputs()
		reports.print_config_banner(self.input_files, self.settings)
		self.load()
		self.validate()
		if self.test_copy:
			utils.info("")
			utils.info("TEST MODE: copying files without processing")
			if not self.dry_run:
				self.save()
			return self.summary()
		if self.settings['normalize']:
			self.normalize()
		if self.settings['cut_silence']:
			self.detect()
			if not self.dry_run:
				self.cut()
		if self.dry_run:
			utils.info("")
			utils.info("dry run: analysis complete, no files written")
			return self.summary()
		self.save()
		self.write_report()
		self.write_debug()
		utils.info("")
		utils.info("Processing completed successfully!")
		utils.info(
			f"Generated {len(self.output_files)} output file(s) with suffix "
			f"'{self.settings['output_suffix']}'"
		)
		return self.summary()

	#============================
	def summary(self) -> dict:
		return {
			'buffers': self.buffers,
			'output_files': self.output_files if not self.dry_run else [],
			'loudness': self.loudness_results,
			'normalization': self.normalization_results,
			'detection': self.detection,
			'cutting': self.cutting_results,
			'debug_files': self.debug_files,
		}
