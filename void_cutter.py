#!/usr/bin/env python3

"""
void_cutter.py

Normalize loudness and cut silence shared by every track of a set of
synchronized wav recordings, keeping the tracks in sync.
"""

# Standard Library
import argparse

# local repo modules
from voidcutterlib.core import config
from voidcutterlib.core import utils
from voidcutterlib.core.pipeline import VoidCutterJob

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.

	Returns:
		argparse.Namespace: Parsed command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Audio editing tool for multi-track podcast recordings: "
			"loudness normalization and common silence cutting."
	)
	parser.add_argument('input_files', nargs='*', metavar='INPUT.wav',
		help="Synchronized wav files to process.")
	parser.add_argument('-s', '--output-suffix', dest='output_suffix', default=None,
		help="Suffix to append to output file names.")
	parser.add_argument('-l', '--target-loudness', dest='target_lufs',
		type=float, default=None,
		help="Target loudness value in LUFS.")
	parser.add_argument('-t', '--silence-threshold', dest='threshold_db',
		type=float, default=None,
		help="Silence threshold in dBFS (-120 to 0).")
	parser.add_argument('-m', '--min-silence-duration', dest='min_duration_ms',
		type=int, default=None,
		help="Minimum silence duration in milliseconds.")
	parser.add_argument('-k', '--keep-silence-duration', dest='keep_duration_ms',
		type=int, default=None,
		help="Duration of silence to keep after cutting in milliseconds.")
	parser.add_argument('--chunk-size', dest='chunk_size_ms', type=int, default=None,
		help="Analysis chunk size in milliseconds.")
	parser.add_argument('-c', '--config', dest='config_file', default=None,
		help="Path to a void cutter config YAML.")
	parser.add_argument('--write-config', dest='write_config', default=None,
		help="Write the default config YAML to this path and exit.")
	parser.add_argument('-N', '--no-normalize', dest='normalize',
		action='store_false',
		help="Skip loudness normalization.")
	parser.add_argument('-S', '--no-silence-cut', dest='cut_silence',
		action='store_false',
		help="Skip silence detection and cutting.")
	parser.add_argument('-n', '--dry-run', dest='dry_run', action='store_true',
		help="Analyze only, do not write output audio.")
	parser.add_argument('--test-copy', dest='test_copy', action='store_true',
		help="Test mode: only copy input to output without processing.")
	parser.add_argument('--debug-info', dest='debug_info', action='store_true',
		help="Show detailed debug information about audio files.")
	parser.add_argument('-d', '--debug', dest='debug', action='store_true',
		help="Write a silence debug report and loudness plot.")
	parser.add_argument('-r', '--report', dest='report_file', default=None,
		help="Write a YAML report of detected and cut regions.")
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help="Only print warnings and errors.")
	parser.set_defaults(normalize=None)
	parser.set_defaults(cut_silence=None)
	args = parser.parse_args(argv)
	if args.write_config is None and len(args.input_files) == 0:
		parser.error("at least one input wav file is required")
	return args

#============================================

def build_run_settings(args: argparse.Namespace) -> dict:
	"""
	Layer defaults, the optional config file, then command-line overrides.
	"""
	if args.config_file is not None:
		raw_config = config.load_config(args.config_file)
		settings = config.build_settings(raw_config, args.config_file)
	else:
		settings = config.build_settings()
	overrides = {
		'output_suffix': args.output_suffix,
		'target_lufs': args.target_lufs,
		'threshold_db': args.threshold_db,
		'min_duration_ms': args.min_duration_ms,
		'keep_duration_ms': args.keep_duration_ms,
		'chunk_size_ms': args.chunk_size_ms,
		'normalize': args.normalize,
		'cut_silence': args.cut_silence,
	}
	return config.apply_overrides(settings, overrides)

#============================================

def run(argv: list = None) -> dict:
	args = parse_args(argv)
	utils.set_quiet_mode(args.quiet)
	if args.write_config is not None:
		config.write_config_file(args.write_config)
		utils.info(f"Wrote default config: {args.write_config}")
		return {}
	settings = build_run_settings(args)
	job = VoidCutterJob(args.input_files, settings, dry_run=args.dry_run,
		test_copy=args.test_copy, debug_info=args.debug_info, debug=args.debug,
		report_file=args.report_file)
	return job.run()

#============================================

def main() -> None:
	run()


if __name__ == '__main__':
	main()
