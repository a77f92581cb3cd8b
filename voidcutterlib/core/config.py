#!/usr/bin/env python3

# Standard Library
import math
import os

# PIP3 modules
import yaml

# local repo modules
from voidcutterlib.core.errors import ConfigurationError
from voidcutterlib.loudness.measure import validate_target_loudness
from voidcutterlib.silence.regions import DetectionConfig

CONFIG_VERSION = 1

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'void_cutter': CONFIG_VERSION,
		'settings': {
			'output': {
				'suffix': "_edited",
			},
			'loudness': {
				'enabled': True,
				'target_lufs': -16.0,
			},
			'silence': {
				'enabled': True,
				'threshold_db': -50.0,
				'min_duration_ms': 500,
				'keep_duration_ms': 250,
				'chunk_size_ms': 10,
			},
		},
	}

#============================================

def build_config_text(config: dict) -> str:
	return yaml.safe_dump(config, sort_keys=False, default_flow_style=False)

#============================================

def write_config_file(config_path: str, config: dict = None) -> str:
	if config is None:
		config = default_config()
	text = build_config_text(config)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return config_path

#============================================

def load_config(config_path: str) -> dict:
	"""
	Load a config file from disk.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config dictionary.
	"""
	if not os.path.isfile(config_path):
		raise ConfigurationError(f"config file not found: {config_path}")
	with open(config_path, 'r', encoding='utf-8') as handle:
		try:
			data = yaml.safe_load(handle)
		except yaml.YAMLError as exc:
			raise ConfigurationError(f"config {config_path}: invalid YAML: {exc}") from exc
	if not isinstance(data, dict):
		raise ConfigurationError("config file must be a mapping")
	if data.get('void_cutter') != CONFIG_VERSION:
		raise ConfigurationError(f"config file must set void_cutter: {CONFIG_VERSION}")
	return data

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	if isinstance(value, bool):
		return value
	if isinstance(value, int):
		return bool(value)
	if isinstance(value, str):
		normalized = value.strip().lower()
		if normalized in ("true", "yes", "1", "on"):
			return True
		if normalized in ("false", "no", "0", "off"):
			return False
	raise ConfigurationError(f"config {config_path}: {key_path} must be a boolean")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	if isinstance(value, bool):
		raise ConfigurationError(f"config {config_path}: {key_path} must be a number")
	if isinstance(value, (int, float)):
		return float(value)
	if isinstance(value, str):
		try:
			return float(value)
		except ValueError as exc:
			raise ConfigurationError(
				f"config {config_path}: {key_path} must be a number"
			) from exc
	raise ConfigurationError(f"config {config_path}: {key_path} must be a number")

#============================================

def coerce_int(value, config_path: str, key_path: str) -> int:
	if isinstance(value, bool):
		raise ConfigurationError(f"config {config_path}: {key_path} must be an integer")
	if isinstance(value, int):
		return value
	if isinstance(value, float):
		if not math.isfinite(value):
			raise ConfigurationError(f"config {config_path}: {key_path} must be an integer")
		return int(value)
	if isinstance(value, str):
		try:
			return int(float(value))
		except (ValueError, OverflowError) as exc:
			raise ConfigurationError(
				f"config {config_path}: {key_path} must be an integer"
			) from exc
	raise ConfigurationError(f"config {config_path}: {key_path} must be an integer")

#============================================

def _section(overrides: dict, name: str, config_path: str) -> dict:
	section = overrides.get(name, {})
	if section is None:
		return {}
	if not isinstance(section, dict):
		raise ConfigurationError(f"config {config_path}: settings.{name} must be a mapping")
	return section

#============================================

def build_settings(config: dict = None, config_path: str = "<defaults>") -> dict:
	"""
	Flatten a config dictionary into settings, filling defaults.

	Args:
		config: Raw config dictionary, or None for defaults only.
		config_path: Config file path for error messages.

	Returns:
		dict: Flat settings.
	"""
	defaults = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings') or {}
	if not isinstance(overrides, dict):
		raise ConfigurationError(f"config {config_path}: settings must be a mapping")
	output = _section(overrides, 'output', config_path)
	loudness = _section(overrides, 'loudness', config_path)
	silence = _section(overrides, 'silence', config_path)
	suffix = output.get('suffix', defaults['output']['suffix'])
	if not isinstance(suffix, str):
		raise ConfigurationError(f"config {config_path}: settings.output.suffix must be a string")
	return {
		'output_suffix': suffix,
		'normalize': coerce_bool(loudness.get('enabled',
			defaults['loudness']['enabled']), config_path,
			"settings.loudness.enabled"),
		'target_lufs': coerce_float(loudness.get('target_lufs',
			defaults['loudness']['target_lufs']), config_path,
			"settings.loudness.target_lufs"),
		'cut_silence': coerce_bool(silence.get('enabled',
			defaults['silence']['enabled']), config_path,
			"settings.silence.enabled"),
		'threshold_db': coerce_float(silence.get('threshold_db',
			defaults['silence']['threshold_db']), config_path,
			"settings.silence.threshold_db"),
		'min_duration_ms': coerce_int(silence.get('min_duration_ms',
			defaults['silence']['min_duration_ms']), config_path,
			"settings.silence.min_duration_ms"),
		'keep_duration_ms': coerce_int(silence.get('keep_duration_ms',
			defaults['silence']['keep_duration_ms']), config_path,
			"settings.silence.keep_duration_ms"),
		'chunk_size_ms': coerce_int(silence.get('chunk_size_ms',
			defaults['silence']['chunk_size_ms']), config_path,
			"settings.silence.chunk_size_ms"),
	}

#============================================

def apply_overrides(settings: dict, overrides: dict) -> dict:
	"""
	Return a copy of settings with every non-None override applied.
	"""
	merged = dict(settings)
	for key, value in overrides.items():
		if key not in merged:
			raise ConfigurationError(f"unknown setting: {key}")
		if value is not None:
			merged[key] = value
	return merged

#============================================

def validate_settings(settings: dict) -> None:
	if not settings['output_suffix']:
		raise ConfigurationError("output suffix must not be empty")
	if settings['keep_duration_ms'] < 0:
		raise ConfigurationError("keep silence duration must be non-negative")
	if settings['normalize']:
		validate_target_loudness(settings['target_lufs'])
	detection_config(settings)
	return

#============================================

def detection_config(settings: dict) -> DetectionConfig:
	return DetectionConfig(
		threshold_dbfs=settings['threshold_db'],
		min_duration_ms=settings['min_duration_ms'],
		chunk_size_ms=settings['chunk_size_ms'],
	)
