#!/usr/bin/env python3

"""
YAML settings for detection thresholds and engine options.
"""

import math

# PIP3 modules
import yaml

# local repo modules
from jumpcutlib.core.intervals import DEFAULT_MIN_GAP
from jumpcutlib.media.ffmpeg import DEFAULT_MIN_SILENCE
from jumpcutlib.media.ffmpeg import DEFAULT_NOISE

CONFIG_VERSION = 1

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'jumpcutter': CONFIG_VERSION,
		'settings': {
			'detection': {
				'noise': DEFAULT_NOISE,
				'min_silence': DEFAULT_MIN_SILENCE,
				'min_gap': DEFAULT_MIN_GAP,
			},
			'keep_trailing': False,
			'ffmpeg': 'ffmpeg',
			'piece_extension': 'mkv',
		},
	}

#============================================

def load_config(config_path: str) -> dict:
	"""
	Read a jumpcutter settings file.

	An empty file is rejected for lacking the version marker. YAML syntax
	errors are reported as RuntimeError naming the file.

	Args:
		config_path: Settings file path.

	Returns:
		dict: Raw config mapping, still carrying the version marker.
	"""
	with open(config_path, 'r', encoding='utf-8') as handle:
		try:
			data = yaml.safe_load(handle)
		except yaml.YAMLError as err:
			raise RuntimeError(f"config {config_path}: invalid yaml: {err}") from err
	if data is None:
		data = {}
	if not isinstance(data, dict):
		raise RuntimeError(f"config {config_path}: top level must be a mapping")
	version = data.get('jumpcutter')
	if version != CONFIG_VERSION:
		raise RuntimeError(
			f"config {config_path}: expected jumpcutter: {CONFIG_VERSION}, got {version!r}")
	return data

#============================================

BOOL_WORDS = {
	'true': True, 'yes': True, 'on': True, '1': True,
	'false': False, 'no': False, 'off': False, '0': False,
}

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	"""
	Accept a yaml boolean, an integer, or a yes/no style word.
	"""
	if isinstance(value, (bool, int)):
		return bool(value)
	if isinstance(value, str) and value.strip().lower() in BOOL_WORDS:
		return BOOL_WORDS[value.strip().lower()]
	raise RuntimeError(f"config {config_path}: {key_path} must be true or false")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	number = None
	if isinstance(value, (int, float)) and not isinstance(value, bool):
		number = float(value)
	elif isinstance(value, str):
		try:
			number = float(value)
		except ValueError:
			number = None
	if number is None or not math.isfinite(number):
		raise RuntimeError(f"config {config_path}: {key_path} must be a finite number")
	return number

#============================================

def coerce_str(value, config_path: str, key_path: str) -> str:
	if isinstance(value, str) and value.strip() != "":
		return value.strip()
	raise RuntimeError(f"config {config_path}: {key_path} must be a non-empty string")

#============================================

def build_settings(config: dict, config_path: str = '<defaults>') -> dict:
	"""
	Flatten and validate settings, filling in defaults.

	Args:
		config: Raw config dictionary, or None for defaults only.
		config_path: Config file path used in error messages.

	Returns:
		dict: Flat settings with keys noise, min_silence, min_gap,
			keep_trailing, ffmpeg, piece_extension.
	"""
	defaults = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings') or {}
	if not isinstance(overrides, dict):
		raise RuntimeError(f"config {config_path}: settings must be a mapping")
	detection = overrides.get('detection') or {}
	if not isinstance(detection, dict):
		raise RuntimeError(f"config {config_path}: settings.detection must be a mapping")
	default_detection = defaults['detection']
	settings = {
		'noise': coerce_float(detection.get('noise', default_detection['noise']),
			config_path, 'settings.detection.noise'),
		'min_silence': coerce_float(
			detection.get('min_silence', default_detection['min_silence']),
			config_path, 'settings.detection.min_silence'),
		'min_gap': coerce_float(detection.get('min_gap', default_detection['min_gap']),
			config_path, 'settings.detection.min_gap'),
		'keep_trailing': coerce_bool(
			overrides.get('keep_trailing', defaults['keep_trailing']),
			config_path, 'settings.keep_trailing'),
		'ffmpeg': coerce_str(overrides.get('ffmpeg', defaults['ffmpeg']),
			config_path, 'settings.ffmpeg'),
		'piece_extension': coerce_str(
			overrides.get('piece_extension', defaults['piece_extension']),
			config_path, 'settings.piece_extension').lstrip('.'),
	}
	return settings

#============================================

def validate_settings(settings: dict) -> None:
	# also covers cli overrides
	for key in ('noise', 'min_silence', 'min_gap'):
		if not math.isfinite(settings[key]):
			raise RuntimeError(f"{key} must be a finite number")
	if settings['noise'] <= 0 or settings['noise'] > 1:
		raise RuntimeError("noise must be greater than 0 and at most 1")
	if settings['min_silence'] <= 0:
		raise RuntimeError("min_silence must be positive")
	if settings['min_gap'] < 0:
		raise RuntimeError("min_gap must be 0 or positive")
	if settings['piece_extension'] == "":
		raise RuntimeError("piece_extension must not be empty")

#============================================

def dump_settings(settings: dict) -> str:
	"""
	Render flat settings back into config file YAML.
	"""
	data = {
		'jumpcutter': CONFIG_VERSION,
		'settings': {
			'detection': {
				'noise': settings['noise'],
				'min_silence': settings['min_silence'],
				'min_gap': settings['min_gap'],
			},
			'keep_trailing': settings['keep_trailing'],
			'ffmpeg': settings['ffmpeg'],
			'piece_extension': settings['piece_extension'],
		},
	}
	return yaml.safe_dump(data, sort_keys=False)
