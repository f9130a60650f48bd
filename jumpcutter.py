#!/usr/bin/env python3

"""
Remove silent parts of a video with ffmpeg.
"""

# Standard Library
import argparse
import sys

# PIP3 modules
import yaml

# local repo modules
from jumpcutlib.core import config
from jumpcutlib.core import errors
from jumpcutlib.core import utils
from jumpcutlib.core.cutter import SilenceCutter

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(prog="jumpcutter",
		description="Cut silent segments out of a video file")
	parser.add_argument('input_file', help='input media file')
	parser.add_argument('output_file', help='output media file, must not exist')
	parser.add_argument('--tempdir', dest='tempdir',
		help='directory where the scratch workspace is created')
	parser.add_argument('-c', '--config', dest='config_file',
		help='settings yaml file')
	parser.add_argument('-n', '--noise', dest='noise', type=float,
		help='silence threshold as a fraction of full scale')
	parser.add_argument('-m', '--min-silence', dest='min_silence', type=float,
		help='minimum silence duration in seconds')
	parser.add_argument('--keep-trailing', dest='keep_trailing', action='store_true',
		help='keep content after the last detected silence')
	parser.add_argument('--ffmpeg', dest='ffmpeg_bin',
		help='ffmpeg executable to run')
	parser.add_argument('--dry-run', dest='dry_run', action='store_true',
		help='detect silences and print the kept segments only')
	parser.add_argument('-p', '--dump-config', dest='dump_config', action='store_true',
		help='print the effective settings and exit')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='only report errors')
	parser.add_argument('-d', '--debug', dest='debug', action='store_true',
		help='show commands and parser traces')
	parser.set_defaults(keep_trailing=None)
	args = parser.parse_args(argv)
	return args

#============================================

def build_run_settings(args) -> dict:
	raw_config = None
	config_path = '<defaults>'
	if args.config_file is not None:
		config_path = args.config_file
		raw_config = config.load_config(config_path)
	settings = config.build_settings(raw_config, config_path)
	if args.noise is not None:
		settings['noise'] = args.noise
	if args.min_silence is not None:
		settings['min_silence'] = args.min_silence
	if args.keep_trailing is not None:
		settings['keep_trailing'] = args.keep_trailing
	if args.ffmpeg_bin is not None:
		settings['ffmpeg'] = args.ffmpeg_bin
	config.validate_settings(settings)
	return settings

#============================================

def run(args) -> int:
	utils.set_quiet_mode(args.quiet)
	utils.set_debug_mode(args.debug)
	try:
		settings = build_run_settings(args)
		if args.dump_config:
			print(config.dump_settings(settings), end='')
			return 0
		cutter = SilenceCutter(args.input_file, args.output_file, settings=settings,
			tempdir=args.tempdir)
		if args.dry_run:
			intervals = cutter.plan()
			plan = {'keep': [interval.as_dict() for interval in intervals]}
			print(yaml.safe_dump(plan, sort_keys=False), end='')
			return 0
		cutter.run()
	except errors.JumpcutError as err:
		utils.log_error(str(err))
		return err.exit_code
	except OSError as err:
		utils.log_error(str(err))
		return errors.exit_code_from_os_error(err)
	except (RuntimeError, yaml.YAMLError) as err:
		utils.log_error(str(err))
		return 1
	return 0

#============================================

def main() -> None:
	args = parse_args()
	sys.exit(run(args))


if __name__ == '__main__':
	main()
