#!/usr/bin/env python3

"""
Driver for one silence-removal run.

States: init -> scanning -> (extracting)* -> concatenating -> done, and
failed from any state. Extraction of each interval happens as soon as the
interval is closed by the scan, before the next diagnostic line is read.
"""

import os
import shutil
from jumpcutlib.core import config
from jumpcutlib.core import errors
from jumpcutlib.core import utils
from jumpcutlib.core.intervals import KeepIntervalExtractor
from jumpcutlib.core.manifest import ConcatManifest
from jumpcutlib.core.workspace import TemporaryWorkspace
from jumpcutlib.media.ffmpeg import FfmpegEngine

#============================================

STATE_INIT = 'init'
STATE_SCANNING = 'scanning'
STATE_EXTRACTING = 'extracting'
STATE_CONCATENATING = 'concatenating'
STATE_DONE = 'done'
STATE_FAILED = 'failed'

#============================================

class SilenceCutter():
	def __init__(self, input_file: str, output_file: str, settings: dict = None,
		engine=None, tempdir: str = None):
		if settings is None:
			settings = config.build_settings(None)
		if engine is None:
			engine = FfmpegEngine(settings['ffmpeg'], noise=settings['noise'],
				min_silence=settings['min_silence'])
		self.input_file = input_file
		self.output_file = output_file
		self.settings = settings
		self.engine = engine
		self.tempdir = tempdir
		self.state = STATE_INIT
		self.intervals = []

	#============================
	def run(self) -> list:
		"""
		Remove silences from input_file and write output_file.

		Returns:
			list: The KeepInterval objects that were kept, in order.
		"""
		self._check_output_absent()
		try:
			with TemporaryWorkspace(self.tempdir,
				piece_extension=self.settings['piece_extension']) as workspace:
				utils.log_info("Create concat script")
				with ConcatManifest(workspace.manifest_path) as manifest:
					input_file = self._canonical_input()
					utils.log_info("Detect silences")
					self._scan(input_file, manifest, workspace)
				if len(manifest) == 0:
					raise errors.JumpcutError(
						"no non-silent segments detected, nothing to do")
				self.state = STATE_CONCATENATING
				utils.log_info("Concatenate pieces")
				staging_file = workspace.staging_path(self.output_file)
				self.engine.concat_copy(manifest.path, staging_file)
				self._publish(staging_file)
		except BaseException:
			self.state = STATE_FAILED
			raise
		self.state = STATE_DONE
		self._report_summary()
		return self.intervals

	#============================
	def plan(self) -> list:
		"""
		Scan only and return the intervals that would be kept.
		"""
		self._check_output_absent()
		try:
			input_file = self._canonical_input()
			self._scan(input_file, None, None)
		except BaseException:
			self.state = STATE_FAILED
			raise
		self.state = STATE_DONE
		return self.intervals

	#============================
	def _check_output_absent(self) -> None:
		if os.path.lexists(self.output_file):
			raise errors.JumpcutError(f"{self.output_file} already exists", 1)

	#============================
	def _canonical_input(self) -> str:
		try:
			return os.path.realpath(self.input_file, strict=True)
		except OSError as err:
			raise errors.JumpcutError(
				f"failed to get the canonical path of {self.input_file}: {err}",
				errors.exit_code_from_os_error(err)) from err

	#============================
	def _scan(self, input_file: str, manifest, workspace) -> None:
		extractor = KeepIntervalExtractor(min_gap=self.settings['min_gap'],
			keep_trailing=self.settings['keep_trailing'])
		self.intervals = []
		self.state = STATE_SCANNING
		with self.engine.detect_silence(input_file) as scan:
			for line in scan:
				utils.echo_line(line)
				interval = extractor.feed(line)
				if interval is not None:
					self._keep(interval, input_file, manifest, workspace)
			returncode = scan.wait()
		if returncode != 0:
			raise errors.JumpcutError("silence detection failed",
				errors.exit_code_from_status(returncode))
		interval = extractor.finish()
		if interval is not None:
			self._keep(interval, input_file, manifest, workspace)

	#============================
	def _keep(self, interval, input_file: str, manifest, workspace) -> None:
		if workspace is None:
			self.intervals.append(interval)
			return
		self.state = STATE_EXTRACTING
		piece_file = workspace.next_piece_path()
		manifest.add(piece_file)
		self.engine.extract_range(interval.start, interval.duration,
			input_file, piece_file)
		self.intervals.append(interval)
		self.state = STATE_SCANNING

	#============================
	def _publish(self, staging_file: str) -> None:
		self._check_output_absent()
		try:
			shutil.move(staging_file, self.output_file)
		except OSError as err:
			if os.path.isfile(self.output_file):
				os.remove(self.output_file)
			raise errors.JumpcutError(f"failed to write {self.output_file}: {err}",
				errors.exit_code_from_os_error(err)) from err

	#============================
	def _report_summary(self) -> None:
		kept_seconds = sum(interval.duration for interval in self.intervals)
		utils.log_info(f"kept {len(self.intervals)} segments, "
			f"{kept_seconds:.2f}s total: {self.output_file}")
