#!/usr/bin/env python3

"""
ffmpeg as the media engine: silence analysis, range extraction, concat copy.
"""

import os
import subprocess
from jumpcutlib.core import errors
from jumpcutlib.core import utils

#============================================

DEFAULT_NOISE = 0.03
DEFAULT_MIN_SILENCE = 0.1

#============================================

class SilenceScan():
	"""
	A running analysis pass whose stderr is read line by line.
	"""
	def __init__(self, cmd: list):
		self.cmd = cmd
		self.proc = None

	#============================
	def __enter__(self):
		utils.show_cmd(self.cmd)
		try:
			# text mode splits ffmpeg's carriage-return progress lines too
			self.proc = subprocess.Popen(self.cmd, stdin=subprocess.DEVNULL,
				stdout=subprocess.DEVNULL, stderr=subprocess.PIPE,
				text=True, errors='replace')
		except OSError as err:
			raise errors.JumpcutError(f"failed to spawn {self.cmd[0]}: {err}",
				errors.exit_code_from_os_error(err)) from err
		return self

	#============================
	def __iter__(self):
		for line in self.proc.stderr:
			yield line.rstrip('\r\n')

	#============================
	def wait(self) -> int:
		return self.proc.wait()

	#============================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		if self.proc is None:
			return
		if self.proc.poll() is None:
			self.proc.kill()
			self.proc.wait()
		self.proc.stderr.close()

#============================================

class FfmpegEngine():
	"""
	Engine with three operations: detect_silence, extract_range, concat_copy.
	"""
	def __init__(self, ffmpeg_bin: str = 'ffmpeg', noise: float = DEFAULT_NOISE,
		min_silence: float = DEFAULT_MIN_SILENCE):
		self.ffmpeg_bin = ffmpeg_bin
		self.noise = noise
		self.min_silence = min_silence

	#============================
	def silence_filter(self) -> str:
		return f"silencedetect=n={self.noise}:d={self.min_silence}"

	#============================
	def detection_cmd(self, input_file: str) -> list:
		cmd = [self.ffmpeg_bin, "-nostdin", "-i", input_file]
		cmd += ["-af", self.silence_filter()]
		cmd += ["-f", "null", "-"]
		return cmd

	#============================
	def extract_cmd(self, start: float, duration: float, input_file: str,
		output_file: str) -> list:
		cmd = [self.ffmpeg_bin, "-nostdin", "-hide_banner"]
		cmd += self._loglevel_args()
		cmd += ["-ss", utils.format_seconds(start)]
		cmd += ["-t", utils.format_seconds(duration)]
		cmd += ["-i", input_file, output_file]
		return cmd

	#============================
	def concat_cmd(self, manifest_file: str, output_file: str) -> list:
		cmd = [self.ffmpeg_bin, "-nostdin", "-hide_banner"]
		cmd += self._loglevel_args()
		cmd += ["-f", "concat", "-safe", "0"]
		cmd += ["-i", manifest_file]
		cmd += ["-c", "copy", output_file]
		return cmd

	#============================
	def detect_silence(self, input_file: str) -> SilenceScan:
		return SilenceScan(self.detection_cmd(input_file))

	#============================
	def extract_range(self, start: float, duration: float, input_file: str,
		output_file: str) -> None:
		cmd = self.extract_cmd(start, duration, input_file, output_file)
		self._run(cmd, "failed to extract a piece")
		self._ensure_output(output_file, "extracted piece is missing")

	#============================
	def concat_copy(self, manifest_file: str, output_file: str) -> None:
		cmd = self.concat_cmd(manifest_file, output_file)
		self._run(cmd, "failed to concatenate pieces")
		self._ensure_output(output_file, "concatenated output is missing")

	#============================
	def _loglevel_args(self) -> list:
		if utils.is_quiet_mode():
			return ["-loglevel", "error"]
		return []

	#============================
	def _run(self, cmd: list, failure_message: str) -> None:
		showcmd = utils.show_cmd(cmd)
		try:
			proc = subprocess.run(cmd, stdin=subprocess.DEVNULL)
		except OSError as err:
			raise errors.JumpcutError(f"failed to execute {cmd[0]}: {err}",
				errors.exit_code_from_os_error(err)) from err
		if proc.returncode != 0:
			raise errors.JumpcutError(f"{failure_message}: {showcmd}",
				errors.exit_code_from_status(proc.returncode))

	#============================
	def _ensure_output(self, output_file: str, message: str) -> None:
		if not os.path.isfile(output_file):
			raise errors.JumpcutError(f"{message}: {output_file}")
