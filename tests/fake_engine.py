#!/usr/bin/env python3

"""
Engine stand-in that replays canned silencedetect text and records calls.
"""

from jumpcutlib.core import errors

#============================================

class FakeScan():
	def __init__(self, lines: list, returncode: int = 0):
		self.lines = lines
		self.returncode = returncode
		self.lines_read = 0
		self.closed = False

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.closed = True

	def __iter__(self):
		for line in self.lines:
			self.lines_read += 1
			yield line

	def wait(self) -> int:
		return self.returncode

#============================================

class FakeEngine():
	def __init__(self, diagnostics: str, scan_returncode: int = 0,
		fail_extract_at: int = None, extract_exit_code: int = 1,
		concat_exit_code: int = 0):
		self.lines = diagnostics.splitlines()
		self.scan_returncode = scan_returncode
		self.fail_extract_at = fail_extract_at
		self.extract_exit_code = extract_exit_code
		self.concat_exit_code = concat_exit_code
		self.scan = None
		self.calls = []
		self.lines_read_at_extract = []
		self.manifest_text = None

	def detect_silence(self, input_file: str) -> FakeScan:
		self.calls.append(('detect', input_file))
		self.scan = FakeScan(self.lines, self.scan_returncode)
		return self.scan

	def extract_range(self, start: float, duration: float, input_file: str,
		output_file: str) -> None:
		extract_count = len([call for call in self.calls if call[0] == 'extract'])
		self.calls.append(('extract', start, duration, input_file, output_file))
		self.lines_read_at_extract.append(self.scan.lines_read)
		if self.fail_extract_at is not None and extract_count == self.fail_extract_at:
			raise errors.JumpcutError("failed to extract a piece", self.extract_exit_code)
		with open(output_file, 'w') as handle:
			handle.write(f"{start} {duration}\n")

	def concat_copy(self, manifest_file: str, output_file: str) -> None:
		self.calls.append(('concat', manifest_file, output_file))
		with open(manifest_file, 'r') as handle:
			self.manifest_text = handle.read()
		if self.concat_exit_code != 0:
			with open(output_file, 'w') as handle:
				handle.write("partial")
			raise errors.JumpcutError("failed to concatenate pieces",
				self.concat_exit_code)
		with open(output_file, 'w') as handle:
			handle.write(self.manifest_text)

	def call_names(self) -> list:
		return [call[0] for call in self.calls]
