#!/usr/bin/env python3

"""
ffconcat playlist written incrementally while pieces are extracted.
"""

from jumpcutlib.core import errors

#============================================

MANIFEST_HEADER = "ffconcat version 1.0"

#============================================

class ConcatManifest():
	def __init__(self, manifest_path: str):
		self.path = manifest_path
		self.entries = []
		self._handle = None

	#============================
	def open(self) -> None:
		try:
			self._handle = open(self.path, 'w', encoding='utf-8')
			self._handle.write(MANIFEST_HEADER + "\n")
		except OSError as err:
			raise errors.JumpcutError(f"failed to create concat manifest: {err}",
				errors.exit_code_from_os_error(err)) from err

	#============================
	def add(self, piece_path: str) -> None:
		if self._handle is None:
			raise RuntimeError("concat manifest is not open")
		self._handle.write(f"file {piece_path}\n")
		self.entries.append(piece_path)

	#============================
	def close(self) -> None:
		if self._handle is not None:
			self._handle.close()
			self._handle = None

	#============================
	def __len__(self) -> int:
		return len(self.entries)

	#============================
	def __enter__(self):
		self.open()
		return self

	#============================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.close()
