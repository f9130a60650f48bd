#!/usr/bin/env python3

import os
import tempfile
from jumpcutlib.core import errors
from jumpcutlib.core import utils

#============================================

class TemporaryWorkspace():
	"""
	Scratch directory holding the manifest and the extracted pieces.

	The directory and everything in it is removed when the context exits.
	"""
	def __init__(self, parent_dir: str = None, piece_extension: str = 'mkv'):
		self.parent_dir = parent_dir
		self.piece_extension = piece_extension.lstrip('.')
		self.path = None
		self._tempdir = None
		self._counter = 0

	#============================
	def __enter__(self):
		utils.log_info("Create temporary directory")
		try:
			self._tempdir = tempfile.TemporaryDirectory(prefix="jumpcutter-",
				dir=self.parent_dir)
		except OSError as err:
			raise errors.JumpcutError(f"failed to create a temporary directory: {err}",
				errors.exit_code_from_os_error(err)) from err
		self.path = self._tempdir.name
		return self

	#============================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		if self._tempdir is None:
			return
		try:
			self._tempdir.cleanup()
		except OSError as err:
			utils.log_error(f"failed to remove temporary directory {self.path}: {err}")
		self._tempdir = None

	#============================
	@property
	def manifest_path(self) -> str:
		return os.path.join(self.path, "concat.txt")

	#============================
	def next_piece_path(self) -> str:
		piece = os.path.join(self.path,
			f"piece-{self._counter:08x}.{self.piece_extension}")
		self._counter += 1
		return piece

	#============================
	def staging_path(self, output_file: str) -> str:
		"""
		Path inside the workspace that shares the output's extension.
		"""
		extension = os.path.splitext(output_file)[1]
		return os.path.join(self.path, f"output{extension}")
