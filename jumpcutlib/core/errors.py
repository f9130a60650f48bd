#!/usr/bin/env python3

#============================================

class JumpcutError(RuntimeError):
	"""
	Fatal error that ends the run with a process exit code.
	"""
	def __init__(self, message: str, exit_code: int = 1):
		super().__init__(message)
		self.exit_code = exit_code

#============================================

def exit_code_from_os_error(err: OSError) -> int:
	code = getattr(err, 'errno', None)
	if isinstance(code, int) and code > 0:
		return code
	return 1

#============================================

def exit_code_from_status(returncode) -> int:
	# negative return codes are signals
	if isinstance(returncode, int) and returncode > 0:
		return returncode
	return 1
