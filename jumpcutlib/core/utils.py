#!/usr/bin/env python3

import shlex

# PIP3 modules
from rich.console import Console
from rich.text import Text

#============================================

NORD_COLORS = {
	'dim': "#4C566A",
	'header': "#88C0D0",
	'numbers': "#B48EAD",
	'paths': "#A3BE8C",
	'error': "#BF616A",
}

_CONSOLE = Console(stderr=True, highlight=False, soft_wrap=True)
_QUIET_MODE = False
_DEBUG_MODE = False

#============================================

def set_quiet_mode(enabled: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(enabled)

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def set_debug_mode(enabled: bool) -> None:
	global _DEBUG_MODE
	_DEBUG_MODE = bool(enabled)

#============================================

def is_debug_mode() -> bool:
	return _DEBUG_MODE

#============================================

def set_console(console: Console) -> None:
	"""
	Replace the operator console, used by tests to capture output.
	"""
	global _CONSOLE
	_CONSOLE = console

#============================================

def log_error(message: str) -> None:
	_CONSOLE.print(Text(f"error: {message}", style=f"bold {NORD_COLORS['error']}"))

#============================================

def log_info(message: str) -> None:
	if _QUIET_MODE:
		return
	_CONSOLE.print(Text(message, style=NORD_COLORS['header']))

#============================================

def log_debug(message: str) -> None:
	if not _DEBUG_MODE:
		return
	_CONSOLE.print(Text(message, style=NORD_COLORS['dim']))

#============================================

def echo_line(line: str) -> None:
	"""
	Echo one diagnostic line from the engine.
	"""
	if _QUIET_MODE:
		return
	_CONSOLE.print(Text(line, style=NORD_COLORS['dim']))

#============================================

def show_cmd(cmd: list) -> str:
	showcmd = shlex.join([str(part) for part in cmd])
	log_debug(f"CMD: '{showcmd}'")
	return showcmd

#============================================

def format_seconds(seconds: float) -> str:
	"""
	Format seconds as a compact engine time argument.
	"""
	value = f"{seconds:.6f}"
	value = value.rstrip('0').rstrip('.')
	if value == "" or value == "-0":
		value = "0"
	return value
