#!/usr/bin/env python3

"""
Streaming extraction of non-silent intervals from silencedetect diagnostics.

The analysis pass prints lines such as:

	[silencedetect @ 0x55d0] silence_start: 2.5
	[silencedetect @ 0x55d0] silence_end: 4.25 | silence_duration: 1.75

Every span between the end of one silence and the start of the next is kept.
"""

import math
from jumpcutlib.core import utils

#============================================

SILENCE_START_MARKER = "silence_start: "
SILENCE_END_MARKER = "silence_end: "
DURATION_MARKER = "Duration: "
DEFAULT_MIN_GAP = 0.01

#============================================

class KeepInterval():
	"""
	A contiguous non-silent span of the source, in seconds.
	"""
	def __init__(self, start: float, duration: float, index: int = 0):
		self.start = start
		self.duration = duration
		self.index = index

	#============================
	@property
	def end(self) -> float:
		return self.start + self.duration

	#============================
	def as_dict(self) -> dict:
		return {
			'index': self.index,
			'start': round(self.start, 6),
			'duration': round(self.duration, 6),
			'end': round(self.end, 6),
		}

	#============================
	def _key(self) -> tuple:
		# microsecond resolution, finer than any engine timestamp
		return (round(self.start, 6), round(self.duration, 6))

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, KeepInterval):
			return NotImplemented
		return self._key() == other._key()

	#============================
	def __hash__(self) -> int:
		return hash(self._key())

	#============================
	def __repr__(self) -> str:
		return f"KeepInterval(start={self.start!r}, duration={self.duration!r})"

#============================================

class ScanState():
	"""
	Cursor over the diagnostic stream, one line of lookback.
	"""
	def __init__(self):
		self.last_silence_end = 0.0
		self.in_silence = False
		self.media_duration = None
		self.emitted = 0

#============================================

def parse_marker_value(line: str, marker: str):
	"""
	Return the number that follows marker in line, or None.

	Args:
		line: Diagnostic line.
		marker: Marker text including the trailing colon and space.

	Returns:
		float or None: Parsed value, None when missing or malformed.
	"""
	pos = line.find(marker)
	if pos < 0:
		return None
	tokens = line[pos:].split()
	if len(tokens) < 2:
		utils.log_debug(f"no value after {marker.strip()} in: {line}")
		return None
	try:
		value = float(tokens[1])
	except ValueError:
		utils.log_debug(f"unparsable {marker.strip()} value: {tokens[1]!r}")
		return None
	if not math.isfinite(value):
		utils.log_debug(f"non-finite {marker.strip()} value: {tokens[1]!r}")
		return None
	return value

#============================================

def parse_duration_line(line: str):
	"""
	Parse the media duration from an engine 'Duration: HH:MM:SS.xx,' line.

	Returns:
		float or None: Duration in seconds.
	"""
	pos = line.find(DURATION_MARKER)
	if pos < 0:
		return None
	tokens = line[pos:].split()
	if len(tokens) < 2:
		return None
	value = tokens[1].rstrip(',')
	parts = value.split(':')
	if len(parts) != 3:
		return None
	try:
		hours = int(parts[0])
		minutes = int(parts[1])
		seconds = float(parts[2])
	except ValueError:
		return None
	return hours * 3600.0 + minutes * 60.0 + seconds

#============================================

class KeepIntervalExtractor():
	"""
	Turn silence markers into keep intervals, one line at a time.
	"""
	def __init__(self, min_gap: float = DEFAULT_MIN_GAP, keep_trailing: bool = False):
		self.min_gap = min_gap
		self.keep_trailing = keep_trailing
		self.state = ScanState()

	#============================
	def feed(self, line: str):
		"""
		Consume one diagnostic line.

		Returns:
			KeepInterval or None: The interval closed by this line, if any.
		"""
		state = self.state
		if SILENCE_END_MARKER in line:
			value = parse_marker_value(line, SILENCE_END_MARKER)
			if value is not None:
				state.last_silence_end = value
				state.in_silence = False
			return None
		if SILENCE_START_MARKER in line:
			candidate_start = parse_marker_value(line, SILENCE_START_MARKER)
			if candidate_start is None:
				return None
			state.in_silence = True
			return self._close_interval(candidate_start)
		if state.media_duration is None and DURATION_MARKER in line:
			state.media_duration = parse_duration_line(line)
		return None

	#============================
	def finish(self):
		"""
		Close the scan; returns the trailing interval when enabled.
		"""
		state = self.state
		if not self.keep_trailing:
			return None
		if state.in_silence or state.media_duration is None:
			return None
		return self._close_interval(state.media_duration)

	#============================
	def _close_interval(self, end_time: float):
		state = self.state
		gap = end_time - state.last_silence_end
		if abs(gap) <= self.min_gap:
			utils.log_debug(f"skip degenerate gap {gap:.6f}s at {state.last_silence_end}")
			return None
		if gap < 0:
			utils.log_debug(f"skip out of order marker {end_time} < {state.last_silence_end}")
			return None
		interval = KeepInterval(state.last_silence_end, gap, index=state.emitted)
		state.emitted += 1
		utils.log_debug(f"keep {interval.start}-{end_time}")
		return interval

#============================================

def iter_keep_intervals(lines, min_gap: float = DEFAULT_MIN_GAP,
	keep_trailing: bool = False):
	"""
	Yield keep intervals lazily from an iterable of diagnostic lines.
	"""
	extractor = KeepIntervalExtractor(min_gap=min_gap, keep_trailing=keep_trailing)
	for line in lines:
		interval = extractor.feed(line)
		if interval is not None:
			yield interval
	interval = extractor.finish()
	if interval is not None:
		yield interval
