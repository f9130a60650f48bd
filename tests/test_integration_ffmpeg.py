#!/usr/bin/env python3

"""
End-to-end runs against the real ffmpeg binary.
"""

# Standard Library
import json
import os
import shutil
import subprocess
import sys
import tempfile

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from jumpcutlib.core import config
from jumpcutlib.core.cutter import SilenceCutter
from jumpcutlib.core.errors import JumpcutError

#============================================

AV_TOOLS = ("ffmpeg", "ffprobe")
MISSING_AV_TOOLS = [tool for tool in AV_TOOLS if shutil.which(tool) is None]
HAVE_AV_TOOLS = len(MISSING_AV_TOOLS) == 0
SKIP_AV_REASON = f"missing tools: {', '.join(MISSING_AV_TOOLS)}"

#============================================

def _make_clip(path: str, expr: str) -> None:
	"""
	Render a 3 second clip with the given audio expression.
	"""
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-f", "lavfi", "-i", "color=c=black:s=64x64:r=25:d=3",
		"-f", "lavfi", "-i", f"aevalsrc={expr}:s=48000:d=3",
		"-shortest", "-c:v", "mpeg4",
		"-c:a", "pcm_s16le", path,
	]
	subprocess.run(cmd, check=True, stdout=subprocess.DEVNULL,
		stderr=subprocess.DEVNULL)

#============================================

def _probe_duration(path: str) -> float:
	cmd = ["ffprobe", "-v", "error", "-show_entries", "format=duration",
		"-of", "json", path]
	payload = subprocess.check_output(cmd).decode("utf-8")
	data = json.loads(payload)
	duration = data.get("format", {}).get("duration")
	return float(duration) if duration is not None else 0.0

#============================================

@pytest.mark.skipif(not HAVE_AV_TOOLS, reason=SKIP_AV_REASON)
def test_silent_middle_is_cut() -> None:
	with tempfile.TemporaryDirectory() as temp_dir:
		input_file = os.path.join(temp_dir, "tone.mkv")
		output_file = os.path.join(temp_dir, "cut.mkv")
		_make_clip(input_file, "'if(between(t,1,2),0,0.5*sin(440*2*PI*t))'")
		settings = config.build_settings(None)
		settings['keep_trailing'] = True
		cutter = SilenceCutter(input_file, output_file, settings=settings,
			tempdir=temp_dir)
		kept = cutter.run()
		assert len(kept) == 2
		assert kept[0].start == pytest.approx(0.0, abs=0.05)
		assert kept[0].duration == pytest.approx(1.0, abs=0.1)
		assert os.path.isfile(output_file)
		assert _probe_duration(output_file) == pytest.approx(2.0, abs=0.3)
		assert sorted(os.listdir(temp_dir)) == ["cut.mkv", "tone.mkv"]

#============================================

@pytest.mark.skipif(not HAVE_AV_TOOLS, reason=SKIP_AV_REASON)
def test_no_silence_creates_no_output() -> None:
	with tempfile.TemporaryDirectory() as temp_dir:
		input_file = os.path.join(temp_dir, "tone.mkv")
		output_file = os.path.join(temp_dir, "cut.mkv")
		_make_clip(input_file, "'0.5*sin(440*2*PI*t)'")
		cutter = SilenceCutter(input_file, output_file, tempdir=temp_dir)
		with pytest.raises(JumpcutError):
			cutter.run()
		assert not os.path.exists(output_file)
