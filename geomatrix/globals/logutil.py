"""
geomatrix/globals/logutil.py

Console logging helpers shared by the transform core, the QML bridge and the CLI.

Messages are printed with a colored ``[LEVEL]`` prefix. While a :class:`Logger`
is active, everything written to stdout/stderr is mirrored into a timestamped
log file with ANSI escapes stripped.
"""
import re
import sys
import os
from pathlib import Path
from datetime import datetime

from geomatrix.globals import directories, configs

################################################################################################
ANSI_ESCAPE = re.compile(r'\x1B[@-_][0-?]*[ -/]*[@-~]')
TIMESTAMP_PREFIX = re.compile(r"^\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\]")
RESET = '\x1b[0m'
BOLD = "\033[1m"

_VERBOSE = False

def _enable_windows_ansi():
    if os.name != "nt":
        return
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        h = kernel32.GetStdHandle(-11)  # STD_OUTPUT_HANDLE
        mode = ctypes.c_uint32()
        if kernel32.GetConsoleMode(h, ctypes.byref(mode)):
            kernel32.SetConsoleMode(h, mode.value | 0x0004)  # ENABLE_VIRTUAL_TERMINAL_PROCESSING
    except (AttributeError, OSError):
        # plain text is still readable
        pass

_enable_windows_ansi()


def default_log_path(stem: str | None = None) -> Path:
    stem = stem or configs.LOG_FILE_PREFIX
    return directories.LOGS_DIR / f"{stem}_{datetime.now():%Y%m%d_%H%M%S}.log"


class _StreamTee:
    """Writes to one console stream and mirrors into the shared log file."""

    def __init__(self, stream, logfile):
        self.stream = stream
        self.logfile = logfile

    def write(self, message):
        if message is None:
            return
        if isinstance(message, (bytes, bytearray)):
            message = message.decode("utf-8", errors="replace")
        elif not isinstance(message, str):
            message = str(message)

        for part in message.splitlines(keepends=True):
            self.stream.write(part)

            if part.strip() and not TIMESTAMP_PREFIX.match(part):
                part = f"[{datetime.now():%Y-%m-%d %H:%M:%S}] {part}"
            self.logfile.write(ANSI_ESCAPE.sub("", part))

    def flush(self):
        self.stream.flush()
        self.logfile.flush()


class Logger:
    """Tee stdout/stderr into ``logfile_path`` until :meth:`close` is called.

    Each console stream keeps its own destination; both share the log file.
    """
    _instance = None

    def __init__(self, logfile_path: Path | str | None = None):
        self.logfile_path = Path(logfile_path) if logfile_path else default_log_path()
        self.logfile_path.parent.mkdir(parents=True, exist_ok=True)

        self._prev_stdout = sys.stdout
        self._prev_stderr = sys.stderr

        self.logfile = open(self.logfile_path, "a", encoding="utf-8", buffering=1)  # line-buffered
        self.stdout = _StreamTee(self._prev_stdout, self.logfile)
        self.stderr = _StreamTee(self._prev_stderr, self.logfile)
        sys.stdout = self.stdout
        sys.stderr = self.stderr

    def __enter__(self): return self
    def __exit__(self, exc_type, exc, tb): self.close()

    def close(self):
        if sys.stdout is self.stdout:
            sys.stdout = self._prev_stdout
        if sys.stderr is self.stderr:
            sys.stderr = self._prev_stderr
        self.logfile.close()
        if Logger._instance is self:
            Logger._instance = None

    @classmethod
    def setup(cls, logfile_path=None):
        if cls._instance is None:
            cls._instance = cls(logfile_path)
        return cls._instance

    @classmethod
    def teardown(cls):
        if cls._instance:
            cls._instance.close()

def set_verbose(flag: bool) -> None:
    global _VERBOSE
    _VERBOSE = bool(flag)

def rgb_prefix(r: int, g: int, b: int) -> str:
    """Start an RGB color (leave it open)."""
    return f"\033[38;2;{r};{g};{b}m"

def _log(level, color_code, msg, *, stream=None):
    """
    color_code is an (r, g, b) tuple for 24-bit color.
    """
    prefix = f"{rgb_prefix(*color_code)}{BOLD}[{level}]{RESET} "
    print(prefix + msg, file=stream or sys.stdout)

def process_step(msg):  _log("PROCESS", (171, 52, 235), msg)
def info(msg): _log("INFO", (0, 255, 255), msg)
def warn(msg): _log("WARNING", (255, 255, 0), msg, stream=sys.stderr)
def error(msg): _log("ERROR", (255, 0, 0), msg, stream=sys.stderr)
def success(msg): _log("SUCCESS", (0, 255, 0), msg)
def setting_config(msg): _log("SETTING", (250, 197, 97), msg)

def debug(msg):
    if _VERBOSE:
        _log("DEBUG", (150, 150, 150), msg)
