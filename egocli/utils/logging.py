"""
Logging utilities for ego
"""
import sys
from contextlib import contextmanager
from datetime import datetime

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()

_verbose = False


def set_verbose(verbose: bool):
    """Set the verbose flag"""
    global _verbose
    _verbose = bool(verbose)


def is_verbose() -> bool:
    return _verbose


def log(msg: str = ""):
    """Log a message with timestamp"""
    ts = datetime.now().strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def vlog(msg: str):
    """Log a verbose message (only if verbose mode is enabled)"""
    if _verbose:
        log(msg)


def warn(msg: str):
    """Write a warning line to stderr"""
    print(f"⚠  {msg}", file=sys.stderr, flush=True)


def err(msg=""):
    """Write an error line to stderr"""
    print(f"{Fore.RED}{msg}{Style.RESET_ALL}" if msg else "", file=sys.stderr, flush=True)


def write_line(msg: str = ""):
    """Plain output, no timestamp (help screens, tables, URLs)"""
    print(msg, flush=True)


def colorize(text) -> str:
    """Highlight a name or path in console output."""
    return f"{Fore.CYAN}{text}{Style.RESET_ALL}"


# ── spinner ──────────────────────────────────────────────────────────────────

class Spinner:
    """
    Narrates one step of a command.
    The block may change ``text`` or call succeed/fail/warn to set the final
    line; otherwise the last ``text`` is reported.
    """

    def __init__(self, text: str):
        self.text = text
        self.state = None
        self._final = None

    def succeed(self, text: str = None):
        self.state = "succeed"
        self._final = text or self.text

    def fail(self, text: str = None):
        self.state = "fail"
        self._final = text or self.text

    def warn(self, text: str = None):
        self.state = "warn"
        self._final = text or self.text

    def final_line(self) -> str:
        text = self._final or self.text
        if self.state == "fail":
            return f"{Fore.RED}✗{Style.RESET_ALL} {text}"
        if self.state == "warn":
            return f"{Fore.YELLOW}⚠{Style.RESET_ALL} {text}"
        return f"{Fore.GREEN}✓{Style.RESET_ALL} {text}"


@contextmanager
def spinner(text: str):
    """Log the start of a step, then its outcome; exceptions are re-raised."""
    sp = Spinner(text)
    log(text)
    try:
        yield sp
    except BaseException:
        sp.fail()
        log(sp.final_line())
        raise
    log(sp.final_line())


def wait_for_enter(prompt: str = "Press <ENTER> to stop ..."):
    """Block until the user presses ENTER (or stdin is closed)."""
    try:
        input(prompt)
    except EOFError:
        pass
