"""
Environment variables shared by the CLI launcher and the pytest plugin.

The CLI derives these from its flags and hands them to the spawned pytest
process; the plugin reads them back when it builds the run context.
"""

from typing import Mapping, Optional

CI = "CI"
REPL = "PUPPETEER_REPL"
SLOWMO = "PUPPETEER_SLOWMO"
SCREENSHOT = "JEST_E2E_SCREENSHOT"
SILENT = "JEST_SILENT"
NO_STEPS = "JEST_NO_STEPS"
FORCE_STEPS = "JEST_FORCE_STEPS"
TIMEOUT = "JEST_TIMEOUT"
DEBUG = "DEBUG"
BROWSER = "E2E_BROWSER"

DEFAULT_TIMEOUT_MS = 30000


def env_flag(environ: Mapping[str, str], name: str) -> bool:
    """True only for the literal string "true"."""
    return environ.get(name) == "true"


def env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    """Read an integer variable, falling back to ``default`` when unset or malformed."""
    raw: Optional[str] = environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
