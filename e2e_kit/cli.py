# ================================================================================
# E2E Test Runner CLI
# ================================================================================
#
# Entry point behind the `pytest-e2e` command. Parses the runner flags,
# translates them into environment variables for the e2e pytest plugin and
# runs pytest in a subprocess, forwarding its exit code.
#
# Features:
#   - Headless by default, visible browser on request (or implied by
#     --repl / --slowmo)
#   - Live step logging policy (--silent, --no-steps)
#   - Screenshots on failure, custom timeout, slow motion
#   - Project scaffolding (`init`), automatic on first run
#   - Watch mode
#
# Usage:
#   pytest-e2e init
#   pytest-e2e login-success --slowmo 100
#   pytest-e2e --useLocalBrowser true --verbose
#
# ================================================================================

import argparse
import os
import re
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from loguru import logger

from e2e_kit.common import env
from e2e_kit.scaffold import TESTS_DIR_NAME, is_initialized, scaffold_project

DEFAULT_SLOWMO_MS = 0
WATCH_SUFFIXES = (".py", ".yaml", ".yml")
WATCH_IGNORED_DIRS = {".git", ".venv", "venv", "__pycache__", "node_modules", "screenshots"}
WATCH_INTERVAL_SECONDS = 1.0

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")

EPILOG = """
Examples:
  pytest-e2e init                               # Initialize project with example files
  pytest-e2e                                    # Run all tests (auto-initializes if needed)
  pytest-e2e login-success                      # Run specific test (headless)
  pytest-e2e --useLocalBrowser true             # Run all tests with visible browser
  pytest-e2e login-success --repl               # Run test and pause the browser afterwards
  pytest-e2e --debug --verbose                  # Run with debug and verbose output
  pytest-e2e login-success --slowmo 100         # Run with 100ms delay between actions
  pytest-e2e --watch                            # Re-run tests when files change
  pytest-e2e --silent                           # Run without step logging
  pytest-e2e login-success --no-steps           # Run specific test without step logging

Environment:
  Tests run headless by default for CI/automation. Step logging shows
  real-time progress in visible browser modes (--useLocalBrowser, --repl,
  --slowmo) and stays quiet in headless runs.

Note:
  If no e2e_tests/ directory or e2e.yaml is found, the project is
  initialized automatically before running.
"""


@dataclass
class CliOptions:
    """Flat record of the runner flags."""
    test_name: str = ""
    use_local_browser: bool = False
    repl: bool = False
    debug: bool = False
    watch: bool = False
    verbose: bool = False
    timeout: int = env.DEFAULT_TIMEOUT_MS
    slowmo: int = DEFAULT_SLOWMO_MS
    screenshot: bool = False
    silent: bool = False
    steps: bool = True
    init: bool = False


def parse_int(value: Optional[str], default: int) -> int:
    """
    Lenient integer parsing for numeric flags.

    Leading digits are honoured ("250ms" -> 250); anything unparsable, and
    zero, falls back to ``default``.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    parsed = int(match.group()) if match else 0
    return parsed or default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pytest-e2e",
        description="🚀 E2E Test Runner (pytest + Playwright)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        "targets",
        nargs="*",
        metavar="init|test_name",
        help="'init' to scaffold the project, or the name of the test to run (runs all if omitted)",
    )
    parser.add_argument(
        "--useLocalBrowser",
        dest="use_local_browser",
        nargs="?",
        const="true",
        default="false",
        metavar="true|false",
        help="Run with visible browser (default: headless)",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Pause the browser after the test for manual inspection",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with devtools and full tracebacks",
    )
    parser.add_argument(
        "--watch", "-w",
        action="store_true",
        help="Watch mode - re-run tests when files change",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output with detailed test information",
    )
    parser.add_argument(
        "--timeout",
        nargs="?",
        metavar="ms",
        help=f"Default timeout in milliseconds (default: {env.DEFAULT_TIMEOUT_MS})",
    )
    parser.add_argument(
        "--slowmo",
        nargs="?",
        metavar="ms",
        help=f"Delay between actions in milliseconds (default: {DEFAULT_SLOWMO_MS})",
    )
    parser.add_argument(
        "--screenshot",
        action="store_true",
        help="Take screenshots on test failures",
    )
    parser.add_argument(
        "--silent",
        action="store_true",
        help="Run in silent mode (no step logging)",
    )
    parser.add_argument(
        "--no-steps",
        dest="steps",
        action="store_false",
        help="Disable step-by-step logging only",
    )

    return parser


def parse_options(argv: Optional[List[str]] = None) -> CliOptions:
    """Parse command-line arguments into CliOptions."""
    args = build_parser().parse_intermixed_args(argv)

    init = "init" in args.targets
    test_names = [target for target in args.targets if target != "init"]

    return CliOptions(
        test_name=test_names[0] if test_names else "",
        use_local_browser=args.use_local_browser == "true",
        repl=args.repl,
        debug=args.debug,
        watch=args.watch,
        verbose=args.verbose,
        timeout=parse_int(args.timeout, env.DEFAULT_TIMEOUT_MS),
        slowmo=parse_int(args.slowmo, DEFAULT_SLOWMO_MS),
        screenshot=args.screenshot,
        silent=args.silent,
        steps=args.steps and not args.silent,
        init=init,
    )


def build_environment(options: CliOptions, base_env: Mapping[str, str]) -> Dict[str, str]:
    """
    Derive the environment of the pytest subprocess.

    REPL mode and slow motion force a visible browser; step logging is
    forced on in visible modes unless silenced.
    """
    child_env = dict(base_env)

    child_env[env.CI] = "false" if options.use_local_browser else "true"

    if options.repl:
        child_env[env.REPL] = "true"
        child_env[env.CI] = "false"

    if options.slowmo > 0:
        child_env[env.SLOWMO] = str(options.slowmo)
        child_env[env.CI] = "false"

    if options.screenshot:
        child_env[env.SCREENSHOT] = "true"

    if options.silent:
        child_env[env.SILENT] = "true"
    elif not options.steps:
        child_env[env.NO_STEPS] = "true"
    elif options.use_local_browser or options.repl or options.slowmo > 0:
        child_env[env.FORCE_STEPS] = "true"

    child_env[env.TIMEOUT] = str(options.timeout)

    if options.debug:
        child_env[env.DEBUG] = "true"

    return child_env


def build_pytest_command(options: CliOptions, tests_dir: Optional[Path] = None) -> List[str]:
    """Build the pytest command with all options."""
    cmd = [sys.executable, "-m", "pytest"]

    if tests_dir is not None and tests_dir.is_dir():
        cmd.append(str(tests_dir))

    # Module names use underscores where test names are often typed with dashes
    if options.test_name:
        cmd.extend(["-k", options.test_name.replace("-", "_")])

    cmd.append("-v" if options.verbose else "-q")

    if options.debug:
        cmd.extend(["-s", "--full-trace"])

    return cmd


class E2ERunner:
    """
    Runs pytest for the e2e suite with the environment derived from flags.

    Usage:
        runner = E2ERunner(parse_options(["login-success", "--slowmo", "100"]))
        exit_code = runner.run()
    """

    def __init__(self, options: CliOptions, project_root: Optional[Path] = None):
        """
        Initialize runner.

        Args:
            options: Parsed CLI options
            project_root: Directory to run in (defaults to the working directory)
        """
        self.options = options
        self.root_dir = project_root or Path.cwd()
        self.tests_dir = self.root_dir / TESTS_DIR_NAME

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            pytest's exit code, or 1 when pytest could not be started
        """
        self._print_configuration()

        if self.options.watch:
            return self._watch()

        exit_code = self._run_once()
        self._print_summary(exit_code)
        return exit_code

    def _print_configuration(self) -> None:
        visible = self.options.use_local_browser or self.options.repl or self.options.slowmo > 0
        logger.info("🧪 E2E Test Runner")
        logger.info(f"🎯 Running test: {self.options.test_name or 'all tests'}")
        logger.info(f"🖥️  Browser mode: {'visible' if visible else 'headless'}")
        if self.options.repl:
            logger.info("🔧 REPL mode: enabled (browser pauses after the test)")
        if self.options.slowmo > 0:
            logger.info(f"⏱️  Slow motion: {self.options.slowmo}ms")
        logger.debug(f"⏰ Timeout: {self.options.timeout}ms")

    def _run_once(self) -> int:
        cmd = build_pytest_command(self.options, self.tests_dir)
        child_env = build_environment(self.options, os.environ)

        logger.debug(f"Executing: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, env=child_env, cwd=str(self.root_dir))
        except OSError as e:
            logger.error(f"❌ Error running pytest: {e}")
            return 1
        return result.returncode

    def _snapshot(self) -> Dict[Path, float]:
        snapshot: Dict[Path, float] = {}
        for path in self.root_dir.rglob("*"):
            relative_parts = path.relative_to(self.root_dir).parts
            if path.suffix not in WATCH_SUFFIXES or WATCH_IGNORED_DIRS.intersection(relative_parts):
                continue
            if path.is_file():
                snapshot[path] = path.stat().st_mtime
        return snapshot

    def _watch(self) -> int:
        """Re-run pytest whenever a watched file changes, until interrupted."""
        exit_code = 0
        try:
            while True:
                snapshot = self._snapshot()
                exit_code = self._run_once()
                self._print_summary(exit_code)
                logger.info("👀 Watching for changes... (Ctrl+C to stop)")
                while self._snapshot() == snapshot:
                    time.sleep(WATCH_INTERVAL_SECONDS)
                logger.info("🔄 Change detected, re-running tests")
        except KeyboardInterrupt:
            logger.info("Watch mode stopped")
        return exit_code

    def _print_summary(self, exit_code: int) -> None:
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
            if self.options.repl:
                logger.info("🔧 REPL mode: the browser was paused after each test for inspection.")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")


def _print_next_steps() -> None:
    logger.info("✅ E2E project initialized successfully!")
    logger.info("Next steps:")
    logger.info("1. Install browsers: playwright install chromium")
    logger.info("2. Test examples: pytest-e2e")
    logger.info("3. Edit the example tests to match your application")
    logger.info(f"4. Create your own test files in {TESTS_DIR_NAME}/")


def run_cli(argv: Optional[List[str]] = None, project_root: Optional[Path] = None) -> int:
    """
    Run the CLI and return the exit code.

    Args:
        argv: Arguments without the program name (sys.argv[1:] if None)
        project_root: Project directory (working directory if None)
    """
    options = parse_options(argv)
    root = project_root or Path.cwd()

    if options.init:
        logger.info("🚀 Initializing E2E project...")
        scaffold_project(root)
        _print_next_steps()
        return 0

    if not is_initialized(root):
        logger.info("🔍 No E2E configuration detected.")
        logger.info("🚀 Initializing your project automatically...")
        scaffold_project(root)
        _print_next_steps()

    return E2ERunner(options, root).run()


def main() -> None:
    """Console script entry point."""
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
        level="INFO",
    )
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
