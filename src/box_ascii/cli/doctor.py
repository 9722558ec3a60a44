"""``box-ascii doctor`` — environment diagnostics command.

Checks the interpreter, the installed runtime dependencies and the Box
config file, then renders a Rich table.  Missing dependencies are
failures; a missing config file is only a warning because ``--config``
may point elsewhere at render time.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata
from pathlib import Path

from rich.table import Table

from box_ascii.cli import exit_codes
from box_ascii.cli.console import console
from box_ascii.config import DEFAULT_CONFIG_PATH
from box_ascii.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"

# (display label, distribution name on the index)
RUNTIME_DISTRIBUTIONS: tuple[tuple[str, str], ...] = (
    ("Pillow", "Pillow"),
    ("httpx", "httpx"),
    ("PyJWT", "PyJWT"),
    ("cryptography", "cryptography"),
    ("pydantic", "pydantic"),
    ("pydantic-settings", "pydantic-settings"),
    ("rich", "rich"),
)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _box_ascii_version_check() -> tuple[str, str, str]:
    return "box-ascii", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _distribution_check(label: str, distribution: str) -> tuple[str, str, str]:
    """Return (label, value, status) for one installed distribution."""
    try:
        version = metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return label, "NOT INSTALLED", FAIL
    return label, version, OK


def _config_check(config_path: Path) -> tuple[str, str, str]:
    """Return (label, value, status) for the Box config file row."""
    if config_path.is_file():
        return "config", str(config_path), OK
    return "config", f"{config_path} (missing)", WARN


def collect_checks(config_path: Path = DEFAULT_CONFIG_PATH) -> list[tuple[str, str, str]]:
    checks = [_box_ascii_version_check(), _python_version_check()]
    checks.extend(
        _distribution_check(label, distribution)
        for label, distribution in RUNTIME_DISTRIBUTIONS
    )
    checks.append(_config_check(config_path))
    return checks


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: Path = DEFAULT_CONFIG_PATH) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks(config_path)
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="box-ascii doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
