"""CLI application entry point and command routing for box-ascii.

This module is the **sole error boundary** for the entire application.
It catches :class:`~box_ascii.exceptions.BoxAsciiError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core and
  infrastructure layers.
* Status output goes to stderr through the Rich console; stdout carries
  only the rendered image, written once after rendering has succeeded.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from rich.color import ColorSystem
from rich.markup import escape

from box_ascii.cli import exit_codes
from box_ascii.cli.console import console
from box_ascii.cli.logging_setup import configure_logging
from box_ascii.config import AppSettings, load_settings
from box_ascii.exceptions import BoxAsciiError
from box_ascii.version import __version__

logger = logging.getLogger(__name__)

COLOR_SYSTEMS: dict[str, ColorSystem | None] = {
    "truecolor": ColorSystem.TRUECOLOR,
    "256": ColorSystem.EIGHT_BIT,
    "standard": ColorSystem.STANDARD,
    "none": None,
}


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``box-ascii [FOLDER_ID]``  — render a random image from a folder
    * ``box-ascii --file-id ID`` — render one specific file
    * ``box-ascii doctor``       — environment diagnostics
    * ``box-ascii --version``
    """
    parser = argparse.ArgumentParser(
        prog="box-ascii",
        description="Render a random image from a Box folder as colored ASCII art.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Box folder ID to pick an image from, or 'doctor' to run diagnostics.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the Box app JSON config (env: BOX_ASCII_CONFIG_PATH).",
    )
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Rendered width in characters (default: 80).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random image pick.",
    )
    parser.add_argument(
        "--file-id",
        default=None,
        help="Render this Box file instead of picking from a folder.",
    )
    parser.add_argument(
        "--color",
        choices=sorted(COLOR_SYSTEMS),
        default="truecolor",
        help="Terminal color depth for the glyphs (default: truecolor).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostic detail to stderr.",
    )
    return parser


def _apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    """Return *settings* with explicitly passed CLI flags applied."""
    update: dict[str, object] = {}
    if args.target is not None:
        update["folder_id"] = args.target
    if args.config is not None:
        update["config_path"] = args.config
    if args.width is not None:
        update["width"] = args.width
    if args.seed is not None:
        update["seed"] = args.seed
    return settings.model_copy(update=update) if update else settings


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_render(
    settings: AppSettings,
    *,
    file_id: str | None = None,
    color_system: ColorSystem | None = ColorSystem.TRUECOLOR,
) -> int:
    """Authenticate, pick and download an image, then print it.

    Flow:
    1. Load credentials from the Box app config.
    2. Exchange a signed JWT assertion for an access token.
    3. List the folder and pick an image (unless ``file_id`` is given).
    4. Download it with a Rich progress bar.
    5. Decode, resize and render; write the result to stdout.
    """
    import httpx

    from box_ascii.cli.progress import DownloadProgress
    from box_ascii.config import load_credentials
    from box_ascii.core.ascii_renderer import render
    from box_ascii.core.gallery_service import GalleryService
    from box_ascii.core.models import FolderItem
    from box_ascii.core.protocols import ImageDecoder
    from box_ascii.infra.box_client import BoxClient
    from box_ascii.infra.pillow_decoder import PillowImageDecoder
    from box_ascii.infra.token_issuer import TokenIssuer

    credentials = load_credentials(settings.config_path)
    rng = random.Random(settings.seed)
    timeout = settings.http_timeout_seconds

    console.print("[bold]Authenticating with Box…[/bold]")
    with httpx.Client(timeout=timeout) as http:
        token = TokenIssuer(http, timeout=timeout).authenticate(credentials)
        gallery = GalleryService(BoxClient(token, http, timeout=timeout))

        if file_id is not None:
            item = FolderItem(id=file_id, name=file_id, type="file", extension="")
        else:
            item = gallery.pick_random_image(settings.folder_id or "", rng)

        console.print(f"Selected [bold]{escape(item.name)}[/bold]")
        with DownloadProgress() as progress:
            data = gallery.fetch_image(item, progress_callback=progress)

    decoder: ImageDecoder = PillowImageDecoder()
    grid = decoder.decode_and_resize(data, settings.width)
    rendered = render(grid, color_system=color_system)

    sys.stdout.write(rendered.to_text())
    sys.stdout.flush()
    return exit_codes.SUCCESS


def _handle_doctor(config_path: Path) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from box_ascii.cli.doctor import run_doctor

    return run_doctor(config_path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the box-ascii CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.target is not None and args.target.lower() == "doctor":
        settings = load_settings()
        return _handle_doctor(args.config or settings.config_path)

    settings = _apply_overrides(load_settings(), args)
    if settings.folder_id is None and args.file_id is None:
        parser.print_help()
        return exit_codes.SUCCESS

    return _handle_render(
        settings,
        file_id=args.file_id,
        color_system=COLOR_SYSTEMS[args.color],
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BoxAsciiError as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("unexpected failure", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
