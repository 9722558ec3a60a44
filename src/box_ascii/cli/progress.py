"""Rich progress bar driven by download progress callbacks.

:class:`DownloadProgress` is passed as ``progress_callback`` through
:class:`~box_ascii.core.gallery_service.GalleryService` down to
:meth:`~box_ascii.infra.box_client.BoxClient.download_file`, which
calls it with dicts of the form::

    {"status": "downloading" | "finished",
     "downloaded_bytes": int, "total_bytes": int | None,
     "filename": str}

The bar is transient: it disappears once the download ends so that it
does not sit above the rendered image.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TransferSpeedColumn,
)

from box_ascii.cli.console import console as default_console

_MAX_LABEL = 40


class DownloadProgress:
    """Callable progress adapter.

    Usage::

        with DownloadProgress() as progress:
            data = gallery.fetch_image(item, progress_callback=progress)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console or default_console,
            transient=True,
        )
        self._task_id: TaskID | None = None
        self._started = False

    def __enter__(self) -> DownloadProgress:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def start(self) -> None:
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    @property
    def task_id(self) -> TaskID | None:
        return self._task_id

    def __call__(self, event: dict[str, Any]) -> None:
        # Events arriving after stop() are ignored.
        if not self._started:
            return

        downloaded = event.get("downloaded_bytes")
        completed = downloaded if isinstance(downloaded, int) else 0
        total = event.get("total_bytes")
        total = total if isinstance(total, int) else None

        if self._task_id is None:
            self._task_id = self._progress.add_task(
                _shorten(str(event.get("filename") or "Downloading")),
                total=total,
            )

        if event.get("status") == "finished":
            self._progress.update(self._task_id, total=completed, completed=completed)
        elif total is not None:
            self._progress.update(self._task_id, total=total, completed=completed)
        else:
            self._progress.update(self._task_id, completed=completed)


def _shorten(label: str) -> str:
    if len(label) > _MAX_LABEL:
        return label[: _MAX_LABEL - 3] + "..."
    return label
