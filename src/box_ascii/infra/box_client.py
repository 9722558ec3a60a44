"""httpx-backed implementation of :class:`~box_ascii.core.protocols.StorageProvider`.

:class:`BoxClient` holds the bearer token and sends it on every folder
listing and file download request.  All httpx exceptions and error
statuses are re-raised as :class:`~box_ascii.exceptions.BoxApiError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

from box_ascii.core.models import BearerToken, FolderItem
from box_ascii.exceptions import BoxApiError

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.box.com/2.0"
LIST_FIELDS = "id,name,type,extension"
PAGE_LIMIT = 1000


class BoxClient:
    """Authorized Box API client.

    This class satisfies the :class:`~box_ascii.core.protocols.StorageProvider`
    protocol structurally.

    Parameters
    ----------
    token:
        Access token from :class:`~box_ascii.infra.token_issuer.TokenIssuer`.
    http_client:
        Shared client.  When ``None`` the instance opens its own and
        closes it in :meth:`close`.
    """

    def __init__(
        self,
        token: BearerToken,
        http_client: httpx.Client | None = None,
        *,
        base_url: str = API_BASE_URL,
        timeout: float = 30.0,
        page_limit: int = PAGE_LIMIT,
    ) -> None:
        self._token = token
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._page_limit = page_limit

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> BoxClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_folder_items(self, folder_id: str) -> list[FolderItem]:
        """Return every item in *folder_id*, following offset pagination.

        Raises
        ------
        BoxApiError
            On transport failure, an error status, or a malformed payload.
        """
        url = f"{self._base_url}/folders/{folder_id}/items"
        items: list[FolderItem] = []
        offset = 0
        while True:
            payload = self._get_json(
                url,
                params={"fields": LIST_FIELDS, "limit": self._page_limit, "offset": offset},
                what=f"folder {folder_id}",
            )
            entries, total_count = self._validate_listing(payload)
            items.extend(
                self._parse_item(entry) for entry in entries if isinstance(entry, dict)
            )
            offset += len(entries)
            if not entries or offset >= total_count:
                break

        logger.debug("listed %d items in folder %s", len(items), folder_id)
        return [item for item in items if item.id]

    def download_file(
        self,
        file_id: str,
        *,
        progress_callback: Callable[[dict[str, Any]], None] | None = None,
        label: str | None = None,
    ) -> bytes:
        """Stream the content of *file_id* into memory.

        The response is consumed inside a ``with`` block so the body is
        closed on every exit path.  *label* is the name reported to
        *progress_callback*; it defaults to the file ID.

        Raises
        ------
        BoxApiError
            On transport failure or an error status.
        """
        url = f"{self._base_url}/files/{file_id}/content"
        filename = label or file_id
        buffer = bytearray()
        try:
            with self._client.stream(
                "GET",
                url,
                headers=self._token.authorization_header,
                follow_redirects=True,
                timeout=self._timeout,
            ) as response:
                if response.is_error:
                    raise self._status_error(response, f"file {file_id}")
                total = _safe_int(response.headers.get("Content-Length"))
                for chunk in response.iter_bytes():
                    buffer.extend(chunk)
                    if progress_callback is not None:
                        progress_callback({
                            "status": "downloading",
                            "downloaded_bytes": len(buffer),
                            "total_bytes": total,
                            "filename": filename,
                        })
        except httpx.HTTPError as exc:
            raise BoxApiError(
                f"failed to download file {file_id}: {exc}",
                hint="Check your network connection.",
            ) from exc

        if progress_callback is not None:
            progress_callback({
                "status": "finished",
                "downloaded_bytes": len(buffer),
                "total_bytes": len(buffer),
                "filename": filename,
            })
        return bytes(buffer)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_json(self, url: str, *, params: dict[str, Any], what: str) -> dict[str, Any]:
        try:
            response = self._client.get(
                url,
                params=params,
                headers=self._token.authorization_header,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise BoxApiError(
                f"failed to list {what}: {exc}",
                hint="Check your network connection.",
            ) from exc

        if response.is_error:
            raise self._status_error(response, what)

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise BoxApiError(f"failed to decode listing of {what}") from exc
        if not isinstance(payload, dict):
            raise BoxApiError(f"listing of {what} is not a JSON object")
        return payload

    @staticmethod
    def _validate_listing(payload: dict[str, Any]) -> tuple[list[Any], int]:
        total_count = payload.get("total_count")
        if not isinstance(total_count, int) or isinstance(total_count, bool):
            raise BoxApiError(
                "listing payload has no total_count; the response is malformed",
            )
        entries = payload.get("entries")
        if not isinstance(entries, list):
            raise BoxApiError("listing payload has no entries; the response is malformed")
        return entries, total_count

    @staticmethod
    def _parse_item(entry: dict[str, Any]) -> FolderItem:
        return FolderItem(
            id=str(entry.get("id") or ""),
            name=str(entry.get("name") or ""),
            type=str(entry.get("type") or "file"),
            extension=str(entry.get("extension") or ""),
        )

    @staticmethod
    def _status_error(response: httpx.Response, what: str) -> BoxApiError:
        status = response.status_code
        hint: str | None = None
        if status == 401:
            hint = "The access token was rejected; re-run to authenticate again."
        elif status == 403:
            hint = "The service account has no access; collaborate it on the folder."
        elif status == 404:
            hint = "Check the folder or file ID."
        return BoxApiError(f"Box API returned HTTP {status} for {what}", hint=hint)


def _safe_int(value: object) -> int | None:
    """Convert *value* to ``int`` or return ``None``."""
    if value is None:
        return None
    try:
        if isinstance(value, (int, str, bytes)):
            return int(value)
        return None
    except (TypeError, ValueError):
        return None
