"""Domain models for box-ascii.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access and cheap derived properties.  They carry
no I/O and no dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


# ---------------------------------------------------------------------------
# Credentials and tokens
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Credentials:
    """Box app credentials for the enterprise JWT grant."""

    client_id: str
    """OAuth client ID of the Box app."""

    client_secret: str = field(repr=False)
    """OAuth client secret of the Box app."""

    enterprise_id: str
    """Enterprise the service account acts for (JWT ``sub``)."""

    key_id: str
    """Public key ID registered with Box (JWT header ``kid``)."""

    private_key: str = field(repr=False)
    """RSA private key, PEM armored or a bare base64 body."""

    passphrase: str | None = field(default=None, repr=False)
    """Passphrase for an encrypted PKCS#8 key, if any."""


@dataclass(frozen=True, slots=True)
class BearerToken:
    """Short-lived access token returned by the token endpoint.

    The token value is deliberately excluded from ``repr`` so that it
    cannot end up in logs or tracebacks.
    """

    value: str = field(repr=False)
    issued_at: datetime
    expires_at: datetime

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.value}"}

    def is_expired(self, now: datetime | None = None) -> bool:
        current = now if now is not None else datetime.now(timezone.utc)
        return current >= self.expires_at


# ---------------------------------------------------------------------------
# Folder listing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FolderItem:
    """One entry of a Box folder listing."""

    id: str
    name: str
    type: str
    """Box item type: ``file``, ``folder`` or ``web_link``."""

    extension: str
    """File extension without the dot, empty when Box reports none."""


# ---------------------------------------------------------------------------
# Pixels and rendered output
# ---------------------------------------------------------------------------

Pixel = tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class PixelGrid:
    """Row-major grid of RGB triples.

    ``max_value`` is the largest channel value of the grid's native bit
    depth: 255 for 8-bit data, 65535 for 16-bit data.
    """

    width: int
    height: int
    pixels: tuple[tuple[Pixel, ...], ...]
    max_value: int = 255

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"PixelGrid dimensions must be positive, got {self.width}x{self.height}",
            )
        if self.max_value <= 0:
            raise ValueError("PixelGrid max_value must be positive")
        if len(self.pixels) != self.height:
            raise ValueError(
                f"PixelGrid has {len(self.pixels)} rows, expected {self.height}",
            )
        for row in self.pixels:
            if len(row) != self.width:
                raise ValueError(
                    f"PixelGrid row has {len(row)} pixels, expected {self.width}",
                )


@dataclass(frozen=True, slots=True)
class RenderedImage:
    """Colorized glyph rows, top to bottom."""

    lines: tuple[str, ...]
    width: int
    height: int

    def to_text(self) -> str:
        """Join the rows, terminating each one with a line break."""
        return "".join(f"{line}\n" for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)
