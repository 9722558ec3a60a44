"""Shared pytest fixtures and configuration for the box-ascii test suite.

Guidelines
----------
* No internet access in any test; HTTP goes through ``httpx.MockTransport``.
* Keys are generated at test time, images are built in memory.
* Tests must not depend on the caller's environment or working directory.
"""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Sequence

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from PIL import Image

from box_ascii.core.models import Credentials


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Drop BOX_* variables and run from an empty directory (no stray .env)."""
    for name in list(os.environ):
        if name.startswith(("BOX_ASCII_", "BOX_FOLDER_ID")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def pkcs8_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def pkcs1_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def ec_pkcs8_pem() -> str:
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def strip_armor() -> Callable[[str], str]:
    """Return a helper that removes the armor lines from a PEM string."""

    def _strip(pem: str) -> str:
        return "\n".join(
            line for line in pem.strip().splitlines() if not line.startswith("-----")
        )

    return _strip


@pytest.fixture
def credentials(pkcs8_pem: str) -> Credentials:
    return Credentials(
        client_id="client-abc",
        client_secret="secret-xyz",
        enterprise_id="998877",
        key_id="kid-01",
        private_key=pkcs8_pem,
        passphrase=None,
    )


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

ImageFactory = Callable[[Sequence[Sequence[tuple[int, int, int]]], str], bytes]


@pytest.fixture
def image_bytes() -> ImageFactory:
    """Return a factory that encodes rows of RGB triples as *fmt* bytes."""

    def _make(rows: Sequence[Sequence[tuple[int, int, int]]], fmt: str = "PNG") -> bytes:
        height = len(rows)
        width = len(rows[0])
        image = Image.new("RGB", (width, height))
        pixels = image.load()
        for y, row in enumerate(rows):
            for x, rgb in enumerate(row):
                pixels[x, y] = rgb
        buffer = io.BytesIO()
        image.save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def checkerboard_png(image_bytes: ImageFactory) -> bytes:
    """2x2 board: white on the main diagonal, black elsewhere."""
    white = (255, 255, 255)
    black = (0, 0, 0)
    return image_bytes([[white, black], [black, white]], "PNG")
