"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Box API (httpx) and image
decoding (Pillow).  Every raw third-party exception must be caught here
and re-raised as a :class:`~box_ascii.exceptions.BoxAsciiError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from box_ascii.infra.box_client import BoxClient
from box_ascii.infra.pillow_decoder import PillowImageDecoder
from box_ascii.infra.token_issuer import TokenIssuer

__all__: list[str] = [
    "BoxClient",
    "PillowImageDecoder",
    "TokenIssuer",
]
