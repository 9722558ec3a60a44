"""JWT assertion construction for the Box enterprise JWT-bearer grant.

Both functions here are pure: given the same inputs they return the
same output and touch neither the network nor the clock (the clock and
the ``jti`` nonce can be injected).  The network exchange lives in
:mod:`box_ascii.infra.token_issuer`.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa

from box_ascii.core.models import Credentials

TOKEN_URL = "https://api.box.com/oauth2/token"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ENTERPRISE_SUB_TYPE = "enterprise"
SIGNING_ALGORITHM = "RS256"
ASSERTION_LIFETIME = timedelta(minutes=45)


def new_jti() -> str:
    """Return a fresh unguessable JWT ID."""
    return secrets.token_urlsafe(32)


def build_claims(
    credentials: Credentials,
    *,
    now: datetime | None = None,
    jti: str | None = None,
    audience: str = TOKEN_URL,
) -> dict[str, Any]:
    """Build the enterprise-level claim set for *credentials*.

    ``exp`` is *now* plus :data:`ASSERTION_LIFETIME`, as integer epoch
    seconds.
    """
    issued = now if now is not None else datetime.now(timezone.utc)
    return {
        "iss": credentials.client_id,
        "sub": credentials.enterprise_id,
        "box_sub_type": ENTERPRISE_SUB_TYPE,
        "aud": audience,
        "jti": jti if jti is not None else new_jti(),
        "exp": int((issued + ASSERTION_LIFETIME).timestamp()),
    }


def sign_assertion(
    claims: dict[str, Any],
    key: rsa.RSAPrivateKey,
    key_id: str,
) -> str:
    """Sign *claims* with RS256 and tag the header with ``kid=key_id``."""
    token: Any = jwt.encode(
        claims,
        key,
        algorithm=SIGNING_ALGORITHM,
        headers={"kid": key_id},
    )
    # PyJWT 1.x returned bytes.
    if isinstance(token, bytes):
        token = token.decode("ascii")
    return str(token)
