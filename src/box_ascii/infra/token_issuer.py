"""httpx-backed exchange of a signed JWT assertion for a Box access token.

This module is the only place that talks to the token endpoint.
Transport and decoding failures are caught here and re-raised as
:class:`~box_ascii.exceptions.AuthError`; nothing raw escapes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import jwt

from box_ascii.core.assertion import (
    ASSERTION_LIFETIME,
    JWT_BEARER_GRANT,
    TOKEN_URL,
    build_claims,
    sign_assertion,
)
from box_ascii.core.key_loader import parse_key
from box_ascii.core.models import BearerToken, Credentials
from box_ascii.exceptions import AuthError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Obtain a :class:`BearerToken` with the enterprise JWT grant.

    Usage::

        with httpx.Client() as http:
            token = TokenIssuer(http).authenticate(credentials)

    Parameters
    ----------
    http_client:
        Shared client to send the request with.  When ``None`` a
        short-lived client is opened and closed for the single call.
    token_url:
        Token endpoint; also used as the JWT audience.
    timeout:
        Request timeout in seconds.  Always applied.
    clock:
        Source of the current UTC time, injectable for tests.
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        *,
        token_url: str = TOKEN_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._http_client = http_client
        self._token_url = token_url
        self._timeout = timeout
        self._clock = clock

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_assertion(self, credentials: Credentials, *, now: datetime) -> str:
        """Parse the key in *credentials* and return a signed assertion.

        Raises
        ------
        KeyFormatError
            When the private key cannot be loaded.
        AuthError
            When signing fails.
        """
        key = parse_key(credentials.private_key, credentials.passphrase)
        claims = build_claims(credentials, now=now, audience=self._token_url)
        try:
            return sign_assertion(claims, key, credentials.key_id)
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise AuthError(f"failed to sign JWT: {exc}") from exc

    def authenticate(self, credentials: Credentials) -> BearerToken:
        """Exchange a fresh assertion for an access token.

        Raises
        ------
        KeyFormatError
            When the private key cannot be loaded.
        AuthError
            On network failure, a non-JSON body, or a body without
            ``access_token``.
        """
        issued_at = self._clock()
        assertion = self.build_assertion(credentials, now=issued_at)
        form = {
            "grant_type": JWT_BEARER_GRANT,
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "assertion": assertion,
        }

        logger.debug(
            "requesting access token for enterprise %s", credentials.enterprise_id,
        )
        response = self._post(form)
        payload = self._decode(response)

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise AuthError(
                "decode failure",
                hint=self._describe_rejection(response, payload)
                or "The token response carried no access_token.",
            )

        expires_at = self._expiry(issued_at, payload.get("expires_in"))
        logger.info("access token issued, expires at %s", expires_at.isoformat())
        return BearerToken(
            value=access_token,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _post(self, form: dict[str, str]) -> httpx.Response:
        try:
            if self._http_client is not None:
                return self._http_client.post(
                    self._token_url, data=form, timeout=self._timeout,
                )
            with httpx.Client(timeout=self._timeout) as client:
                return client.post(self._token_url, data=form)
        except httpx.HTTPError as exc:
            raise AuthError(
                f"failed to get access token: {exc}",
                hint="Check your network connection and the token endpoint.",
            ) from exc

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise AuthError(
                "decode failure",
                hint=f"Token endpoint answered HTTP {response.status_code} "
                "with a non-JSON body.",
            ) from exc
        if not isinstance(payload, dict):
            raise AuthError("decode failure", hint="Token response is not a JSON object.")
        return payload

    @staticmethod
    def _describe_rejection(
        response: httpx.Response,
        payload: dict[str, Any],
    ) -> str | None:
        """Summarise Box's error fields for an HTTP error status."""
        if not response.is_error:
            return None
        detail = payload.get("error_description") or payload.get("error") or "no detail"
        return f"Token endpoint rejected the request (HTTP {response.status_code}): {detail}"

    @staticmethod
    def _expiry(issued_at: datetime, expires_in: object) -> datetime:
        if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool):
            if expires_in > 0:
                return issued_at + timedelta(seconds=expires_in)
        return issued_at + ASSERTION_LIFETIME
