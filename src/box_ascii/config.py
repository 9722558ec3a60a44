"""Configuration: Box app JSON config plus environment settings.

Two sources feed a run:

* the JSON config downloaded from the Box developer console, validated
  by :class:`BoxConfigFile` and turned into
  :class:`~box_ascii.core.models.Credentials`;
* :class:`AppSettings`, read from ``BOX_ASCII_*`` environment variables
  and an optional ``.env`` file.  CLI flags override it.

pydantic errors never leave this module; they become
:class:`~box_ascii.exceptions.ConfigError`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from box_ascii.core.models import Credentials
from box_ascii.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("./internal/private/config.json")


# ---------------------------------------------------------------------------
# Box developer-console JSON
# ---------------------------------------------------------------------------

class AppAuth(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    key_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("publicKeyID", "keyID", "key_id"),
    )
    private_key: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("privateKey", "private_key"),
    )
    passphrase: str | None = None

    @field_validator("passphrase")
    @classmethod
    def _blank_is_none(cls, value: str | None) -> str | None:
        return value or None


class BoxAppSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    client_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("clientID", "client_id"),
    )
    client_secret: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("clientSecret", "client_secret"),
    )
    app_auth: AppAuth = Field(..., validation_alias=AliasChoices("appAuth", "app_auth"))


class BoxConfigFile(BaseModel):
    """Shape of the Box JWT app config JSON."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    box_app_settings: BoxAppSettings = Field(
        ..., validation_alias=AliasChoices("boxAppSettings", "box_app_settings"),
    )
    enterprise_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("enterpriseID", "enterprise_id"),
    )

    @field_validator("enterprise_id", mode="before")
    @classmethod
    def _coerce_enterprise_id(cls, value: object) -> object:
        # Some exports write the enterprise ID as a number.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_credentials(self) -> Credentials:
        settings = self.box_app_settings
        return Credentials(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            enterprise_id=self.enterprise_id,
            key_id=settings.app_auth.key_id,
            private_key=settings.app_auth.private_key,
            passphrase=settings.app_auth.passphrase,
        )


def _summarise(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(piece) for piece in error.get("loc", ()))
        parts.append(f"{location or '<root>'}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def load_credentials(path: Path) -> Credentials:
    """Read and validate the Box config at *path*.

    Raises
    ------
    ConfigError
        When the file is missing, unreadable, or does not match the
        expected shape.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            f"Config file not found: {path}",
            hint="Pass --config or set BOX_ASCII_CONFIG_PATH to the JSON "
            "config downloaded from the Box developer console.",
        ) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc

    try:
        config = BoxConfigFile.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid config file: {path}",
            hint=_summarise(exc),
        ) from exc

    logger.debug("loaded Box app config from %s", path)
    return config.to_credentials()


# ---------------------------------------------------------------------------
# Environment settings
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """Runtime settings for a render run."""

    model_config = SettingsConfigDict(
        env_prefix="BOX_ASCII_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    config_path: Path = Field(
        default=DEFAULT_CONFIG_PATH,
        description="Path to the Box app JSON config.",
    )
    folder_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("BOX_ASCII_FOLDER_ID", "BOX_FOLDER_ID"),
        description="Box folder to pick an image from.",
    )
    width: int = Field(
        default=80,
        gt=0,
        le=1000,
        description="Rendered width in characters.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per HTTP request (seconds).",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the random image pick; unset means a fresh seed.",
    )


def load_settings() -> AppSettings:
    """Build :class:`AppSettings` from the environment.

    Raises
    ------
    ConfigError
        When an environment value fails validation.
    """
    try:
        return AppSettings()
    except ValidationError as exc:
        raise ConfigError(
            "Invalid BOX_ASCII_* environment settings.",
            hint=_summarise(exc),
        ) from exc
