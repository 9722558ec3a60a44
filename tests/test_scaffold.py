"""Smoke tests for package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
* The error boundary maps failures to exit codes.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.color import ColorSystem

from box_ascii import __version__
from box_ascii.cli import app as app_module
from box_ascii.cli import exit_codes
from box_ascii.cli.app import cli, main
from box_ascii.config import AppSettings
from box_ascii.exceptions import (
    AuthError,
    BoxApiError,
    BoxAsciiError,
    ConfigError,
    EmptyResultError,
    ImageDecodeError,
    KeyFormatError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            KeyFormatError,
            AuthError,
            BoxApiError,
            EmptyResultError,
            ImageDecodeError,
            ConfigError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[BoxAsciiError]
    ) -> None:
        assert issubclass(exc_class, BoxAsciiError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(BoxAsciiError, Exception)

    def test_hint_is_stored(self) -> None:
        err = BoxAsciiError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert BoxAsciiError("boom").hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No folder anywhere should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "box-ascii" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("box_ascii.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, mock_doc: object) -> None:
        code = main(["doctor"])
        assert code == exit_codes.SUCCESS

    @patch("box_ascii.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_uses_config_flag(self, mock_doc) -> None:
        main(["doctor", "--config", "elsewhere.json"])
        mock_doc.assert_called_once_with(Path("elsewhere.json"))

    def test_folder_routes_to_render(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[AppSettings, dict[str, object]]] = []

        def fake_render(settings: AppSettings, **kwargs: object) -> int:
            calls.append((settings, kwargs))
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_render", fake_render)

        code = main(["12345", "--width", "40", "--seed", "3", "--color", "none"])

        assert code == exit_codes.SUCCESS
        ((settings, kwargs),) = calls
        assert settings.folder_id == "12345"
        assert settings.width == 40
        assert settings.seed == 3
        assert kwargs == {"file_id": None, "color_system": None}

    def test_env_folder_routes_to_render(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOX_FOLDER_ID", "999")
        seen: list[AppSettings] = []
        monkeypatch.setattr(
            app_module,
            "_handle_render",
            lambda settings, **_: seen.append(settings) or exit_codes.SUCCESS,
        )

        assert main([]) == exit_codes.SUCCESS
        assert seen[0].folder_id == "999"

    def test_file_id_without_folder(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[dict[str, object]] = []
        monkeypatch.setattr(
            app_module,
            "_handle_render",
            lambda settings, **kwargs: seen.append(kwargs) or exit_codes.SUCCESS,
        )

        assert main(["--file-id", "f-1"]) == exit_codes.SUCCESS
        assert seen == [{"file_id": "f-1", "color_system": ColorSystem.TRUECOLOR}]

    @pytest.mark.parametrize("width", ["0", "-4", "wide"])
    def test_bad_width_is_usage_error(self, width: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["123", "--width", width])
        assert exc_info.value.code == 2

    def test_positive_int_type(self) -> None:
        assert app_module._positive_int("7") == 7
        with pytest.raises(argparse.ArgumentTypeError):
            app_module._positive_int("0")


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        def boom() -> int:
            raise exc

        monkeypatch.setattr(app_module, "main", boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)

    def test_domain_error_exits_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        err = EmptyResultError("No images found in the specified folder.", hint="add some")
        assert self._run(monkeypatch, err) == exit_codes.GENERAL_ERROR

    def test_keyboard_interrupt_exits_130(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error_exits_two(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, RuntimeError("bug")) == exit_codes.UNEXPECTED_ERROR

    def test_success_exits_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == 0

    def test_error_message_goes_to_stderr(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        self._run(monkeypatch, AuthError("decode failure", hint="check the key"))
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "decode failure" in captured.err
        assert "check the key" in captured.err
