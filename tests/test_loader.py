"""Tests for adcred.loader and adcred.classifier."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from adcred.classifier import classify
from adcred.exceptions import (
    CredentialsNotFoundError,
    CredentialsReadError,
    MalformedCredentialsError,
)
from adcred.loader import load_file, load_inline
from adcred.models import CredentialKind, CredentialSourceKind


class TestLoadFile:
    def test_reads_bytes_and_records_source(self, tmp_path: Path) -> None:
        path = tmp_path / "creds.json"
        path.write_bytes(b'{"type": "authorized_user"}')
        payload = load_file(str(path), CredentialSourceKind.ENV_VAR)
        assert payload.data == b'{"type": "authorized_user"}'
        assert payload.source.kind is CredentialSourceKind.ENV_VAR
        assert payload.source.path == str(path)
        assert payload.source.label == f"credentials file {path}"

    def test_missing_file(self, tmp_path: Path) -> None:
        path = str(tmp_path / "missing.json")
        with pytest.raises(CredentialsNotFoundError) as exc_info:
            load_file(path)
        assert exc_info.value.path == path
        assert str(exc_info.value) == f"Cannot open credentials file {path}."

    def test_empty_path(self) -> None:
        with pytest.raises(CredentialsNotFoundError):
            load_file("")

    def test_directory_is_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(CredentialsNotFoundError):
            load_file(str(tmp_path))

    def test_parent_is_a_file(self, tmp_path: Path) -> None:
        parent = tmp_path / "plain-file"
        parent.write_text("x", encoding="utf-8")
        with pytest.raises(CredentialsNotFoundError):
            load_file(str(parent / "creds.json"))

    def test_permission_denied_is_read_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = str(tmp_path / "locked.json")

        def _denied(*_args: object, **_kwargs: object) -> None:
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr("adcred.loader.open", _denied, raising=False)
        with pytest.raises(CredentialsReadError, match="Error reading credentials file") as exc_info:
            load_file(path)
        assert "Permission denied" in str(exc_info.value)

    def test_read_error_from_oserror(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _boom(*_args: object, **_kwargs: object) -> None:
            raise OSError(5, "Input/output error")

        monkeypatch.setattr("adcred.loader.open", _boom, raising=False)
        with pytest.raises(CredentialsReadError) as exc_info:
            load_file(str(tmp_path / "creds.json"))
        assert "Input/output error" in str(exc_info.value)


class TestLoadInline:
    def test_str_is_encoded(self) -> None:
        payload = load_inline('{"a": "é"}')
        assert payload.data == '{"a": "é"}'.encode("utf-8")
        assert payload.source.kind is CredentialSourceKind.INLINE
        assert payload.source.label == "credentials contents"

    def test_bytes_pass_through(self) -> None:
        assert load_inline(b"{}").data == b"{}"


class TestClassify:
    def test_authorized_user(
        self,
        tmp_path: Path,
        write_json: Callable[[Path, Any], str],
        authorized_user_contents: dict[str, Any],
    ) -> None:
        path = write_json(tmp_path / "au.json", authorized_user_contents)
        document = classify(load_file(path))
        assert document.kind is CredentialKind.AUTHORIZED_USER
        assert document.raw_type == "authorized_user"
        assert document.contents["client_id"] == authorized_user_contents["client_id"]

    def test_service_account(self) -> None:
        document = classify(load_inline('{"type": "service_account"}'))
        assert document.kind is CredentialKind.SERVICE_ACCOUNT

    @pytest.mark.parametrize(
        ("contents", "raw_type"),
        [
            ('{"type": "external_account"}', "external_account"),
            ('{"type": "Service_Account"}', "Service_Account"),
            ("{}", ""),
            ('{"type": null}', ""),
            ('{"type": 7}', "7"),
        ],
    )
    def test_unsupported(self, contents: str, raw_type: str) -> None:
        document = classify(load_inline(contents))
        assert document.kind is CredentialKind.UNSUPPORTED
        assert document.raw_type == raw_type

    @pytest.mark.parametrize(
        "contents",
        [b" not-a-json-object-string ", b"{", b"", b"\xff\xfe{}"],
    )
    def test_malformed(self, contents: bytes) -> None:
        with pytest.raises(MalformedCredentialsError, match="credentials contents"):
            classify(load_inline(contents))

    @pytest.mark.parametrize("contents", ["[]", '"text"', "42", "null"])
    def test_top_level_not_an_object(self, contents: str) -> None:
        with pytest.raises(MalformedCredentialsError, match="expected an object"):
            classify(load_inline(contents))

    def test_malformed_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(MalformedCredentialsError) as exc_info:
            classify(load_file(str(path)))
        assert f"credentials file {path}" in str(exc_info.value)
