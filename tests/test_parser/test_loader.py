"""Tests for specdoc.parser.loader."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional
from unittest.mock import patch

import httpx
import pytest

from specdoc.exceptions import SpecParseError
from specdoc.parser.loader import (
    RawSource,
    load_spec,
    parse_document,
    read_source,
    validate_openapi_version,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
SPEC_URL = "https://api.example.com/openapi"


def _response(
    status: int = 200, text: str = "", content_type: Optional[str] = None
) -> httpx.Response:
    headers = {"content-type": content_type} if content_type else None
    return httpx.Response(
        status_code=status,
        text=text,
        headers=headers,
        request=httpx.Request("GET", SPEC_URL),
    )


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


class TestReadSource:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [("api.json", "json"), ("api.YML", "yaml"), ("api.yaml", "yaml"), ("api.txt", None)],
    )
    def test_file_suffix_sets_format(self, tmp_path: Path, filename: str, expected: object) -> None:
        path = tmp_path / filename
        path.write_text("openapi: 3.0.0\n", encoding="utf-8")
        raw = read_source(str(path))
        assert raw == RawSource(text="openapi: 3.0.0\n", label=str(path), format=expected)

    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            ("application/json; charset=utf-8", "json"),
            ("application/vnd.oai.openapi+json", "json"),
            ("application/x-yaml", "yaml"),
            ("text/plain", None),
        ],
    )
    def test_url_content_type_sets_format(self, content_type: str, expected: object) -> None:
        response = _response(text="{}", content_type=content_type)
        with patch("specdoc.parser.loader.httpx.get", return_value=response) as get:
            raw = read_source(SPEC_URL)
        get.assert_called_once_with(SPEC_URL, timeout=30.0, follow_redirects=True)
        assert (raw.label, raw.format) == (SPEC_URL, expected)

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("openapi: 3.1.0\n"))
        assert read_source("-") == RawSource(text="openapi: 3.1.0\n", label="<stdin>")

    def test_blank_stdin_is_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(" \n\t"))
        with pytest.raises(SpecParseError, match="<stdin> is empty"):
            read_source("-")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            read_source(str(tmp_path / "absent.yaml"))

    def test_http_status(self) -> None:
        with patch("specdoc.parser.loader.httpx.get", return_value=_response(status=503)):
            with pytest.raises(SpecParseError, match="answered HTTP 503"):
                read_source(SPEC_URL)

    def test_unreachable_host(self) -> None:
        with patch("specdoc.parser.loader.httpx.get", side_effect=httpx.ConnectError("refused")):
            with pytest.raises(SpecParseError, match=f"Cannot fetch {SPEC_URL}: refused"):
                read_source(SPEC_URL)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestParseDocument:
    def test_unhinted_yaml(self) -> None:
        raw = RawSource(text="openapi: 3.0.0\ninfo:\n  title: Y\n", label="inline")
        assert parse_document(raw)["info"] == {"title": "Y"}

    def test_json_hint_does_not_fall_back(self) -> None:
        raw = RawSource(text="openapi: 3.0.0\n", label="api.json", format="json")
        with pytest.raises(SpecParseError, match="api.json is not valid JSON\n  JSON: "):
            parse_document(raw)

    def test_unhinted_failure_lists_both_decoders(self) -> None:
        with pytest.raises(SpecParseError) as exc_info:
            parse_document(RawSource(text="}{ [", label="inline"))
        message = str(exc_info.value)
        assert message.startswith("inline is not valid JSON or YAML")
        assert "\n  JSON: " in message
        assert "\n  YAML: " in message

    @pytest.mark.parametrize(
        ("text", "found"), [("[1, 2]", "list"), ("42", "int"), ("~", "nothing")]
    )
    def test_root_must_be_object(self, text: str, found: str) -> None:
        with pytest.raises(SpecParseError, match=f"root, found {found}"):
            parse_document(RawSource(text=text, label="inline"))


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


class TestLoadSpec:
    def test_fixture_keeps_unicode(self) -> None:
        spec = load_spec(str(FIXTURES_DIR / "users_tr.json"))
        assert spec["paths"]["/users"]["get"]["summary"] == "Kullanıcı Girişi ve Token Alımı"

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "spec.yml"
        path.write_text(
            'openapi: "3.1.0"\ninfo: {title: Yaml, version: "1"}\npaths: {}\n', encoding="utf-8"
        )
        spec = load_spec(str(path))
        assert validate_openapi_version(spec) == "3.1.0"
        assert spec["paths"] == {}

    def test_url_without_format_hint(self) -> None:
        response = _response(text="openapi: 3.0.3\n")
        with patch("specdoc.parser.loader.httpx.get", return_value=response):
            assert load_spec(SPEC_URL) == {"openapi": "3.0.3"}


# ---------------------------------------------------------------------------
# Version check
# ---------------------------------------------------------------------------


class TestValidateOpenAPIVersion:
    @pytest.mark.parametrize(
        ("value", "expected"), [("3.0.3", "3.0.3"), ("3.1.0", "3.1.0"), (3.0, "3.0")]
    )
    def test_accepts_3x(self, value: object, expected: str) -> None:
        assert validate_openapi_version({"openapi": value}) == expected

    @pytest.mark.parametrize(
        ("spec", "message"),
        [
            ({"swagger": "2.0"}, "Swagger 2.0 documents are not supported"),
            ({"info": {}}, "No 'openapi' field"),
            ({"openapi": "4.0.0"}, "OpenAPI 4.0.0 is not supported"),
        ],
    )
    def test_rejects(self, spec: dict, message: str) -> None:
        with pytest.raises(SpecParseError, match=message):
            validate_openapi_version(spec)
