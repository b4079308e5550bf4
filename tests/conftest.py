"""Shared test fixtures for specdoc.

Provides raw spec fixtures loaded from ``tests/fixtures``, processed
documents, an isolated working directory for config tests, and a Typer
CLI runner.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specdoc.models import Document, ProcessorOptions
from specdoc.output import OutputFormat, OutputManager, reset_output, set_output
from specdoc.processor import OpenApiProcessor

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager holds the sys.stdout/sys.stderr objects it was created with;
    CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Petstore spec: tags, servers, $ref parameters/responses, mixed security."""
    return load_fixture("petstore.json")


@pytest.fixture
def users_tr_raw() -> dict[str, Any]:
    """Single Turkish-summary operation with global bearer security."""
    return load_fixture("users_tr.json")


@pytest.fixture
def cyclic_raw() -> dict[str, Any]:
    """Spec whose Node schema refers to itself."""
    return load_fixture("cyclic.json")


@pytest.fixture
def minimal_raw() -> dict[str, Any]:
    return {"openapi": "3.0.3", "info": {"title": "Minimal", "version": "0.0.1"}, "paths": {}}


# ---------------------------------------------------------------------------
# Processed documents
# ---------------------------------------------------------------------------


@pytest.fixture
def processor() -> OpenApiProcessor:
    return OpenApiProcessor(ProcessorOptions(version="9.9.9"))


@pytest.fixture
def petstore_document(processor: OpenApiProcessor, petstore_raw: dict[str, Any]) -> Document:
    return processor.process(petstore_raw)


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with no SPECDOC_* variables set."""
    for var in [
        "SPECDOC_BASE_URL",
        "SPECDOC_EXCLUDE_BRAND",
        "SPECDOC_NO_URL_ENCODE",
        "SPECDOC_TAG_ORDER",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output and CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain-format OutputManager."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
