"""Shared test fixtures for revfix tests."""

import json
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from revfix.services import InMemoryDocumentStore

APP_SOURCE = """import { total } from "./math";

function main() {
  let count = 0;
  const x = 1;
  return total(count, x);
}
"""


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """In-memory store holding a three-line document."""
    return InMemoryDocumentStore({"abc.txt": "a\nb\nc\n"})


@pytest.fixture
def sample_review() -> dict[str, Any]:
    """Review envelope as returned by the AI reviewer."""
    return {
        "summary": "Two issues found",
        "targetBranch": "main",
        "issues": [
            {
                "file": "src/app.ts",
                "line": 3,
                "codeSnippet": "const x = 1;",
                "severity": "warning",
                "category": "Code Quality",
                "message": "Use a descriptive name",
                "suggestedFix": {
                    "type": "replace",
                    "startLine": 5,
                    "endLine": 5,
                    "newCode": "  const initialValue = 1;",
                    "description": "Rename x",
                },
            },
            {
                "file": "src/app.ts",
                "line": 4,
                "codeSnippet": "let count = 0;",
                "severity": "info",
                "category": "Best Practice",
                "message": "count is never reassigned",
                "suggestedFix": "Use const instead of let",
            },
        ],
    }


@pytest.fixture
def workspace(tmp_path: Path, sample_review: dict[str, Any]) -> Generator[Path, None, None]:
    """Workspace with one source file and a review.json next to it.

    Changes cwd to the workspace for the duration of the test.
    """
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.ts").write_text(APP_SOURCE)
    (tmp_path / "review.json").write_text(json.dumps(sample_review, indent=2))

    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def app_source() -> str:
    """Content of src/app.ts in the workspace fixture."""
    return APP_SOURCE
