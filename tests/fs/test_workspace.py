"""Tests for workspace manifest generation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ghworkspace.fs.workspace import detect_editor, write_workspace
from ghworkspace.models.workspace import Editor


@pytest.mark.parametrize(
    ("editor", "filename"),
    [
        (Editor.CODE, "workspace.code-workspace"),
        (Editor.SUBLIME, "workspace.sublime-project"),
    ],
)
def test_write_workspace(temp_dir: Path, editor: Editor, filename: str) -> None:
    path = write_workspace(temp_dir, ["api", "web"], editor)

    assert path == temp_dir / filename
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "folders": [{"path": "api"}, {"path": "web"}]
    }


def test_write_workspace_overwrites(temp_dir: Path) -> None:
    write_workspace(temp_dir, ["old"], Editor.CODE)
    path = write_workspace(temp_dir, ["new"], Editor.CODE)

    assert json.loads(path.read_text())["folders"] == [{"path": "new"}]


def test_none_writes_nothing(temp_dir: Path) -> None:
    assert write_workspace(temp_dir, ["api"], Editor.NONE) is None
    assert list(temp_dir.iterdir()) == []


class TestDetectEditor:
    def test_nothing_to_detect(self, temp_dir: Path) -> None:
        assert detect_editor(temp_dir) == Editor.NONE
        assert write_workspace(temp_dir, ["api"], Editor.AUTO) is None

    def test_existing_code_workspace(self, temp_dir: Path) -> None:
        (temp_dir / "mine.code-workspace").write_text("{}")

        assert detect_editor(temp_dir) == Editor.CODE
        assert write_workspace(temp_dir, ["api"], Editor.AUTO) == temp_dir / "workspace.code-workspace"

    def test_existing_sublime_project(self, temp_dir: Path) -> None:
        (temp_dir / "org.sublime-project").write_text("{}")

        assert detect_editor(temp_dir) == Editor.SUBLIME

    def test_directories_are_not_workspace_files(self, temp_dir: Path) -> None:
        (temp_dir / "odd.sublime-project").mkdir()

        assert detect_editor(temp_dir) == Editor.NONE
