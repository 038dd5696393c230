"""Editor workspace file generation."""

from __future__ import annotations

from pathlib import Path

from ghworkspace.models.workspace import Editor, WorkspaceFile


def detect_editor(target_folder: Path) -> Editor:
    """Pick the editor whose workspace file already lives in the target folder."""
    for editor, pattern in ((Editor.CODE, "*.code-workspace"), (Editor.SUBLIME, "*.sublime-project")):
        if any(path.is_file() for path in target_folder.glob(pattern)):
            return editor
    return Editor.NONE


def write_workspace(target_folder: Path, folders: list[str], editor: Editor = Editor.CODE) -> Path | None:
    """Write a workspace file listing `folders` relative to `target_folder`.

    Returns the path written, or None when the editor asks for no file.
    """
    if editor == Editor.AUTO:
        editor = detect_editor(target_folder)

    filename = editor.filename
    if filename is None:
        return None

    workspace = WorkspaceFile.from_names(folders)
    path = target_folder / filename
    path.write_text(workspace.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path
