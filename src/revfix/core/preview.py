"""Patch preview building.

build_preview computes the content a document would have after a fix,
without touching the document. The applicator writes exactly this
output, so what a user approves in a preview is what gets persisted.
"""

import difflib

from ..models import CodeFix, FixType
from .address import LineIndex, resolve_range, to_offsets


def build_preview(original_text: str, fix: CodeFix) -> str:
    """Return original_text with fix applied.

    Inserted text is terminated with the document's line terminator unless
    it already ends with one. Inserting past the last line first adds a
    terminator so the new text starts on its own line.

    Args:
        original_text: Current document content (not modified)
        fix: Structured fix to apply

    Returns:
        The resulting document content

    Raises:
        RangeValidationError: If the fix's range does not fit the document.
    """
    index = LineIndex(original_text)
    resolved = resolve_range(fix, index.line_count)
    start, end = to_offsets(resolved, index)

    if fix.type is FixType.DELETE:
        text = ""
    elif fix.type is FixType.INSERT:
        text = fix.new_code
        if not text.endswith(("\n", "\r")):
            text += index.eol
        if resolved.start_line == index.line_count:
            text = index.eol + text
    else:
        text = fix.new_code

    return original_text[:start] + text + original_text[end:]


def render_inline_preview(original_text: str, fix: CodeFix) -> str:
    """Short before/after summary of a fix, for confirmation prompts.

    Assumes the fix has already been validated against original_text.
    """
    index = LineIndex(original_text)
    out = ["--- BEFORE ---"]
    if fix.type is FixType.INSERT:
        out.append("(no lines)")
    else:
        for i in range(fix.start_line - 1, min(fix.end_line, index.line_count)):
            out.append(f"{i + 1}: {index.line_text(i)}")

    out.append("")
    out.append("--- AFTER ---")
    if fix.type is FixType.DELETE:
        out.append(f"(Lines {fix.start_line}-{fix.end_line} will be deleted)")
    elif fix.type is FixType.INSERT:
        count = len(fix.new_code.splitlines()) or 1
        out.append(f"(Inserting {count} line(s) at line {fix.start_line})")
        out.append(fix.new_code.rstrip("\r\n"))
    else:
        for i, line in enumerate(fix.new_code.splitlines()):
            out.append(f"{fix.start_line + i}: {line}")
    return "\n".join(out)


def render_unified_diff(original_text: str, new_text: str, path: str) -> str:
    """Unified diff between two versions of a document, for display."""
    diff = difflib.unified_diff(
        original_text.splitlines(),
        new_text.splitlines(),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        lineterm="",
    )
    return "\n".join(diff)
