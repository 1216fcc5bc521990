"""Document access for revfix.

The fix engine never touches files directly. It reads and writes through a
DocumentStore so the same logic works on the filesystem, on editor buffers
and in tests. Stores never cache content: every read returns what is
stored at that moment.
"""

import contextlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Protocol

from ..errors import DocumentError, DocumentWriteError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """File-access collaborator used by the reconciler and the applicator."""

    def read_document(self, path: str) -> str:
        """Return the current text of path. Raises DocumentError."""
        ...

    def write_document(self, path: str, text: str) -> None:
        """Replace the text of path. Raises DocumentWriteError."""
        ...


class FileSystemDocumentStore:
    """Documents on disk, addressed relative to a workspace root.

    Paths that resolve outside the root are refused. Line terminators are
    preserved as-is on read and write. Writes go to a temporary file in the
    target directory which then replaces the target, so a failed write
    leaves the original untouched.
    """

    def __init__(self, root: Path, encoding: str = "utf-8") -> None:
        self.root = root
        self.encoding = encoding

    def resolve(self, path: str) -> Path:
        """Absolute path for a workspace-relative (or absolute) path.

        Raises:
            DocumentError: If the path points outside the workspace root
        """
        root = self.root.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise DocumentError(f"{path}: outside the workspace {root}")
        return target

    def read_document(self, path: str) -> str:
        target = self.resolve(path)
        try:
            with open(target, encoding=self.encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"{path}: {e}") from e

    def write_document(self, path: str, text: str) -> None:
        target = self.resolve(path)
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=target.parent, prefix=".revfix_", suffix=".tmp")
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(text)
            if target.exists():
                shutil.copymode(target, tmp_path)
            os.replace(tmp_path, target)
        except (OSError, UnicodeEncodeError) as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
            raise DocumentWriteError(f"{path}: {e}") from e
        logger.debug(f"Wrote {len(text)} characters to {target}")


class InMemoryDocumentStore:
    """Documents held in memory, e.g. unsaved editor buffers.

    Args:
        documents: Initial path -> text mapping
        read_only: Paths whose writes fail with DocumentWriteError
    """

    def __init__(
        self, documents: dict[str, str] | None = None, read_only: set[str] | None = None
    ) -> None:
        self.documents = dict(documents or {})
        self.read_only = set(read_only or ())
        self.writes: list[str] = []

    def read_document(self, path: str) -> str:
        try:
            return self.documents[path]
        except KeyError:
            raise DocumentError(f"{path}: no such document") from None

    def write_document(self, path: str, text: str) -> None:
        if path in self.read_only:
            raise DocumentWriteError(f"{path}: document is read-only")
        self.documents[path] = text
        self.writes.append(path)
