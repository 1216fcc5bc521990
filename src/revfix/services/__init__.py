"""External collaborators for revfix.

This package provides the interfaces the core engine talks to:
- documents: reading and writing target files (filesystem or in-memory)
- review_file: loading and saving the AI reviewer's JSON envelope
"""

from .documents import DocumentStore, FileSystemDocumentStore, InMemoryDocumentStore
from .review_file import load_review, parse_review, save_review, strip_code_fence

__all__ = [
    "DocumentStore",
    "FileSystemDocumentStore",
    "InMemoryDocumentStore",
    "load_review",
    "parse_review",
    "save_review",
    "strip_code_fence",
]
