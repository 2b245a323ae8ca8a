"""Document snapshot models consumed by the filter engine"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class DocumentStat:
    """File timestamps in epoch milliseconds."""
    created_at:  int
    modified_at: int


@dataclass(frozen=True)
class DocumentMetadata:
    """Cached per-document metadata: inline tags and parsed frontmatter."""
    tags:        frozenset[str] = frozenset()     # inline '#tags' from the body
    frontmatter: Optional[dict[str, Any]] = None  # None when the file has no frontmatter block


@dataclass(frozen=True)
class Document:
    """Read-only snapshot of one corpus document; content is read on demand."""
    path:               str                       # vault-relative POSIX path, unique in the corpus
    name:               str                       # base name without directory or extension
    parent_folder_path: str                       # '/' for the vault root
    tags:               frozenset[str] = frozenset()
    frontmatter:        Optional[dict[str, Any]] = field(default=None, compare=False)
    created_at:         int = 0
    modified_at:        int = 0
