from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import PurePosixPath

from mdfilter.core.models import Document, DocumentMetadata, DocumentStat
from mdfilter.core.utils.tags import merge_tags


class Corpus(ABC):
    """Document source consumed by the filter engine."""

    @abstractmethod
    def list_documents(self) -> list[Document]:
        """Return every document; the order is preserved by the engine."""
        raise NotImplementedError

    @abstractmethod
    def get_cached_metadata(self, path: str) -> DocumentMetadata | None:
        """Return cached tags/frontmatter, or None when nothing is known about path."""
        raise NotImplementedError

    @abstractmethod
    def read_content(self, path: str) -> str:
        """Return the full document text; may raise."""
        raise NotImplementedError

    @abstractmethod
    def stat(self, path: str) -> DocumentStat:
        raise NotImplementedError


def parent_folder(path: str) -> str:
    """Vault-relative parent folder of path, '/' for the vault root."""
    parent = str(PurePosixPath(path).parent)
    return '/' if parent in ('.', '', '/') else parent


def build_document(path: str, metadata: DocumentMetadata | None, stat: DocumentStat) -> Document:
    """Assemble a Document snapshot; missing metadata means no tags and no frontmatter."""
    frontmatter = metadata.frontmatter if metadata else None
    inline = metadata.tags if metadata else ()
    return Document(
        path=path,
        name=PurePosixPath(path).stem,
        parent_folder_path=parent_folder(path),
        tags=merge_tags(frontmatter, inline),
        frontmatter=frontmatter,
        created_at=stat.created_at,
        modified_at=stat.modified_at,
    )
