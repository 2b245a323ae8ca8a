from dataclasses import dataclass, field

from mdfilter.core.models import Document, DocumentMetadata, DocumentStat
from mdfilter.core.parse import parse_metadata
from mdfilter.corpus.base import Corpus, build_document


@dataclass
class MemoryCorpus(Corpus):
    _docs: dict[str, Document] = field(default_factory=dict)
    _contents: dict[str, str] = field(default_factory=dict)

    def add(self, doc: Document, content: str | None = None) -> Document:
        """Register doc; without content, read_content for it raises FileNotFoundError."""
        self._docs[doc.path] = doc
        if content is not None:
            self._contents[doc.path] = content
        return doc

    def add_text(self, path: str, text: str, created_at: int = 0, modified_at: int = 0) -> Document:
        """Parse text for frontmatter and inline tags, then register it under path."""
        try:
            metadata = parse_metadata(text)
        except ValueError:
            metadata = None
        doc = build_document(path, metadata, DocumentStat(created_at=created_at, modified_at=modified_at))
        return self.add(doc, text)

    def list_documents(self) -> list[Document]:
        return list(self._docs.values())

    def get_cached_metadata(self, path: str) -> DocumentMetadata | None:
        doc = self._docs.get(path)
        if doc is None:
            return None
        return DocumentMetadata(tags=doc.tags, frontmatter=doc.frontmatter)

    def read_content(self, path: str) -> str:
        if path not in self._contents:
            raise FileNotFoundError(path)
        return self._contents[path]

    def stat(self, path: str) -> DocumentStat:
        doc = self._docs[path]
        return DocumentStat(created_at=doc.created_at, modified_at=doc.modified_at)
