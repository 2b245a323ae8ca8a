"""Filesystem corpus: a directory tree of markdown notes"""

from __future__ import annotations

from pathlib import Path

import structlog

from mdfilter.core.models import Document, DocumentMetadata, DocumentStat
from mdfilter.core.parse import MD_EXTENSIONS, discover_files, parse_metadata
from mdfilter.corpus.base import Corpus, build_document


log = structlog.get_logger(__name__)


class VaultCorpus(Corpus):
    """Markdown files under root, keyed by their root-relative POSIX path.

    Metadata is parsed once per path and cached; content is read from disk
    on every read_content call.
    """

    def __init__(self, root: Path, parser_config: str = 'gfm-like', extensions: set[str] = MD_EXTENSIONS):
        self.root = Path(root)
        self.parser_config = parser_config
        self.extensions = extensions
        self._metadata: dict[str, DocumentMetadata | None] = {}

    def _abs(self, path: str) -> Path:
        return self.root / path

    def list_documents(self) -> list[Document]:
        docs = []
        for p in discover_files(self.root, self.extensions):
            rel = p.relative_to(self.root).as_posix()
            try:
                stat = self.stat(rel)
            except OSError as e:
                log.warning("stat_failed", path=rel, error=str(e))
                continue
            docs.append(build_document(rel, self.get_cached_metadata(rel), stat))
        log.debug("corpus_listed", root=str(self.root), documents=len(docs))
        return docs

    def get_cached_metadata(self, path: str) -> DocumentMetadata | None:
        if path not in self._metadata:
            self._metadata[path] = self._load_metadata(path)
        return self._metadata[path]

    def _load_metadata(self, path: str) -> DocumentMetadata | None:
        try:
            return parse_metadata(self.read_content(path), self.parser_config)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            log.warning("metadata_unavailable", path=path, error=str(e))
            return None

    def read_content(self, path: str) -> str:
        return self._abs(path).read_text(encoding='utf-8')

    def stat(self, path: str) -> DocumentStat:
        st = self._abs(path).stat()
        # st_birthtime only exists on macOS/BSD and recent Windows builds
        created = getattr(st, 'st_birthtime', st.st_ctime)
        return DocumentStat(created_at=int(created * 1000), modified_at=int(st.st_mtime * 1000))
