"""Root test configuration: shared document fixtures and a fixed evaluation clock"""

import pytest

from mdfilter.core.models import Document
from mdfilter.core.utils.dates import DAY_MS
from mdfilter.corpus.base import parent_folder


# 2024-06-15T12:00:00Z
NOW = 1718452800000


def make_doc(
    path: str = "Notes/2024/Draft-Notes.md",
    tags: set = (),
    frontmatter: dict = None,
    created_at: int = NOW - 30 * DAY_MS,
    modified_at: int = NOW - 3 * DAY_MS,
    ) -> Document:
    """Build a Document snapshot with name and parent folder derived from path."""
    return Document(
        path=path,
        name=path.rsplit("/", 1)[-1].rsplit(".", 1)[0],
        parent_folder_path=parent_folder(path),
        tags=frozenset(tags),
        frontmatter=frontmatter,
        created_at=created_at,
        modified_at=modified_at,
    )


@pytest.fixture(name="now")
def now_fixture():
    return NOW


@pytest.fixture(name="doc")
def doc_fixture():
    """A note with tags, frontmatter, and a parent folder two levels deep."""
    return make_doc(
        tags={"#project", "#math/algebra"},
        frontmatter={"status": "draft", "priority": 3, "archived": False, "aliases": ["One", "Two"]},
    )


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Factory for Document snapshots; see make_doc."""
    return make_doc
