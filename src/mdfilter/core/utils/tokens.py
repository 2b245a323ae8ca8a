"""Shared markdown-it token utilities"""

import re
from typing import Iterator


# '#' at start of text or after whitespace/bracket, then word chars, '/' or '-'
INLINE_TAG_RE = re.compile(r'(?:^|(?<=[\s(\[]))#([\w/-]+)')


def iter_text(tokens: list) -> Iterator[str]:
    """Yield plain text from inline tokens, skipping code spans and fenced/indented code."""
    for tok in tokens:
        if tok.type == 'inline' and tok.children:
            for child in tok.children:
                if child.type == 'text':
                    yield child.content


def inline_tags(tokens: list) -> list[str]:
    """Return '#'-prefixed inline tags in document order; purely numeric tags are not tags."""
    tags: list[str] = []
    for text in iter_text(tokens):
        for m in INLINE_TAG_RE.finditer(text):
            name = m.group(1).rstrip('/')
            if name and not name.replace('/', '').isdigit():
                tags.append(f'#{name}')
    return tags
