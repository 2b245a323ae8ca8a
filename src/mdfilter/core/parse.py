"""File discovery, frontmatter extraction, and inline tag scanning"""

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt

from mdfilter.core.models import DocumentMetadata
from mdfilter.core.utils.tokens import inline_tags


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md', '.mdx'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _strip_frontmatter(text: str) -> tuple[Optional[dict[str, Any]], str]:
    """Return (frontmatter_dict, body) with YAML header removed; None when there is no header."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return None, text
    try:
        fm = yaml.safe_load(m.group(1))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML frontmatter: {e}") from e
    if fm is None:
        return None, text[m.end():]
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def discover_files(path: Path, extensions: set[str] = MD_EXTENSIONS) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file.

    Hidden entries (.obsidian/, .trash/, .draft.md) are skipped.
    """
    if path.is_file():
        return [path] if path.suffix in extensions else []
    return sorted(
        p for p in path.rglob('*')
        if p.is_file() and p.suffix in extensions
        and not any(part.startswith('.') for part in p.relative_to(path).parts)
    )


def parse_metadata(text: str, parser_config: str = 'gfm-like') -> DocumentMetadata:
    """Extract frontmatter and inline body tags from raw markdown.

    Raises ValueError when the frontmatter block is not a valid YAML mapping.
    """
    frontmatter, body = _strip_frontmatter(text)
    tokens = _make_parser(parser_config).parse(body)
    return DocumentMetadata(tags=frozenset(inline_tags(tokens)), frontmatter=frontmatter)
