"""Tag normalization: every tag carries a single leading '#'"""

from typing import Any, Iterable

from mdfilter.core.utils.values import js_string


def normalize_tag(tag: str) -> str:
    """Return tag with a leading '#', adding one only if missing."""
    return tag if tag.startswith('#') else f'#{tag}'


def frontmatter_tags(frontmatter: dict[str, Any] | None) -> list[str]:
    """Normalized tags from a frontmatter 'tags' property (list or single string)."""
    if not frontmatter:
        return []
    raw = frontmatter.get('tags')
    if isinstance(raw, list):
        return [normalize_tag(js_string(t)) for t in raw if t is not None]
    if isinstance(raw, str) and raw:
        return [normalize_tag(raw)]
    return []


def merge_tags(frontmatter: dict[str, Any] | None, inline: Iterable[str]) -> frozenset[str]:
    """Union of frontmatter and inline tags; duplicates collapse."""
    return frozenset(frontmatter_tags(frontmatter)) | {normalize_tag(t) for t in inline}
