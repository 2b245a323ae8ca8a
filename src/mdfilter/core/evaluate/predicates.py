"""Per-kind predicate evaluation with fail-closed semantics.

Every handler returns a raw boolean; any failure inside a handler (bad
regex, unreadable content, missing configuration) resolves to False before
`negate` is applied. evaluate_filter never raises.
"""

import re
from typing import Callable

import structlog

from mdfilter.core.filters import (
    DateFilterType,
    DateRangeFilter,
    DateRangeType,
    FileNameFilter,
    Filter,
    FolderFilter,
    FrontmatterFilter,
    FrontmatterOperator,
    TagFilter,
    TextContentFilter,
    TextSearchMode,
)
from mdfilter.core.models import Document
from mdfilter.core.utils.dates import DAY_MS, parse_date_ms
from mdfilter.core.utils.tags import normalize_tag
from mdfilter.core.utils.values import js_string


log = structlog.get_logger(__name__)

ReadContent = Callable[[Document], str]


def _compile(pattern: str, flags: int = 0) -> re.Pattern | None:
    """Compile pattern, or None if it is not a valid regular expression."""
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        log.debug("invalid_pattern", pattern=pattern, error=str(e))
        return None


def eval_tag(doc: Document, f: TagFilter, now: int, read: ReadContent) -> bool:
    return normalize_tag(f.tag) in doc.tags


def eval_frontmatter(doc: Document, f: FrontmatterFilter, now: int, read: ReadContent) -> bool:
    if doc.frontmatter is None:
        return f.operator == FrontmatterOperator.not_exists

    present = f.property in doc.frontmatter
    if f.operator == FrontmatterOperator.exists:
        return present
    if f.operator == FrontmatterOperator.not_exists:
        return not present
    if not f.value or not present:
        return False

    actual = js_string(doc.frontmatter[f.property])
    if f.operator == FrontmatterOperator.equals:
        return actual == f.value
    return f.value.lower() in actual.lower()


def _folder_key(path: str) -> str:
    """'/Notes/2024/' and 'Notes/2024' name the same folder; root is ''."""
    return path.strip('/')


def eval_folder(doc: Document, f: FolderFilter, now: int, read: ReadContent) -> bool:
    if f.include_subfolders:
        # raw string prefix: 'Notes' also matches 'NotesArchive/...', 'Notes/' does not
        return doc.path.lstrip('/').startswith(f.path.lstrip('/'))
    return _folder_key(doc.parent_folder_path) == _folder_key(f.path)


def eval_date_range(doc: Document, f: DateRangeFilter, now: int, read: ReadContent) -> bool:
    ts = doc.modified_at if f.date_type == DateFilterType.modified else doc.created_at

    if f.range_type == DateRangeType.last_n_days:
        if not f.days:
            return False
        return ts >= now - f.days * DAY_MS

    if f.range_type in (DateRangeType.before, DateRangeType.after):
        bound = parse_date_ms(f.date)
        if bound is None:
            return False
        return ts < bound if f.range_type == DateRangeType.before else ts > bound

    start, end = parse_date_ms(f.start_date), parse_date_ms(f.end_date)
    if start is None or end is None:
        return False
    return start <= ts <= end


def eval_text_content(doc: Document, f: TextContentFilter, now: int, read: ReadContent) -> bool:
    try:
        content = read(doc)
    except Exception as e:
        log.debug("content_unreadable", path=doc.path, error=str(e))
        return False

    if f.search_mode == TextSearchMode.regex:
        regex = _compile(f.query, 0 if f.case_sensitive else re.IGNORECASE)
        return regex is not None and regex.search(content) is not None

    query = f.query
    if not f.case_sensitive:
        content, query = content.lower(), query.lower()
    if f.search_mode == TextSearchMode.exact:
        return content == query
    return query in content


def eval_file_name(doc: Document, f: FileNameFilter, now: int, read: ReadContent) -> bool:
    if f.is_regex:
        regex = _compile(f.pattern)
        return regex is not None and regex.search(doc.name) is not None
    return f.pattern.lower() in doc.name.lower()


HANDLERS: dict[type, Callable[[Document, Filter, int, ReadContent], bool]] = {
    TagFilter:         eval_tag,
    FrontmatterFilter: eval_frontmatter,
    FolderFilter:      eval_folder,
    DateRangeFilter:   eval_date_range,
    TextContentFilter: eval_text_content,
    FileNameFilter:    eval_file_name,
}


def evaluate_filter(doc: Document, f: Filter, now: int, read: ReadContent) -> bool:
    """Evaluate one filter against doc at time now (epoch ms), then apply negation."""
    handler = HANDLERS.get(type(f))
    if handler is None:
        log.debug("unknown_filter", kind=type(f).__name__, path=doc.path)
        result = False
    else:
        try:
            result = handler(doc, f, now, read)
        except Exception as e:
            log.warning("filter_failed", kind=type(f).__name__, path=doc.path, error=str(e))
            result = False
    return not result if getattr(f, "negate", False) else result
