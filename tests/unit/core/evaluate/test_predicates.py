"""Unit tests for core/evaluate/predicates.py"""

import pytest

from mdfilter.core.evaluate.predicates import evaluate_filter
from mdfilter.core.filters import (
    DateRangeFilter,
    FileNameFilter,
    FolderFilter,
    FrontmatterFilter,
    TagFilter,
    TextContentFilter,
)
from mdfilter.core.utils.dates import DAY_MS


CONTENT = "---\nstatus: draft\n---\n# Draft\n\nSolve x^2 = 4 before Friday.\n"


def _read(doc):
    return CONTENT


def _unreadable(doc):
    raise OSError("permission denied")


# --- tag ---

@pytest.mark.parametrize("tag", ["project", "#project"])
def test_tag_normalization(doc, now, tag):
    """'project' and '#project' select the same documents."""
    assert evaluate_filter(doc, TagFilter(tag=tag), now, _read) is True


def test_tag_absent(doc, now):
    assert evaluate_filter(doc, TagFilter(tag="archive"), now, _read) is False


def test_tag_nested_requires_exact_match(doc, now):
    """'#math' is not implied by '#math/algebra'."""
    assert evaluate_filter(doc, TagFilter(tag="math"), now, _read) is False
    assert evaluate_filter(doc, TagFilter(tag="math/algebra"), now, _read) is True


def test_tag_document_without_tags(make_doc, now):
    assert evaluate_filter(make_doc(), TagFilter(tag="project"), now, _read) is False


# --- frontmatter ---

@pytest.mark.parametrize("operator,expected", [
    ("exists", False),
    ("not-exists", True),
    ("equals", False),
    ("contains", False),
])
def test_frontmatter_missing_mapping(make_doc, now, operator, expected):
    """Without any frontmatter only not-exists holds."""
    f = FrontmatterFilter(property="archived", operator=operator, value="x")
    assert evaluate_filter(make_doc(frontmatter=None), f, now, _read) is expected


def test_frontmatter_empty_mapping_is_present(make_doc, now):
    """An empty mapping is still frontmatter: exists is evaluated per key."""
    doc = make_doc(frontmatter={})
    assert evaluate_filter(doc, FrontmatterFilter(property="a", operator="exists"), now, _read) is False
    assert evaluate_filter(doc, FrontmatterFilter(property="a", operator="not-exists"), now, _read) is True


def test_frontmatter_exists(doc, now):
    assert evaluate_filter(doc, FrontmatterFilter(property="status", operator="exists"), now, _read) is True
    assert evaluate_filter(doc, FrontmatterFilter(property="nope", operator="exists"), now, _read) is False


def test_frontmatter_null_value_exists(make_doc, now):
    """A key with a null value counts as present."""
    doc = make_doc(frontmatter={"reviewed": None})
    assert evaluate_filter(doc, FrontmatterFilter(property="reviewed", operator="exists"), now, _read) is True


def test_frontmatter_not_exists(doc, now):
    assert evaluate_filter(doc, FrontmatterFilter(property="nope", operator="not-exists"), now, _read) is True
    assert evaluate_filter(doc, FrontmatterFilter(property="status", operator="not-exists"), now, _read) is False


@pytest.mark.parametrize("prop,value,expected", [
    ("status", "draft", True),
    ("status", "Draft", False),
    ("priority", "3", True),
    ("archived", "false", True),
    ("aliases", "One,Two", True),
    ("missing", "draft", False),
])
def test_frontmatter_equals_string_forms(doc, now, prop, value, expected):
    """equals compares the string form of the value exactly."""
    f = FrontmatterFilter(property=prop, operator="equals", value=value)
    assert evaluate_filter(doc, f, now, _read) is expected


@pytest.mark.parametrize("value,expected", [("DRA", True), ("aft", True), ("final", False)])
def test_frontmatter_contains_case_insensitive(doc, now, value, expected):
    f = FrontmatterFilter(property="status", operator="contains", value=value)
    assert evaluate_filter(doc, f, now, _read) is expected


@pytest.mark.parametrize("operator", ["equals", "contains"])
@pytest.mark.parametrize("value", [None, ""])
def test_frontmatter_comparison_without_value(doc, now, operator, value):
    """equals/contains with no comparison value fail closed."""
    f = FrontmatterFilter(property="status", operator=operator, value=value)
    assert evaluate_filter(doc, f, now, _read) is False


# --- folder ---

def test_folder_with_subfolders(doc, now):
    f = FolderFilter(path="/Notes", include_subfolders=True)
    assert evaluate_filter(doc, f, now, _read) is True


def test_folder_without_subfolders_requires_direct_parent(doc, now):
    assert evaluate_filter(doc, FolderFilter(path="Notes"), now, _read) is False
    assert evaluate_filter(doc, FolderFilter(path="Notes/2024"), now, _read) is True
    assert evaluate_filter(doc, FolderFilter(path="/Notes/2024/"), now, _read) is True


@pytest.mark.parametrize("root", ["/", ""])
def test_folder_root(make_doc, now, root):
    """'/' and '' both name the vault root."""
    top = make_doc(path="Inbox.md")
    nested = make_doc(path="Notes/a.md")
    assert evaluate_filter(top, FolderFilter(path=root), now, _read) is True
    assert evaluate_filter(nested, FolderFilter(path=root), now, _read) is False
    assert evaluate_filter(nested, FolderFilter(path=root, include_subfolders=True), now, _read) is True


def test_folder_prefix_is_not_segment_aligned(make_doc, now):
    """Subfolder matching is a raw prefix test, so sibling folders sharing a prefix match."""
    doc = make_doc(path="NotesArchive/old.md")
    assert evaluate_filter(doc, FolderFilter(path="/Notes", include_subfolders=True), now, _read) is True


@pytest.mark.parametrize("path,expected", [
    ("Notes/", False),
    ("/Notes/", False),
    ("NotesArchive/", True),
])
def test_folder_trailing_slash_bounds_prefix(make_doc, now, path, expected):
    """A trailing slash on the filter path stops at the folder boundary."""
    doc = make_doc(path="NotesArchive/old.md")
    assert evaluate_filter(doc, FolderFilter(path=path, include_subfolders=True), now, _read) is expected


def test_folder_trailing_slash_still_matches_nested(doc, now):
    assert evaluate_filter(doc, FolderFilter(path="Notes/", include_subfolders=True), now, _read) is True


# --- date range ---

@pytest.mark.parametrize("days,expected", [(7, True), (3, True), (3.5, True), (2.5, False), (1, False), (0, False), (None, False)])
def test_date_last_n_days(doc, now, days, expected):
    """modified 3 days ago: inside a 7-day window, outside a 1-day window."""
    f = DateRangeFilter(date_type="modified", range_type="last-n-days", days=days)
    assert evaluate_filter(doc, f, now, _read) is expected


def test_date_created_vs_modified(doc, now):
    """created is 30 days back, so the same window differs by date_type."""
    f = DateRangeFilter(date_type="created", range_type="last-n-days", days=7)
    assert evaluate_filter(doc, f, now, _read) is False


def test_date_window_uses_supplied_now(doc, now):
    """Evaluation time is an input: moving now forward ages the document out."""
    f = DateRangeFilter(range_type="last-n-days", days=7)
    assert evaluate_filter(doc, f, now + 10 * DAY_MS, _read) is False


@pytest.mark.parametrize("range_type,date,expected", [
    ("before", "2024-06-13", True),
    ("before", "2024-06-12T12:00:00Z", False),
    ("after", "2024-06-12", True),
    ("after", "2024-06-12T12:00:00", False),
    ("before", None, False),
    ("after", "not a date", False),
])
def test_date_before_after_strict(doc, now, range_type, date, expected):
    """doc.modified_at is exactly 2024-06-12T12:00:00Z; comparisons are strict."""
    f = DateRangeFilter(range_type=range_type, date=date)
    assert evaluate_filter(doc, f, now, _read) is expected


@pytest.mark.parametrize("start,end,expected", [
    ("2024-06-01", "2024-06-30", True),
    ("2024-06-12T12:00:00Z", "2024-06-12T12:00:00Z", True),
    ("2024-06-13", "2024-06-30", False),
    ("2024-06-01", None, False),
    (None, "2024-06-30", False),
])
def test_date_custom_inclusive(doc, now, start, end, expected):
    f = DateRangeFilter(range_type="custom", start_date=start, end_date=end)
    assert evaluate_filter(doc, f, now, _read) is expected


# --- text content ---

@pytest.mark.parametrize("query,case_sensitive,expected", [
    ("friday", False, True),
    ("friday", True, False),
    ("Friday", True, True),
    ("saturday", False, False),
])
def test_text_contains(doc, now, query, case_sensitive, expected):
    f = TextContentFilter(query=query, search_mode="contains", case_sensitive=case_sensitive)
    assert evaluate_filter(doc, f, now, _read) is expected


def test_text_exact(doc, now):
    assert evaluate_filter(doc, TextContentFilter(query=CONTENT.upper(), search_mode="exact"), now, _read) is True
    f = TextContentFilter(query=CONTENT.upper(), search_mode="exact", case_sensitive=True)
    assert evaluate_filter(doc, f, now, _read) is False
    assert evaluate_filter(doc, TextContentFilter(query="Solve", search_mode="exact"), now, _read) is False


def test_text_regex(doc, now):
    f = TextContentFilter(query=r"x\^2\s*=\s*\d", search_mode="regex")
    assert evaluate_filter(doc, f, now, _read) is True
    f = TextContentFilter(query="^SOLVE", search_mode="regex", case_sensitive=True)
    assert evaluate_filter(doc, f, now, _read) is False


def test_text_regex_case_insensitive_by_default(doc, now):
    f = TextContentFilter(query="FRIDAY", search_mode="regex")
    assert evaluate_filter(doc, f, now, _read) is True


@pytest.mark.parametrize("negate", [False, True])
def test_text_invalid_regex_fails_closed(doc, now, negate):
    """'foo(' does not compile: raw result is False, negation still applies."""
    f = TextContentFilter(query="foo(", search_mode="regex", negate=negate)
    assert evaluate_filter(doc, f, now, _read) is negate


def test_text_unreadable_content(doc, now):
    f = TextContentFilter(query="friday")
    assert evaluate_filter(doc, f, now, _unreadable) is False


# --- file name ---

@pytest.mark.parametrize("pattern,is_regex,expected", [
    ("draft", False, True),
    ("DRAFT-notes", False, True),
    ("final", False, False),
    ("^Draft", True, True),
    ("^draft", True, False),
    ("Notes$", True, True),
    ("md$", True, False),
])
def test_file_name(doc, now, pattern, is_regex, expected):
    f = FileNameFilter(pattern=pattern, is_regex=is_regex)
    assert evaluate_filter(doc, f, now, _read) is expected


def test_file_name_invalid_regex(doc, now):
    assert evaluate_filter(doc, FileNameFilter(pattern="[unclosed", is_regex=True), now, _read) is False


# --- negation & dispatch ---

NEGATABLE = [
    TagFilter(tag="project"),
    TagFilter(tag="missing"),
    FrontmatterFilter(property="status", operator="equals", value="draft"),
    FrontmatterFilter(property="status", operator="equals"),
    FolderFilter(path="Notes", include_subfolders=True),
    DateRangeFilter(range_type="last-n-days", days=1),
    DateRangeFilter(range_type="custom", start_date="2024-01-01"),
    TextContentFilter(query="friday"),
    TextContentFilter(query="(", search_mode="regex"),
    FileNameFilter(pattern="draft"),
    FileNameFilter(pattern="(", is_regex=True),
]


@pytest.mark.parametrize("f", NEGATABLE, ids=lambda f: f.type)
def test_negation_symmetry(doc, now, f):
    """negate=True always yields the inverse of negate=False."""
    plain = evaluate_filter(doc, f.model_copy(update={"negate": False}), now, _read)
    negated = evaluate_filter(doc, f.model_copy(update={"negate": True}), now, _read)
    assert negated is (not plain)


def test_unknown_filter_kind_fails_closed(doc, now):
    class Custom:
        negate = False

    assert evaluate_filter(doc, Custom(), now, _read) is False


def test_handler_error_fails_closed(doc, now):
    """A reader returning a non-string makes the handler raise; the result is False."""
    f = TextContentFilter(query="friday")
    assert evaluate_filter(doc, f, now, lambda d: None) is False
