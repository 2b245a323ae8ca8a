"""Filter query data models: a closed tagged union of six predicate kinds"""

import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mdfilter.core.utils.values import js_string


class LogicalOperator(str, Enum):
    """How a set of boolean results is combined"""
    AND = "AND"
    OR = "OR"


class FrontmatterOperator(str, Enum):
    exists = "exists"
    not_exists = "not-exists"
    equals = "equals"
    contains = "contains"


class DateFilterType(str, Enum):
    modified = "modified"
    created = "created"


class DateRangeType(str, Enum):
    last_n_days = "last-n-days"
    before = "before"
    after = "after"
    custom = "custom"


class TextSearchMode(str, Enum):
    contains = "contains"
    exact = "exact"
    regex = "regex"


class _Model(BaseModel):
    """Frozen, camelCase-aliased base; snake_case field names are accepted too."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class _FilterBase(_Model):
    negate: bool = False


class TagFilter(_FilterBase):
    type: Literal["tag"] = "tag"
    tag: str


class FrontmatterFilter(_FilterBase):
    type: Literal["frontmatter"] = "frontmatter"
    property: str
    operator: FrontmatterOperator
    value: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def _stringify_value(cls, v: Any) -> Any:
        # YAML turns `value: 3` or `value: true` into non-strings
        return v if v is None or isinstance(v, str) else js_string(v)


class FolderFilter(_FilterBase):
    type: Literal["folder"] = "folder"
    path: str
    include_subfolders: bool = False


class DateRangeFilter(_FilterBase):
    type: Literal["date-range"] = "date-range"
    date_type: DateFilterType = DateFilterType.modified
    range_type: DateRangeType
    days: Optional[Union[int, float]] = None
    date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @field_validator("date", "start_date", "end_date", mode="before")
    @classmethod
    def _isoformat_dates(cls, v: Any) -> Any:
        # unquoted YAML dates arrive as date/datetime objects
        return v.isoformat() if isinstance(v, datetime.date) else v


class TextContentFilter(_FilterBase):
    type: Literal["text-content"] = "text-content"
    query: str
    search_mode: TextSearchMode = TextSearchMode.contains
    case_sensitive: bool = False


class FileNameFilter(_FilterBase):
    type: Literal["file-name"] = "file-name"
    pattern: str
    is_regex: bool = False


Filter = Annotated[
    Union[TagFilter, FrontmatterFilter, FolderFilter, DateRangeFilter, TextContentFilter, FileNameFilter],
    Field(discriminator="type"),
]


class FilterGroup(_Model):
    """Filters combined by a single operator; an empty group matches everything."""
    filters: list[Filter] = []
    operator: LogicalOperator = LogicalOperator.AND


class FilterQuery(_Model):
    """Groups combined by a top-level operator; an empty query matches everything."""
    groups: list[FilterGroup] = []
    global_operator: LogicalOperator = LogicalOperator.AND
