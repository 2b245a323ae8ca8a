"""Query construction helpers and YAML/JSON query files"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from mdfilter.core.filters import Filter, FilterGroup, FilterQuery, LogicalOperator


class QueryLoadError(ValueError):
    """A query file is missing, unparseable, or does not describe a valid query."""


class FilterQueryBuilder:
    """Chainable builder for FilterQuery."""

    def __init__(self):
        self._groups: list[FilterGroup] = []
        self._operator = LogicalOperator.AND

    def set_global_operator(self, operator: LogicalOperator) -> "FilterQueryBuilder":
        self._operator = LogicalOperator(operator)
        return self

    def add_group(self, filters: list[Filter], operator: LogicalOperator) -> "FilterQueryBuilder":
        self._groups.append(FilterGroup(filters=list(filters), operator=operator))
        return self

    def build(self) -> FilterQuery:
        return FilterQuery(groups=list(self._groups), global_operator=self._operator)

    @staticmethod
    def from_query(query: FilterQuery) -> "FilterQueryBuilder":
        """Builder seeded with a deep copy of query."""
        builder = FilterQueryBuilder()
        copy = query.model_copy(deep=True)
        builder._groups = list(copy.groups)
        builder._operator = copy.global_operator
        return builder

    @staticmethod
    def create_empty() -> FilterQuery:
        return FilterQuery(groups=[], global_operator=LogicalOperator.AND)

    @staticmethod
    def is_valid(query: FilterQuery) -> bool:
        """True when the query has at least one group and every group has a filter.

        Completeness check for authoring only; evaluation treats empty
        queries and groups as matching everything.
        """
        if not query.groups:
            return False
        return all(group.filters for group in query.groups)


def parse_query(text: str, source: str = "<query>") -> FilterQuery:
    """Parse YAML (or JSON) text into a FilterQuery."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise QueryLoadError(f"Invalid query file {source}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise QueryLoadError(f"Invalid query file {source}: expected a mapping, got {type(data).__name__}")
    try:
        return FilterQuery.model_validate(data)
    except ValidationError as e:
        raise QueryLoadError(f"Invalid query file {source}: {e}") from e


def load_query(path: Path) -> FilterQuery:
    """Read and validate a query file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise QueryLoadError(f"Cannot read query file {path}: {e}") from e
    return parse_query(text, str(path))


def dump_query(query: FilterQuery) -> str:
    """Serialize query to YAML with camelCase keys, omitting unset optional fields."""
    data = query.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
