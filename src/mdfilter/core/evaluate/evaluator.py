"""Two-level AND/OR combination of predicate results, and corpus-wide matching"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

import structlog

from mdfilter.core.evaluate.predicates import ReadContent, evaluate_filter
from mdfilter.core.filters import FilterGroup, FilterQuery, LogicalOperator
from mdfilter.core.models import Document
from mdfilter.core.utils.dates import now_ms
from mdfilter.corpus.base import Corpus


log = structlog.get_logger(__name__)


def combine(operator: LogicalOperator, results: Iterable[bool]) -> bool:
    """AND: all true (true when empty). OR: any true (false when empty).

    Short-circuits on lazy iterables; predicates have no side effects.
    """
    if operator == LogicalOperator.AND:
        return all(results)
    return any(results)


def evaluate_group(doc: Document, group: FilterGroup, now: int, read: ReadContent) -> bool:
    """Combine a group's filters; a group with no filters matches everything."""
    if not group.filters:
        return True
    return combine(group.operator, (evaluate_filter(doc, f, now, read) for f in group.filters))


def evaluate_query(doc: Document, query: FilterQuery, now: int, read: ReadContent) -> bool:
    """Combine group results with the global operator; a query with no groups matches everything."""
    if not query.groups:
        return True
    return combine(query.global_operator, (evaluate_group(doc, g, now, read) for g in query.groups))


class FilterEvaluator:
    """Evaluates filter queries against documents of one corpus.

    Holds no mutable state, so one instance can serve concurrent callers.
    Corpus scans fan out over at most max_workers threads.
    """

    def __init__(self, corpus: Corpus, max_workers: int = 8, clock: Callable[[], int] = now_ms):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.corpus = corpus
        self.max_workers = max_workers
        self.clock = clock

    def _read(self, doc: Document) -> str:
        return self.corpus.read_content(doc.path)

    def evaluate_query(self, doc: Document, query: FilterQuery, now: Optional[int] = None) -> bool:
        """True if doc satisfies query at time now (epoch ms, defaults to the clock)."""
        return evaluate_query(doc, query, self.clock() if now is None else now, self._read)

    def get_matching_files(
        self,
        query: FilterQuery,
        now: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
        ) -> list[Document]:
        """Return matching documents in corpus order.

        now is fixed once for the whole scan. Once cancel is set, documents not
        yet evaluated are skipped and the partial result is returned.
        """
        now = self.clock() if now is None else now
        docs = self.corpus.list_documents()

        def _match(doc: Document) -> bool:
            if cancel is not None and cancel.is_set():
                return False
            return evaluate_query(doc, query, now, self._read)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            results = list(pool.map(_match, docs))

        matches = [doc for doc, ok in zip(docs, results) if ok]
        log.info(
            "query_evaluated",
            documents=len(docs), matches=len(matches),
            cancelled=bool(cancel is not None and cancel.is_set()),
        )
        return matches
