"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdfilter.config import Settings, load_config
from mdfilter.core.evaluate.evaluator import FilterEvaluator
from mdfilter.core.filters import FilterQuery
from mdfilter.core.models import Document
from mdfilter.core.query import FilterQueryBuilder, QueryLoadError, load_query
from mdfilter.core.utils.dates import parse_date_ms
from mdfilter.corpus.vault import VaultCorpus


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _query(path: str) -> FilterQuery:
    try:
        return load_query(Path(path))
    except QueryLoadError as e:
        _fail(str(e))


def _summary(doc: Document) -> dict:
    """JSON-friendly view of a matched document."""
    return {
        "path": doc.path,
        "name": doc.name,
        "folder": doc.parent_folder_path,
        "tags": sorted(doc.tags),
        "created_at": doc.created_at,
        "modified_at": doc.modified_at,
    }


def match_cmd(
    query_file: Annotated[str, typer.Argument(help="YAML or JSON filter query")],
    vault: Annotated[Optional[str], typer.Option("--vault-dir", help="Root directory of the markdown corpus")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Max documents evaluated concurrently")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="paths or json")] = None,
    now: Annotated[Optional[str], typer.Option("--now", help="Evaluate as of this ISO date/time")] = None,
    ):
    """Print every document in the vault that matches the query."""
    settings = _settings(overrides={"vault_dir": vault, "max_workers": workers, "output_format": fmt})
    query = _query(query_file)

    now_ms = None
    if now is not None:
        now_ms = parse_date_ms(now)
        if now_ms is None:
            _fail(f"Invalid --now value: {now!r}")

    vault_dir = Path(settings.vault_dir)
    if not vault_dir.is_dir():
        _fail(f"Vault directory not found: {vault_dir}")

    corpus = VaultCorpus(vault_dir, parser_config=settings.parser_config)
    evaluator = FilterEvaluator(corpus, max_workers=settings.max_workers)
    matches = evaluator.get_matching_files(query, now=now_ms)

    if settings.output_format == "json":
        typer.echo(json.dumps([_summary(d) for d in matches], indent=2, ensure_ascii=False))
    else:
        for doc in matches:
            typer.echo(doc.path)
    typer.echo(f"{len(matches)} matching document(s)", err=True)


def check_cmd(
    query_file: Annotated[str, typer.Argument(help="YAML or JSON filter query")],
    ):
    """Validate a query file and summarize its groups."""
    query = _query(query_file)
    if not query.groups:
        typer.echo("Query has no groups (matches every document).")
    for i, group in enumerate(query.groups, start=1):
        kinds = ", ".join(("NOT " if f.negate else "") + f.type for f in group.filters) or "(empty)"
        typer.echo(f"  group {i} [{group.operator.value}]: {kinds}")
    typer.echo(f"Groups combined with {query.global_operator.value}")

    if not FilterQueryBuilder.is_valid(query):
        _fail("Query is incomplete: every query needs at least one group and every group a filter")
    typer.echo("Query OK")
