from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from tabulate import tabulate

from strrank.algorithms import iter_algorithms
from strrank.benchmark import Families, format_results, make_tests
from strrank.errors import StrRankError

from .app import app, logger
from .common import CandidatesFileOption, ConfigOption, collect_candidates, load_app_config


@app.command("bench")
def bench_command(
    query: str = typer.Argument(..., help="First string of every comparison."),
    candidates: Optional[List[str]] = typer.Argument(None, help="Strings to compare with QUERY."),
    candidates_file: Optional[Path] = CandidatesFileOption,
    config: Optional[Path] = ConfigOption,
    families: Optional[List[str]] = typer.Option(
        None, "--family", help="Restrict to a category (repeatable). Defaults to all."
    ),
    sort_mode: Optional[str] = typer.Option(
        None, "--sort-mode", help="algorithm, category, result or time."
    ),
    ascending: bool = typer.Option(False, "--ascending", help="Sort result/time ascending."),
) -> None:
    """Time every selected algorithm on QUERY against each candidate."""

    bench_cfg = load_app_config(config).benchmark
    if families:
        bench_cfg.families = list(families)
    if sort_mode is not None:
        bench_cfg.sort_mode = sort_mode
    if ascending:
        bench_cfg.descending = False

    try:
        selected = Families.parse(bench_cfg.families)
    except StrRankError as exc:
        raise typer.BadParameter(str(exc), param_hint="--family") from exc

    items = collect_candidates(candidates, candidates_file)
    if not items:
        logger.error("No candidates given")
        raise typer.Exit(code=1)

    results = make_tests(query, items, args=bench_cfg.args, families=selected)
    try:
        report = format_results(results, bench_cfg.sort_mode, bench_cfg.descending)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--sort-mode") from exc
    typer.echo(report)


@app.command("algorithms")
def algorithms_command() -> None:
    """List every available algorithm and how its scores are ordered."""

    rows = [
        {
            "category": alg.category_label(),
            "type": alg.type_code,
            "algorithm": alg.label(),
            "better": "larger" if alg.bigger_is_better else "smaller",
        }
        for alg in iter_algorithms()
    ]
    typer.echo(tabulate(rows, headers="keys", tablefmt="rounded_grid", showindex=False))
