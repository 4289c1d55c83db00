from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from strrank.errors import StrRankError
from strrank.ranking import Ranker

from .app import app, logger
from .common import (
    CandidatesFileOption,
    ConfigOption,
    collect_candidates,
    load_app_config,
    parse_build_args,
)


@app.command("rank")
def rank_command(
    query: str = typer.Argument(..., help="String to compare every candidate against."),
    candidates: Optional[List[str]] = typer.Argument(None, help="Candidate strings."),
    candidates_file: Optional[Path] = CandidatesFileOption,
    config: Optional[Path] = ConfigOption,
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Algorithm category, e.g. normalized_similarity."
    ),
    algorithm: Optional[str] = typer.Option(
        None, "--algorithm", "-a", help="Algorithm name within the category, e.g. JAROWINKLER."
    ),
    build_args: Optional[List[str]] = typer.Option(
        None, "--arg", help="Positional build argument (repeatable); numbers are parsed."
    ),
    delimiters: Optional[List[str]] = typer.Option(
        None, "--split", "-s", help="Also score the pieces after each literal delimiter."
    ),
    top: Optional[int] = typer.Option(None, "--top", "-n", help="Keep at most N matches."),
    deadline: Optional[float] = typer.Option(
        None, "--deadline", "-d", help="Drop matches scoring worse than this threshold."
    ),
    show_scores: bool = typer.Option(False, "--scores", help="Print the score next to each match."),
) -> None:
    """Rank candidates by similarity to QUERY, best first."""

    ranking_cfg = load_app_config(config).ranking
    if category is not None:
        ranking_cfg.category = category
    if algorithm is not None:
        ranking_cfg.algorithm = algorithm
    if build_args:
        ranking_cfg.args = parse_build_args(build_args)
    if delimiters:
        ranking_cfg.delimiters = list(delimiters)
    if top is not None:
        ranking_cfg.top_n = top
    if deadline is not None:
        ranking_cfg.deadline = deadline

    try:
        ranker = Ranker.from_config(ranking_cfg)
    except StrRankError as exc:
        raise typer.BadParameter(str(exc)) from exc

    items = collect_candidates(candidates, candidates_file)
    logger.info("Ranking %d candidate(s) with %s", len(items), ranker.alg)

    ranked = ranker.rank(query, items)
    cut = len(ranked)
    if ranking_cfg.deadline is not None:
        cut = ranker.deadline_cut(ranked, ranking_cfg.deadline)
    if ranking_cfg.top_n is not None:
        cut = min(cut, max(0, ranking_cfg.top_n))

    for item in ranked[:cut]:
        if show_scores:
            score = "n/a" if item.score == ranker.alg.sentinel else f"{item.score:.6f}"
            typer.echo(f"{score}\t{item.candidate}")
        else:
            typer.echo(item.candidate)
