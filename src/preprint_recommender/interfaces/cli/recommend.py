#!/usr/bin/env python3
"""Command line entry point for recommending recent preprints."""

import asyncio
import re
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
)

from preprint_recommender import __version__
from preprint_recommender.application.use_cases import (
    RecommendationReport,
    RecommendationRequest,
)
from preprint_recommender.infrastructure.factories import create_recommend_use_case
from preprint_recommender.shared.config import (
    get_settings,
    load_config_file,
    merge_config,
)
from preprint_recommender.shared.exceptions import (
    InfrastructureException,
    PreprintRecommenderException,
)
from preprint_recommender.shared.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)
console = Console()

STAGE_LABELS = {
    "candidates": "Embedding preprints",
    "seeds": "Embedding seed papers",
}


def split_categories(values: tuple[str, ...]) -> list[str] | None:
    """Split repeated, space- or comma-separated category options.

    Returns None when the option was not given at all.
    """
    if not values:
        return None
    return [part for value in values for part in re.split(r"[\s,]+", value) if part]


def format_report(report: RecommendationReport) -> None:
    """Print stage counts, the threshold and the grouped matches."""
    console.print(f"Fetched [cyan]{report.total_candidates}[/cyan] preprints.")
    console.print(
        f"Loaded [cyan]{report.total_seeds}[/cyan] seed papers "
        f"([cyan]{report.embedded_seeds}[/cyan] embedded)."
    )
    console.print(f"Computed similarity threshold: {report.threshold:.4f}")

    rows = report.as_rows()
    if not rows:
        console.print("[yellow]No preprints cleared the similarity threshold.[/yellow]")
        return

    console.print(f"\n[bold]Matching papers ({report.total_matches}):[/bold]")
    for seed_title, matches in rows.items():
        console.print(f'\n[bold]Seed Paper:[/bold] "{escape(seed_title)}"')
        for match in matches:
            console.print(
                f'  Preprint: "{escape(match["title"])}" - '
                f"Similarity (0-100%): [green]{match['score']:.2f}%[/green]. "
                f"Link: {escape(match['link'])}"
            )


@click.group()
@click.version_option(__version__, prog_name="preprint-recommender")
def cli() -> None:
    """Fetch recent preprints and rank them against your seed papers."""


@cli.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    help="Path to a JSON config file. Defaults to "
    "preprint-recommender-config.json in the working directory.",
)
@click.option(
    "-s",
    "--seed-folder",
    help="Folder containing seed papers of interest.",
)
@click.option(
    "--arxiv-categories",
    multiple=True,
    help="arXiv categories to fetch (e.g. 'cs.AI cs.LG'). "
    "Space- or comma-separated; may be repeated.",
)
@click.option(
    "--biorxiv-categories",
    multiple=True,
    help="bioRxiv categories to fetch (e.g. 'bioinformatics genomics'). "
    "Space- or comma-separated; may be repeated.",
)
@click.option(
    "-l",
    "--look-back",
    "look_back_days",
    type=int,
    help="Number of days to look back for papers (default: 1).",
)
@click.option(
    "-o",
    "--offset",
    "offset_days",
    type=int,
    help="Number of most recent days to skip (default: 0).",
)
@click.option(
    "-m",
    "--max-results",
    type=int,
    help="Maximum number of papers to request per arXiv category (default: 500).",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging during fetching and embedding.",
)
def run(
    config_path: Path | None,
    seed_folder: str | None,
    arxiv_categories: tuple[str, ...],
    biorxiv_categories: tuple[str, ...],
    look_back_days: int | None,
    offset_days: int | None,
    max_results: int | None,
    verbose: bool,
) -> None:
    """Fetch, embed and rank recent preprints against the seed papers.

    Example:
        $ preprint-recommender run -s ./seeds --arxiv-categories "cs.AI cs.LG"
    """
    config = merge_config(
        load_config_file(config_path),
        {
            "seed_folder": seed_folder,
            "arxiv_categories": split_categories(arxiv_categories),
            "biorxiv_categories": split_categories(biorxiv_categories),
            "look_back_days": look_back_days,
            "offset_days": offset_days,
            "max_results": max_results,
            "verbose": verbose or None,
        },
    )
    configure_logging(bool(config.verbose))

    if not config.seed_folder:
        console.print(
            "[red]Error: --seed-folder is required (via CLI or config file).[/red]"
        )
        sys.exit(1)

    try:
        request = RecommendationRequest(
            **config.model_dump(exclude={"verbose"}, exclude_none=True)
        )
        use_case = create_recommend_use_case(get_settings())

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=not config.verbose,
        ) as progress:
            tasks: dict[str, int] = {}

            def on_progress(stage: str, completed: int, total: int) -> None:
                if stage not in tasks:
                    tasks[stage] = progress.add_task(
                        STAGE_LABELS.get(stage, stage), total=total
                    )
                progress.update(tasks[stage], completed=completed)

            async def run_recommendation() -> RecommendationReport:
                try:
                    return await use_case.execute(request, progress=on_progress)
                finally:
                    await use_case.close()

            report = asyncio.run(run_recommendation())

        format_report(report)

    except (PreprintRecommenderException, InfrastructureException) as e:
        logger.error("recommendation_failed", error=str(e))
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
