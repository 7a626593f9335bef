import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import GenealogyConfig, get_config_path, load_config, save_config
from .decorators import handle_genealogy_errors
from .exporter import export, write_recommendations
from .genealogists import default_registry
from .genealogy import Genealogy
from .loader import load_posts
from .recommendation import Recommender

# Rich output goes to stderr so stdout stays parseable
console = Console(stderr=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)]
)
logger = logging.getLogger("genealogy")

app = typer.Typer(help="Recommend related articles, talks and videos.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    genealogy - infer relations between posts and recommend the closest ones.
    """
    if verbose:
        logger.setLevel(logging.DEBUG)
        console.print("[bold green]Verbose mode enabled.[/bold green]")


@app.command()
@handle_genealogy_errors
def recommend(
    articles: Optional[Path] = typer.Option(None, "--articles", "-a", help="Folder with article files"),
    talks: Optional[Path] = typer.Option(None, "--talks", "-t", help="Folder with talk files"),
    videos: Optional[Path] = typer.Option(None, "--videos", help="Folder with video files"),
    per_post: Optional[int] = typer.Option(None, "--per-post", "-k", help="Recommendations per post"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (stdout if omitted)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: json or yaml"),
    genealogist: Optional[List[str]] = typer.Option(None, "--genealogist", "-g", help="Only use these genealogists"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
):
    """Infer relations between posts and write recommendations."""
    config = load_config(config_file)
    if articles:
        config.folders.articles = str(articles)
    if talks:
        config.folders.talks = str(talks)
    if videos:
        config.folders.videos = str(videos)
    if per_post is not None:
        config.recommendation.per_post = per_post
    if genealogist:
        config.recommendation.genealogists = list(genealogist)
    if output:
        config.output.path = str(output)
    if format:
        config.output.format = format
    config.validate()

    folders = config.folders
    if not (folders.articles or folders.talks or folders.videos):
        raise ValueError("No post folder defined.")

    posts = load_posts(
        Path(folders.articles) if folders.articles else None,
        Path(folders.talks) if folders.talks else None,
        Path(folders.videos) if folders.videos else None,
    )
    genealogists = default_registry().procure(config.recommendation.genealogists or None)
    logger.debug(f"Using genealogists: {', '.join(g.name for g in genealogists)}")

    genealogy = Genealogy(posts, genealogists, config.weights.to_weights())
    relations = genealogy.infer_relations()
    recommendations = Recommender().recommend(relations, config.recommendation.per_post)

    if config.output.path:
        path = write_recommendations(recommendations, Path(config.output.path), config.output.format)
        console.print(f"[green]✓ Wrote {len(recommendations)} recommendations to {path}[/green]")
    else:
        typer.echo(export(recommendations, config.output.format))


@app.command()
@handle_genealogy_errors
def genealogists(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
):
    """List available genealogists and their weights."""
    weights = load_config(config_file).weights.to_weights()
    registry = default_registry()

    table = Table(title="Genealogists")
    table.add_column("Name", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Description")
    for genealogist in registry.genealogists():
        table.add_row(
            genealogist.name,
            f"{weights.weight_of(genealogist.relation_type):.2f}",
            genealogist.description,
        )
    Console().print(table)


@app.command("config")
@handle_genealogy_errors
def config_command(
    init: bool = typer.Option(False, "--init", help="Write a default configuration file"),
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Config file to show or create"),
):
    """Show the active configuration, or create a default one."""
    if init:
        written = save_config(GenealogyConfig(), path)
        console.print(f"[green]✓ Created configuration at {written}[/green]")
        return

    config_path = path or get_config_path()
    config = load_config(path)
    console.print(f"[dim]Configuration: {config_path}[/dim]")
    typer.echo(json.dumps(config.to_dict(), indent=2))


if __name__ == "__main__":
    app()
