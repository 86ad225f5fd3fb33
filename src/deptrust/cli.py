"""CLI entry point for deptrust."""

import asyncio
import json
import logging
import os
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from deptrust.analyzers.pipeline import TrustPipeline
from deptrust.analyzers.typosquat import TyposquatDetector
from deptrust.cache.store import CacheManager
from deptrust.config import ConfigError, load_config
from deptrust.manifests import ManifestError
from deptrust.models.schemas import Ecosystem, PackageReport, ProjectReport, TrendDirection, ZombieSeverity

app = typer.Typer(help="Supply-chain trust scoring for npm and PyPI dependencies.")
cache_app = typer.Typer(help="Inspect and maintain the local collector cache.")
app.add_typer(cache_app, name="cache")

console = Console()

TREND_COLORS = {
    TrendDirection.RISING: "green",
    TrendDirection.STABLE: "yellow",
    TrendDirection.DECLINING: "red",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log collection progress"),
    debug: bool = typer.Option(False, "--debug", help="Log cache and HTTP details"),
) -> None:
    """Score the trustworthiness of open source dependencies."""
    if debug or os.environ.get("DEPTRUST_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def _score_bar(score: int, width: int = 20) -> str:
    """Create a visual score bar."""
    filled = int(score / 100 * width)
    color = _score_style(score)
    return f"[{color}]{'█' * filled}[/{color}]{'░' * (width - filled)}"


def _load_settings(project_dir: Path, **overrides):
    try:
        return load_config(project_dir, overrides)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def check(
    package: str = typer.Argument(..., help="Package name to check"),
    version: str = typer.Option("latest", "--version", "-V", help="Package version"),
    ecosystem: Ecosystem = typer.Option(Ecosystem.NPM, "--ecosystem", "-e", help="Package ecosystem"),
    offline: bool = typer.Option(False, "--offline", help="Use cached data only"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
) -> None:
    """Check the trust score of a single package."""
    asyncio.run(_check(package, version, ecosystem, offline, as_json, output))


async def _check(
    package: str,
    version: str,
    ecosystem: Ecosystem,
    offline: bool,
    as_json: bool,
    output: Path | None,
) -> None:
    """Async implementation of check."""
    settings = _load_settings(Path.cwd(), offline=offline or None)

    try:
        async with TrustPipeline(settings) as pipeline:
            if as_json:
                report = await pipeline.analyze_package(package, version, ecosystem)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                ) as progress:
                    progress.add_task(f"Analyzing {package}@{version}...", total=None)
                    report = await pipeline.analyze_package(package, version, ecosystem)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    data = report.model_dump(mode="json")
    if as_json:
        console.print_json(json.dumps(data))
    else:
        _print_package_report(report)

    if output:
        output.write_text(json.dumps(data, indent=2))
        console.print(f"\n[green]Saved to {output}[/green]")


def _trend_text(trend: TrendDirection) -> str:
    color = TREND_COLORS.get(trend, "dim")
    return f"[{color}]{trend.value}[/{color}]"


def _print_package_report(report: PackageReport) -> None:
    console.print()
    console.print(f"[bold cyan]{report.package}[/bold cyan] {report.version} [dim]({report.ecosystem.value})[/dim]")
    console.print()

    style = _score_style(report.trust_score)
    console.print(
        Panel(
            f"[bold {style}]{report.trust_score}[/bold {style}]/100  {_score_bar(report.trust_score)}",
            title="Trust Score",
            expand=False,
        )
    )
    if report.insufficient_data:
        missing = ", ".join(report.unavailable_metrics)
        console.print(f"[yellow]Insufficient data:[/yellow] unavailable {missing}")

    metrics_table = Table(title="Score Breakdown", show_header=True)
    metrics_table.add_column("Dimension", style="bold")
    metrics_table.add_column("Score", justify="right")
    metrics_table.add_column("", width=22)
    metrics_table.add_column("Source", style="dim")

    sources = {"maintainer": "github", "activity": "registry"}
    for name, score in report.metrics.model_dump().items():
        status = report.sources.get(sources.get(name, name))
        status_text = status.value if status is not None else "-"
        if score is None:
            metrics_table.add_row(name.title(), "[dim]n/a[/dim]", "", status_text)
        else:
            metrics_table.add_row(name.title(), str(score), _score_bar(score), status_text)
    console.print(metrics_table)

    zombie = report.zombie
    if zombie.is_zombie:
        color = "red" if zombie.severity == ZombieSeverity.CRITICAL else "yellow"
        console.print(f"[bold]Zombie:[/bold] [{color}]{zombie.severity.value}[/{color}] {zombie.reason}")
    else:
        console.print(f"[bold]Zombie:[/bold] [green]no[/green] {zombie.reason}")

    typosquat = report.typosquat
    if typosquat.is_risky:
        console.print(
            f"[bold]Typosquat:[/bold] [red]possible[/red] similar to {', '.join(typosquat.similar_names)}"
        )

    console.print(f"[bold]Download trend:[/bold] {report.trend.value}")

    outlook = report.outlook
    if outlook is not None:
        console.print(
            f"[bold]Outlook:[/bold] {_trend_text(outlook.trend)} "
            f"(confidence {outlook.confidence:.0%}, 3-month score change {outlook.risk_projection_3m:+d})"
        )
        console.print(f"[dim]{escape(outlook.reason)}[/dim]")


@app.command()
def scan(
    project_dir: Path = typer.Argument(Path("."), help="Project directory"),
    offline: bool = typer.Option(False, "--offline", help="Use cached data only"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    min_score: int | None = typer.Option(None, "--min-score", help="Fail when a package scores lower"),
) -> None:
    """Scan a project's direct dependencies."""
    asyncio.run(_scan(project_dir, offline, as_json, min_score))


async def _scan(project_dir: Path, offline: bool, as_json: bool, min_score: int | None) -> None:
    """Async implementation of scan."""
    settings = _load_settings(project_dir, offline=offline or None, min_trust_score=min_score)

    try:
        async with TrustPipeline(settings) as pipeline:
            if as_json:
                report = await pipeline.scan_project(project_dir)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                ) as progress:
                    progress.add_task(f"Scanning {project_dir}...", total=None)
                    report = await pipeline.scan_project(project_dir)
    except (ConfigError, ManifestError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if report.nothing_to_scan:
        console.print(f"[red]{report.summary}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(report.model_dump(mode="json")))
    else:
        _print_project_report(report, settings.min_trust_score)

    if report.below_threshold:
        raise typer.Exit(1)


def _print_project_report(report: ProjectReport, min_score: int) -> None:
    table = Table(title=f"Dependencies of {report.project_dir}")
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="dim")
    table.add_column("Score", justify="right")
    table.add_column("Zombie")
    table.add_column("Typosquat")
    table.add_column("Trend")
    table.add_column("Used in", justify="right")

    for r in report.reports:
        style = _score_style(r.trust_score)
        score = f"[{style}]{r.trust_score}[/{style}]" + (" [dim]*[/dim]" if r.insufficient_data else "")
        zombie = r.zombie.severity.value if r.zombie.is_zombie else "-"
        typosquat = ", ".join(r.typosquat.similar_names[:3]) if r.typosquat.is_risky else "-"
        used = f"{r.blast_radius.affected_file_count} files" if r.blast_radius else "-"
        trend = _trend_text(r.outlook.trend) if r.outlook else "-"
        table.add_row(r.package, r.version, score, zombie, typosquat, trend, used)

    console.print(table)
    console.print()
    console.print(report.summary)

    if report.below_threshold:
        console.print(
            f"[bold red]Below minimum score {min_score}:[/bold red] {', '.join(report.below_threshold)}"
        )


@app.command()
def typosquat(
    package: str = typer.Argument(..., help="Package name to check"),
    ecosystem: Ecosystem = typer.Option(Ecosystem.NPM, "--ecosystem", "-e", help="Package ecosystem"),
    registry: bool = typer.Option(False, "--registry", help="Extend the reference list from the npm registry"),
) -> None:
    """Check whether a package name looks like a typosquat."""
    asyncio.run(_typosquat(package, ecosystem, registry))


async def _typosquat(package: str, ecosystem: Ecosystem, registry: bool) -> None:
    """Async implementation of typosquat."""
    if registry and ecosystem == Ecosystem.NPM:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task("Fetching popular packages...", total=None)
            detector = await TyposquatDetector.create_with_registry()
    else:
        detector = TyposquatDetector(ecosystem=ecosystem)

    result = detector.check(package)
    if not result.is_risky:
        console.print(f"[green]{package}[/green] does not resemble any of {len(detector):,} popular packages")
        return

    console.print(f"[bold red]{package}[/bold red] resembles popular packages:")
    for name in result.similar_names:
        console.print(f"  [yellow]![/yellow] {name}")
    console.print(f"[dim]Minimum edit distance: {result.min_distance}[/dim]")
    raise typer.Exit(1)


def _cache() -> CacheManager:
    settings = _load_settings(Path.cwd())
    return CacheManager(settings.cache_path)


@cache_app.command("stats")
def cache_stats() -> None:
    """Show cache location and entry count."""
    cache = _cache()
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Path", str(cache.path))
    table.add_row("Live entries", str(cache.size()))
    console.print(table)


@cache_app.command("clear")
def cache_clear() -> None:
    """Remove every cache entry."""
    cache = _cache()
    cache.clear()
    console.print(f"[green]Cleared cache at {cache.path}[/green]")


@cache_app.command("cleanup")
def cache_cleanup() -> None:
    """Remove expired cache entries."""
    removed = _cache().cleanup()
    console.print(f"[green]Removed {removed} expired entr{'y' if removed == 1 else 'ies'}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from deptrust import __version__

    console.print(f"deptrust v{__version__}")


if __name__ == "__main__":
    app()
