"""CLI for care placement matching.

Commands:
- suggest: Rank every home for a referral and print the reasons
- report: Write match and explain CSV reports for a referral
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .application.matching_profiles import resolve_matching_weights
from .application.placement_snapshot import load_placement_snapshot
from .application.suggest_homes import run_match_report, suggest_homes
from .config import MatchingConfig
from .config_file import load_matching_config_file
from .domain.matching import HomeMatch
from .observability import set_log_level
from .presentation import reason_marker, reason_text
from .protocols import FileSystem


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: MatchingConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: MatchingConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, *, config: MatchingConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the placement-match entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"placement-match {__version__}")
        raise typer.Exit()


def _render_matches(referral_id: str, matches: list[HomeMatch]) -> None:
    table = Table(title=f"Suggested homes for {referral_id}")
    table.add_column("#", justify="right")
    table.add_column("Home")
    table.add_column("Location")
    table.add_column("Beds", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Eligible")
    table.add_column("Contacted")
    for rank, match in enumerate(matches, start=1):
        table.add_row(
            str(rank),
            match.home_name,
            match.location,
            str(match.free_beds),
            str(match.score),
            "[green]yes[/green]" if match.eligible else "[red]no[/red]",
            match.existing_thread_id or "",
        )
    rprint(table)

    for match in matches:
        rprint(f"\n[bold]{match.home_name}[/bold] ({match.home_id})")
        for reason in match.reasons:
            rprint(f"  {reason_marker(reason.level)} {reason_text(reason)}")


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Care placement matching: rank care homes for a referral and explain why.",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file overriding environment settings",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = MatchingConfig.from_env()
        if config_path is not None:
            bootstrap = deps_builder(config=config)
            config = config.with_file_overrides(
                load_matching_config_file(path=config_path, fs=bootstrap.fs)
            )
        set_log_level(config.logging_level)
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def suggest(
        ctx: typer.Context,
        referral_id: Annotated[str, typer.Argument(help="Referral id to match")],
        snapshot: Annotated[
            Path | None,
            typer.Option(
                "--snapshot",
                "-s",
                help="Placement snapshot JSON (default: PLACEMENT_SNAPSHOT_PATH)",
            ),
        ] = None,
        profile: Annotated[
            Path | None,
            typer.Option(
                "--profile",
                "-p",
                help="Matching weights profile JSON (default: built-in weights)",
            ),
        ] = None,
        eligible_only: Annotated[
            bool,
            typer.Option(
                "--eligible-only",
                help="Hide ineligible homes",
            ),
        ] = False,
    ) -> None:
        """Rank every home for a referral and print the reasons."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            snapshot_path=str(snapshot) if snapshot is not None else None,
            matching_profile_path=str(profile) if profile is not None else None,
            include_ineligible=False if eligible_only else None,
        )
        deps = state.build_dependencies(config=config)
        placement = load_placement_snapshot(path=Path(config.snapshot_path), fs=deps.fs)
        matches = suggest_homes(
            referral_id,
            referrals=placement,
            homes=placement,
            threads=placement,
            weights=resolve_matching_weights(config.matching_profile_path, deps.fs),
        )
        if not config.include_ineligible:
            matches = [match for match in matches if match.eligible]
        if not matches:
            rprint("[yellow]No homes available.[/yellow]")
            return
        _render_matches(referral_id, matches)

    @app.command()
    def report(
        ctx: typer.Context,
        referral_id: Annotated[str, typer.Argument(help="Referral id to match")],
        snapshot: Annotated[
            Path | None,
            typer.Option(
                "--snapshot",
                "-s",
                help="Placement snapshot JSON (default: PLACEMENT_SNAPSHOT_PATH)",
            ),
        ] = None,
        out_dir: Annotated[
            Path | None,
            typer.Option(
                "--output-dir",
                "-o",
                help="Directory for output files (default: MATCH_OUTPUT_DIR)",
            ),
        ] = None,
    ) -> None:
        """Write match and explain CSV reports for a referral."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            snapshot_path=str(snapshot) if snapshot is not None else None,
            output_dir=str(out_dir) if out_dir is not None else None,
        )
        deps = state.build_dependencies(config=config)
        outs = run_match_report(referral_id, config=config, fs=deps.fs)
        rprint("[green]✓ Match report complete:[/green]")
        for k, v in outs.items():
            rprint(f"  {k}: {v}")

    _ = (main, suggest, report)

    return app
