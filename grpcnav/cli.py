"""Main CLI application."""

import logging
from pathlib import Path
from typing import Optional

import msgspec
import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import AppConfig, ResolverConfig, load_config, override
from .graph import ProjectIndex, SearchScope
from .queries import (
    ImplementationQuery,
    CandidatesQuery,
    GotoImplementationQuery,
    offset_for,
)
from .output import (
    print_json,
    print_outcome,
    print_candidates,
    print_goto,
)

app = typer.Typer(
    name="grpcnav",
    help="Jump from gRPC client stub calls to their server implementations",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

# Loaded indexes, keyed by path
_indexes: dict[str, ProjectIndex] = {}


def setup_logging(verbose: bool):
    """Send log records to stderr; stdout is reserved for results."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def fail(message: str, json_output: bool = False, **extra):
    """Report an error and exit with status 1."""
    if json_output:
        print_json({"error": message, **extra})
    else:
        err_console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def get_index(path: str, json_output: bool = False) -> ProjectIndex:
    """Load or return cached index."""
    if path not in _indexes:
        index_path = Path(path)
        if not index_path.exists():
            fail(f"Index file not found: {path}", json_output)
        try:
            _indexes[path] = ProjectIndex(index_path)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            fail(f"Invalid index file {path}: {e}", json_output)
    return _indexes[path]


def get_config(config: Optional[Path], json_output: bool = False) -> AppConfig:
    if config is None:
        return AppConfig()
    if not config.exists():
        fail(f"Config file not found: {config}", json_output)
    try:
        return load_config(config)
    except (msgspec.DecodeError, msgspec.ValidationError, ValueError) as e:
        fail(f"Invalid config file {config}: {e}", json_output)


def select_index_path(
    index: Optional[str],
    app_config: AppConfig,
    project: Optional[str],
    json_output: bool = False,
) -> str:
    """Pick the index from --index, or from the config's projects."""
    if index:
        return index
    projects = {p.name: p.index for p in app_config.projects}
    if not projects:
        fail("Either --index or a --config with projects is required", json_output)
    if project is None:
        if len(projects) > 1:
            fail(f"Multiple projects configured, use --project. Available: {list(projects)}", json_output)
        return next(iter(projects.values()))
    if project not in projects:
        fail(f"Unknown project: {project}. Available: {list(projects)}", json_output)
    return projects[project]


def build_settings(
    index: Optional[str],
    config: Optional[Path],
    project: Optional[str],
    policy: Optional[str],
    order: Optional[str],
    json_output: bool = False,
) -> tuple[ProjectIndex, ResolverConfig]:
    app_config = get_config(config, json_output)
    try:
        resolver_config = override(app_config.resolver, stub_policy=policy, order=order)
    except msgspec.ValidationError as e:
        fail(f"Invalid option: {e}", json_output)
    index_path = select_index_path(index, app_config, project, json_output)
    return get_index(index_path, json_output), resolver_config


def make_scope(scope: Optional[list[str]]) -> SearchScope:
    return SearchScope.under(*scope) if scope else SearchScope.all()


# Shared options
IndexOpt = typer.Option(None, "--index", "-s", help="Path to symbol index JSON")
ConfigOpt = typer.Option(None, "--config", "-c", help="Path to grpcnav config JSON")
ProjectOpt = typer.Option(None, "--project", "-p", help="Project name from the config file")
PolicyOpt = typer.Option(None, "--policy", help="Stub suffix policy: require or strip")
OrderOpt = typer.Option(None, "--order", help="Candidate order: name or index")
ScopeOpt = typer.Option(None, "--scope", help="Only search files under this path prefix (repeatable)")
JsonOpt = typer.Option(False, "--json", "-j", help="Output as JSON")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    setup_logging(verbose)


# =============================================================================
# MCP Server Command
# =============================================================================


@app.command("mcp-server")
def mcp_server_cmd(
    index: Optional[Path] = typer.Option(None, "--index", "-s", help="Path to single symbol index JSON"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON with multiple projects"),
):
    """Start MCP server for AI assistant integration (stdio).

    Single project mode:
        grpcnav mcp-server --index /path/to/index.json

    Multi-project mode (config file):
        grpcnav mcp-server --config /path/to/grpcnav.json

    Tools provided:
    - grpcnav_projects: List available projects
    - grpcnav_resolve: Resolve a stub call to its implementation
    - grpcnav_candidates: List candidate classes for a receiver
    - grpcnav_goto: Resolve the call at a position in source text
    """
    if not index and not config:
        fail("Either --index or --config is required")

    if index and config:
        fail("Cannot use both --index and --config")

    if index and not index.exists():
        fail(f"Index file not found: {index}")

    if config and not config.exists():
        fail(f"Config file not found: {config}")

    from .server import run_mcp_server
    run_mcp_server(config_path=str(config) if config else None, index_path=str(index) if index else None)


# =============================================================================
# Query Commands
# =============================================================================


@app.command()
def resolve(
    receiver: str = typer.Argument(..., help="Receiver holding the stub, e.g. userServiceStub"),
    method: str = typer.Argument(..., help="Called method name"),
    index: Optional[str] = IndexOpt,
    config: Optional[Path] = ConfigOpt,
    project: Optional[str] = ProjectOpt,
    policy: Optional[str] = PolicyOpt,
    order: Optional[str] = OrderOpt,
    scope: Optional[list[str]] = ScopeOpt,
    json_output: bool = JsonOpt,
):
    """Resolve a stub call to its server implementation method."""
    project_index, resolver_config = build_settings(index, config, project, policy, order, json_output)
    query = ImplementationQuery(project_index, config=resolver_config, scope=make_scope(scope))
    outcome = query.execute(receiver, method)

    print_outcome(outcome, as_json=json_output, out=console)
    if not outcome.found:
        raise typer.Exit(1)


@app.command()
def goto(
    location: str = typer.Argument(..., help="Source position as FILE:LINE:COL (1-based)"),
    index: Optional[str] = IndexOpt,
    config: Optional[Path] = ConfigOpt,
    project: Optional[str] = ProjectOpt,
    policy: Optional[str] = PolicyOpt,
    order: Optional[str] = OrderOpt,
    scope: Optional[list[str]] = ScopeOpt,
    json_output: bool = JsonOpt,
):
    """Resolve the stub call at a source position."""
    parts = location.rsplit(":", 2)
    if len(parts) != 3 or not parts[1].isdigit() or not parts[2].isdigit():
        fail(f"Expected FILE:LINE:COL, got: {location}", json_output)
    file, line, col = parts[0], int(parts[1]), int(parts[2])

    source_path = Path(file)
    if not source_path.is_file():
        fail(f"Source file not found: {file}", json_output)
    source = source_path.read_text(encoding="utf-8", errors="replace")

    try:
        offset = offset_for(source, line, col)
    except ValueError as e:
        fail(str(e), json_output)

    project_index, resolver_config = build_settings(index, config, project, policy, order, json_output)
    query = GotoImplementationQuery(project_index, config=resolver_config, scope=make_scope(scope))
    result = query.execute(source, offset)

    print_goto(result, as_json=json_output, out=console)
    if not result.found:
        raise typer.Exit(1)


@app.command()
def candidates(
    receiver: str = typer.Argument(..., help="Receiver holding the stub"),
    method: Optional[str] = typer.Option(None, "--method", "-m", help="Also check each candidate for this method"),
    index: Optional[str] = IndexOpt,
    config: Optional[Path] = ConfigOpt,
    project: Optional[str] = ProjectOpt,
    policy: Optional[str] = PolicyOpt,
    order: Optional[str] = OrderOpt,
    scope: Optional[list[str]] = ScopeOpt,
    json_output: bool = JsonOpt,
):
    """List the classes a receiver could resolve to."""
    project_index, resolver_config = build_settings(index, config, project, policy, order, json_output)
    query = CandidatesQuery(project_index, config=resolver_config, scope=make_scope(scope))
    result = query.execute(receiver, method)

    if result.base_name is None:
        fail(
            f"Receiver {receiver!r} is not a stub name (policy={resolver_config.stub_policy})",
            json_output,
            receiver=receiver,
        )

    print_candidates(result, as_json=json_output, out=console)
    if not result.found:
        raise typer.Exit(1)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
