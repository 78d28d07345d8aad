"""Console output formatters using Rich."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from .json_formatter import print_json
from .messages import not_found_message
from ..models import (
    NodeData,
    Match,
    NotFound,
    CandidatesResult,
    GotoResult,
)

console = Console()


def node_to_dict(node: NodeData) -> dict:
    return {
        "id": node.id,
        "kind": node.kind,
        "name": node.name,
        "fqn": node.fqn,
        "file": node.file,
        "line": node.start_line + 1 if node.start_line is not None else None,
        "col": node.start_col + 1 if node.start_col is not None else None,
    }


def match_to_dict(match: Match) -> dict:
    return {
        "found": True,
        "tier": match.tier,
        "class": node_to_dict(match.class_node),
        "method": node_to_dict(match.method_node),
    }


def not_found_to_dict(outcome: NotFound) -> dict:
    return {
        "found": False,
        "reason": outcome.reason,
        "receiver": outcome.receiver_name,
        "method": outcome.method_name,
        "class_name": outcome.class_name,
        "message": not_found_message(outcome),
    }


def outcome_to_dict(outcome) -> dict:
    if isinstance(outcome, Match):
        return match_to_dict(outcome)
    return not_found_to_dict(outcome)


def candidates_to_dict(result: CandidatesResult) -> dict:
    return {
        "receiver": result.receiver_name,
        "base_name": result.base_name,
        "candidates": [
            {**node_to_dict(c.node), "role": c.role, "has_method": c.has_method}
            for c in result.candidates
        ],
    }


def goto_to_dict(result: GotoResult) -> dict:
    if result.call_site is None:
        return {"call_site": None, "found": False}
    site = result.call_site
    data = {
        "call_site": {
            "receiver": site.receiver_text,
            "receiver_name": site.receiver_name,
            "method": site.method_name,
            "start": site.start,
            "end": site.end,
        },
    }
    data.update(outcome_to_dict(result.outcome))
    return data


def print_match(match: Match, as_json: bool = False, out: Optional[Console] = None):
    """Print the resolved implementation method."""
    if as_json:
        print_json(match_to_dict(match))
        return
    out = out or console
    tier = "service" if match.tier == 1 else "generated base"
    out.print(f"[bold]Method[/bold]: {match.class_node.fqn}::{match.method_node.name}")
    out.print(f"  File: {match.method_node.location_str}")
    out.print(f"  Class: {match.class_node.name} [dim]({tier})[/dim]")


def print_not_found(outcome: NotFound, as_json: bool = False, out: Optional[Console] = None):
    """Print the hint for a failed resolution."""
    if as_json:
        print_json(not_found_to_dict(outcome))
        return
    out = out or console
    out.print(f"[red]{not_found_message(outcome)}[/red]")


def print_outcome(outcome, as_json: bool = False, out: Optional[Console] = None):
    if isinstance(outcome, Match):
        print_match(outcome, as_json=as_json, out=out)
    else:
        print_not_found(outcome, as_json=as_json, out=out)


def print_candidates(result: CandidatesResult, as_json: bool = False, out: Optional[Console] = None):
    """Print the candidate classes for a receiver."""
    if as_json:
        print_json(candidates_to_dict(result))
        return
    out = out or console
    if not result.candidates:
        out.print(f"[dim]No candidates for {result.receiver_name}[/dim]")
        return

    table = Table(title=f"Candidates for {result.receiver_name} (base name: {result.base_name})")
    table.add_column("#", justify="right")
    table.add_column("Class")
    table.add_column("Role")
    table.add_column("Has method")
    table.add_column("Location")
    for i, c in enumerate(result.candidates, 1):
        has_method = "" if c.has_method is None else ("yes" if c.has_method else "no")
        table.add_row(str(i), c.node.fqn, c.role, has_method, c.node.location_str)
    out.print(table)


def print_goto(result: GotoResult, as_json: bool = False, out: Optional[Console] = None):
    """Print the outcome of navigating from a source position."""
    if as_json:
        print_json(goto_to_dict(result))
        return
    out = out or console
    if result.call_site is None:
        out.print("[yellow]No qualified call at this position[/yellow]")
        return
    out.print(f"[dim]Call: {result.call_site.receiver_text}.{result.call_site.method_name}(...)[/dim]")
    print_outcome(result.outcome, out=out)
