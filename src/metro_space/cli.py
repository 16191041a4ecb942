"""CLI for metro-space."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import networkx as nx

from metro_space import __version__
from metro_space.constants import EDGE_MARGIN, ROUTE_MARGIN
from metro_space.example import build_example_map
from metro_space.render import render_svg
from metro_space.space import STRATEGIES
from metro_space.themes import THEMES


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with a clean format for terminal output."""
    level = logging.DEBUG if verbose else logging.INFO
    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(handler)


margin_options = [
    click.option("--route-margin", type=float, default=ROUTE_MARGIN, show_default=True,
                 help="Gap between the routes of one bundle"),
    click.option("--edge-margin", type=float, default=EDGE_MARGIN, show_default=True,
                 help="Clearance around every station and edge"),
]


def with_margins(func):
    for option in reversed(margin_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log every move (DEBUG level)")
def cli(verbose: bool) -> None:
    """metro-space: make room for route bundles in schematic metro maps."""
    setup_logging(verbose)


@cli.command("make-space")
@with_margins
@click.option("--strategy", type=click.Choice(sorted(STRATEGIES)), default="displace",
              show_default=True, help="Space-making strategy")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write the resulting map as SVG")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--show-bends", is_flag=True, help="Mark inserted bend nodes in the SVG")
def make_space(
    route_margin: float,
    edge_margin: float,
    strategy: str,
    output: Path | None,
    theme: str,
    show_bends: bool,
) -> None:
    """Run a strategy on the example map and report the result."""
    metro_map = build_example_map(route_margin, edge_margin)
    before = len(metro_map.evaluate_conflicts())

    metro_map.make_space(strategy)

    remaining = metro_map.evaluate_conflicts()
    box = metro_map.bounding_box()
    click.echo(f"Strategy: {strategy}")
    click.echo(f"Conflicts: {before} -> {len(remaining)}")
    click.echo(f"Nodes: {len(metro_map.nodes)}, edges: {len(metro_map.edges)}, "
               f"non-octilinear edges: {metro_map.count_non_octilinear_edges()}")
    click.echo(f"Bounding box: {box.width:g} x {box.height:g}")

    if output is not None:
        svg = render_svg(metro_map, THEMES[theme], title=f"metro-space ({strategy})",
                         show_bends=show_bends)
        output.write_text(svg)
        click.echo(f"Rendered -> {output}")


@cli.command()
@with_margins
@click.option("--major-only", is_flag=True,
              help="Only conflicts needing at least correction-factor * edge-margin")
@click.option("--correction-factor", type=float, default=1.0, show_default=True)
def conflicts(
    route_margin: float,
    edge_margin: float,
    major_only: bool,
    correction_factor: float,
) -> None:
    """List the conflicts of the example map, most urgent first."""
    metro_map = build_example_map(route_margin, edge_margin)
    found = metro_map.evaluate_conflicts(major_only, correction_factor)
    if not found:
        click.echo("No conflicts.")
        return
    click.echo(f"Conflicts: {len(found)}")
    for conflict in found:
        a, b = conflict.elements
        click.echo(f"  {conflict.conflict_type.label}: {a!r} / {b!r} "
                   f"-> {conflict.best_displace_direction.name} "
                   f"{conflict.best_displace_distance}")


@cli.command()
@with_margins
def info(route_margin: float, edge_margin: float) -> None:
    """Show graph statistics of the example map."""
    metro_map = build_example_map(route_margin, edge_margin)
    graph = metro_map.to_networkx()
    routes = {route for edge in metro_map.edges for route in edge.routes}

    click.echo(f"Stations: {graph.number_of_nodes()}")
    click.echo(f"Edges: {graph.number_of_edges()}")
    click.echo(f"Components: {nx.number_connected_components(graph)}")
    click.echo(f"Routes: {len(routes)}")
    for route in sorted(routes, key=lambda r: r.name):
        count = sum(1 for edge in metro_map.edges if route in edge.routes)
        click.echo(f"  {route.name} ({route.color}): {count} edges")
    degrees = [d for _, d in graph.degree()]
    click.echo(f"Max degree: {max(degrees, default=0)}")
    click.echo(f"Non-octilinear edges: {metro_map.count_non_octilinear_edges()}")
    box = metro_map.bounding_box()
    click.echo(f"Bounding box: {box.width:g} x {box.height:g}")
