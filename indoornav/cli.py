"""Command-line interface for indoornav."""

import asyncio
import logging
import sys

import click

from .config import RoutingSettings
from .graph.builder import build_graph
from .graph.floor_graph import FloorGraph
from .graph.floors import nodes_on_floor
from .output.formatter import format_nodes, format_route, format_validation_result
from .routing.errors import RouteValidationError
from .routing.models import CostMode
from .schema.errors import MapLoadError, MapValidationError
from .schema.loader import parse_map
from .schema.models import MapDocument

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)


def _load(map_file: str) -> tuple[MapDocument, FloorGraph]:
    """Parse and build a map, exiting with code 2 on failure."""
    try:
        document = parse_map(map_file)
    except MapLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except MapValidationError as e:
        click.echo(f"Map validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)
    return document, build_graph(document)


def _settings(graph: FloorGraph, **overrides) -> RoutingSettings:
    try:
        return RoutingSettings.resolve(graph.pixels_per_meter, **overrides)
    except ValueError as e:
        click.echo(f"Invalid settings: {e}", err=True)
        sys.exit(2)


def _resolve_start(graph: FloorGraph, start: str, by_code: bool) -> str:
    if not by_code:
        return start
    node = graph.find_node_by_code(start)
    if node is None:
        click.echo(f"Scan code '{start}' does not match any node", err=True)
        sys.exit(1)
    return node.id


@click.group()
@click.version_option(package_name="indoornav")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr")
def main(verbose: bool):
    """indoornav: multi-floor indoor routing."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command()
@click.argument("map_file", type=click.Path(exists=True))
@FORMAT_OPTION
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(map_file: str, output_format: str, strict: bool):
    """Validate a map file.

    MAP_FILE is the path to a JSON or YAML map.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or schema error
    """
    from .validators.runner import run_validators

    document, graph = _load(map_file)
    result = run_validators(document, graph)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("map_file", type=click.Path(exists=True))
@click.argument("start")
@click.argument("end")
@click.option(
    "--cost",
    "cost_mode",
    type=click.Choice([m.value for m in CostMode]),
    envvar="INDOORNAV_COST_MODE",
    default=None,
    help="Minimize hops or meters (default: hops)",
)
@click.option(
    "--pixels-per-meter",
    type=float,
    envvar="INDOORNAV_PIXELS_PER_METER",
    default=None,
    help="Map scale; overrides the map file",
)
@click.option(
    "--from-code",
    is_flag=True,
    default=False,
    help="Treat START as a scanned code instead of a node id",
)
@FORMAT_OPTION
def route(
    map_file: str,
    start: str,
    end: str,
    cost_mode: str | None,
    pixels_per_meter: float | None,
    from_code: bool,
    output_format: str,
):
    """Plan a route between two nodes.

    Exit codes:
      0 - Route found
      1 - No route connects the nodes
      2 - File, schema or request error
    """
    from .routing.planner import plan_route

    _, graph = _load(map_file)
    settings = _settings(graph, cost_mode=cost_mode, pixels_per_meter=pixels_per_meter)
    start_id = _resolve_start(graph, start, from_code)

    try:
        plan = plan_route(graph, start_id, end, settings.cost_mode, settings.calculator())
    except RouteValidationError as e:
        click.echo(f"Invalid route request: {e}", err=True)
        sys.exit(2)

    click.echo(format_route(plan, graph, output_format))  # type: ignore
    sys.exit(0 if plan.found else 1)


@main.command()
@click.argument("map_file", type=click.Path(exists=True))
@click.argument("code")
@FORMAT_OPTION
def locate(map_file: str, code: str, output_format: str):
    """Resolve a scanned CODE to a node.

    Exit codes:
      0 - Node found
      1 - No node carries the code
      2 - File or schema error
    """
    _, graph = _load(map_file)
    node = graph.find_node_by_code(code)
    if node is None:
        click.echo(f"Scan code '{code}' does not match any node", err=True)
        sys.exit(1)
    click.echo(format_nodes([node], output_format))  # type: ignore
    sys.exit(0)


@main.command()
@click.argument("map_file", type=click.Path(exists=True))
@click.argument("floor", type=int)
@FORMAT_OPTION
def floor(map_file: str, floor: int, output_format: str):
    """List the nodes visible on FLOOR.

    Stairs that lead to FLOOR from another level are included.
    """
    _, graph = _load(map_file)
    if not graph.has_floor(floor):
        click.echo(f"Floor {floor} is not defined (floors: {graph.floors})", err=True)
        sys.exit(2)
    click.echo(format_nodes(nodes_on_floor(graph, floor), output_format))  # type: ignore
    sys.exit(0)


@main.command("migrate-stairs")
@click.argument("map_file", type=click.Path(exists=True))
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where to write the migrated map (default: overwrite MAP_FILE)",
)
def migrate_stairs(map_file: str, output_file: str | None):
    """Rewrite single-record stairs as one stair record per floor."""
    from .graph.stairs import normalize_stairs
    from .schema.loader import save_map

    _, graph = _load(map_file)
    created = normalize_stairs(graph)

    try:
        path = save_map(graph, output_file or map_file, normalize_stairs=False)
    except MapLoadError as e:
        click.echo(f"Error writing file: {e}", err=True)
        sys.exit(2)

    for node_id in created:
        click.echo(f"Created: {node_id}")
    click.echo(f"Wrote {path} ({len(created)} stair record(s) added)")
    sys.exit(0)


@main.command()
@click.argument("map_file", type=click.Path(exists=True))
@click.argument("start")
@click.argument("end")
@click.option(
    "--delay",
    type=float,
    envvar="INDOORNAV_ADVANCE_DELAY",
    default=None,
    help="Seconds between instructions (default: 2)",
)
@click.option(
    "--cost",
    "cost_mode",
    type=click.Choice([m.value for m in CostMode]),
    envvar="INDOORNAV_COST_MODE",
    default=None,
)
@click.option(
    "--from-code",
    is_flag=True,
    default=False,
    help="Treat START as a scanned code instead of a node id",
)
def narrate(
    map_file: str,
    start: str,
    end: str,
    delay: float | None,
    cost_mode: str | None,
    from_code: bool,
):
    """Play a route's instructions one after another.

    Exit codes:
      0 - Navigation completed
      1 - No route connects the nodes
      2 - File, schema or request error
    """
    from .routing.navigation import AutoAdvance, NavigationSession
    from .routing.phrasing import describe_instruction
    from .routing.planner import plan_route

    _, graph = _load(map_file)
    settings = _settings(graph, cost_mode=cost_mode, advance_delay=delay)
    start_id = _resolve_start(graph, start, from_code)

    try:
        plan = plan_route(graph, start_id, end, settings.cost_mode, settings.calculator())
    except RouteValidationError as e:
        click.echo(f"Invalid route request: {e}", err=True)
        sys.exit(2)

    if not plan.found:
        click.echo(f"No route from {start_id} to {end}")
        sys.exit(1)

    loop = asyncio.new_event_loop()
    done = loop.create_future()

    def show(instruction, session):
        click.echo(
            f"{session.position}/{session.total}: {describe_instruction(graph, instruction)}"
        )

    def finished(session):
        if not done.done():
            done.set_result(None)

    auto = AutoAdvance(loop, show, finished, delay=settings.advance_delay)
    loop.call_soon(auto.start, NavigationSession(plan.instructions))
    try:
        loop.run_until_complete(done)
    except KeyboardInterrupt:
        auto.stop()
        click.echo("Navigation stopped", err=True)
        sys.exit(130)
    finally:
        loop.close()

    click.echo("Navigation complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
