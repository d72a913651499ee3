"""Command-line interface for roadroute."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import jsonschema

from roadroute.config import SERVER_CONFIG, TRAFFIC_CONFIG
from roadroute.errors import RoutingError
from roadroute.junctions import JunctionDirectory
from roadroute.loader import default_network_path, load_network
from roadroute.logging import get_logger, level_for_flags, set_global_log_level
from roadroute.route import Route
from roadroute.router import Router, check_multiplier

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[Any]],
    min_width: int = 4,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Optional clip width for long cells

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = []
    for col_idx in range(len(clipped_headers)):
        max_width = max(len(row[col_idx]) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in clipped_rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_cost(value: Any) -> str:
    """Return a number with up to two decimals, trailing zeros trimmed.

    Examples:
        20.0 -> "20"; 28.5 -> "28.5"; 1234.567 -> "1,234.57".
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)

    s = f"{v:,.2f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _load(network: Optional[Path]) -> Tuple[Router, JunctionDirectory]:
    path = network if network is not None else default_network_path()
    logger.info(f"Loading network from: {path}")
    return load_network(path).build()


def _apply_traffic(
    router: Router,
    directory: JunctionDirectory,
    traffic: Sequence[Sequence[str]],
    levels: Sequence[Sequence[str]],
) -> None:
    for from_token, to_token, multiplier in traffic:
        router.update_traffic(
            directory.resolve(from_token),
            directory.resolve(to_token),
            check_multiplier(multiplier),
        )
    for from_token, to_token, level in levels:
        router.update_traffic(
            directory.resolve(from_token),
            directory.resolve(to_token),
            TRAFFIC_CONFIG.multiplier_for(level),
        )


def _print_route(route: Route, directory: JunctionDirectory) -> None:
    print("\n>>> Shortest Route Found!")
    print("=" * 40)
    print("Path: " + " -> ".join(directory.label(j) for j in route.path))
    print(f"\nTotal Time: {_format_cost(route.total_minutes)} minutes")
    print(f"Total Distance: {_format_cost(route.total_km)} km")
    print(f"Roads: {route.hops}")
    print("=" * 40)


def _route_command(args: argparse.Namespace) -> None:
    router, directory = _load(args.network)
    _apply_traffic(router, directory, args.traffic or [], args.level or [])

    source = directory.resolve(args.source)
    destination = directory.resolve(args.destination)
    route = router.find_shortest_path(source, destination)

    if args.json:
        payload = route.to_dict()
        payload["names"] = [directory.label(j) for j in route.path]
        print(json.dumps(payload, indent=2))
    else:
        _print_route(route, directory)


def _inspect_command(args: argparse.Namespace) -> None:
    router, directory = _load(args.network)

    print("\nNETWORK SUMMARY")
    print(f"   Junctions: {router.junction_count}")
    print(f"   Roads: {router.road_count}")
    print(f"   Named junctions: {len(directory)}")

    junction_rows = [
        [j.id, j.name, _format_cost(j.lat), _format_cost(j.lng), len(router.neighbors(j.id))]
        for j in directory.all()
    ]
    if junction_rows:
        print("\nJUNCTIONS")
        print(
            _format_table(
                ["ID", "Name", "Lat", "Lng", "Degree"], junction_rows, max_col_width=30
            )
        )

    if args.detail:
        road_rows = [
            [
                road.id,
                directory.label(road.a),
                directory.label(road.b),
                _format_cost(road.distance),
                _format_cost(road.base_time),
                _format_cost(road.current_time),
            ]
            for road in router.roads()
        ]
        if road_rows:
            print("\nROADS")
            print(
                _format_table(
                    ["ID", "From", "To", "Km", "Base min", "Current min"],
                    road_rows,
                    max_col_width=30,
                )
            )


def _junction_command(args: argparse.Namespace) -> None:
    _, directory = _load(args.network)

    query = args.query.strip()
    junction = None
    if query.lstrip("-").isdigit():
        junction = directory.get(int(query))
    else:
        junction = directory.find(query)

    if junction is not None:
        print("\n>>> Junction Details:")
        print(f"  ID: {junction.id}")
        print(f"  Name: {junction.name}")
        print(f"  Coordinates: {junction.lat} N, {junction.lng} E")
        return

    matches = directory.search(query)
    if not matches:
        print(f"No junction matches '{query}'")
        sys.exit(1)
    print(f"\nJunctions starting with '{query}':")
    print(_format_table(["ID", "Name"], [[j.id, j.name] for j in matches]))


def _serve_command(args: argparse.Namespace) -> None:
    import uvicorn

    from roadroute.api import create_app

    router, directory = _load(args.network)
    app = create_app(router, directory)
    logger.info(f"Serving on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``roadroute`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="roadroute",
        description="Find the fastest route through a road network under current traffic.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{route,inspect,junction,serve}",
        help="Available commands",
    )

    route_parser = subparsers.add_parser("route", help="Find the fastest route")
    route_parser.add_argument("source", help="Source junction id or name")
    route_parser.add_argument("destination", help="Destination junction id or name")
    route_parser.add_argument(
        "--traffic",
        "-t",
        nargs=3,
        action="append",
        metavar=("FROM", "TO", "MULTIPLIER"),
        help="Apply a traffic multiplier to a road before routing (repeatable)",
    )
    route_parser.add_argument(
        "--level",
        nargs=3,
        action="append",
        metavar=("FROM", "TO", "LEVEL"),
        help=(
            "Apply a named traffic level (clear, moderate, heavy) to a road "
            "before routing (repeatable)"
        ),
    )
    route_parser.add_argument(
        "--json", action="store_true", help="Print the route as JSON"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show junctions and roads of a network"
    )
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Also list every road with base and current travel times",
    )

    junction_parser = subparsers.add_parser(
        "junction", help="Look up a junction by id, name or name prefix"
    )
    junction_parser.add_argument("query", help="Junction id, name or name prefix")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=SERVER_CONFIG.host)
    serve_parser.add_argument("--port", type=int, default=SERVER_CONFIG.port)

    for p in (route_parser, inspect_parser, junction_parser, serve_parser):
        p.add_argument(
            "--network",
            "-n",
            type=Path,
            default=None,
            help="Network YAML/JSON file (default: bundled Lahore sample)",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(verbose=args.verbose, quiet=args.quiet))
    logger.debug("Debug logging enabled")

    commands = {
        "route": _route_command,
        "inspect": _inspect_command,
        "junction": _junction_command,
        "serve": _serve_command,
    }

    try:
        commands[args.command](args)
    except FileNotFoundError as e:
        logger.error(f"Network file not found: {e.filename}")
        print(f"ERROR: Network file not found: {e.filename}")
        sys.exit(1)
    except RoutingError as e:
        logger.error(f"{e.code}: {e}")
        print(f"ERROR: {e}")
        sys.exit(1)
    except jsonschema.ValidationError as e:
        logger.error(f"Invalid network: {e.message}")
        print(f"ERROR: Invalid network: {e.message}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid network: {e}")
        print(f"ERROR: Invalid network: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
