"""Command-line interface for OSM Simple Nav."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .config import get_config
from .container import get_container
from .domain.errors import OSMNavError
from .domain.models import Graph, VisualGraph
from .logging_config import setup_logging
from .services import NavigationService
from .services.navigation import OSM_SUFFIXES, file_type

logger = logging.getLogger(__name__)

# load command -> (directed, largest component only); OSM input only
OSM_LOAD_COMMANDS: Dict[str, Tuple[bool, bool]] = {
    "--load-undir": (False, False),
    "--load-dir": (True, False),
    "--load-undir-comp": (False, True),
    "--load-dir-comp": (True, True),
}
LOAD_COMMANDS: List[str] = ["--load", *OSM_LOAD_COMMANDS]
LOAD_HELP: Dict[str, str] = {
    "--load": "Import a Graphviz file (.dot, .gv)",
    "--load-undir": "Load an OSM map as an undirected graph",
    "--load-dir": "Load an OSM map as a directed graph",
    "--load-undir-comp": "Like --load-undir, keeping the largest component",
    "--load-dir-comp": "Like --load-dir, keeping the largest component",
}


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


class _LoadAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        namespace.load_command = option_string
        namespace.input = values


class _ExportAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        namespace.action = option_string
        namespace.output = values


class _ShowNodesAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.action = option_string


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="osm-simple-nav",
        description="Load a road network and export it or list its vertices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Any load command accepts Graphviz input (.dot, .gv); OSM input (.osm,
.xml) needs one of the --load-(un)dir[-comp] commands.

Examples:
  osm-simple-nav --load-undir maps/city.osm --export city.pdf
  osm-simple-nav --load-dir-comp maps/city.osm --export city.dot
  osm-simple-nav --load city.dot --show-nodes
        """,
    )
    parser.set_defaults(load_command=None, input=None, action=None, output=None)

    load = parser.add_mutually_exclusive_group(required=True)
    for command in LOAD_COMMANDS:
        load.add_argument(
            command,
            action=_LoadAction,
            metavar="INPUT",
            dest=command.lstrip("-").replace("-", "_"),
            help=LOAD_HELP[command],
        )

    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument(
        "--export",
        action=_ExportAction,
        metavar="OUTPUT",
        help="Export the graph into OUTPUT (.pdf, .png, .dot, .gv or .html)",
    )
    actions.add_argument(
        "--show-nodes",
        action=_ShowNodesAction,
        help="Print every vertex with its latitude and longitude",
    )
    return parser


def load_graph(
    service: NavigationService, load_command: str, input_path: Path
) -> Tuple[Graph, VisualGraph]:
    """Run the load step selected by ``load_command``.

    Raises:
        _UsageError: If ``--load`` is used with OSM input.
        OSMNavError: If loading fails.
    """
    if file_type(input_path) in OSM_SUFFIXES:
        if load_command not in OSM_LOAD_COMMANDS:
            raise _UsageError(
                f"{load_command} cannot load OSM input, use one of "
                f"{', '.join(OSM_LOAD_COMMANDS)}"
            )
        directed, component_only = OSM_LOAD_COMMANDS[load_command]
        if component_only:
            return service.load_largest_component(input_path, directed)
        return service.load(input_path, directed)
    return service.load(input_path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Process exit status: 0 on success, 1 on any error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(get_config().observability)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"File {input_path} does not exist!", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    service: NavigationService = get_container().resolve(NavigationService)

    try:
        _, visual_graph = load_graph(service, args.load_command, input_path)

        if args.action == "--export":
            output = service.export(visual_graph, Path(args.output))
            print(f"Graph exported to {output}")
        else:
            for line in service.describe_vertices(visual_graph):
                print(line)
    except _UsageError as e:
        print(str(e), file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except OSMNavError as e:
        logger.info("Command failed", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0
