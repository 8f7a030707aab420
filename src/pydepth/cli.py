"""Command-line interface for pydepth: show dependency trees and summaries for packages."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pydepth import __version__
from pydepth.api import GRAPH_ENV_VAR, make_resolver
from pydepth.core.render import write_json, write_tree
from pydepth.core.resolver import ResolutionError, Resolver
from pydepth.core.summary import write_summary

logger = logging.getLogger(__name__)


def _fatal(stream: TextIO, package: str, err: Exception) -> None:
    stream.write(f"'{package}': FATAL: {err}\n")


def handle_packages(
    resolver: Resolver,
    packages: list[str],
    *,
    output_json: bool = False,
    stream: TextIO | None = None,
) -> int:
    """
    Resolve each package in order and write its tree (or JSON) to stream.

    Stops at the first package that fails to resolve and returns 1.
    """
    out = stream if stream is not None else sys.stdout
    for pkg in packages:
        try:
            root = resolver.resolve(pkg)
        except ResolutionError as e:
            logger.debug("Resolution of %s failed: %s", pkg, e)
            _fatal(out, pkg, e)
            return 1

        if output_json:
            write_json(out, root)
            continue

        write_tree(out, root)
        write_summary(out, root)
    return 0


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pydepth",
        description="Show the resolved dependency tree of one or more packages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "packages",
        nargs="+",
        metavar="package",
        help="Package name(s) to show dependencies for",
    )
    parser.add_argument(
        "--internal",
        action="store_true",
        help="Resolve dependencies of internal (stdlib) packages",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Resolve dependencies used only for testing",
    )
    parser.add_argument(
        "--max",
        type=_non_negative_int,
        default=0,
        metavar="N",
        help="Maximum depth of dependencies to resolve (default: 0, unlimited)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "-g",
        "--graph",
        metavar="PATH",
        default=None,
        help=f"Graph manifest to resolve against (default: ${GRAPH_ENV_VAR} or depgraph.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pydepth CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        resolver = make_resolver(
            args.graph,
            resolve_internal=args.internal,
            resolve_test=args.test,
            max_depth=args.max,
        )
    except ResolutionError as e:
        _fatal(sys.stdout, args.packages[0], e)
        return 1

    return handle_packages(resolver, args.packages, output_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
