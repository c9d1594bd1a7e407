"""Command-line interface for SeamCut."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from seamcut.config import SeamConfig, load_yaml_mapping
from seamcut.errors import SeamCutError
from seamcut.image.builder import GridGraphBuilder
from seamcut.image.io import load_image, save_image
from seamcut.logging import configure_verbosity, get_logger
from seamcut.pipeline import synthesize

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _max_depth(value: str) -> Optional[int]:
    if value.lower() in ("none", "unbounded"):
        return None
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"max depth must be a non-negative integer or 'none', got '{value}'"
        ) from None
    if depth < 0:
        raise argparse.ArgumentTypeError(f"max depth must be non-negative, got {depth}")
    return depth


def _build_config(args: argparse.Namespace) -> SeamConfig:
    """Merge the optional YAML config with command-line overrides."""
    data: Dict[str, Any] = {}
    if args.config is not None:
        data.update(load_yaml_mapping(args.config.read_text()))

    overrides = {
        "source_seed": args.source_seed,
        "sink_seed": args.sink_seed,
        "strategy": getattr(args, "strategy", None),
        "worker_count": getattr(args, "workers", None),
        "mode": getattr(args, "mode", None),
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if getattr(args, "max_depth", False) is not False:
        data["max_depth"] = args.max_depth
    if getattr(args, "no_fallback", False):
        data["exhaustive_fallback"] = False
    return SeamConfig.from_dict(data)


def _run(args: argparse.Namespace) -> None:
    """Compute the seam and write the composite image."""
    start = perf_counter()
    try:
        config = _build_config(args)
        logger.info(f"Loading source image: {args.source}")
        source = load_image(args.source)
        logger.info(f"Loading target image: {args.target}")
        target = load_image(args.target)

        result = synthesize(source, target, config)

        logger.info(f"Writing composite to: {args.output}")
        save_image(result.image, args.output)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename or e}")
        print(f"❌ ERROR: File not found: {e.filename or e}")
        sys.exit(1)
    except (SeamCutError, ValueError, OSError) as e:
        logger.error(f"Failed to compute seam: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to compute seam: {type(e).__name__}: {e}")
        sys.exit(1)

    for stage, seconds in result.timings.items():
        logger.debug(f"{stage}: {_format_duration(seconds)}")
    print(f"✅ Max flow: {result.total_flow}")
    print(f"✅ Composite written to: {args.output}")
    logger.info(
        f"Seam computed successfully in {_format_duration(perf_counter() - start)}"
    )


def _inspect(args: argparse.Namespace) -> None:
    """Build the graph and report its size without solving."""
    try:
        config = _build_config(args)
        source = load_image(args.source)
        target = load_image(args.target)
        grid = GridGraphBuilder(
            source, target, config.source_seed, config.sink_seed
        ).build()
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename or e}")
        print(f"❌ ERROR: File not found: {e.filename or e}")
        sys.exit(1)
    except (SeamCutError, ValueError, OSError) as e:
        logger.error(f"Failed to build graph: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to build graph: {type(e).__name__}: {e}")
        sys.exit(1)

    print(f"Image size:        {grid.width}x{grid.height}")
    print(f"Nodes:             {grid.graph.num_nodes}")
    print(f"Edges:             {grid.graph.num_edges}")
    print(f"Source seed:       {config.source_seed} ({len(grid.source_links)} pixels)")
    print(f"Sink seed:         {config.sink_seed} ({len(grid.sink_links)} pixels)")
    print(f"Search strategy:   {config.strategy.name.lower()}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``seamcut`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="seamcut",
        description="Blend two images along a minimum-cost graph-cut seam.",
    )
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
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Compute a seam and write the composite")
    inspect_parser = subparsers.add_parser(
        "inspect", help="Build the flow network and report its size"
    )

    for p in (run_parser, inspect_parser):
        p.add_argument("source", type=Path, help="Source image (kept on the source side)")
        p.add_argument("target", type=Path, help="Target image (kept on the sink side)")
        p.add_argument(
            "--source-seed",
            help="Source seed rectangle as x0,y0,x1,y1 (inclusive)",
        )
        p.add_argument(
            "--sink-seed",
            help="Sink seed rectangle as x0,y0,x1,y1 (inclusive)",
        )
        p.add_argument(
            "--config",
            "-c",
            type=Path,
            default=None,
            help="YAML file with seeds and solver settings; flags override it",
        )
        p.add_argument(
            "--strategy",
            choices=["bfs", "parallel"],
            default=None,
            help="Augmenting path search (default: bfs)",
        )

    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("output.png"),
        help="Composite image path (default: output.png)",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Thread count for the parallel search",
    )
    run_parser.add_argument(
        "--max-depth",
        type=_max_depth,
        default=False,
        help="Depth bound for the parallel search, or 'none' for unbounded",
    )
    run_parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Trust the parallel search's 'no path' answer without a BFS check",
    )
    run_parser.add_argument(
        "--mode",
        choices=["adjacency", "reachability"],
        default=None,
        help="Pixel classification mode (default: adjacency)",
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if configure_verbosity(args.verbose, args.quiet) == logging.DEBUG:
        logger.debug("Debug logging enabled")

    if args.command == "run":
        _run(args)
    elif args.command == "inspect":
        _inspect(args)


if __name__ == "__main__":
    main()
