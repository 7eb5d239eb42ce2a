"""Main application entry point."""

import argparse
import logging
import sys


def setup_logging(verbose: bool = False):
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )


def parse_params(values: list[str] | None) -> dict[str, str]:
    """
    Parse KEY=VALUE pairs into a dictionary.

    Raises:
        argparse.ArgumentTypeError: If a pair has no '='
    """
    params = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {item!r}")
        params[key] = value
    return params


def cmd_layers(args):
    """Handle layers subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_layers

    return run_layers(args.config, leaves_only=args.leaves_only, visible_at_view=args.visible_at_view)


def cmd_tree(args):
    """Handle tree subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_tree

    return run_tree(args.config)


def cmd_legend(args):
    """Handle legend subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_legend

    return run_legend(args.config, args.name, parse_params(args.param))


def cmd_zoom(args):
    """Handle zoom subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_zoom

    return run_zoom(args.scale, config_path=args.config, resolutions=args.resolutions, units=args.units)


def cmd_scale(args):
    """Handle scale subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_scale

    return run_scale(args.config, rounded=args.rounded)


def cmd_position(args):
    """Handle position subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_position

    return run_position(args.config, args.name)


def cmd_feature(args):
    """Handle feature subcommand."""
    setup_logging(args.verbose)
    from mapindex.cli import run_feature

    return run_feature(args.config, args.feature_id, namespaces=args.namespace)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    from mapindex.core.config import Units

    parser = argparse.ArgumentParser(
        description="Map Index - query layer trees, scales and legend URLs of map scenes",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layers_parser = subparsers.add_parser("layers", parents=[common], help="List all layers of a scene")
    layers_parser.add_argument("config", help="YAML scene file")
    layers_parser.add_argument("--leaves-only", action="store_true", help="Omit layer groups")
    layers_parser.add_argument(
        "--visible-at-view", action="store_true", help="Only layers in range of the view resolution"
    )
    layers_parser.set_defaults(func=cmd_layers)

    tree_parser = subparsers.add_parser("tree", parents=[common], help="Show the layer tree of a scene")
    tree_parser.add_argument("config", help="YAML scene file")
    tree_parser.set_defaults(func=cmd_tree)

    legend_parser = subparsers.add_parser("legend", parents=[common], help="Print the legend URL of a layer")
    legend_parser.add_argument("config", help="YAML scene file")
    legend_parser.add_argument("name", help="Layer name")
    legend_parser.add_argument(
        "--param", action="append", metavar="KEY=VALUE", help="Extra request parameter (repeatable)"
    )
    legend_parser.set_defaults(func=cmd_legend)

    zoom_parser = subparsers.add_parser("zoom", parents=[common], help="Find the zoom level for a scale")
    zoom_parser.add_argument("scale", help="Scale denominator, e.g. 50000")
    zoom_parser.add_argument("--config", help="YAML scene file providing the view resolutions")
    zoom_parser.add_argument("--resolutions", nargs="+", type=float, help="Resolution ladder")
    zoom_parser.add_argument("--units", choices=[u.value for u in Units], help="Units of the resolutions")
    zoom_parser.set_defaults(func=cmd_zoom)

    scale_parser = subparsers.add_parser("scale", parents=[common], help="Print the scale of the scene view")
    scale_parser.add_argument("config", help="YAML scene file")
    scale_parser.add_argument("--rounded", action="store_true", help="Round the scale for display")
    scale_parser.set_defaults(func=cmd_scale)

    position_parser = subparsers.add_parser(
        "position", parents=[common], help="Print the owning group and index of a layer"
    )
    position_parser.add_argument("config", help="YAML scene file")
    position_parser.add_argument("name", help="Layer name")
    position_parser.set_defaults(func=cmd_position)

    feature_parser = subparsers.add_parser("feature", parents=[common], help="Find the layer of a feature id")
    feature_parser.add_argument("config", help="YAML scene file")
    feature_parser.add_argument("feature_id", help="Feature id, e.g. roads.42")
    feature_parser.add_argument(
        "--namespace", action="append", help="Namespace to try, in order of precedence (repeatable)"
    )
    feature_parser.set_defaults(func=cmd_feature)

    return parser


def main():
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))


if __name__ == "__main__":
    sys.exit(main())
