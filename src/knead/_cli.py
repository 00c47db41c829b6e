"""knead CLI — knead init / knead build / knead serve.

Entry point for the ``knead`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _add_build_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by ``build`` and ``serve``."""
    parser.add_argument("--site", default=".", help="Site root directory")
    parser.add_argument("--outdir", default=None, help="Output directory")
    parser.add_argument(
        "--base-template", default=None, help="Template every page is rendered through",
    )
    parser.add_argument(
        "--tidy-html",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Normalize and indent the generated HTML",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the knead CLI."""
    parser = argparse.ArgumentParser(
        prog="knead",
        description="Static site generator with a stable HTML pretty-printer.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # knead init
    init_parser = subparsers.add_parser("init", help="Create a new site from the example")
    init_parser.add_argument("directory", nargs="?", default=".", help="Site directory")

    # knead build
    build_parser = subparsers.add_parser("build", help="Build the site into static HTML")
    _add_build_options(build_parser)
    build_parser.add_argument("infile", nargs="?", help="Render only this file")
    build_parser.add_argument(
        "outfile", nargs="?", help="Where to write infile (default: stdout)",
    )

    # knead serve
    serve_parser = subparsers.add_parser(
        "serve", help="Build, serve and rebuild the site on changes",
    )
    _add_build_options(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--live-reload",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reload the browser after each rebuild",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from knead import __version__

    return __version__


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    return {
        "output": args.outdir,
        "base_template": args.base_template,
        "tidy_html": args.tidy_html,
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from knead._errors import KneadError
    from knead.app import build, build_file, init, serve

    try:
        if args.command == "init":
            init(args.directory)
        elif args.command == "build":
            if args.infile:
                build_file(args.infile, args.outfile, root=args.site, **_overrides(args))
            else:
                build(root=args.site, **_overrides(args))
        elif args.command == "serve":
            serve(
                root=args.site,
                host=args.host,
                port=args.port,
                live_reload=args.live_reload,
                **_overrides(args),
            )
    except KneadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
