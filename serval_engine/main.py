#!/usr/bin/env python3
"""
Serval - Main Entry Point

Command line interface for parsing documents, dumping layouts and
painting them to PNG images or HTML canvas pages.
"""

import argparse
import logging
import sys
from typing import List, Optional

from serval_engine import __version__
from serval_engine.render_engine import ParseError, RenderEngine
from serval_engine.render_engine.dom import SYNTAXES
from serval_engine.render_engine.rendering import FORMATS, format_for_path
from serval_engine.utils.config import Config
from serval_engine.utils.logging import log_exception, setup_logging, verbosity_to_level

logger = logging.getLogger("serval_engine.main")


def read_file(path: str) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="serval", description="Serval - lay out and paint documents with CSS block layout")

    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase logging verbosity (-v info, -vv debug)")
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument("--log-file", default=None, help="Also write a detailed log to this file")
    parser.add_argument("--syntax", choices=SYNTAXES, default="auto",
                        help="Document syntax (default: detect)")
    parser.add_argument("--viewport-width", type=float, default=None,
                        help="Width of the initial containing block in pixels")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    parse_html = subparsers.add_parser("parse-html", help="Parse a document and print its tree")
    parse_html.add_argument("html", help="Document file")

    layout = subparsers.add_parser("layout", help="Print the laid-out box tree")
    layout.add_argument("html", help="Document file")
    layout.add_argument("stylesheet", help="Stylesheet file")

    paint = subparsers.add_parser("paint", help="Paint the document to a file")
    paint.add_argument("html", help="Document file")
    paint.add_argument("stylesheet", help="Stylesheet file")
    paint.add_argument("output_file", help="PNG image or HTML page to write")
    paint.add_argument("--format", choices=FORMATS, default=None,
                       help="Output format (default: from config, or the file extension)")
    paint.add_argument("--width", type=int, default=None, help="Canvas width in pixels")
    paint.add_argument("--height", type=int, default=None, help="Canvas height in pixels")

    return parser.parse_args(argv)


def create_engine(args: argparse.Namespace, config: Config) -> RenderEngine:
    """Build the engine from config values and command line overrides."""
    engine = RenderEngine.from_config(config, syntax=args.syntax)
    if args.viewport_width is not None:
        engine.viewport_width = args.viewport_width
    if getattr(args, 'width', None) is not None:
        engine.canvas_width = args.width
    if getattr(args, 'height', None) is not None:
        engine.canvas_height = args.height
    return engine


def run(args: argparse.Namespace, config: Config) -> None:
    engine = create_engine(args, config)

    if args.command == "parse-html":
        print(engine.parse_document(read_file(args.html)).to_sexpr())

    elif args.command == "layout":
        print(engine.dump_layout(read_file(args.html), read_file(args.stylesheet)))

    elif args.command == "paint":
        output_format = args.format or format_for_path(
            args.output_file, config.get('paint.format', 'png'))
        engine.paint_and_save(read_file(args.html), read_file(args.stylesheet),
                              args.output_file, output_format)
        print(f"saved as: {args.output_file}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = parse_args(argv)

    config = Config(args.config)
    setup_logging(log_file=args.log_file or config.get('logging.file'),
                  console_level=verbosity_to_level(args.verbose)
                  if args.verbose else config.get('logging.console_level', 'WARNING'))
    logger.info(f"Starting serval {__version__} ({args.command})")

    try:
        run(args, config)
    except ParseError as e:
        log_exception(logger, e, "Could not parse input")
        return 1
    except OSError as e:
        log_exception(logger, e, "File error")
        return 1
    except ValueError as e:
        log_exception(logger, e, "Invalid value")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
