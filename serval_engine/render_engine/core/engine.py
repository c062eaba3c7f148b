"""
RenderEngine - Main engine class.

This class ties document parsing, style resolution, layout and painting
together into one pipeline.
"""

import logging

from ...utils.config import Config
from ...utils.logging import PerformanceLogger
from ..css import CSSParser, Stylesheet
from ..dom import DocumentParser, Node
from ..layout import LayoutBox, build_layout_tree, viewport
from ..rendering import Canvas, create_canvas
from ..style import style_tree

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_WIDTH = 800
DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 800


class RenderEngine:
    """
    Main rendering engine class.

    Turns a document and a stylesheet into a laid-out box tree, a text dump
    of that tree, or a painted canvas. Every call builds fresh style and box
    trees; nothing is cached between calls.
    """

    def __init__(self, viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
                 canvas_width: int = DEFAULT_CANVAS_WIDTH,
                 canvas_height: int = DEFAULT_CANVAS_HEIGHT,
                 syntax: str = 'auto'):
        """
        Initialize the engine.

        Args:
            viewport_width: Width of the initial containing block
            canvas_width: Width of painted output
            canvas_height: Height of painted output
            syntax: Document syntax passed to the document parser
        """
        self.viewport_width = viewport_width
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.syntax = syntax

        self.document_parser = DocumentParser()
        self.css_parser = CSSParser()
        self.perf = PerformanceLogger(logger, "RenderEngine")

        logger.debug(f"RenderEngine initialized with viewport width {viewport_width}")

    @classmethod
    def from_config(cls, config: Config, syntax: str = 'auto') -> 'RenderEngine':
        """
        Create an engine from configuration values.

        Args:
            config: Loaded configuration
            syntax: Document syntax passed to the document parser

        Returns:
            The configured engine
        """
        return cls(
            viewport_width=config.get('layout.viewport_width', DEFAULT_VIEWPORT_WIDTH),
            canvas_width=config.get('paint.canvas_width', DEFAULT_CANVAS_WIDTH),
            canvas_height=config.get('paint.canvas_height', DEFAULT_CANVAS_HEIGHT),
            syntax=syntax,
        )

    def parse_document(self, source: str) -> Node:
        logger.debug(f"parsing document:\n{source}")
        self.perf.start("parse_document")
        document = self.document_parser.parse(source, self.syntax)
        self.perf.end("parse_document")
        logger.debug(f"parsed: {document.to_sexpr()}")
        return document

    def parse_stylesheet(self, source: str) -> Stylesheet:
        logger.debug(f"parsing stylesheet:\n{source}")
        self.perf.start("parse_stylesheet")
        stylesheet = self.css_parser.parse(source)
        self.perf.end("parse_stylesheet")
        logger.debug(f"parsed: {stylesheet!r}")
        return stylesheet

    def layout(self, document: Node, stylesheet: Stylesheet) -> LayoutBox:
        """
        Style and lay out a parsed document.

        Args:
            document: Root of the document tree
            stylesheet: Parsed stylesheet

        Returns:
            The laid-out root box
        """
        self.perf.start("layout")
        styled_root = style_tree(document, stylesheet)
        layout_root = build_layout_tree(styled_root)
        layout_root.layout(viewport(self.viewport_width))
        self.perf.end("layout")
        return layout_root

    def layout_source(self, html: str, css: str) -> LayoutBox:
        """
        Parse, style and lay out document and stylesheet sources.

        Args:
            html: Document source
            css: Stylesheet source

        Returns:
            The laid-out root box
        """
        return self.layout(self.parse_document(html), self.parse_stylesheet(css))

    def dump_layout(self, html: str, css: str) -> str:
        """
        Lay out sources and render the box tree as indented text.

        Args:
            html: Document source
            css: Stylesheet source

        Returns:
            One line per box, children indented by two spaces
        """
        return self.layout_source(html, css).dump()

    def paint(self, html: str, css: str, output_format: str = 'png') -> Canvas:
        """
        Lay out sources and paint them.

        Args:
            html: Document source
            css: Stylesheet source
            output_format: 'png' or 'canvas'

        Returns:
            The painted canvas
        """
        canvas = create_canvas(output_format, self.canvas_width, self.canvas_height)
        layout_root = self.layout_source(html, css)

        self.perf.start("paint")
        canvas.paint(layout_root)
        self.perf.end("paint")
        return canvas

    def paint_and_save(self, html: str, css: str, output_file: str,
                       output_format: str = 'png') -> Canvas:
        """
        Paint sources and write the result to a file.

        Args:
            html: Document source
            css: Stylesheet source
            output_file: Path of the PNG image or HTML page to write
            output_format: 'png' or 'canvas'

        Returns:
            The painted canvas
        """
        canvas = self.paint(html, css, output_format)
        canvas.save_as(output_file)
        logger.info(f"saved as: {output_file}")
        return canvas
