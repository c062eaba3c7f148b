import pytest

from serval_engine.render_engine.css import CSSParser
from serval_engine.render_engine.dom import DocumentParser


@pytest.fixture
def parse_css():
    """Parse stylesheet source with a fresh CSSParser."""
    return CSSParser().parse


@pytest.fixture
def parse_doc():
    """Parse compact document notation with a fresh DocumentParser."""
    return DocumentParser().parse_sexpr
