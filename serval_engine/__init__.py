"""
Serval Engine - A small CSS block layout and painting engine in Python.
"""

import logging

# Package information
__version__ = "0.1.0"
__author__ = "Serval Team"
__description__ = "A small CSS block layout and painting engine in Python"

logging.getLogger(__name__).addHandler(logging.NullHandler())
