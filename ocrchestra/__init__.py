"""Tools for hOCR documents and Document AI results."""

__version__ = "0.1.0"