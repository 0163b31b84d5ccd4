"""ClaML classification parser, code tree and label search."""

__version__ = "0.1.0"
