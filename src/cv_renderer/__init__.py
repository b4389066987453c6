"""Render a structured CV record into an HTML page and paginated PDF documents."""

__version__ = "0.1.0"
