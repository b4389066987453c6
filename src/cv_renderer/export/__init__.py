"""PDF and HTML export for cv-renderer."""
from cv_renderer.export.generator import RenderResult, generate_document, render_document
from cv_renderer.export.html_page import render_html_page, save_html
from cv_renderer.export.profiles import PROFILES, get_profile

__all__ = [
    "PROFILES",
    "RenderResult",
    "generate_document",
    "get_profile",
    "render_document",
    "render_html_page",
    "save_html",
]
