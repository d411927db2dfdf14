"""
Renderers that turn the documentation model into pages.
"""

from .text import DocTextRenderer, link_html, inline_tags
from .html import HtmlRenderer

__all__ = [
    "DocTextRenderer",
    "link_html",
    "inline_tags",
    "HtmlRenderer"
]
