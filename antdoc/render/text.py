"""
Expansion of the inline tags in documentation text.
"""
import re
from typing import Iterator, Optional, Tuple
import logging

from markupsafe import Markup, escape

from antdoc.analysis import LinkResolver
from antdoc.core import AntType, AntTypeGroup, Declaration, Link, SourcePosition
from antdoc.parsers import first_sentence

_LINK_ARGUMENT = re.compile(r"([^\s(]*(?:\([^)]*\))?)\s*(.*)", re.DOTALL)


def link_html(link: Link, plain: bool = False, label: Optional[str] = None) -> Markup:
    """
    Render a link as HTML.

    Args:
        link: The resolved link
        plain: Whether to suppress the code font ("{@linkplain}")
        label: Overrides the link's own label; taken as HTML

    Returns:
        An anchor, or just the label if the link has no address
    """
    if label is not None:
        text = Markup(label)
    elif link.code and not plain:
        text = Markup("<code>%s</code>") % link.label
    else:
        text = escape(link.label)
    if link.href is None:
        return text
    return Markup('<a href="%s">%s</a>') % (link.href, text)


def inline_tags(text: str) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Split text into plain runs and inline tags.

    Yields:
        (text, None) for plain text, (tag argument, tag name) for "{@tag argument}"
    """
    i = 0
    while i < len(text):
        start = text.find("{@", i)
        if start < 0:
            yield text[i:], None
            return
        if start > i:
            yield text[i:start], None

        depth = 0
        end = start
        while end < len(text):
            if text[end] == "{":
                depth += 1
            elif text[end] == "}":
                depth -= 1
                if depth == 0:
                    break
            end += 1
        if end >= len(text):
            # Unterminated; keep as plain text.
            yield text[start:], None
            return

        body = text[start + 2:end]
        parts = body.split(None, 1)
        name = parts[0] if parts else ""
        yield (parts[1].strip() if len(parts) > 1 else ""), name
        i = end + 1


class DocTextRenderer:
    """
    Turns documentation text (HTML with Javadoc inline tags) into HTML.

    "{@link}" and "{@linkplain}" references are resolved through the
    LinkResolver, from the point of view of the page being rendered.
    """

    def __init__(self, resolver: LinkResolver):
        self.resolver = resolver
        self.logger = logging.getLogger(__name__)

    def render(self, text: str, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
               context: Optional[Declaration] = None, position: Optional[SourcePosition] = None) -> Markup:
        """
        Render documentation text.

        Args:
            text: The raw documentation text
            from_type: The ANT type whose page is being rendered, or None for top-level pages
            from_group: The group under which that page is rendered
            context: The declaration that carries the text; anchors relative references
            position: Position of the text, for diagnostics

        Returns:
            The HTML
        """
        result = []
        for value, tag in inline_tags(text or ""):
            if tag is None:
                result.append(value)
            elif tag in ("link", "linkplain"):
                m = _LINK_ARGUMENT.match(value)
                reference, label = (m.group(1), m.group(2)) if m else (value, "")
                link = self.resolver.resolve_reference(from_type, from_group, context, reference, position)
                result.append(link_html(link, plain=(tag == "linkplain"), label=label.strip() or None))
            elif tag == "code":
                result.append(Markup("<code>%s</code>") % value)
            elif tag == "literal":
                result.append(escape(value))
            elif tag == "docRoot":
                result.append(".." if from_type is not None else ".")
            else:
                self.logger.debug(f"Unsupported inline tag {{@{tag}}}")
                result.append(escape(value))
        return Markup("".join(str(r) for r in result))

    def render_first_sentence(self, text: str, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                              context: Optional[Declaration] = None,
                              position: Optional[SourcePosition] = None) -> Markup:
        """Render only the first sentence of documentation text."""
        return self.render(first_sentence(text or ""), from_type, from_group, context, position)
