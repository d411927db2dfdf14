"""
HTML rendering of the documentation model.

Output layout, below the destination directory:

    index.html                  frameset
    overview-summary.html       all type groups with one-sentence summaries
    alldefinitions-frame.html   left frame: all types, grouped
    alldefinitions-noframe.html the same, for the no-frame variant
    <subdir>/<type>.html        one page per ANT type and type group
    stylesheet.css
    package-list                empty; keeps "javadoc -link" happy
"""
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from antdoc.analysis import LinkResolver, MemberClassifier, describe_value, method_label
from antdoc.config import DocletOptions
from antdoc.core import (
    AntSubelement,
    AntType,
    AntTypeGroup,
    DeclarationStore,
    Diagnostics,
    Member,
    TypeGroupRegistry
)
from antdoc.parsers import first_sentence
from .text import DocTextRenderer, link_html

UNKNOWN = "???"


class HtmlRenderer:
    """Writes the HTML pages of a documentation model."""

    def __init__(self, registry: TypeGroupRegistry, store: DeclarationStore, resolver: LinkResolver,
                 options: Optional[DocletOptions] = None, diagnostics: Optional[Diagnostics] = None):
        self.registry = registry
        self.store = store
        self.resolver = resolver
        self.options = options or DocletOptions()
        self.diagnostics = diagnostics if diagnostics is not None else resolver.diagnostics
        self.text = DocTextRenderer(resolver)
        self.env = Environment(
            loader=PackageLoader("antdoc.render", "templates"),
            autoescape=select_autoescape(enabled_extensions=("html", "j2")),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["link"] = link_html
        self.logger = logging.getLogger(__name__)

    def render(self, destination: Optional[Path] = None) -> List[Path]:
        """
        Render all pages.

        Args:
            destination: Output directory; defaults to the configured destination

        Returns:
            The files written
        """
        destination = Path(destination or self.options.destination)
        destination.mkdir(parents=True, exist_ok=True)
        written = []

        groups = [g for g in self.registry if g.types]

        written.append(self._write(destination / "index.html", "index.html.j2"))
        written.append(self._write(
            destination / "overview-summary.html", "overview-summary.html.j2", groups=self._overview(groups),
        ))
        for file_name, target in (("alldefinitions-frame.html", "classFrame"), ("alldefinitions-noframe.html", None)):
            written.append(self._write(
                destination / file_name, "alldefinitions.html.j2", groups=self._overview(groups), target=target,
            ))

        for group in groups:
            for i, ant_type in enumerate(group.types):
                previous_type = group.types[i - 1] if i > 0 else None
                next_type = group.types[i + 1] if i + 1 < len(group.types) else None
                written.append(self._write(
                    destination / group.subdir / f"{ant_type.name}.html",
                    "type.html.j2",
                    page=self._type_page(group, ant_type, previous_type, next_type),
                    groups=groups,
                    group=group,
                    root="../",
                ))

        stylesheet = resources.files("antdoc.render").joinpath("templates", "stylesheet.css").read_text("utf-8")
        (destination / "stylesheet.css").write_text(stylesheet, encoding="utf-8")
        written.append(destination / "stylesheet.css")

        (destination / "package-list").write_text("", encoding="utf-8")
        written.append(destination / "package-list")

        self.logger.info(f"Wrote {len(written)} files to {destination}")
        return written

    def _write(self, path: Path, template_name: str, **context: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        template = self.env.get_template(template_name)
        context.setdefault("root", "")
        content = template.render(options=self.options, **context)
        path.write_text(content, encoding=self.options.charset)
        self.logger.debug(f"Wrote {path}")
        return path

    def _overview(self, groups: List[AntTypeGroup]) -> List[Dict[str, Any]]:
        result = []
        for group in groups:
            types = []
            for ant_type in group.types:
                declaration = ant_type.declaration
                types.append({
                    "name": ant_type.name,
                    "href": self.resolver.page_address(None, None, group, ant_type),
                    "summary": self._summary(declaration.documentation, None, None, declaration),
                })
            result.append({"group": group, "types": types})
        return result

    def _type_page(self, group: AntTypeGroup, ant_type: AntType,
                   previous_type: Optional[AntType], next_type: Optional[AntType]) -> Dict[str, Any]:
        declaration = ant_type.declaration

        def render(member_or_declaration) -> Markup:
            return self.text.render(
                member_or_declaration.documentation, ant_type, group, declaration, member_or_declaration.position,
            )

        character_data = None
        if ant_type.character_data is not None:
            character_data = render(ant_type.character_data)

        attributes = []
        for attribute in ant_type.attributes:
            attributes.append({
                "name": attribute.name,
                "anchor": f"{attribute.name}_attribute_detail",
                "member_anchor": self._member_anchor(attribute.member),
                "group": attribute.group,
                "value": describe_value(attribute, self.store, self.diagnostics),
                "summary": self._summary(attribute.member.documentation, ant_type, group, declaration),
                "detail": render(attribute.member),
                "deprecated": "@deprecated" in attribute.member.tags,
            })

        subelements = [self._subelement(group, ant_type, subelement) for subelement in ant_type.subelements]

        return {
            "type": ant_type,
            "title": group.type_title(ant_type.name),
            "heading": group.type_heading(ant_type.name),
            "description": render(declaration) if declaration.has_documentation else None,
            "character_data": character_data,
            "attributes": attributes,
            "subelements": subelements,
            "adapt_to": self.resolver.try_resolve(ant_type, group, ant_type.adapt_to) if ant_type.adapt_to else None,
            "previous": f"{previous_type.name}.html" if previous_type else None,
            "next": f"{next_type.name}.html" if next_type else None,
        }

    def _subelement(self, group: AntTypeGroup, ant_type: AntType, subelement: AntSubelement) -> Dict[str, Any]:
        declaration = ant_type.declaration
        subelement_type = self.store.find_declaration(subelement.type)

        if subelement.is_named:
            title = Markup("<code>&lt;%s&gt;</code>") % subelement.name
        else:
            type_group = self.registry.get(subelement.type)
            link = None
            if type_group is None and subelement_type is not None:
                link = self.resolver.try_resolve(ant_type, group, subelement_type)
            if type_group is not None:
                title = link_html(self.resolver.any_of(ant_type, type_group))
            elif link is not None:
                title = Markup("Any ") + link_html(link, plain=True)
            else:
                title = Markup("Any <code>%s</code>") % subelement.type

        nested = []
        type_link = None
        if subelement_type is not None and not subelement_type.is_stub:
            type_link = self.resolver.try_resolve(ant_type, group, subelement_type)
            if type_link is None or type_link.href is None or type_link.href.startswith("#"):
                # Not documented on a page of its own; document its attributes and subelements here.
                classified = MemberClassifier(self.store, self.diagnostics).classify(subelement_type)
                for entry in classified.attributes + classified.subelements:
                    nested.append({
                        "anchor": self._member_anchor(entry.member),
                        "label": method_label(entry.member),
                        "summary": self._summary(entry.member.documentation, ant_type, group, subelement_type),
                    })
                type_link = None

        member = subelement.member
        return {
            "anchor": subelement.fragment,
            "named": subelement.is_named,
            "title": title,
            "group": subelement.group,
            "summary": (
                Markup("(deprecated)") if "@deprecated" in member.tags
                else self._summary(member.documentation, ant_type, group, declaration)
            ),
            "detail": self.text.render(member.documentation, ant_type, group, declaration, member.position),
            "type_link": type_link,
            "nested": nested,
        }

    def _summary(self, documentation: str, ant_type: Optional[AntType], group: Optional[AntTypeGroup],
                 context) -> Markup:
        if not first_sentence(documentation or ""):
            return Markup(UNKNOWN)
        return self.text.render_first_sentence(documentation, ant_type, group, context)

    @staticmethod
    def _member_anchor(member: Member) -> str:
        return f"{member.owner}/{member.name}"
