"""
Link resolution: computes the address and label of a cross reference between
documented entities, relative to the page that contains the reference.

Pages are laid out as "<subdir>/<type name>.html" below the destination
directory; "overview-summary.html" and the "alldefinitions" pages sit at the
top level and resolve with an unset "from" type.
"""
import re
from functools import partial
from typing import Dict, Iterator, List, Optional, Tuple, Union
import logging

from antdoc.core import (
    AntType,
    AntTypeGroup,
    Declaration,
    DeclarationStore,
    Diagnostics,
    Link,
    LinkResolutionError,
    Member,
    SourcePosition,
    TypeGroupRegistry
)
from antdoc.core.notations import first_letter_to_upper_case
from .external import ExternalAntdocs
from .members import MemberClassifier, method_label

TEXT_FRAGMENT = "#text_summary"
CHARACTER_DATA_LABEL = "(text between start and end tag)"

_REFERENCE = re.compile(r"^(?P<declaration>[\w.$]*)(?:#(?P<member>\w+)(?:\((?P<parameters>[^)]*)\))?)?$")


class LinkResolver:
    """
    Resolves references to declarations and members.

    The result depends only on the arguments, the (immutable) model and the
    external antdocs; the only side effect is the diagnostic that an
    unresolvable reference produces.
    """

    def __init__(self, registry: TypeGroupRegistry, store: DeclarationStore,
                 external: Optional[ExternalAntdocs] = None, diagnostics: Optional[Diagnostics] = None):
        self.registry = registry
        self.store = store
        self.external = external if external is not None else ExternalAntdocs(use_bundled=False)
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.logger = logging.getLogger(__name__)
        self._classified: Dict[str, List[Member]] = {}

    def resolve(self, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                to: Union[Declaration, Member], position: Optional[SourcePosition] = None) -> Link:
        """
        Resolve a reference to a declaration or a member.

        Never raises: an unresolvable declaration is reported as an error, an
        unresolvable member as a warning, and both yield a label-only link.

        Args:
            from_type: The ANT type whose page contains the reference, or None for top-level pages
            from_group: The group under which that page is rendered
            to: The referenced declaration or member
            position: Where the reference appears, for diagnostics

        Returns:
            The link
        """
        if isinstance(to, Member):
            link = self._resolve_member(from_type, from_group, to)
            if link is None:
                self.diagnostics.warning(
                    f"Linking from '{from_type.name if from_type else 'overview'}' to '{to}': "
                    f"'{to.name}' is not an attribute setter nor a subelement adder/creator",
                    position,
                )
                return Link(label=to.name)
            return link

        try:
            return self._resolve_declaration(from_type, from_group, to)
        except LinkResolutionError as e:
            self.diagnostics.error(str(e), position)
            return Link(label=to.name)

    def try_resolve(self, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                    to: Declaration) -> Optional[Link]:
        """Like resolve(), but returns None for an unresolvable declaration and reports nothing."""
        try:
            return self._resolve_declaration(from_type, from_group, to)
        except LinkResolutionError:
            return None

    def resolve_reference(self, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                          context: Optional[Declaration], reference: str,
                          position: Optional[SourcePosition] = None) -> Link:
        """
        Resolve a Javadoc-style reference, e.g. "FileSet", "com.acme.Foo#setBar(String)" or "#setBar".

        References that do not designate a known declaration or member are
        silently degraded to their label (a notice is recorded).

        Args:
            from_type: See resolve()
            from_group: See resolve()
            context: The declaration whose documentation contains the reference
            reference: The reference as written
            position: Where the reference appears, for diagnostics

        Returns:
            The link
        """
        m = _REFERENCE.match(reference.strip())
        if m is None:
            self.diagnostics.notice(f"Malformed reference '{reference}'", position)
            return Link(label=reference)

        declaration = self._find_declaration(context, m.group("declaration"))
        member_name = m.group("member")
        if declaration is None:
            self.diagnostics.notice(f"Reference '{reference}' does not designate a known type", position)
            return Link(label=member_name or m.group("declaration").rsplit(".", 1)[-1])

        if member_name is None:
            return self.resolve(from_type, from_group, declaration, position)

        parameter_types = None
        if m.group("parameters") is not None:
            parameter_types = [p.split()[0] for p in m.group("parameters").split(",") if p.strip()]
        member = self.store.find_member(declaration, member_name, parameter_types)
        if member is None:
            self.diagnostics.notice(f"Reference '{reference}' does not designate a known member", position)
            return Link(label=member_name)
        return self.resolve(from_type, from_group, member, position)

    def _find_declaration(self, context: Optional[Declaration], name: str) -> Optional[Declaration]:
        if not name:
            return context
        declaration = self.store.find_declaration(name)
        if declaration is None and context is not None:
            declaration = self.store.find_declaration(self.store.resolve_type_name(context, name))
        return declaration

    def _resolve_declaration(self, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                             to: Declaration) -> Link:
        # An ANT type of this model?
        candidates = [(g, t) for g, t in self.registry.all_types() if t.declaration == to]
        if candidates:
            group, ant_type = next(((g, t) for g, t in candidates if g is from_group), candidates[0])
            return Link(
                href=self.page_address(from_type, from_group, group, ant_type),
                label=f"<{ant_type.name}>",
                code=True,
            )

        # Documented elsewhere?
        link = self.external.get(to.qualified_name)
        if link is not None:
            return Link(href=link.href, label=first_letter_to_upper_case(link.label), code=link.code)

        # A subelement of the current type?
        if from_type is not None:
            for subelement in from_type.subelements:
                if subelement.type != to.qualified_name:
                    continue
                if subelement.is_named:
                    return Link(href=f"#{subelement.fragment}", label=f"<{subelement.name}>", code=True)
                group = self.registry.get(to.qualified_name)
                if group is not None:
                    return self.any_of(from_type, group)

        # A type group root, e.g. "ResourceCollection"?
        group = self.registry.get(to.qualified_name)
        if group is not None:
            return self.any_of(from_type, group)

        raise LinkResolutionError(f"'{to}' does not designate a type")

    def _resolve_member(self, from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                        to: Member) -> Optional[Link]:
        for group, ant_type in self._types_nearest_first(from_type, from_group):
            address = partial(self.page_address, from_type, from_group, group, ant_type)
            if ant_type.character_data is not None and ant_type.character_data == to:
                return Link(href=address(TEXT_FRAGMENT), label=CHARACTER_DATA_LABEL)

            for attribute in ant_type.attributes:
                if attribute.member == to:
                    return Link(href=address(f"#{attribute.name}_attribute_detail"), label=f'{attribute.name}="..."')

            for subelement in ant_type.subelements:
                if subelement.member == to:
                    if subelement.is_named:
                        label, code = f"<{subelement.name}>", True
                    elif self.registry.get(subelement.type) is not None:
                        label, code = f"Any {self.registry.get(subelement.type).name}", False
                    else:
                        label, code = subelement.type, True
                    return Link(href=address(f"#{subelement.fragment}"), label=label, code=code)

            # An attribute or subelement of a subelement's type, documented on this page?
            for subelement in ant_type.subelements:
                for member in self._nested_members(group, ant_type, subelement.type):
                    if member == to:
                        return Link(href=address(f"#{member.owner}/{member.name}"), label=method_label(member))
        return None

    def _nested_members(self, group: AntTypeGroup, ant_type: AntType, type_name: str) -> List[Member]:
        """
        The attribute setters and subelement adders/creators of a subelement's
        type, if the page of "ant_type" documents them; a type with a page of
        its own (or documented elsewhere) has none here.
        """
        subelement_type = self.store.find_declaration(type_name)
        if subelement_type is None or subelement_type.is_stub:
            return []
        link = self.try_resolve(ant_type, group, subelement_type)
        if link is not None and link.href is not None and not link.href.startswith("#"):
            return []
        if subelement_type.qualified_name not in self._classified:
            classified = MemberClassifier(self.store).classify(subelement_type)
            self._classified[subelement_type.qualified_name] = [
                entry.member for entry in classified.attributes + classified.subelements
            ]
        return self._classified[subelement_type.qualified_name]

    def _types_nearest_first(self, from_type: Optional[AntType],
                             from_group: Optional[AntTypeGroup]) -> Iterator[Tuple[AntTypeGroup, AntType]]:
        everything: List[Tuple[AntTypeGroup, AntType]] = list(self.registry.all_types())
        if from_type is not None:
            own = [(g, t) for g, t in everything if t is from_type]
            own.sort(key=lambda gt: gt[0] is not from_group)
            everything = own + [(g, t) for g, t in everything if t is not from_type]
        return iter(everything)

    @staticmethod
    def page_address(from_type: Optional[AntType], from_group: Optional[AntTypeGroup],
                     group: AntTypeGroup, ant_type: AntType, fragment: str = "") -> str:
        """
        The address of the page of an ANT type (plus an optional "#fragment"),
        relative to the page of "from_type".
        """
        if from_type is None:
            return f"{group.subdir}/{ant_type.name}.html{fragment}"
        if fragment and ant_type is from_type:
            return fragment
        if group is from_group:
            return f"{ant_type.name}.html{fragment}"
        return f"../{group.subdir}/{ant_type.name}.html{fragment}"

    @staticmethod
    def any_of(from_type: Optional[AntType], group: AntTypeGroup) -> Link:
        prefix = "" if from_type is None else "../"
        return Link(href=f"{prefix}overview-summary.html#{group.subdir}", label=f"Any {group.name}")
