"""
In-memory declaration store that the parsers populate and the analysis reads.
"""
from typing import Dict, List, Optional, Any
import logging
from collections import defaultdict, deque

from .declarations import Declaration, Member

PRIMITIVE_TYPES = {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}

JAVA_LANG_TYPES = {
    "Boolean", "Byte", "Character", "CharSequence", "Class", "Comparable", "Deprecated", "Double",
    "Enum", "Error", "Exception", "Float", "Integer", "Iterable", "Long", "Math", "Number", "Object",
    "Override", "Runnable", "RuntimeException", "Short", "String", "StringBuffer", "StringBuilder",
    "System", "Thread", "Throwable", "Void",
}


class DeclarationStore:
    """
    Read-only view (once populated) over the parsed declarations.

    Declarations are keyed by qualified name. Types that are referenced but were
    never parsed are represented by stub declarations, so ancestor identities
    such as "org.apache.tools.ant.Task" exist without the Ant sources.
    """

    def __init__(self):
        self.declarations: Dict[str, Declaration] = {}
        self.logger = logging.getLogger(__name__)

    def add_declaration(self, declaration: Declaration) -> Declaration:
        """
        Add a declaration to the store.

        Args:
            declaration: The declaration to add

        Returns:
            The added declaration
        """
        existing = self.declarations.get(declaration.qualified_name)
        if existing is not None and not existing.is_stub:
            self.logger.warning(f"Declaration {declaration.qualified_name} already exists. Replacing.")
        for member in declaration.members + declaration.constructors:
            member.owner = declaration.qualified_name
            member.refresh_qualified_name()
        self.declarations[declaration.qualified_name] = declaration
        return declaration

    def find_declaration(self, qualified_name: str) -> Optional[Declaration]:
        """Return the parsed (or stub) declaration with the given name, or None."""
        return self.declarations.get(qualified_name)

    def get_or_stub(self, qualified_name: str) -> Declaration:
        """Return the declaration with the given name, creating a stub if it is unknown."""
        declaration = self.declarations.get(qualified_name)
        if declaration is None:
            package, _, name = qualified_name.rpartition(".")
            declaration = Declaration(
                name=name,
                qualified_name=qualified_name,
                package=package,
                is_stub=True,
            )
            self.declarations[qualified_name] = declaration
        return declaration

    def ancestors(self, declaration: Declaration) -> List[Declaration]:
        """
        The declaration itself, followed by all its superclasses and interfaces.

        Breadth-first over (superclass, interfaces...), each ancestor listed once
        even when reachable along several paths.
        """
        result = [declaration]
        seen = {declaration.qualified_name}
        queue = deque([declaration])
        while queue:
            current = queue.popleft()
            supertypes = ([current.superclass] if current.superclass else []) + current.interfaces
            for name in supertypes:
                if name in seen:
                    continue
                seen.add(name)
                ancestor = self.get_or_stub(name)
                result.append(ancestor)
                queue.append(ancestor)
        return result

    def members(self, declaration: Declaration, include_inherited: bool = True) -> List[Member]:
        """
        Public instance methods, most-derived first.

        Overridden methods are kept: a method and the one it overrides are both
        listed, the overriding one first.

        Args:
            declaration: The declaration to inspect
            include_inherited: Whether to include the methods of all ancestors

        Returns:
            Ordered list of members
        """
        sources = self.ancestors(declaration) if include_inherited else [declaration]
        result = []
        seen = set()
        for source in sources:
            for member in source.members:
                if member.is_static or not self._is_public(source, member):
                    continue
                if member in seen:
                    continue
                seen.add(member)
                result.append(member)
        return result

    @staticmethod
    def _is_public(owner: Declaration, member: Member) -> bool:
        if owner.is_interface:
            return member.access_modifier != "private"
        return member.is_public

    def is_subtype_of(self, declaration: Declaration, qualified_name: str) -> bool:
        return any(a.qualified_name == qualified_name for a in self.ancestors(declaration))

    def find_member(self, declaration: Declaration, name: str,
                    parameter_types: Optional[List[str]] = None) -> Optional[Member]:
        """
        Find a method by name (and optionally by parameter types) on a declaration or its ancestors.
        """
        for source in self.ancestors(declaration):
            for member in source.members + source.constructors:
                if member.name != name:
                    continue
                if parameter_types is None or self._parameters_match(source, member, parameter_types):
                    return member
        return None

    def _parameters_match(self, context: Declaration, member: Member, parameter_types: List[str]) -> bool:
        if len(member.parameters) != len(parameter_types):
            return False
        for actual, wanted in zip(member.parameter_types, parameter_types):
            wanted = self.resolve_type_name(context, wanted)
            if actual != wanted and actual.rsplit(".", 1)[-1] != wanted:
                return False
        return True

    def resolve_types(self) -> None:
        """
        Replace the type names as written in the sources with qualified names.

        Must run once after all sources have been parsed.
        """
        for declaration in list(self.declarations.values()):
            if declaration.is_stub:
                continue
            if declaration.superclass:
                declaration.superclass = self.resolve_type_name(declaration, declaration.superclass)
            declaration.interfaces = [self.resolve_type_name(declaration, i) for i in declaration.interfaces]
            for member in declaration.members + declaration.constructors:
                for parameter in member.parameters:
                    parameter.type = self.resolve_type_name(declaration, parameter.type)
                if member.return_type:
                    member.return_type = self.resolve_type_name(declaration, member.return_type)
                member.refresh_qualified_name()
        self.logger.info(f"Resolved type names of {len(self.declarations)} declarations")

    def resolve_type_name(self, context: Declaration, type_name: str) -> str:
        """
        Resolve a type name as written in the scope of a declaration.

        Args:
            context: The declaration in whose compilation unit the name appears
            type_name: E.g. "FileSet", "Outer.Inner", "java.io.File", "String[]"

        Returns:
            The qualified name, or the name as written if it cannot be resolved
        """
        suffix = ""
        if type_name.endswith("..."):
            type_name, suffix = type_name[:-3], "[]"
        while type_name.endswith("[]"):
            type_name, suffix = type_name[:-2], suffix + "[]"
        if not type_name or type_name in PRIMITIVE_TYPES:
            return type_name + suffix

        head, _, rest = type_name.partition(".")
        resolved = self._resolve_simple_name(context, head)
        if resolved is None:
            return type_name + suffix
        return resolved + ("." + rest if rest else "") + suffix

    def _resolve_simple_name(self, context: Declaration, simple_name: str) -> Optional[str]:
        # Member types of the declaration and its enclosing declarations.
        prefix = context.qualified_name
        while prefix and prefix != context.package:
            candidate = f"{prefix}.{simple_name}"
            if candidate in self.declarations and not self.declarations[candidate].is_stub:
                return candidate
            if "." not in prefix:
                break
            prefix = prefix.rsplit(".", 1)[0]

        for imported in context.imports:
            if imported == simple_name or imported.endswith("." + simple_name):
                return imported

        candidate = f"{context.package}.{simple_name}" if context.package else simple_name
        if candidate in self.declarations:
            return candidate

        for package in context.import_packages:
            candidate = f"{package}.{simple_name}"
            if candidate in self.declarations:
                return candidate

        if simple_name in JAVA_LANG_TYPES:
            return f"java.lang.{simple_name}"
        return None

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics about the store."""
        kind_counts = defaultdict(int)
        member_count = 0
        stub_count = 0
        for declaration in self.declarations.values():
            if declaration.is_stub:
                stub_count += 1
                continue
            kind_counts[declaration.kind] += 1
            member_count += len(declaration.members)

        return {
            "total_declarations": len(self.declarations) - stub_count,
            "stub_declarations": stub_count,
            "total_members": member_count,
            "declaration_counts": dict(kind_counts),
        }
