"""
Partitioning of ANT types into type groups ("tasks", "conditions", ...).
"""
from typing import List, Optional
import logging

from antdoc.core import (
    AntTypeGroup,
    Declaration,
    DeclarationStore,
    Diagnostics,
    TypeGroupConfigurationError,
    TypeGroupRegistry
)

TASK = "org.apache.tools.ant.Task"
RESOURCE_COLLECTION = "org.apache.tools.ant.types.ResourceCollection"
CHAINABLE_READER = "org.apache.tools.ant.filters.ChainableReader"
CONDITION = "org.apache.tools.ant.taskdefs.condition.Condition"

SUBDIR_TAG = "@ant.typeGroupSubdir"
NAME_TAG = "@ant.typeGroupName"
HEADING_TAG = "@ant.typeGroupHeading"
TITLE_MF_TAG = "@ant.typeTitleMf"
HEADING_MF_TAG = "@ant.typeHeadingMf"

REQUIRED_TAGS = (SUBDIR_TAG, NAME_TAG, HEADING_TAG)
GROUP_TAGS = REQUIRED_TAGS + (TITLE_MF_TAG, HEADING_MF_TAG)

DEFAULT_TYPE_HEADING_MF = "<{0}>"


def _builtin_group(subdir: str, name: str, heading: str) -> AntTypeGroup:
    return AntTypeGroup(
        subdir=subdir,
        name=name,
        heading=heading,
        type_title_mf=f'{name} "<{{0}}>"',
        type_heading_mf=DEFAULT_TYPE_HEADING_MF,
    )


def builtin_registry() -> TypeGroupRegistry:
    """
    A registry seeded with the groups of Ant's own type hierarchy and the
    catch-all "Other type" group.
    """
    registry = TypeGroupRegistry()
    registry.register(TASK, _builtin_group("tasks", "Task", "Tasks"))
    registry.register(RESOURCE_COLLECTION, _builtin_group(
        "resourceCollections", "Resource collection", "Resource collections"
    ))
    registry.register(CHAINABLE_READER, _builtin_group(
        "chainableReaders", "Chainable reader", "Chainable readers"
    ))
    registry.register(CONDITION, _builtin_group("conditions", "Condition", "Conditions"))
    registry.register(None, AntTypeGroup(
        subdir="otherTypes",
        name="Other type",
        heading="Other types",
        type_title_mf='Type "<{0}>"',
        type_heading_mf=DEFAULT_TYPE_HEADING_MF,
    ))
    return registry


class TypeGroupClassifier:
    """
    Determines the type groups of a declaration from its ancestors.

    An ancestor is a group root if it is already registered, or if it carries
    the "@ant.typeGroup..." tags; in the latter case the group is created and
    registered the first time the ancestor is reached.
    """

    def __init__(self, store: DeclarationStore, diagnostics: Optional[Diagnostics] = None):
        self.store = store
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.logger = logging.getLogger(__name__)

    def classify(self, declaration: Declaration, registry: TypeGroupRegistry) -> List[AntTypeGroup]:
        """
        Find all type groups of a declaration.

        Args:
            declaration: The implementing declaration of an ANT type
            registry: The groups found so far; new groups are registered here

        Returns:
            The matching groups in ancestor order, or the catch-all group alone
        """
        result = []
        for ancestor in self.store.ancestors(declaration):
            group = registry.get(ancestor.qualified_name)
            if group is None:
                try:
                    group = self.group_of(ancestor)
                except TypeGroupConfigurationError as e:
                    self.diagnostics.error(str(e), ancestor.position)
                    continue
                if group is None:
                    continue
                clash = registry.find_by_subdir(group.subdir)
                if clash is not None:
                    self.diagnostics.warning(
                        f"Type group '{group.name}' of '{ancestor.qualified_name}' reuses the subdirectory "
                        f"'{group.subdir}' of type group '{clash.name}'; their pages share that directory",
                        ancestor.position,
                    )
                group = registry.register(ancestor.qualified_name, group)
                self.logger.info(f"Registered type group '{group.subdir}' rooted at {ancestor.qualified_name}")
            if all(g is not group for g in result):
                result.append(group)

        if not result:
            result.append(registry.other)
        return result

    @staticmethod
    def group_of(ancestor: Declaration) -> Optional[AntTypeGroup]:
        """
        Build a type group from the metadata tags of an ancestor.

        Args:
            ancestor: A superclass or interface of an ANT type

        Returns:
            The new group, or None if the ancestor carries no group metadata

        Raises:
            TypeGroupConfigurationError: If only part of the required tags are present
        """
        values = {tag: ancestor.tag_values(tag) for tag in GROUP_TAGS}
        if not any(values.values()):
            return None

        missing = [tag for tag in REQUIRED_TAGS if not values[tag] or not values[tag][0]]
        if missing:
            raise TypeGroupConfigurationError(
                f"'{ancestor.qualified_name}' declares type group metadata, but lacks {', '.join(missing)}"
            )

        name = values[NAME_TAG][0]
        return AntTypeGroup(
            subdir=values[SUBDIR_TAG][0],
            name=name,
            heading=values[HEADING_TAG][0],
            type_title_mf=values[TITLE_MF_TAG][0] if values[TITLE_MF_TAG] else f'{name} "<{{0}}>"',
            type_heading_mf=values[HEADING_MF_TAG][0] if values[HEADING_MF_TAG] else DEFAULT_TYPE_HEADING_MF,
        )
