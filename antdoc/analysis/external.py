"""
Registry of ANT types that are documented elsewhere, e.g. in the Ant manual.
"""
import re
from importlib import resources
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union
import logging

from antdoc.antlib import ResourceLocator
from antdoc.core import Link

ANT_MANUAL_URL = "http://ant.apache.org/manual/"
TASK_DEFAULTS_RESOURCE = "org/apache/tools/ant/taskdefs/defaults.properties"
TYPE_DEFAULTS_RESOURCE = "org/apache/tools/ant/types/defaults.properties"

_SEPARATOR = re.compile(r"\s*[=:]\s*|\s+")


def parse_properties(content: str) -> Iterator[Tuple[str, str]]:
    """
    Parse the content of a Java ".properties" file.

    Supports comments ("#", "!"), "=", ":" and blank separators, and
    backslash line continuations. Unicode escapes are not decoded.

    Yields:
        (key, value) pairs in file order
    """
    logical = ""
    for line in content.splitlines():
        stripped = line.lstrip()
        if not logical and (not stripped or stripped[0] in "#!"):
            continue
        if stripped.endswith("\\") and not stripped.endswith("\\\\"):
            logical += stripped[:-1]
            continue
        logical += stripped
        parts = _SEPARATOR.split(logical, maxsplit=1)
        logical = ""
        key = parts[0]
        value = parts[1].strip() if len(parts) > 1 else ""
        if key:
            yield key, value


class ExternalAntdocs:
    """
    Maps qualified class names to links into external ANT documentation.

    Populated once before the model is built; read-only afterwards.
    """

    def __init__(self, use_bundled: bool = True):
        self.links: Dict[str, Link] = {}
        self.logger = logging.getLogger(__name__)
        if use_bundled:
            self.load_bundled()

    def get(self, qualified_name: str) -> Optional[Link]:
        return self.links.get(qualified_name)

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self.links

    def __len__(self) -> int:
        return len(self.links)

    def load_bundled(self) -> int:
        """Load the mappings that ship with antdoc."""
        content = resources.files("antdoc.resources").joinpath("external-antdocs.properties").read_text("utf-8")
        return self.add_label_href_properties(content, "external-antdocs.properties")

    def load_label_href_properties(self, path: Union[str, Path]) -> int:
        """
        Load a file with lines "qualified.ClassName = label words href".

        Returns:
            The number of mappings added
        """
        return self.add_label_href_properties(Path(path).read_text("utf-8"), str(path))

    def add_label_href_properties(self, content: str, origin: str) -> int:
        count = 0
        for qualified_name, value in parse_properties(content):
            label, _, href = value.rpartition(" ")
            if not label.strip() or not href:
                self.logger.warning(f"{origin}: Ignoring '{qualified_name}': expected 'label href'")
                continue
            self.links[qualified_name] = Link(href=href, label=label.strip())
            count += 1
        self.logger.debug(f"Loaded {count} external antdocs from {origin}")
        return count

    def load_defaults_properties(self, path: Union[str, Path], base_url: str) -> int:
        """
        Load an Ant "defaults.properties" file with lines "name = qualified.ClassName".

        Args:
            path: The properties file
            base_url: E.g. "http://ant.apache.org/manual/Tasks/"

        Returns:
            The number of mappings added
        """
        return self.add_defaults_properties(Path(path).read_text("utf-8"), base_url)

    def add_defaults_properties(self, content: str, base_url: str) -> int:
        count = 0
        for type_name, qualified_name in parse_properties(content):
            self.links[qualified_name] = Link(href=f"{base_url}{type_name}.html", label=f"<{type_name}>", code=True)
            count += 1
        return count

    def load_ant_defaults(self, locator: ResourceLocator) -> int:
        """
        Load Ant's own task and type definitions if "ant.jar" is on the
        source or class path.

        Returns:
            The number of mappings added
        """
        count = 0
        for resource_name, base_url in (
            (TASK_DEFAULTS_RESOURCE, ANT_MANUAL_URL + "Tasks/"),
            (TYPE_DEFAULTS_RESOURCE, ANT_MANUAL_URL + "Types/"),
        ):
            found = locator.find(resource_name)
            if found is None:
                self.logger.debug(f"{resource_name} not found; Ant's standard types are not linked")
                continue
            location, content = found
            count += self.add_defaults_properties(content.decode("latin-1"), base_url)
        return count
