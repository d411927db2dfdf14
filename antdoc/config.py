"""
Options of a documentation run.
"""
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from antdoc.antlib import ResourceLocator


def parse_path(value: Optional[str]) -> List[Path]:
    """
    Split a search path, e.g. "src:lib/ant.jar", at the platform's path separator.

    Args:
        value: The path string; None or empty yields an empty list

    Returns:
        The path entries
    """
    if not value:
        return []
    return [Path(entry) for entry in value.split(os.pathsep) if entry]


class DocletOptions(BaseModel):
    """Everything that configures one run of antdoc."""

    destination: Path = Path(".")
    doc_title: Optional[str] = None
    window_title: Optional[str] = None
    header: Optional[str] = None
    footer: Optional[str] = None
    bottom: Optional[str] = None
    charset: str = "utf-8"
    quiet: bool = False
    source_path: List[Path] = Field(default_factory=lambda: [Path(".")])
    class_path: List[Path] = Field(default_factory=list)
    antlib_files: List[Path] = Field(default_factory=list)
    antlib_resources: List[str] = Field(default_factory=list)
    external_antdocs: List[Path] = Field(default_factory=list)
    use_bundled_externals: bool = True

    @property
    def effective_window_title(self) -> str:
        return self.window_title or self.doc_title or "Ant Type Documentation"

    def resource_locator(self) -> ResourceLocator:
        """The locator for ANTLIB resources and Ant's "defaults.properties"."""
        return ResourceLocator(self.source_path, self.class_path)
