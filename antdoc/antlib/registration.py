"""
Parsing of ANTLIB files into registration records.

See https://ant.apache.org/manual/Types/antlib.html
"""
import os
import zipfile
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple
import logging

from pydantic import BaseModel, Field

from antdoc.core import AntlibError

DEFINITION_TAGS = ("taskdef", "typedef", "componentdef")
UNSUPPORTED_TAGS = ("macrodef", "presetdef", "scriptdef")

DEFINITION = "definition"
NESTED_FILE = "file"
NESTED_RESOURCE = "resource"


class RegistrationRecord(BaseModel):
    """One "<taskdef>", "<typedef>" or "<componentdef>" element."""

    kind: str
    name: Optional[str] = None
    classname: Optional[str] = None
    adapt_to: Optional[str] = None
    resource: Optional[str] = None
    file: Optional[str] = None
    origin: str = ""

    @property
    def shape(self) -> Optional[str]:
        """
        DEFINITION, NESTED_FILE, NESTED_RESOURCE, or None for an invalid
        combination of attributes.
        """
        if (
            self.name is None and self.classname is None and self.adapt_to is None
            and self.resource is not None and self.file is None
        ):
            return NESTED_RESOURCE
        if (
            self.name is None and self.classname is None and self.adapt_to is None
            and self.resource is None and self.file is not None
        ):
            return NESTED_FILE
        if (
            self.name is not None and self.classname is not None
            and self.resource is None and self.file is None
        ):
            return DEFINITION
        return None

    def __str__(self) -> str:
        attributes = " ".join(
            f'{key}="{value}"'
            for key, value in (
                ("name", self.name), ("classname", self.classname), ("adaptTo", self.adapt_to),
                ("resource", self.resource), ("file", self.file),
            )
            if value is not None
        )
        return f"<{self.kind} {attributes} />"


class AntlibDocument(BaseModel):
    """The registration records of one ANTLIB file or resource."""

    location: str
    base_dir: Optional[str] = None
    records: List[RegistrationRecord] = Field(default_factory=list)
    unsupported: List[str] = Field(default_factory=list)


class ResourceLocator:
    """
    Looks up resources along the source path, then along the class path.

    Path entries may be directories or JAR/ZIP archives.
    """

    def __init__(self, source_path: Optional[List[Path]] = None, class_path: Optional[List[Path]] = None):
        self.source_path = list(source_path or [Path(".")])
        self.class_path = list(class_path or [])
        self.logger = logging.getLogger(__name__)

    def find(self, resource_name: str) -> Optional[Tuple[str, bytes]]:
        """
        Find a resource.

        Args:
            resource_name: E.g. "com/acme/ant/antlib.xml"

        Returns:
            (location, content), or None if the resource is on neither path
        """
        resource_name = resource_name.lstrip("/")
        for entry in self.source_path + self.class_path:
            entry = Path(entry)
            if entry.is_dir():
                candidate = entry / resource_name
                if candidate.is_file():
                    return str(candidate), candidate.read_bytes()
            elif entry.is_file() and zipfile.is_zipfile(entry):
                with zipfile.ZipFile(entry) as archive:
                    if resource_name in archive.namelist():
                        return f"jar:{entry}!/{resource_name}", archive.read(resource_name)
        self.logger.debug(f"Resource {resource_name} not found")
        return None

    def describe(self) -> str:
        return (
            f"source path ({os.pathsep.join(str(p) for p in self.source_path)}) "
            f"nor on the class path ({os.pathsep.join(str(p) for p in self.class_path)})"
        )


class AntlibParser:
    """
    Reads ANTLIB documents.

    Malformed XML is systemic: it raises AntlibError.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def parse_file(self, path: str) -> AntlibDocument:
        """
        Parse an ANTLIB file.

        Args:
            path: Path of the file

        Returns:
            The parsed document
        """
        try:
            with open(path, 'rb') as f:
                content = f.read()
        except OSError as e:
            raise AntlibError(f"Cannot read ANTLIB file {path}: {e}") from e
        return self.parse_bytes(content, str(path), os.path.dirname(os.path.abspath(path)))

    def parse_bytes(self, content: bytes, location: str, base_dir: Optional[str] = None) -> AntlibDocument:
        """
        Parse the content of an ANTLIB file or resource.

        Args:
            content: Raw XML
            location: File path or URL, used in messages
            base_dir: Directory against which nested "file" references resolve

        Returns:
            The parsed document
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise AntlibError(f"Malformed ANTLIB {location}: {e}") from e

        document = AntlibDocument(location=location, base_dir=base_dir)
        seen_unsupported = set()
        for element in root.iter():
            tag = self._local_name(element.tag)
            if tag in DEFINITION_TAGS:
                document.records.append(RegistrationRecord(
                    kind=tag,
                    name=self._optional_attribute(element, "name"),
                    classname=self._optional_attribute(element, "classname"),
                    adapt_to=self._optional_attribute(element, "adaptTo"),
                    resource=self._optional_attribute(element, "resource"),
                    file=self._optional_attribute(element, "file"),
                    origin=location,
                ))
            elif tag in UNSUPPORTED_TAGS and tag not in seen_unsupported:
                seen_unsupported.add(tag)
                document.unsupported.append(tag)

        self.logger.info(f"Parsed {len(document.records)} registration records from {location}")
        return document

    @staticmethod
    def _local_name(tag) -> str:
        if not isinstance(tag, str):
            return ""
        tag = tag.rsplit("}", 1)[-1]
        return tag.rsplit(":", 1)[-1]

    @staticmethod
    def _optional_attribute(element: ET.Element, name: str) -> Optional[str]:
        value = element.get(name)
        return value if value else None
