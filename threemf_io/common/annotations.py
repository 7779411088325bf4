# Python library to load and save 3MF packages.
# Copyright (C) 2020 Ghostkeeper
# Copyright (C) 2025 Jack (modernization for Blender 4.2+)
# This library is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This library is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
OPC packaging annotations for 3MF archives.

Typed in-memory forms of the two structural parts that make up the OPC
(Open Packaging Conventions) layer of a 3MF file: the relationships
(``_rels/.rels``) and the content types (``[Content_Types].xml``).

Relationship targets are package paths (``/3D/3dmodel.model``) while zip
entries are archive paths (``3D/3dmodel.model``).  :func:`archive_path` and
:func:`package_path` are the only places that convert between the two.
"""

import collections
import posixpath
import xml.etree.ElementTree
from typing import Dict, Iterator, List, Optional

from .logging import safe_report
from .constants import (
    CONTENT_TYPES_DEFAULT_FIND,
    CONTENT_TYPES_LOCATION,
    CONTENT_TYPES_NAMESPACE,
    CONTENT_TYPES_NAMESPACES,
    CONTENT_TYPES_OVERRIDE_FIND,
    MODEL_EXTENSION,
    MODEL_MIMETYPE,
    RELS_EXTENSION,
    RELS_MIMETYPE,
    RELS_NAMESPACE,
    RELS_NAMESPACES,
    RELS_RELATIONSHIP_FIND,
)

# Annotation types
Relationship = collections.namedtuple("Relationship", ["id", "type", "target"])
ContentType = collections.namedtuple("ContentType", ["extension", "mime_type"])

__all__ = [
    "Relationship",
    "ContentType",
    "Relationships",
    "ContentTypes",
    "archive_path",
    "package_path",
]


def archive_path(target: str) -> str:
    """Turn a package path (relationship target) into a zip entry name.

    Exactly one leading slash is removed.
    """
    if target.startswith("/"):
        return target[1:]
    return target


def package_path(path: str) -> str:
    """Turn a zip entry name into a package path for a relationship target."""
    return f"/{path}"


class Relationships:
    """
    The relationships of one ``.rels`` file, in document order.
    """

    def __init__(self):
        self.relationships: List[Relationship] = []

    def __iter__(self) -> Iterator[Relationship]:
        return iter(self.relationships)

    def __len__(self) -> int:
        return len(self.relationships)

    def add(self, rel_type: str, target: str, rel_id: Optional[str] = None) -> Relationship:
        """Append a relationship.

        :param rel_type: Relationship type URI.
        :param target: Package path of the target part.
        :param rel_id: Relationship ID. Defaults to ``rel<n>``, numbered by position.
        :return: The new relationship.
        """
        if rel_id is None:
            rel_id = f"rel{len(self.relationships)}"
        if any(relationship.id == rel_id for relationship in self.relationships):
            raise ValueError(f"Duplicate relationship ID: {rel_id}")
        relationship = Relationship(id=rel_id, type=rel_type, target=target)
        self.relationships.append(relationship)
        return relationship

    def find(self, rel_type: str) -> Optional[Relationship]:
        """The first relationship of the given type in document order, if any."""
        for relationship in self.relationships:
            if relationship.type == rel_type:
                return relationship
        return None

    def to_xml(self) -> xml.etree.ElementTree.Element:
        """Build the ``<Relationships>`` element.

        Attributes are namespace-qualified so the tree can be written with
        ``default_namespace=RELS_NAMESPACE``, which leaves them unprefixed.
        """
        root = xml.etree.ElementTree.Element(f"{{{RELS_NAMESPACE}}}Relationships")
        for relationship in self.relationships:
            xml.etree.ElementTree.SubElement(
                root,
                f"{{{RELS_NAMESPACE}}}Relationship",
                attrib={
                    f"{{{RELS_NAMESPACE}}}Target": relationship.target,
                    f"{{{RELS_NAMESPACE}}}Id": relationship.id,
                    f"{{{RELS_NAMESPACE}}}Type": relationship.type,
                },
            )
        return root

    @classmethod
    def from_xml(cls, root: xml.etree.ElementTree.Element) -> "Relationships":
        """Read every ``<Relationship>`` child of a ``<Relationships>`` element.

        Missing attributes are kept as ``None`` so that the caller decides
        whether the gap matters.
        """
        result = cls()
        for relationship_node in root.iterfind(RELS_RELATIONSHIP_FIND, RELS_NAMESPACES):
            result.relationships.append(
                Relationship(
                    id=relationship_node.attrib.get("Id"),
                    type=relationship_node.attrib.get("Type"),
                    target=relationship_node.attrib.get("Target"),
                )
            )
        return result


class ContentTypes:
    """
    The ``[Content_Types].xml`` manifest.

    Maps file extensions (lower case, no dot) to MIME types, plus per-part
    overrides keyed by package path.  An extension can only be declared once.
    """

    def __init__(self):
        self.defaults: Dict[str, str] = {}
        self.overrides: Dict[str, str] = {}

    def __contains__(self, extension: str) -> bool:
        return self._normalize(extension) in self.defaults

    def __len__(self) -> int:
        return len(self.defaults)

    def __iter__(self) -> Iterator[ContentType]:
        for extension, mime_type in self.defaults.items():
            yield ContentType(extension=extension, mime_type=mime_type)

    @staticmethod
    def _normalize(extension: str) -> str:
        return extension.lstrip(".").lower()

    def add_default(self, extension: str, mime_type: str) -> None:
        """Declare the MIME type of every part with *extension*.

        :raises ValueError: If the extension is already declared.
        """
        key = self._normalize(extension)
        if not key:
            raise ValueError("Content type extension must not be empty.")
        if key in self.defaults:
            raise ValueError(f"Duplicate content type extension: {key}")
        self.defaults[key] = mime_type

    def add_override(self, part_name: str, mime_type: str) -> None:
        """Declare the MIME type of one part, by package path."""
        if part_name in self.overrides:
            raise ValueError(f"Duplicate content type override: {part_name}")
        self.overrides[part_name] = mime_type

    def mime_type_of(self, path: str) -> Optional[str]:
        """The MIME type of the archive entry at *path*.

        Overrides have higher priority than extension defaults.
        """
        override = self.overrides.get(package_path(path))
        if override is not None:
            return override
        extension = posixpath.splitext(path)[1]
        return self.defaults.get(self._normalize(extension))

    @classmethod
    def package_defaults(cls) -> "ContentTypes":
        """The two declarations every 3MF package needs."""
        result = cls()
        result.add_default(RELS_EXTENSION, RELS_MIMETYPE)
        result.add_default(MODEL_EXTENSION, MODEL_MIMETYPE)
        return result

    def to_xml(self) -> xml.etree.ElementTree.Element:
        """Build the ``<Types>`` element, defaults first."""
        root = xml.etree.ElementTree.Element(f"{{{CONTENT_TYPES_NAMESPACE}}}Types")
        for extension, mime_type in self.defaults.items():
            xml.etree.ElementTree.SubElement(
                root,
                f"{{{CONTENT_TYPES_NAMESPACE}}}Default",
                attrib={
                    f"{{{CONTENT_TYPES_NAMESPACE}}}Extension": extension,
                    f"{{{CONTENT_TYPES_NAMESPACE}}}ContentType": mime_type,
                },
            )
        for part_name, mime_type in self.overrides.items():
            xml.etree.ElementTree.SubElement(
                root,
                f"{{{CONTENT_TYPES_NAMESPACE}}}Override",
                attrib={
                    f"{{{CONTENT_TYPES_NAMESPACE}}}PartName": part_name,
                    f"{{{CONTENT_TYPES_NAMESPACE}}}ContentType": mime_type,
                },
            )
        return root

    @classmethod
    def from_xml(cls, root: xml.etree.ElementTree.Element, reporter: Optional[object] = None) -> "ContentTypes":
        """Read a ``<Types>`` element.

        Nodes missing an attribute and repeated declarations are skipped with
        a warning to *reporter* (the console if ``None``); the first declaration wins.
        """
        result = cls()
        for default_node in root.iterfind(CONTENT_TYPES_DEFAULT_FIND, CONTENT_TYPES_NAMESPACES):
            if "Extension" not in default_node.attrib or "ContentType" not in default_node.attrib:
                safe_report(reporter, {"WARNING"}, f"{CONTENT_TYPES_LOCATION} malformed: Default node without extension or MIME type.")
                continue
            try:
                result.add_default(default_node.attrib["Extension"], default_node.attrib["ContentType"])
            except ValueError as e:
                safe_report(reporter, {"WARNING"}, f"{CONTENT_TYPES_LOCATION} malformed: {e}")

        for override_node in root.iterfind(CONTENT_TYPES_OVERRIDE_FIND, CONTENT_TYPES_NAMESPACES):
            if "PartName" not in override_node.attrib or "ContentType" not in override_node.attrib:
                safe_report(reporter, {"WARNING"}, f"{CONTENT_TYPES_LOCATION} malformed: Override node without path or MIME type.")
                continue
            try:
                result.add_override(override_node.attrib["PartName"], override_node.attrib["ContentType"])
            except ValueError as e:
                safe_report(reporter, {"WARNING"}, f"{CONTENT_TYPES_LOCATION} malformed: {e}")
        return result
