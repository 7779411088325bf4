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
XML utility functions shared across import and export.

Parsing turns ``ParseError`` into :class:`MalformedXmlError` with the entry
name attached, and writing always produces the same UTF-8, two-space
indented output so that saved packages diff cleanly.
"""

import xml.etree.ElementTree
from typing import IO, Optional

from .logging import warn
from .constants import MODEL_NAMESPACE, MODEL_NAMESPACES, XML_INDENT
from .errors import MalformedXmlError
from .metadata import Metadata, MetadataEntry

__all__ = [
    "parse_xml",
    "write_xml",
    "read_metadata",
    "write_metadata",
]


def parse_xml(stream: IO[bytes], path: str) -> xml.etree.ElementTree.Element:
    """Parse an archive entry into its root element.

    :param stream: Open binary stream of the entry.
    :param path: Archive path of the entry, for error messages.
    :return: The root element of the document.
    :raises MalformedXmlError: If the entry is not well-formed XML.
    """
    try:
        document = xml.etree.ElementTree.parse(stream)
    except xml.etree.ElementTree.ParseError as e:
        raise MalformedXmlError(path, position=e.position, detail=str(e)) from e
    return document.getroot()


def _qualify_attributes(root: xml.etree.ElementTree.Element, namespace: str) -> None:
    # Attribute order is kept.
    for element in root.iter():
        if all(key[:1] == "{" for key in element.attrib):
            continue
        items = list(element.attrib.items())
        element.attrib.clear()
        for key, value in items:
            element.set(key if key[:1] == "{" else f"{{{namespace}}}{key}", value)


def write_xml(
    stream: IO[bytes],
    root: xml.etree.ElementTree.Element,
    default_namespace: Optional[str] = None,
) -> None:
    """Serialize *root* as an indented UTF-8 document with an XML declaration.

    :param stream: Writable binary stream.
    :param root: The document's root element. Its whitespace is re-indented in place.
    :param default_namespace: Namespace to write without a prefix. When given,
        every tag in the tree must be namespace-qualified; ElementTree raises
        ``ValueError`` otherwise. Unqualified attributes are moved into this
        namespace in place, which serializes them unchanged.
    """
    if default_namespace:
        _qualify_attributes(root, default_namespace)
    document = xml.etree.ElementTree.ElementTree(root)
    xml.etree.ElementTree.indent(document, space=XML_INDENT)
    document.write(
        stream,
        xml_declaration=True,
        encoding="UTF-8",
        default_namespace=default_namespace,
    )


def read_metadata(
    node: xml.etree.ElementTree.Element,
    original_metadata: Optional[Metadata] = None,
) -> Metadata:
    """Read ``<metadata>`` tags from an XML node.

    :param node: A node containing ``<metadata>`` children (root or metadatagroup).
    :param original_metadata: Existing metadata to merge with (optional).
    :return: A :class:`Metadata` object.
    """
    if original_metadata is not None:
        metadata = original_metadata
    else:
        metadata = Metadata()

    for metadata_node in node.iterfind("./3mf:metadata", MODEL_NAMESPACES):
        if "name" not in metadata_node.attrib:
            warn("Metadata entry without name is discarded.")
            continue
        name = metadata_node.attrib["name"]
        preserve_str = metadata_node.attrib.get("preserve", "0")
        preserve = preserve_str != "0" and preserve_str.lower() != "false"
        datatype = metadata_node.attrib.get("type", "")
        value = metadata_node.text

        metadata[name] = MetadataEntry(
            name=name, preserve=preserve, datatype=datatype, value=value
        )

    return metadata


def write_metadata(node: xml.etree.ElementTree.Element, metadata: Metadata) -> None:
    """
    Writes metadata from a metadata storage into an XML node.
    :param node: The node to add <metadata> tags to.
    :param metadata: The collection of metadata to write to that node.
    """
    for metadata_entry in metadata.values():
        metadata_node = xml.etree.ElementTree.SubElement(
            node, f"{{{MODEL_NAMESPACE}}}metadata"
        )
        metadata_node.attrib["name"] = str(metadata_entry.name)
        if metadata_entry.preserve:
            metadata_node.attrib["preserve"] = "1"
        if metadata_entry.datatype:
            metadata_node.attrib["type"] = str(metadata_entry.datatype)
        metadata_node.text = str(metadata_entry.value) if metadata_entry.value is not None else ""
