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

# <pep8 compliant>

"""
Archive management for 3MF export.

Functions for creating and filling the 3MF ZIP archive:
- create_archive: Open an empty archive for writing
- write_structural_part: Write one XML document as a new entry
- write_content_types: Write ``[Content_Types].xml``
- write_relationships: Write ``_rels/.rels``
"""

import xml.etree.ElementTree
import zipfile
from typing import BinaryIO, Optional, Union

from ..common.annotations import ContentTypes, Relationships
from ..common.constants import (
    CONTENT_TYPES_LOCATION,
    CONTENT_TYPES_NAMESPACE,
    RELS_LOCATION,
    RELS_NAMESPACE,
)
from ..common.errors import ContainerWriteError
from ..common.logging import debug, error
from ..common.xml import write_xml

__all__ = [
    "create_archive",
    "write_structural_part",
    "write_content_types",
    "write_relationships",
]


def create_archive(target: Union[str, BinaryIO], compresslevel: int = 9) -> zipfile.ZipFile:
    """
    Creates an empty 3MF archive.

    The caller adds the structural parts and the model, and closes the
    archive (use it as a context manager).  A stream passed in stays open.

    :param target: The path or binary stream to write the archive to.
    :param compresslevel: Deflate level, 0 to 9.
    :return: A zip archive that other functions can add things to.
    :raises ContainerWriteError: If the target cannot be opened for writing.
    """
    try:
        return zipfile.ZipFile(
            target, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel
        )
    except (EnvironmentError, ValueError) as e:
        name = target if isinstance(target, str) else getattr(target, "name", "<stream>")
        error(f"Unable to write 3MF archive to {name}: {e}")
        raise ContainerWriteError(str(name), str(e)) from e


def write_structural_part(
    archive: zipfile.ZipFile,
    root: xml.etree.ElementTree.Element,
    path: str,
    default_namespace: Optional[str] = None,
) -> None:
    """
    Write an XML document as a new entry of the archive.

    :param archive: An archive opened for writing.
    :param root: Root element of the document.
    :param path: Archive path of the new entry (no leading slash).
    :param default_namespace: Namespace to write without prefix, see :func:`write_xml`.
    :raises ContainerWriteError: If the entry exists already or the archive cannot be written.
    """
    if archive.mode == "r":
        raise ContainerWriteError(path, "archive is opened read-only")
    if path in archive.namelist():
        raise ContainerWriteError(path, "entry already exists")

    try:
        with archive.open(path, "w") as f:
            write_xml(f, root, default_namespace)
    except (EnvironmentError, ValueError) as e:
        error(f"Failed to write {path}: {e}")
        raise ContainerWriteError(path, str(e)) from e
    debug(f"Wrote {path}")


def write_content_types(archive: zipfile.ZipFile, content_types: ContentTypes) -> None:
    """Write ``[Content_Types].xml`` to the archive."""
    write_structural_part(
        archive, content_types.to_xml(), CONTENT_TYPES_LOCATION, default_namespace=CONTENT_TYPES_NAMESPACE
    )


def write_relationships(
    archive: zipfile.ZipFile, relationships: Relationships, path: str = RELS_LOCATION
) -> None:
    """Write a ``.rels`` file to the archive."""
    write_structural_part(archive, relationships.to_xml(), path, default_namespace=RELS_NAMESPACE)
