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
Archive reading utilities for 3MF import.

Handles opening ZIP archives, reading the structural XML parts
(``_rels/.rels`` and ``[Content_Types].xml``) and following the package
relationships to the model part.
"""

import xml.etree.ElementTree
import zipfile
import zlib
from typing import BinaryIO, Optional, Union

from ..common import debug, error, safe_report, CONTENT_TYPES_LOCATION, RELS_LOCATION, MODEL_REL
from ..common.annotations import ContentTypes, Relationships, archive_path
from ..common.errors import (
    InvalidPackageError,
    MalformedXmlError,
    MissingEntryError,
    MissingTargetError,
    NoModelRelationshipError,
)
from ..common.xml import parse_xml

__all__ = [
    "open_archive",
    "read_structural_part",
    "read_relationships",
    "read_content_types",
    "resolve_model_path",
]


# ---------------------------------------------------------------------------
# open_archive
# ---------------------------------------------------------------------------

def open_archive(source: Union[str, BinaryIO]) -> zipfile.ZipFile:
    """Open a 3MF archive for reading.

    Use the result as a context manager so the archive is closed on every
    exit path.  A stream passed in is not closed along with the archive.

    :param source: Filesystem path or seekable binary stream.
    :return: A ``ZipFile`` opened read-only.
    :raises InvalidPackageError: If the data is not a readable ZIP archive.
    """
    name = source if isinstance(source, str) else getattr(source, "name", None)
    try:
        return zipfile.ZipFile(source, "r")
    except (zipfile.BadZipFile, EnvironmentError) as e:
        error(f"Unable to read archive: {e}")
        raise InvalidPackageError(f"unable to read archive: {e}", path=name) from e


# ---------------------------------------------------------------------------
# read_structural_part
# ---------------------------------------------------------------------------

def read_structural_part(archive: zipfile.ZipFile, path: str) -> xml.etree.ElementTree.Element:
    """Parse the archive entry at *path* as XML.

    :param archive: An open ``ZipFile``.
    :param path: Archive path of the entry (no leading slash).
    :return: The root element.
    :raises MissingEntryError: If there is no such entry.
    :raises MalformedXmlError: If the entry is not well-formed XML.
    :raises InvalidPackageError: If the entry's data is corrupt, encrypted or uses an
        unsupported compression method.
    """
    try:
        archive.getinfo(path)
    except KeyError as e:
        raise MissingEntryError(path) from e

    try:
        with archive.open(path) as f:
            return parse_xml(f, path)
    except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError) as e:
        error(f"Unable to read {path} from archive: {e}")
        raise InvalidPackageError(f"entry {path} is unreadable: {e}", path=path) from e


# ---------------------------------------------------------------------------
# read_relationships / read_content_types
# ---------------------------------------------------------------------------

def read_relationships(archive: zipfile.ZipFile, path: str = RELS_LOCATION) -> Relationships:
    """Read a ``.rels`` part into a :class:`Relationships` manifest."""
    return Relationships.from_xml(read_structural_part(archive, path))


def read_content_types(archive: zipfile.ZipFile, reporter: Optional[object] = None) -> ContentTypes:
    """Read ``[Content_Types].xml`` from a 3MF archive.

    A missing, malformed or unreadable manifest is not fatal for loading; it
    is reported and an empty manifest is returned.

    :param archive: An open ``ZipFile``.
    :param reporter: Receives warnings through ``report()``; ``None`` prints them.
    :return: The declared content types.
    """
    try:
        root = read_structural_part(archive, CONTENT_TYPES_LOCATION)
    except MissingEntryError:
        safe_report(reporter, {"WARNING"}, f"{CONTENT_TYPES_LOCATION} file missing!")
        return ContentTypes()
    except (MalformedXmlError, InvalidPackageError) as e:
        safe_report(reporter, {"WARNING"}, str(e))
        return ContentTypes()
    return ContentTypes.from_xml(root, reporter)


# ---------------------------------------------------------------------------
# resolve_model_path
# ---------------------------------------------------------------------------

def resolve_model_path(archive: zipfile.ZipFile) -> str:
    """Follow the package relationships to the archive path of the 3D model.

    The first relationship of the 3D model type in document order is used,
    even if later ones exist.

    :param archive: An open ``ZipFile``.
    :return: Archive path of the model part, without leading slash.
    :raises MissingEntryError: If ``_rels/.rels`` is missing.
    :raises MalformedXmlError: If ``_rels/.rels`` is not well-formed.
    :raises NoModelRelationshipError: If no relationship has the model type.
    :raises MissingTargetError: If that relationship has no target.
    """
    relationships = read_relationships(archive, RELS_LOCATION)
    model_relationship = relationships.find(MODEL_REL)
    if model_relationship is None:
        raise NoModelRelationshipError(RELS_LOCATION, MODEL_REL)

    if not model_relationship.target:
        raise MissingTargetError(RELS_LOCATION, model_relationship.id)

    path = archive_path(model_relationship.target)
    debug(f"Model relationship {model_relationship.id} points to {path}")
    return path
