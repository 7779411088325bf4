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
Exceptions raised while reading or writing a 3MF package.

Every error names the archive entry it is about, so a caller can tell which
structural part is broken without opening the archive by hand.
"""

from typing import Optional, Tuple

__all__ = [
    "ThreeMfPackageError",
    "MissingEntryError",
    "MissingModelEntryError",
    "MalformedXmlError",
    "NoModelRelationshipError",
    "MissingTargetError",
    "InvalidPackageError",
    "ContainerWriteError",
    "MultipleModelsUnsupportedError",
    "ModelFormatError",
]


class ThreeMfPackageError(Exception):
    """Base class of all package-level errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MissingEntryError(ThreeMfPackageError):
    """A required entry is not present in the archive."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid package: missing entry {path}.", path)


class MissingModelEntryError(MissingEntryError):
    """The relationships point at a model part that the archive does not contain."""

    def __init__(self, path: str):
        super().__init__(path, f"Package does not contain a model at {path}.")


class MalformedXmlError(ThreeMfPackageError):
    """An entry exists but is not well-formed XML."""

    def __init__(self, path: str, position: Optional[Tuple[int, int]] = None, detail: str = ""):
        self.position = position
        message = f"{path} has malformed XML"
        if position is not None:
            message += f" (position {position[0]}:{position[1]})"
        if detail:
            message += f": {detail}"
        super().__init__(message + ".", path)


class NoModelRelationshipError(ThreeMfPackageError):
    """The relationships file has no relationship of the 3D model type."""

    def __init__(self, path: str, relationship_type: str):
        self.relationship_type = relationship_type
        super().__init__(
            f"Package does not contain a root 3MF relation: no relationship of type "
            f"{relationship_type} in {path}.",
            path,
        )


class MissingTargetError(ThreeMfPackageError):
    """The model relationship does not say where the model is."""

    def __init__(self, path: str, relationship_id: Optional[str] = None):
        self.relationship_id = relationship_id
        super().__init__(
            f"Relationship target not specified for relationship {relationship_id or '<no Id>'} in {path}.",
            path,
        )


class InvalidPackageError(ThreeMfPackageError):
    """The container itself could not be opened. The original error is the ``__cause__``."""

    def __init__(self, reason: str, path: Optional[str] = None):
        super().__init__(f"Invalid package: {reason}", path)


class ContainerWriteError(ThreeMfPackageError):
    """An entry could not be created in the archive."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Unable to write {path} to the archive: {reason}", path)


class MultipleModelsUnsupportedError(ThreeMfPackageError):
    """A package with more than one model was saved with the single-model policy."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Only one model per package is supported, but the package holds {count}.")


class ModelFormatError(ThreeMfPackageError):
    """The model document could not be turned into a model."""
