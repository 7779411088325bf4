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
Load and save 3MF packages.
"""

from .common.errors import (
    ThreeMfPackageError,
    MissingEntryError,
    MissingModelEntryError,
    MalformedXmlError,
    NoModelRelationshipError,
    MissingTargetError,
    InvalidPackageError,
    ContainerWriteError,
    MultipleModelsUnsupportedError,
    ModelFormatError,
)
from .model import ThreeMfModel
from .package import ThreeMfFile, SaveOptions, SINGLE_MODEL, FIRST_MODEL

# IDE and Documentation support.
__all__ = [
    "ThreeMfFile",
    "ThreeMfModel",
    "SaveOptions",
    "SINGLE_MODEL",
    "FIRST_MODEL",
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

__version__ = "1.0.0"
