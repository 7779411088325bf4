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
3MF Import Package.

Modules:
    - ``archive``: ZIP archive opening, structural part reading, model path resolution
"""

from .archive import (
    open_archive,
    read_structural_part,
    read_relationships,
    read_content_types,
    resolve_model_path,
)

__all__ = [
    "open_archive",
    "read_structural_part",
    "read_relationships",
    "read_content_types",
    "resolve_model_path",
]
