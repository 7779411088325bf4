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
Metadata storage for 3MF models.

Tracks metadata entries with conflict resolution: if the same key is stored
twice with different values, that entry is marked conflicting and excluded
from output.
"""

import collections
from typing import Iterator

MetadataEntry = collections.namedtuple(
    "MetadataEntry", ["name", "preserve", "datatype", "value"]
)

__all__ = [
    "Metadata",
    "MetadataEntry",
]


class Metadata:
    """
    Tracks the ``<metadata>`` entries of a 3MF model.

    Behaves like a dictionary keyed by metadata name.  Storing the same key
    with a different value marks that entry as conflicting (``None``), so a
    document that contradicts itself does not silently keep either value.
    """

    def __init__(self):
        self.metadata = {}

    def __setitem__(self, key: str, value: MetadataEntry) -> None:
        if key not in self.metadata:
            self.metadata[key] = value
            return

        if self.metadata[key] is None:
            return

        competing = self.metadata[key]
        if value.value != competing.value or value.datatype != competing.datatype:
            self.metadata[key] = None
            return

        if not competing.preserve and value.preserve:
            self.metadata[key] = MetadataEntry(
                name=key,
                preserve=True,
                datatype=competing.datatype,
                value=competing.value,
            )

    def __getitem__(self, key: str) -> MetadataEntry:
        if key not in self.metadata or self.metadata[key] is None:
            raise KeyError(key)
        return self.metadata[key]

    def __contains__(self, item: str) -> bool:
        return item in self.metadata and self.metadata[item] is not None

    def __bool__(self) -> bool:
        return any(self.values())

    def __len__(self) -> int:
        return sum(1 for _ in self.values())

    def __delitem__(self, key: str) -> None:
        if key in self.metadata:
            del self.metadata[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    def __repr__(self) -> str:
        return f"Metadata({dict(self.items())!r})"

    def values(self) -> Iterator[MetadataEntry]:
        """Yield all non-conflicting metadata entries."""
        yield from filter(lambda entry: entry is not None, self.metadata.values())

    def items(self) -> Iterator:
        """Yield ``(name, entry)`` for all non-conflicting entries."""
        for key, entry in self.metadata.items():
            if entry is not None:
                yield key, entry
