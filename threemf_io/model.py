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
The 3D model document of a package.

:class:`ThreeMfModel` is the default model (de)serializer used by
:class:`threemf_io.package.ThreeMfFile`.  It understands the ``<model>``
root, its ``unit`` and its ``<metadata>``; the ``<resources>`` and
``<build>`` sections and any vendor elements are carried through untouched.

Any other model class works with :class:`ThreeMfFile` as long as it has a
``to_xml()`` method and a loader callable is passed to ``load()``.
"""

import copy
import xml.etree.ElementTree
from typing import Dict, List, Optional

from .common.constants import MODEL_DEFAULT_UNIT, MODEL_NAMESPACE, MODEL_NAMESPACES
from .common.errors import ModelFormatError
from .common.logging import warn
from .common.metadata import Metadata
from .common.units import threemf_to_metre
from .common.xml import read_metadata, write_metadata

__all__ = ["ThreeMfModel"]

MODEL_TAG = f"{{{MODEL_NAMESPACE}}}model"
RESOURCES_TAG = f"{{{MODEL_NAMESPACE}}}resources"
BUILD_TAG = f"{{{MODEL_NAMESPACE}}}build"
METADATA_TAG = f"{{{MODEL_NAMESPACE}}}metadata"


def _canonical(element: xml.etree.ElementTree.Element) -> tuple:
    """Prefix- and indentation-independent form of an element, for comparisons."""
    return (
        element.tag,
        tuple(sorted(element.attrib.items())),
        (element.text or "").strip(),
        tuple(_canonical(child) for child in element),
    )


def _check_qualified(element: xml.etree.ElementTree.Element) -> None:
    """Raise :class:`ModelFormatError` for elements outside any namespace.

    The model part is written with the core namespace as default namespace,
    where an element without namespace has no spelling.
    """
    for child in element.iter():
        if isinstance(child.tag, str) and child.tag[:1] != "{":
            raise ModelFormatError(f"Element <{child.tag}> has no namespace.")


class ThreeMfModel:
    """
    A 3MF model with opaque geometry.

    :param unit: Length unit of all coordinates, one of :data:`threemf_to_metre`.
    :param metadata: Model-level metadata.
    :param resources: The ``<resources>`` element. Empty when omitted.
    :param build: The ``<build>`` element. Empty when omitted.
    :param extra_elements: Other children of ``<model>``, in order.
    :param attributes: Other attributes of ``<model>``, e.g. ``xml:lang``.
    :raises ModelFormatError: If the unit is unknown or an element has no namespace.
    """

    def __init__(
        self,
        unit: str = MODEL_DEFAULT_UNIT,
        metadata: Optional[Metadata] = None,
        resources: Optional[xml.etree.ElementTree.Element] = None,
        build: Optional[xml.etree.ElementTree.Element] = None,
        extra_elements: Optional[List[xml.etree.ElementTree.Element]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ):
        if unit not in threemf_to_metre:
            raise ModelFormatError(f"Unknown model unit: {unit}")
        self.unit = unit
        self.metadata = metadata if metadata is not None else Metadata()
        self.resources = resources if resources is not None else xml.etree.ElementTree.Element(RESOURCES_TAG)
        self.build = build if build is not None else xml.etree.ElementTree.Element(BUILD_TAG)
        self.extra_elements = list(extra_elements) if extra_elements else []
        self.attributes = dict(attributes) if attributes else {}
        for section in [self.resources, self.build, *self.extra_elements]:
            _check_qualified(section)

    def scale_to_metre(self) -> float:
        """Factor that converts this model's coordinates to metres."""
        return threemf_to_metre[self.unit]

    def to_xml(self) -> xml.etree.ElementTree.Element:
        """Build the ``<model>`` element.

        The opaque sections are copied, so writing the result does not touch
        this model. Serialize it with ``MODEL_NAMESPACE`` as default namespace,
        see :func:`threemf_io.common.xml.write_xml`.
        """
        root = xml.etree.ElementTree.Element(MODEL_TAG, attrib={"unit": self.unit})
        root.attrib.update(self.attributes)
        write_metadata(root, self.metadata)
        root.append(copy.deepcopy(self.resources))
        root.append(copy.deepcopy(self.build))
        for element in self.extra_elements:
            root.append(copy.deepcopy(element))
        return root

    @classmethod
    def from_xml(cls, root: xml.etree.ElementTree.Element) -> "ThreeMfModel":
        """Read a ``<model>`` element.

        :raises ModelFormatError: If the root is not a 3MF model, its unit is unknown
            or an element has no namespace.
        """
        if root.tag != MODEL_TAG:
            raise ModelFormatError(f"Root element is {root.tag}, expected {MODEL_TAG}.")

        unit = root.attrib.get("unit", MODEL_DEFAULT_UNIT)
        if unit not in threemf_to_metre:
            raise ModelFormatError(f"Unknown model unit: {unit}")
        attributes = {key: value for key, value in root.attrib.items() if key != "unit"}

        resources = root.find("3mf:resources", MODEL_NAMESPACES)
        if resources is None:
            warn("Model has no <resources> element.")
        build = root.find("3mf:build", MODEL_NAMESPACES)
        if build is None:
            warn("Model has no <build> element.")
        extra_elements = [
            child for child in root
            if child.tag not in {RESOURCES_TAG, BUILD_TAG, METADATA_TAG}
        ]

        return cls(
            unit=unit,
            metadata=read_metadata(root),
            resources=resources,
            build=build,
            extra_elements=extra_elements,
            attributes=attributes,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThreeMfModel):
            return NotImplemented
        return (
            self.unit == other.unit
            and self.attributes == other.attributes
            and self.metadata == other.metadata
            and _canonical(self.resources) == _canonical(other.resources)
            and _canonical(self.build) == _canonical(other.build)
            and [_canonical(e) for e in self.extra_elements] == [_canonical(e) for e in other.extra_elements]
        )

    def __repr__(self) -> str:
        return (
            f"ThreeMfModel(unit={self.unit!r}, metadata={self.metadata!r}, "
            f"resources={len(self.resources)} children, build={len(self.build)} items)"
        )
